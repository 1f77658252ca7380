"""Whisper STT implementation using the hosted OpenAI API.

Uploads the whole recording as one multipart request. There is no retry:
any failure is raised as ``TranscriptionFailedError`` and the caller decides
whether the user tries again.
"""

import logging

import httpx

from lessonscribe.core.config import get_settings
from lessonscribe.core.exceptions import CredentialMissingError, TranscriptionFailedError
from lessonscribe.core.models import RecordedAudio, TranscriptResult
from lessonscribe.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class OpenAIWhisperSTT(BaseSTT):
    """Speech-to-text provider backed by ``POST /audio/transcriptions``.

    Args:
        base_url: API root (defaults to settings.openai_base_url).
        model: Model identifier sent in the ``model`` form field.
        language: Default language hint sent in the ``language`` form field.
        timeout: Transport timeout in seconds.
        transport: Optional httpx transport (used by tests).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._base_url = (base_url or self._settings.openai_base_url).rstrip("/")
        self._model = model or self._settings.whisper_model
        self._language = language or self._settings.whisper_language
        self._timeout = timeout if timeout is not None else self._settings.transcription_timeout
        self._transport = transport

    async def transcribe(
        self,
        audio: RecordedAudio,
        *,
        secret: str | None,
        language: str | None = None,
    ) -> TranscriptResult:
        """Upload ``audio`` and return the transcript text.

        Raises:
            CredentialMissingError: ``secret`` is empty.
            TranscriptionFailedError: Non-2xx status, transport error or a
                response without a ``text`` field.
        """
        if not secret:
            raise CredentialMissingError()

        lang = language or self._language
        files = {"file": (audio.filename, audio.data, audio.mime_type)}
        data = {"model": self._model, "language": lang}

        logger.info(
            "Transcribing %s with %s (language=%s, size=%.1f KB)",
            audio.filename,
            self._model,
            lang,
            len(audio.data) / 1024,
        )

        # A fresh client per call: Streamlit runs each pipeline in its own event loop
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    "/audio/transcriptions",
                    headers={"Authorization": f"Bearer {secret}"},
                    files=files,
                    data=data,
                )
            except httpx.HTTPError as exc:
                logger.warning("Whisper API request failed: %s", exc)
                raise TranscriptionFailedError(reason=str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            logger.warning(
                "Whisper API returned %s %s", response.status_code, response.reason_phrase
            )
            raise TranscriptionFailedError(
                reason=response.reason_phrase or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise TranscriptionFailedError(reason="Response was not valid JSON") from exc

        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise TranscriptionFailedError(reason="Response did not contain a transcript")

        logger.info("Transcription complete (%d chars)", len(text))
        return TranscriptResult(text=text, language=lang)
