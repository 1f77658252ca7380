"""Session controller: record, transcribe, clean, download.

``SessionController`` owns the single ``SessionState`` of a user session and
sequences the components through the transition table in
``lessonscribe.services.state_machine``. Transcription and cleanup run as one
two-stage pipeline triggered by ``run_pipeline()``; the second stage never
starts before the first has produced non-empty text.

Usage::

    from lessonscribe.services.orchestrator import create_controller

    controller = create_controller()
    controller.credentials.set("sk-...")
    controller.start_recording()
    controller.stop_recording()
    await controller.run_pipeline()
    path = controller.download()
"""

import logging
from collections.abc import Callable
from pathlib import Path

from lessonscribe.core.config import Settings, get_settings
from lessonscribe.core.exceptions import (
    CredentialMissingError,
    ExportError,
    InvalidTransitionError,
    LessonScribeError,
    TranscriptionFailedError,
)
from lessonscribe.core.models import (
    CleanedResult,
    RecordedAudio,
    SessionEvent,
    SessionState,
    SessionStatus,
)
from lessonscribe.services.audio.recorder import AudioCapture, MicrophoneCapture, Recorder
from lessonscribe.services.cleanup import BaseCleaner, LessonCleaner
from lessonscribe.services.credentials import CredentialHolder
from lessonscribe.services.llm import create_llm
from lessonscribe.services.state_machine import can_handle, next_status
from lessonscribe.services.storage.export import build_document, export_filename, write_document
from lessonscribe.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)

StateCallback = Callable[[SessionStatus, SessionStatus], None]


def _error_detail(exc: Exception) -> str:
    return exc.detail if isinstance(exc, LessonScribeError) else str(exc)


class SessionController:
    """Drives one recording session from idle to a downloadable result.

    Args:
        recorder: Microphone recorder sharing ``credentials``.
        stt: Speech-to-text provider.
        cleaner: Transcript cleanup service.
        credentials: Session credential holder.
        settings: Optional Settings instance (defaults to get_settings()).
        on_state_change: Optional callback(old_status, new_status).
    """

    def __init__(
        self,
        recorder: Recorder,
        stt: BaseSTT,
        cleaner: BaseCleaner,
        credentials: CredentialHolder,
        settings: Settings | None = None,
        on_state_change: StateCallback | None = None,
    ) -> None:
        self._recorder = recorder
        self._stt = stt
        self._cleaner = cleaner
        self._credentials = credentials
        self._settings = settings or get_settings()
        self._on_state_change = on_state_change
        self._state = SessionState()
        # Bumped on reset so results of calls started earlier are discarded
        self._generation = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        """The current session state."""
        return self._state

    @property
    def status(self) -> SessionStatus:
        """Current status."""
        return self._state.status

    @property
    def credentials(self) -> CredentialHolder:
        """Credential holder shared with the recorder."""
        return self._credentials

    @property
    def elapsed_seconds(self) -> int:
        """Live counter while recording, frozen duration afterwards."""
        if self._state.status == SessionStatus.recording:
            return self._recorder.elapsed_seconds
        return self._state.duration_seconds

    @property
    def on_state_change(self) -> StateCallback | None:
        """Callback invoked with (old_status, new_status) on every transition."""
        return self._on_state_change

    @on_state_change.setter
    def on_state_change(self, callback: StateCallback | None) -> None:
        self._on_state_change = callback

    @property
    def export_filename(self) -> str:
        """File name ``download()`` will use today."""
        return export_filename(prefix=self._settings.export_filename_prefix)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _require(self, event: SessionEvent) -> None:
        if not can_handle(self._state.status, event):
            raise InvalidTransitionError(self._state.status.value, event.value)

    def _dispatch(self, event: SessionEvent) -> None:
        old = self._state.status
        new = next_status(old, event)
        self._state.status = new
        logger.info("State: %s -> %s (%s)", old.value, new.value, event.value)

        if self._on_state_change:
            try:
                self._on_state_change(old, new)
            except Exception:
                logger.exception("Error in state change callback")

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info("Session was reset during an in-flight call; discarding result")
            return False
        return True

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def start_recording(self) -> None:
        """Begin recording.

        Raises:
            InvalidTransitionError: Not idle.
            CredentialMissingError: No API key entered; the device is untouched.
            PermissionDeniedError: Microphone access refused.
            DeviceUnavailableError: No usable input device.
        """
        self._require(SessionEvent.start_recording)
        try:
            self._recorder.start()
        except LessonScribeError as exc:
            self._state.last_error = exc.detail
            raise
        self._state.last_error = None
        self._dispatch(SessionEvent.start_recording)

    def stop_recording(self) -> RecordedAudio:
        """Stop recording and keep the audio for the pipeline.

        If the recorder cannot produce a clip the session returns to idle.

        Raises:
            InvalidTransitionError: Not recording.
            DeviceUnavailableError: No audio was captured or it could not be encoded.
        """
        self._require(SessionEvent.stop_recording)
        try:
            audio = self._recorder.stop()
        except Exception as exc:
            self.reset()
            self._state.last_error = _error_detail(exc)
            raise
        self._state.audio = audio
        self._state.duration_seconds = audio.duration_seconds
        self._dispatch(SessionEvent.stop_recording)
        return audio

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def run_pipeline(self, language: str | None = None) -> CleanedResult | None:
        """Transcribe the stored recording, then clean the transcript.

        Args:
            language: Optional language hint overriding the configured one.

        Returns:
            The cleaned result, or None if the session was reset meanwhile.

        Raises:
            InvalidTransitionError: Not stopped (e.g. a pipeline is in flight).
            CredentialMissingError: No API key entered.
            TranscriptionFailedError: Speech-to-text failed or returned no
                text. The session is back in ``stopped`` with audio intact.
            CleanupDegradedError: Only with strict cleanup.
        """
        self._require(SessionEvent.run_pipeline)
        audio = self._state.audio
        if audio is None:
            raise InvalidTransitionError(self._state.status.value, SessionEvent.run_pipeline.value)
        if not self._credentials.is_set:
            raise CredentialMissingError()

        generation = self._generation
        self._state.transcript = None
        self._state.cleaned = None
        self._state.last_error = None
        self._dispatch(SessionEvent.run_pipeline)

        # Stage 1: transcription (hard failure)
        try:
            transcript = await self._stt.transcribe(
                audio,
                secret=self._credentials.secret,
                language=language,
            )
            if not transcript.text.strip():
                raise TranscriptionFailedError(reason="The recording produced no text")
        except Exception as exc:
            if self._is_current(generation):
                self._state.last_error = _error_detail(exc)
                self._dispatch(SessionEvent.transcription_failed)
            raise

        if not self._is_current(generation):
            return None
        self._state.transcript = transcript
        self._dispatch(SessionEvent.transcription_succeeded)

        # Stage 2: cleanup (soft failure unless strict)
        try:
            cleaned = await self._cleaner.clean(transcript.text)
        except Exception as exc:
            if self._is_current(generation):
                self._state.last_error = _error_detail(exc)
                self._dispatch(SessionEvent.cleanup_failed)
            raise

        if not self._is_current(generation):
            return None
        self._state.cleaned = cleaned
        if cleaned.degraded:
            self._state.last_error = cleaned.reason
        self._dispatch(SessionEvent.cleanup_finished)
        return cleaned

    # ------------------------------------------------------------------
    # Result / reset
    # ------------------------------------------------------------------

    def build_document(self) -> str:
        """Render the download document.

        Raises:
            ExportError: The pipeline has not finished.
        """
        if self._state.status != SessionStatus.done:
            raise ExportError(detail="Nothing to download until the pipeline has finished")
        transcript = self._state.transcript.text if self._state.transcript else ""
        cleaned = self._state.cleaned.text if self._state.cleaned else ""
        return build_document(transcript, cleaned)

    def download(self, output_dir: str | Path | None = None) -> Path:
        """Write the document to ``output_dir`` (defaults to settings.exports_dir).

        Returns:
            The absolute path of the written file.

        Raises:
            ExportError: Not done, or the file could not be written.
        """
        content = self.build_document()
        return write_document(
            content,
            output_dir or self._settings.exports_dir,
            filename=self.export_filename,
        )

    def reset(self) -> None:
        """Return to idle from any state, discarding audio and results.

        The credential is kept. Calls still in flight finish, but their
        results are dropped.
        """
        self._recorder.reset()
        self._generation += 1
        old = self._state.status
        self._state = SessionState(status=old)
        self._dispatch(SessionEvent.reset)


def create_controller(
    settings: Settings | None = None,
    capture: AudioCapture | None = None,
    on_state_change: StateCallback | None = None,
) -> SessionController:
    """Wire a controller with the default microphone, Whisper and Claude.

    Args:
        settings: Optional Settings instance (defaults to get_settings()).
        capture: Optional capture backend replacing the local microphone.
        on_state_change: Optional callback(old_status, new_status).
    """
    settings = settings or get_settings()
    credentials = CredentialHolder()
    recorder = Recorder(
        credentials,
        capture=capture
        or MicrophoneCapture(
            sample_rate=settings.sample_rate,
            channels=settings.channels,
            device=settings.input_device,
        ),
        sample_rate=settings.sample_rate,
        channels=settings.channels,
    )
    stt = create_stt("openai", settings=settings)
    llm = create_llm(
        "claude",
        api_key=settings.claude_api_key,
        model=settings.claude_model,
        max_tokens=settings.cleanup_max_tokens,
    )
    cleaner = LessonCleaner(
        llm,
        max_tokens=settings.cleanup_max_tokens,
        language=settings.cleanup_output_language,
        strict=settings.cleanup_strict,
    )
    return SessionController(
        recorder=recorder,
        stt=stt,
        cleaner=cleaner,
        credentials=credentials,
        settings=settings,
        on_state_change=on_state_change,
    )
