"""
Abstract base class for Speech-to-Text providers.

STT implementations must implement this interface so the session controller
stays provider-agnostic.
"""

from abc import ABC, abstractmethod

from lessonscribe.core.models import RecordedAudio, TranscriptResult


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(
        self,
        audio: RecordedAudio,
        *,
        secret: str | None,
        language: str | None = None,
    ) -> TranscriptResult:
        """Transcribe a finished recording to text.

        Args:
            audio: The encoded recording to upload.
            secret: Provider API key for this session.
            language: ISO 639-1 hint, or None for the provider default.

        Returns:
            The transcript text.

        Raises:
            CredentialMissingError: ``secret`` is empty.
            TranscriptionFailedError: The provider call failed.
        """
