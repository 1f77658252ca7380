"""
Session and pipeline models.

Pydantic models for the typed results passed between pipeline stages and a
plain dataclass for the mutable state owned by ``SessionController``.
"""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Session status / events
# ---------------------------------------------------------------------------


class SessionStatus(StrEnum):
    """Possible states for a recording session."""

    idle = "idle"
    recording = "recording"
    stopped = "stopped"
    transcribing = "transcribing"
    cleaning = "cleaning"
    done = "done"


class SessionEvent(StrEnum):
    """Discrete events fed to the session state machine."""

    start_recording = "start_recording"
    stop_recording = "stop_recording"
    run_pipeline = "run_pipeline"
    transcription_succeeded = "transcription_succeeded"
    transcription_failed = "transcription_failed"
    cleanup_finished = "cleanup_finished"
    cleanup_failed = "cleanup_failed"
    reset = "reset"


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------


class RecordedAudio(BaseModel):
    """A finished recording, encoded in a container ready for upload."""

    data: bytes
    container: str = "wav"
    mime_type: str = "audio/wav"
    sample_rate: int = 16000
    channels: int = 1
    duration_seconds: int = 0

    @property
    def filename(self) -> str:
        """Upload file name, e.g. ``recording.wav``."""
        return f"recording.{self.container}"


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------


class TranscriptResult(BaseModel):
    """Plain text returned by the speech-to-text provider."""

    text: str
    language: str = "unknown"


class CleanedResult(BaseModel):
    """Cleaned lesson text. ``degraded`` marks a soft-failure placeholder."""

    text: str
    degraded: bool = False
    reason: str | None = None


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


@dataclass
class SessionState:
    """Everything one recording session knows. Discarded on reset."""

    status: SessionStatus = SessionStatus.idle
    audio: RecordedAudio | None = None
    duration_seconds: int = 0
    transcript: TranscriptResult | None = None
    cleaned: CleanedResult | None = None
    last_error: str | None = None
