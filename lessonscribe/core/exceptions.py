"""
LessonScribe exception hierarchy.

All application-specific exceptions inherit from LessonScribeError so the UI
can catch one base class and show ``detail`` to the user.
"""

from datetime import UTC, datetime


class LessonScribeError(Exception):
    """Base exception for all LessonScribe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "LESSONSCRIBE_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class CredentialMissingError(LessonScribeError):
    """Raised when an action needs the OpenAI key and none has been entered."""

    def __init__(self) -> None:
        super().__init__(
            detail="An OpenAI API key is required before recording",
            code="CREDENTIAL_MISSING",
        )


class PermissionDeniedError(LessonScribeError):
    """Raised when the platform refuses access to the microphone."""

    def __init__(self, detail: str = "Microphone access was denied") -> None:
        super().__init__(detail=detail, code="PERMISSION_DENIED")


class DeviceUnavailableError(LessonScribeError):
    """Raised when no usable audio input device can be opened."""

    def __init__(self, detail: str = "No audio input device is available") -> None:
        super().__init__(detail=detail, code="DEVICE_UNAVAILABLE")


class RecordingAlreadyActiveError(LessonScribeError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
        )


class RecordingNotActiveError(LessonScribeError):
    """Raised when stopping while nothing is being recorded."""

    def __init__(self) -> None:
        super().__init__(
            detail="No recording is active",
            code="RECORDING_NOT_ACTIVE",
        )


class TranscriptionFailedError(LessonScribeError):
    """Raised when the speech-to-text call fails. Aborts the pipeline."""

    def __init__(self, reason: str = "Transcription failed", status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(
            detail=f"Whisper API error: {reason}",
            code="TRANSCRIPTION_FAILED",
        )


class CleanupDegradedError(LessonScribeError):
    """Raised by the cleanup step in strict mode instead of a placeholder result."""

    def __init__(self, reason: str = "Cleanup failed") -> None:
        self.reason = reason
        super().__init__(detail=reason, code="CLEANUP_DEGRADED")


class InvalidTransitionError(LessonScribeError):
    """Raised when an event is not allowed in the current session status."""

    def __init__(self, status: str, event: str) -> None:
        self.status = status
        self.event = event
        super().__init__(
            detail=f"Cannot handle '{event}' while {status}",
            code="INVALID_TRANSITION",
        )


class ExportError(LessonScribeError):
    """Raised when the result document cannot be built or written."""

    def __init__(self, detail: str = "Export failed") -> None:
        super().__init__(detail=detail, code="EXPORT_ERROR")
