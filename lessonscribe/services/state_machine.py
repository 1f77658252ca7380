"""State machine for a recording session.

Valid transitions:
- IDLE -> RECORDING (start_recording)
- RECORDING -> STOPPED (stop_recording)
- STOPPED -> TRANSCRIBING (run_pipeline)
- TRANSCRIBING -> CLEANING (transcription_succeeded)
- TRANSCRIBING -> STOPPED (transcription_failed)
- CLEANING -> DONE (cleanup_finished)
- CLEANING -> STOPPED (cleanup_failed, strict cleanup only)
- any -> IDLE (reset)

``next_status`` is a pure function of (status, event); side effects live in
``SessionController``.
"""

from lessonscribe.core.exceptions import InvalidTransitionError
from lessonscribe.core.models import SessionEvent, SessionStatus

VALID_TRANSITIONS: dict[tuple[SessionStatus, SessionEvent], SessionStatus] = {
    (SessionStatus.idle, SessionEvent.start_recording): SessionStatus.recording,
    (SessionStatus.recording, SessionEvent.stop_recording): SessionStatus.stopped,
    (SessionStatus.stopped, SessionEvent.run_pipeline): SessionStatus.transcribing,
    (SessionStatus.transcribing, SessionEvent.transcription_succeeded): SessionStatus.cleaning,
    (SessionStatus.transcribing, SessionEvent.transcription_failed): SessionStatus.stopped,
    (SessionStatus.cleaning, SessionEvent.cleanup_finished): SessionStatus.done,
    (SessionStatus.cleaning, SessionEvent.cleanup_failed): SessionStatus.stopped,
}


def can_handle(status: SessionStatus, event: SessionEvent) -> bool:
    """Check if ``event`` is allowed in ``status``."""
    return event == SessionEvent.reset or (status, event) in VALID_TRANSITIONS


def next_status(status: SessionStatus, event: SessionEvent) -> SessionStatus:
    """Return the status that follows ``event`` in ``status``.

    Raises:
        InvalidTransitionError: If the pair is not in the transition table.
    """
    if event == SessionEvent.reset:
        return SessionStatus.idle
    try:
        return VALID_TRANSITIONS[(status, event)]
    except KeyError:
        raise InvalidTransitionError(status.value, event.value) from None
