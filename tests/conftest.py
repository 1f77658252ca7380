"""Shared pytest fixtures for the LessonScribe test suite.

Provides an in-memory audio capture backend, a controllable clock, sample
audio, and mock STT / cleanup providers.
"""

from unittest.mock import AsyncMock

import numpy as np
import pytest

from lessonscribe.core.exceptions import PermissionDeniedError
from lessonscribe.core.models import CleanedResult, RecordedAudio, TranscriptResult
from lessonscribe.services.audio.recorder import AudioCapture, Recorder
from lessonscribe.services.credentials import CredentialHolder

# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_chunk():
    """One second of a 440 Hz tone as an int16 ``(frames, 1)`` chunk, as sounddevice delivers it."""
    t = np.arange(16000) / 16000
    tone = 16000 * np.sin(2 * np.pi * 440.0 * t)  # ~50% of max int16
    return tone.astype(np.int16).reshape(-1, 1)


@pytest.fixture
def recorded_audio():
    """A tiny stand-in recording; only the upload metadata matters."""
    return RecordedAudio(data=b"RIFF....WAVEfmt ", duration_seconds=5)


# ---------------------------------------------------------------------------
# Capture / clock
# ---------------------------------------------------------------------------


class FakeCapture(AudioCapture):
    """In-memory capture backend that records how it was used."""

    def __init__(self, chunks=None, open_error: Exception | None = None) -> None:
        self.chunks = list(chunks or [])
        self.open_error = open_error
        self.open_calls = 0
        self.close_calls = 0
        self.is_open = False

    def open(self, on_chunk) -> None:
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True
        for chunk in self.chunks:
            on_chunk(chunk)

    def close(self) -> None:
        self.close_calls += 1
        self.is_open = False


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_capture():
    """Factory for ``FakeCapture`` instances with custom chunks or errors."""
    return FakeCapture


@pytest.fixture
def fake_capture(sample_chunk):
    """Capture that delivers one second of tone on open."""
    return FakeCapture(chunks=[sample_chunk])


@pytest.fixture
def denied_capture():
    """Capture whose platform refuses microphone access."""
    return FakeCapture(open_error=PermissionDeniedError())


@pytest.fixture
def credentials():
    """Credential holder with a key already entered."""
    return CredentialHolder("sk-test-key")


@pytest.fixture
def recorder(credentials, fake_capture, clock):
    return Recorder(credentials, capture=fake_capture, clock=clock)


# ---------------------------------------------------------------------------
# STT / cleanup fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider returning a short Swedish transcript."""
    from lessonscribe.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = TranscriptResult(text="Hej klassen", language="sv")
    return stt


@pytest.fixture
def mock_cleaner():
    """Create a mock cleaner returning structured lesson notes."""
    from lessonscribe.services.cleanup.base import BaseCleaner

    cleaner = AsyncMock(spec=BaseCleaner)
    cleaner.clean.return_value = CleanedResult(text="# Lektion\nHej klassen")
    return cleaner
