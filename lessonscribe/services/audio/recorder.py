"""Microphone recording.

``Recorder`` owns the start/stop lifecycle of one recording: it checks the
session credential, opens an ``AudioCapture`` backend, collects the chunks
the backend delivers and encodes them into a ``RecordedAudio`` on stop.

Capture callbacks run on the audio driver's thread, so chunks are handed
over through a ``queue.Queue`` and only read back on the caller's thread.
"""

import logging
import queue
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

import numpy as np

from lessonscribe.core.exceptions import (
    CredentialMissingError,
    DeviceUnavailableError,
    PermissionDeniedError,
    RecordingAlreadyActiveError,
    RecordingNotActiveError,
)
from lessonscribe.core.models import RecordedAudio
from lessonscribe.services.audio.processor import AudioProcessor
from lessonscribe.services.credentials import CredentialHolder

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[np.ndarray], None]

_PERMISSION_MARKERS = ("permission", "not permitted", "access denied", "not authorized")


class AudioCapture(ABC):
    """Interface for an audio input backend."""

    @abstractmethod
    def open(self, on_chunk: ChunkCallback) -> None:
        """Acquire the input device and start delivering int16 chunks.

        Raises:
            PermissionDeniedError: The platform refused microphone access.
            DeviceUnavailableError: No usable input device.
        """

    @abstractmethod
    def close(self) -> None:
        """Stop delivery and release the device. Safe to call twice."""


def _load_sounddevice():
    """Import sounddevice lazily; it needs the PortAudio shared library."""
    try:
        import sounddevice
    except OSError as exc:
        raise DeviceUnavailableError(f"PortAudio library not found: {exc}") from exc
    return sounddevice


class MicrophoneCapture(AudioCapture):
    """Captures 16-bit PCM from a local input device via sounddevice.

    Args:
        sample_rate: Capture rate in Hz.
        channels: Number of input channels.
        device: sounddevice device index, or None for the system default.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        device: int | None = None,
    ) -> None:
        self._sample_rate = sample_rate
        self._channels = channels
        self._device = device
        self._stream = None
        self._on_chunk: ChunkCallback | None = None

    def _callback(self, indata, frames, time_info, status) -> None:  # noqa: ANN001
        if status:
            logger.warning("Input stream status: %s", status)
        if self._on_chunk is not None:
            # indata is reused by PortAudio after the callback returns
            self._on_chunk(indata.copy())

    def open(self, on_chunk: ChunkCallback) -> None:
        sd = _load_sounddevice()
        self._on_chunk = on_chunk
        try:
            stream = sd.InputStream(
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype="int16",
                device=self._device,
                callback=self._callback,
            )
            stream.start()
        except sd.PortAudioError as exc:
            self._on_chunk = None
            message = str(exc)
            if any(marker in message.lower() for marker in _PERMISSION_MARKERS):
                raise PermissionDeniedError(f"Microphone access was denied: {message}") from exc
            raise DeviceUnavailableError(f"Could not open audio input: {message}") from exc
        self._stream = stream
        logger.info(
            "Microphone stream opened (device=%s, rate=%s, channels=%s)",
            self._device,
            self._sample_rate,
            self._channels,
        )

    def close(self) -> None:
        if self._stream is None:
            return
        stream = self._stream
        self._stream = None
        self._on_chunk = None
        try:
            stream.stop()
        finally:
            stream.close()
        logger.info("Microphone stream closed")


class Recorder:
    """Records one finite audio clip at a time.

    Args:
        credentials: Session credential; recording is refused without it.
        capture: Audio backend (defaults to ``MicrophoneCapture``).
        sample_rate: Capture rate in Hz, also written into the WAV header.
        channels: Number of capture channels.
        clock: Monotonic clock in seconds, injectable for tests.
    """

    def __init__(
        self,
        credentials: CredentialHolder,
        capture: AudioCapture | None = None,
        sample_rate: int = 16000,
        channels: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._credentials = credentials
        self._capture = capture or MicrophoneCapture(sample_rate=sample_rate, channels=channels)
        self._sample_rate = sample_rate
        self._channels = channels
        self._clock = clock
        self._processor = AudioProcessor(sample_rate=sample_rate, channels=channels)
        self._chunks: queue.Queue[np.ndarray] = queue.Queue()
        self._started_at: float | None = None
        self._elapsed = 0
        self._is_recording = False

    @property
    def is_recording(self) -> bool:
        """Check if currently recording."""
        return self._is_recording

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since start; frozen once stopped."""
        if self._is_recording and self._started_at is not None:
            return max(0, int(self._clock() - self._started_at))
        return self._elapsed

    def start(self) -> None:
        """Acquire the input device and begin buffering audio.

        Raises:
            CredentialMissingError: No API key entered (device untouched).
            RecordingAlreadyActiveError: A recording is already running.
            PermissionDeniedError: Microphone access refused.
            DeviceUnavailableError: No usable input device.
        """
        if not self._credentials.is_set:
            raise CredentialMissingError()
        if self._is_recording:
            raise RecordingAlreadyActiveError()

        self._drain()
        self._elapsed = 0
        self._capture.open(self._chunks.put)

        self._started_at = self._clock()
        self._is_recording = True
        logger.info("Recording started")

    def stop(self) -> RecordedAudio:
        """Release the device and return the recording as a WAV clip.

        Raises:
            RecordingNotActiveError: Nothing is being recorded.
            DeviceUnavailableError: The device delivered no audio, or the
                captured chunks could not be assembled into a WAV clip.
        """
        if not self._is_recording:
            raise RecordingNotActiveError()

        self._elapsed = self.elapsed_seconds
        self._is_recording = False
        self._started_at = None
        try:
            self._capture.close()
        finally:
            chunks = self._drain()

        if not chunks:
            raise DeviceUnavailableError("The input device delivered no audio")

        try:
            samples = self._processor.join(chunks)
            if self._processor.is_silent(samples):
                logger.warning("Recording appears to be silent; check the input device")
            data = self._processor.encode_wav(samples)
        except (ValueError, RuntimeError) as exc:
            logger.error("Could not assemble recording: %s", exc)
            raise DeviceUnavailableError(f"The recorded audio could not be encoded: {exc}") from exc

        logger.info(
            "Recording stopped (%ss, %.1f KB)", self._elapsed, len(data) / 1024
        )
        return RecordedAudio(
            data=data,
            sample_rate=self._sample_rate,
            channels=self._channels,
            duration_seconds=self._elapsed,
        )

    def reset(self) -> None:
        """Release any open stream and clear buffered audio and the counter."""
        if self._is_recording:
            self._is_recording = False
            self._capture.close()
        self._started_at = None
        self._elapsed = 0
        self._drain()

    def _drain(self) -> list[np.ndarray]:
        """Remove and return every queued chunk."""
        chunks = []
        while True:
            try:
                chunks.append(self._chunks.get_nowait())
            except queue.Empty:
                return chunks
