"""Audio helpers for microphone chunks.

Joins the int16 blocks delivered by the input stream, measures them and
wraps them in the WAV container uploaded for transcription.
"""

import io

import numpy as np
import soundfile as sf


class AudioProcessor:
    """Turns captured int16 chunks into an uploadable clip."""

    def __init__(self, sample_rate: int = 16000, channels: int = 1) -> None:
        """
        Args:
            sample_rate: Capture rate in Hz.
            channels: Channels per frame (1 = mono).
        """
        self.sample_rate = sample_rate
        self.channels = channels

    def join(self, chunks: list[np.ndarray]) -> np.ndarray:
        """Concatenate ``(frames, channels)`` int16 chunks in arrival order.

        Raises:
            ValueError: No chunks, or a chunk with the wrong channel count.
        """
        if not chunks:
            raise ValueError("No audio chunks to join")
        shaped = [c.reshape(-1, self.channels) if c.ndim == 1 else c for c in chunks]
        for chunk in shaped:
            if chunk.shape[1] != self.channels:
                raise ValueError(
                    f"Chunk has {chunk.shape[1]} channels, expected {self.channels}"
                )
        return np.concatenate(shaped, axis=0).astype(np.int16, copy=False)

    def to_mono_float(self, samples: np.ndarray) -> np.ndarray:
        """Average channels and scale int16 to float32 in [-1.0, 1.0]."""
        audio = samples.astype(np.float32) / 32768.0
        if audio.ndim == 2:
            audio = audio.mean(axis=1)
        return audio

    def encode_wav(self, samples: np.ndarray) -> bytes:
        """Encode int16 samples as an in-memory 16-bit PCM WAV file.

        Raises:
            ValueError: If no samples were captured.
        """
        if samples.size == 0:
            raise ValueError("Cannot encode an empty recording")
        buf = io.BytesIO()
        sf.write(buf, samples, self.sample_rate, format="WAV", subtype="PCM_16")
        return buf.getvalue()

    def is_silent(self, samples: np.ndarray, threshold: float = 0.01) -> bool:
        """True when the RMS level of ``samples`` is below ``threshold``."""
        if samples.size == 0:
            return True
        audio = self.to_mono_float(samples)
        return float(np.sqrt(np.mean(audio**2))) < threshold
