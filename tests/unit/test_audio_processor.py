"""Tests for AudioProcessor (chunk joining, WAV encoding, silence detection)."""

import io

import numpy as np
import pytest
import soundfile as sf

from lessonscribe.services.audio.processor import AudioProcessor


@pytest.fixture
def processor():
    """Create an AudioProcessor configured for 16 kHz mono audio."""
    return AudioProcessor(sample_rate=16000, channels=1)


class TestJoin:
    def test_concatenates_in_order(self, processor):
        first = np.full((3, 1), 1, dtype=np.int16)
        second = np.full((2, 1), 2, dtype=np.int16)

        joined = processor.join([first, second])

        assert joined.shape == (5, 1)
        assert joined.ravel().tolist() == [1, 1, 1, 2, 2]

    def test_accepts_flat_chunks(self, processor):
        joined = processor.join([np.zeros(4, dtype=np.int16)])
        assert joined.shape == (4, 1)

    def test_rejects_channel_mismatch(self, processor):
        with pytest.raises(ValueError, match="channels"):
            processor.join([np.zeros((4, 2), dtype=np.int16)])

    def test_rejects_nothing(self, processor):
        with pytest.raises(ValueError):
            processor.join([])


class TestEncodeWav:
    """WAV container produced for upload."""

    def test_produces_riff_wav(self, processor, sample_chunk):
        data = processor.encode_wav(sample_chunk)
        assert data[:4] == b"RIFF"
        assert data[8:12] == b"WAVE"

    def test_readable_with_same_samples(self, processor, sample_chunk):
        data = processor.encode_wav(sample_chunk)
        decoded, rate = sf.read(io.BytesIO(data), dtype="int16")
        assert rate == 16000
        assert len(decoded) == 16000
        np.testing.assert_array_equal(decoded, sample_chunk.ravel())

    def test_empty_rejected(self, processor):
        with pytest.raises(ValueError, match="empty"):
            processor.encode_wav(np.zeros((0, 1), dtype=np.int16))


class TestIsSilent:
    """Silence detection on RMS energy."""

    def test_silence_detected(self, processor):
        assert processor.is_silent(np.zeros((16000, 1), dtype=np.int16)) is True

    def test_tone_not_silent(self, processor, sample_chunk):
        assert processor.is_silent(sample_chunk) is False

    def test_empty_is_silent(self, processor):
        assert processor.is_silent(np.zeros((0, 1), dtype=np.int16)) is True

    def test_float_scaling(self, processor, sample_chunk):
        audio = processor.to_mono_float(sample_chunk)
        assert audio.dtype == np.float32
        assert audio.ndim == 1
        assert -1.0 <= audio.min() and audio.max() <= 1.0
