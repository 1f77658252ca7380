"""
Audio module - Microphone capture and audio processing utilities.
"""

from .processor import AudioProcessor
from .recorder import AudioCapture, MicrophoneCapture, Recorder

__all__ = ["AudioCapture", "AudioProcessor", "MicrophoneCapture", "Recorder"]
