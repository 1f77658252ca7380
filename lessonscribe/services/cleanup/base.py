"""
Abstract base class for transcript cleanup.

Implementations turn a raw lesson transcript into structured lesson notes.
"""

from abc import ABC, abstractmethod

from lessonscribe.core.models import CleanedResult


class BaseCleaner(ABC):
    """Interface that every cleaner must implement."""

    @abstractmethod
    async def clean(self, text: str) -> CleanedResult:
        """Clean a raw transcript.

        Args:
            text: The transcript returned by speech-to-text.

        Returns:
            A CleanedResult. Implementations may return a degraded
            placeholder instead of raising.
        """
