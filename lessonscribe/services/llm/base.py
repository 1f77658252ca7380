"""
Abstract base class for LLM providers.

The cleanup service depends only on this interface, so the hosted model can
be swapped without touching the pipeline.
"""

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> str | None:
        """Generate a free-form text response.

        Args:
            prompt: The user prompt to send to the model.
            **kwargs: Provider-specific options (e.g. max_tokens).

        Returns:
            The first text segment of the model's response, or None when the
            response does not have the expected shape.
        """
