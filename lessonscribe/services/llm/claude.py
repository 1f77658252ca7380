"""
Claude LLM provider implementation.

Uses the Anthropic Python SDK (``anthropic.AsyncAnthropic``) to call the
Messages API. SDK retries are disabled: one request per call.
"""

import logging

from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
)

from lessonscribe.core.config import get_settings
from lessonscribe.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


def _first_text(response) -> str | None:
    """Return ``response.content[0].text`` or None if any part is missing."""
    content = getattr(response, "content", None)
    if not content:
        return None
    try:
        first = content[0]
    except (IndexError, KeyError, TypeError):
        return None
    text = first.get("text") if isinstance(first, dict) else getattr(first, "text", None)
    if not isinstance(text, str) or not text:
        return None
    return text


class ClaudeLLM(BaseLLM):
    """Claude API LLM provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.claude_api_key
        self._model = model or settings.claude_model
        self._max_tokens = max_tokens or settings.cleanup_max_tokens

    async def _call_api(
        self,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str | None:
        """Send a single request to Claude.

        Transport failures are translated to ``ConnectionError`` /
        ``TimeoutError`` / ``RuntimeError``. An error status from the API is
        treated like a response without content and yields None.
        """
        # A fresh client per call: Streamlit runs each pipeline in its own event loop
        # An empty key falls back to the SDK's ANTHROPIC_API_KEY lookup
        client = AsyncAnthropic(api_key=self._api_key or None, max_retries=0)
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=max_tokens or self._max_tokens,
                messages=[{"role": "user", "content": user_prompt}],
            )

        except APITimeoutError as exc:
            logger.warning("Claude API timeout: %s", exc)
            raise TimeoutError(f"Claude API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("Claude API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to Claude API: {exc}") from exc
        except APIStatusError as exc:
            logger.warning("Claude API returned status %s: %s", exc.status_code, exc.message)
            return None
        except Exception as exc:
            logger.error("Unexpected Claude API error: %s", exc)
            raise RuntimeError(f"Claude API error: {exc}") from exc
        finally:
            await client.close()

        text = _first_text(response)
        if text is None:
            logger.warning("Claude response had no text content")
        return text

    async def generate(self, prompt: str, **kwargs) -> str | None:
        """Generate a free-form text response."""
        return await self._call_api(
            user_prompt=prompt,
            max_tokens=kwargs.pop("max_tokens", None),
        )
