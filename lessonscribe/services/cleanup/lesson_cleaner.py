"""
Lesson transcript cleanup service.

Sends a fixed instruction plus the raw transcript of a teacher's walkthrough
to the configured LLM and returns the structured lesson content.

Failures are soft by default: a malformed response or a failed call still
yields a ``CleanedResult`` (flagged ``degraded``) so the session reaches its
terminal state and the user keeps the original transcript. With
``cleanup_strict`` enabled the same conditions raise ``CleanupDegradedError``.
"""

import logging

from lessonscribe.core.config import get_settings
from lessonscribe.core.exceptions import CleanupDegradedError
from lessonscribe.core.models import CleanedResult
from lessonscribe.services.cleanup.base import BaseCleaner
from lessonscribe.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "could not process transcription"
ERROR_PREFIX = "An error occurred during cleanup: "

CLEANUP_INSTRUCTION = (
    "You are an assistant that helps teachers clean up and structure their "
    "lesson walkthroughs.\n\n"
    "Below is a transcript of a teacher's walkthrough. Produce a CLEANED and "
    "STRUCTURED version that contains ONLY:\n"
    "- What will happen during the lesson or work session\n"
    "- Tasks and instructions\n"
    "- Subject content and explanations\n"
    "- Calculation methods and worked examples\n\n"
    "REMOVE:\n"
    '- Remarks to individual students (e.g. "David, be quiet", '
    '"Emma, please sit down")\n'
    "- Background and irrelevant comments\n"
    "- Organisational interruptions that do not matter for the content\n"
    "- Repetitions of the same information\n"
    "- Transcription errors and incomplete sentences\n\n"
    "Format the result clearly with headings. Write in {language}."
)


def build_cleanup_prompt(transcript: str, language: str = "Swedish") -> str:
    """Build the full prompt: fixed instruction followed by the raw transcript.

    Args:
        transcript: Raw speech-to-text output.
        language: Language the cleaned notes should be written in.

    Returns:
        Prompt string for the LLM.
    """
    instruction = CLEANUP_INSTRUCTION.format(language=language)
    return f"{instruction}\n\nTRANSCRIPT:\n{transcript}"


class LessonCleaner(BaseCleaner):
    """Cleans lesson transcripts with a single LLM request.

    Args:
        llm: An LLM provider implementing ``BaseLLM``.
        max_tokens: Output budget for the response.
        language: Output language for the cleaned notes.
        strict: Raise ``CleanupDegradedError`` instead of returning a placeholder.
    """

    def __init__(
        self,
        llm: BaseLLM,
        max_tokens: int | None = None,
        language: str | None = None,
        strict: bool | None = None,
    ) -> None:
        settings = get_settings()
        self._llm = llm
        self._max_tokens = max_tokens or settings.cleanup_max_tokens
        self._language = language or settings.cleanup_output_language
        self._strict = settings.cleanup_strict if strict is None else strict

    async def clean(self, text: str) -> CleanedResult:
        """Clean ``text``; see module docstring for the failure policy.

        Raises:
            CleanupDegradedError: Only in strict mode.
        """
        prompt = build_cleanup_prompt(text, self._language)

        try:
            cleaned = await self._llm.generate(prompt, max_tokens=self._max_tokens)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("Cleanup call failed: %s", reason)
            return self._degraded(f"{ERROR_PREFIX}{reason}", reason)

        if not cleaned:
            logger.warning("Cleanup response had no usable text")
            return self._degraded(FALLBACK_TEXT, "Response did not contain text content")

        logger.info("Cleanup complete (%d chars)", len(cleaned))
        return CleanedResult(text=cleaned)

    def _degraded(self, placeholder: str, reason: str) -> CleanedResult:
        if self._strict:
            raise CleanupDegradedError(reason)
        return CleanedResult(text=placeholder, degraded=True, reason=reason)
