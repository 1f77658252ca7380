"""
Plain-text export of a finished session.

The document holds two labelled sections, the original transcript and the
cleaned content, and is named after the current date.
"""

import logging
from datetime import date
from pathlib import Path

from lessonscribe.core.exceptions import ExportError

logger = logging.getLogger(__name__)

ORIGINAL_LABEL = "=== ORIGINAL TRANSCRIPT ==="
CLEANED_LABEL = "=== CLEANED CONTENT ==="


def build_document(transcript: str, cleaned: str) -> str:
    """Render the downloadable document.

    Args:
        transcript: Raw speech-to-text output.
        cleaned: Cleaned lesson content (or its placeholder).

    Returns:
        The full document text.
    """
    return f"{ORIGINAL_LABEL}\n\n{transcript}\n\n\n{CLEANED_LABEL}\n\n{cleaned}"


def export_filename(today: date | None = None, prefix: str = "genomgang") -> str:
    """File name for the export, e.g. ``genomgang-2026-03-14.txt``.

    The date follows the Swedish locale format (YYYY-MM-DD).
    """
    today = today or date.today()
    return f"{prefix}-{today.isoformat()}.txt"


def write_document(
    content: str,
    output_dir: str | Path,
    filename: str | None = None,
) -> Path:
    """Write ``content`` as UTF-8 text into ``output_dir``.

    Args:
        content: Document text from ``build_document``.
        output_dir: Target directory, created if missing.
        filename: File name (defaults to ``export_filename()``).

    Returns:
        The absolute path of the written file.

    Raises:
        ExportError: If the directory or file cannot be written.
    """
    path = Path(output_dir) / (filename or export_filename())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(detail=f"Could not write {path}: {exc}") from exc
    logger.info("Exported session to %s", path)
    return path.resolve()
