"""Shared utility functions for LessonScribe."""


def format_time(seconds: int) -> str:
    """Format elapsed seconds as ``M:SS`` (minutes unbounded)."""
    if seconds < 0:
        raise ValueError(f"Elapsed time cannot be negative: {seconds}")
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"
