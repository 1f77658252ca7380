"""
Cleanup module - LLM-based lesson transcript cleanup.
"""

from .base import BaseCleaner
from .lesson_cleaner import FALLBACK_TEXT, LessonCleaner, build_cleanup_prompt

__all__ = ["BaseCleaner", "FALLBACK_TEXT", "LessonCleaner", "build_cleanup_prompt"]
