"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local use.
Use ``get_settings()`` to obtain the cached singleton instance.

The OpenAI key used for transcription is intentionally absent here: it is
entered by the user per session and held by ``CredentialHolder`` only.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """LessonScribe settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        whisper_language: Two-letter language hint sent with every upload.
        claude_model: Anthropic model used for transcript cleanup.
        cleanup_strict: Raise instead of returning a placeholder when cleanup fails.
        exports_dir: Directory used by "Save to exports folder".
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Whisper STT (OpenAI API) ---
    openai_base_url: str = "https://api.openai.com/v1"
    whisper_model: str = "whisper-1"
    whisper_language: str = "sv"  # ISO 639-1 code
    transcription_timeout: float = 300.0  # Seconds; uploads of long lessons are slow

    # --- Cleanup (Anthropic API) ---
    claude_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    cleanup_max_tokens: int = 3000
    cleanup_output_language: str = "Swedish"
    cleanup_strict: bool = False

    # --- Audio capture ---
    sample_rate: int = 16000
    channels: int = 1
    input_device: int | None = None  # None = system default input

    # --- Export ---
    exports_dir: str = "data/exports"
    export_filename_prefix: str = "genomgang"

    # --- Application ---
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
