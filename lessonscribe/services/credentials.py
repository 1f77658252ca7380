"""Session-scoped holder for the transcription provider's API key.

The secret lives in process memory only. It is never written to disk,
settings or logs, and disappears with the Streamlit session.
"""

import logging

logger = logging.getLogger(__name__)


class CredentialHolder:
    """Holds a single secret string for the current session."""

    def __init__(self, secret: str | None = None) -> None:
        self._secret: str | None = None
        if secret:
            self.set(secret)

    @property
    def secret(self) -> str | None:
        """The stored secret, or None when absent."""
        return self._secret

    @property
    def is_set(self) -> bool:
        """True when a non-empty secret is present."""
        return self._secret is not None

    def set(self, secret: str) -> bool:
        """Store ``secret`` after trimming whitespace.

        Returns:
            True if a secret is now present. Blank input clears it.
        """
        cleaned = (secret or "").strip()
        self._secret = cleaned or None
        logger.info("API key %s", "updated" if self._secret else "cleared")
        return self._secret is not None

    def clear(self) -> None:
        """Forget the secret."""
        self._secret = None

    def __repr__(self) -> str:
        return f"CredentialHolder(is_set={self.is_set})"
