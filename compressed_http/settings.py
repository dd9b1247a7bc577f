"""Settings module for runtime configuration."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY_SIZE: int = 16 * 1024 * 1024


def _is_truthy(value: str | None) -> bool:
    """Check if a string value is truthy.

    Args:
        value: String value to check

    Returns:
        True if value is "true", "1", or "yes" (case-insensitive), False otherwise
    """
    if value is None:
        return False
    return value.lower() in ("true", "1", "yes")


def _to_size(value: str | None, default: int) -> int:
    """Parse a byte count, falling back to the default for missing or malformed values."""
    if value is None or not value.strip():
        return default
    try:
        size = int(value)
    except ValueError:
        logger.warning("Ignoring malformed size %r, using %d", value, default)
        return default
    return max(size, 0)


class Settings:
    """Simple settings class for runtime configuration."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self._precompressed_root = os.environ.get("PRECOMPRESSED_ROOT") or "."
        self._compress_max_body_size = _to_size(os.environ.get("COMPRESS_MAX_BODY_SIZE"), DEFAULT_MAX_BODY_SIZE)
        self._strip_encoding_whitespace = _is_truthy(os.environ.get("STRIP_ENCODING_WHITESPACE", "true"))

    @property
    def precompressed_root(self) -> str:
        """Directory served by the precompressed file server."""
        return self._precompressed_root

    @precompressed_root.setter
    def precompressed_root(self, value: str) -> None:
        self._precompressed_root = value or "."

    @property
    def compress_max_body_size(self) -> int:
        """Largest body the compression middleware will compress; 0 means no limit."""
        return self._compress_max_body_size

    @compress_max_body_size.setter
    def compress_max_body_size(self, value: int) -> None:
        self._compress_max_body_size = max(value, 0)

    @property
    def strip_encoding_whitespace(self) -> bool:
        """Whether Accept-Encoding tokens are trimmed before matching."""
        return self._strip_encoding_whitespace

    @strip_encoding_whitespace.setter
    def strip_encoding_whitespace(self, value: bool) -> None:
        self._strip_encoding_whitespace = value


# Global settings instance
settings = Settings()
