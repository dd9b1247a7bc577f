"""Fixtures for the test suite."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from compressed_http.settings import settings

if TYPE_CHECKING:
    from collections.abc import Generator

logging.basicConfig(
    force=True,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)


@pytest.fixture
def max_body_size() -> Generator[None]:
    """Fixture to restore the compression size limit after a test changes it."""
    original_setting = settings.compress_max_body_size
    yield
    settings.compress_max_body_size = original_setting


@pytest.fixture
def literal_tokens() -> Generator[None]:
    """Fixture to compare Accept-Encoding tokens without trimming whitespace."""
    original_setting = settings.strip_encoding_whitespace
    settings.strip_encoding_whitespace = False
    yield
    settings.strip_encoding_whitespace = original_setting
