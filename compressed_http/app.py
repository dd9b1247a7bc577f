"""Application factory for the precompressed file server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .middlewares import CompressionMiddleware, LoggingMiddleware
from .middlewares.compression import WSGIHandler
from .precompressed import PrecompressedFiles

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def create_app(root: str | None = None, compress: bool = False) -> Callable:
    """Create and configure the WSGI application.

    Args:
        root (str | None): Directory to serve, the configured root by default.
        compress (bool): Also compress responses on the fly when no precompressed
            variant was served.

    Returns:
        The WSGI application.
    """
    app: Callable = PrecompressedFiles(root)
    if compress:
        app = CompressionMiddleware(WSGIHandler(app))
    logger.info("Serving %s (compress=%s)", root or "configured root", compress)
    return LoggingMiddleware(app, "files")
