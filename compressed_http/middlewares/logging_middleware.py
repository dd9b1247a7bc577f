"""Logging middleware for WSGI requests and responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from werkzeug.wsgi import get_current_url

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)


class LoggingMiddleware:
    """Middleware to add some simple logging the request and response."""

    def __init__(self: LoggingMiddleware, app: Callable, middleware_name: str) -> None:
        """Initialize the logging middleware.

        Args:
            app: The wrapped WSGI application.
            middleware_name: Name to use in log messages for this middleware instance.
        """
        self.app = app
        self.middleware_name = middleware_name

    def __call__(self: LoggingMiddleware, environ: dict, start_response: Callable) -> Iterable[bytes]:
        """Log the incoming request, and the status once the application starts its response."""
        url = get_current_url(environ)
        logger.info("[%s] Request received: %s %s", self.middleware_name, environ.get("REQUEST_METHOD"), url)

        def logging_start_response(status: str, headers: list[tuple[str, str]], exc_info: tuple | None = None) -> Callable:
            logger.info("[%s] Response sent: %s %s", self.middleware_name, status, url)
            return start_response(status, headers, exc_info)

        return self.app(environ, logging_start_response)
