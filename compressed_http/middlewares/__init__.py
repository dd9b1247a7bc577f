"""Middlewares package for response compression and related utilities.

Exports:
    CompressionMiddleware: Buffers a handler's response and compresses it when that helps.
    LoggingMiddleware: Logs each request and the status of its response.
"""

from __future__ import annotations

from compressed_http.middlewares.compression import CompressionMiddleware
from compressed_http.middlewares.logging_middleware import LoggingMiddleware

__all__ = [
    "CompressionMiddleware",
    "LoggingMiddleware",
]
