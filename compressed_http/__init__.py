"""WSGI response compression and precompressed static file serving."""

from compressed_http.app import create_app
from compressed_http.middlewares import CompressionMiddleware, LoggingMiddleware
from compressed_http.precompressed import PrecompressedFiles

__all__ = [
    "CompressionMiddleware",
    "LoggingMiddleware",
    "PrecompressedFiles",
    "create_app",
]
