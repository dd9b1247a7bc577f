"""Compression middleware package for buffered WSGI responses."""

from compressed_http.middlewares.compression.capture import (
    CapturedResponse,
    ResponseRecorder,
    WSGIHandler,
    capture_response,
    detect_content_type,
)
from compressed_http.middlewares.compression.compression_mod import CompressionMiddleware
from compressed_http.middlewares.compression.negotiation import Negotiator, parse_accept_encoding

__all__ = [
    "CapturedResponse",
    "CompressionMiddleware",
    "Negotiator",
    "ResponseRecorder",
    "WSGIHandler",
    "capture_response",
    "detect_content_type",
    "parse_accept_encoding",
]
