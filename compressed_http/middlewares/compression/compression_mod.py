"""Compression middleware for buffered WSGI responses."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from werkzeug.wrappers import Request, Response

from compressed_http.settings import settings

from .capture import capture_response
from .compressors import CompressionError, DeflateCompressor, GzipCompressor
from .negotiation import Negotiator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from werkzeug.datastructures import Headers

    from .capture import CapturedResponse, ResponseRecorder
    from .compressors import BaseCompressor

logger = logging.getLogger(__name__)

PARTIAL_CONTENT = 206


class CapturedBodyResponse(Response):
    """Response that keeps the captured headers as they are, without a default Content-Type."""

    default_mimetype = None


class CompressionMiddleware:
    """Run a handler into memory, then compress its body if that makes it smaller.

    Only the first supported encoding the client lists is tried. If it fails or
    does not shrink the body, the original body is sent untouched.
    """

    def __init__(
        self: CompressionMiddleware,
        handler: Callable[[Request, ResponseRecorder], None],
        compressors: Iterable[BaseCompressor] | None = None,
        max_body_size: int | None = None,
        negotiator: Negotiator | None = None,
    ) -> None:
        """Initialize the CompressionMiddleware and register available compressors.

        Args:
            handler: Downstream handler taking ``(request, recorder)``.
            compressors: Compressors in priority order; gzip and deflate by default.
            max_body_size (int | None): Bodies longer than this are sent uncompressed.
                Defaults to the configured setting; 0 means unbounded.
            negotiator (Negotiator | None): Overrides the negotiator built from the compressors.
        """
        self._handler = handler
        self._compressors: dict[str, BaseCompressor] = {}
        if compressors is None:
            compressors = (GzipCompressor(), DeflateCompressor())
        for compressor in compressors:
            self._add_compressor(compressor)
        if max_body_size is None:
            max_body_size = settings.compress_max_body_size
        self._max_body_size = max_body_size
        if negotiator is None:
            negotiator = Negotiator(self._compressors, strip_whitespace=settings.strip_encoding_whitespace)
        self._negotiator = negotiator

    def _add_compressor(self: CompressionMiddleware, compressor: BaseCompressor) -> None:
        self._compressors[compressor.encoding] = compressor

    def _get_compressor(self: CompressionMiddleware, accept_encoding: str | None) -> BaseCompressor | None:
        """Select a compressor based on the Accept-Encoding header.

        Args:
            accept_encoding (str | None): The Accept-Encoding header value.

        Returns:
            BaseCompressor | None: The selected compressor or None if not found.
        """
        encoding = self._negotiator.select(accept_encoding)
        if encoding is None:
            return None
        return self._compressors.get(encoding)

    def __call__(self: CompressionMiddleware, environ: dict, start_response: Callable) -> Iterable[bytes]:
        """WSGI entry point."""
        request = Request(environ)
        return self.handle(request)(environ, start_response)

    def handle(self: CompressionMiddleware, request: Request) -> Response:
        """Capture the handler's response and build the final one.

        Args:
            request: The incoming request.

        Returns:
            Response: The response to send, compressed when worthwhile.
        """
        captured = capture_response(self._handler, request)
        body, encoding = self._encode(request, captured)
        return self._build_response(captured, body, encoding)

    def _encode(self: CompressionMiddleware, request: Request, captured: CapturedResponse) -> tuple[bytes, str | None]:
        """Decide on and apply compression.

        Args:
            request: The incoming request.
            captured: The recorded response.

        Returns:
            tuple[bytes, str | None]: The body to send and the content-coding applied, if any.
        """
        data = captured.body
        compressor = self._get_compressor(request.headers.get("Accept-Encoding"))
        if compressor is None:
            return data, None

        # If content-encoding is already set don't compress.
        if "Content-Encoding" in captured.headers:
            logger.info("Response already has a content encoding, not compressing")
            return data, None

        # Content-Range counts identity bytes, so a partial body must stay unencoded
        if captured.status_code == PARTIAL_CONTENT or "Content-Range" in captured.headers:
            logger.info("Partial content response, not compressing")
            return data, None

        if self._max_body_size and len(data) > self._max_body_size:
            logger.info(
                "Skipping compression for %s byte response (limit %s)",
                f"{len(data):,}",
                f"{self._max_body_size:,}",
            )
            return data, None
        logger.info("Using compressor: %s", compressor.encoding)

        before_compression = time.monotonic()
        try:
            compressed = compressor.compress(data)
        except CompressionError as oops:
            logger.warning("Serving uncompressed response: %s", oops, exc_info=True)
            return data, None
        after_compression = time.monotonic()

        size_before_compression = len(data)
        size_after_compression = len(compressed)
        # make sure compression actually makes the output smaller
        if size_after_compression >= size_before_compression:
            logger.info(
                "Compression with %s did not shrink %s bytes (got %s), serving uncompressed",
                compressor.encoding,
                f"{size_before_compression:,}",
                f"{size_after_compression:,}",
            )
            return data, None
        logger.info(
            "%s: Compressed %s bytes to %s bytes (%.2f x compression) in %.2f ms",
            request.path,
            f"{size_before_compression:,}",
            f"{size_after_compression:,}",
            size_before_compression / size_after_compression,
            1000 * (after_compression - before_compression),
        )
        return compressed, compressor.encoding

    @staticmethod
    def _build_response(captured: CapturedResponse, body: bytes, encoding: str | None) -> Response:
        headers: Headers = captured.headers.copy()
        if encoding is not None:
            headers.add("Content-Encoding", encoding)
            headers.add("Vary", "Accept-Encoding")
        headers["Content-Length"] = str(len(body))
        # WSGI has no chunked trailers; the body is complete, so trailer values are final here
        for key, value in captured.trailers.items():
            headers.add(key, value)
        return CapturedBodyResponse(body, status=captured.status_code, headers=headers)
