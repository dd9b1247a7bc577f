"""In-memory capture of a downstream handler's response."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

import magic
from werkzeug.datastructures import Headers

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from werkzeug.wrappers import Request

logger = logging.getLogger(__name__)

SNIFF_LENGTH: int = 512
TEXT_PLAIN: str = "text/plain; charset=utf-8"
OCTET_STREAM: str = "application/octet-stream"
TRAILER: str = "Trailer"

# statuses that never carry a body, so there is nothing to type
BODYLESS_STATUSES: frozenset[int] = frozenset((204, 304))

# RFC 7230 section 4.1.2: fields a sender must not put in a trailer
FORBIDDEN_TRAILERS: frozenset[str] = frozenset(
    name.lower()
    for name in (
        "Authorization",
        "Cache-Control",
        "Connection",
        "Content-Encoding",
        "Content-Length",
        "Content-Range",
        "Content-Type",
        "Expect",
        "Host",
        "Keep-Alive",
        "Max-Forwards",
        "Pragma",
        "Proxy-Authenticate",
        "Proxy-Authorization",
        "Proxy-Connection",
        "Range",
        "Realm",
        "TE",
        "Trailer",
        "Transfer-Encoding",
        "WWW-Authenticate",
    )
)


def detect_content_type(data: bytes) -> str:
    """Guess a Content-Type from the leading bytes of a body.

    Args:
        data (bytes): The body; only the first 512 bytes are examined.

    Returns:
        str: A media type, with a utf-8 charset for textual content.
    """
    head = bytes(data[:SNIFF_LENGTH])
    if not head:
        return TEXT_PLAIN
    try:
        mimetype = magic.from_buffer(head, mime=True)
    except magic.MagicException as oops:
        logger.warning("Content sniffing failed: %s", oops)
        return OCTET_STREAM
    if not mimetype or mimetype in ("application/x-empty", "inode/x-empty"):
        return OCTET_STREAM
    if mimetype.startswith("text/"):
        return f"{mimetype}; charset=utf-8"
    return mimetype


def _declared_trailers(headers: Headers) -> tuple[str, ...]:
    names: list[str] = []
    seen: set[str] = set()
    for declaration in headers.getlist(TRAILER):
        for name in declaration.split(","):
            name = name.strip()  # noqa: PLW2901
            if not name:
                continue
            key = name.lower()
            if key in FORBIDDEN_TRAILERS:
                logger.debug("Ignoring disallowed trailer declaration: %s", name)
                continue
            if key not in seen:
                seen.add(key)
                names.append(name)
    return tuple(names)


def _is_bodyless(status_code: int) -> bool:
    return status_code < 200 or status_code in BODYLESS_STATUSES  # noqa: PLR2004


@dataclasses.dataclass(frozen=True)
class CapturedResponse:
    """Everything a handler would have sent, kept back so it can be transformed.

    Attributes:
        status_code (int): The locked status code.
        headers (Headers): Leading headers, without the Trailer declaration or trailer fields.
        trailer_names (tuple[str, ...]): Declared trailer names, in declaration order.
        trailers (Headers): Values recorded for the declared trailers.
        body (bytes): The complete body.
    """

    status_code: int
    headers: Headers
    trailer_names: tuple[str, ...]
    trailers: Headers
    body: bytes


class ResponseRecorder:
    """A response target that records instead of sending.

    Handlers mutate ``headers``, set ``status_code`` and call ``write`` exactly as
    they would on a real response. The status and the set of leading headers are
    frozen the first time the status is set or body bytes are written.
    """

    def __init__(self: ResponseRecorder) -> None:
        """Initialize an empty recorder."""
        self.headers = Headers()
        self._status_code: int | None = None
        self._snapshot: Headers | None = None
        self._body = bytearray()

    @property
    def wrote_header(self: ResponseRecorder) -> bool:
        """Whether the status (and so the leading headers) has been locked."""
        return self._status_code is not None

    @property
    def status_code(self: ResponseRecorder) -> int:
        """The locked status code, or 200 if nothing has been locked yet."""
        if self._status_code is None:
            return 200
        return self._status_code

    @status_code.setter
    def status_code(self: ResponseRecorder, value: int) -> None:
        self.write_header(value)

    def write_header(self: ResponseRecorder, status_code: int) -> None:
        """Lock the status code and snapshot the headers written so far.

        Args:
            status_code (int): The HTTP status code.
        """
        if self._status_code is not None:
            logger.warning("Superfluous status %s ignored, already sent %s", status_code, self._status_code)
            return
        self._status_code = int(status_code)
        self._snapshot = self.headers.copy()

    def write(self: ResponseRecorder, data: bytes | str) -> int:
        """Append to the body, locking a 200 status first if none was set.

        Args:
            data: Bytes, or text which is encoded as UTF-8.

        Returns:
            int: The number of bytes recorded.
        """
        if self._status_code is None:
            self.write_header(200)
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._body.extend(data)
        return len(data)

    def finish(self: ResponseRecorder) -> CapturedResponse:
        """Freeze the recording.

        Returns:
            CapturedResponse: The recorded status, headers, trailers and body.
        """
        if self._status_code is None:
            self.write_header(200)
        body = bytes(self._body)
        leading = self._snapshot.copy()
        trailer_names = _declared_trailers(leading)
        del leading[TRAILER]
        trailers = Headers()
        for name in trailer_names:
            del leading[name]
            for value in self.headers.getlist(name):
                trailers.add(name, value)
        if "Content-Type" not in leading and not _is_bodyless(self._status_code):
            leading["Content-Type"] = detect_content_type(body)
        return CapturedResponse(
            status_code=self._status_code,
            headers=leading,
            trailer_names=trailer_names,
            trailers=trailers,
            body=body,
        )


class WSGIHandler:
    """Adapt a WSGI application into a handler that writes to a ResponseRecorder."""

    def __init__(self: WSGIHandler, app: Callable) -> None:
        """Initialize the adapter.

        Args:
            app: The WSGI application to run.
        """
        self.app = app

    def __call__(self: WSGIHandler, request: Request, recorder: ResponseRecorder) -> None:
        """Run the application against the request, recording its response.

        Args:
            request: The incoming request.
            recorder: Where the application's output is recorded.
        """

        def start_response(
            status: str,
            headers: list[tuple[str, str]],
            exc_info: tuple | None = None,
        ) -> Callable[[bytes], int]:
            if exc_info is not None and recorder.wrote_header:
                raise exc_info[1].with_traceback(exc_info[2])
            for key, value in headers:
                recorder.headers.add(key, value)
            recorder.write_header(int(status.split(None, 1)[0]))
            return recorder.write

        app_iter: Iterable[bytes] = self.app(request.environ, start_response)
        try:
            for chunk in app_iter:
                recorder.write(chunk)
        finally:
            close = getattr(app_iter, "close", None)
            if close is not None:
                close()


def capture_response(handler: Callable[[Request, ResponseRecorder], None], request: Request) -> CapturedResponse:
    """Run a handler to completion against a fresh recorder.

    Args:
        handler: Callable taking ``(request, recorder)``.
        request: The incoming request.

    Returns:
        CapturedResponse: What the handler produced.
    """
    recorder = ResponseRecorder()
    handler(request, recorder)
    return recorder.finish()
