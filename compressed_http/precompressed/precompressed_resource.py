"""Static file server that prefers precompressed siblings of the requested file."""

from __future__ import annotations

import logging
import mimetypes
import os
import posixpath
import stat
import types
from typing import IO, TYPE_CHECKING

from werkzeug.exceptions import RequestedRangeNotSatisfiable
from werkzeug.utils import get_content_type
from werkzeug.wrappers import Request, Response
from werkzeug.wsgi import wrap_file

from compressed_http.middlewares.compression.negotiation import Negotiator
from compressed_http.settings import settings

from .asset import Asset

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

mimetypes.init()

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES: Mapping[str, str] = types.MappingProxyType(
    {
        "gzip": ".gz",
        "br": ".br",
    },
)

NOT_FOUND = 404
FORBIDDEN = 403
INTERNAL_ERROR = 500
PRECONDITION_FAILED = 412


class FileResponse(Response):
    """Response without a default Content-Type, so unknown extensions stay untyped."""

    default_mimetype = None


def error_response(status: int, message: str) -> Response:
    """Build a short plain-text error response.

    Args:
        status (int): The HTTP status code.
        message (str): The body text.

    Returns:
        Response: The error response.
    """
    response = Response(f"{message}\n", status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _os_error_response(oops: OSError | ValueError, path: str) -> Response:
    # ValueError: the name cannot exist on disk, e.g. it holds a null byte
    if isinstance(oops, (FileNotFoundError, NotADirectoryError, ValueError)):
        logger.info("Not found: %s", path)
        return error_response(NOT_FOUND, "file not found")
    if isinstance(oops, PermissionError):
        logger.info("Permission denied: %s", path)
        return error_response(FORBIDDEN, "permission denied")
    logger.error("Failed to access %s: %s", path, oops, exc_info=True)
    return error_response(INTERNAL_ERROR, "internal error")


def guess_content_type(path: str) -> str | None:
    """Look up a Content-Type from the file extension alone.

    Args:
        path (str): The file name.

    Returns:
        str | None: The content type, or None when the extension is unknown.
    """
    extension = posixpath.splitext(path)[1]
    if not extension:
        return None
    mimetype = mimetypes.types_map.get(extension) or mimetypes.types_map.get(extension.lower())
    if mimetype is None:
        return None
    return get_content_type(mimetype, "utf-8")


class PrecompressedFiles:
    """Serve files under a root directory, substituting ``.gz``/``.br`` siblings when accepted.

    Validators always come from the base file so every encoding of a resource
    shares the same ETag and Last-Modified.
    """

    def __init__(
        self: PrecompressedFiles,
        root: str | None = None,
        suffixes: Mapping[str, str] = DEFAULT_SUFFIXES,
        negotiator: Negotiator | None = None,
    ) -> None:
        """Initialize the file server.

        Args:
            root (str | None): Directory to serve, the configured root by default.
            suffixes: Content-coding token to file suffix.
            negotiator (Negotiator | None): Overrides the negotiator built from the suffixes.
        """
        self.root = root or settings.precompressed_root
        self._suffixes = types.MappingProxyType(dict(suffixes))
        if negotiator is None:
            negotiator = Negotiator(self._suffixes, strip_whitespace=settings.strip_encoding_whitespace)
        self._negotiator = negotiator

    def __call__(self: PrecompressedFiles, environ: dict, start_response: Callable) -> Iterable[bytes]:
        """WSGI entry point."""
        request = Request(environ)
        return self.handle(request)(environ, start_response)

    def resolve(self: PrecompressedFiles, url_path: str) -> str:
        """Map a request path to a filename under the root.

        Args:
            url_path (str): The decoded request path.

        Returns:
            str: The filename, keeping a trailing separator for directory-style paths.
        """
        cleaned = posixpath.normpath("/" + url_path).lstrip("/")
        filename = os.path.join(self.root, *cleaned.split("/")) if cleaned else self.root
        if url_path.endswith("/") and len(url_path) > 1:
            filename += os.sep
        return filename

    def handle(self: PrecompressedFiles, request: Request) -> Response:
        """Serve the request.

        Args:
            request: The incoming request.

        Returns:
            Response: The file, a 304/206/416 produced by the conditional logic, or a plain-text error.
        """
        filename = self.resolve(request.path)
        try:
            info = os.stat(filename)
        except (OSError, ValueError) as oops:
            return _os_error_response(oops, filename)
        if stat.S_ISDIR(info.st_mode):
            logger.info("Refusing to list directory: %s", filename)
            return error_response(NOT_FOUND, "file not found")

        asset = Asset.from_stat(filename, info)
        fileobj, asset = self._open_variant(asset, request.headers.get("Accept-Encoding"))
        if fileobj is None:
            try:
                fileobj = open(filename, "rb")  # noqa: SIM115
            except (OSError, ValueError) as oops:
                return _os_error_response(oops, filename)

        try:
            return self._file_response(request, asset, fileobj)
        except BaseException:
            fileobj.close()
            raise

    def _open_variant(self: PrecompressedFiles, asset: Asset, accept_encoding: str | None) -> tuple[IO[bytes] | None, Asset]:
        """Open the first precompressed sibling the client accepts.

        Args:
            asset: The base asset.
            accept_encoding (str | None): The Accept-Encoding header value.

        Returns:
            tuple: The open variant (or None) and the asset, updated when a variant was chosen.
        """
        for encoding in self._negotiator.candidates(accept_encoding):
            suffix = self._suffixes.get(encoding)
            if suffix is None:
                continue
            variant_path = asset.path + suffix
            try:
                variant_info = os.stat(variant_path)
                if stat.S_ISDIR(variant_info.st_mode):
                    logger.debug("Skipping directory variant: %s", variant_path)
                    continue
                fileobj = open(variant_path, "rb")  # noqa: SIM115
            except (OSError, ValueError) as oops:
                logger.debug("Skipping variant %s: %s", variant_path, oops)
                continue
            logger.info("Serving %s variant: %s", encoding, variant_path)
            return fileobj, asset.with_variant(encoding, variant_path)
        return None, asset

    def _file_response(self: PrecompressedFiles, request: Request, asset: Asset, fileobj: IO[bytes]) -> Response:
        served_size = os.fstat(fileobj.fileno()).st_size
        response = FileResponse(
            wrap_file(request.environ, fileobj),
            content_type=guess_content_type(asset.path),
            direct_passthrough=True,
        )
        response.headers["ETag"] = asset.etag
        response.last_modified = asset.last_modified
        response.content_length = served_size
        if asset.encoding is not None:
            response.headers["Content-Encoding"] = asset.encoding
            response.vary.add("Accept-Encoding")

        try:
            if asset.encoding is None:
                response.accept_ranges = "bytes"
                response.make_conditional(request, accept_ranges=True, complete_length=served_size)
            else:
                # ranges would address the substituted encoding, so they are not offered
                response.make_conditional(request)
                del response.headers["Accept-Ranges"]
        except RequestedRangeNotSatisfiable as oops:
            logger.info("Unsatisfiable range %r for %s", request.headers.get("Range"), asset.path)
            response.close()
            return oops.get_response(request.environ)

        if response.status_code == PRECONDITION_FAILED:
            response.close()
            return error_response(PRECONDITION_FAILED, "precondition failed")
        return response
