"""Precompressed static file serving."""

from compressed_http.precompressed.asset import Asset, generate_etag, to_base36
from compressed_http.precompressed.precompressed_resource import DEFAULT_SUFFIXES, PrecompressedFiles

__all__ = [
    "DEFAULT_SUFFIXES",
    "Asset",
    "PrecompressedFiles",
    "generate_etag",
    "to_base36",
]
