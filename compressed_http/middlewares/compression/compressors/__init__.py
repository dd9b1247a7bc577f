"""Compression algorithms package."""

from compressed_http.middlewares.compression.compressors.base_compressor import BaseCompressor, CompressionError
from compressed_http.middlewares.compression.compressors.brotli import BrotliCompressor
from compressed_http.middlewares.compression.compressors.deflate import DeflateCompressor
from compressed_http.middlewares.compression.compressors.gzip import GzipCompressor
from compressed_http.middlewares.compression.compressors.zstd import ZstdCompressor

__all__ = [
    "BaseCompressor",
    "BrotliCompressor",
    "CompressionError",
    "DeflateCompressor",
    "GzipCompressor",
    "ZstdCompressor",
]
