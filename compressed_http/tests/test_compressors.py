"""Tests for the compressor adapters."""

from __future__ import annotations

import gzip
import zlib

import brotli
import pytest
import zstandard

from compressed_http.middlewares.compression.compressors import (
    BrotliCompressor,
    CompressionError,
    DeflateCompressor,
    GzipCompressor,
    ZstdCompressor,
)

DATA = b"The quick brown fox jumps over the lazy dog. " * 200


def test_gzip_compress() -> None:
    """Gzip output decompresses to the input and is deterministic."""
    compressor = GzipCompressor()
    compressed = compressor.compress(DATA)
    assert gzip.decompress(compressed) == DATA
    assert compressor.compress(DATA) == compressed
    assert len(compressed) < len(DATA)


def test_deflate_is_raw_stream() -> None:
    """Deflate output is a raw DEFLATE stream without a zlib header."""
    compressed = DeflateCompressor().compress(DATA)
    assert zlib.decompress(compressed, -zlib.MAX_WBITS) == DATA
    with pytest.raises(zlib.error):
        zlib.decompress(compressed)


def test_brotli_compress() -> None:
    """Brotli output decompresses to the input."""
    assert brotli.decompress(BrotliCompressor().compress(DATA)) == DATA


def test_zstd_compress() -> None:
    """Zstandard output decompresses to the input."""
    compressed = ZstdCompressor().compress(DATA)
    assert zstandard.ZstdDecompressor().decompress(compressed) == DATA


def test_empty_input() -> None:
    """Empty input still produces a valid stream."""
    assert gzip.decompress(GzipCompressor().compress(b"")) == b""


def test_compression_level_override() -> None:
    """The constructor can override the class compression level."""
    fast = GzipCompressor(compression_level=1)
    assert fast.compression_level == 1
    assert GzipCompressor.compression_level == 6
    assert gzip.decompress(fast.compress(DATA)) == DATA


@pytest.mark.parametrize("compressor", [GzipCompressor(compression_level=42), DeflateCompressor(compression_level=42)])
def test_bad_level_raises_compression_error(compressor: GzipCompressor | DeflateCompressor) -> None:
    """Failures while building the encoder surface as CompressionError."""
    with pytest.raises(CompressionError) as exc_info:
        compressor.compress(DATA)
    assert exc_info.value.encoding == compressor.encoding
    assert compressor.encoding in str(exc_info.value)
