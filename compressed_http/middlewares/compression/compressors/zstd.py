"""Zstandard compression implementation."""

from __future__ import annotations

import zstandard as zstd

from .base_compressor import BaseCompressor, CompressionError


class ZstdCompressor(BaseCompressor):
    """Compressor class for Zstandard encoding.

    Attributes:
        encoding (str): The encoding name, always 'zstd'.
        compression_level (int): Compression level for Zstandard (default: 4).
    """

    encoding: str = "zstd"
    compression_level: int = 4

    def compress(self: ZstdCompressor, data: bytes) -> bytes:
        """Compress a bytes object using Zstandard.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.

        Raises:
            CompressionError: If the compression context cannot be built or fails.
        """
        try:
            cctx = zstd.ZstdCompressor(level=self.compression_level)
            return cctx.compress(data)
        except (zstd.ZstdError, ValueError) as oops:
            raise CompressionError(self.encoding, str(oops)) from oops
