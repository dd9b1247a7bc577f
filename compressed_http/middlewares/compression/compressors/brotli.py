from __future__ import annotations

import brotli

from .base_compressor import BaseCompressor, CompressionError


class BrotliCompressor(BaseCompressor):
    """Compressor class for Brotli encoding.

    Attributes:
        encoding (str): The encoding name, always 'br'.
        compression_level (int): Compression level for Brotli (default: 4).
    """

    encoding: str = "br"
    compression_level: int = 4

    def compress(self: BrotliCompressor, data: bytes) -> bytes:
        """Compress a bytes object using Brotli.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.

        Raises:
            CompressionError: If Brotli rejects the parameters or the input.
        """
        try:
            compressor = brotli.Compressor(quality=self.compression_level)
            return compressor.process(data) + compressor.finish()
        except (brotli.error, ValueError) as oops:
            raise CompressionError(self.encoding, str(oops)) from oops
