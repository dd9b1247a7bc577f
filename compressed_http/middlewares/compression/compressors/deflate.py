from __future__ import annotations

import zlib

from .base_compressor import BaseCompressor, CompressionError

# negative window bits select a raw DEFLATE stream without the zlib wrapper
RAW_DEFLATE_WBITS: int = -zlib.MAX_WBITS


class DeflateCompressor(BaseCompressor):
    """Compressor class for deflate encoding.

    Attributes:
        encoding (str): The encoding name, always 'deflate'.
        compression_level (int): Compression level for deflate (default: zlib's default).
    """

    encoding: str = "deflate"
    compression_level: int = zlib.Z_DEFAULT_COMPRESSION

    def compress(self: DeflateCompressor, data: bytes) -> bytes:
        """Compress a bytes object into a raw DEFLATE stream.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.

        Raises:
            CompressionError: If the encoder cannot be built or the write fails.
        """
        try:
            compressor = zlib.compressobj(self.compression_level, zlib.DEFLATED, RAW_DEFLATE_WBITS)
            return compressor.compress(data) + compressor.flush()
        except (ValueError, zlib.error) as oops:
            raise CompressionError(self.encoding, str(oops)) from oops
