from __future__ import annotations

import gzip
import io
import zlib

from .base_compressor import BaseCompressor, CompressionError


class GzipCompressor(BaseCompressor):
    """Compressor class for gzip encoding.

    Attributes:
        encoding (str): The encoding name, always 'gzip'.
        compression_level (int): Compression level for gzip (default: 6).
    """

    encoding: str = "gzip"
    compression_level: int = 6

    def compress(self: GzipCompressor, data: bytes) -> bytes:
        """Compress a bytes object using gzip.

        The header timestamp is pinned to zero so the same input always yields
        the same bytes.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.

        Raises:
            CompressionError: If the gzip writer cannot be built or written to.
        """
        buf = io.BytesIO()
        try:
            with gzip.GzipFile(
                mode="wb",
                compresslevel=self.compression_level,
                fileobj=buf,
                mtime=0,
            ) as zfile:
                zfile.write(data)
        except (OSError, ValueError, zlib.error) as oops:
            raise CompressionError(self.encoding, str(oops)) from oops
        return buf.getvalue()
