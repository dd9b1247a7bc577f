from __future__ import annotations


class CompressionError(Exception):
    """Raised when an encoder cannot be constructed or fails while writing."""

    def __init__(self: CompressionError, encoding: str, reason: str) -> None:
        """Initialize the error.

        Args:
            encoding (str): The content-coding token of the failing compressor.
            reason (str): Short description of what went wrong.
        """
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"{encoding} compression failed: {reason}")


class BaseCompressor:
    """Base class for compressors.

    Attributes:
        encoding (str): The content-coding token, as it appears in Accept-Encoding.
        compression_level (int): Compression level for the compressor.
    """

    encoding: str = "base"
    compression_level: int = 4

    def __init__(self: BaseCompressor, compression_level: int | None = None) -> None:
        """Initialize the compressor, optionally overriding the class compression level.

        Args:
            compression_level (int | None): Level to use instead of the class default.
        """
        if compression_level is not None:
            self.compression_level = compression_level

    def compress(self: BaseCompressor, data: bytes) -> bytes:
        """Compress a bytes object using the compressor.

        Args:
            data (bytes): The data to compress.

        Returns:
            bytes: The compressed data.

        Raises:
            CompressionError: If the encoder cannot be built or the write fails.
        """
        msg = "Subclasses must implement this method"
        raise NotImplementedError(msg)

    def __repr__(self: BaseCompressor) -> str:
        return f"{type(self).__name__}(compression_level={self.compression_level})"
