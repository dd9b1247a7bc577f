"""File metadata and validators for served assets."""

from __future__ import annotations

import dataclasses
import datetime
import os
import string

BASE36_DIGITS: str = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    """Format an integer in base 36 with lowercase digits.

    Args:
        value (int): The integer, may be negative.

    Returns:
        str: The base 36 representation, with a leading "-" for negatives.
    """
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def generate_etag(mtime: int, size: int) -> str:
    """Build the validator for a file from its modification time and size.

    Two files with the same mtime and size share a validator whatever their content.
    """
    return to_base36(mtime) + to_base36(size)


@dataclasses.dataclass(frozen=True)
class Asset:
    """A base file resolved under the root, plus the precompressed variant chosen for it.

    Attributes:
        path (str): Path of the base file.
        size (int): Size of the base file in bytes.
        mtime (int): Modification time of the base file, whole Unix seconds.
        encoding (str | None): Content-coding of the selected variant.
        variant_path (str | None): Path of the selected variant.
    """

    path: str
    size: int
    mtime: int
    encoding: str | None = None
    variant_path: str | None = None

    @classmethod
    def from_stat(cls: type[Asset], path: str, info: os.stat_result) -> Asset:
        """Build an asset from the stat result of its base file."""
        return cls(path=path, size=info.st_size, mtime=info.st_mtime_ns // 1_000_000_000)

    def with_variant(self: Asset, encoding: str, variant_path: str) -> Asset:
        """Return a copy of this asset with a precompressed variant selected."""
        return dataclasses.replace(self, encoding=encoding, variant_path=variant_path)

    @property
    def served_path(self: Asset) -> str:
        """The file whose bytes are actually sent."""
        return self.variant_path or self.path

    @property
    def etag(self: Asset) -> str:
        """Validator derived from the base file, identical for every encoding."""
        return generate_etag(self.mtime, self.size)

    @property
    def last_modified(self: Asset) -> datetime.datetime:
        """Modification time of the base file as an aware UTC datetime."""
        return datetime.datetime.fromtimestamp(self.mtime, tz=datetime.timezone.utc)
