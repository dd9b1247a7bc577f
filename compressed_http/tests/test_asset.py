"""Tests for asset metadata and validators."""

from __future__ import annotations

import datetime
import os
from typing import TYPE_CHECKING

import pytest

from compressed_http.precompressed.asset import Asset, generate_etag, to_base36

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (35, "z"),
        (36, "10"),
        (1295, "zz"),
        (-71, "-1z"),
        (1_600_000_000, "qgljwg"),
    ],
)
def test_to_base36(value: int, expected: str) -> None:
    """Integers are rendered with lowercase base 36 digits."""
    assert to_base36(value) == expected
    assert int(expected, 36) == value


def test_generate_etag_concatenates() -> None:
    """The validator is mtime then size, with no separator or quotes."""
    assert generate_etag(36, 35) == "10z"
    assert generate_etag(1_600_000_000, 0) == "qgljwg0"


def test_same_metadata_same_etag(tmp_path: Path) -> None:
    """Files with equal mtime and size share a validator whatever their content."""
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_bytes(b"aaaa")
    second.write_bytes(b"bbbb")
    for path in (first, second):
        os.utime(path, (1_600_000_000, 1_600_000_000))
    first_asset = Asset.from_stat(str(first), os.stat(first))
    second_asset = Asset.from_stat(str(second), os.stat(second))
    assert first_asset.etag == second_asset.etag == generate_etag(1_600_000_000, 4)


def test_variant_keeps_base_metadata(tmp_path: Path) -> None:
    """Selecting a variant changes the served path but not the validators."""
    base = tmp_path / "page.html"
    base.write_bytes(b"<html></html>")
    os.utime(base, (1_600_000_000.75, 1_600_000_000.75))
    asset = Asset.from_stat(str(base), os.stat(base))
    variant = asset.with_variant("gzip", f"{base}.gz")
    assert asset.served_path == str(base)
    assert variant.served_path == f"{base}.gz"
    assert variant.encoding == "gzip"
    assert variant.etag == asset.etag
    assert asset.mtime == 1_600_000_000
    assert asset.last_modified == datetime.datetime(2020, 9, 13, 12, 26, 40, tzinfo=datetime.timezone.utc)
