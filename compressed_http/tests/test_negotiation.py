"""Tests for Accept-Encoding negotiation."""

from __future__ import annotations

import pytest

from compressed_http.middlewares.compression.negotiation import Negotiator, parse_accept_encoding


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, []),
        ("", []),
        ("gzip", ["gzip"]),
        ("gzip, deflate, br", ["gzip", "deflate", "br"]),
        ("gzip,,br", ["gzip", "br"]),
        ("gzip;q=0.5, br", ["gzip;q=0.5", "br"]),
    ],
)
def test_parse_accept_encoding(header: str | None, expected: list[str]) -> None:
    """Tokens come back trimmed and in client order."""
    assert parse_accept_encoding(header) == expected


def test_parse_accept_encoding_literal() -> None:
    """Without trimming the whitespace after commas is kept."""
    assert parse_accept_encoding("gzip, deflate", strip_whitespace=False) == ["gzip", " deflate"]


class TestNegotiator:
    def test_client_order_wins(self) -> None:
        """The first supported token in the client's list is chosen, not the server's favourite."""
        negotiator = Negotiator(("gzip", "deflate"))
        assert negotiator.select("deflate, gzip") == "deflate"
        assert negotiator.select("gzip, deflate") == "gzip"

    def test_unsupported_tokens_are_skipped(self) -> None:
        """Unsupported tokens are passed over."""
        negotiator = Negotiator(("gzip", "deflate"))
        assert negotiator.select("br, zstd, deflate") == "deflate"

    @pytest.mark.parametrize("header", [None, "", "br", "identity, *"])
    def test_no_match(self, header: str | None) -> None:
        """Missing, empty or unsupported headers select nothing."""
        assert Negotiator(("gzip", "deflate")).select(header) is None

    def test_case_sensitive(self) -> None:
        """Token comparison is case-sensitive."""
        assert Negotiator(("gzip",)).select("GZIP, Gzip") is None

    def test_quality_values_are_not_parsed(self) -> None:
        """A token carrying a q-value does not match the bare algorithm name."""
        assert Negotiator(("gzip",)).select("gzip;q=1.0") is None

    def test_literal_whitespace(self) -> None:
        """With trimming disabled a token after ", " does not match."""
        negotiator = Negotiator(("gzip", "deflate"), strip_whitespace=False)
        assert negotiator.select("br, deflate") is None
        assert negotiator.select("br,deflate") == "deflate"
        assert negotiator.strip_whitespace is False

    def test_candidates_in_client_order(self) -> None:
        """candidates yields every supported token once, in client order."""
        negotiator = Negotiator(("gzip", "br"))
        assert list(negotiator.candidates("br, deflate, gzip, br")) == ["br", "gzip"]

    def test_supported_is_immutable(self) -> None:
        """The supported set is copied into a tuple."""
        supported = ["gzip"]
        negotiator = Negotiator(supported)
        supported.append("br")
        assert negotiator.supported == ("gzip",)
        assert negotiator.select("br") is None
