"""Content-coding negotiation against a client's Accept-Encoding header."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


def parse_accept_encoding(accept_encoding: str | None, strip_whitespace: bool = True) -> list[str]:
    """Split an Accept-Encoding header into its tokens, in the order the client sent them.

    Quality values are not interpreted, so ``gzip;q=0`` is kept as a literal token
    that will not match ``gzip``.

    Args:
        accept_encoding (str | None): The Accept-Encoding header value.
        strip_whitespace (bool): Trim whitespace around each token.

    Returns:
        list[str]: The tokens, empty when the header is missing or blank.
    """
    if not accept_encoding:
        return []
    tokens = accept_encoding.split(",")
    if strip_whitespace:
        tokens = [token.strip() for token in tokens]
    return [token for token in tokens if token]


class Negotiator:
    """Pick content-codings from a fixed set of supported tokens.

    The client's order wins over the order of ``supported``; the supported set
    only decides membership. Matching is case-sensitive.
    """

    def __init__(self: Negotiator, supported: Iterable[str], strip_whitespace: bool = True) -> None:
        """Initialize the negotiator.

        Args:
            supported: Supported content-coding tokens, e.g. ``("gzip", "deflate")``.
            strip_whitespace (bool): Trim whitespace around client tokens before matching.
        """
        self._supported: tuple[str, ...] = tuple(supported)
        self._strip_whitespace = strip_whitespace

    @property
    def supported(self: Negotiator) -> tuple[str, ...]:
        """The supported tokens."""
        return self._supported

    @property
    def strip_whitespace(self: Negotiator) -> bool:
        """Whether client tokens are trimmed before matching."""
        return self._strip_whitespace

    def candidates(self: Negotiator, accept_encoding: str | None) -> Iterator[str]:
        """Yield each supported token offered by the client, in the client's order.

        Args:
            accept_encoding (str | None): The Accept-Encoding header value.

        Yields:
            str: Supported tokens, duplicates removed.
        """
        seen: set[str] = set()
        for token in parse_accept_encoding(accept_encoding, self._strip_whitespace):
            if token in self._supported and token not in seen:
                seen.add(token)
                yield token

    def select(self: Negotiator, accept_encoding: str | None) -> str | None:
        """Return the first supported token offered by the client.

        Args:
            accept_encoding (str | None): The Accept-Encoding header value.

        Returns:
            str | None: The selected token, or None if nothing matched.
        """
        selected = next(self.candidates(accept_encoding), None)
        logger.debug("Accept encoding %r negotiated to %s", accept_encoding, selected)
        return selected

    def __repr__(self: Negotiator) -> str:
        return f"Negotiator(supported={self._supported!r}, strip_whitespace={self._strip_whitespace!r})"
