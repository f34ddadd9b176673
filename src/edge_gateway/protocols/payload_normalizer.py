"""Payload normalizer protocol.

Defines the interface for mapping one backend family's search payload into
the canonical SearchResultItem list. One implementation exists per
ResponseShape; supporting a new family shape means adding one normalizer.
"""

from typing import Any, Protocol, runtime_checkable

from edge_gateway.entities import SearchResultItem


class PayloadShapeError(ValueError):
    """Raised when a decoded payload is not the shape a normalizer expects."""


@runtime_checkable
class PayloadNormalizer(Protocol):
    """Protocol for per-family search adapters.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    def build_search_url(self, base_url: str, query: str) -> str:
        """Build the family-specific search endpoint URL.

        Args:
            base_url: Instance base URL (no trailing slash required)
            query: Raw query text; implementations percent-encode it

        Returns:
            Absolute URL for the search call
        """
        ...

    def normalize(self, payload: Any, limit: int) -> list[SearchResultItem]:
        """Map a decoded JSON payload into canonical items.

        Only usable items (non-empty video id) are returned, at most ``limit``.

        Args:
            payload: The decoded JSON body
            limit: Maximum number of items to return

        Returns:
            Canonical items, possibly empty

        Raises:
            PayloadShapeError: If the payload is not this family's shape
        """
        ...
