"""Service layer for gateway logic.

Services depend on injected collaborators (HTTP client, allowlist,
registry), never on global mutable state, which keeps them testable
with a mocked transport.

Architecture:
    Handler -> Service -> Upstream (httpx)
    (HTTP)  -> (Policy) -> (Network)

Usage:
    ```python
    from edge_gateway.services import AllowlistValidator, PassthroughFetcher, SearchAggregator

    validator = AllowlistValidator.create()
    fetcher = PassthroughFetcher(client=client, validator=validator)
    aggregator = SearchAggregator(client=client, registry=BackendRegistry.create())
    ```
"""

from .allowlist_service import AllowlistValidator, extract_hostname
from .passthrough_service import PassthroughFetcher
from .search_service import SearchAggregator

__all__ = [
    "AllowlistValidator",
    "PassthroughFetcher",
    "SearchAggregator",
    "extract_hostname",
]
