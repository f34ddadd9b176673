"""Edge Gateway - allowlisted passthrough and federated video search.

This package shields a client from talking directly to third-party hosts:

    - /proxy forwards one request to an allowlisted host and returns the
      upstream response with caching headers attached.
    - /yt/search tries ordered mirror families (Invidious, then Piped) until
      one answers, and normalizes the payload into one canonical item shape.

Layers:
    - protocols: Interface contracts (PayloadNormalizer)
    - normalizers: Per-family payload adapters
    - services: Allowlist, passthrough and search policy
    - handlers: HTTP endpoint handlers and the response envelope
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from edge_gateway.api.app import create_app

    app = create_app()
    ```
"""

from edge_gateway.config import Settings, settings
from edge_gateway.entities import AllowlistEntry, BackendFamily, MatchMode, ResponseShape, SearchResultItem
from edge_gateway.errors import ErrorKind, GatewayError
from edge_gateway.handlers import GatewayHandler
from edge_gateway.protocols import PayloadNormalizer
from edge_gateway.registry import BackendRegistry
from edge_gateway.services import AllowlistValidator, PassthroughFetcher, SearchAggregator

__all__ = [
    # Configuration
    "Settings",
    "settings",
    "BackendRegistry",
    # Protocols (interfaces)
    "PayloadNormalizer",
    # Services (policy)
    "AllowlistValidator",
    "PassthroughFetcher",
    "SearchAggregator",
    # Handlers (HTTP)
    "GatewayHandler",
    # Entities (domain models)
    "AllowlistEntry",
    "MatchMode",
    "BackendFamily",
    "ResponseShape",
    "SearchResultItem",
    # Errors
    "ErrorKind",
    "GatewayError",
]
