"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - create_app() puts settings (and an optional test transport) in app.state
    - Services are built in the lifespan and stored in app.state
    - Dependency functions retrieve them from request.app.state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from edge_gateway.config import Settings, configure_logging, settings
from edge_gateway.errors import UnexpectedError
from edge_gateway.handlers import GatewayHandler
from edge_gateway.registry import BackendRegistry
from edge_gateway.services import AllowlistValidator, PassthroughFetcher, SearchAggregator

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> GatewayHandler:
    """Dependency injection for GatewayHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GatewayHandler instance from app.state

    Raises:
        UnexpectedError: If handler is not initialized
    """
    handler = getattr(request.app.state, "gateway_handler", None)
    if handler is None:
        raise UnexpectedError("GatewayHandler not initialized. Check lifespan setup.")
    return handler


def build_http_client(
    config: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared outbound client.

    Per-call timeouts and headers are set by the services.
    """
    return httpx.AsyncClient(
        transport=transport,
        timeout=config.proxy_timeout,
        follow_redirects=False,
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Shared httpx.AsyncClient
    2. Allowlist and backend registry (immutable configuration)
    3. Services and the handler - stored in app.state.gateway_handler

    Cleanup:
        Closes the HTTP client and removes everything from app.state
    """
    config: Settings = getattr(app.state, "settings", None) or settings
    transport = getattr(app.state, "transport", None)
    configure_logging(config.log_level)

    client = build_http_client(config, transport=transport)
    validator = AllowlistValidator.create(config)
    registry = BackendRegistry.create(config)

    fetcher = PassthroughFetcher(
        client=client,
        validator=validator,
        user_agent=config.user_agent,
        cache_ttl=config.proxy_cache_ttl,
        timeout=config.proxy_timeout,
    )
    aggregator = SearchAggregator(
        client=client,
        registry=registry,
        attempt_timeout=config.search_attempt_timeout,
        result_limit=config.search_result_limit,
        cache_ttl=config.search_cache_ttl,
        user_agent=config.user_agent,
    )

    app.state.http_client = client
    app.state.gateway_handler = GatewayHandler(
        fetcher=fetcher,
        aggregator=aggregator,
        validator=validator,
        embed_base_url=config.embed_base_url,
    )

    logger.info("Gateway initialized")
    logger.info("Allowlist entries: %d", len(validator.entries))
    for family in registry:
        logger.info("Backend family %s: %s", family.name, ", ".join(family.instances))

    yield

    await client.aclose()
    del app.state.gateway_handler
    del app.state.http_client
    logger.info("Gateway shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[GatewayHandler, Depends(get_handler)]
