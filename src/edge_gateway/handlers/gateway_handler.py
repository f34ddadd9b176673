"""HTTP handlers for gateway operations.

Handlers validate request parameters, delegate to the services and map
the outcome through the envelope. Anything a service did not classify is
wrapped into UnexpectedError.
"""

import re

from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from edge_gateway.config import settings
from edge_gateway.dto import HealthCheckResponse
from edge_gateway.errors import GatewayError, InvalidTargetError, MissingParameterError, UnexpectedError
from edge_gateway.services import AllowlistValidator, PassthroughFetcher, SearchAggregator
from edge_gateway.services.search_service import CancelCheck

from .envelope import passthrough_response, search_response

VIDEO_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{11}$")

EMBED_PAGE = """<!DOCTYPE html>
<html><head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<style>
  *{{margin:0;padding:0}}
  html,body{{width:100%;height:100%;background:#000;overflow:hidden}}
  iframe{{width:100%;height:100%;border:none}}
</style>
</head><body>
<iframe src="{embed_base_url}/embed/{video_id}?autoplay=1"
        allowfullscreen allow="autoplay; encrypted-media"></iframe>
</body></html>"""

INDEX_TEXT = """Edge Gateway

Endpoints:
  /proxy?url=<url>
  /yt/search?q=<query>
  /yt/embed/<videoId>
  /health"""


class GatewayHandler:
    """HTTP handlers for passthrough, search and embed requests.

    Example:
        ```python
        handler = GatewayHandler(fetcher=fetcher, aggregator=aggregator, validator=validator)

        @app.get("/proxy")
        async def proxy(url: str | None = None):
            return await handler.proxy(url)
        ```
    """

    def __init__(
        self,
        fetcher: PassthroughFetcher,
        aggregator: SearchAggregator,
        validator: AllowlistValidator,
        embed_base_url: str | None = None,
    ) -> None:
        """Initialize the gateway handler.

        Args:
            fetcher: Passthrough fetcher (required).
            aggregator: Federated search aggregator (required).
            validator: Allowlist, reported by the health endpoint (required).
            embed_base_url: Host serving the embed iframe. Defaults to settings.
        """
        self._fetcher = fetcher
        self._aggregator = aggregator
        self._validator = validator
        self._embed_base_url = (embed_base_url or settings.embed_base_url).rstrip("/")

    async def proxy(self, url: str | None) -> Response:
        """Handle GET /proxy requests.

        Raises:
            GatewayError: Validation or upstream failure
        """
        try:
            outcome = await self._fetcher.fetch(url)
        except GatewayError:
            raise
        except Exception as e:
            raise UnexpectedError(f"Failed to fetch upstream: {e}") from e

        return passthrough_response(outcome, self._fetcher.cache_ttl)

    async def search(self, query: str | None, is_cancelled: CancelCheck | None = None) -> JSONResponse:
        """Handle GET /yt/search requests.

        An empty result list is a normal 200 response.

        Raises:
            MissingParameterError: No query given
        """
        if not query:
            raise MissingParameterError("Missing q parameter")

        try:
            items = await self._aggregator.search(query, is_cancelled=is_cancelled)
        except Exception as e:
            raise UnexpectedError(f"Search failed: {e}") from e

        return search_response(items)

    def embed(self, video_id: str) -> HTMLResponse:
        """Handle GET /yt/embed/{video_id} requests."""
        if not VIDEO_ID_PATTERN.match(video_id):
            raise InvalidTargetError("Invalid video ID")

        return HTMLResponse(
            EMBED_PAGE.format(embed_base_url=self._embed_base_url, video_id=video_id)
        )

    def index(self) -> PlainTextResponse:
        return PlainTextResponse(INDEX_TEXT)

    def health_check(self) -> HealthCheckResponse:
        registry = self._aggregator.registry
        return HealthCheckResponse(
            status="healthy",
            allowlist_entries=len(self._validator.entries),
            backend_families=len(registry),
            backend_instances=registry.instance_count,
        )
