from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from edge_gateway.api.dependencies import HandlerDep, lifespan
from edge_gateway.config import Settings, settings
from edge_gateway.dto import ErrorResponse, HealthCheckResponse, SearchResultItemResponse
from edge_gateway.errors import GatewayError
from edge_gateway.handlers import error_response

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def create_app(
    config: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        config: Settings to use. Defaults to global settings.
        transport: Optional httpx transport for the outbound client (tests).

    Returns:
        Configured FastAPI application
    """
    config = config or settings

    app = FastAPI(
        title="Edge Gateway",
        description="Allowlisted passthrough and federated video search",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=list(config.cors_allow_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        return error_response(exc)

    @app.get("/", response_class=PlainTextResponse)
    async def root(handler: HandlerDep) -> PlainTextResponse:
        """Plain-text listing of the endpoints."""
        return handler.index()

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return handler.health_check()

    @app.get("/proxy", responses=ERROR_RESPONSES)
    async def proxy(handler: HandlerDep, url: str | None = None) -> Response:
        """
        Fetch an allowlisted URL and return the upstream response.

        Args:
            url: Absolute http(s) URL to fetch.

        Returns:
            Upstream body and status with Content-Type and Cache-Control headers.
        """
        return await handler.proxy(url)

    @app.get("/search", response_model=list[SearchResultItemResponse], responses=ERROR_RESPONSES)
    @app.get("/yt/search", response_model=list[SearchResultItemResponse], responses=ERROR_RESPONSES)
    async def search(request: Request, handler: HandlerDep, q: str | None = None) -> JSONResponse:
        """
        Search the video backends, primary mirrors first.

        Args:
            q: Search query.

        Returns:
            JSON array of results; empty when no backend answered.
        """
        return await handler.search(q, is_cancelled=request.is_disconnected)

    @app.get("/yt/embed/{video_id}", response_class=HTMLResponse, responses=ERROR_RESPONSES)
    async def embed(video_id: str, handler: HandlerDep) -> HTMLResponse:
        """Embed page for a single video."""
        return handler.embed(video_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "edge_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
