"""Response envelope mapping.

Turns service outcomes into transport responses. Both fetch paths and
every error path end here, so status codes and headers stay consistent.
"""

from collections.abc import Iterable

from fastapi import status
from fastapi.responses import JSONResponse, Response

from edge_gateway.dto import ErrorResponse, SearchResultItemResponse
from edge_gateway.entities import SearchResultItem, UpstreamOutcome
from edge_gateway.errors import ErrorKind, GatewayError

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.MISSING_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FORBIDDEN_HOST: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_TARGET: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UPSTREAM_UNREACHABLE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(error: GatewayError) -> JSONResponse:
    """Map a gateway error to ``{"error": message}`` with its status code."""
    return JSONResponse(
        status_code=status_for(error.kind),
        content=ErrorResponse(error=error.message).model_dump(),
    )


def search_response(items: Iterable[SearchResultItem]) -> JSONResponse:
    """Map search results to a 200 JSON array (possibly empty)."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[
            SearchResultItemResponse.from_entity(item).model_dump(by_alias=True)
            for item in items
        ],
    )


def passthrough_response(outcome: UpstreamOutcome, cache_ttl: int) -> Response:
    """Map an upstream response to the client response, body untouched."""
    # Passed as a raw header so the upstream value is echoed without a charset suffix
    return Response(
        content=outcome.body,
        status_code=outcome.status,
        headers={
            "Content-Type": outcome.content_type,
            "Cache-Control": f"public, max-age={cache_ttl}",
        },
    )
