"""Handler layer for HTTP endpoints.

Handlers depend on services, and end every request in the envelope
mapper.

Architecture:
    Handler -> Service -> Upstream
    (HTTP)  -> (Policy) -> (Network)
"""

from .envelope import error_response, passthrough_response, search_response, status_for
from .gateway_handler import GatewayHandler

__all__ = [
    "GatewayHandler",
    "error_response",
    "passthrough_response",
    "search_response",
    "status_for",
]
