"""Gateway error taxonomy.

Services raise these exceptions; the envelope mapper turns them into
``{"error": message}`` responses with the status code of their kind.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a request-level failure."""

    MISSING_PARAMETER = "missing_parameter"
    FORBIDDEN_HOST = "forbidden_host"
    INVALID_TARGET = "invalid_target"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    UNEXPECTED = "unexpected"


class GatewayError(Exception):
    """Base class for failures that end a request.

    Attributes:
        kind: The error category, used to pick the HTTP status code
        message: Human-readable message returned to the caller
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameterError(GatewayError):
    kind = ErrorKind.MISSING_PARAMETER


class ForbiddenHostError(GatewayError):
    """Raised when a passthrough target is outside the allowlist."""

    kind = ErrorKind.FORBIDDEN_HOST

    def __init__(self, hostname: str) -> None:
        super().__init__(f"Domain not allowed: {hostname}")
        self.hostname = hostname


class InvalidTargetError(GatewayError):
    kind = ErrorKind.INVALID_TARGET


class UpstreamUnreachableError(GatewayError):
    kind = ErrorKind.UPSTREAM_UNREACHABLE


class UnexpectedError(GatewayError):
    kind = ErrorKind.UNEXPECTED
