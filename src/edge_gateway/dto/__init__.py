"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract. Internal logic
uses entities from the entities package.
"""

from .responses import ErrorResponse, HealthCheckResponse, SearchResultItemResponse

__all__ = [
    "SearchResultItemResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
