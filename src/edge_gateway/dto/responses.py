"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from edge_gateway.entities import SearchResultItem


class SearchResultItemResponse(BaseModel):
    """Single search result, serialized with camelCase keys."""

    video_id: str = Field(..., alias="videoId", description="The video identifier")
    title: str = Field(..., description="Video title")
    author: str = Field(..., description="Channel or uploader name")
    thumbnail_url: str = Field(
        "",
        alias="thumbnailUrl",
        description="Preferred thumbnail URL, empty when unknown",
    )
    duration_seconds: int | float | None = Field(
        None,
        alias="durationSeconds",
        description="Length in seconds (null when the backend did not report it)",
    )
    view_count: int | float | None = Field(
        None,
        alias="viewCount",
        description="Number of views (null when the backend did not report it)",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_entity(cls, item: SearchResultItem) -> "SearchResultItemResponse":
        return cls(
            video_id=item.video_id,
            title=item.title,
            author=item.author,
            thumbnail_url=item.thumbnail_url,
            duration_seconds=item.duration_seconds,
            view_count=item.view_count,
        )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy'")
    allowlist_entries: int = Field(..., description="Number of allowlisted hosts", ge=0)
    backend_families: int = Field(..., description="Number of search backend families", ge=0)
    backend_instances: int = Field(..., description="Total number of search instances", ge=0)
