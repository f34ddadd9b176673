"""Canonical search result domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResultItem:
    """One video in the canonical shape every backend family is mapped into.

    Attributes:
        video_id: The video identifier
        title: Video title
        author: Channel or uploader name
        thumbnail_url: Preferred thumbnail, empty string when none is known
        duration_seconds: Length in seconds, if the backend reported it
        view_count: Number of views, if the backend reported it
    """

    video_id: str
    title: str
    author: str
    thumbnail_url: str = ""
    duration_seconds: int | float | None = None
    view_count: int | float | None = None
