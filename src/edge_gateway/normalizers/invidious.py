"""Invidious search normalizer (top-level array of typed entries)."""

from typing import Any
from urllib.parse import quote

from edge_gateway.entities import SearchResultItem
from edge_gateway.protocols import PayloadShapeError

from .fields import as_number, as_text

# Index of the preferred thumbnail resolution in ``videoThumbnails``
PREFERRED_THUMBNAIL_INDEX = 4


class InvidiousNormalizer:
    """Invidious implementation of the PayloadNormalizer protocol.

    Payload example:
        ```json
        [
          {"type": "video", "videoId": "dQw4w9WgXcQ", "title": "...",
           "author": "...", "videoThumbnails": [{"url": "..."}],
           "lengthSeconds": 212, "viewCount": 1500000000},
          {"type": "channel", "author": "..."}
        ]
        ```
    """

    search_path = "/api/v1/search"

    def build_search_url(self, base_url: str, query: str) -> str:
        return f"{base_url.rstrip('/')}{self.search_path}?q={quote(query, safe='')}&type=video"

    def normalize(self, payload: Any, limit: int) -> list[SearchResultItem]:
        if not isinstance(payload, list):
            raise PayloadShapeError(f"expected a JSON array, got {type(payload).__name__}")

        items: list[SearchResultItem] = []
        for entry in payload:
            if len(items) >= limit:
                break
            if not isinstance(entry, dict) or entry.get("type") != "video":
                continue

            video_id = as_text(entry.get("videoId"))
            if not video_id:
                continue

            items.append(
                SearchResultItem(
                    video_id=video_id,
                    title=as_text(entry.get("title")),
                    author=as_text(entry.get("author")),
                    thumbnail_url=self._pick_thumbnail(entry.get("videoThumbnails")),
                    duration_seconds=as_number(entry.get("lengthSeconds")),
                    view_count=as_number(entry.get("viewCount")),
                )
            )
        return items

    @staticmethod
    def _pick_thumbnail(thumbnails: Any) -> str:
        """Pick the preferred thumbnail, falling back to the first one."""
        if not isinstance(thumbnails, list) or not thumbnails:
            return ""

        candidates = []
        if len(thumbnails) > PREFERRED_THUMBNAIL_INDEX:
            candidates.append(thumbnails[PREFERRED_THUMBNAIL_INDEX])
        candidates.append(thumbnails[0])

        for candidate in candidates:
            if isinstance(candidate, dict):
                url = as_text(candidate.get("url"))
                if url:
                    return url
        return ""
