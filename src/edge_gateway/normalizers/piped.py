"""Piped search normalizer (object with an ``items`` array)."""

from typing import Any
from urllib.parse import quote

from edge_gateway.entities import SearchResultItem
from edge_gateway.protocols import PayloadShapeError

from .fields import as_number, as_text

WATCH_PATH_PREFIX = "/watch?v="


class PipedNormalizer:
    """Piped implementation of the PayloadNormalizer protocol.

    Payload example:
        ```json
        {"items": [{"url": "/watch?v=dQw4w9WgXcQ", "title": "...",
                    "uploaderName": "...", "thumbnail": "...",
                    "duration": 212, "views": 1500000000}]}
        ```
    """

    search_path = "/search"

    def build_search_url(self, base_url: str, query: str) -> str:
        return f"{base_url.rstrip('/')}{self.search_path}?q={quote(query, safe='')}&filter=videos"

    def normalize(self, payload: Any, limit: int) -> list[SearchResultItem]:
        if not isinstance(payload, dict):
            raise PayloadShapeError(f"expected a JSON object, got {type(payload).__name__}")

        entries = payload.get("items")
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise PayloadShapeError("'items' is not an array")

        items: list[SearchResultItem] = []
        for entry in entries:
            if len(items) >= limit:
                break
            if not isinstance(entry, dict):
                continue

            url = as_text(entry.get("url"))
            # Channels and playlists use other url paths
            if not url.startswith(WATCH_PATH_PREFIX):
                continue
            video_id = url.removeprefix(WATCH_PATH_PREFIX)
            if not video_id:
                continue

            items.append(
                SearchResultItem(
                    video_id=video_id,
                    title=as_text(entry.get("title")),
                    author=as_text(entry.get("uploaderName")),
                    thumbnail_url=as_text(entry.get("thumbnail")),
                    duration_seconds=as_number(entry.get("duration")),
                    view_count=as_number(entry.get("views")),
                )
            )
        return items
