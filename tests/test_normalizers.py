"""
Tests for the per-family payload normalizers.
"""

import pytest

from conftest import invidious_video, piped_video
from edge_gateway.entities import ResponseShape, SearchResultItem
from edge_gateway.normalizers import InvidiousNormalizer, PipedNormalizer, get_normalizer
from edge_gateway.protocols import PayloadNormalizer, PayloadShapeError


def test_registered_normalizers_satisfy_protocol():
    for shape in ResponseShape:
        assert isinstance(get_normalizer(shape), PayloadNormalizer)


def test_invidious_search_url_percent_encodes_query():
    url = InvidiousNormalizer().build_search_url("https://inv.test/", "lofi hip hop&more/ü")
    assert url == "https://inv.test/api/v1/search?q=lofi%20hip%20hop%26more%2F%C3%BC&type=video"


def test_piped_search_url_percent_encodes_query():
    url = PipedNormalizer().build_search_url("https://piped.test", "a b")
    assert url == "https://piped.test/search?q=a%20b&filter=videos"


def test_invidious_keeps_only_videos():
    """Channels and playlists in the array are dropped."""
    payload = [
        {"type": "channel", "author": "Someone"},
        invidious_video(1),
        {"type": "playlist", "title": "Mix"},
        invidious_video(2),
    ]

    items = InvidiousNormalizer().normalize(payload, limit=15)

    assert [item.video_id for item in items] == ["vid00000001", "vid00000002"]


def test_invidious_field_mapping():
    item = InvidiousNormalizer().normalize([invidious_video(3)], limit=15)[0]

    assert item == SearchResultItem(
        video_id="vid00000003",
        title="Video 3",
        author="Channel 3",
        thumbnail_url="https://i.ytimg.com/vi/3/4.jpg",
        duration_seconds=63,
        view_count=3000,
    )


@pytest.mark.parametrize(
    ("thumbnails", "expected"),
    [
        ([{"url": "first"}, {"url": "2"}, {"url": "3"}, {"url": "4"}, {"url": "fifth"}], "fifth"),
        ([{"url": "first"}, {"url": "second"}], "first"),
        ([{"url": "first"}, {}, {}, {}, {"quality": "no url"}], "first"),
        ([], ""),
        (None, ""),
    ],
)
def test_invidious_thumbnail_choice(thumbnails, expected):
    """Fifth thumbnail preferred, then the first, then empty string."""
    entry = invidious_video(1, videoThumbnails=thumbnails)
    assert InvidiousNormalizer().normalize([entry], limit=15)[0].thumbnail_url == expected


def test_invidious_missing_numbers_become_none():
    entry = invidious_video(1)
    del entry["lengthSeconds"]
    entry["viewCount"] = "lots"

    item = InvidiousNormalizer().normalize([entry], limit=15)[0]

    assert item.duration_seconds is None
    assert item.view_count is None


def test_invidious_skips_entries_without_video_id():
    items = InvidiousNormalizer().normalize([invidious_video(1, videoId="")], limit=15)
    assert items == []


def test_invidious_rejects_object_payload():
    with pytest.raises(PayloadShapeError):
        InvidiousNormalizer().normalize({"error": "rate limited"}, limit=15)


def test_piped_field_mapping():
    item = PipedNormalizer().normalize({"items": [piped_video(4)]}, limit=15)[0]

    assert item == SearchResultItem(
        video_id="pip00000004",
        title="Piped 4",
        author="Uploader 4",
        thumbnail_url="https://pipedproxy.test/4.jpg",
        duration_seconds=34,
        view_count=40,
    )


def test_piped_missing_thumbnail_is_empty_string():
    entry = piped_video(1)
    del entry["thumbnail"]
    assert PipedNormalizer().normalize({"items": [entry]}, limit=15)[0].thumbnail_url == ""


def test_piped_skips_non_video_urls():
    """Channel entries carry no watch url and are not usable results."""
    payload = {"items": [{"url": "/channel/UC123", "name": "Chan"}, piped_video(1)]}
    items = PipedNormalizer().normalize(payload, limit=15)
    assert [item.video_id for item in items] == ["pip00000001"]


def test_piped_missing_items_is_empty():
    assert PipedNormalizer().normalize({}, limit=15) == []


@pytest.mark.parametrize("payload", [[piped_video(1)], {"items": "nope"}, "text"])
def test_piped_rejects_wrong_shape(payload):
    with pytest.raises(PayloadShapeError):
        PipedNormalizer().normalize(payload, limit=15)


@pytest.mark.parametrize(
    ("normalizer", "payload"),
    [
        (InvidiousNormalizer(), [invidious_video(i) for i in range(40)]),
        (PipedNormalizer(), {"items": [piped_video(i) for i in range(40)]}),
    ],
)
def test_results_are_capped(normalizer, payload):
    items = normalizer.normalize(payload, limit=15)
    assert len(items) == 15


CANONICAL = [
    SearchResultItem("abcdefghijk", "First", "Author A", "https://t.test/1.jpg", 212, 1500),
    SearchResultItem("bcdefghijkl", "Second", "Author B", "", None, None),
]


def test_invidious_mapping_round_trips_canonical_fields():
    """Canonical items written as Invidious entries map back unchanged."""
    payload = [
        {
            "type": "video",
            "videoId": item.video_id,
            "title": item.title,
            "author": item.author,
            "videoThumbnails": [{"url": item.thumbnail_url}] if item.thumbnail_url else [],
            "lengthSeconds": item.duration_seconds,
            "viewCount": item.view_count,
        }
        for item in CANONICAL
    ]
    assert InvidiousNormalizer().normalize(payload, limit=15) == CANONICAL


def test_piped_mapping_round_trips_canonical_fields():
    """Canonical items written as Piped entries map back unchanged."""
    payload = {
        "items": [
            {
                "url": f"/watch?v={item.video_id}",
                "title": item.title,
                "uploaderName": item.author,
                "thumbnail": item.thumbnail_url,
                "duration": item.duration_seconds,
                "views": item.view_count,
            }
            for item in CANONICAL
        ]
    }
    assert PipedNormalizer().normalize(payload, limit=15) == CANONICAL
