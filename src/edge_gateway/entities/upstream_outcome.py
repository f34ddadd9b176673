"""Per-request outcome entities."""

from dataclasses import dataclass, field

from .search_result import SearchResultItem


@dataclass(frozen=True)
class UpstreamOutcome:
    """The upstream response of a single passthrough fetch."""

    status: int
    content_type: str
    body: bytes


@dataclass(frozen=True)
class AttemptSuccess:
    """A backend instance answered with usable results."""

    items: list[SearchResultItem] = field(default_factory=list)


@dataclass(frozen=True)
class AttemptSkip:
    """A backend instance could not answer; the aggregator moves on."""

    reason: str


AttemptOutcome = AttemptSuccess | AttemptSkip
