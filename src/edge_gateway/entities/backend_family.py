"""Backend family domain entity."""

from dataclasses import dataclass
from enum import Enum


class ResponseShape(str, Enum):
    """Payload schema shared by every instance of a backend family."""

    # Top-level array of typed entries (Invidious API)
    VIDEO_ARRAY = "video_array"
    # Object with an ``items`` array (Piped API)
    ITEMS_OBJECT = "items_object"


@dataclass(frozen=True)
class BackendFamily:
    """A group of interchangeable search mirrors sharing one response shape.

    Attributes:
        name: Family identifier used in logs (e.g. "invidious")
        instances: Base URLs, tried in this order
        shape: The payload schema the instances answer with
    """

    name: str
    instances: tuple[str, ...]
    shape: ResponseShape
