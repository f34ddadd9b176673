"""Per-family payload normalizers.

Each module implements the PayloadNormalizer protocol for one
ResponseShape. ``get_normalizer`` resolves the implementation for a
family's shape.
"""

from edge_gateway.entities import ResponseShape
from edge_gateway.protocols import PayloadNormalizer

from .invidious import InvidiousNormalizer
from .piped import PipedNormalizer

NORMALIZERS: dict[ResponseShape, PayloadNormalizer] = {
    ResponseShape.VIDEO_ARRAY: InvidiousNormalizer(),
    ResponseShape.ITEMS_OBJECT: PipedNormalizer(),
}


def get_normalizer(shape: ResponseShape) -> PayloadNormalizer:
    """Return the normalizer registered for a response shape.

    Raises:
        KeyError: If no normalizer handles the shape
    """
    return NORMALIZERS[shape]


__all__ = [
    "NORMALIZERS",
    "InvidiousNormalizer",
    "PipedNormalizer",
    "get_normalizer",
]
