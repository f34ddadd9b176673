"""Protocol interfaces for swappable implementations.

Usage:
    ```python
    from edge_gateway.protocols import PayloadNormalizer

    normalizer: PayloadNormalizer = InvidiousNormalizer()
    normalizer: PayloadNormalizer = PipedNormalizer()
    ```
"""

from .payload_normalizer import PayloadNormalizer, PayloadShapeError

__all__ = [
    "PayloadNormalizer",
    "PayloadShapeError",
]
