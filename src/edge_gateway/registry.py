"""Backend instance registry.

Ordered, immutable configuration of the search mirror families. It is
built once at startup and injected into the SearchAggregator, so tests can
substitute fake instances.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from edge_gateway.config import Settings, settings
from edge_gateway.entities import BackendFamily, ResponseShape


@dataclass(frozen=True)
class BackendRegistry:
    """Ordered backend families: primary first, fallbacks after.

    Example:
        ```python
        registry = BackendRegistry.create()

        # Or explicit families (tests)
        registry = BackendRegistry(
            families=(
                BackendFamily("invidious", ("http://a", "http://b"), ResponseShape.VIDEO_ARRAY),
            )
        )
        ```
    """

    families: tuple[BackendFamily, ...]

    @classmethod
    def create(cls, config: Settings | None = None) -> "BackendRegistry":
        """Build the registry from settings.

        Invidious mirrors are the primary family, Piped mirrors the fallback.
        Families without instances are left out.

        Args:
            config: Settings to read instance lists from. Defaults to global settings.

        Returns:
            Configured BackendRegistry
        """
        config = config or settings
        families = (
            BackendFamily(
                name="invidious",
                instances=tuple(config.invidious_instances),
                shape=ResponseShape.VIDEO_ARRAY,
            ),
            BackendFamily(
                name="piped",
                instances=tuple(config.piped_instances),
                shape=ResponseShape.ITEMS_OBJECT,
            ),
        )
        return cls(families=tuple(f for f in families if f.instances))

    def __iter__(self) -> Iterator[BackendFamily]:
        return iter(self.families)

    def __len__(self) -> int:
        return len(self.families)

    @property
    def instance_count(self) -> int:
        return sum(len(f.instances) for f in self.families)
