"""Filter selection for catalogue queries."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import ProductType, ReleaseChannel


@dataclass(frozen=True, slots=True)
class ReleaseFilters:
    """Channel and product restrictions applied to a release list.

    An empty set means "no restriction" on that dimension, never
    "reject everything".

    Attributes:
        channels: Accepted release channels.
        products: Accepted product types.

    See Also:
        [apply_filters()][tollgate_releases.services.common.selection.apply_filters]:
            The predicate that consumes this selection.
        [FiltersConfig][tollgate_releases.services.common.configs.FiltersConfig]:
            YAML-facing model that produces it.
    """

    channels: frozenset[ReleaseChannel] = field(default_factory=frozenset)
    products: frozenset[ProductType] = field(default_factory=frozenset)

    @classmethod
    def default(cls) -> ReleaseFilters:
        """Stable releases of every product."""
        return cls(
            channels=frozenset({ReleaseChannel.STABLE}),
            products=frozenset(ProductType),
        )
