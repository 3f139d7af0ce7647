"""Pure frozen dataclasses with zero I/O for release events and their projections.

The models layer is the foundation of the diamond DAG. It has **no dependencies**
on any other package of this project. Every model uses
``@dataclass(frozen=True, slots=True)`` for immutability; all validation
happens in ``__post_init__`` so invalid envelopes never escape the constructor,
while malformed tag arrays are normalised instead of rejected.

Attributes:
    RawEvent: Immutable NIP-01 event record with normalised tag rows.
    ReleaseView: Typed projection of a release event (version, channel,
        architecture, device, hash, product type, ...).
    VariantGroup: Architecture with its compression variants.
    CompressionVariant: One release of a given compression encoding.
    ReleaseCounts: Aggregate counts excluding ``dev`` releases.
    ReleaseFilters: Channel/product selection where empty means unrestricted.
    ReleaseChannel, ProductType, ProductCategory, EventKind, Tag: Enumerations.

See Also:
    [tollgate_releases.models.event][]: Raw event record.
    [tollgate_releases.models.release][]: Derived release records.
    [tollgate_releases.models.filters][]: Filter selection.
    [tollgate_releases.models.constants][]: Shared constants and enumerations.
"""

from .constants import (
    EventKind,
    ProductCategory,
    ProductType,
    ReleaseChannel,
    Tag,
)
from .event import RawEvent
from .filters import ReleaseFilters
from .release import (
    CompressionVariant,
    ReleaseCounts,
    ReleaseView,
    VariantGroup,
    format_release_date,
    format_release_datetime,
    product_display_name,
)


__all__ = [
    "CompressionVariant",
    "EventKind",
    "ProductCategory",
    "ProductType",
    "RawEvent",
    "ReleaseChannel",
    "ReleaseCounts",
    "ReleaseFilters",
    "ReleaseView",
    "Tag",
    "VariantGroup",
    "format_release_date",
    "format_release_datetime",
    "product_display_name",
]
