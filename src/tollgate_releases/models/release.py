"""
Derived release records.

Everything in this module is a pure projection of one or more
[RawEvent][tollgate_releases.models.event.RawEvent] objects. Nothing here
is ever stored in the catalogue; views and groups are recomputed on
demand by [get_release_view()][tollgate_releases.nips.nip94.view.get_release_view]
and the variant resolver.

See Also:
    [tollgate_releases.nips.nip94.view][]: Builds
        [ReleaseView][tollgate_releases.models.release.ReleaseView] objects.
    [tollgate_releases.services.common.variants][]: Builds
        [VariantGroup][tollgate_releases.models.release.VariantGroup] objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .constants import (
    DEFAULT_PRODUCT_DISPLAY_NAME,
    PRERELEASE_CHANNELS,
    PRODUCT_CATEGORY_MAP,
    PRODUCT_DISPLAY_NAMES,
    UNKNOWN,
    ProductCategory,
    ProductType,
    ReleaseChannel,
)


if TYPE_CHECKING:
    from .event import RawEvent


def format_release_date(timestamp: int | None) -> str:
    """Format a unix timestamp as a date, e.g. ``Jan 5, 2024`` (UTC).

    Returns ``"Unknown"`` for a missing or zero timestamp.
    """
    if not timestamp:
        return UNKNOWN
    dt = datetime.fromtimestamp(timestamp, tz=UTC)
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_release_datetime(timestamp: int | None) -> str:
    """Format a unix timestamp as date and time, e.g. ``Jan 5, 2024, 03:04 PM`` (UTC).

    Returns ``"Unknown"`` for a missing or zero timestamp.
    """
    if not timestamp:
        return UNKNOWN
    dt = datetime.fromtimestamp(timestamp, tz=UTC)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def product_display_name(product_type: str) -> str:
    """Return the human-readable name of a product type."""
    try:
        return PRODUCT_DISPLAY_NAMES[ProductType(product_type)]
    except ValueError:
        return DEFAULT_PRODUCT_DISPLAY_NAME


@dataclass(frozen=True, slots=True)
class ReleaseView:
    """Read-only typed projection of a release event.

    Every field is total: absent or malformed tags resolve to the documented
    default rather than raising.

    Attributes:
        event_id: Id of the underlying event.
        version: ``version`` tag, else deprecated ``tollgate_os_version``,
            else the first 8 characters of the event id, else ``"Unknown"``.
        released_at: ``created_at`` of the event, ``None`` if unset.
        channel: ``release_channel`` tag, ``dev`` when absent.
        architecture: ``architecture`` tag or ``"Unknown"``.
        compression: ``compression`` tag or ``"none"``.
        device_id: ``device_id`` tag or ``"Unknown"``.
        supported_devices: ``supported_devices`` tag or ``"Unknown"``.
        openwrt_version: ``openwrt_version`` tag or ``"Unknown"``.
        download_url: ``url`` tag or ``None``.
        file_hash: ``x`` tag, else ``ox`` tag, else ``None``.
        mime_type: ``m`` tag or ``application/octet-stream``.
        product_type: Result of the classifier.
        content: Release notes (event content).
    """

    event_id: str
    version: str
    released_at: int | None
    channel: ReleaseChannel
    architecture: str
    compression: str
    device_id: str
    supported_devices: str
    openwrt_version: str
    download_url: str | None
    file_hash: str | None
    mime_type: str
    product_type: ProductType
    content: str = ""

    @property
    def is_dev(self) -> bool:
        """Whether this is a development build."""
        return self.channel == ReleaseChannel.DEV

    @property
    def is_prerelease(self) -> bool:
        """Whether this is a beta, alpha or dev build."""
        return self.channel in PRERELEASE_CHANNELS

    @property
    def category(self) -> ProductCategory:
        return PRODUCT_CATEGORY_MAP[self.product_type]

    @property
    def product_display_name(self) -> str:
        return product_display_name(self.product_type)

    @property
    def released_date(self) -> str:
        return format_release_date(self.released_at)

    @property
    def released_datetime(self) -> str:
        return format_release_datetime(self.released_at)


@dataclass(frozen=True, slots=True)
class CompressionVariant:
    """One build of an architecture in a given compression encoding."""

    compression: str
    release: RawEvent


@dataclass(frozen=True, slots=True)
class VariantGroup:
    """All compression variants of one architecture.

    Attributes:
        architecture: Architecture shared by every variant in the group.
        compression_variants: One release per distinct compression, ordered
            with ``"none"`` first and the rest lexicographically.
    """

    architecture: str
    compression_variants: tuple[CompressionVariant, ...]

    @property
    def compressions(self) -> tuple[str, ...]:
        return tuple(variant.compression for variant in self.compression_variants)

    def variant_for(self, compression: str) -> RawEvent | None:
        """Return the release built with *compression*, or ``None``."""
        for variant in self.compression_variants:
            if variant.compression == compression:
                return variant.release
        return None


@dataclass(frozen=True, slots=True)
class ReleaseCounts:
    """Aggregate release counts.

    ``dev`` releases are excluded from every count, including ``total``.
    """

    total: int = 0
    stable: int = 0
    prerelease: int = 0

    @property
    def text(self) -> str:
        """Short summary, e.g. ``"12 releases"`` or ``"12 releases, 3 pre"``."""
        if self.total == 0:
            return "0 releases"
        if self.prerelease == 0:
            return f"{self.total} releases"
        return f"{self.total} releases, {self.prerelease} pre"
