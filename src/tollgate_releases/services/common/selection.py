"""
Filter and selection functions over catalogue snapshots.

Every function here is pure: it takes a list of
[RawEvent][tollgate_releases.models.event.RawEvent] records (usually a
[ReleaseCatalogue][tollgate_releases.core.catalogue.ReleaseCatalogue]
snapshot) and returns a new list or aggregate. Channel and product values
are always taken from the typed accessors, so events from every schema
generation are handled the same way.

See Also:
    [ReleaseFilters][tollgate_releases.models.filters.ReleaseFilters]:
        Selection consumed by [apply_filters()][tollgate_releases.services.common.selection.apply_filters].
    [tollgate_releases.services.common.variants][]: Alternative builds and
        architecture grouping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol

from tollgate_releases.models.constants import (
    PRERELEASE_CHANNELS,
    PRODUCT_CATEGORY_MAP,
    UNKNOWN,
    ProductCategory,
    ProductType,
    ReleaseChannel,
)
from tollgate_releases.models.release import ReleaseCounts
from tollgate_releases.nips.nip94 import classify, get_channel


if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from tollgate_releases.models.event import RawEvent


class FilterSelection(Protocol):
    """Anything exposing ``channels`` and ``products`` collections."""

    @property
    def channels(self) -> Collection[str]: ...

    @property
    def products(self) -> Collection[str]: ...


def apply_filters(events: Iterable[RawEvent], filters: FilterSelection) -> list[RawEvent]:
    """Return the events matching both the channel and the product selection.

    An empty selection on a dimension means no restriction on it. Input
    order is preserved.

    Args:
        events: Events to filter.
        filters: A [ReleaseFilters][tollgate_releases.models.filters.ReleaseFilters]
            or any object with ``channels`` and ``products``.

    Returns:
        A new list containing the matching events.
    """
    channels = filters.channels
    products = filters.products

    result: list[RawEvent] = []
    for event in events:
        if channels and get_channel(event) not in channels:
            continue
        if products and classify(event) not in products:
            continue
        result.append(event)
    return result


def count_summary(events: Iterable[RawEvent]) -> ReleaseCounts:
    """Count stable and pre-release builds.

    ``dev`` releases are excluded from every count, including ``total``, so
    ``total == stable + prerelease`` always holds.
    """
    stable = 0
    prerelease = 0
    for event in events:
        channel = get_channel(event)
        if channel == ReleaseChannel.DEV:
            continue
        if channel in PRERELEASE_CHANNELS:
            prerelease += 1
        else:
            stable += 1
    return ReleaseCounts(total=stable + prerelease, stable=stable, prerelease=prerelease)


def release_count_text(events: Iterable[RawEvent]) -> str:
    """Return the summary text, e.g. ``"12 releases, 3 pre"``."""
    return count_summary(events).text


def sort_by_date(events: Iterable[RawEvent]) -> list[RawEvent]:
    """Return *events* sorted newest first.

    The sort is stable, so events sharing a timestamp keep their input order.
    """
    return sorted(events, key=lambda event: event.created_at or 0, reverse=True)


def unique_values(
    events: Iterable[RawEvent], field: Literal["channels", "products"]
) -> list[str]:
    """Return the sorted distinct channel or product values present in *events*.

    Used to populate filter options. ``"Unknown"`` is never included.

    Raises:
        ValueError: If *field* is neither ``"channels"`` nor ``"products"``.
    """
    if field == "channels":
        accessor = get_channel
    elif field == "products":
        accessor = classify
    else:
        raise ValueError(f"unsupported field: {field!r}")

    values = {str(accessor(event)) for event in events}
    values.discard(UNKNOWN)
    return sorted(values)


def products_in_category(category: ProductCategory | str) -> list[ProductType]:
    """Return the product types belonging to *category*, in declaration order."""
    category = ProductCategory(category)
    return [product for product in ProductType if PRODUCT_CATEGORY_MAP[product] == category]


def filter_by_category(
    events: Iterable[RawEvent], category: ProductCategory | str
) -> list[RawEvent]:
    """Return the events whose product belongs to *category* (``os`` or ``packages``)."""
    products = frozenset(products_in_category(category))
    return [event for event in events if classify(event) in products]


def get_release(events: Iterable[RawEvent], event_id: str) -> RawEvent | None:
    """Return the first event with *event_id*, or ``None`` if there is none."""
    for event in events:
        if event.id == event_id:
            return event
    return None
