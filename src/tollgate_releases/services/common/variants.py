"""
Variant resolution: alternative builds and architecture grouping.

A release version is published as several events, one per build target.
OS images are told apart by **target device**, packages by **CPU
architecture**; [find_alternatives()][tollgate_releases.services.common.variants.find_alternatives]
keeps that asymmetry explicit instead of collapsing it into one field.

[group_by_architecture()][tollgate_releases.services.common.variants.group_by_architecture]
builds the nested architecture → compression structure shown on a
package download page, keeping the newest build per compression.

Examples:
    ```python
    alternatives = find_alternatives(catalogue, release)
    groups = group_by_architecture(release_family(catalogue, release), sort_groups=True)
    for group in groups:
        print(group.architecture, group.compressions)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tollgate_releases.models.constants import NO_COMPRESSION, ProductType
from tollgate_releases.models.release import CompressionVariant, VariantGroup
from tollgate_releases.nips.nip94 import (
    classify,
    get_architecture,
    get_compression,
    get_device_id,
    get_release_view,
    get_version,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from tollgate_releases.models.event import RawEvent
    from tollgate_releases.models.release import ReleaseView


def _target(event: RawEvent, product_type: ProductType) -> str:
    if product_type == ProductType.TOLLGATE_OS:
        return get_device_id(event)
    return get_architecture(event)


def find_alternatives(catalogue: Iterable[RawEvent], target: RawEvent | None) -> list[RawEvent]:
    """Return the other builds of *target*'s version and product.

    Two events are alternatives when their ids differ, their version and
    product type match, and their build target differs: the ``device_id``
    for ``tollgate-os`` images, the ``architecture`` for every other
    product.

    Args:
        catalogue: Events to search, in the order results should keep.
        target: The release being viewed. ``None`` yields an empty list.

    Returns:
        Matching events in catalogue order. Never includes *target* itself.
    """
    if target is None:
        return []

    version = get_version(target)
    product_type = classify(target)
    current = _target(target, product_type)

    return [
        event
        for event in catalogue
        if event.id != target.id
        and get_version(event) == version
        and classify(event) == product_type
        and _target(event, product_type) != current
    ]


def release_family(catalogue: Iterable[RawEvent], target: RawEvent) -> list[RawEvent]:
    """Return *target* followed by its alternatives."""
    return [target, *find_alternatives(catalogue, target)]


def _compression_order(compression: str) -> tuple[bool, str]:
    return (compression != NO_COMPRESSION, compression)


def _is_newer(candidate: RawEvent, current: RawEvent) -> bool:
    if candidate.created_at != current.created_at:
        return candidate.created_at > current.created_at
    # Equal timestamps: fall back on the id so the winner is independent of input order.
    return candidate.id > current.id


def group_by_architecture(
    events: Iterable[RawEvent], *, sort_groups: bool = False
) -> list[VariantGroup]:
    """Group *events* by architecture, keeping the newest build per compression.

    Within a group, compression variants are ordered with ``"none"`` first
    and the remaining encodings lexicographically. The chosen release for
    each architecture and compression does not depend on input order.

    Args:
        events: Events to group, typically a
            [release_family()][tollgate_releases.services.common.variants.release_family].
        sort_groups: Sort groups by architecture name. Otherwise groups
            appear in order of first occurrence in *events*.

    Returns:
        One [VariantGroup][tollgate_releases.models.release.VariantGroup]
        per distinct architecture.
    """
    by_arch: dict[str, dict[str, RawEvent]] = {}
    for event in events:
        variants = by_arch.setdefault(get_architecture(event), {})
        compression = get_compression(event)
        current = variants.get(compression)
        if current is None or _is_newer(event, current):
            variants[compression] = event

    architectures = sorted(by_arch) if sort_groups else list(by_arch)
    return [
        VariantGroup(
            architecture=architecture,
            compression_variants=tuple(
                CompressionVariant(compression=compression, release=by_arch[architecture][compression])
                for compression in sorted(by_arch[architecture], key=_compression_order)
            ),
        )
        for architecture in architectures
    ]


def variant_label(view: ReleaseView) -> str:
    """Name of the build target: the device for OS images, else the architecture."""
    if view.product_type == ProductType.TOLLGATE_OS:
        return view.device_id
    return view.architecture


def search_variants(
    items: Iterable[VariantGroup | RawEvent], query: str
) -> list[VariantGroup | RawEvent]:
    """Case-insensitive substring search over variant labels.

    Groups match on their architecture, releases on their
    [variant_label()][tollgate_releases.services.common.variants.variant_label].
    An empty query matches everything.
    """
    needle = query.lower()
    if not needle:
        return list(items)

    matches: list[VariantGroup | RawEvent] = []
    for item in items:
        if isinstance(item, VariantGroup):
            label = item.architecture
        else:
            label = variant_label(get_release_view(item))
        if needle in label.lower():
            matches.append(item)
    return matches
