"""Shared query functions and configuration models for release services.

Attributes:
    selection: Filters, counts, sorting and lookups over catalogue snapshots
        ([apply_filters()][tollgate_releases.services.common.selection.apply_filters],
        [count_summary()][tollgate_releases.services.common.selection.count_summary]).
    variants: Alternative builds and architecture grouping
        ([find_alternatives()][tollgate_releases.services.common.variants.find_alternatives],
        [group_by_architecture()][tollgate_releases.services.common.variants.group_by_architecture]).
    configs: Pydantic models for filters and relay subscriptions.

Note:
    Every query function is pure and synchronous. They take snapshots, never
    the live catalogue, so they can run while events are still arriving.
"""

from .configs import FiltersConfig, SubscriptionConfig
from .selection import (
    FilterSelection,
    apply_filters,
    count_summary,
    filter_by_category,
    get_release,
    products_in_category,
    release_count_text,
    sort_by_date,
    unique_values,
)
from .variants import (
    find_alternatives,
    group_by_architecture,
    release_family,
    search_variants,
    variant_label,
)


__all__ = [
    "FilterSelection",
    "FiltersConfig",
    "SubscriptionConfig",
    "apply_filters",
    "count_summary",
    "filter_by_category",
    "find_alternatives",
    "get_release",
    "group_by_architecture",
    "products_in_category",
    "release_count_text",
    "release_family",
    "search_variants",
    "sort_by_date",
    "unique_values",
    "variant_label",
]
