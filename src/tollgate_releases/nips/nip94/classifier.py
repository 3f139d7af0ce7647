"""
Product classification for release events.

[classify()][tollgate_releases.nips.nip94.classifier.classify] resolves the
[ProductType][tollgate_releases.models.constants.ProductType] of an event
through a prioritized fallback chain. Each step is consulted only when the
previous one produced nothing:

1. ``name`` tag, substring match against ``tollgate-os``, ``tollgate-wrt``,
   ``tollgate-module-basic-go`` (in that order).
2. Deprecated ``package_name`` tag, substring match against
   ``tollgate-module-basic-go`` then ``tollgate-wrt``.
3. Presence of the deprecated ``tollgate_os_version`` tag.
4. Lower-cased content, download URL and ``filename`` tag: ``basic`` or
   ``module`` means the basic module, otherwise ``core`` means WRT.
5. ``tollgate-os``.

Warning:
    The order encodes precedence between schema generations that coexist
    in the event stream. Reordering the steps misclassifies historical
    events.
"""

from __future__ import annotations

import logging

from tollgate_releases.models.constants import ProductType, Tag

from .tags import EventLike, get_content, get_download_url, get_event_id, get_tag_value


logger = logging.getLogger(__name__)


_NAME_PRIORITY: tuple[ProductType, ...] = (
    ProductType.TOLLGATE_OS,
    ProductType.TOLLGATE_WRT,
    ProductType.TOLLGATE_BASIC,
)

_PACKAGE_NAME_PRIORITY: tuple[ProductType, ...] = (
    ProductType.TOLLGATE_BASIC,
    ProductType.TOLLGATE_WRT,
)

_BASIC_KEYWORDS: tuple[str, ...] = ("basic", "module")
_CORE_KEYWORDS: tuple[str, ...] = ("core",)


def _match_substring(value: str | None, candidates: tuple[ProductType, ...]) -> ProductType | None:
    if not value:
        return None
    for product in candidates:
        if product.value in value:
            return product
    return None


def _match_heuristic(event: EventLike | None) -> ProductType | None:
    haystacks = (
        get_content(event).lower(),
        (get_download_url(event) or "").lower(),
        (get_tag_value(event, Tag.FILENAME) or "").lower(),
    )
    if any(keyword in text for keyword in _BASIC_KEYWORDS for text in haystacks):
        return ProductType.TOLLGATE_BASIC
    if any(keyword in text for keyword in _CORE_KEYWORDS for text in haystacks):
        return ProductType.TOLLGATE_WRT
    return None


def classify(event: EventLike | None) -> ProductType:
    """Return the product type of a release event.

    Args:
        event: Release event (record or NIP-01 mapping).

    Returns:
        The first product type produced by the fallback chain, defaulting
        to ``tollgate-os``. Never raises.
    """
    rule = "name"
    product = _match_substring(get_tag_value(event, Tag.NAME), _NAME_PRIORITY)

    if product is None:
        rule = "package_name"
        product = _match_substring(get_tag_value(event, Tag.PACKAGE_NAME), _PACKAGE_NAME_PRIORITY)

    if product is None and get_tag_value(event, Tag.TOLLGATE_OS_VERSION):
        rule = "tollgate_os_version"
        product = ProductType.TOLLGATE_OS

    if product is None:
        rule = "heuristic"
        product = _match_heuristic(event)

    if product is None:
        rule = "default"
        product = ProductType.TOLLGATE_OS

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "product_classified id=%s product=%s rule=%s",
            get_event_id(event)[:16],
            product.value,
            rule,
        )
    return product
