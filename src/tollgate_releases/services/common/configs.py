"""Shared configuration models for release services.

Both models accept partial YAML: omitted fields keep their defaults, so a
config file that only sets ``subscription.publisher`` subscribes to the
default relays with the default filters.

Attributes:
    FiltersConfig: Channel and product selection, converted to a
        [ReleaseFilters][tollgate_releases.models.filters.ReleaseFilters].
    SubscriptionConfig: Relays, publisher key and fetch limits.

See Also:
    [BrowserConfig][tollgate_releases.services.browser.configs.BrowserConfig]:
        Service config that embeds both models.
    [parse_pubkey()][tollgate_releases.utils.keys.parse_pubkey]: Publisher
        key normalisation used by ``SubscriptionConfig``.

Examples:
    ```yaml
    subscription:
      publisher: npub1...
      relays:
        - wss://relay.damus.io
      empty_timeout: 5.0
    filters:
      channels: [stable, beta]
    ```
"""

from __future__ import annotations

from nostr_sdk import RelayUrl
from pydantic import BaseModel, Field, field_validator

from tollgate_releases.models.constants import (
    DEFAULT_EMPTY_TIMEOUT,
    DEFAULT_EVENT_LIMIT,
    DEFAULT_PUBLISHER,
    DEFAULT_RELAYS,
    ProductType,
    ReleaseChannel,
)
from tollgate_releases.models.filters import ReleaseFilters
from tollgate_releases.utils.keys import parse_pubkey


_WEBSOCKET_SCHEMES = ("ws://", "wss://")


class FiltersConfig(BaseModel):
    """Channel and product selection.

    An empty list disables filtering on that dimension.
    """

    channels: list[ReleaseChannel] = Field(
        default_factory=lambda: [ReleaseChannel.STABLE],
        description="Release channels to show (empty = all)",
    )
    products: list[ProductType] = Field(
        default_factory=lambda: list(ProductType),
        description="Product types to show (empty = all)",
    )

    def to_filters(self) -> ReleaseFilters:
        return ReleaseFilters(channels=frozenset(self.channels), products=frozenset(self.products))


class SubscriptionConfig(BaseModel):
    """Relay subscription settings.

    Attributes:
        relays: Relay WebSocket URLs to query.
        publisher: Release publisher key, hex or ``npub``. Stored as hex.
        limit: Maximum number of events requested from relays.
        timeout: Connection and request timeout in seconds.
        empty_timeout: Seconds without any event before an empty catalogue
            is reported as empty rather than loading.
    """

    relays: list[str] = Field(default_factory=lambda: list(DEFAULT_RELAYS), min_length=1)
    publisher: str = Field(default=DEFAULT_PUBLISHER)
    limit: int = Field(default=DEFAULT_EVENT_LIMIT, ge=1, le=10_000)
    timeout: float = Field(default=10.0, ge=1.0, le=120.0)
    empty_timeout: float = Field(default=DEFAULT_EMPTY_TIMEOUT, ge=0.1, le=60.0)

    @field_validator("relays")
    @classmethod
    def validate_relay_urls(cls, v: list[str]) -> list[str]:
        """Validate that all relay URLs are valid WebSocket URLs."""
        for url in v:
            if not url.startswith(_WEBSOCKET_SCHEMES):
                raise ValueError(f"Invalid relay URL '{url}': scheme must be ws:// or wss://")
            try:
                RelayUrl.parse(url)
            except Exception as e:  # nostr_sdk raises its own FFI error types
                raise ValueError(f"Invalid relay URL '{url}': {e}") from e
        return v

    @field_validator("publisher")
    @classmethod
    def validate_publisher(cls, v: str) -> str:
        """Normalise the publisher key to lowercase hex."""
        return parse_pubkey(v)
