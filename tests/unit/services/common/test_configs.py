"""
Unit tests for services.common.configs module.

Tests:
- FiltersConfig defaults, validation and to_filters()
- SubscriptionConfig defaults and field validation
"""

import pytest
from nostr_sdk import PublicKey
from pydantic import ValidationError

from tollgate_releases.models import ProductType, ReleaseChannel, ReleaseFilters
from tollgate_releases.models.constants import DEFAULT_PUBLISHER, DEFAULT_RELAYS
from tollgate_releases.services.common import FiltersConfig, SubscriptionConfig


class TestFiltersConfig:
    """Tests for FiltersConfig."""

    def test_defaults_match_default_filters(self) -> None:
        assert FiltersConfig().to_filters() == ReleaseFilters.default()

    def test_from_strings(self) -> None:
        config = FiltersConfig(channels=["beta", "alpha"], products=["tollgate-wrt"])
        assert config.channels == [ReleaseChannel.BETA, ReleaseChannel.ALPHA]
        assert config.products == [ProductType.TOLLGATE_WRT]

    def test_empty_lists_allowed(self) -> None:
        filters = FiltersConfig(channels=[], products=[]).to_filters()
        assert filters == ReleaseFilters()

    def test_unknown_channel_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FiltersConfig(channels=["nightly"])

    def test_unknown_product_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FiltersConfig(products=["tollgate-ui"])


class TestSubscriptionConfig:
    """Tests for SubscriptionConfig."""

    def test_defaults(self) -> None:
        config = SubscriptionConfig()
        assert config.relays == list(DEFAULT_RELAYS)
        assert config.publisher == DEFAULT_PUBLISHER
        assert config.limit == 5000
        assert config.timeout == 10.0
        assert config.empty_timeout == 5.0

    def test_npub_normalised_to_hex(self, release_pubkey) -> None:
        npub = PublicKey.parse(release_pubkey).to_bech32()
        assert SubscriptionConfig(publisher=npub).publisher == release_pubkey

    def test_invalid_publisher(self) -> None:
        with pytest.raises(ValidationError):
            SubscriptionConfig(publisher="not-a-key")

    def test_empty_relays_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SubscriptionConfig(relays=[])

    @pytest.mark.parametrize("url", ["https://relay.example.com", "relay.example.com", "ftp://x"])
    def test_non_websocket_relay_rejected(self, url) -> None:
        with pytest.raises(ValidationError, match="Invalid relay URL"):
            SubscriptionConfig(relays=[url])

    def test_valid_relays(self) -> None:
        relays = ["wss://relay.damus.io", "ws://localhost:7777"]
        assert SubscriptionConfig(relays=relays).relays == relays

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("limit", 0),
            ("limit", 10_001),
            ("timeout", 0.5),
            ("timeout", 121.0),
            ("empty_timeout", 0.0),
            ("empty_timeout", 61.0),
        ],
    )
    def test_bounds(self, field, value) -> None:
        with pytest.raises(ValidationError):
            SubscriptionConfig(**{field: value})
