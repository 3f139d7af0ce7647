"""
Pytest configuration and shared fixtures for tollgate-releases tests.

Provides:
- ``make_event``: factory building release events from keyword tags
- ``release_pubkey``: a freshly generated publisher key (hex)
- Logging configuration
"""

import itertools
import logging
from collections.abc import Callable
from typing import Any

import pytest
from nostr_sdk import Keys

from tollgate_releases.models import RawEvent


PUBLISHER = "5075e61f0b048148b60105c1dd72bbeae1957336ae5824087e52efa374f8416a"

EventFactory = Callable[..., RawEvent]


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def make_event() -> EventFactory:
    """Return a factory building kind-1063 release events.

    Keyword arguments that are not envelope fields become tags, in the
    order given; ``None`` values are skipped. Extra raw rows can be passed
    through ``tags``, and are placed after the keyword tags.

    Example::

        make_event(version="2.0", release_channel="stable", created_at=10)
    """
    counter = itertools.count(1)

    def factory(
        *,
        id: str | None = None,  # noqa: A002
        created_at: int = 1_700_000_000,
        kind: int = 1063,
        pubkey: str = PUBLISHER,
        content: str = "",
        tags: list[list[str]] | None = None,
        **tag_values: Any,
    ) -> RawEvent:
        rows = [[name, value] for name, value in tag_values.items() if value is not None]
        rows.extend(tags or [])
        return RawEvent(
            id=id if id is not None else f"{next(counter):064x}",
            pubkey=pubkey,
            created_at=created_at,
            kind=kind,
            tags=rows,
            content=content,
            sig="0" * 128,
        )

    return factory


@pytest.fixture
def release_pubkey() -> str:
    """A valid publisher public key (hex)."""
    return Keys.generate().public_key().to_hex()
