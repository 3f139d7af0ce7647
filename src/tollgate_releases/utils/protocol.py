"""Nostr client operations for fetching release events.

Thin adapter over ``nostr-sdk`` that plays the role of the event-network
collaborator: given relay URLs and a publisher key it yields the publisher's
NIP-94 events as [RawEvent][tollgate_releases.models.event.RawEvent]
records. The release engine makes no assumption about ordering or absence
of duplicates in what this adapter yields.

Attributes:
    create_client: Read-only client factory.
    create_release_filter: ``{kinds: [1063], authors: [pubkey], limit: N}``.
    fetch_release_events: Async generator yielding the publisher's events.
    EventSource: Call signature shared by every event source, so the
        browser can be driven by a fake source in tests.

Examples:
    ```python
    from tollgate_releases.utils.protocol import fetch_release_events

    async for event in fetch_release_events(relays, pubkey, limit=500, timeout=10):
        print(event.id[:8], event.created_at)
    ```
"""

from __future__ import annotations

import contextlib
import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol

from nostr_sdk import ClientBuilder, Filter, Kind, PublicKey, RelayUrl

from tollgate_releases.models.constants import EventKind
from tollgate_releases.models.event import RawEvent


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Sequence

    from nostr_sdk import Client


logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Async stream of release events for one publisher."""

    def __call__(
        self,
        relays: Sequence[str],
        pubkey: str,
        *,
        limit: int,
        timeout: float,  # noqa: ASYNC109
    ) -> AsyncGenerator[RawEvent, None]: ...


def create_client() -> Client:
    """Create a read-only Nostr client (no signer)."""
    return ClientBuilder().build()


def create_release_filter(pubkey: str, limit: int) -> Filter:
    """Build the subscription filter for a publisher's release events."""
    return (
        Filter()
        .kinds([Kind(EventKind.FILE_METADATA)])
        .authors([PublicKey.parse(pubkey)])
        .limit(limit)
    )


async def fetch_release_events(
    relays: Sequence[str],
    pubkey: str,
    *,
    limit: int,
    timeout: float,  # noqa: ASYNC109
) -> AsyncGenerator[RawEvent, None]:
    """Connect to *relays* and yield the publisher's release events.

    Events whose envelope cannot be converted are skipped with a debug
    log. The client is always shut down when the generator exits,
    including on ``break`` or an exception.

    Args:
        relays: Relay WebSocket URLs.
        pubkey: Publisher public key (hex).
        limit: Maximum number of events requested.
        timeout: Connection and request timeout in seconds.

    Yields:
        [RawEvent][tollgate_releases.models.event.RawEvent] records in
        relay order.

    Raises:
        OSError: If no relay could be connected.
        TimeoutError: If the request timed out.
        NostrSdkError: If the client rejects a relay URL or the fetch fails.
    """
    client = create_client()
    try:
        for url in relays:
            await client.add_relay(RelayUrl.parse(url))

        output = await client.try_connect(timedelta(seconds=timeout))
        if not output.success:
            failures = ", ".join(f"{url} ({error})" for url, error in output.failed.items())
            raise OSError(f"No relay reachable: {failures or 'no relays configured'}")

        logger.debug("relays_connected count=%d", len(output.success))

        events = await client.fetch_events(
            create_release_filter(pubkey, limit), timedelta(seconds=timeout)
        )
        for evt in events.to_vec():
            try:
                raw = RawEvent.from_nostr_event(evt)
            except (ValueError, TypeError, OverflowError) as e:
                logger.debug("event_skipped error=%s", e)
                continue
            yield raw
    finally:
        # nostr-sdk shutdown can raise arbitrary errors from the Rust FFI layer
        with contextlib.suppress(Exception):
            await client.shutdown()
