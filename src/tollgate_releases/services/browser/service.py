"""Release browser service.

Hosts a [ReleaseCatalogue][tollgate_releases.core.catalogue.ReleaseCatalogue]
for one publisher and keeps it in sync with the publisher's NIP-94 release
events on a set of relays. Each cycle fetches the publisher's events through
an [EventSource][tollgate_releases.utils.protocol.EventSource] and ingests
them one at a time; the catalogue drops ids it has already seen, so
repeated cycles only add new releases.

The subscription lifecycle is tracked with the
[SubscriptionState][tollgate_releases.core.state.SubscriptionState]
machine: the browser owns the timer and the event stream and feeds their
signals to [next_state()][tollgate_releases.core.state.next_state].

Note:
    Switching publisher with
    [set_publisher()][tollgate_releases.services.browser.service.ReleaseBrowser.set_publisher]
    replaces the catalogue and bumps a generation counter. Events, timeouts
    and errors tagged with an older generation are discarded, so nothing
    from an abandoned subscription reaches the new catalogue.

See Also:
    [BrowserConfig][tollgate_releases.services.browser.configs.BrowserConfig]:
        Configuration model for this service.
    [tollgate_releases.services.common.selection][]: Filter and count
        functions behind the query facade.
    [tollgate_releases.services.common.variants][]: Alternative builds and
        architecture grouping behind the query facade.

Examples:
    ```python
    from tollgate_releases.services import ReleaseBrowser

    browser = ReleaseBrowser.from_yaml("config/browser.yaml")
    async with browser:
        await browser.run()
        for event in browser.filtered():
            print(browser.get_release_view(event).version)
    ```
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from nostr_sdk import Event, NostrSdkError

from tollgate_releases.core.base_service import BaseService
from tollgate_releases.core.catalogue import ReleaseCatalogue, deduplicate_by_version
from tollgate_releases.core.exceptions import (
    ConfigurationError,
    ProtocolError,
    RelayTimeoutError,
    SubscriptionError,
)
from tollgate_releases.core.state import SubscriptionSignal, SubscriptionState, next_state
from tollgate_releases.models.constants import EventKind, ServiceName
from tollgate_releases.models.event import RawEvent
from tollgate_releases.nips.nip94 import get_release_view
from tollgate_releases.services.common.selection import apply_filters, count_summary, sort_by_date
from tollgate_releases.services.common.variants import (
    find_alternatives,
    group_by_architecture,
    release_family,
)
from tollgate_releases.utils.keys import parse_pubkey
from tollgate_releases.utils.protocol import fetch_release_events

from .configs import BrowserConfig


if TYPE_CHECKING:
    from tollgate_releases.models.filters import ReleaseFilters
    from tollgate_releases.models.release import ReleaseCounts, ReleaseView, VariantGroup
    from tollgate_releases.utils.protocol import EventSource


class ReleaseBrowser(BaseService[BrowserConfig]):
    """Catalogue host for one release publisher.

    Attributes:
        state: Current [SubscriptionState][tollgate_releases.core.state.SubscriptionState].
        publisher: Hex public key of the subscribed publisher.
        generation: Subscription generation, bumped on every publisher switch.
        last_error: Message of the last subscription failure, if any.

    See Also:
        [BrowserConfig][tollgate_releases.services.browser.configs.BrowserConfig]:
            Configuration model for this service.
    """

    SERVICE_NAME: ClassVar[ServiceName] = ServiceName.BROWSER
    CONFIG_CLASS: ClassVar[type[BrowserConfig]] = BrowserConfig

    def __init__(
        self,
        config: BrowserConfig | None = None,
        *,
        json_logs: bool = False,
        source: EventSource | None = None,
    ) -> None:
        super().__init__(config=config, json_logs=json_logs)
        self._config: BrowserConfig
        self._source: EventSource = source if source is not None else fetch_release_events
        self._publisher = self._config.subscription.publisher
        self._catalogue = ReleaseCatalogue()
        self._state = SubscriptionState.CONNECTING
        self._generation = 0
        self._last_error: str | None = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @property
    def publisher(self) -> str:
        return self._publisher

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def catalogue(self) -> ReleaseCatalogue:
        return self._catalogue

    def _signal(self, signal: SubscriptionSignal) -> None:
        previous = self._state
        self._state = next_state(previous, signal)
        if self._state != previous:
            self._logger.debug(
                "state_changed", previous=previous, state=self._state, signal=signal
            )

    def set_publisher(self, pubkey: str) -> None:
        """Switch to another publisher, discarding the current catalogue.

        The catalogue is replaced synchronously before this method returns,
        so no event of the previous publisher can be observed afterwards.
        Fetches already in flight keep running but their results are dropped.

        Args:
            pubkey: Publisher key, hex or ``npub``.

        Raises:
            ConfigurationError: If *pubkey* is not a valid public key.
        """
        try:
            publisher = parse_pubkey(pubkey)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self._publisher = publisher
        self._catalogue = ReleaseCatalogue()
        self._generation += 1
        self._last_error = None
        self._signal(SubscriptionSignal.RESET)
        self.set_gauge("catalogue_size", 0)
        self._logger.info("publisher_changed", publisher=publisher, generation=self._generation)

    # -------------------------------------------------------------------------
    # Signals
    # -------------------------------------------------------------------------

    def _is_stale(self, generation: int | None) -> bool:
        return generation is not None and generation != self._generation

    def handle_event(
        self, event: RawEvent | Event | Mapping[str, Any], generation: int | None = None
    ) -> bool:
        """Ingest one relay event.

        Args:
            event: A record, a ``nostr_sdk.Event`` or a NIP-01 mapping.
            generation: Subscription generation the event was fetched under.
                ``None`` means the current one.

        Returns:
            ``True`` if the event was added to the catalogue.

        Raises:
            ProtocolError: If *event* cannot be decoded or is not a file
                metadata event.
        """
        if self._is_stale(generation):
            self.inc_counter("events_stale")
            return False

        raw = self._decode(event)
        if not self._catalogue.ingest(raw):
            self.inc_counter("events_duplicate")
            return False

        self.inc_counter("events_ingested")
        self.set_gauge("catalogue_size", len(self._catalogue))
        self._signal(SubscriptionSignal.EVENT_INSERTED)
        return True

    def handle_timeout(self, generation: int | None = None) -> None:
        """Report that the empty timeout elapsed for *generation*."""
        if self._is_stale(generation):
            return
        self._signal(SubscriptionSignal.TIMEOUT_ELAPSED)

    def handle_failure(self, error: BaseException, generation: int | None = None) -> None:
        """Record a subscription failure for *generation*."""
        if self._is_stale(generation):
            return
        self._last_error = str(error) or type(error).__name__
        self._signal(SubscriptionSignal.SUBSCRIPTION_FAILED)

    @staticmethod
    def _decode(event: RawEvent | Event | Mapping[str, Any]) -> RawEvent:
        try:
            if isinstance(event, RawEvent):
                raw = event
            elif isinstance(event, Event):
                raw = RawEvent.from_nostr_event(event)
            elif isinstance(event, Mapping):
                raw = RawEvent.from_dict(event)
            else:
                raise TypeError(f"unsupported event type: {type(event).__name__}")
        except (KeyError, TypeError, ValueError) as e:
            raise ProtocolError(f"cannot decode event: {e}") from e

        if raw.kind != EventKind.FILE_METADATA:
            raise ProtocolError(f"unexpected event kind {raw.kind} (id={raw.id})")
        return raw

    # -------------------------------------------------------------------------
    # Cycle
    # -------------------------------------------------------------------------

    async def run(self) -> None:
        """Fetch the publisher's release events once and ingest them.

        The empty timer starts with the fetch. If it fires before the first
        event the state becomes ``empty``; a stream that ends without any
        event has the same effect.

        Raises:
            RelayTimeoutError: If the relays did not answer in time.
            SubscriptionError: If no relay could be reached or the client
                reported an error.
        """
        sub = self._config.subscription
        generation = self._generation
        publisher = self._publisher

        self._logger.info(
            "cycle_started",
            publisher=publisher,
            relays=len(sub.relays),
            generation=generation,
        )

        loop = asyncio.get_running_loop()
        timer = loop.call_later(sub.empty_timeout, self.handle_timeout, generation)
        received = 0
        inserted = 0
        stream = self._source(sub.relays, publisher, limit=sub.limit, timeout=sub.timeout)
        try:
            async with contextlib.aclosing(stream):
                async for event in stream:
                    if self._is_stale(generation):
                        self.inc_counter("events_stale")
                        self._logger.info("cycle_abandoned", generation=generation)
                        return
                    received += 1
                    try:
                        if self.handle_event(event, generation):
                            inserted += 1
                    except ProtocolError as e:
                        self._logger.warning("event_rejected", error=str(e))
        except TimeoutError as e:
            self.handle_failure(e, generation)
            raise RelayTimeoutError(f"relay request timed out after {sub.timeout}s") from e
        except (OSError, NostrSdkError) as e:
            self.handle_failure(e, generation)
            raise SubscriptionError(str(e)) from e
        finally:
            timer.cancel()

        if self._state == SubscriptionState.CONNECTING:
            self.handle_timeout(generation)

        self._logger.info(
            "cycle_completed",
            received=received,
            inserted=inserted,
            total=len(self._catalogue),
            state=self._state,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def snapshot(self) -> list[RawEvent]:
        """Return every catalogued event, newest first."""
        return self._catalogue.list_all()

    def get_release(self, event_id: str) -> RawEvent | None:
        return self._catalogue.get(event_id)

    @staticmethod
    def get_release_view(event: RawEvent) -> ReleaseView:
        return get_release_view(event)

    def filtered(
        self, filters: ReleaseFilters | None = None, deduplicate: bool | None = None
    ) -> list[RawEvent]:
        """Return the catalogue filtered for display.

        Args:
            filters: Selection to apply; defaults to ``config.filters``.
            deduplicate: Keep one release per version; defaults to
                ``config.deduplicate``.

        Returns:
            Matching events, newest first.
        """
        if filters is None:
            filters = self._config.filters.to_filters()
        if deduplicate is None:
            deduplicate = self._config.deduplicate

        events = apply_filters(self.snapshot(), filters)
        if deduplicate:
            events = sort_by_date(deduplicate_by_version(events))
        return events

    def summary(
        self, filters: ReleaseFilters | None = None, deduplicate: bool | None = None
    ) -> ReleaseCounts:
        """Count the releases [filtered()][tollgate_releases.services.browser.service.ReleaseBrowser.filtered] returns."""
        return count_summary(self.filtered(filters, deduplicate))

    def alternatives(self, event_id: str) -> list[RawEvent]:
        """Return the other builds of a release, or an empty list if it is unknown."""
        return find_alternatives(self.snapshot(), self._catalogue.get(event_id))

    def variants(self, event_id: str) -> list[VariantGroup]:
        """Group a release and its alternatives by architecture and compression."""
        target = self._catalogue.get(event_id)
        if target is None:
            return []
        return group_by_architecture(release_family(self.snapshot(), target), sort_groups=True)
