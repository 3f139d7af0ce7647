"""
In-memory release catalogue.

[ReleaseCatalogue][tollgate_releases.core.catalogue.ReleaseCatalogue] holds
every distinct [RawEvent][tollgate_releases.models.event.RawEvent] received
for the current publisher, keyed by event id and kept in descending
``created_at`` order. It is append-only: events are never mutated or
removed, except by a full [reset()][tollgate_releases.core.catalogue.ReleaseCatalogue.reset]
when the publisher changes.

Storage is deduplicated by id only. Version deduplication is a query-time
operation ([deduplicate_by_version()][tollgate_releases.core.catalogue.deduplicate_by_version])
because callers need different granularities: every architecture variant of
a version on a download page, one representative per version in a list.

Note:
    [ingest()][tollgate_releases.core.catalogue.ReleaseCatalogue.ingest] does
    no I/O and never blocks, so it can be called as a fire-and-forget reaction
    to each relay notification. Queries return fresh lists and never mutate
    the catalogue.

See Also:
    [ReleaseBrowser][tollgate_releases.services.browser.service.ReleaseBrowser]:
        Host service that feeds relay events into the catalogue.
    [tollgate_releases.services.common.selection][]: Filters and counts over
        catalogue snapshots.
"""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING

from tollgate_releases.models._validation import validate_instance
from tollgate_releases.models.event import RawEvent
from tollgate_releases.nips.nip94 import get_release_view, get_version


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from tollgate_releases.models.release import ReleaseView


def _newest_first(event: RawEvent) -> int:
    return -event.created_at


class ReleaseCatalogue:
    """Append-only collection of release events, newest first.

    Invariants:

    * No two entries share an ``id``.
    * Entries are ordered by ``created_at`` descending; entries with equal
      timestamps keep their insertion order.

    Examples:
        ```python
        catalogue = ReleaseCatalogue()
        catalogue.ingest(event)   # True
        catalogue.ingest(event)   # False, already present
        catalogue.get(event.id)   # event
        catalogue.get("missing")  # None
        ```
    """

    __slots__ = ("_by_id", "_events")

    def __init__(self, events: Iterable[RawEvent] = ()) -> None:
        self._by_id: dict[str, RawEvent] = {}
        self._events: list[RawEvent] = []
        for event in events:
            self.ingest(event)

    def ingest(self, event: RawEvent) -> bool:
        """Insert *event* unless an event with the same id is present.

        Args:
            event: The event to store.

        Returns:
            ``True`` if the event was inserted, ``False`` for a duplicate id.

        Raises:
            TypeError: If *event* is not a [RawEvent][tollgate_releases.models.event.RawEvent].
        """
        validate_instance(event, RawEvent, "event")
        if event.id in self._by_id:
            return False

        self._by_id[event.id] = event
        index = bisect.bisect_right(self._events, _newest_first(event), key=_newest_first)
        self._events.insert(index, event)
        return True

    def reset(self) -> None:
        """Remove every event."""
        self._by_id.clear()
        self._events.clear()

    def list_all(self) -> list[RawEvent]:
        """Return a snapshot of every event, newest first."""
        return list(self._events)

    def get(self, event_id: str) -> RawEvent | None:
        """Return the event with *event_id*, or ``None`` if it is not catalogued."""
        return self._by_id.get(event_id)

    def filter(self, predicate: Callable[[ReleaseView], bool]) -> list[RawEvent]:
        """Return the events whose [ReleaseView][tollgate_releases.models.release.ReleaseView] satisfies *predicate*."""
        return [event for event in self._events if predicate(get_release_view(event))]

    @property
    def is_empty(self) -> bool:
        return not self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[RawEvent]:
        return iter(self.list_all())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, RawEvent):
            return item.id in self._by_id
        return isinstance(item, str) and item in self._by_id

    def __repr__(self) -> str:
        return f"ReleaseCatalogue(size={len(self._events)})"


def deduplicate_by_version(events: Iterable[RawEvent]) -> list[RawEvent]:
    """Keep one event per version: the one with the greatest ``created_at``.

    When two events of the same version share a timestamp, the one seen
    later in *events* wins.

    Args:
        events: Events in any order.

    Returns:
        One event per distinct version. The order of the result carries no
        meaning; sort it if the caller needs one.
    """
    winners: dict[str, RawEvent] = {}
    for event in events:
        version = get_version(event)
        current = winners.get(version)
        # Ties go to the later-seen event.
        if current is None or event.created_at >= current.created_at:
            winners[version] = event
    return list(winners.values())
