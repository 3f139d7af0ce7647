"""
Subscription state machine.

The host (relay subscription plus a timer) owns the signals; this module
owns the transition table. Feeding the same signal sequence always yields
the same state, which keeps the "loading", "no data" and "error" screens
consistent regardless of how relay notifications and timers interleave.

```text
                 event_inserted
   connecting ───────────────────────▶ populated
      │  │                                ▲
      │  └──timeout_elapsed──▶ empty ─────┤ event_inserted
      │                                   │
      └──subscription_failed──▶ error ────┘

   reset: every state ──▶ connecting
```

A failure after data has arrived keeps the browser in ``populated``: the
catalogue is still valid and the error is reported through logs.

See Also:
    [ReleaseBrowser][tollgate_releases.services.browser.service.ReleaseBrowser]:
        Feeds relay arrivals, timeouts and failures into
        [next_state()][tollgate_releases.core.state.next_state].
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType


class SubscriptionState(StrEnum):
    """Observable state of a publisher subscription.

    Attributes:
        CONNECTING: Subscribed, no event received yet, timeout not elapsed.
        EMPTY: Timeout elapsed without any event ("no releases found").
        POPULATED: At least one event has been ingested.
        ERROR: The subscription failed before any event arrived.
    """

    CONNECTING = "connecting"
    EMPTY = "empty"
    POPULATED = "populated"
    ERROR = "error"


class SubscriptionSignal(StrEnum):
    """External inputs driving the state machine."""

    EVENT_INSERTED = "event_inserted"
    TIMEOUT_ELAPSED = "timeout_elapsed"
    SUBSCRIPTION_FAILED = "subscription_failed"
    RESET = "reset"


_S = SubscriptionState
_E = SubscriptionSignal

TRANSITIONS: MappingProxyType[tuple[SubscriptionState, SubscriptionSignal], SubscriptionState] = (
    MappingProxyType(
        {
            (_S.CONNECTING, _E.EVENT_INSERTED): _S.POPULATED,
            (_S.CONNECTING, _E.TIMEOUT_ELAPSED): _S.EMPTY,
            (_S.CONNECTING, _E.SUBSCRIPTION_FAILED): _S.ERROR,
            (_S.CONNECTING, _E.RESET): _S.CONNECTING,
            (_S.EMPTY, _E.EVENT_INSERTED): _S.POPULATED,
            (_S.EMPTY, _E.TIMEOUT_ELAPSED): _S.EMPTY,
            (_S.EMPTY, _E.SUBSCRIPTION_FAILED): _S.ERROR,
            (_S.EMPTY, _E.RESET): _S.CONNECTING,
            (_S.POPULATED, _E.EVENT_INSERTED): _S.POPULATED,
            (_S.POPULATED, _E.TIMEOUT_ELAPSED): _S.POPULATED,
            (_S.POPULATED, _E.SUBSCRIPTION_FAILED): _S.POPULATED,
            (_S.POPULATED, _E.RESET): _S.CONNECTING,
            (_S.ERROR, _E.EVENT_INSERTED): _S.POPULATED,
            (_S.ERROR, _E.TIMEOUT_ELAPSED): _S.ERROR,
            (_S.ERROR, _E.SUBSCRIPTION_FAILED): _S.ERROR,
            (_S.ERROR, _E.RESET): _S.CONNECTING,
        }
    )
)


def next_state(state: SubscriptionState, signal: SubscriptionSignal) -> SubscriptionState:
    """Return the state reached from *state* on *signal*."""
    return TRANSITIONS[(SubscriptionState(state), SubscriptionSignal(signal))]


def is_loading(state: SubscriptionState) -> bool:
    """Whether the UI should still show a loading indicator."""
    return state == SubscriptionState.CONNECTING
