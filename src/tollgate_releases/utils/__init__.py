"""Nostr key parsing and relay client operations.

The utils layer sits in the middle of the diamond DAG, depending only on
[tollgate_releases.models][tollgate_releases.models]. It is the only layer
that performs network I/O.

Attributes:
    keys: Publisher key parsing (hex or npub).
    protocol: Read-only relay client and the release event source.

Note:
    The utils layer has **zero** imports from ``tollgate_releases.core`` or
    ``tollgate_releases.services``. It raises builtin ``OSError`` /
    ``TimeoutError`` / ``ValueError``; the service layer maps them onto
    [SubscriptionError][tollgate_releases.core.exceptions.SubscriptionError]
    and [ConfigurationError][tollgate_releases.core.exceptions.ConfigurationError].
"""

from .keys import parse_pubkey
from .protocol import EventSource, create_client, create_release_filter, fetch_release_events


__all__ = [
    "EventSource",
    "create_client",
    "create_release_filter",
    "fetch_release_events",
    "parse_pubkey",
]
