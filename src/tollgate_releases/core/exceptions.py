"""Release browser exception hierarchy.

Provides typed exceptions for the few error categories that are allowed to
surface. Malformed tags and unknown release ids are **not** errors: tag
accessors resolve to defaults and lookups return ``None``.

Exception hierarchy:

```text
TollgateReleasesError (base -- never raised directly)
├── ConfigurationError      -- config validation, bad YAML, invalid publisher key
├── SubscriptionError       -- relay subscription failed (recoverable)
│   └── RelayTimeoutError   -- relay connection timed out
└── ProtocolError           -- payload is not a decodable event at all
```

See Also:
    [ReleaseBrowser][tollgate_releases.services.browser.service.ReleaseBrowser]:
        Turns [SubscriptionError][tollgate_releases.core.exceptions.SubscriptionError]
        into the ``error`` subscription state.
    [BaseService][tollgate_releases.core.base_service.BaseService]: Catches
        every error in the
        [run_forever()][tollgate_releases.core.base_service.BaseService.run_forever]
        loop.
"""

from __future__ import annotations


class TollgateReleasesError(Exception):
    """Base exception for all release browser errors.

    Never raised directly -- always use a specific subclass.
    """


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigurationError(TollgateReleasesError):
    """Invalid or missing configuration (YAML, CLI flags, publisher key).

    See Also:
        [load_yaml()][tollgate_releases.core.yaml.load_yaml]: YAML loading
            function whose output is validated into config models.
        [set_publisher()][tollgate_releases.services.browser.service.ReleaseBrowser.set_publisher]:
            Raises this for keys that are neither hex nor npub.
    """


# ---------------------------------------------------------------------------
# Subscription
# ---------------------------------------------------------------------------


class SubscriptionError(TollgateReleasesError):
    """Relay subscription failed: unreachable relays, connection refused.

    Recoverable: the browser moves to the ``error`` state, keeps answering
    queries over whatever catalogue it holds, and retries on the next cycle.
    """


class RelayTimeoutError(SubscriptionError):
    """Relay connection or response timed out."""


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class ProtocolError(TollgateReleasesError):
    """A payload could not be decoded into an event envelope.

    Raised only for envelopes (missing ``id``, wrong types). Tag content is
    never a reason to raise.
    """
