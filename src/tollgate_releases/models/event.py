"""
Immutable raw Nostr event record.

[RawEvent][tollgate_releases.models.event.RawEvent] is the fixed-shape
record that every other layer consumes. It carries the seven NIP-01 fields
verbatim, with ``tags`` normalised to a tuple of string tuples so that the
record is hashable and cannot be mutated after it enters the catalogue.

Events can be built from a NIP-01 JSON object
([from_dict()][tollgate_releases.models.event.RawEvent.from_dict]), a JSON
string ([from_json()][tollgate_releases.models.event.RawEvent.from_json]),
or a ``nostr_sdk.Event`` delivered by a relay subscription
([from_nostr_event()][tollgate_releases.models.event.RawEvent.from_nostr_event]).

See Also:
    [tollgate_releases.nips.nip94.tags][]: Tag extraction over the ``tags``
        field of this record.
    [ReleaseCatalogue][tollgate_releases.core.catalogue.ReleaseCatalogue]:
        In-memory collection of these records keyed by ``id``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ._validation import freeze_tags, validate_str_no_null, validate_timestamp


if TYPE_CHECKING:
    from nostr_sdk import Event as NostrEvent


@dataclass(frozen=True, slots=True)
class RawEvent:
    """Immutable signed event as delivered by the event network.

    Envelope fields are validated eagerly: ``id``, ``pubkey``, ``content``
    and ``sig`` must be strings, ``created_at`` and ``kind`` non-negative
    integers. The ``tags`` field is never validated, only normalised; a
    malformed tag array degrades to fewer rows rather than an error.

    Attributes:
        id: Event id (hex SHA-256 of the serialized event).
        pubkey: Publisher public key (hex).
        created_at: Unix timestamp in seconds.
        kind: Event kind (1063 for release artifacts).
        tags: Ordered tag rows, each an ordered tuple of strings.
        content: Free-form release notes.
        sig: Schnorr signature (hex). Not verified here.

    Raises:
        TypeError: If an envelope field has the wrong type.
        ValueError: If a timestamp is negative or a string contains null bytes.

    Examples:
        ```python
        event = RawEvent.from_dict({
            "id": "ab" * 32,
            "pubkey": "cd" * 32,
            "created_at": 1700000000,
            "kind": 1063,
            "tags": [["version", "1.2.0"], ["release_channel", "stable"]],
            "content": "",
            "sig": "ef" * 64,
        })
        event.tags[0]  # ('version', '1.2.0')
        ```
    """

    id: str
    pubkey: str
    created_at: int
    kind: int
    tags: tuple[tuple[str, ...], ...] = field(default=())
    content: str = ""
    sig: str = ""

    def __post_init__(self) -> None:
        validate_str_no_null(self.id, "id")
        validate_str_no_null(self.pubkey, "pubkey")
        validate_timestamp(self.created_at, "created_at")
        validate_timestamp(self.kind, "kind")
        validate_str_no_null(self.content, "content")
        validate_str_no_null(self.sig, "sig")
        object.__setattr__(self, "tags", freeze_tags(self.tags))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RawEvent:
        """Build an event from a NIP-01 JSON object.

        Missing optional fields fall back to empty values (``tags``,
        ``content``, ``sig``); a ``null`` ``content`` is read as ``""``.

        Raises:
            KeyError: If ``id``, ``pubkey``, ``created_at`` or ``kind`` is missing.
        """
        return cls(
            id=data["id"],
            pubkey=data["pubkey"],
            created_at=data["created_at"],
            kind=data["kind"],
            tags=freeze_tags(data.get("tags")),
            content=data.get("content") or "",
            sig=data.get("sig") or "",
        )

    @classmethod
    def from_json(cls, text: str) -> RawEvent:
        """Build an event from its NIP-01 JSON serialization."""
        return cls.from_dict(json.loads(text))

    @classmethod
    def from_nostr_event(cls, event: NostrEvent) -> RawEvent:
        """Build an event from a ``nostr_sdk.Event``.

        Reads every field through the SDK accessors, the same way the
        SDK objects are unpacked when they arrive from a relay.
        """
        return cls(
            id=event.id().to_hex(),
            pubkey=event.author().to_hex(),
            created_at=event.created_at().as_secs(),
            kind=event.kind().as_u16(),
            tags=tuple(tuple(tag.as_vec()) for tag in event.tags().to_vec()),
            content=event.content(),
            sig=event.signature(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 JSON object for this event."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }

    def to_json(self) -> str:
        """Return the NIP-01 JSON serialization of this event."""
        return json.dumps(self.to_dict())
