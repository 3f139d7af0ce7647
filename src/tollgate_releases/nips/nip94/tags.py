"""
Total tag extraction for NIP-94 release events.

Every typed accessor in this module is built on a single primitive,
[extract_field()][tollgate_releases.nips.nip94.tags.extract_field], which
returns the tag rows whose first element equals a tag name. Accessors take
the second element of the **first** matching row, or a named default when
there is no usable value.

Note:
    This module is intentionally defensive: no exceptions are raised for
    malformed input. ``None`` or missing ``tags``, rows that are not
    sequences, rows shorter than two elements, and non-string cells all
    degrade to the accessor's default. Relay data is untrusted and several
    schema generations coexist in the release stream.

Accessors accept either a [RawEvent][tollgate_releases.models.event.RawEvent]
or a plain NIP-01 mapping, so JSON fixtures and relay payloads can be
inspected without building a record first.

See Also:
    [tollgate_releases.nips.nip94.classifier][]: Product classification
        built on these accessors.
    [tollgate_releases.nips.nip94.view][]: Assembles every accessor into a
        [ReleaseView][tollgate_releases.models.release.ReleaseView].
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from tollgate_releases.models.constants import (
    DEFAULT_MIME_TYPE,
    NO_COMPRESSION,
    UNKNOWN,
    VERSION_ID_PREFIX_LENGTH,
    ReleaseChannel,
    Tag,
)
from tollgate_releases.models.event import RawEvent


EventLike = RawEvent | Mapping[str, Any]


def _envelope(event: Any, name: str) -> Any:
    """Read an envelope field from a record or mapping, ``None`` if absent."""
    if isinstance(event, RawEvent):
        return getattr(event, name)
    if isinstance(event, Mapping):
        return event.get(name)
    return None


def extract_field(event: EventLike | None, tag_name: str) -> list[tuple[str, ...]]:
    """Return every tag row whose first element equals *tag_name*.

    Rows are returned in their original order. Absence of the tag, or of
    the whole ``tags`` field, yields an empty list.

    Args:
        event: Release event (record or NIP-01 mapping). ``None`` is accepted.
        tag_name: Tag name to match against the first element of each row.

    Returns:
        Matching rows as tuples. Never raises.
    """
    tags = _envelope(event, "tags")
    if tags is None or isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
        return []

    matches: list[tuple[str, ...]] = []
    for row in tags:
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            continue
        if row and row[0] == tag_name:
            matches.append(tuple(row))
    return matches


def get_tag_value(event: EventLike | None, tag_name: str, default: Any = None) -> Any:
    """Return the second element of the first row named *tag_name*.

    Only the first matching row is consulted. Empty strings and non-string
    values count as absent and yield *default*.
    """
    rows = extract_field(event, tag_name)
    if not rows or len(rows[0]) < 2:
        return default
    value = rows[0][1]
    if not isinstance(value, str) or not value:
        return default
    return value


# =============================================================================
# Envelope Accessors
# =============================================================================


def get_event_id(event: EventLike | None) -> str:
    value = _envelope(event, "id")
    return value if isinstance(value, str) else ""


def get_created_at(event: EventLike | None) -> int | None:
    """Return ``created_at`` as an int, ``None`` when missing or invalid."""
    value = _envelope(event, "created_at")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def get_content(event: EventLike | None) -> str:
    value = _envelope(event, "content")
    return value if isinstance(value, str) else ""


# =============================================================================
# Typed Tag Accessors
# =============================================================================


def get_version(event: EventLike | None) -> str:
    """Return the release version.

    Resolution order: ``version`` tag, deprecated ``tollgate_os_version``
    tag, first 8 characters of the event id, ``"Unknown"``.
    """
    version = get_tag_value(event, Tag.VERSION)
    if version:
        return version

    legacy = get_tag_value(event, Tag.TOLLGATE_OS_VERSION)
    if legacy:
        return legacy

    event_id = get_event_id(event)
    return event_id[:VERSION_ID_PREFIX_LENGTH] or UNKNOWN


def get_channel(event: EventLike | None) -> ReleaseChannel:
    """Return the release channel, ``dev`` when absent or unrecognised."""
    value = get_tag_value(event, Tag.RELEASE_CHANNEL)
    try:
        return ReleaseChannel(value)
    except ValueError:
        return ReleaseChannel.DEV


def get_architecture(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.ARCHITECTURE, UNKNOWN)


def get_compression(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.COMPRESSION, NO_COMPRESSION)


def get_device_id(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.DEVICE_ID, UNKNOWN)


def get_supported_devices(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.SUPPORTED_DEVICES, UNKNOWN)


def get_openwrt_version(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.OPENWRT_VERSION, UNKNOWN)


def get_download_url(event: EventLike | None) -> str | None:
    return get_tag_value(event, Tag.URL)


def get_file_hash(event: EventLike | None) -> str | None:
    """Return the ``x`` hash, falling back to the original-file ``ox`` hash."""
    return get_tag_value(event, Tag.HASH) or get_tag_value(event, Tag.ORIGINAL_HASH)


def get_mime_type(event: EventLike | None) -> str:
    return get_tag_value(event, Tag.MIME_TYPE, DEFAULT_MIME_TYPE)


def get_filename(event: EventLike | None) -> str | None:
    return get_tag_value(event, Tag.FILENAME)


__all__ = [
    "EventLike",
    "extract_field",
    "get_architecture",
    "get_channel",
    "get_compression",
    "get_content",
    "get_created_at",
    "get_device_id",
    "get_download_url",
    "get_event_id",
    "get_file_hash",
    "get_filename",
    "get_mime_type",
    "get_openwrt_version",
    "get_supported_devices",
    "get_tag_value",
    "get_version",
]
