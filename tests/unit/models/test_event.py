"""
Unit tests for models.event module.

Tests:
- RawEvent construction and envelope validation
- Tag normalisation (malformed rows, non-string cells)
- from_dict() / from_json() / to_dict() conversions
- from_nostr_event() with a mocked nostr_sdk.Event
- Immutability
"""

import dataclasses
import json
from unittest.mock import MagicMock

import pytest

from tollgate_releases.models import RawEvent


def _data(**overrides):
    data = {
        "id": "ab" * 32,
        "pubkey": "cd" * 32,
        "created_at": 1_700_000_000,
        "kind": 1063,
        "tags": [["version", "1.2.0"], ["release_channel", "stable"]],
        "content": "notes",
        "sig": "ef" * 64,
    }
    data.update(overrides)
    return data


# ============================================================================
# Construction
# ============================================================================


class TestRawEventConstruction:
    """Tests for RawEvent construction and validation."""

    def test_minimal_fields(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=0, kind=1063)
        assert event.tags == ()
        assert event.content == ""
        assert event.sig == ""

    def test_tags_are_frozen_tuples(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=[["version", "1"]])
        assert event.tags == (("version", "1"),)
        assert isinstance(event.tags[0], tuple)

    def test_negative_created_at_rejected(self) -> None:
        with pytest.raises(ValueError):
            RawEvent(id="a", pubkey="b", created_at=-1, kind=1063)

    def test_bool_created_at_rejected(self) -> None:
        with pytest.raises(TypeError):
            RawEvent(id="a", pubkey="b", created_at=True, kind=1063)

    def test_non_string_id_rejected(self) -> None:
        with pytest.raises(TypeError):
            RawEvent(id=123, pubkey="b", created_at=1, kind=1063)  # type: ignore[arg-type]

    def test_null_byte_in_content_rejected(self) -> None:
        with pytest.raises(ValueError, match="null bytes"):
            RawEvent(id="a", pubkey="b", created_at=1, kind=1063, content="x\x00y")

    def test_frozen(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.id = "c"  # type: ignore[misc]

    def test_hashable(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=[["x", "y"]])
        assert hash(event) == hash(
            RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=[["x", "y"]])
        )


class TestRawEventTagNormalisation:
    """Malformed tag arrays degrade instead of raising."""

    def test_none_tags(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=None)  # type: ignore[arg-type]
        assert event.tags == ()

    def test_string_tags(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags="version")  # type: ignore[arg-type]
        assert event.tags == ()

    def test_non_sequence_rows_dropped(self) -> None:
        tags = [["version", "1"], 42, "release_channel", None, ["m", "text/plain"]]
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=tags)  # type: ignore[arg-type]
        assert event.tags == (("version", "1"), ("m", "text/plain"))

    def test_non_string_cells_blanked_in_place(self) -> None:
        event = RawEvent(
            id="a", pubkey="b", created_at=1, kind=1063, tags=[["version", 2, "x"]]  # type: ignore[list-item]
        )
        assert event.tags == (("version", "", "x"),)

    def test_rows_without_string_name_dropped(self) -> None:
        tags = [[None, "architecture", "mips"], [3, "x"], ["m", "text/plain"]]
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=tags)  # type: ignore[arg-type]
        assert event.tags == (("m", "text/plain"),)

    def test_mapping_rows_dropped(self) -> None:
        tags = [{"version": "1"}, ["version", "2"]]
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=tags)  # type: ignore[arg-type]
        assert event.tags == (("version", "2"),)

    def test_empty_rows_kept(self) -> None:
        event = RawEvent(id="a", pubkey="b", created_at=1, kind=1063, tags=[[], ["version", "1"]])
        assert event.tags == ((), ("version", "1"))


# ============================================================================
# Conversions
# ============================================================================


class TestRawEventFromDict:
    """Tests for RawEvent.from_dict() and from_json()."""

    def test_all_fields(self) -> None:
        event = RawEvent.from_dict(_data())
        assert event.id == "ab" * 32
        assert event.created_at == 1_700_000_000
        assert event.tags == (("version", "1.2.0"), ("release_channel", "stable"))
        assert event.content == "notes"

    def test_missing_tags(self) -> None:
        data = _data()
        del data["tags"]
        assert RawEvent.from_dict(data).tags == ()

    def test_null_tags_and_content(self) -> None:
        event = RawEvent.from_dict(_data(tags=None, content=None, sig=None))
        assert event.tags == ()
        assert event.content == ""
        assert event.sig == ""

    def test_missing_id_raises_key_error(self) -> None:
        data = _data()
        del data["id"]
        with pytest.raises(KeyError):
            RawEvent.from_dict(data)

    def test_from_json(self) -> None:
        event = RawEvent.from_json(json.dumps(_data()))
        assert event.kind == 1063

    def test_to_dict_round_trip(self) -> None:
        data = _data()
        assert RawEvent.from_dict(data).to_dict() == data

    def test_to_json_is_valid_json(self) -> None:
        event = RawEvent.from_dict(_data())
        assert json.loads(event.to_json())["tags"][0] == ["version", "1.2.0"]


class TestRawEventFromNostrEvent:
    """Tests for RawEvent.from_nostr_event() with a mocked SDK event."""

    def test_reads_sdk_accessors(self) -> None:
        tag = MagicMock()
        tag.as_vec.return_value = ["version", "3.0"]

        sdk_event = MagicMock()
        sdk_event.id.return_value.to_hex.return_value = "11" * 32
        sdk_event.author.return_value.to_hex.return_value = "22" * 32
        sdk_event.created_at.return_value.as_secs.return_value = 1234
        sdk_event.kind.return_value.as_u16.return_value = 1063
        sdk_event.tags.return_value.to_vec.return_value = [tag]
        sdk_event.content.return_value = "release"
        sdk_event.signature.return_value = "33" * 64

        event = RawEvent.from_nostr_event(sdk_event)

        assert event.id == "11" * 32
        assert event.pubkey == "22" * 32
        assert event.created_at == 1234
        assert event.kind == 1063
        assert event.tags == (("version", "3.0"),)
        assert event.content == "release"
        assert event.sig == "33" * 64
