"""Nostr Implementation Possibilities -- protocol-specific parsing logic.

The NIPs layer sits in the middle of the diamond DAG, depending only on
[tollgate_releases.models][tollgate_releases.models]. Unlike the relay
adapters in [tollgate_releases.utils][tollgate_releases.utils] it performs
no I/O: it reads the tag arrays of NIP-94 file metadata events.

Warning:
    Parsing functions **never raise** for malformed tags. Absent, short or
    mistyped tag rows resolve to the documented default values.

Attributes:
    extract_field: Tag-row lookup over a raw event.
    classify: Product type classifier.
    get_release_view: Typed release projection.
"""

from tollgate_releases.nips.nip94 import classify, extract_field, get_release_view


__all__ = [
    "classify",
    "extract_field",
    "get_release_view",
]
