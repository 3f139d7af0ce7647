"""Shared validation helpers for frozen dataclass models.

Private module, not part of the public API. Used by ``__post_init__``
methods in sibling model modules to enforce runtime type constraints on
the envelope fields, and to normalise untrusted tag arrays into an
immutable shape without ever raising.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_timestamp(value: Any, name: str) -> None:
    """Raise if *value* is not a non-negative ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_str_no_null(value: Any, name: str) -> None:
    """Raise if *value* is not a ``str`` or contains null bytes."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if "\x00" in value:
        raise ValueError(f"{name} contains null bytes")


def freeze_tags(tags: Any) -> tuple[tuple[str, ...], ...]:
    """Normalise a raw tag array into a tuple of string tuples.

    Never raises. ``None`` and non-iterable inputs yield an empty tuple,
    rows that are not sequences are dropped, and so are rows whose first
    cell is not a string. Strings are not treated as rows even though they
    are iterable.

    Cell positions are preserved: a non-string cell becomes ``""``, which
    tag accessors read as an absent value.

    Args:
        tags: Raw ``tags`` value from an event (usually ``list[list[str]]``).

    Returns:
        Immutable tag rows in their original order.
    """
    if tags is None or isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
        return ()

    rows: list[tuple[str, ...]] = []
    for row in tags:
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            continue
        cells = tuple(row)
        if cells and not isinstance(cells[0], str):
            continue
        rows.append(tuple(cell if isinstance(cell, str) else "" for cell in cells))
    return tuple(rows)
