"""Coercion primitives for untyped decoded JSON.

Every helper here is total: any JSON-shaped value goes in, a value of the
promised type (or None where documented) comes out.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, TypeVar

E = TypeVar("E", bound=Enum)


def to_record(value: Any) -> dict | None:
    """Return ``value`` if it is a JSON object, else None."""
    return value if isinstance(value, dict) else None


def to_list(value: Any) -> list:
    """Return ``value`` if it is a JSON array, else an empty list."""
    return value if isinstance(value, list) else []


def pick(record: dict, *names: str) -> Any:
    """First value under ``names`` that is present and not null."""
    for name in names:
        value = record.get(name)
        if value is not None:
            return value
    return None


def _number_text(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_str(value: Any) -> str | None:
    """Non-blank stripped string, number rendered as text, or None."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _number_text(value)
    return None


def str_or(value: Any, default: str) -> str:
    text = to_str(value)
    return default if text is None else text


def _item_text(item: Any) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, bool):
        return "true" if item else "false"
    if isinstance(item, (int, float)):
        return _number_text(item)
    if item is None:
        return ""
    return json.dumps(item, ensure_ascii=False, separators=(",", ":"))


def to_str_list(value: Any) -> list[str]:
    """Array → each element as text, blanks dropped; scalar → one-element
    list; anything else → empty list."""
    if isinstance(value, list):
        return [text for text in (_item_text(v) for v in value) if text]
    text = to_str(value)
    return [text] if text is not None else []


def to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def match_enum(value: Any, table: tuple[tuple[E, tuple[str, ...]], ...], default: E) -> E:
    """Case-insensitive substring match against an ordered table.

    The raw text is first compared to each member's value exactly, then
    scanned for each row's needles in table order.  Unrecognised or
    non-text input yields ``default``.
    """
    raw = (to_str(value) or "").lower()
    if not raw:
        return default
    for member, _ in table:
        if raw == member.value:
            return member
    for member, needles in table:
        if any(n in raw for n in needles):
            return member
    return default
