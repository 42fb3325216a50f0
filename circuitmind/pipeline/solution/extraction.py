"""Locate the JSON payload inside free-form model output."""

from __future__ import annotations

import re

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def _slice_between(text: str, open_ch: str, close_ch: str) -> str | None:
    """Return text from the first ``open_ch`` to the last ``close_ch``
    inclusive, or None when they are missing or out of order."""
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def extract_json_payload(text: str) -> str:
    """Best-effort JSON substring of a model response.

    Prefers the first fenced code block (with or without a ``json`` tag),
    then an already-clean object/array, then the widest ``{...}`` or
    ``[...]`` slice.  When nothing looks like JSON the text comes back
    unchanged so the parser reports the real problem.  The result is not
    guaranteed to parse.
    """
    match = _FENCE_RE.search(text)
    candidate = match.group(1) if match else text
    trimmed = candidate.strip()

    if (trimmed.startswith("{") and trimmed.endswith("}")) or \
            (trimmed.startswith("[") and trimmed.endswith("]")):
        return trimmed

    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        found = _slice_between(trimmed, open_ch, close_ch)
        if found is not None:
            return found

    found = _slice_between(text, "{", "}")
    if found is not None:
        return found
    return text
