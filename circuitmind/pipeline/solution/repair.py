"""Lenient JSON parsing for model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .errors import ParseError

log = logging.getLogger("circuitmind.solution")

_FENCE_MARKER_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")

# JSONDecodeError is a ValueError; int-digit limits raise a bare ValueError.
_DECODE_ERRORS = (ValueError, RecursionError)


def sanitize_json_text(text: str) -> str:
    """Apply the textual repairs, in order: leading BOM, stray code-fence
    markers, trailing commas before ``}``/``]``, surrounding whitespace."""
    if text.startswith("\ufeff"):
        text = text[1:]
    text = _FENCE_MARKER_RE.sub("", text)
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    return text.strip()


def parse_with_repair(text: str) -> Any:
    """Parse ``text`` as JSON, retrying once on a repaired copy.

    Raises ParseError when the repaired copy does not parse either.  Decoder
    limits (oversized integers, deep nesting) count as parse failures.
    """
    try:
        return json.loads(text)
    except _DECODE_ERRORS as first:
        log.debug("Strict JSON parse failed (%s), retrying after repairs", first)
        try:
            return json.loads(sanitize_json_text(text))
        except _DECODE_ERRORS as second:
            raise ParseError(str(second), first_error=str(first), text=text) from second
