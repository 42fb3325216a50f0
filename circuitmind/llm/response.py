"""Assistant-text extraction for the supported chat providers.

The HTTP call itself lives outside this package; these helpers only read
the decoded JSON body it returns.  They never raise: an unexpected body
yields "" and the interpretation chain reports the empty response.
"""

from __future__ import annotations

from typing import Any

PROVIDERS = ("openai", "anthropic", "gemini")


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _first(value: Any) -> Any:
    return value[0] if isinstance(value, list) and value else None


def _part_text(item: Any) -> str:
    if isinstance(item, str):
        return item
    text = _as_dict(item).get("text")
    return text.strip() if isinstance(text, str) else ""


def _join_parts(content: Any, sep: str) -> str:
    """String content as-is; list of text parts joined; anything else ""."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return sep.join(t for t in (_part_text(c) for c in content) if t.strip())
    return _part_text(content) if isinstance(content, dict) else ""


def _gemini_text(data: Any) -> str:
    candidate = _as_dict(_first(_as_dict(data).get("candidates")))
    parts = _as_dict(candidate.get("content")).get("parts")
    return _join_parts(parts, "") if isinstance(parts, list) else ""


def _openai_text(data: Any) -> str:
    body = _as_dict(data)
    choice = _as_dict(_first(body.get("choices")))
    candidate = next(
        (v for v in (choice.get("message"), choice.get("delta"), body.get("message"),
                     body.get("data"), body.get("result")) if v is not None),
        data,
    )
    if isinstance(candidate, str):
        return candidate
    return _join_parts(_as_dict(candidate).get("content"), "\n")


def _anthropic_text(data: Any) -> str:
    body = _as_dict(data)
    candidate = next(
        (v for v in (body.get("content"), _as_dict(body.get("message")).get("content"),
                     body.get("data"), body.get("result")) if v is not None),
        data,
    )
    return _join_parts(candidate, "\n")


def extract_text_by_provider(provider: str, data: Any) -> str:
    """Assistant text from a decoded ``provider`` response body.

    Unknown provider names are read with the Anthropic rules, which accept
    the widest range of shapes.
    """
    if provider == "gemini":
        return _gemini_text(data)
    if provider == "openai":
        return _openai_text(data)
    return _anthropic_text(data)


def has_structured_payload(data: Any) -> bool:
    """True when the body is already the solutions object (native
    structured output), so text extraction and repair are skipped."""
    body = _as_dict(data)
    return isinstance(body.get("solutions"), list) or isinstance(body.get("assumptions"), list)
