"""Response interpretation — raw model output to a batch of DesignSolutions.

    provider body ──► assistant text ──► JSON payload ──► parsed value
                 └── structured payload ──────────────────┘      │
                                                    candidates ──► normalize

The chain is stateless.  A caller that retries or cancels a generation
must discard results from superseded attempts itself.
"""

from __future__ import annotations

import logging
from typing import Any

from circuitmind.config import NORMALIZATION_RULES, NormalizationRules
from circuitmind.llm.response import extract_text_by_provider, has_structured_payload

from .coerce import to_list, to_record, to_str_list
from .errors import EmptyResponseError, NoSolutionsError
from .extraction import extract_json_payload
from .models import DesignSolution
from .normalize import normalize_solution, now_ms
from .repair import parse_with_repair

log = logging.getLogger("circuitmind.solution")


def interpret_payload(
    value: Any,
    generated_at_ms: int | None = None,
    rules: NormalizationRules = NORMALIZATION_RULES,
) -> list[DesignSolution]:
    """Normalize an already-decoded payload.

    Accepts either a list of candidate solutions or an object with a
    ``solutions`` list and optional top-level ``assumptions``.  At most
    ``rules.max_solutions`` candidates are kept.

    Raises:
        NoSolutionsError: when no candidate solutions are present.
    """
    record = to_record(value)
    candidates = to_list(value) if record is None else to_list(record.get("solutions"))
    assumptions = to_str_list(record.get("assumptions")) if record is not None else []

    if not candidates:
        raise NoSolutionsError("No solutions found in AI response")
    if len(candidates) > rules.max_solutions:
        log.debug("Keeping %d of %d candidate solutions",
                  rules.max_solutions, len(candidates))

    stamp = now_ms() if generated_at_ms is None else generated_at_ms
    return [
        normalize_solution(candidate, index, assumptions, stamp, rules)
        for index, candidate in enumerate(candidates[:rules.max_solutions])
    ]


def interpret_response_text(
    text: str,
    generated_at_ms: int | None = None,
    rules: NormalizationRules = NORMALIZATION_RULES,
) -> list[DesignSolution]:
    """Extract, repair-parse and normalize free-form assistant text.

    Raises:
        EmptyResponseError: when ``text`` is blank.
        ParseError: when no JSON can be recovered from ``text``.
        NoSolutionsError: when the JSON holds no candidate solutions.
    """
    if not text.strip():
        raise EmptyResponseError("AI returned empty content")
    payload = extract_json_payload(text)
    return interpret_payload(parse_with_repair(payload), generated_at_ms, rules)


def interpret_provider_response(
    provider: str,
    data: Any,
    generated_at_ms: int | None = None,
    rules: NormalizationRules = NORMALIZATION_RULES,
) -> list[DesignSolution]:
    """Interpret a decoded provider response body.

    Bodies that already carry ``solutions``/``assumptions`` (native
    structured output) skip text extraction and repair.
    """
    if has_structured_payload(data):
        return interpret_payload(data, generated_at_ms, rules)
    return interpret_response_text(extract_text_by_provider(provider, data),
                                   generated_at_ms, rules)
