"""Solution normalization — turn one decoded candidate into a DesignSolution.

Models rename, drop and mistype fields freely.  Each field is read under
its primary name and then its alias, coerced to its type, and replaced
by a fixed default when still unusable.  The functions here never raise
for JSON-shaped input.

Aliases accepted at the solution level:

    positioning     position
    costRange       cost, cost_range
    durationRange   duration, duration_range
    riskLevel       risk_level, risk
    highlights      highlight
    tradeoffs       tradeoff
    modules         moduleList
    edges           links
    milestones      milestone
    assets          asset  (then the solution object itself)
"""

from __future__ import annotations

import time
from typing import Any, Sequence

from circuitmind.config import NORMALIZATION_RULES, NormalizationRules

from .coerce import pick, str_or, to_list, to_record, to_str_list
from .graphs import (
    normalize_architecture_graph, normalize_graph_edges, normalize_open_questions,
    normalize_rd_workflow,
)
from .models import DesignSolution, Milestone, SolutionAssets, SolutionEdge, SolutionModule
from .vocabulary import normalize_risk_level


def normalize_solution_module(value: Any, index: int = 0) -> SolutionModule:
    record = to_record(value) or {}
    return SolutionModule(
        id=str_or(record.get("id"), f"mod_{index + 1}"),
        name=str_or(record.get("name"), f"Module {index + 1}"),
        summary=str_or(record.get("summary"), ""),
        inputs=to_str_list(pick(record, "inputs", "input")),
        outputs=to_str_list(pick(record, "outputs", "output")),
        dependencies=to_str_list(pick(record, "dependencies", "dependency")),
        complexity=normalize_risk_level(record.get("complexity")),
        risks=to_str_list(pick(record, "risks", "risk")),
    )


def normalize_solution_edge(value: Any) -> SolutionEdge:
    record = to_record(value) or {}
    return SolutionEdge(
        source=str_or(pick(record, "source", "from"), ""),
        target=str_or(pick(record, "target", "to"), ""),
        kind=str_or(pick(record, "kind", "type"), ""),
        contract=str_or(record.get("contract"), ""),
        criticality=str_or(record.get("criticality"), ""),
    )


def normalize_milestone(value: Any) -> Milestone:
    record = to_record(value) or {}
    return Milestone(
        name=str_or(record.get("name"), ""),
        deliverables=to_str_list(pick(record, "deliverables", "deliverable")),
        timeframe=str_or(record.get("timeframe"), ""),
    )


def normalize_assets(value: Any) -> SolutionAssets:
    record = to_record(value) or {}
    return SolutionAssets(
        flow=str_or(record.get("flow"), ""),
        ia=str_or(record.get("ia"), ""),
        wireframes=to_str_list(pick(record, "wireframes", "wireframe")),
    )


def now_ms() -> int:
    return int(time.time() * 1000)


def normalize_solution(
    value: Any,
    index: int = 0,
    fallback_assumptions: Sequence[str] | None = None,
    generated_at_ms: int | None = None,
    rules: NormalizationRules = NORMALIZATION_RULES,
) -> DesignSolution:
    """Normalize one candidate solution.

    Args:
        value: Decoded JSON for the candidate; non-objects yield defaults.
        index: Position of the candidate in its batch, used for fallback
            ids and names.
        fallback_assumptions: Batch-level assumptions, used when the
            candidate has none of its own.
        generated_at_ms: Timestamp stamped on the result; defaults to now.
        rules: Normalization limits.

    Returns:
        A DesignSolution with every field populated.
    """
    record = to_record(value) or {}

    assumptions = to_str_list(record.get("assumptions"))
    if not assumptions:
        assumptions = to_str_list(list(fallback_assumptions or []))

    assets_source = pick(record, "assets", "asset")
    if to_record(assets_source) is None:
        # Some answers put flow/ia/wireframes directly on the solution.
        assets_source = record

    modules = to_list(pick(record, "modules", "moduleList"))

    return DesignSolution(
        id=str_or(record.get("id"), f"sol_{index + 1}"),
        name=str_or(record.get("name"), f"Solution {index + 1}"),
        positioning=str_or(pick(record, "positioning", "position"), "Balanced"),
        cost_range=str_or(pick(record, "costRange", "cost", "cost_range"), "TBD"),
        duration_range=str_or(pick(record, "durationRange", "duration", "duration_range"), "TBD"),
        risk_level=normalize_risk_level(pick(record, "riskLevel", "risk_level", "risk")),
        highlights=to_str_list(pick(record, "highlights", "highlight")),
        tradeoffs=to_str_list(pick(record, "tradeoffs", "tradeoff")),
        assumptions=assumptions,
        modules=[normalize_solution_module(m, i) for i, m in enumerate(modules)],
        edges=[normalize_solution_edge(e) for e in to_list(pick(record, "edges", "links"))],
        milestones=[normalize_milestone(m)
                    for m in to_list(pick(record, "milestones", "milestone"))],
        assets=normalize_assets(assets_source),
        generated_at_ms=now_ms() if generated_at_ms is None else generated_at_ms,
        architecture_l0=normalize_architecture_graph(
            pick(record, "architectureL0", "architecture_l0")),
        architecture_l1=normalize_architecture_graph(
            pick(record, "architectureL1", "architecture_l1")),
        interface_table=normalize_graph_edges(pick(record, "interfaceTable", "interface_table")),
        rd_workflow=normalize_rd_workflow(pick(record, "rdWorkflow", "rd_workflow")),
        open_questions=normalize_open_questions(
            pick(record, "openQuestions", "open_questions"), rules.max_open_questions),
    )
