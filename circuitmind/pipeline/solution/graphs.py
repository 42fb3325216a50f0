"""Normalizers for the nested graphs of a solution — L0/L1 architecture,
R&D workflow, and open questions.

Same contract as the top-level normalizer: any JSON value in, a fully
populated dataclass out, ids synthesized from position when missing.
"""

from __future__ import annotations

from typing import Any

from .coerce import pick, str_or, to_list, to_number, to_record, to_str_list
from .models import (
    ArchitectureGraph, GraphEdge, GraphEdgeType, GraphEndpoint, GraphNode, GraphPort,
    OpenQuestion, RDWorkflow, TraceLink, WorkflowEdge, WorkflowGate, WorkflowLane,
    WorkflowStep,
)
from .vocabulary import (
    normalize_direction, normalize_edge_type, normalize_node_type, normalize_relation,
    normalize_risk_level, normalize_trace_source, normalize_trace_target,
)


# ── Architecture graph ─────────────────────────────────────────────

def normalize_graph_port(value: Any, index: int = 0) -> GraphPort | None:
    """Port entries that are not objects are dropped (None)."""
    record = to_record(value)
    if record is None:
        return None
    return GraphPort(
        id=str_or(record.get("id"), f"port_{index + 1}"),
        name=str_or(record.get("name"), ""),
        kind=normalize_edge_type(pick(record, "kind", "type"), GraphEdgeType.IO),
        direction=normalize_direction(pick(record, "direction", "dir")),
        voltage=str_or(record.get("voltage"), ""),
        max_current=str_or(pick(record, "maxCurrent", "max_current"), ""),
        bus_type=str_or(pick(record, "busType", "bus_type"), ""),
        level_v=to_number(pick(record, "levelV", "level_v")),
    )


def normalize_graph_node(value: Any, index: int = 0) -> GraphNode:
    record = to_record(value) or {}
    ports = [
        port for port in (
            normalize_graph_port(p, i) for i, p in enumerate(to_list(record.get("ports")))
        )
        if port is not None
    ]
    return GraphNode(
        id=str_or(record.get("id"), f"node_{index + 1}"),
        label=str_or(pick(record, "label", "name"), ""),
        node_type=normalize_node_type(pick(record, "nodeType", "node_type")),
        parent_id=str_or(pick(record, "parentId", "parent_id"), ""),
        ports=ports,
        summary=str_or(record.get("summary"), ""),
        category=str_or(record.get("category"), ""),
    )


def _normalize_endpoint(value: Any) -> GraphEndpoint:
    """``{"nodeId", "portId"}`` object, or a bare node id string."""
    record = to_record(value)
    if record is None:
        return GraphEndpoint(node_id=str_or(value, ""))
    return GraphEndpoint(
        node_id=str_or(pick(record, "nodeId", "node_id"), ""),
        port_id=str_or(pick(record, "portId", "port_id"), ""),
    )


def normalize_graph_edge(value: Any, index: int = 0) -> GraphEdge:
    record = to_record(value) or {}
    return GraphEdge(
        id=str_or(record.get("id"), f"edge_{index + 1}"),
        source=_normalize_endpoint(pick(record, "from", "source")),
        target=_normalize_endpoint(pick(record, "to", "target")),
        type=normalize_edge_type(pick(record, "type", "kind"), GraphEdgeType.DEPENDENCY),
        protocol_or_signal=str_or(pick(record, "protocolOrSignal", "protocol_or_signal"), ""),
        criticality=normalize_risk_level(record.get("criticality")),
        constraints=str_or(record.get("constraints"), ""),
        test_points=to_str_list(pick(record, "testPoints", "test_points")),
        fault_handling=str_or(pick(record, "faultHandling", "fault_handling"), ""),
    )


def normalize_graph_edges(value: Any) -> list[GraphEdge]:
    return [normalize_graph_edge(e, i) for i, e in enumerate(to_list(value))]


def normalize_architecture_graph(value: Any) -> ArchitectureGraph:
    """Missing or non-object graphs normalize to an empty graph."""
    record = to_record(value) or {}
    return ArchitectureGraph(
        nodes=[normalize_graph_node(n, i) for i, n in enumerate(to_list(record.get("nodes")))],
        edges=normalize_graph_edges(record.get("edges")),
    )


# ── R&D workflow ───────────────────────────────────────────────────

def normalize_workflow_lane(value: Any, index: int = 0) -> WorkflowLane:
    record = to_record(value) or {}
    return WorkflowLane(
        id=str_or(record.get("id"), f"lane_{index + 1}"),
        name=str_or(record.get("name"), ""),
    )


def normalize_workflow_step(value: Any, index: int = 0) -> WorkflowStep:
    record = to_record(value) or {}
    return WorkflowStep(
        id=str_or(record.get("id"), f"wfnode_{index + 1}"),
        lane_id=str_or(pick(record, "laneId", "lane_id"), ""),
        name=str_or(record.get("name"), ""),
        inputs=to_str_list(record.get("inputs")),
        outputs=to_str_list(record.get("outputs")),
        acceptance=to_str_list(record.get("acceptance")),
        owner_role=str_or(pick(record, "ownerRole", "owner_role"), ""),
        duration_estimate=str_or(pick(record, "durationEstimate", "duration_estimate"), ""),
    )


def normalize_workflow_edge(value: Any) -> WorkflowEdge:
    record = to_record(value) or {}
    return WorkflowEdge(
        from_node_id=str_or(pick(record, "fromNodeId", "from_node_id"), ""),
        to_node_id=str_or(pick(record, "toNodeId", "to_node_id"), ""),
        relation=normalize_relation(record.get("relation")),
    )


def normalize_workflow_gate(value: Any, index: int = 0) -> WorkflowGate:
    record = to_record(value) or {}
    return WorkflowGate(
        id=str_or(record.get("id"), f"gate_{index + 1}"),
        name=str_or(record.get("name"), ""),
        criteria=to_str_list(record.get("criteria")),
        evidence=to_str_list(record.get("evidence")),
    )


def normalize_trace_link(value: Any) -> TraceLink:
    record = to_record(value) or {}
    return TraceLink(
        from_type=normalize_trace_source(pick(record, "fromType", "from_type")),
        from_id=str_or(pick(record, "fromId", "from_id"), ""),
        to_type=normalize_trace_target(pick(record, "toType", "to_type")),
        to_id=str_or(pick(record, "toId", "to_id"), ""),
    )


def normalize_rd_workflow(value: Any) -> RDWorkflow:
    """Missing or non-object workflows normalize to an empty workflow."""
    record = to_record(value) or {}
    return RDWorkflow(
        lanes=[normalize_workflow_lane(v, i) for i, v in enumerate(to_list(record.get("lanes")))],
        nodes=[normalize_workflow_step(v, i) for i, v in enumerate(to_list(record.get("nodes")))],
        edges=[normalize_workflow_edge(v) for v in to_list(record.get("edges"))],
        gates=[normalize_workflow_gate(v, i) for i, v in enumerate(to_list(record.get("gates")))],
        trace_links=[normalize_trace_link(v)
                     for v in to_list(pick(record, "traceLinks", "trace_links"))],
    )


# ── Open questions ─────────────────────────────────────────────────

def normalize_open_question(value: Any, index: int = 0) -> OpenQuestion:
    record = to_record(value)
    if record is None:
        # A bare string is the question itself.
        return OpenQuestion(id=f"q_{index + 1}", question=str_or(value, ""))
    return OpenQuestion(
        id=str_or(record.get("id"), f"q_{index + 1}"),
        question=str_or(pick(record, "question", "text"), ""),
        options=to_str_list(record.get("options")),
        category=str_or(record.get("category"), ""),
    )


def normalize_open_questions(value: Any, limit: int) -> list[OpenQuestion]:
    """Normalize every entry, then keep the first ``limit``."""
    questions = [normalize_open_question(q, i) for i, q in enumerate(to_list(value))]
    return questions[:limit]
