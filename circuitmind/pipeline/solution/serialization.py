"""Solution serialization — DesignSolution to the camelCase JSON the
renderers and the project store consume."""

from __future__ import annotations

from .models import (
    ArchitectureGraph, DesignSolution, GraphEdge, GraphNode, GraphPort, OpenQuestion,
    RDWorkflow,
)


def _port_to_dict(p: GraphPort) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "kind": p.kind.value,
        "direction": p.direction.value,
        **({"voltage": p.voltage} if p.voltage else {}),
        **({"maxCurrent": p.max_current} if p.max_current else {}),
        **({"busType": p.bus_type} if p.bus_type else {}),
        **({"levelV": p.level_v} if p.level_v is not None else {}),
    }


def _node_to_dict(n: GraphNode) -> dict:
    return {
        "id": n.id,
        "label": n.label,
        "nodeType": n.node_type.value,
        **({"parentId": n.parent_id} if n.parent_id else {}),
        "ports": [_port_to_dict(p) for p in n.ports],
        **({"summary": n.summary} if n.summary else {}),
        **({"category": n.category} if n.category else {}),
    }


def graph_edge_to_dict(e: GraphEdge) -> dict:
    return {
        "id": e.id,
        "from": {
            "nodeId": e.source.node_id,
            **({"portId": e.source.port_id} if e.source.port_id else {}),
        },
        "to": {
            "nodeId": e.target.node_id,
            **({"portId": e.target.port_id} if e.target.port_id else {}),
        },
        "type": e.type.value,
        "protocolOrSignal": e.protocol_or_signal,
        **({"constraints": e.constraints} if e.constraints else {}),
        "criticality": e.criticality.value,
        "testPoints": e.test_points,
        **({"faultHandling": e.fault_handling} if e.fault_handling else {}),
    }


def graph_to_dict(g: ArchitectureGraph) -> dict:
    return {
        "nodes": [_node_to_dict(n) for n in g.nodes],
        "edges": [graph_edge_to_dict(e) for e in g.edges],
    }


def workflow_to_dict(w: RDWorkflow) -> dict:
    return {
        "lanes": [{"id": lane.id, "name": lane.name} for lane in w.lanes],
        "nodes": [
            {
                "id": n.id,
                "laneId": n.lane_id,
                "name": n.name,
                "inputs": n.inputs,
                "outputs": n.outputs,
                "acceptance": n.acceptance,
                **({"ownerRole": n.owner_role} if n.owner_role else {}),
                **({"durationEstimate": n.duration_estimate} if n.duration_estimate else {}),
            }
            for n in w.nodes
        ],
        "edges": [
            {"fromNodeId": e.from_node_id, "toNodeId": e.to_node_id, "relation": e.relation.value}
            for e in w.edges
        ],
        "gates": [
            {"id": g.id, "name": g.name, "criteria": g.criteria, "evidence": g.evidence}
            for g in w.gates
        ],
        "traceLinks": [
            {"fromType": t.from_type.value, "fromId": t.from_id,
             "toType": t.to_type.value, "toId": t.to_id}
            for t in w.trace_links
        ],
    }


def _question_to_dict(q: OpenQuestion) -> dict:
    return {
        "id": q.id,
        "question": q.question,
        "options": q.options,
        **({"category": q.category} if q.category else {}),
    }


def solution_to_dict(s: DesignSolution) -> dict:
    """Convert a DesignSolution to a JSON-serializable dict."""
    return {
        "id": s.id,
        "name": s.name,
        "positioning": s.positioning,
        "costRange": s.cost_range,
        "durationRange": s.duration_range,
        "riskLevel": s.risk_level.value,
        "highlights": s.highlights,
        "tradeoffs": s.tradeoffs,
        "assumptions": s.assumptions,
        "modules": [
            {
                "id": m.id,
                "name": m.name,
                "summary": m.summary,
                "inputs": m.inputs,
                "outputs": m.outputs,
                "dependencies": m.dependencies,
                "complexity": m.complexity.value,
                "risks": m.risks,
            }
            for m in s.modules
        ],
        "edges": [
            {"source": e.source, "target": e.target, "kind": e.kind,
             "contract": e.contract, "criticality": e.criticality}
            for e in s.edges
        ],
        "milestones": [
            {"name": m.name, "deliverables": m.deliverables, "timeframe": m.timeframe}
            for m in s.milestones
        ],
        "assets": {"flow": s.assets.flow, "ia": s.assets.ia, "wireframes": s.assets.wireframes},
        "generatedAtMs": s.generated_at_ms,
        "architectureL0": graph_to_dict(s.architecture_l0),
        "architectureL1": graph_to_dict(s.architecture_l1),
        "interfaceTable": [graph_edge_to_dict(e) for e in s.interface_table],
        "rdWorkflow": workflow_to_dict(s.rd_workflow),
        "openQuestions": [_question_to_dict(q) for q in s.open_questions],
    }
