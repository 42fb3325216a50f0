"""Topology serialization — convert topologies and issues to JSON-safe dicts."""

from __future__ import annotations

from .models import Topology, ValidationIssue


def topology_to_dict(topology: Topology) -> dict:
    """Convert a Topology to the editor's camelCase JSON shape."""
    return {
        "nodes": [
            {
                "id": n.id,
                "moduleId": n.module_id,
                "label": n.label,
                **({"parentId": n.parent_id} if n.parent_id else {}),
            }
            for n in topology.nodes
        ],
        "connections": [
            {
                "id": c.id,
                "from": {"nodeId": c.source.node_id, "portId": c.source.port_id},
                "to": {"nodeId": c.target.node_id, "portId": c.target.port_id},
            }
            for c in topology.connections
        ],
    }


def issue_to_dict(issue: ValidationIssue) -> dict:
    return {
        "id": issue.id,
        "rule": issue.rule,
        "severity": issue.severity.value,
        "message": issue.message,
        **({"nodeIds": list(issue.node_ids)} if issue.node_ids else {}),
        **({"connectionId": issue.connection_id} if issue.connection_id else {}),
    }


def issues_to_dict(issues: list[ValidationIssue]) -> list[dict]:
    """Convert a validator result to a JSON-serializable list."""
    return [issue_to_dict(i) for i in issues]
