"""Topology parsing — convert the editor's JSON into a Topology."""

from __future__ import annotations

from .models import Connection, ConnectionEnd, Topology, TopologyNode


def _first(data: dict, *keys: str):
    """Return the value under the first key present, else raise KeyError."""
    for k in keys:
        if k in data:
            return data[k]
    raise KeyError(keys[0])


def _parse_end(data: dict) -> ConnectionEnd:
    return ConnectionEnd(
        node_id=str(_first(data, "nodeId", "node_id")),
        port_id=str(_first(data, "portId", "port_id")),
    )


def parse_topology(data: dict) -> Topology:
    """Parse a raw dict (from JSON / request body) into a Topology.

    Accepts the editor's camelCase keys and their snake_case spellings.
    Raises KeyError/TypeError/ValueError on malformed input.
    """
    if not isinstance(data, dict):
        raise TypeError("Topology must be a JSON object")

    nodes = tuple(
        TopologyNode(
            id=str(n["id"]),
            module_id=str(_first(n, "moduleId", "module_id")),
            label=str(n.get("label", n["id"])),
            parent_id=n.get("parentId", n.get("parent_id")),
        )
        for n in data.get("nodes", [])
    )

    connections = tuple(
        Connection(
            id=str(c["id"]),
            source=_parse_end(_first(c, "from", "source")),
            target=_parse_end(_first(c, "to", "target")),
        )
        for c in data.get("connections", [])
    )

    return Topology(nodes=nodes, connections=connections)
