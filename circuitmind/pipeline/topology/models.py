"""Topology dataclasses — the user's placed modules, their wiring, and
the issues the validator reports about them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class TopologyNode:
    id: str
    module_id: str
    label: str
    parent_id: str | None = None        # grouping only; not checked


@dataclass(frozen=True)
class ConnectionEnd:
    node_id: str
    port_id: str


@dataclass(frozen=True)
class Connection:
    """Directed edge between two (node, port) pairs."""
    id: str
    source: ConnectionEnd
    target: ConnectionEnd


@dataclass(frozen=True)
class Topology:
    nodes: tuple[TopologyNode, ...] = ()
    connections: tuple[Connection, ...] = ()


@dataclass(frozen=True)
class ValidationIssue:
    """One topology defect.

    ``id`` is ``<rule>:<connection id>`` for per-connection rules and the
    bare rule tag for topology-wide rules, so an unchanged topology always
    yields the same ids.
    """
    id: str
    rule: str
    severity: Severity
    message: str
    node_ids: tuple[str, ...] = field(default=())
    connection_id: str | None = None
