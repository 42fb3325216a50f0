"""Design solution dataclasses — the normalized shape of model output.

Every field is always present and typed.  Text defaults to "", lists to
[], enums to their documented default; nothing is None except the one
numeric optional (``GraphPort.level_v``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from circuitmind.catalog import PortDirection


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GraphNodeType(str, Enum):
    GROUP = "group"
    MODULE = "module"
    SUBMODULE = "submodule"


class GraphEdgeType(str, Enum):
    POWER = "power"
    BUS = "bus"
    IO = "io"
    RF = "rf"
    NET = "net"
    DEBUG = "debug"
    DEPENDENCY = "dependency"


class WorkflowRelation(str, Enum):
    DEPENDS_ON = "depends_on"
    PRODUCES = "produces"
    VERIFIES = "verifies"


class TraceSourceType(str, Enum):
    REQUIREMENT = "requirement"
    WORKFLOW_NODE = "workflow_node"
    TEST = "test"


class TraceTargetType(str, Enum):
    L0_NODE = "l0_node"
    L0_EDGE = "l0_edge"
    L1_NODE = "l1_node"
    L1_EDGE = "l1_edge"
    GATE = "gate"


# ── Solution body ──────────────────────────────────────────────────

@dataclass
class SolutionModule:
    id: str
    name: str
    summary: str = ""
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    complexity: RiskLevel = RiskLevel.MEDIUM
    risks: list[str] = field(default_factory=list)


@dataclass
class SolutionEdge:
    source: str = ""                    # SolutionModule.id
    target: str = ""
    kind: str = ""
    contract: str = ""
    criticality: str = ""


@dataclass
class Milestone:
    name: str = ""
    deliverables: list[str] = field(default_factory=list)
    timeframe: str = ""


@dataclass
class SolutionAssets:
    flow: str = ""
    ia: str = ""                        # information architecture
    wireframes: list[str] = field(default_factory=list)


# ── Architecture graph (L0 / L1) ───────────────────────────────────

@dataclass
class GraphPort:
    id: str
    name: str = ""
    kind: GraphEdgeType = GraphEdgeType.IO
    direction: PortDirection = PortDirection.BIDIRECTIONAL
    voltage: str = ""                   # free text, e.g. "3.3V"
    max_current: str = ""
    bus_type: str = ""
    level_v: float | None = None


@dataclass
class GraphNode:
    id: str
    label: str = ""
    node_type: GraphNodeType = GraphNodeType.MODULE
    parent_id: str = ""                 # "" = top level
    ports: list[GraphPort] = field(default_factory=list)
    summary: str = ""
    category: str = ""


@dataclass
class GraphEndpoint:
    node_id: str = ""
    port_id: str = ""


@dataclass
class GraphEdge:
    id: str
    source: GraphEndpoint = field(default_factory=GraphEndpoint)
    target: GraphEndpoint = field(default_factory=GraphEndpoint)
    type: GraphEdgeType = GraphEdgeType.DEPENDENCY
    protocol_or_signal: str = ""
    criticality: RiskLevel = RiskLevel.MEDIUM
    constraints: str = ""
    test_points: list[str] = field(default_factory=list)
    fault_handling: str = ""


@dataclass
class ArchitectureGraph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)


# ── R&D workflow ───────────────────────────────────────────────────

@dataclass
class WorkflowLane:
    id: str
    name: str = ""


@dataclass
class WorkflowStep:
    id: str
    lane_id: str = ""
    name: str = ""
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    acceptance: list[str] = field(default_factory=list)
    owner_role: str = ""
    duration_estimate: str = ""


@dataclass
class WorkflowEdge:
    from_node_id: str = ""
    to_node_id: str = ""
    relation: WorkflowRelation = WorkflowRelation.DEPENDS_ON


@dataclass
class WorkflowGate:
    id: str
    name: str = ""
    criteria: list[str] = field(default_factory=list)
    evidence: list[str] = field(default_factory=list)


@dataclass
class TraceLink:
    from_type: TraceSourceType = TraceSourceType.REQUIREMENT
    from_id: str = ""
    to_type: TraceTargetType = TraceTargetType.L1_NODE
    to_id: str = ""


@dataclass
class RDWorkflow:
    lanes: list[WorkflowLane] = field(default_factory=list)
    nodes: list[WorkflowStep] = field(default_factory=list)
    edges: list[WorkflowEdge] = field(default_factory=list)
    gates: list[WorkflowGate] = field(default_factory=list)
    trace_links: list[TraceLink] = field(default_factory=list)


@dataclass
class OpenQuestion:
    id: str
    question: str = ""
    options: list[str] = field(default_factory=list)
    category: str = ""


# ── Top level ──────────────────────────────────────────────────────

@dataclass
class DesignSolution:
    id: str
    name: str
    positioning: str
    cost_range: str
    duration_range: str
    risk_level: RiskLevel
    highlights: list[str]
    tradeoffs: list[str]
    assumptions: list[str]
    modules: list[SolutionModule]
    edges: list[SolutionEdge]
    milestones: list[Milestone]
    assets: SolutionAssets
    generated_at_ms: int
    architecture_l0: ArchitectureGraph = field(default_factory=ArchitectureGraph)
    architecture_l1: ArchitectureGraph = field(default_factory=ArchitectureGraph)
    interface_table: list[GraphEdge] = field(default_factory=list)
    rd_workflow: RDWorkflow = field(default_factory=RDWorkflow)
    open_questions: list[OpenQuestion] = field(default_factory=list)
