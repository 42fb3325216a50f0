"""Design solutions — model response extraction, repair, normalization,
conversion, and serialization."""

from .errors import SolutionResponseError, ParseError, EmptyResponseError, NoSolutionsError
from .models import (
    RiskLevel, GraphNodeType, GraphEdgeType, WorkflowRelation,
    TraceSourceType, TraceTargetType,
    SolutionModule, SolutionEdge, Milestone, SolutionAssets,
    GraphPort, GraphNode, GraphEndpoint, GraphEdge, ArchitectureGraph,
    WorkflowLane, WorkflowStep, WorkflowEdge, WorkflowGate, TraceLink, RDWorkflow,
    OpenQuestion, DesignSolution,
)
from .extraction import extract_json_payload
from .repair import sanitize_json_text, parse_with_repair
from .normalize import normalize_solution
from .interpret import interpret_payload, interpret_response_text, interpret_provider_response
from .convert import solution_to_catalog, solution_to_topology
from .serialization import solution_to_dict

__all__ = [
    # Errors
    "SolutionResponseError", "ParseError", "EmptyResponseError", "NoSolutionsError",
    # Models
    "RiskLevel", "GraphNodeType", "GraphEdgeType", "WorkflowRelation",
    "TraceSourceType", "TraceTargetType",
    "SolutionModule", "SolutionEdge", "Milestone", "SolutionAssets",
    "GraphPort", "GraphNode", "GraphEndpoint", "GraphEdge", "ArchitectureGraph",
    "WorkflowLane", "WorkflowStep", "WorkflowEdge", "WorkflowGate", "TraceLink",
    "RDWorkflow", "OpenQuestion", "DesignSolution",
    # Extraction / Repair / Normalization
    "extract_json_payload", "sanitize_json_text", "parse_with_repair",
    "normalize_solution",
    # Interpretation
    "interpret_payload", "interpret_response_text", "interpret_provider_response",
    # Conversion / Serialization
    "solution_to_catalog", "solution_to_topology", "solution_to_dict",
]
