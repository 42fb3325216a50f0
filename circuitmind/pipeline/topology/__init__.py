"""User topology — dataclasses, parsing, validation, and serialization."""

from .models import (
    Severity, TopologyNode, ConnectionEnd, Connection, Topology, ValidationIssue,
)
from .parsing import parse_topology
from .validation import validate_topology, has_blocking_issues
from .serialization import topology_to_dict, issue_to_dict, issues_to_dict

__all__ = [
    # Models
    "Severity", "TopologyNode", "ConnectionEnd", "Connection", "Topology",
    "ValidationIssue",
    # Parsing / Validation / Serialization
    "parse_topology", "validate_topology", "has_blocking_issues",
    "topology_to_dict", "issue_to_dict", "issues_to_dict",
]
