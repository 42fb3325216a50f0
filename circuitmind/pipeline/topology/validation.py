"""Topology validation — check a user topology against the module catalog."""

from __future__ import annotations

from dataclasses import dataclass

from circuitmind.catalog import BusPort, BusType, CatalogResult, Port, PortDirection, PowerPort
from circuitmind.config import VALIDATION_RULES, ValidationRules

from .models import Connection, Severity, Topology, TopologyNode, ValidationIssue


# Rule tags (also the prefix of every issue id)
MISSING_NODE = "missing-node"
MISSING_MODULE = "missing-module"
MISSING_PORT = "missing-port"
KIND_MISMATCH = "kind-mismatch"
POWER_VOLTAGE_MISMATCH = "power-voltage-mismatch"
POWER_DIRECTION = "power-direction"
BUS_MISMATCH = "bus-mismatch"
I2C_PULLUP_MISSING = "i2c-pullup-missing"

_STRUCTURAL_MESSAGES = {
    MISSING_NODE: "Connection references a non-existent module instance",
    MISSING_MODULE: "Connection references a module that is not in the catalog",
    MISSING_PORT: "Connection references a port that does not exist on its module",
}


@dataclass(frozen=True)
class _Endpoint:
    node: TopologyNode
    port: Port


def _issue(rule: str, severity: Severity, message: str, connection: Connection,
           node_ids: tuple[str, ...] = ()) -> ValidationIssue:
    return ValidationIssue(
        id=f"{rule}:{connection.id}",
        rule=rule,
        severity=severity,
        message=message,
        node_ids=node_ids,
        connection_id=connection.id,
    )


def _resolve(connection: Connection, nodes_by_id: dict[str, TopologyNode],
             catalog: CatalogResult) -> tuple[str, tuple[_Endpoint, _Endpoint] | None]:
    """Resolve both endpoints of a connection down to catalog ports.

    Returns ``("", (source, target))`` on success, or the tag of the first
    structural failure and None.
    """
    src_node = nodes_by_id.get(connection.source.node_id)
    dst_node = nodes_by_id.get(connection.target.node_id)
    if src_node is None or dst_node is None:
        return MISSING_NODE, None

    src_module = catalog.get_module(src_node.module_id)
    dst_module = catalog.get_module(dst_node.module_id)
    if src_module is None or dst_module is None:
        return MISSING_MODULE, None

    src_port = src_module.get_port(connection.source.port_id)
    dst_port = dst_module.get_port(connection.target.port_id)
    if src_port is None or dst_port is None:
        return MISSING_PORT, None

    return "", (_Endpoint(src_node, src_port), _Endpoint(dst_node, dst_port))


def _check_connection(connection: Connection, nodes_by_id: dict[str, TopologyNode],
                      catalog: CatalogResult, rules: ValidationRules) -> list[ValidationIssue]:
    failure, ends = _resolve(connection, nodes_by_id, catalog)

    # ── Structural failures stop all further checks for this connection ──
    if ends is None:
        return [_issue(failure, Severity.ERROR, _STRUCTURAL_MESSAGES[failure], connection)]

    source, target = ends
    src, dst = source.port, target.port
    node_ids = (source.node.id, target.node.id)

    if src.kind is not dst.kind:
        return [_issue(KIND_MISMATCH, Severity.ERROR,
                       f"Port kind mismatch: {src.kind.value} → {dst.kind.value}",
                       connection, node_ids)]

    issues: list[ValidationIssue] = []

    # ── Power rails ──
    if isinstance(src, PowerPort) and isinstance(dst, PowerPort):
        if abs(src.voltage_v - dst.voltage_v) > rules.voltage_tolerance_v:
            issues.append(_issue(
                POWER_VOLTAGE_MISMATCH, Severity.ERROR,
                f"Power voltage mismatch: {src.voltage_v:g}V → {dst.voltage_v:g}V",
                connection, node_ids))
        # Independent of the voltage check; both may fire.
        if src.direction is PortDirection.IN:
            issues.append(_issue(
                POWER_DIRECTION, Severity.WARNING,
                "Power should flow from an 'out' port to an 'in' port "
                "(the source port is an input)",
                connection))

    # ── Buses ──
    elif isinstance(src, BusPort) and isinstance(dst, BusPort):
        if src.bus is not dst.bus:
            issues.append(_issue(
                BUS_MISMATCH, Severity.ERROR,
                f"Bus type mismatch: {src.bus.value} → {dst.bus.value}",
                connection, node_ids))

    return issues


def _is_i2c_pair(connection: Connection, nodes_by_id: dict[str, TopologyNode],
                 catalog: CatalogResult) -> bool:
    _, ends = _resolve(connection, nodes_by_id, catalog)
    if ends is None:
        return False
    src, dst = ends[0].port, ends[1].port
    return (
        isinstance(src, BusPort) and isinstance(dst, BusPort)
        and src.bus is BusType.I2C and dst.bus is BusType.I2C
    )


def validate_topology(topology: Topology, catalog: CatalogResult,
                      rules: ValidationRules = VALIDATION_RULES) -> list[ValidationIssue]:
    """Validate a Topology against the catalog.

    Returns issues in connection order, followed by the topology-wide I2C
    pull-up check.  Never raises for missing nodes, modules or ports; those
    are reported as issues.  Pure: the inputs are not modified.
    """
    nodes_by_id = {n.id: n for n in topology.nodes}
    issues: list[ValidationIssue] = []

    for connection in topology.connections:
        issues.extend(_check_connection(connection, nodes_by_id, catalog, rules))

    # ── I2C pull-ups (one warning for the whole topology) ──
    uses_i2c = any(_is_i2c_pair(c, nodes_by_id, catalog) for c in topology.connections)
    if uses_i2c:
        has_pullup = any(n.module_id == rules.i2c_pullup_module_id for n in topology.nodes)
        if not has_pullup:
            issues.append(ValidationIssue(
                id=I2C_PULLUP_MISSING,
                rule=I2C_PULLUP_MISSING,
                severity=Severity.WARNING,
                message="I2C connection detected; add the I2C Pull-up module",
            ))

    return issues


def has_blocking_issues(issues: list[ValidationIssue]) -> bool:
    """True when any issue is an error, i.e. the topology must not be
    handed to generation yet."""
    return any(i.severity is Severity.ERROR for i in issues)
