"""Enum vocabularies for model output.

Models answer in whatever words they like ("High risk", "中", "TX",
"uses I2C").  Each table maps an enum member to the substrings that
select it; rows are tried in order, so more specific rows come first.
"""

from __future__ import annotations

import re
from typing import Any

from circuitmind.catalog import PortDirection

from .coerce import match_enum, to_str
from .models import (
    GraphEdgeType, GraphNodeType, RiskLevel, TraceSourceType, TraceTargetType,
    WorkflowRelation,
)

RISK_LEVELS = (
    (RiskLevel.LOW, ("low", "低")),
    (RiskLevel.HIGH, ("high", "高")),
    (RiskLevel.MEDIUM, ("medium", "mid", "中")),
)

PORT_DIRECTIONS = (
    (PortDirection.BIDIRECTIONAL, ("bidir", "bi-dir", "both", "inout", "in/out", "i/o",
                                   "input/output", "双向")),
    (PortDirection.OUT, ("output", "tx", "输出")),
    (PortDirection.IN, ("input", "rx", "输入")),
)

# Bare "in" and "out" only count as whole words ("power in", not "main").
_WORD_RE = re.compile(r"[a-z]+")

# "rf", "net" and "io" are too short to search for inside other words;
# they only match exactly.
EDGE_TYPES = (
    (GraphEdgeType.DEPENDENCY, ("depend", "依赖")),
    (GraphEdgeType.DEBUG, ("debug", "swd", "jtag", "调试")),
    (GraphEdgeType.RF, ("radio", "wireless", "antenna", "wifi", "lora", "射频")),
    (GraphEdgeType.NET, ("network", "ethernet", "网络")),
    (GraphEdgeType.POWER, ("power", "pwr", "vcc", "supply", "电源")),
    (GraphEdgeType.BUS, ("bus", "i2c", "spi", "uart", "usb", "总线")),
    (GraphEdgeType.IO, ("gpio", "signal", "adc", "pwm", "信号")),
)

NODE_TYPES = (
    (GraphNodeType.SUBMODULE, ("sub", "component", "chip", "device", "器件")),
    (GraphNodeType.GROUP, ("group", "cluster", "组")),
    (GraphNodeType.MODULE, ("module", "模块")),
)

WORKFLOW_RELATIONS = (
    (WorkflowRelation.VERIFIES, ("verif", "test", "validat", "验证")),
    (WorkflowRelation.PRODUCES, ("produc", "output", "产出", "生成")),
    (WorkflowRelation.DEPENDS_ON, ("depend", "require", "依赖")),
)

TRACE_SOURCES = (
    (TraceSourceType.WORKFLOW_NODE, ("workflow", "node", "step")),
    (TraceSourceType.TEST, ("test",)),
    (TraceSourceType.REQUIREMENT, ("req",)),
)

TRACE_TARGETS = (
    (TraceTargetType.GATE, ("gate",)),
    (TraceTargetType.L0_EDGE, ("l0_edge", "l0 edge", "l0edge")),
    (TraceTargetType.L0_NODE, ("l0",)),
    (TraceTargetType.L1_EDGE, ("l1_edge", "l1 edge", "l1edge", "edge")),
    (TraceTargetType.L1_NODE, ("l1", "node")),
)


def normalize_risk_level(value: Any) -> RiskLevel:
    """Risk or complexity label → RiskLevel, ``medium`` when unrecognised."""
    return match_enum(value, RISK_LEVELS, RiskLevel.MEDIUM)


def normalize_direction(value: Any) -> PortDirection:
    matched = match_enum(value, PORT_DIRECTIONS, None)
    if matched is not None:
        return matched
    words = set(_WORD_RE.findall((to_str(value) or "").lower()))
    if "out" in words and "in" not in words:
        return PortDirection.OUT
    if "in" in words and "out" not in words:
        return PortDirection.IN
    return PortDirection.BIDIRECTIONAL


def normalize_edge_type(value: Any, default: GraphEdgeType) -> GraphEdgeType:
    return match_enum(value, EDGE_TYPES, default)


def normalize_node_type(value: Any) -> GraphNodeType:
    return match_enum(value, NODE_TYPES, GraphNodeType.MODULE)


def normalize_relation(value: Any) -> WorkflowRelation:
    return match_enum(value, WORKFLOW_RELATIONS, WorkflowRelation.DEPENDS_ON)


def normalize_trace_source(value: Any) -> TraceSourceType:
    return match_enum(value, TRACE_SOURCES, TraceSourceType.REQUIREMENT)


def normalize_trace_target(value: Any) -> TraceTargetType:
    return match_enum(value, TRACE_TARGETS, TraceTargetType.L1_NODE)
