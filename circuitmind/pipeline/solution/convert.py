"""Solution conversion — view a DesignSolution's module list as a catalog
and a topology, so it can be rendered and validated like a user design."""

from __future__ import annotations

from circuitmind.catalog import (
    CatalogResult, IoPort, IoType, ModuleCategory, ModuleDefinition, PortDirection,
)
from circuitmind.pipeline.topology import Connection, ConnectionEnd, Topology, TopologyNode

from .models import DesignSolution, SolutionModule

DEFAULT_SOURCE_PORT = "output_0"
DEFAULT_TARGET_PORT = "input_0"


def _module_definition(module: SolutionModule) -> ModuleDefinition:
    inputs = tuple(
        IoPort(id=f"input_{i}", name=name, direction=PortDirection.IN, io=IoType.GPIO)
        for i, name in enumerate(module.inputs)
    )
    outputs = tuple(
        IoPort(id=f"output_{i}", name=name, direction=PortDirection.OUT, io=IoType.GPIO)
        for i, name in enumerate(module.outputs)
    )
    return ModuleDefinition(
        id=module.id,
        name=module.name,
        category=ModuleCategory.OTHER,
        ports=inputs + outputs,
    )


def solution_to_catalog(solution: DesignSolution) -> CatalogResult:
    """One ``other`` module per solution module; each input and output
    string becomes a gpio port (``input_<i>`` / ``output_<i>``)."""
    return CatalogResult(modules=tuple(_module_definition(m) for m in solution.modules))


def _first_port_id(catalog: CatalogResult, module_id: str,
                   direction: PortDirection, default: str) -> str:
    module = catalog.get_module(module_id)
    if module is None:
        return default
    for p in module.ports:
        if p.direction is direction:
            return p.id
    return default


def solution_to_topology(solution: DesignSolution, catalog: CatalogResult) -> Topology:
    """Place every solution module once and wire each solution edge from
    the source's first output port to the target's first input port.

    Edges naming unknown modules are kept as-is; validation reports them.
    """
    nodes = tuple(
        TopologyNode(id=m.id, module_id=m.id, label=m.name) for m in solution.modules
    )
    connections = tuple(
        Connection(
            id=f"conn_{i}",
            source=ConnectionEnd(
                node_id=edge.source,
                port_id=_first_port_id(catalog, edge.source, PortDirection.OUT,
                                       DEFAULT_SOURCE_PORT),
            ),
            target=ConnectionEnd(
                node_id=edge.target,
                port_id=_first_port_id(catalog, edge.target, PortDirection.IN,
                                       DEFAULT_TARGET_PORT),
            ),
        )
        for i, edge in enumerate(solution.edges)
    )
    return Topology(nodes=nodes, connections=connections)
