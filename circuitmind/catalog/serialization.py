"""Catalog serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from typing import Any

from .models import BusPort, CatalogResult, IoPort, ModuleDefinition, Port, PowerPort


def catalog_to_dict(result: CatalogResult) -> dict:
    """Serialize a CatalogResult to a JSON-safe dict for the web API."""
    return {
        "ok": result.ok,
        "module_count": len(result.modules),
        "modules": [module_to_dict(m) for m in result.modules],
        "errors": [{"module_id": e.module_id, "field": e.field, "message": e.message}
                   for e in result.errors],
    }


def module_to_dict(m: ModuleDefinition) -> dict:
    """Serialize a ModuleDefinition in the editor's camelCase shape."""
    return {
        "id": m.id,
        "name": m.name,
        "category": m.category.value,
        "ports": [port_to_dict(p) for p in m.ports],
    }


def port_to_dict(p: Port) -> dict:
    d: dict[str, Any] = {
        "id": p.id,
        "name": p.name,
        "kind": p.kind.value,
        "direction": p.direction.value,
    }

    # Kind-specific fields
    if isinstance(p, PowerPort):
        d["voltage"] = p.voltage_v
        if p.rail_name is not None:
            d["railName"] = p.rail_name
        if p.max_current_ma is not None:
            d["maxCurrentMa"] = p.max_current_ma
    elif isinstance(p, BusPort):
        d["bus"] = p.bus.value
    elif isinstance(p, IoPort):
        d["io"] = p.io.value
        if p.level_v is not None:
            d["levelV"] = p.level_v

    return d
