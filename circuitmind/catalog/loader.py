"""Catalog loader — reads catalog data/*.json files, parses and validates them."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import (
    BusPort, BusType, CatalogError, CatalogResult, IoPort, IoType,
    ModuleCategory, ModuleDefinition, Port, PortDirection, PortKind, PowerPort,
)

log = logging.getLogger("circuitmind.catalog")

CATALOG_DIR = Path(__file__).resolve().parent / "data"


# ── Validation ─────────────────────────────────────────────────────

def _validate_module(data: dict, mid: str) -> list[CatalogError]:
    """Check a raw module entry before it is turned into dataclasses."""
    errs: list[CatalogError] = []

    category = data.get("category")
    if category not in {c.value for c in ModuleCategory}:
        errs.append(CatalogError(mid, "category", f"Unknown category '{category}'"))

    ports = data.get("ports")
    if not isinstance(ports, list):
        errs.append(CatalogError(mid, "ports", "Must be a list"))
        return errs

    seen: set[str] = set()
    for i, p in enumerate(ports):
        if not isinstance(p, dict):
            errs.append(CatalogError(mid, f"ports[{i}]", "Must be an object"))
            continue
        pid = p.get("id")
        if not isinstance(pid, str) or not pid:
            errs.append(CatalogError(mid, f"ports[{i}].id", "Missing port ID"))
            continue
        if pid in seen:
            errs.append(CatalogError(mid, f"ports.{pid}", "Duplicate port ID"))
        seen.add(pid)

        kind = p.get("kind")
        if kind not in {k.value for k in PortKind}:
            errs.append(CatalogError(mid, f"ports.{pid}.kind", f"Unknown kind '{kind}'"))
        direction = p.get("direction")
        if direction not in {d.value for d in PortDirection}:
            errs.append(CatalogError(mid, f"ports.{pid}.direction",
                                     f"Unknown direction '{direction}'"))

        if kind == PortKind.POWER.value:
            v = p.get("voltage_v")
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                errs.append(CatalogError(mid, f"ports.{pid}.voltage_v",
                                         "Power ports need a numeric voltage"))
        elif kind == PortKind.BUS.value:
            if p.get("bus") not in {b.value for b in BusType}:
                errs.append(CatalogError(mid, f"ports.{pid}.bus",
                                         f"Unknown bus type '{p.get('bus')}'"))
        elif kind == PortKind.IO.value:
            if p.get("io", IoType.GPIO.value) not in {t.value for t in IoType}:
                errs.append(CatalogError(mid, f"ports.{pid}.io",
                                         f"Unknown io subtype '{p.get('io')}'"))

    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_port(data: dict) -> Port:
    kind = PortKind(data["kind"])
    direction = PortDirection(data["direction"])
    name = data.get("name", data["id"])
    if kind is PortKind.POWER:
        current = data.get("max_current_ma")
        return PowerPort(
            id=data["id"],
            name=name,
            direction=direction,
            voltage_v=float(data["voltage_v"]),
            rail_name=data.get("rail_name"),
            max_current_ma=float(current) if current is not None else None,
        )
    if kind is PortKind.BUS:
        return BusPort(
            id=data["id"],
            name=name,
            direction=direction,
            bus=BusType(data["bus"]),
        )
    level = data.get("level_v")
    return IoPort(
        id=data["id"],
        name=name,
        direction=direction,
        io=IoType(data.get("io", IoType.GPIO.value)),
        level_v=float(level) if level is not None else None,
    )


def parse_module(data: dict, source_file: str = "") -> ModuleDefinition:
    """Parse one raw catalog entry. Raises KeyError/ValueError on bad input."""
    return ModuleDefinition(
        id=data["id"],
        name=data.get("name", data["id"]),
        category=ModuleCategory(data["category"]),
        ports=tuple(_parse_port(p) for p in data["ports"]),
        source_file=source_file,
    )


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(catalog_dir: Path | None = None) -> CatalogResult:
    """Load all data/*.json files, validate and parse them.

    Returns a CatalogResult with modules and any validation errors.
    Entries that fail validation or parsing are skipped (error recorded);
    nothing raises for bad file content.
    """
    d = catalog_dir or CATALOG_DIR
    modules: list[ModuleDefinition] = []
    errors: list[CatalogError] = []

    json_files = sorted(d.glob("*.json"))
    if not json_files:
        errors.append(CatalogError("_catalog", "files", f"No .json files found in {d}"))
        return CatalogResult(modules=(), errors=tuple(errors))

    for path in json_files:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (ValueError, RecursionError) as exc:
            errors.append(CatalogError(path.stem, "json", f"Parse error: {exc}"))
            continue
        except OSError as exc:
            errors.append(CatalogError(path.stem, "file", f"Read error: {exc}"))
            continue

        if not isinstance(raw, dict):
            errors.append(CatalogError(path.stem, "json", "Top level must be an object"))
            continue

        mid = str(raw.get("id") or path.stem)
        entry_errors = _validate_module(raw, mid)
        if entry_errors:
            errors.extend(entry_errors)
            continue

        try:
            modules.append(parse_module(raw, source_file=str(path)))
        except (KeyError, TypeError, ValueError) as exc:
            errors.append(CatalogError(mid, "parse", f"Missing/invalid field: {exc}"))

    # Check for duplicate IDs across files
    id_counts: dict[str, int] = {}
    for m in modules:
        id_counts[m.id] = id_counts.get(m.id, 0) + 1
    for mid, count in id_counts.items():
        if count > 1:
            errors.append(CatalogError(mid, "id", f"Duplicate module ID (appears {count} times)"))

    for err in errors:
        log.warning("Catalog: %s", err)
    log.debug("Loaded %d catalog modules from %s", len(modules), d)
    return CatalogResult(modules=tuple(modules), errors=tuple(errors))


def get_module(catalog: CatalogResult, module_id: str) -> ModuleDefinition | None:
    """Look up a module by ID. Returns None if not found."""
    return catalog.get_module(module_id)


def get_port(module: ModuleDefinition, port_id: str) -> Port | None:
    """Look up a port on a module by ID. Returns None if not found."""
    return module.get_port(port_id)
