"""Module catalog — load, validate, query, and serialize catalog data/*.json."""

from .models import (
    PortKind, PortDirection, BusType, IoType, ModuleCategory,
    PowerPort, BusPort, IoPort, Port, ModuleDefinition,
    CatalogError, CatalogResult,
)
from .loader import load_catalog, parse_module, get_module, get_port, CATALOG_DIR
from .serialization import catalog_to_dict, module_to_dict, port_to_dict

__all__ = [
    # Models
    "PortKind", "PortDirection", "BusType", "IoType", "ModuleCategory",
    "PowerPort", "BusPort", "IoPort", "Port", "ModuleDefinition",
    "CatalogError", "CatalogResult",
    # Loader
    "load_catalog", "parse_module", "get_module", "get_port", "CATALOG_DIR",
    # Serialization
    "catalog_to_dict", "module_to_dict", "port_to_dict",
]
