"""Catalog dataclasses — typed, immutable module and port definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PortKind(str, Enum):
    POWER = "power"
    BUS = "bus"
    IO = "io"


class PortDirection(str, Enum):
    IN = "in"
    OUT = "out"
    BIDIRECTIONAL = "bidirectional"


class BusType(str, Enum):
    I2C = "i2c"
    SPI = "spi"
    UART = "uart"
    USB = "usb"
    GPIO = "gpio"


class IoType(str, Enum):
    GPIO = "gpio"
    ADC = "adc"
    PWM = "pwm"
    INT = "int"


class ModuleCategory(str, Enum):
    POWER = "power"
    MCU = "mcu"
    SENSOR = "sensor"
    INTERFACE = "interface"
    GLUE = "glue"
    OTHER = "other"


@dataclass(frozen=True)
class PowerPort:
    id: str
    name: str
    direction: PortDirection
    voltage_v: float
    rail_name: str | None = None
    max_current_ma: float | None = None

    @property
    def kind(self) -> PortKind:
        return PortKind.POWER


@dataclass(frozen=True)
class BusPort:
    id: str
    name: str
    direction: PortDirection
    bus: BusType

    @property
    def kind(self) -> PortKind:
        return PortKind.BUS


@dataclass(frozen=True)
class IoPort:
    id: str
    name: str
    direction: PortDirection
    io: IoType
    level_v: float | None = None

    @property
    def kind(self) -> PortKind:
        return PortKind.IO


# A port's kind decides which of the three shapes it has; callers
# dispatch with isinstance() and never read another kind's fields.
Port = PowerPort | BusPort | IoPort


@dataclass(frozen=True)
class ModuleDefinition:
    id: str
    name: str
    category: ModuleCategory
    ports: tuple[Port, ...] = ()
    source_file: str = ""               # path of the JSON file (for error reporting)

    def get_port(self, port_id: str) -> Port | None:
        """Look up a port by ID. Returns None if not found."""
        for p in self.ports:
            if p.id == port_id:
                return p
        return None


@dataclass(frozen=True)
class CatalogError:
    module_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.module_id}] {self.field}: {self.message}"


@dataclass(frozen=True)
class CatalogResult:
    """Result of loading the catalog — modules + any validation errors."""
    modules: tuple[ModuleDefinition, ...]
    errors: tuple[CatalogError, ...] = ()
    _by_id: dict[str, ModuleDefinition] = field(
        default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # First definition wins on duplicate ids; the loader reports them.
        index: dict[str, ModuleDefinition] = {}
        for m in self.modules:
            index.setdefault(m.id, m)
        object.__setattr__(self, "_by_id", index)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0

    def get_module(self, module_id: str) -> ModuleDefinition | None:
        """Look up a module by ID. Returns None if not found."""
        return self._by_id.get(module_id)
