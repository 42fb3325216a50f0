"""Shared rule constants for topology validation and response normalization.

The validator and the normalizer read their tunables from the frozen
dataclasses below.  Both accept an explicit rules object, so tests and
callers can swap values without touching process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationRules:
    """Electrical and structural rules applied to user topologies."""

    voltage_tolerance_v: float = 0.01
    """Largest absolute difference (volts) two power ports may have and
    still be considered the same rail."""

    i2c_pullup_module_id: str = "glue_i2c_pullup"
    """Catalog id of the module that provides I2C pull-up resistors.
    Any i2c-to-i2c connection without an instance of it in the topology
    yields a single warning."""


@dataclass(frozen=True)
class NormalizationRules:
    """Limits applied while turning model output into design solutions."""

    max_open_questions: int = 8
    """Open questions kept per solution after normalization."""

    max_solutions: int = 3
    """Candidate solutions kept per generation attempt."""


# Module-level singletons — importable everywhere.
VALIDATION_RULES = ValidationRules()
NORMALIZATION_RULES = NormalizationRules()
