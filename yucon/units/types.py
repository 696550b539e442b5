"""
Core type definitions for the units layer.

QuantityKind is the closed vocabulary of physical dimensions; UnitRecord is
the runtime object loaded from the units data file. Records are frozen after
loading and never written to at runtime.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

# ── Enums ──────────────────────────────────────────────────────────────────────


class QuantityKind(str, Enum):
    """Physical dimension a unit measures. Values match the data file's ``type=`` lines."""

    LENGTH = "length"
    VOLUME = "volume"
    AREA = "area"
    ENERGY = "energy"
    POWER = "power"
    MASS = "mass"
    FORCE = "force"
    TORQUE = "torque"
    SPEED = "speed"
    PRESSURE = "pressure"
    TEMPERATURE = "temperature"
    FUEL_ECONOMY = "fuel economy"


# ── Runtime objects ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UnitRecord:
    """
    A single unit as loaded from the units data file.

    ``names`` is ordered; the first alias is the canonical display name.
    A value ``x`` in this unit equals ``(x + offset) * factor`` in the base
    unit of its kind. ``offset`` is zero except for affine scales such as
    Celsius and Fahrenheit.
    """

    names: tuple[str, ...]
    kind: QuantityKind
    factor: float
    offset: float = 0.0

    def __post_init__(self) -> None:
        # Accept lists at construction sites and promote to tuple.
        if isinstance(self.names, list):
            object.__setattr__(self, "names", tuple(self.names))
        if not self.names:
            raise ValueError("a unit needs at least one name")
        if not math.isfinite(self.factor) or self.factor == 0:
            raise ValueError(f"factor must be finite and nonzero, got {self.factor}")
        if not math.isfinite(self.offset):
            raise ValueError(f"offset must be finite, got {self.offset}")

    @property
    def canonical_name(self) -> str:
        return self.names[0]

    @property
    def is_affine(self) -> bool:
        return self.offset != 0.0
