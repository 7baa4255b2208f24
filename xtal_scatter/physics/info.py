"""Physics information about a material.

PhysicsInfo is the immutable description produced by a model construction
service. Every field is optional and guarded by a ``has_*`` predicate. Checking for
required fields is left to the consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from xtal_scatter.core.errors import BadInput


@dataclass(frozen=True)
class AtomEntry:
    """Atoms of one element in the unit cell.

    Attributes:
        atomic_number: Atomic number, or DEUTERIUM_Z for deuterium
        number_per_unit_cell: Number of such atoms per unit cell

    """

    atomic_number: int
    number_per_unit_cell: int


@dataclass(frozen=True)
class PhysicsInfo:
    """Material description consumed by the material factory.

    Attributes:
        atom_info: Integral per-unit-cell atom counts
        composition: (element_symbol, number_fraction) pairs
        density: Density [g/cm³]
        temperature: Temperature [K]

    """

    atom_info: Optional[Tuple[AtomEntry, ...]] = None
    composition: Optional[Tuple[Tuple[str, float], ...]] = None
    density: Optional[float] = None
    temperature: Optional[float] = None

    def __post_init__(self):
        """Validate field values."""
        if self.density is not None and not self.density > 0:
            raise BadInput(f"Density must be positive: density={self.density}")
        if self.temperature is not None and not self.temperature > 0:
            raise BadInput(f"Temperature must be positive: temperature={self.temperature}")
        if self.composition is not None:
            for name, fraction in self.composition:
                if not (0.0 < fraction <= 1.0):
                    raise BadInput(f"Invalid fraction {fraction} for element {name!r}")

    def has_atom_info(self) -> bool:
        return bool(self.atom_info)

    def has_composition(self) -> bool:
        return bool(self.composition)

    def has_density(self) -> bool:
        return self.density is not None

    def has_temperature(self) -> bool:
        return self.temperature is not None
