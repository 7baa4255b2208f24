"""Host material and element descriptors.

These are the objects stored in the host material table: elements with
their atomic data, and materials made of them with density, temperature and
an optional attached scattering model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from xtal_scatter.core.elements import DEUTERIUM, find_element, get_element, is_deuterium
from xtal_scatter.core.errors import BadInput, InvalidInput


@dataclass(frozen=True)
class HostElement:
    """Element as known to the host material system.

    Attributes:
        name: Element name
        symbol: Element symbol (e.g., 'H', 'D', 'Al')
        Z: Atomic number (1 for deuterium)
        A: Atomic mass [amu]

    """

    name: str
    symbol: str
    Z: int
    A: float

    def __post_init__(self):
        """Validate element."""
        if self.Z <= 0:
            raise ValueError(f"Atomic number must be positive: Z={self.Z}")

        if self.A <= 0:
            raise ValueError(f"Atomic mass must be positive: A={self.A}")


# Deuterium is an isotope of hydrogen for the host (Z=1, A=2); the special
# DEUTERIUM_Z id never appears on host elements.
DEUTERIUM_ELEMENT = HostElement(name="Deuterium", symbol="D", Z=1, A=DEUTERIUM.A)


def element_for_id(z: int) -> HostElement:
    """Host element for an element id (atomic number or DEUTERIUM_Z).

    Raises:
        InvalidInput: If no element data exists for *z*

    """
    if is_deuterium(z):
        return DEUTERIUM_ELEMENT
    data = get_element(z)
    if data is None:
        raise InvalidInput(f"No element data for atomic number {z}")
    return HostElement(name=data.name, symbol=data.symbol, Z=data.Z, A=data.A)


def element_for_symbol(symbol: str) -> HostElement:
    """Host element for an element symbol ('D' gives deuterium).

    Raises:
        BadInput: If the symbol is unknown

    """
    data = find_element(symbol)
    if data is None:
        raise BadInput(f"Unknown element symbol: {symbol!r}")
    return element_for_id(data.Z)


@dataclass(frozen=True)
class ElementComponent:
    """Single element in a material composition.

    Attributes:
        element: The element
        mass_fraction: Mass fraction in the material (0-1]
        count: Atoms per formula unit, when the composition is integral

    """

    element: HostElement
    mass_fraction: float
    count: Optional[int] = None

    def __post_init__(self):
        """Validate element component."""
        if not (0 < self.mass_fraction <= 1):
            raise ValueError(
                f"Mass fraction must be in (0, 1]: {self.mass_fraction}",
            )

        if self.count is not None and self.count <= 0:
            raise ValueError(f"Atom count must be positive: count={self.count}")


@dataclass(eq=False)
class HostMaterial:
    """Material registered in the host material table.

    Materials compare by identity. They are not modified after registration,
    apart from the table assigning ``index``.

    Attributes:
        name: Unique material name
        density: Density [g/cm³]
        temperature: Temperature [K]
        elements: Element components
        state: Physical state ('solid', 'liquid', 'gas')
        pressure: Pressure [atm]
        chemical_formula: Hill formula, for integral compositions only
        base: Material this one was derived from
        scatter: Attached scattering model
        index: Position in the host material table (-1 until registered)

    """

    name: str
    density: float
    temperature: float
    elements: Tuple[ElementComponent, ...]
    state: str = "solid"
    pressure: float = 1.0
    chemical_formula: Optional[str] = None
    base: Optional["HostMaterial"] = None
    scatter: Any = None
    index: int = field(default=-1)

    def __post_init__(self):
        """Validate material properties."""
        if not self.name:
            raise ValueError("Material name must not be empty")

        if self.density <= 0:
            raise ValueError(f"Density must be positive: density={self.density}")

        if self.temperature <= 0:
            raise ValueError(f"Temperature must be positive: temperature={self.temperature}")

        if not self.elements:
            raise ValueError(f"Material '{self.name}' has no elements")

        total = math.fsum(e.mass_fraction for e in self.elements)
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Material '{self.name}': mass fractions sum to {total}, not 1.0")

    @property
    def is_derived(self) -> bool:
        return self.base is not None

    def to_dict(self) -> dict:
        """Convert material to a dictionary (for display and serialization).

        Returns:
            Dictionary representation

        """
        data = {
            "name": self.name,
            "index": self.index,
            "density": self.density,
            "temperature": self.temperature,
            "state": self.state,
            "pressure": self.pressure,
            "elements": [
                {
                    "symbol": e.element.symbol,
                    "Z": e.element.Z,
                    "A": e.element.A,
                    "mass_fraction": e.mass_fraction,
                    **({"count": e.count} if e.count is not None else {}),
                }
                for e in self.elements
            ],
        }

        if self.chemical_formula is not None:
            data["chemical_formula"] = self.chemical_formula

        if self.base is not None:
            data["base"] = self.base.name

        if self.scatter is not None:
            kind = getattr(self.scatter, "kind", None)
            data["scatter"] = kind.value if kind is not None else repr(self.scatter)

        return data


def components_from_counts(formula) -> Tuple[ElementComponent, ...]:
    """Element components for integral ``(element_id, count)`` pairs.

    Mass fractions are computed from the counts and atomic masses.
    """
    elements = [(element_for_id(z), count) for z, count in formula]
    total_mass = math.fsum(elem.A * count for elem, count in elements)
    return tuple(
        ElementComponent(element=elem, mass_fraction=elem.A * count / total_mass, count=count)
        for elem, count in elements
    )


def components_from_fractions(composition) -> Tuple[ElementComponent, ...]:
    """Element components for ``(symbol, number_fraction)`` pairs.

    Number fractions are converted to mass fractions using atomic masses.
    """
    elements = [(element_for_symbol(symbol), fraction) for symbol, fraction in composition]
    total_mass = math.fsum(elem.A * fraction for elem, fraction in elements)
    if not total_mass > 0:
        raise BadInput("Fractional composition has zero total mass")
    return tuple(
        ElementComponent(element=elem, mass_fraction=elem.A * fraction / total_mass)
        for elem, fraction in elements
    )
