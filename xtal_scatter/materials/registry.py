"""Host material table.

In-process material table in the style of a transport toolkit's global
material list: materials are appended and addressed by index, and may be
deleted independently of anyone holding on to the index. Lookups of deleted
indices return None, which caches use to detect staleness.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from xtal_scatter.materials.descriptor import ElementComponent, HostMaterial

logger = logging.getLogger(__name__)


class MaterialTable:
    """Indexed, thread-safe table of host materials.

    Runtime API:
        - register_material(name, elements, density, temperature, ...) -> HostMaterial
        - lookup(index) -> HostMaterial | None
        - delete(index) -> None
        - find(name) -> HostMaterial | None

    Indices are never reused, so a stale index can never resolve to a
    different material.
    """

    def __init__(self):
        self._slots: List[Optional[HostMaterial]] = []
        self._lock = threading.Lock()

    def register_material(
        self,
        name: str,
        elements: Iterable[ElementComponent],
        density: float,
        temperature: float,
        *,
        state: str = "solid",
        pressure: float = 1.0,
        base: Optional[HostMaterial] = None,
        chemical_formula: Optional[str] = None,
        scatter=None,
    ) -> HostMaterial:
        """Create and register a material.

        Args:
            name: Material name
            elements: Element components
            density: Density [g/cm³]
            temperature: Temperature [K]
            state: Physical state
            pressure: Pressure [atm]
            base: Material this one is derived from
            chemical_formula: Hill formula string, if known
            scatter: Scattering model to attach

        Returns:
            The registered material (its ``index`` is set)

        Raises:
            ValueError: If the material properties are invalid

        """
        material = HostMaterial(
            name=name,
            density=density,
            temperature=temperature,
            elements=tuple(elements),
            state=state,
            pressure=pressure,
            chemical_formula=chemical_formula,
            base=base,
            scatter=scatter,
        )

        with self._lock:
            material.index = len(self._slots)
            self._slots.append(material)

        logger.info(
            "Registered material %r (index %d, density %g g/cm3, T=%g K)",
            name, material.index, density, temperature,
        )
        return material

    def lookup(self, index: int) -> Optional[HostMaterial]:
        """Material at *index*, or None if deleted or never registered."""
        with self._lock:
            if 0 <= index < len(self._slots):
                return self._slots[index]
            return None

    def delete(self, index: int) -> None:
        """Discard the material at *index*.

        Raises:
            KeyError: If no material is registered at *index*

        """
        with self._lock:
            if not (0 <= index < len(self._slots)) or self._slots[index] is None:
                raise KeyError(f"No material at index {index}")
            name = self._slots[index].name
            self._slots[index] = None
        logger.info("Deleted material %r (index %d)", name, index)

    def find(self, name: str) -> Optional[HostMaterial]:
        """First live material named *name*, or None."""
        with self._lock:
            for material in self._slots:
                if material is not None and material.name == name:
                    return material
        return None

    def materials(self) -> List[HostMaterial]:
        """All live materials, in index order."""
        with self._lock:
            return [m for m in self._slots if m is not None]

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for m in self._slots if m is not None)
