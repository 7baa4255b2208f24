"""Scattering interfaces.

Two contracts are distinguished:

- NonOrientedModel: energy-only physics. ``cross_section_non_oriented(ekin)``
  and ``sample_non_oriented(ekin, rng) -> (scatter_angle, delta_ekin)``.
  This is what most physics models (powders, amorphous solids, liquids)
  provide.
- Scatter: the full oriented interface used by transport codes.
  ``cross_section(ekin, direction)`` and
  ``generate_scattering(ekin, direction, rng) -> (out_direction, delta_ekin)``.

Every Scatter carries a ``kind`` discriminator so that clients can dispatch
on the variant without runtime type inspection.

Units: energies in eV, cross sections in barn, angles in radian.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable

import numpy as np


class ScatterKind(Enum):
    """Scatter variants.

    Options:
        ISOTROPIC: Results depend only on energy (phi-symmetric around the
            incident direction)
        ORIENTED: Results depend on the incident direction (single crystals)
    """
    ISOTROPIC = "isotropic"
    ORIENTED = "oriented"


@runtime_checkable
class NonOrientedModel(Protocol):
    """Energy-only scattering physics."""

    def cross_section_non_oriented(self, ekin: float) -> float:
        ...

    def sample_non_oriented(
        self, ekin: float, rng: np.random.Generator,
    ) -> Tuple[float, float]:
        ...


class Scatter(ABC):
    """Oriented scattering interface.

    Instances are immutable after construction and may be shared between
    threads. Random numbers come from the ``rng`` argument; pass a separate
    generator per thread.
    """

    kind: ScatterKind

    @property
    def is_oriented(self) -> bool:
        return self.kind is ScatterKind.ORIENTED

    @abstractmethod
    def cross_section(self, ekin: float, direction) -> float:
        """Scattering cross section [barn] at energy *ekin* [eV]."""

    @abstractmethod
    def generate_scattering(
        self,
        ekin: float,
        direction,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[np.ndarray, float]:
        """Sample one scattering.

        Args:
            ekin: Incident kinetic energy [eV]
            direction: Incident unit direction vector, shape (3,)
            rng: Random generator

        Returns:
            (outgoing unit direction, change in kinetic energy [eV])
        """
