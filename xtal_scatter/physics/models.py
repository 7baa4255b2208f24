"""Simple non-oriented scattering models.

Both models scatter elastically (no energy transfer) with cos(theta)
uniform on [-1, 1]. They differ only in the energy dependence of the cross
section:

- ConstantIsotropicModel: one cross section for all energies
- TabulatedIsotropicModel: linear interpolation on an energy grid
"""

from __future__ import annotations

import math
import warnings
from typing import Tuple

import numpy as np

from xtal_scatter.core.errors import BadInput


def _sample_isotropic_angle(rng: np.random.Generator) -> float:
    return math.acos(2.0 * rng.random() - 1.0)


class ConstantIsotropicModel:
    """Energy-independent isotropic elastic scattering.

    Args:
        sigma: Scattering cross section [barn]
    """

    def __init__(self, sigma: float):
        if not sigma >= 0:
            raise BadInput(f"Cross section must be non-negative: sigma={sigma}")
        self.sigma = float(sigma)

    def cross_section_non_oriented(self, ekin: float) -> float:
        return self.sigma

    def sample_non_oriented(self, ekin: float, rng: np.random.Generator) -> Tuple[float, float]:
        return _sample_isotropic_angle(rng), 0.0

    def __repr__(self) -> str:
        return f"ConstantIsotropicModel(sigma={self.sigma:g})"


class TabulatedIsotropicModel:
    """Isotropic elastic scattering with a tabulated cross section.

    Stores σ(E) on an energy grid and interpolates linearly with edge
    clamping.

    Args:
        E_grid: Energy grid [eV], shape (N_points,)
        sigma: Cross section [barn], shape (N_points,)
    """

    def __init__(self, E_grid, sigma):
        E_grid = np.asarray(E_grid, dtype=np.float64)
        sigma = np.asarray(sigma, dtype=np.float64)

        if E_grid.ndim != 1 or E_grid.shape != sigma.shape:
            raise BadInput(
                f"E_grid and sigma must be 1D with same length: "
                f"{E_grid.shape} != {sigma.shape}"
            )

        if len(E_grid) < 2:
            raise BadInput(f"E_grid must have at least 2 points, got {len(E_grid)}")

        if np.any(sigma < 0):
            raise BadInput("Tabulated cross sections must be non-negative")

        # Sort by energy for interpolation
        sort_idx = np.argsort(E_grid)
        self.E_grid = E_grid[sort_idx]
        self.sigma = sigma[sort_idx]
        self.E_grid.setflags(write=False)
        self.sigma.setflags(write=False)

    def cross_section_non_oriented(self, ekin: float) -> float:
        """Interpolated cross section [barn], clamped outside the grid."""
        if ekin < self.E_grid[0] * 0.9 or ekin > self.E_grid[-1] * 1.1:
            warnings.warn(
                f"Energy {ekin:.4g} eV outside tabulated range "
                f"[{self.E_grid[0]:.4g}, {self.E_grid[-1]:.4g}] eV. Clamping.",
                UserWarning, stacklevel=2
            )
        return float(np.interp(ekin, self.E_grid, self.sigma))

    def sample_non_oriented(self, ekin: float, rng: np.random.Generator) -> Tuple[float, float]:
        return _sample_isotropic_angle(rng), 0.0

    def __repr__(self) -> str:
        return (
            f"TabulatedIsotropicModel({len(self.E_grid)} points, "
            f"{self.E_grid[0]:g}-{self.E_grid[-1]:g} eV)"
        )
