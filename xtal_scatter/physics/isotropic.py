"""Isotropic scattering adapter.

Lifts an energy-only (non-oriented) model to the full oriented Scatter
interface. The cross section ignores the incident direction, and outgoing
directions are built by tilting the incident direction by the sampled
scattering angle theta, around an azimuthal angle phi drawn uniformly from
[0, 2π) independently of theta. The resulting distribution is rotationally
invariant about the incident direction (phi-symmetric), whatever model is
wrapped.

Precondition: the wrapped model must genuinely be orientation-independent.
This is not checked at runtime.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from xtal_scatter.core.errors import BadInput
from xtal_scatter.physics.scatter import NonOrientedModel, Scatter, ScatterKind


def _perpendicular_basis(direction: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Two unit vectors completing *direction* to a right-handed orthonormal basis."""
    # Cross with the coordinate axis least aligned with the direction
    axis = np.zeros(3)
    axis[np.argmin(np.abs(direction))] = 1.0
    u = np.cross(direction, axis)
    u /= np.linalg.norm(u)
    v = np.cross(direction, u)
    return u, v


def rotate_direction(direction, cos_theta, phi) -> np.ndarray:
    """Tilt a unit vector by polar angle theta at azimuth phi.

    Vectorized: *cos_theta* and *phi* may be arrays of equal shape (n,), in
    which case the result has shape (n, 3).

    Args:
        direction: Direction vector, shape (3,) (normalized before use)
        cos_theta: Cosine of the polar angle relative to *direction*
        phi: Azimuthal angle [rad] around *direction*

    Returns:
        Unit vector(s) at angle theta from *direction*

    Raises:
        BadInput: If *direction* is zero, non-finite or not a 3-vector

    Example:
        >>> rotate_direction([0, 0, 1], 0.0, 0.0)
        array([0., 1., 0.])
    """
    d = np.asarray(direction, dtype=np.float64)
    norm = np.linalg.norm(d)
    if d.shape != (3,) or not np.isfinite(norm) or norm == 0.0:
        raise BadInput(f"Direction must be a finite non-zero 3-vector, got {direction!r}")
    d = d / norm
    u, v = _perpendicular_basis(d)

    cos_theta = np.clip(np.asarray(cos_theta, dtype=np.float64), -1.0, 1.0)
    sin_theta = np.sqrt(1.0 - cos_theta * cos_theta)
    phi = np.asarray(phi, dtype=np.float64)

    a = (sin_theta * np.cos(phi))[..., np.newaxis]
    b = (sin_theta * np.sin(phi))[..., np.newaxis]
    return cos_theta[..., np.newaxis] * d + a * u + b * v


class IsotropicScatter(Scatter):
    """Oriented Scatter interface on top of a non-oriented model.

    Args:
        model: Object implementing NonOrientedModel
        rng: Generator used when callers pass none (not thread-safe; pass a
            per-thread generator to the sampling methods when sharing)
    """

    kind = ScatterKind.ISOTROPIC

    def __init__(self, model: NonOrientedModel, rng: Optional[np.random.Generator] = None):
        self.model = model
        self._rng = rng if rng is not None else np.random.default_rng()

    def _generator(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        return rng if rng is not None else self._rng

    def cross_section_non_oriented(self, ekin: float) -> float:
        return self.model.cross_section_non_oriented(ekin)

    def sample_non_oriented(
        self, ekin: float, rng: Optional[np.random.Generator] = None,
    ) -> Tuple[float, float]:
        return self.model.sample_non_oriented(ekin, self._generator(rng))

    def cross_section(self, ekin: float, direction) -> float:
        """Cross section [barn]; the direction is ignored."""
        return self.model.cross_section_non_oriented(ekin)

    def generate_scattering(
        self,
        ekin: float,
        direction,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[np.ndarray, float]:
        """Sample (outgoing direction, delta_ekin) for one scattering."""
        rng = self._generator(rng)
        angle, delta_ekin = self.model.sample_non_oriented(ekin, rng)
        phi = 2.0 * math.pi * rng.random()
        return rotate_direction(direction, math.cos(angle), phi), delta_ekin

    def generate_scattering_many(
        self,
        ekin: float,
        direction,
        n: int,
        rng: Optional[np.random.Generator] = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Sample *n* scatterings at once.

        Returns:
            (directions, delta_ekin): arrays of shape (n, 3) and (n,)
        """
        rng = self._generator(rng)
        angles = np.empty(n)
        delta_ekin = np.empty(n)
        for i in range(n):
            angles[i], delta_ekin[i] = self.model.sample_non_oriented(ekin, rng)
        phis = 2.0 * np.pi * rng.random(n)
        return rotate_direction(direction, np.cos(angles), phis), delta_ekin

    def __repr__(self) -> str:
        return f"IsotropicScatter({self.model!r})"


def as_scatter(model, rng: Optional[np.random.Generator] = None) -> Scatter:
    """Return *model* as an oriented Scatter.

    Scatter instances pass through unchanged; non-oriented models are wrapped
    in IsotropicScatter.

    Raises:
        BadInput: If *model* implements neither interface.
    """
    if isinstance(model, Scatter):
        return model
    if isinstance(model, NonOrientedModel):
        return IsotropicScatter(model, rng=rng)
    raise BadInput(f"Object of type {type(model).__name__} is not a scattering model")
