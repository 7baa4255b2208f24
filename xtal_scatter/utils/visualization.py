"""Simple visualization utilities for scattering materials."""

import numpy as np
import matplotlib.pyplot as plt

from xtal_scatter.config.yaml_loader import get_default
from xtal_scatter.core.constants import wavelength_to_ekin


def _wavelength_grid():
    return np.linspace(
        get_default('plotting.wavelength_min', 0.5),
        get_default('plotting.wavelength_max', 10.0),
        get_default('plotting.n_points', 200),
    )


def cross_section_curve(scatter, wavelengths):
    """Cross section [barn] of *scatter* along the z axis at each wavelength [Aa]."""
    direction = np.array([0.0, 0.0, 1.0])
    return np.array([
        scatter.cross_section(wavelength_to_ekin(wl), direction) for wl in wavelengths
    ])


def _finish(fig, save_path):
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=get_default('plotting.dpi', 150), bbox_inches='tight')
        print(f"Saved: {save_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_cross_section(
    scatter,
    wavelengths: np.ndarray = None,
    title: str = 'Scattering Cross Section',
    save_path: str = None,
):
    """Plot cross section vs neutron wavelength.

    Args:
        scatter: Oriented Scatter object
        wavelengths: Wavelengths [Aa] (plotting defaults if None)
        title: Plot title
        save_path: If provided, save to file
    """
    if wavelengths is None:
        wavelengths = _wavelength_grid()

    fig, ax = plt.subplots(figsize=(10, 6))

    ax.plot(wavelengths, cross_section_curve(scatter, wavelengths), linewidth=2)
    ax.set_xlabel('Wavelength [Å]')
    ax.set_ylabel('Cross section [barn]')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    _finish(fig, save_path)


def plot_scattering_angles(
    scatter,
    wavelength: float = 1.8,
    n_samples: int = None,
    rng: np.random.Generator = None,
    title: str = 'Sampled Scattering Angles',
    save_path: str = None,
):
    """Histogram sampled cos(theta) and azimuth phi for a beam along z.

    For an isotropic scatter both histograms are flat.

    Args:
        scatter: Scatter object providing generate_scattering_many
        wavelength: Neutron wavelength [Aa]
        n_samples: Number of samples (plotting defaults if None)
        rng: Random generator
        title: Plot title
        save_path: If provided, save to file
    """
    n_samples = n_samples or get_default('plotting.n_samples', 20000)
    directions, _ = scatter.generate_scattering_many(
        wavelength_to_ekin(wavelength), np.array([0.0, 0.0, 1.0]), n_samples, rng=rng,
    )
    cos_theta = directions[:, 2]
    phi = np.mod(np.arctan2(directions[:, 1], directions[:, 0]), 2.0 * np.pi)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.hist(cos_theta, bins=50, range=(-1.0, 1.0), density=True, alpha=0.7)
    ax1.set_xlabel('cos θ')
    ax1.set_ylabel('Probability density')
    ax1.grid(True, alpha=0.3)

    ax2.hist(phi, bins=50, range=(0.0, 2.0 * np.pi), density=True, alpha=0.7)
    ax2.set_xlabel('φ [rad]')
    ax2.set_ylabel('Probability density')
    ax2.grid(True, alpha=0.3)

    fig.suptitle(f'{title} (λ = {wavelength:g} Å)')

    _finish(fig, save_path)


def plot_material_summary(
    material,
    wavelengths: np.ndarray = None,
    n_samples: int = None,
    rng: np.random.Generator = None,
    save_path: str = None,
):
    """Cross section and sampled cos(theta) of a derived material side by side.

    Args:
        material: HostMaterial with an attached scatter
        wavelengths: Wavelengths [Aa] (plotting defaults if None)
        n_samples: Number of angle samples (plotting defaults if None)
        rng: Random generator
        save_path: If provided, save to file
    """
    if material.scatter is None:
        raise ValueError(f"Material '{material.name}' has no scattering model")

    scatter = material.scatter
    if wavelengths is None:
        wavelengths = _wavelength_grid()
    n_samples = n_samples or get_default('plotting.n_samples', 20000)

    directions, _ = scatter.generate_scattering_many(
        wavelength_to_ekin(float(np.median(wavelengths))),
        np.array([0.0, 0.0, 1.0]),
        n_samples,
        rng=rng,
    )

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.plot(wavelengths, cross_section_curve(scatter, wavelengths), linewidth=2)
    ax1.set_xlabel('Wavelength [Å]')
    ax1.set_ylabel('Cross section [barn]')
    ax1.grid(True, alpha=0.3)

    ax2.hist(directions[:, 2], bins=50, range=(-1.0, 1.0), density=True, alpha=0.7)
    ax2.set_xlabel('cos θ')
    ax2.set_ylabel('Probability density')
    ax2.grid(True, alpha=0.3)

    formula = material.chemical_formula or material.name
    fig.suptitle(
        f'{material.name}: {formula}, {material.density:.4g} g/cm³, '
        f'{material.temperature:.5g} K'
    )

    _finish(fig, save_path)
