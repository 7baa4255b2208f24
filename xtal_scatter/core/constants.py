"""Physics constants for neutron scattering materials.

This module is the Single Source of Truth (SSOT) for all physics constants
used by the material factory and the scattering adapters. Import from here
rather than defining constants locally.

Import Policy:
    from xtal_scatter.core.constants import DEUTERIUM_Z, DEFAULT_TEMPERATURE_K

DO NOT use: from xtal_scatter.core.constants import *
"""

from dataclasses import dataclass

# =============================================================================
# Element Identity
# =============================================================================

# Special atomic-number value used for deuterium. It is kept distinct from
# ordinary hydrogen everywhere, and must never be handed to a host toolkit.
DEUTERIUM_Z = 1001

# Valid ordinary atomic numbers are 1..MAX_Z (inclusive)
MAX_Z = 119

# Atomic number of the two elements with special Hill-system placement
CARBON_Z = 6
HYDROGEN_Z = 1

# =============================================================================
# Material Defaults
# =============================================================================

# Default temperature [K] used when a material description carries none.
# Note: 293.15 K (room temperature), NOT the 273.15 K of STP.
DEFAULT_TEMPERATURE_K = 293.15

# Placeholder density of composition-only base materials [g/cm³]
BASE_MATERIAL_DENSITY = 1.0

# Pressure assigned to all created materials [atm]
DEFAULT_PRESSURE_ATM = 1.0

# Offset between the Celsius and Kelvin scales
CELSIUS_OFFSET = 273.15

# =============================================================================
# Neutron Constants
# =============================================================================


@dataclass
class NeutronConstants:
    """Constants for neutron kinematics.

    Units: eV, Angstrom, kelvin.
    """

    ekin_to_wavelength_sq: float = 0.0818042096
    """E[eV] * lambda[Aa]^2 for a free neutron"""

    boltzmann: float = 8.617333262e-5
    """Boltzmann constant [eV/K]"""

    neutron_mass_amu: float = 1.00866491595
    """Neutron mass [amu]"""

    thermal_energy: float = 0.0253
    """Energy of a 2200 m/s neutron [eV]"""


DEFAULT_CONSTANTS = NeutronConstants()


def wavelength_to_ekin(wavelength_aa: float) -> float:
    """Convert neutron wavelength [Aa] to kinetic energy [eV]."""
    if wavelength_aa <= 0:
        raise ValueError(f"Wavelength must be positive: {wavelength_aa}")
    return DEFAULT_CONSTANTS.ekin_to_wavelength_sq / (wavelength_aa * wavelength_aa)


def ekin_to_wavelength(ekin_ev: float) -> float:
    """Convert neutron kinetic energy [eV] to wavelength [Aa]."""
    if ekin_ev <= 0:
        raise ValueError(f"Kinetic energy must be positive: {ekin_ev}")
    return (DEFAULT_CONSTANTS.ekin_to_wavelength_sq / ekin_ev) ** 0.5
