"""
Default Configuration Constants for xtal_scatter

This module contains the fallback values used when defaults.yaml does not
provide a setting. Physical constants live in xtal_scatter.core.constants.

IMPORTANT Import Policies:
    1. DO NOT use: from xtal_scatter.config.defaults import *
    2. DO use explicit imports:
       from xtal_scatter.config.defaults import DEFAULT_DERIVED_NAME_PREFIX
"""

from pathlib import Path

from xtal_scatter.core.constants import (
    BASE_MATERIAL_DENSITY,
    DEFAULT_PRESSURE_ATM,
    DEFAULT_TEMPERATURE_K,
)

# =============================================================================
# Material Naming
# =============================================================================

# Name prefix of composition-only base materials in the host material table
DEFAULT_BASE_NAME_PREFIX = "XtalBase::"

# Name prefix of fully configured (derived) materials
DEFAULT_DERIVED_NAME_PREFIX = "Xtal::"

# =============================================================================
# Material Properties
# =============================================================================

# Temperature used when neither configuration nor data provide one [K]
DEFAULT_MATERIAL_TEMPERATURE = DEFAULT_TEMPERATURE_K

# Density of base materials [g/cm³]
DEFAULT_BASE_DENSITY = BASE_MATERIAL_DENSITY

# Pressure of all created materials [atm]
DEFAULT_PRESSURE = DEFAULT_PRESSURE_ATM

# Physical state of created materials
DEFAULT_STATE = "solid"

# =============================================================================
# Cache Keys
# =============================================================================

# Significant digits of fractions in fallback (fractional-composition) keys
DEFAULT_FRACTION_DIGITS = 16

# =============================================================================
# Material Configuration
# =============================================================================

# Packing factor applied when the configuration string sets none
DEFAULT_PACKFACT = 1.0

# d-spacing cutoff passed to models when the configuration sets none [Aa]
DEFAULT_DCUTOFF = 0.0

# =============================================================================
# Data Library
# =============================================================================

# Material data entries bundled with the package
DEFAULT_LIBRARY_PATH = Path(__file__).resolve().parent.parent / "data" / "materials.yaml"
