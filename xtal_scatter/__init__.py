"""Cached neutron scattering materials

Turns textual material configurations into shared host materials with
attached scattering physics, constructing each material exactly once even
under concurrent access, and lifts energy-only scattering models to fully
oriented 3D scattering.

Key Principles:
- Two-tier caching: base materials keyed by reduced chemical formula,
  derived materials keyed by configuration string
- At most one construction per key, builders run outside the cache lock
- Stale cache entries (materials deleted from the host table) are rebuilt
- Isotropic models sample azimuthal angles uniformly (phi-symmetry)

Version: 1.0
"""

__version__ = "1.0"

from xtal_scatter.core.cache import CachedHandle, KeyedObjectCache
from xtal_scatter.core.errors import BadInput, InvalidInput, MissingInfo, XtalScatterError
from xtal_scatter.materials import (
    HostMaterial,
    MaterialFactory,
    MaterialTable,
    chemical_formula_key,
    reduce_composition,
)
from xtal_scatter.physics import (
    DataLibrary,
    IsotropicScatter,
    MaterialConfig,
    PhysicsInfo,
    Scatter,
    ScatterKind,
    as_scatter,
)

__all__ = [
    # Version
    "__version__",
    # Cache
    "KeyedObjectCache",
    "CachedHandle",
    # Materials
    "HostMaterial",
    "MaterialTable",
    "MaterialFactory",
    "chemical_formula_key",
    "reduce_composition",
    # Physics
    "MaterialConfig",
    "PhysicsInfo",
    "DataLibrary",
    "Scatter",
    "ScatterKind",
    "IsotropicScatter",
    "as_scatter",
    # Errors
    "XtalScatterError",
    "BadInput",
    "MissingInfo",
    "InvalidInput",
]
