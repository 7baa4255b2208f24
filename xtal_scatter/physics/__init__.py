"""Physics interfaces: material configurations, physics info and scattering.

Module structure:
    matcfg: MaterialConfig (configuration string parser)
    info: PhysicsInfo and AtomEntry
    scatter: ScatterKind, Scatter interface, NonOrientedModel protocol
    isotropic: IsotropicScatter adapter and rotate_direction
    models: Simple non-oriented models
    library: DataLibrary (YAML-backed model construction service)
"""

from xtal_scatter.physics.info import AtomEntry, PhysicsInfo
from xtal_scatter.physics.isotropic import IsotropicScatter, as_scatter, rotate_direction
from xtal_scatter.physics.library import (
    DataLibrary,
    MaterialData,
    ModelConstructionService,
    build_scatter_model,
)
from xtal_scatter.physics.matcfg import MaterialConfig
from xtal_scatter.physics.models import ConstantIsotropicModel, TabulatedIsotropicModel
from xtal_scatter.physics.scatter import NonOrientedModel, Scatter, ScatterKind

__all__ = [
    # Configuration and info
    "MaterialConfig",
    "PhysicsInfo",
    "AtomEntry",
    # Scattering interfaces
    "ScatterKind",
    "Scatter",
    "NonOrientedModel",
    "IsotropicScatter",
    "as_scatter",
    "rotate_direction",
    # Models
    "ConstantIsotropicModel",
    "TabulatedIsotropicModel",
    # Model construction
    "ModelConstructionService",
    "DataLibrary",
    "MaterialData",
    "build_scatter_model",
]
