"""YAML-backed model construction service.

Implements the ModelConstructionService contract: turns a parsed material
configuration into a PhysicsInfo and a scattering model, using material
data entries loaded from YAML files.

Expected YAML format:
    materials:
      - name: Al2O3.ncmat
        density: 3.98            # g/cm³
        temperature: 293.15      # K, optional
        atoms:                   # integral counts per unit cell, optional
          - {Z: 13, count: 12}
          - {Z: 8, count: 18}
        composition:             # number fractions, optional
          - {element: Al, fraction: 0.4}
          - {element: O, fraction: 0.6}
        scatter:
          model: constant        # or: tabulated
          sigma: 1.5             # barn

    Tabulated models give ``energies`` [eV] and ``sigma`` [barn] lists.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple

import yaml

from xtal_scatter.config.defaults import DEFAULT_LIBRARY_PATH
from xtal_scatter.core.elements import element_symbol, is_valid_z
from xtal_scatter.core.errors import BadInput
from xtal_scatter.physics.info import AtomEntry, PhysicsInfo
from xtal_scatter.physics.matcfg import MaterialConfig
from xtal_scatter.physics.models import ConstantIsotropicModel, TabulatedIsotropicModel


class ModelConstructionService(Protocol):
    """Source of physics descriptions and scattering models."""

    def create_info(self, cfg: MaterialConfig) -> PhysicsInfo:
        ...

    def create_scatter(self, cfg: MaterialConfig):
        ...


def _integral(value, what: str) -> int:
    """*value* as int; BadInput unless it is a whole number."""
    if isinstance(value, bool) or float(value) != int(value):
        raise BadInput(f"{what} must be an integer, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class MaterialData:
    """One material data entry.

    Attributes:
        name: Data file name the entry is addressed by
        density: Density [g/cm³]
        temperature: Temperature [K]
        atom_info: Integral per-unit-cell atom counts
        composition: (element_symbol, number_fraction) pairs
        scatter: Scattering model description

    """

    name: str
    density: Optional[float] = None
    temperature: Optional[float] = None
    atom_info: Optional[Tuple[AtomEntry, ...]] = None
    composition: Optional[Tuple[Tuple[str, float], ...]] = None
    scatter: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate entry."""
        if not self.name:
            raise BadInput("Material data entry lacks a name")
        if self.atom_info:
            for atom in self.atom_info:
                if not is_valid_z(atom.atomic_number):
                    raise BadInput(f"invalid atomic number ({atom.atomic_number})")

    @classmethod
    def from_dict(cls, data: dict) -> "MaterialData":
        """Create entry from a dictionary (one item of the YAML list)."""
        atom_info = None
        if data.get("atoms"):
            atom_info = tuple(
                AtomEntry(
                    atomic_number=_integral(a["Z"], "atomic number"),
                    number_per_unit_cell=_integral(a["count"], "atom count"),
                )
                for a in data["atoms"]
            )

        composition = None
        if data.get("composition"):
            composition = tuple(
                (str(c["element"]), float(c["fraction"])) for c in data["composition"]
            )

        def _optional_float(key):
            return float(data[key]) if data.get(key) is not None else None

        return cls(
            name=data["name"],
            density=_optional_float("density"),
            temperature=_optional_float("temperature"),
            atom_info=atom_info,
            composition=composition,
            scatter=dict(data.get("scatter") or {}),
        )

    def fractional_composition(self) -> Optional[Tuple[Tuple[str, float], ...]]:
        """Explicit composition, or number fractions derived from atom counts."""
        if self.composition:
            return self.composition
        if not self.atom_info:
            return None
        total = sum(a.number_per_unit_cell for a in self.atom_info)
        if total <= 0:
            return None
        return tuple(
            (element_symbol(a.atomic_number) or f"Elem<{a.atomic_number}>",
             a.number_per_unit_cell / total)
            for a in self.atom_info
            if a.number_per_unit_cell
        )


def build_scatter_model(description: Dict[str, Any]):
    """Create a non-oriented model from a ``scatter`` description.

    Raises:
        BadInput: For a missing or unknown model type or invalid parameters
    """
    model_type = description.get("model")
    if model_type is None:
        raise BadInput("Material data lacks a scattering model description")

    try:
        if model_type == "constant":
            return ConstantIsotropicModel(float(description["sigma"]))
        if model_type == "tabulated":
            return TabulatedIsotropicModel(description["energies"], description["sigma"])
    except BadInput:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise BadInput(f"Invalid parameters for scatter model {model_type!r}: {e}") from e

    raise BadInput(f"Unknown scatter model type: {model_type!r}")


class DataLibrary:
    """Registry of material data entries, acting as model construction service.

    Runtime API:
        - create_info(cfg) -> PhysicsInfo
        - create_scatter(cfg) -> non-oriented model
        - register(entry) / load_from_yaml(path) / list_entries()
    """

    def __init__(self, yaml_path: Optional[str] = None):
        """Initialize library.

        Args:
            yaml_path: Optional YAML file to load immediately

        """
        self._entries: Dict[str, MaterialData] = {}
        if yaml_path:
            self.load_from_yaml(yaml_path)

    @classmethod
    def default(cls) -> "DataLibrary":
        """Library holding the materials bundled with the package."""
        return cls(str(DEFAULT_LIBRARY_PATH))

    def register(self, entry: MaterialData) -> None:
        """Register a material data entry.

        Raises:
            BadInput: If an entry with the same name exists

        """
        if entry.name in self._entries:
            raise BadInput(f"Material data '{entry.name}' already registered")
        self._entries[entry.name] = entry

    def get_entry(self, datafile: str) -> MaterialData:
        """Get entry by data file name.

        Raises:
            BadInput: If no such entry exists

        """
        if datafile not in self._entries:
            available = ", ".join(self.list_entries())
            raise BadInput(f"Unknown material data file '{datafile}'. Available: {available}")
        return self._entries[datafile]

    def list_entries(self) -> List[str]:
        return list(self._entries.keys())

    def load_from_yaml(self, yaml_path: str) -> None:
        """Load entries from a YAML file (see module docstring for format).

        Malformed entries are skipped with a warning.

        Raises:
            FileNotFoundError: If file doesn't exist
            BadInput: If the file lacks a 'materials' list

        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Material library not found: {yaml_path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get("materials"), list):
            raise BadInput(f"Material library {yaml_path} must contain a 'materials' list")

        for mat_data in data["materials"]:
            try:
                self.register(MaterialData.from_dict(mat_data))
            except (BadInput, KeyError, TypeError, ValueError) as e:
                name = mat_data.get("name", "unknown") if isinstance(mat_data, dict) else "unknown"
                warnings.warn(
                    f"Failed to load material data '{name}': {e}",
                    UserWarning,
                    stacklevel=2,
                )

    def create_info(self, cfg: MaterialConfig) -> PhysicsInfo:
        """PhysicsInfo for *cfg*; the configured temperature overrides the data."""
        entry = self.get_entry(cfg.datafile)
        return PhysicsInfo(
            atom_info=entry.atom_info,
            composition=entry.fractional_composition(),
            density=entry.density,
            temperature=cfg.temp if cfg.temp is not None else entry.temperature,
        )

    def create_scatter(self, cfg: MaterialConfig):
        """Non-oriented scattering model for *cfg*."""
        return build_scatter_model(self.get_entry(cfg.datafile).scatter)
