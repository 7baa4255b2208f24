"""Two-tier material factory.

Turns a material configuration string into a host material, constructing
every material at most once:

1. Base materials hold only the relative composition (elements and their
   proportions, unit density, default temperature). They are keyed by the
   reduced Hill formula (e.g. "Al2O3"), or by a key built from the
   fractional composition when no integral atom counts are available. All
   configurations of the same compound share one base material.
2. Derived materials add density (data density x packing factor),
   temperature and the scattering model. They are keyed by the configuration
   string exactly as given.

Note that textually distinct configuration strings always give distinct
derived materials, even when physically equivalent ("Al.ncmat;temp=293.15"
and "Al.ncmat;temp=293.15K" are two materials). No semantic
canonicalization of configuration strings is attempted.

Cached materials are re-validated against the host material table on every
request; a material deleted from the table is rebuilt on the next request.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple, Union

import numpy as np

from xtal_scatter.config.defaults import (
    DEFAULT_BASE_DENSITY,
    DEFAULT_BASE_NAME_PREFIX,
    DEFAULT_DERIVED_NAME_PREFIX,
    DEFAULT_FRACTION_DIGITS,
    DEFAULT_MATERIAL_TEMPERATURE,
    DEFAULT_PRESSURE,
    DEFAULT_STATE,
)
from xtal_scatter.config.yaml_loader import get_default
from xtal_scatter.core.cache import CachedHandle, KeyedObjectCache
from xtal_scatter.core.errors import BadInput, MissingInfo
from xtal_scatter.materials.descriptor import (
    HostMaterial,
    components_from_counts,
    components_from_fractions,
)
from xtal_scatter.materials.formula import (
    ChemicalFormula,
    chemical_formula_from_info,
    fractional_composition_key,
    hill_formula_string,
)
from xtal_scatter.materials.registry import MaterialTable
from xtal_scatter.physics.isotropic import as_scatter
from xtal_scatter.physics.matcfg import MaterialConfig

logger = logging.getLogger(__name__)


class MaterialFactory:
    """Cached construction of base and derived host materials.

    Args:
        service: Model construction service providing ``create_info(cfg)``
            and ``create_scatter(cfg)``
        table: Host material table (a new, private table if None)
        rng: Random generator handed to isotropic scatter adapters

    Example:
        >>> factory = MaterialFactory(DataLibrary.default())
        >>> mat = factory.create_material("Al2O3_sg167_Corundum.ncmat;packfact=0.6")
        >>> mat.base.chemical_formula
        'Al2O3'
    """

    def __init__(
        self,
        service,
        table: Optional[MaterialTable] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.service = service
        self.table = table if table is not None else MaterialTable()
        self._rng = rng
        self._base_cache: KeyedObjectCache[CachedHandle[HostMaterial]] = KeyedObjectCache(
            is_live=self._is_live, name="base-materials",
        )
        self._derived_cache: KeyedObjectCache[CachedHandle[HostMaterial]] = KeyedObjectCache(
            is_live=self._is_live, name="derived-materials",
        )

        self.default_temperature = get_default(
            "material.default_temperature_k", DEFAULT_MATERIAL_TEMPERATURE)
        self.base_density = get_default("material.base_density", DEFAULT_BASE_DENSITY)
        self.pressure = get_default("material.pressure_atm", DEFAULT_PRESSURE)
        self.state = get_default("material.state", DEFAULT_STATE)
        self.base_prefix = get_default("material.base_name_prefix", DEFAULT_BASE_NAME_PREFIX)
        self.derived_prefix = get_default(
            "material.derived_name_prefix", DEFAULT_DERIVED_NAME_PREFIX)
        self.fraction_digits = get_default("cache_keys.fraction_digits", DEFAULT_FRACTION_DIGITS)

    def _is_live(self, handle: CachedHandle) -> bool:
        return self.table.lookup(handle.index) is handle.value

    @property
    def base_cache(self) -> KeyedObjectCache:
        return self._base_cache

    @property
    def derived_cache(self) -> KeyedObjectCache:
        return self._derived_cache

    def _base_key(self, info) -> Tuple[str, ChemicalFormula]:
        formula = chemical_formula_from_info(info)
        if formula:
            return hill_formula_string(formula), formula
        if not info.has_composition():
            raise MissingInfo("Selected material info lacks info about atomic composition.")
        # No integral atom counts (e.g. amorphous materials), so the
        # material is based purely on the fractional composition.
        return fractional_composition_key(info.composition, self.fraction_digits), formula

    def base_material_key(self, info) -> str:
        """Cache key of the base material for *info*.

        Raises:
            MissingInfo: If neither integral nor fractional composition exists
            InvalidInput: If the atom counts are not a valid composition

        """
        return self._base_key(info)[0]

    def get_base_material(self, info) -> CachedHandle[HostMaterial]:
        """Shared composition-only material for *info*.

        Args:
            info: PhysicsInfo-like object (atom info and/or composition)

        Returns:
            Handle of the (possibly cached) base material

        """
        key, formula = self._base_key(info)

        def build() -> CachedHandle[HostMaterial]:
            if formula:
                elements = components_from_counts(formula)
            else:
                elements = components_from_fractions(info.composition)
            material = self.table.register_material(
                self.base_prefix + key,
                elements,
                density=self.base_density,
                temperature=self.default_temperature,
                state=self.state,
                pressure=self.pressure,
                chemical_formula=key if formula else None,
            )
            return CachedHandle(material, material.index)

        return self._base_cache.get_or_create(key, build)

    def get_derived_material(
        self, cfg: Union[str, MaterialConfig],
    ) -> CachedHandle[HostMaterial]:
        """Fully configured material for a configuration string.

        Args:
            cfg: Configuration string (or an already parsed MaterialConfig,
                keyed by its original text)

        Returns:
            Handle of the (possibly cached) derived material

        Raises:
            BadInput: Malformed configuration, or errors of the model service
            MissingInfo: If the material data lacks density or composition

        """
        if isinstance(cfg, MaterialConfig):
            key = cfg.text or cfg.to_str_cfg()
            parsed: Optional[MaterialConfig] = cfg
        elif isinstance(cfg, str):
            key = cfg
            parsed = None
        else:
            raise BadInput(f"Material configuration must be a string, got {type(cfg).__name__}")

        def build() -> CachedHandle[HostMaterial]:
            matcfg = parsed if parsed is not None else MaterialConfig.from_string(key)

            # Fail early if no scattering physics can be built for the configuration
            scatter = as_scatter(self.service.create_scatter(matcfg), rng=self._rng)

            info = self.service.create_info(matcfg)
            if not info.has_density():
                raise MissingInfo("Selected material info lacks info about material density.")

            base = self.get_base_material(info).value

            # Default temperature matches the base material, so that materials
            # without explicit temperature end up with a single temperature.
            temperature = (
                info.temperature if info.has_temperature() else self.default_temperature
            )

            material = self.table.register_material(
                self.derived_prefix + key,
                base.elements,
                density=matcfg.packfact * info.density,
                temperature=temperature,
                state=self.state,
                pressure=self.pressure,
                base=base,
                chemical_formula=base.chemical_formula,
                scatter=scatter,
            )
            logger.debug("Derived %r from base %r", material.name, base.name)
            return CachedHandle(material, material.index)

        return self._derived_cache.get_or_create(key, build)

    def create_material(self, cfg: Union[str, MaterialConfig]) -> HostMaterial:
        """Derived host material for *cfg* (see get_derived_material)."""
        return self.get_derived_material(cfg).value
