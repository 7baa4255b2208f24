"""Material System.

Module structure:
    formula: Chemical formula reduction and Hill-system strings
    descriptor: HostElement, ElementComponent and HostMaterial classes
    registry: MaterialTable (host material table)
    factory: MaterialFactory (cached base and derived materials)

Example usage:
    >>> from xtal_scatter.materials import MaterialFactory, chemical_formula_key
    >>> from xtal_scatter.physics import DataLibrary
    >>> chemical_formula_key([(13, 6), (8, 9)])
    'Al2O3'
    >>> factory = MaterialFactory(DataLibrary.default())
    >>> factory.create_material("Al_sg225.ncmat;temp=20K").temperature
    20.0
"""

from .descriptor import (
    DEUTERIUM_ELEMENT,
    ElementComponent,
    HostElement,
    HostMaterial,
    element_for_id,
    element_for_symbol,
)
from .factory import MaterialFactory
from .formula import (
    ChemicalFormula,
    chemical_formula_from_info,
    chemical_formula_key,
    fractional_composition_key,
    hill_formula_string,
    reduce_composition,
)
from .registry import MaterialTable

__all__ = [
    # Formula
    "ChemicalFormula",
    "reduce_composition",
    "hill_formula_string",
    "chemical_formula_key",
    "chemical_formula_from_info",
    "fractional_composition_key",
    # Descriptor classes
    "HostElement",
    "HostMaterial",
    "ElementComponent",
    "DEUTERIUM_ELEMENT",
    "element_for_id",
    "element_for_symbol",
    # Table and factory
    "MaterialTable",
    "MaterialFactory",
]
