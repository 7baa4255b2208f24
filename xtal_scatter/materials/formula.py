"""Chemical formula derivation and canonical formula strings.

A composition is a collection of ``(element_id, count)`` pairs, where the id
is an atomic number or ``DEUTERIUM_Z``. It is reduced to a canonical form by
dividing all counts by their greatest common divisor (Al6O9 -> Al2O3) and
sorting by element id. The canonical form renders as a formula string in the
Hill system:

    https://en.wikipedia.org/wiki/Chemical_formula#Hill_system

If carbon is present anywhere in the formula, carbon comes first, then
hydrogen, then deuterium. All other elements (and all elements of carbon-free
formulas) are ordered alphabetically by symbol. No further exceptions of the
Hill system are implemented (e.g. O2 last in oxides). Ids without tabulated
data render as ``Elem<Z>`` and go last.

The formula string doubles as the cache key of base materials, so every
function here is pure and deterministic.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Iterable, List, Sequence, Tuple

from xtal_scatter.core.constants import CARBON_Z, HYDROGEN_Z
from xtal_scatter.core.elements import element_symbol, is_deuterium, is_valid_z, z_from_symbol
from xtal_scatter.core.errors import InvalidInput

# (element_id, count) pairs, sorted by element id
ChemicalFormula = List[Tuple[int, int]]


def reduce_composition(entries: Iterable[Tuple[int, int]]) -> ChemicalFormula:
    """Reduce a composition to its canonical chemical formula.

    Args:
        entries: ``(element_id, count)`` pairs in any order

    Returns:
        New list of ``(element_id, reduced_count)`` pairs sorted by id

    Raises:
        InvalidInput: On an out-of-range element id, a negative or
            non-integral count, an empty composition (after dropping zero
            counts), or an element appearing more than once.

    Example:
        >>> reduce_composition([(8, 9), (13, 6)])
        [(8, 3), (13, 2)]
    """
    formula: ChemicalFormula = []
    for z, count in entries:
        if not is_valid_z(z):
            raise InvalidInput(f"invalid atomic number ({z})")
        if count != int(count):
            raise InvalidInput(f"non-integral atom count ({count}) for atomic number {z}")
        if count < 0:
            raise InvalidInput(f"negative atom count ({count}) for atomic number {z}")
        if count:
            formula.append((int(z), int(count)))

    if not formula:
        raise InvalidInput("Atomic composition info indicates an empty unit cell.")

    divisor = reduce(math.gcd, (count for _, count in formula))
    formula = sorted((z, count // divisor) for z, count in formula)

    for (z_a, _), (z_b, _) in zip(formula, formula[1:]):
        if z_a == z_b:
            raise InvalidInput(
                f"Atomic composition info has duplicate entries for atomic number {z_a}."
            )
    return formula


def _display_symbol(z: int) -> Tuple[str, bool]:
    """Symbol used in formula strings, and whether it is a fallback name."""
    if is_deuterium(z):
        return "D", False
    symbol = element_symbol(z)
    if symbol is None:
        return f"Elem<{z}>", True
    return symbol, False


def hill_formula_string(formula: Sequence[Tuple[int, int]]) -> str:
    """Render a (reduced) chemical formula as a Hill-system string.

    Counts of 1 are omitted from the string.

    Example:
        >>> hill_formula_string([(1, 2), (6, 1), (8, 1)])
        'CH2O'
    """
    any_carbon = any(z == CARBON_Z for z, _ in formula)

    sortable = []
    for z, count in formula:
        symbol, fallback = _display_symbol(z)
        if fallback:
            # '{' sorts after all letters
            sort_key = "{" + symbol
        elif any_carbon and z == CARBON_Z:
            sort_key = "1"
        elif any_carbon and z == HYDROGEN_Z:
            sort_key = "2"
        elif any_carbon and is_deuterium(z):
            sort_key = "3"
        else:
            sort_key = symbol
        text = symbol if count == 1 else f"{symbol}{count}"
        sortable.append((sort_key, text))

    return "".join(text for _, text in sorted(sortable))


def chemical_formula_key(entries: Iterable[Tuple[int, int]]) -> str:
    """Canonical formula string of a composition (reduce, then render).

    Compositions that are integer multiples of each other share a key.

    Example:
        >>> chemical_formula_key([(6, 6), (1, 12), (8, 6)])
        'CH2O'
    """
    return hill_formula_string(reduce_composition(entries))


def chemical_formula_from_info(info) -> ChemicalFormula:
    """Derive the reduced chemical formula of a material description.

    Monoatomic materials only need a single-element fractional composition.
    Otherwise integral per-unit-cell atom counts are required; without them
    an empty formula is returned and callers must fall back to the
    fractional composition.

    Args:
        info: PhysicsInfo-like object

    Returns:
        Reduced formula, or an empty list if no integral counts are available

    Raises:
        InvalidInput: If the atom counts do not form a valid composition.
    """
    if info.has_composition() and len(info.composition) == 1:
        z = z_from_symbol(info.composition[0][0])
        if is_valid_z(z):
            return [(z, 1)]

    if not info.has_atom_info():
        return []

    return reduce_composition(
        (atom.atomic_number, atom.number_per_unit_cell) for atom in info.atom_info
    )


def fractional_composition_key(
    composition: Sequence[Tuple[str, float]],
    digits: int = 16,
) -> str:
    """Cache key built from a fractional elemental composition.

    Used when no integral composition is available. Keys start with an
    underscore and so never collide with Hill formula strings.

    Example:
        >>> fractional_composition_key([("Al", 0.4), ("O", 0.6)])
        '_Al_0.4_O_0.6'
    """
    return "".join(f"_{name}_{fraction:.{digits}g}" for name, fraction in composition)
