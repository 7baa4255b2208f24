"""Periodic table data for element identity and atomic masses.

Symbols and names follow IUPAC (Z = 1 ... 118). Masses are standard atomic
weights [amu]; for elements without stable isotopes the mass number of the
longest-lived isotope is used.

Deuterium is addressed through the special id ``DEUTERIUM_Z`` and has its own
entry, so that it is never confused with ordinary hydrogen.
"""

from dataclasses import dataclass
from typing import Optional

from xtal_scatter.core.constants import DEUTERIUM_Z, MAX_Z


@dataclass(frozen=True)
class ElementData:
    """Static data for one element.

    Attributes:
        Z: Atomic number (``DEUTERIUM_Z`` for deuterium)
        symbol: Element symbol (e.g. 'Al', 'D')
        name: Element name
        A: Atomic mass [amu]

    """

    Z: int
    symbol: str
    name: str
    A: float


# (symbol, name, standard atomic mass), indexed by Z - 1
_PERIODIC_TABLE = (
    ("H", "Hydrogen", 1.008),
    ("He", "Helium", 4.002602),
    ("Li", "Lithium", 6.94),
    ("Be", "Beryllium", 9.0121831),
    ("B", "Boron", 10.81),
    ("C", "Carbon", 12.011),
    ("N", "Nitrogen", 14.007),
    ("O", "Oxygen", 15.999),
    ("F", "Fluorine", 18.998403163),
    ("Ne", "Neon", 20.1797),
    ("Na", "Sodium", 22.98976928),
    ("Mg", "Magnesium", 24.305),
    ("Al", "Aluminium", 26.9815385),
    ("Si", "Silicon", 28.085),
    ("P", "Phosphorus", 30.973761998),
    ("S", "Sulfur", 32.06),
    ("Cl", "Chlorine", 35.45),
    ("Ar", "Argon", 39.948),
    ("K", "Potassium", 39.0983),
    ("Ca", "Calcium", 40.078),
    ("Sc", "Scandium", 44.955908),
    ("Ti", "Titanium", 47.867),
    ("V", "Vanadium", 50.9415),
    ("Cr", "Chromium", 51.9961),
    ("Mn", "Manganese", 54.938044),
    ("Fe", "Iron", 55.845),
    ("Co", "Cobalt", 58.933194),
    ("Ni", "Nickel", 58.6934),
    ("Cu", "Copper", 63.546),
    ("Zn", "Zinc", 65.38),
    ("Ga", "Gallium", 69.723),
    ("Ge", "Germanium", 72.630),
    ("As", "Arsenic", 74.921595),
    ("Se", "Selenium", 78.971),
    ("Br", "Bromine", 79.904),
    ("Kr", "Krypton", 83.798),
    ("Rb", "Rubidium", 85.4678),
    ("Sr", "Strontium", 87.62),
    ("Y", "Yttrium", 88.90584),
    ("Zr", "Zirconium", 91.224),
    ("Nb", "Niobium", 92.90637),
    ("Mo", "Molybdenum", 95.95),
    ("Tc", "Technetium", 98.0),
    ("Ru", "Ruthenium", 101.07),
    ("Rh", "Rhodium", 102.90550),
    ("Pd", "Palladium", 106.42),
    ("Ag", "Silver", 107.8682),
    ("Cd", "Cadmium", 112.414),
    ("In", "Indium", 114.818),
    ("Sn", "Tin", 118.710),
    ("Sb", "Antimony", 121.760),
    ("Te", "Tellurium", 127.60),
    ("I", "Iodine", 126.90447),
    ("Xe", "Xenon", 131.293),
    ("Cs", "Caesium", 132.90545196),
    ("Ba", "Barium", 137.327),
    ("La", "Lanthanum", 138.90547),
    ("Ce", "Cerium", 140.116),
    ("Pr", "Praseodymium", 140.90766),
    ("Nd", "Neodymium", 144.242),
    ("Pm", "Promethium", 145.0),
    ("Sm", "Samarium", 150.36),
    ("Eu", "Europium", 151.964),
    ("Gd", "Gadolinium", 157.25),
    ("Tb", "Terbium", 158.92535),
    ("Dy", "Dysprosium", 162.500),
    ("Ho", "Holmium", 164.93033),
    ("Er", "Erbium", 167.259),
    ("Tm", "Thulium", 168.93422),
    ("Yb", "Ytterbium", 173.045),
    ("Lu", "Lutetium", 174.9668),
    ("Hf", "Hafnium", 178.49),
    ("Ta", "Tantalum", 180.94788),
    ("W", "Tungsten", 183.84),
    ("Re", "Rhenium", 186.207),
    ("Os", "Osmium", 190.23),
    ("Ir", "Iridium", 192.217),
    ("Pt", "Platinum", 195.084),
    ("Au", "Gold", 196.966569),
    ("Hg", "Mercury", 200.592),
    ("Tl", "Thallium", 204.38),
    ("Pb", "Lead", 207.2),
    ("Bi", "Bismuth", 208.98040),
    ("Po", "Polonium", 209.0),
    ("At", "Astatine", 210.0),
    ("Rn", "Radon", 222.0),
    ("Fr", "Francium", 223.0),
    ("Ra", "Radium", 226.0),
    ("Ac", "Actinium", 227.0),
    ("Th", "Thorium", 232.0377),
    ("Pa", "Protactinium", 231.03588),
    ("U", "Uranium", 238.02891),
    ("Np", "Neptunium", 237.0),
    ("Pu", "Plutonium", 244.0),
    ("Am", "Americium", 243.0),
    ("Cm", "Curium", 247.0),
    ("Bk", "Berkelium", 247.0),
    ("Cf", "Californium", 251.0),
    ("Es", "Einsteinium", 252.0),
    ("Fm", "Fermium", 257.0),
    ("Md", "Mendelevium", 258.0),
    ("No", "Nobelium", 259.0),
    ("Lr", "Lawrencium", 266.0),
    ("Rf", "Rutherfordium", 267.0),
    ("Db", "Dubnium", 268.0),
    ("Sg", "Seaborgium", 269.0),
    ("Bh", "Bohrium", 270.0),
    ("Hs", "Hassium", 269.0),
    ("Mt", "Meitnerium", 278.0),
    ("Ds", "Darmstadtium", 281.0),
    ("Rg", "Roentgenium", 282.0),
    ("Cn", "Copernicium", 285.0),
    ("Nh", "Nihonium", 286.0),
    ("Fl", "Flerovium", 289.0),
    ("Mc", "Moscovium", 290.0),
    ("Lv", "Livermorium", 293.0),
    ("Ts", "Tennessine", 294.0),
    ("Og", "Oganesson", 294.0),
)

DEUTERIUM = ElementData(Z=DEUTERIUM_Z, symbol="D", name="Deuterium", A=2.01410177812)

_BY_Z: dict[int, ElementData] = {
    z: ElementData(Z=z, symbol=sym, name=name, A=mass)
    for z, (sym, name, mass) in enumerate(_PERIODIC_TABLE, start=1)
}
_BY_Z[DEUTERIUM_Z] = DEUTERIUM

_BY_SYMBOL: dict[str, ElementData] = {e.symbol: e for e in _BY_Z.values()}


def is_deuterium(z: int) -> bool:
    """True if *z* is the special deuterium id."""
    return z == DEUTERIUM_Z


def is_valid_z(z: int) -> bool:
    """True for ordinary atomic numbers 1..MAX_Z and for deuterium."""
    return (0 < z <= MAX_Z) or is_deuterium(z)


def get_element(z: int) -> Optional[ElementData]:
    """Element data for *z*, or None when no data is tabulated (e.g. Z=119)."""
    return _BY_Z.get(z)


def element_symbol(z: int) -> Optional[str]:
    """Element symbol for *z*, or None when unknown."""
    elem = _BY_Z.get(z)
    return elem.symbol if elem is not None else None


def find_element(symbol: str) -> Optional[ElementData]:
    """Look up an element by symbol ('D' gives deuterium)."""
    return _BY_SYMBOL.get(symbol)


def z_from_symbol(symbol: str) -> int:
    """Atomic number for *symbol*, or 0 if the symbol is unknown."""
    elem = _BY_SYMBOL.get(symbol)
    return elem.Z if elem is not None else 0
