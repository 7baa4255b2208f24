"""Command-line interface for material construction.

Usage:
    python -m xtal_scatter.cli formula 6:6 1:12 8:6
    python -m xtal_scatter.cli material "Al2O3_sg167_Corundum.ncmat;packfact=0.6"
    python -m xtal_scatter.cli plot "Al_sg225.ncmat;temp=20K" --output al.png
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from xtal_scatter.core.constants import DEFAULT_CONSTANTS, ekin_to_wavelength
from xtal_scatter.core.errors import XtalScatterError
from xtal_scatter.materials.factory import MaterialFactory
from xtal_scatter.materials.formula import chemical_formula_key
from xtal_scatter.physics.library import DataLibrary

logger = logging.getLogger(__name__)


def _parse_entry(text: str) -> Tuple[int, int]:
    """Parse a 'Z:count' command-line token."""
    try:
        z, count = text.split(":")
        return int(z), int(count)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected Z:count (e.g. 13:2), got {text!r}"
        ) from None


def _load_library(path: Optional[str]) -> DataLibrary:
    if path is None:
        return DataLibrary.default()
    return DataLibrary(path)


def cmd_formula(args: argparse.Namespace) -> None:
    """Print the normalized chemical formula of a composition."""
    print(chemical_formula_key(args.entries))


def cmd_material(args: argparse.Namespace) -> None:
    """Create a derived material and print its properties."""
    factory = MaterialFactory(_load_library(args.library))
    material = factory.create_material(args.cfg)

    print("=" * 60)
    print(f"Material:     {material.name} (index {material.index})")
    print(f"Base:         {material.base.name}")
    print(f"Formula:      {material.chemical_formula or '-'}")
    print(f"Density:      {material.density:.6g} g/cm³")
    print(f"Temperature:  {material.temperature:.6g} K")
    print(f"Scatter:      {material.scatter.kind.value} ({material.scatter!r})")
    ekin = DEFAULT_CONSTANTS.thermal_energy
    sigma = material.scatter.cross_section(ekin, (0.0, 0.0, 1.0))
    print(
        f"Thermal xs:   {sigma:.6g} barn "
        f"(E={ekin:g} eV, λ={ekin_to_wavelength(ekin):.4f} Å)"
    )
    print("\n[Elements]")
    for component in material.elements:
        count = f"  x{component.count}" if component.count is not None else ""
        print(
            f"  {component.element.symbol:<3s} Z={component.element.Z:<3d} "
            f"mass fraction {component.mass_fraction:.6f}{count}"
        )
    print("=" * 60)


def cmd_plot(args: argparse.Namespace) -> None:
    """Save a cross-section and scattering-angle figure for a material."""
    # Imported here so the other commands work without a display backend
    import matplotlib
    matplotlib.use("Agg")
    from xtal_scatter.utils.visualization import plot_material_summary

    factory = MaterialFactory(_load_library(args.library))
    material = factory.create_material(args.cfg)
    plot_material_summary(material, n_samples=args.samples, save_path=args.output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Cached neutron scattering materials",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Normalized formula of glucose (prints CH2O)
  python -m xtal_scatter.cli formula 6:6 1:12 8:6

  # Derived material from the bundled library
  python -m xtal_scatter.cli material "Al2O3_sg167_Corundum.ncmat;packfact=0.6"

  # Figure for a material from a custom library
  python -m xtal_scatter.cli plot "Foo.ncmat;temp=20C" --library my.yaml --output foo.png
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Formula command
    formula_parser = subparsers.add_parser("formula", help="Normalize a chemical composition")
    formula_parser.add_argument(
        "entries",
        nargs="+",
        type=_parse_entry,
        help="Composition entries as Z:count (deuterium is 1001)",
    )

    # Material command
    material_parser = subparsers.add_parser("material", help="Create and describe a material")
    material_parser.add_argument("cfg", help="Material configuration string")
    material_parser.add_argument(
        "--library",
        default=None,
        help="Material data YAML file (default: bundled library)",
    )

    # Plot command
    plot_parser = subparsers.add_parser("plot", help="Plot cross section and angles")
    plot_parser.add_argument("cfg", help="Material configuration string")
    plot_parser.add_argument(
        "--library",
        default=None,
        help="Material data YAML file (default: bundled library)",
    )
    plot_parser.add_argument(
        "--output",
        required=True,
        help="Output image file",
    )
    plot_parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Number of sampled scatterings (default: from defaults.yaml)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    commands = {
        "formula": cmd_formula,
        "material": cmd_material,
        "plot": cmd_plot,
    }
    if args.command not in commands:
        parser.print_help()
        return 1

    try:
        commands[args.command](args)
    except (XtalScatterError, FileNotFoundError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
