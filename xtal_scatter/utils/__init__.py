"""Utilities package."""

from xtal_scatter.utils.visualization import (
    cross_section_curve,
    plot_cross_section,
    plot_material_summary,
    plot_scattering_angles,
)

__all__ = [
    'cross_section_curve',
    'plot_cross_section',
    'plot_scattering_angles',
    'plot_material_summary',
]
