"""
Visualization Module

matplotlib charts for sweeps, access breakdowns and optical-core panels.

Functions:
    plot_sweep: Sweep series on twin axes
    plot_access_breakdown: Per-step access donut
    plot_attention_pattern: Decorative attention thumbnails
    plot_core_occupancy: Microring occupancy grid
    plot_patch_grid: Image patch tiling
    plot_all: Every chart for one AnalysisResult
"""

from vitoptics.visualization.charts import (
    plot_access_breakdown,
    plot_all,
    plot_attention_pattern,
    plot_core_occupancy,
    plot_patch_grid,
    plot_sweep,
)
from vitoptics.visualization.layout import (
    CoreOccupancy,
    PatchGrid,
    attention_intensities,
    core_occupancy_cells,
    patch_grid,
)
from vitoptics.visualization.publication import setup_publication_style, save_figure

__all__ = [
    'plot_access_breakdown',
    'plot_all',
    'plot_attention_pattern',
    'plot_core_occupancy',
    'plot_patch_grid',
    'plot_sweep',
    'CoreOccupancy',
    'PatchGrid',
    'attention_intensities',
    'core_occupancy_cells',
    'patch_grid',
    'setup_publication_style',
    'save_figure',
]
