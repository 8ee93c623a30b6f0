"""
Analysis Charts

matplotlib renderings of the analysis panels:
- plot_sweep: access series on the left axis, energy and time on the right
- plot_access_breakdown: donut of per-step accesses (input preparation excluded)
- plot_attention_pattern: decorative per-head attention thumbnails
- plot_core_occupancy: microring occupancy grid
- plot_patch_grid: image patch tiling

Each function returns the Figure. When output_path is given the figure is
saved (extension replaced per format) and closed.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from vitoptics.analysis.sweep import Sweep
from vitoptics.core.structures import (
    DetailedCalculation,
    OpticalCoreConfig,
    OpticalMetrics,
    ViTConfig,
    format_quantity,
)
from vitoptics.visualization.layout import (
    attention_intensities,
    core_occupancy_cells,
    patch_grid,
)
from vitoptics.visualization.publication import (
    COLORS,
    add_grid_lines,
    finish_figure,
    format_large_number,
    setup_publication_style,
)

PathLike = Optional[Union[str, Path]]

# Series and line styles of the sweep chart (left axis, then right axis)
LEFT_SERIES = (
    ('Total Accesses', '-', 3.0),
    ('Projection Accesses', '--', 2.0),
    ('Attention Accesses', '--', 2.0),
)
RIGHT_SERIES = (
    ('Energy (μJ)', '-', 2.0),
    ('Execution Time (ms)', '-', 2.0),
)


def plot_sweep(
    sweep: Sweep,
    output_path: PathLike = None,
    formats: Sequence[str] = ('png',),
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Sweep chart with two y-axes.

    Access counts (millions) share the left axis; energy (μJ) and execution
    time (ms) share the right axis.
    """
    setup_publication_style()

    df = sweep.to_dataframe()
    x_col = sweep.parameter.value

    fig, ax_left = plt.subplots(figsize=(9, 5))
    ax_right = ax_left.twinx()

    for name, style, width in LEFT_SERIES:
        ax_left.plot(df[x_col], df[name], linestyle=style, linewidth=width,
                     color=COLORS[name], marker='o', label=name)
    for name, style, width in RIGHT_SERIES:
        ax_right.plot(df[x_col], df[name], linestyle=style, linewidth=width,
                      color=COLORS[name], marker='s', label=name)

    ax_left.set_xlabel(sweep.parameter.label)
    ax_left.set_ylabel('Optical Accesses (Millions)')
    ax_right.set_ylabel('Energy (μJ) / Time (ms)')
    ax_left.set_title(title or f'Scaling with {sweep.parameter.label}')
    add_grid_lines(ax_left)

    handles_l, labels_l = ax_left.get_legend_handles_labels()
    handles_r, labels_r = ax_right.get_legend_handles_labels()
    if handles_l or handles_r:
        ax_left.legend(handles_l + handles_r, labels_l + labels_r, loc='upper left')

    return finish_figure(fig, output_path, formats)


def plot_access_breakdown(
    calculation: DetailedCalculation,
    output_path: PathLike = None,
    formats: Sequence[str] = ('png',),
) -> plt.Figure:
    """Donut chart of accesses per step, excluding input preparation."""
    setup_publication_style()

    steps = [step for step in calculation.breakdown() if step.access_count > 0]
    fig, ax = plt.subplots(figsize=(6, 6))

    if steps:
        ax.pie(
            [float(step.access_count) for step in steps],
            labels=[step.name for step in steps],
            colors=[step.display_color for step in steps],
            autopct='%1.1f%%',
            startangle=90,
            wedgeprops={'width': 0.4, 'edgecolor': 'white'},
        )
    ax.set_title(f'Access Breakdown ({format_large_number(calculation.total_accesses)} total)')
    ax.set_aspect('equal')

    return finish_figure(fig, output_path, formats)


def plot_attention_pattern(
    vit: ViTConfig,
    output_path: PathLike = None,
    formats: Sequence[str] = ('png',),
    seed: Optional[int] = None,
) -> plt.Figure:
    """Per-head attention thumbnails (random intensities, illustration only)."""
    setup_publication_style()

    intensities = attention_intensities(vit, seed=seed)
    n_heads = max(1, intensities.shape[0])
    fig, axes = plt.subplots(1, n_heads, figsize=(2.2 * n_heads, 2.6), squeeze=False)

    for head_idx, ax in enumerate(axes[0]):
        if head_idx < intensities.shape[0]:
            ax.imshow(intensities[head_idx], cmap='Blues', vmin=0.0, vmax=1.0)
            ax.set_title(f'Head {head_idx + 1}')
        ax.set_xticks([])
        ax.set_yticks([])

    L = format_quantity(vit.sequence_length)
    fig.suptitle(f'Attention Pattern ({vit.num_heads} heads, {L}×{L} per head)')

    return finish_figure(fig, output_path, formats)


def plot_core_occupancy(
    calculation: DetailedCalculation,
    metrics: OpticalMetrics,
    optical_core: OpticalCoreConfig,
    output_path: PathLike = None,
    formats: Sequence[str] = ('png',),
) -> plt.Figure:
    """Microring occupancy grid (active cells in blue)."""
    setup_publication_style()

    occupancy = core_occupancy_cells(calculation, metrics, optical_core)
    fig, ax = plt.subplots(figsize=(4, 4.4))

    for i, active in enumerate(occupancy.active):
        row, col = divmod(i, occupancy.columns)
        ax.add_patch(Rectangle(
            (col, -row), 0.85, 0.85,
            color=COLORS['active'] if active else COLORS['idle'],
        ))

    n_rows = max(1, int(np.ceil(occupancy.num_cells / occupancy.columns)))
    ax.set_xlim(-0.2, occupancy.columns)
    ax.set_ylim(-n_rows + 0.8, 1.0)
    ax.set_aspect('equal')
    ax.axis('off')
    ax.set_title(
        f'Optical Core: {optical_core.wavelength_channels} ch × '
        f'{optical_core.microrings_per_channel} rings\n'
        f'Utilization {metrics.utilization_ratio * 100:.1f}%'
    )

    return finish_figure(fig, output_path, formats)


def plot_patch_grid(
    vit: ViTConfig,
    output_path: PathLike = None,
    formats: Sequence[str] = ('png',),
) -> plt.Figure:
    """Image tiled into patches."""
    setup_publication_style()

    grid = patch_grid(vit)
    side = int(grid.patches_per_side)
    fig, ax = plt.subplots(figsize=(4, 4.4))

    ax.add_patch(Rectangle((0, 0), grid.image_size, grid.image_size,
                           fill=False, edgecolor=COLORS['active'], linewidth=2))
    for i in range(1, side + 1):
        offset = i * grid.patch_size
        ax.axvline(offset, color=COLORS['active'], linewidth=0.5, alpha=0.6)
        ax.axhline(offset, color=COLORS['active'], linewidth=0.5, alpha=0.6)

    ax.set_xlim(0, grid.image_size)
    ax.set_ylim(grid.image_size, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    title = (f'{format_quantity(grid.num_patches)} patches + 1 CLS\n'
             f'{grid.image_size}px image, {grid.patch_size}px patches')
    if not grid.is_exact:
        title += f' ({grid.drawn_patches} whole patches drawn)'
    ax.set_title(title)

    return finish_figure(fig, output_path, formats)


def plot_all(
    result,
    output_dir: Union[str, Path],
    formats: Sequence[str] = ('png',),
    seed: Optional[int] = 0,
) -> None:
    """Write every chart for an AnalysisResult into output_dir."""
    output_dir = Path(output_dir)
    plot_sweep(result.sweep, output_dir / f'sweep_{result.sweep_parameter.value}', formats)
    plot_access_breakdown(result.calculation, output_dir / 'access_breakdown', formats)
    plot_attention_pattern(result.vit, output_dir / 'attention_pattern', formats, seed=seed)
    plot_core_occupancy(result.calculation, result.metrics, result.optical_core,
                        output_dir / 'core_occupancy', formats)
    plot_patch_grid(result.vit, output_dir / 'patch_grid', formats)
