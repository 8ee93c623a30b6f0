"""
Plot Styling Utilities

Shared matplotlib configuration, palette and figure helpers for the chart
module.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

import matplotlib.pyplot as plt

from vitoptics.analysis.access import STEP_COLORS


# Chart palette
COLORS = {
    # Sweep series
    'Total Accesses': '#2563eb',
    'Projection Accesses': '#16a34a',
    'Attention Accesses': '#dc2626',
    'Energy (μJ)': '#f59e0b',
    'Execution Time (ms)': '#8b5cf6',
    'Utilization (%)': '#0077BB',

    # Occupancy panel
    'active': '#3b82f6',
    'idle': '#d1d5db',
}
COLORS.update(STEP_COLORS)


def setup_publication_style(
    font_family: str = 'sans-serif',
    font_size: int = 10,
    figure_width: float = 8.0,
    figure_height: float = 5.0,
    dpi: int = 150,
) -> None:
    """
    Configure matplotlib rcParams for report figures.

    Args:
        font_family: Font family ('serif' for papers, 'sans-serif' for slides)
        font_size: Base font size
        figure_width: Default figure width in inches
        figure_height: Default figure height in inches
        dpi: Resolution for raster output
    """
    plt.rcParams.update({
        'font.family': font_family,
        'font.size': font_size,
        'axes.titlesize': font_size + 1,
        'axes.labelsize': font_size,
        'xtick.labelsize': font_size - 1,
        'ytick.labelsize': font_size - 1,
        'legend.fontsize': font_size - 1,

        'figure.figsize': (figure_width, figure_height),
        'figure.dpi': dpi,
        'savefig.dpi': dpi,
        'savefig.bbox': 'tight',

        'lines.linewidth': 1.5,
        'lines.markersize': 4,

        'axes.linewidth': 0.8,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'grid.linewidth': 0.5,

        'legend.frameon': True,
        'legend.framealpha': 0.9,
    })


def save_figure(
    fig: plt.Figure,
    path: Union[str, Path],
    formats: Sequence[str] = ('png',),
    dpi: int = 150,
) -> List[Path]:
    """
    Save figure in one or more formats.

    Args:
        fig: matplotlib Figure
        path: Base path (extension replaced per format)
        formats: Formats to save
        dpi: Resolution for raster formats

    Returns:
        Paths written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    written = []
    for fmt in formats:
        target = path.with_suffix(f'.{fmt}')
        fig.savefig(
            target,
            format=fmt,
            dpi=dpi if fmt == 'png' else None,
            bbox_inches='tight',
            pad_inches=0.05,
        )
        written.append(target)
    return written


def finish_figure(
    fig: plt.Figure,
    output_path: Optional[Union[str, Path]],
    formats: Sequence[str] = ('png',),
) -> plt.Figure:
    """Save and close the figure when output_path is given; otherwise return it open."""
    if output_path is not None:
        fig.tight_layout()
        save_figure(fig, output_path, formats=formats)
        plt.close(fig)
    return fig


def add_grid_lines(ax, alpha: float = 0.3) -> None:
    """Add subtle grid lines to axis."""
    ax.grid(True, alpha=alpha, linestyle='-', linewidth=0.5)
    ax.set_axisbelow(True)


def format_large_number(x: float) -> str:
    """Format large numbers with K, M, B suffixes."""
    if abs(x) >= 1e9:
        return f'{x/1e9:.1f}B'
    elif abs(x) >= 1e6:
        return f'{x/1e6:.1f}M'
    elif abs(x) >= 1e3:
        return f'{x/1e3:.1f}K'
    else:
        return f'{x:.0f}'
