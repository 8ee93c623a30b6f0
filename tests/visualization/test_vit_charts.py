"""
Tests for matplotlib chart rendering.
"""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

from vitoptics.analysis.unified_analyzer import ViTOpticalAnalyzer
from vitoptics.core.structures import OpticalCoreConfig, SweepRange, ViTConfig
from vitoptics.visualization.charts import (
    plot_access_breakdown,
    plot_all,
    plot_attention_pattern,
    plot_core_occupancy,
    plot_patch_grid,
    plot_sweep,
)


@pytest.fixture
def result():
    return ViTOpticalAnalyzer().analyze(
        ViTConfig(), OpticalCoreConfig(), 'embedding_dim', SweepRange(256, 1024, 256)
    )


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestSweepChart:
    def test_twin_axes(self, result):
        fig = plot_sweep(result.sweep)
        assert len(fig.axes) == 2
        left, right = fig.axes
        assert len(left.get_lines()) == 3
        assert len(right.get_lines()) == 2

    def test_legend_has_all_series(self, result):
        fig = plot_sweep(result.sweep)
        labels = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
        assert 'Total Accesses' in labels
        assert 'Execution Time (ms)' in labels

    def test_empty_sweep(self):
        result = ViTOpticalAnalyzer().analyze(
            ViTConfig(), OpticalCoreConfig(), 'num_heads', SweepRange(10, 5, 1)
        )
        fig = plot_sweep(result.sweep)
        assert fig.axes[0].get_legend() is not None

    def test_saves_file(self, result, tmp_path):
        plot_sweep(result.sweep, tmp_path / 'sweep', formats=('png', 'svg'))
        assert (tmp_path / 'sweep.png').exists()
        assert (tmp_path / 'sweep.svg').exists()


class TestPanels:
    def test_access_breakdown_has_five_wedges(self, result):
        fig = plot_access_breakdown(result.calculation)
        wedges = [p for p in fig.axes[0].patches]
        assert len(wedges) == 5

    def test_attention_pattern_one_axis_per_head(self, result):
        fig = plot_attention_pattern(result.vit, seed=0)
        assert len(fig.axes) == 4

    def test_core_occupancy_cells(self, result):
        fig = plot_core_occupancy(result.calculation, result.metrics, result.optical_core)
        assert len(fig.axes[0].patches) == 64

    def test_patch_grid(self, result):
        fig = plot_patch_grid(result.vit)
        assert '196 patches' in fig.axes[0].get_title()
        assert 'whole patches drawn' not in fig.axes[0].get_title()

    def test_patch_grid_inexact_tiling(self):
        fig = plot_patch_grid(ViTConfig(image_size=100, patch_size=16))
        assert '36 whole patches drawn' in fig.axes[0].get_title()


class TestPlotAll:
    def test_writes_every_chart(self, result, tmp_path):
        plot_all(result, tmp_path)
        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == [
            'access_breakdown.png',
            'attention_pattern.png',
            'core_occupancy.png',
            'patch_grid.png',
            'sweep_embedding_dim.png',
        ]
