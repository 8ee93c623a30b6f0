"""
Tests for parameter sweeps.
"""

import pandas as pd
import pytest

from vitoptics.analysis.access import calculate_accesses_detailed
from vitoptics.analysis.optical import calculate_optical_metrics
from vitoptics.analysis.sweep import Sweep, SweepGenerator, generate_sweep
from vitoptics.core.structures import (
    OpticalCoreConfig,
    SweepParameter,
    SweepPoint,
    SweepRange,
    ViTConfig,
)


@pytest.fixture
def generator():
    return SweepGenerator(ViTConfig(), OpticalCoreConfig())


class TestEmbeddingDimSweep:
    """Sweep over embedding_dim {256..1024 step 256}"""

    @pytest.fixture
    def sweep(self, generator):
        return generator.generate('embedding_dim', SweepRange(256, 1024, 256))

    def test_values(self, sweep):
        assert [p.value for p in sweep] == [256, 512, 768, 1024]
        assert len(sweep) == 4

    def test_points_match_direct_calculation(self, sweep):
        core = OpticalCoreConfig()
        for point in sweep:
            calc = calculate_accesses_detailed(ViTConfig(embedding_dim=point.value))
            metrics = calculate_optical_metrics(calc.total_accesses, core)
            assert point.total_accesses_m == pytest.approx(calc.total_accesses / 1e6)
            assert point.projection_accesses_m == pytest.approx(calc.projection_accesses / 1e6)
            assert point.attention_accesses_m == pytest.approx(calc.attention_accesses / 1e6)
            assert point.energy_uj == pytest.approx(metrics.energy_consumption / 1000)
            assert point.execution_time_ms == pytest.approx(metrics.execution_time_ms)

    def test_baseline_point(self, sweep):
        point = [p for p in sweep if p.value == 768][0]
        assert point.total_accesses_m == pytest.approx(1.385304)

    def test_restartable(self, sweep):
        """Iterating twice yields equal points."""
        assert list(sweep) == list(sweep)

    def test_projection_scales_linearly(self, sweep):
        assert sweep.scaling_exponent('projection_accesses_m') == pytest.approx(1.0)

    def test_attention_independent_of_width(self, sweep):
        assert sweep.scaling_exponent('attention_accesses_m') == pytest.approx(0.0, abs=1e-9)

    def test_series(self, sweep):
        assert len(sweep.series('energy_uj')) == 4

    def test_unknown_series(self, sweep):
        with pytest.raises(ValueError):
            sweep.series('latency')


class TestSequenceLengthSweep:
    def test_attention_scales_quadratically(self, generator):
        sweep = generator.generate('sequence_length', SweepRange(50, 1550, 100))
        assert sweep.scaling_exponent('attention_accesses_m') == pytest.approx(2.0)

    def test_image_fields_untouched(self, generator):
        sweep = generator.generate(SweepParameter.SEQUENCE_LENGTH, SweepRange(50, 50, 1))
        config = sweep.working_config(50)
        assert config.sequence_length == 50
        assert config.image_size == 224


class TestImageSizeSweep:
    """Image-size sweeps use the unfloored sequence length"""

    def test_exact_sequence_length(self, generator):
        sweep = generator.generate('image_size', SweepRange(100, 100, 1))
        config = sweep.working_config(100)
        assert config.sequence_length == pytest.approx(40.0625)

        point = sweep.points()[0]
        expected = calculate_accesses_detailed(ViTConfig(image_size=100, sequence_length=40.0625))
        assert point.total_accesses_m == pytest.approx(expected.total_accesses / 1e6)

    def test_differs_from_floored_path(self, generator):
        sweep = generator.generate('image_size', SweepRange(100, 100, 1))
        floored = calculate_accesses_detailed(ViTConfig(image_size=100))
        assert sweep.points()[0].total_accesses_m != pytest.approx(floored.total_accesses / 1e6)

    def test_default_range(self, generator):
        sweep = generator.generate('image_size')
        assert [p.value for p in sweep] == [112, 168, 224, 280, 336, 392, 448, 504]


class TestSweepEdgeCases:
    def test_empty_range(self, generator):
        sweep = generator.generate('num_heads', SweepRange(10, 5, 1))
        assert sweep.points() == []
        assert sweep.scaling_exponent() is None

    def test_empty_dataframe_has_columns(self, generator):
        df = generator.generate('num_heads', SweepRange(10, 5, 1)).to_dataframe()
        assert df.empty
        assert list(df.columns) == ['num_heads'] + list(SweepPoint.SERIES)

    def test_utilization_clamped_at_100(self):
        slow_core = OpticalCoreConfig(throughput_gops=0.0001)
        sweep = generate_sweep('embedding_dim', SweepRange(256, 1024, 256), ViTConfig(), slow_core)
        assert all(p.utilization_percent == 100 for p in sweep)

    def test_unknown_parameter(self, generator):
        with pytest.raises(ValueError):
            generator.generate('patch_size')

    def test_generate_all(self, generator):
        sweeps = generator.generate_all({SweepParameter.NUM_HEADS: SweepRange(1, 3, 1)})
        assert set(sweeps) == set(SweepParameter)
        assert [p.value for p in sweeps[SweepParameter.NUM_HEADS]] == [1, 2, 3]
        assert all(isinstance(s, Sweep) for s in sweeps.values())

    def test_repr(self, generator):
        assert 'num_heads' in repr(generator.generate('num_heads'))


class TestSweepExport:
    @pytest.fixture
    def sweep(self, generator):
        return generator.generate('num_heads', SweepRange(4, 24, 4))

    def test_records(self, sweep):
        records = sweep.to_records()
        assert len(records) == 6
        assert records[0]['num_heads'] == 4
        assert 'Total Accesses' in records[0]

    def test_dataframe(self, sweep):
        df = sweep.to_dataframe()
        assert len(df) == 6
        assert df['num_heads'].tolist() == [4, 8, 12, 16, 20, 24]
        assert df['Total Accesses'].is_monotonic_increasing

    def test_csv(self, sweep, tmp_path):
        path = tmp_path / 'nested' / 'sweep.csv'
        sweep.to_csv(path)
        df = pd.read_csv(path)
        assert len(df) == 6
        assert df['Attention Accesses'].iloc[2] == pytest.approx(2 * 197 * 197 * 12 / 1e6)
