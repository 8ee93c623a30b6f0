"""
Tests for OpticalMetricsCalculator.
"""

import math

import pytest

from vitoptics.analysis.optical import OpticalMetricsCalculator, calculate_optical_metrics
from vitoptics.core.structures import OpticalCoreConfig

BASELINE_ACCESSES = 1385304


@pytest.fixture
def metrics():
    return calculate_optical_metrics(BASELINE_ACCESSES, OpticalCoreConfig())


class TestBaselineMetrics:
    """Metrics for the default core and ViT-B/16 workload"""

    def test_max_parallel_ops(self, metrics):
        assert metrics.max_parallel_ops == 32 * 64 * 32

    def test_utilization_ratio(self, metrics):
        assert metrics.utilization_ratio == pytest.approx(BASELINE_ACCESSES / 65536)

    def test_energy(self, metrics):
        assert metrics.energy_consumption == pytest.approx(138530.4)
        assert metrics.energy_uj == pytest.approx(138.5304)

    def test_execution_time(self, metrics):
        assert metrics.execution_time_ms == pytest.approx(0.01385304)

    def test_throughput_utilization(self, metrics):
        assert metrics.throughput_utilization_percent == pytest.approx(0.001385304)
        assert metrics.load_level == 'low'


class TestScaling:
    def test_linear_in_accesses(self):
        calculator = OpticalMetricsCalculator(OpticalCoreConfig())
        one = calculator.calculate(1_000_000)
        two = calculator.calculate(2_000_000)
        assert two.energy_consumption == pytest.approx(2 * one.energy_consumption)
        assert two.execution_time_ms == pytest.approx(2 * one.execution_time_ms)

    def test_throughput_not_clamped(self):
        """Utilization above 100% is reported as is."""
        m = calculate_optical_metrics(500e9, OpticalCoreConfig(throughput_gops=1.0))
        assert m.throughput_utilization_percent == pytest.approx(50000.0)
        assert m.load_level == 'high'

    def test_zero_accesses(self):
        m = calculate_optical_metrics(0, OpticalCoreConfig())
        assert m.utilization_ratio == 0
        assert m.energy_consumption == 0
        assert m.execution_time_ms == 0


class TestZeroDivisors:
    """Division by zero yields inf or nan instead of raising"""

    def test_zero_parallel_ops(self):
        m = calculate_optical_metrics(1000, OpticalCoreConfig(parallel_ops=0))
        assert m.max_parallel_ops == 0
        assert math.isinf(m.utilization_ratio)

    def test_zero_throughput(self):
        m = calculate_optical_metrics(1000, OpticalCoreConfig(throughput_gops=0.0))
        assert math.isinf(m.execution_time_ms)
        assert math.isinf(m.throughput_utilization_percent)

    def test_zero_over_zero(self):
        m = calculate_optical_metrics(0, OpticalCoreConfig(parallel_ops=0, throughput_gops=0.0))
        assert math.isnan(m.utilization_ratio)
        assert math.isnan(m.execution_time_ms)
