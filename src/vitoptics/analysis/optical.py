"""
Optical Core Metrics

Converts a total access count into optical-core performance figures.

Metrics:
- Max parallel ops = wavelength_channels × microrings_per_channel × parallel_ops
- Utilization ratio = total_accesses / max_parallel_ops
- Energy = total_accesses × energy_per_access (raw, unscaled)
- Execution time (ms) = total_accesses / (throughput_gops × 1e9) × 1000
- Throughput utilization (%) = (total_accesses / 1e9) / throughput_gops × 100

Throughput utilization is not clamped here; any clamp to 100% is a
presentation decision (the sweep series applies one).
"""

import math

from vitoptics.core.structures import Number, OpticalCoreConfig, OpticalMetrics


def _ratio(numerator: float, denominator: float) -> float:
    """Floating division that yields inf (or nan for 0/0) instead of raising."""
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


class OpticalMetricsCalculator:
    """
    Computes utilization, energy and timing for an optical core.

    The core configuration is fixed per calculator; calculate() is pure in
    the access count.
    """

    def __init__(self, optical_core: OpticalCoreConfig):
        """
        Initialize calculator.

        Args:
            optical_core: Optical-core configuration snapshot
        """
        self.optical_core = optical_core

    def calculate(self, total_accesses: Number) -> OpticalMetrics:
        """
        Derive metrics for a workload.

        Args:
            total_accesses: Total optical accesses (non-negative)

        Returns:
            OpticalMetrics
        """
        core = self.optical_core
        max_parallel_ops = core.max_parallel_ops
        ops_per_second = core.throughput_gops * 1e9

        execution_time_s = _ratio(total_accesses, ops_per_second)

        return OpticalMetrics(
            max_parallel_ops=max_parallel_ops,
            utilization_ratio=_ratio(total_accesses, max_parallel_ops),
            energy_consumption=total_accesses * core.energy_per_access,
            execution_time_ms=execution_time_s * 1000,
            throughput_utilization_percent=_ratio(total_accesses / 1e9, core.throughput_gops) * 100,
        )


def calculate_optical_metrics(total_accesses: Number, optical_core: OpticalCoreConfig) -> OpticalMetrics:
    """Convenience wrapper around OpticalMetricsCalculator(core).calculate()."""
    return OpticalMetricsCalculator(optical_core).calculate(total_accesses)
