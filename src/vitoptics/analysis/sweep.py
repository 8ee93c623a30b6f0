"""
Parameter Sweep Analysis

Re-run the access and optical-metric calculations across a range of one ViT
parameter while holding the rest of the baseline fixed.

Sweeping image_size also recomputes the sequence length with the exact
(unfloored) derivation, so image sizes that are not a multiple of the patch
size produce fractional sequence lengths. The interactive config path uses
the floored derivation instead; the two are kept deliberately separate.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import numpy as np
import pandas as pd

from vitoptics.core.structures import (
    OpticalCoreConfig,
    SweepParameter,
    SweepPoint,
    SweepRange,
    ViTConfig,
    DEFAULT_SWEEP_RANGES,
    derive_sequence_length_exact,
)
from vitoptics.analysis.access import AccessCalculator
from vitoptics.analysis.optical import OpticalMetricsCalculator

logger = logging.getLogger(__name__)

# Sweep point attributes that can be analyzed as series
SERIES_ATTRIBUTES = (
    'total_accesses_m',
    'projection_accesses_m',
    'attention_accesses_m',
    'energy_uj',
    'execution_time_ms',
    'utilization_percent',
)


class Sweep:
    """
    Lazy, restartable sequence of sweep points.

    Nothing is computed until the sweep is iterated, and every iteration
    recomputes the points from the same inputs, so iterating twice yields
    equal points.
    """

    def __init__(
        self,
        parameter: SweepParameter,
        sweep_range: SweepRange,
        baseline: ViTConfig,
        optical_core: OpticalCoreConfig,
    ):
        self.parameter = parameter
        self.sweep_range = sweep_range
        self.baseline = baseline
        self.optical_core = optical_core
        self._access_calculator = AccessCalculator()
        self._metrics_calculator = OpticalMetricsCalculator(optical_core)

    def __iter__(self) -> Iterator[SweepPoint]:
        for value in self.sweep_range.values():
            yield self._evaluate(value)

    def __len__(self) -> int:
        return len(self.sweep_range)

    def working_config(self, value: int) -> ViTConfig:
        """Baseline config with the swept parameter set to value."""
        if self.parameter is SweepParameter.IMAGE_SIZE:
            return replace(
                self.baseline,
                image_size=value,
                sequence_length=derive_sequence_length_exact(value, self.baseline.patch_size),
            )
        return replace(self.baseline, **{self.parameter.value: value})

    def _evaluate(self, value: int) -> SweepPoint:
        """Run both calculators for one value of the swept parameter"""
        config = self.working_config(value)
        detailed = self._access_calculator.calculate(config)
        metrics = self._metrics_calculator.calculate(detailed.total_accesses)

        return SweepPoint(
            parameter=self.parameter,
            value=value,
            total_accesses_m=detailed.total_accesses / 1e6,
            projection_accesses_m=detailed.projection_accesses / 1e6,
            attention_accesses_m=detailed.attention_accesses / 1e6,
            energy_uj=metrics.energy_consumption / 1000,
            execution_time_ms=metrics.execution_time_ms,
            utilization_percent=min(metrics.throughput_utilization_percent, 100),
        )

    # =========================================================================
    # Export
    # =========================================================================

    def points(self) -> List[SweepPoint]:
        """Materialize all points."""
        points = list(self)
        logger.debug("Sweep over %s produced %d points", self.parameter.value, len(points))
        return points

    def to_records(self) -> List[Dict[str, float]]:
        """Chart records, one dict per point."""
        return [point.to_dict() for point in self]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert sweep to DataFrame.

        Returns:
            pandas DataFrame with the parameter column followed by the series columns
        """
        columns = [self.parameter.value] + list(SweepPoint.SERIES)
        return pd.DataFrame(self.to_records(), columns=columns)

    def to_csv(self, path: Union[str, Path]) -> None:
        """
        Save sweep to CSV.

        Args:
            path: Output CSV path
        """
        df = self.to_dataframe()
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

    # =========================================================================
    # Analysis
    # =========================================================================

    def series(self, attribute: str) -> List[float]:
        """Values of one point attribute across the sweep."""
        if attribute not in SERIES_ATTRIBUTES:
            raise ValueError(f"Unknown series {attribute!r} (expected one of: {', '.join(SERIES_ATTRIBUTES)})")
        return [getattr(point, attribute) for point in self]

    def scaling_exponent(self, attribute: str = 'total_accesses_m') -> Optional[float]:
        """
        Empirical scaling exponent of a series against the swept parameter.

        Least-squares slope of log(series) vs log(parameter). Returns None
        when fewer than two positive points are available.
        """
        points = self.points()
        x = np.array([float(p.value) for p in points])
        y = np.array([float(getattr(p, attribute)) for p in points])

        mask = (x > 0) & (y > 0)
        if mask.sum() < 2:
            return None

        slope, _ = np.polyfit(np.log(x[mask]), np.log(y[mask]), 1)
        return float(slope)

    def __repr__(self) -> str:
        return (f"Sweep({self.parameter.value}, "
                f"{self.sweep_range.min_value}..{self.sweep_range.max_value} "
                f"step {self.sweep_range.step})")


class SweepGenerator:
    """
    Builds sweeps around a fixed baseline ViT config and optical core.

    Usage:
        generator = SweepGenerator(ViTConfig(), OpticalCoreConfig())
        sweep = generator.generate('embedding_dim', SweepRange(256, 1024, 256))
        for point in sweep:
            print(point.value, point.total_accesses_m)
    """

    def __init__(self, baseline: ViTConfig, optical_core: OpticalCoreConfig):
        """
        Initialize generator.

        Args:
            baseline: ViT configuration held fixed except for the swept parameter
            optical_core: Optical-core configuration for the metrics
        """
        self.baseline = baseline
        self.optical_core = optical_core

    def generate(
        self,
        parameter: Union[str, SweepParameter],
        sweep_range: Optional[SweepRange] = None,
    ) -> Sweep:
        """
        Create a sweep over one parameter.

        Args:
            parameter: Parameter to vary
            sweep_range: Range of values (defaults to the standard range)

        Returns:
            Lazy Sweep; empty when min_value > max_value
        """
        parameter = SweepParameter.parse(parameter)
        if sweep_range is None:
            sweep_range = DEFAULT_SWEEP_RANGES[parameter]
        return Sweep(parameter, sweep_range, self.baseline, self.optical_core)

    def generate_all(
        self,
        sweep_ranges: Optional[Dict[SweepParameter, SweepRange]] = None,
    ) -> Dict[SweepParameter, Sweep]:
        """Create one sweep per sweepable parameter."""
        ranges = dict(DEFAULT_SWEEP_RANGES)
        if sweep_ranges:
            ranges.update(sweep_ranges)
        return {parameter: self.generate(parameter, ranges[parameter]) for parameter in SweepParameter}


def generate_sweep(
    parameter: Union[str, SweepParameter],
    sweep_range: SweepRange,
    baseline: ViTConfig,
    optical_core: OpticalCoreConfig,
) -> Sweep:
    """Convenience wrapper around SweepGenerator(baseline, core).generate()."""
    return SweepGenerator(baseline, optical_core).generate(parameter, sweep_range)
