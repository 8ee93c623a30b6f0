"""
Unified Analysis Framework

Single orchestrator that runs the access, optical-metric and sweep
calculations over one configuration snapshot.

This module provides:
- ViTOpticalAnalyzer: Runs all calculators in dependency order
- AnalysisResult: Single data structure containing every derived output
- AnalysisSession: Recomputes results from a ConfigModel after each edit

Usage:
    from vitoptics.analysis.unified_analyzer import ViTOpticalAnalyzer
    from vitoptics.core import ViTConfig, OpticalCoreConfig

    analyzer = ViTOpticalAnalyzer()
    result = analyzer.analyze(ViTConfig(), OpticalCoreConfig())

    print(f"Total accesses: {result.total_accesses:,}")
    print(f"Energy: {result.metrics.energy_uj:.2f} μJ")
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from vitoptics.core.config_model import ConfigModel
from vitoptics.core.structures import (
    DetailedCalculation,
    OpticalCoreConfig,
    OpticalMetrics,
    SweepParameter,
    SweepRange,
    ViTConfig,
    DEFAULT_SWEEP_PARAMETER,
    DEFAULT_SWEEP_RANGES,
)
from vitoptics.analysis.access import AccessCalculator
from vitoptics.analysis.optical import OpticalMetricsCalculator
from vitoptics.analysis.sweep import Sweep, SweepGenerator


@dataclass
class AnalysisResult:
    """
    Complete analysis of one configuration snapshot.

    The sweep is lazy; it is evaluated when iterated or exported.
    """
    vit: ViTConfig
    optical_core: OpticalCoreConfig
    calculation: DetailedCalculation
    metrics: OpticalMetrics
    sweep: Sweep
    sweep_parameter: SweepParameter

    analysis_timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_accesses(self):
        return self.calculation.total_accesses

    def get_executive_summary(self) -> Dict[str, Any]:
        """
        Generate executive summary dict for quick overview.

        Returns:
            Dict with the headline figures shown as live metrics
        """
        return {
            'vit': self.vit.to_dict(),
            'optical_core': self.optical_core.to_dict(),
            'total_accesses': self.calculation.total_accesses,
            'total_accesses_m': self.calculation.total_accesses / 1e6,
            'projection_accesses': self.calculation.projection_accesses,
            'attention_accesses': self.calculation.attention_accesses,
            'energy_uj': self.metrics.energy_uj,
            'execution_time_ms': self.metrics.execution_time_ms,
            'throughput_utilization_pct': self.metrics.throughput_utilization_percent,
            'utilization_ratio': self.metrics.utilization_ratio,
            'max_parallel_ops': self.metrics.max_parallel_ops,
            'load_level': self.metrics.load_level,
        }


class ViTOpticalAnalyzer:
    """
    Orchestrates AccessCalculator, OpticalMetricsCalculator and SweepGenerator.

    Every call recomputes from the given snapshots; the analyzer keeps no
    state between calls.
    """

    def __init__(self):
        self.access_calculator = AccessCalculator()

    def analyze(
        self,
        vit: ViTConfig,
        optical_core: OpticalCoreConfig,
        sweep_parameter: Union[str, SweepParameter] = DEFAULT_SWEEP_PARAMETER,
        sweep_range: Optional[SweepRange] = None,
    ) -> AnalysisResult:
        """
        Analyze one ViT / optical-core configuration.

        Args:
            vit: ViT configuration snapshot
            optical_core: Optical-core configuration snapshot
            sweep_parameter: Parameter varied by the sweep
            sweep_range: Sweep range (defaults to the standard range for the parameter)

        Returns:
            AnalysisResult
        """
        sweep_parameter = SweepParameter.parse(sweep_parameter)
        if sweep_range is None:
            sweep_range = DEFAULT_SWEEP_RANGES[sweep_parameter]

        calculation = self.access_calculator.calculate(vit)
        metrics = OpticalMetricsCalculator(optical_core).calculate(calculation.total_accesses)
        sweep = SweepGenerator(vit, optical_core).generate(sweep_parameter, sweep_range)

        return AnalysisResult(
            vit=vit,
            optical_core=optical_core,
            calculation=calculation,
            metrics=metrics,
            sweep=sweep,
            sweep_parameter=sweep_parameter,
        )

    def analyze_model(self, model: ConfigModel) -> AnalysisResult:
        """Analyze the current snapshot of a ConfigModel."""
        return self.analyze(
            model.vit,
            model.optical_core,
            model.selected_parameter,
            model.selected_range,
        )


class AnalysisSession:
    """
    Keeps an AnalysisResult in step with a ConfigModel.

    Reading `result` after any committed edit recomputes the full analysis
    from the latest snapshots; reading it again without an edit returns the
    same object. Results are never patched incrementally.

    Usage:
        session = AnalysisSession(ConfigModel())
        session.model.update_vit('embedding_dim', 1024)
        print(session.result.total_accesses)
    """

    def __init__(self, model: Optional[ConfigModel] = None, analyzer: Optional[ViTOpticalAnalyzer] = None):
        self.model = model or ConfigModel()
        self.analyzer = analyzer or ViTOpticalAnalyzer()
        self._key: Optional[Tuple] = None
        self._result: Optional[AnalysisResult] = None

    def _snapshot_key(self) -> Tuple:
        model = self.model
        return (model.vit, model.optical_core, model.selected_parameter, model.selected_range)

    @property
    def result(self) -> AnalysisResult:
        """Analysis of the latest committed configuration."""
        key = self._snapshot_key()
        if self._result is None or key != self._key:
            self._result = self.analyzer.analyze_model(self.model)
            self._key = key
        return self._result
