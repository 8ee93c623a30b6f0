"""
Workload Analysis

Closed-form access, optical-metric and sweep calculations for ViT attention
on an optical core.
"""

from .access import (
    AccessCalculator,
    calculate_accesses_detailed,
    STEP_NAMES,
    STEP_COLORS,
)
from .optical import (
    OpticalMetricsCalculator,
    calculate_optical_metrics,
)
from .sweep import (
    Sweep,
    SweepGenerator,
    generate_sweep,
    SERIES_ATTRIBUTES,
)
from .unified_analyzer import (
    AnalysisResult,
    AnalysisSession,
    ViTOpticalAnalyzer,
)

__all__ = [
    'AccessCalculator',
    'calculate_accesses_detailed',
    'STEP_NAMES',
    'STEP_COLORS',
    'OpticalMetricsCalculator',
    'calculate_optical_metrics',
    'Sweep',
    'SweepGenerator',
    'generate_sweep',
    'SERIES_ATTRIBUTES',
    'AnalysisResult',
    'AnalysisSession',
    'ViTOpticalAnalyzer',
]
