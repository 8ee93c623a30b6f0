"""Convert AnalysisResult to Pydantic schemas for agentic workflows.

This module provides verdict-first Pydantic models for ViT optical-core
analyses and the adapter that fills them from internal results.

The verdict-first pattern ensures callers can trust tool outputs:
- verdict: PASS/FAIL/UNKNOWN
- confidence: high/medium/low
- summary: One sentence explaining what was checked

Usage:
    from vitoptics.analysis import ViTOpticalAnalyzer
    from vitoptics.adapters import convert_to_pydantic

    result = ViTOpticalAnalyzer().analyze(ViTConfig(), OpticalCoreConfig())

    # Convert to Pydantic with constraint checking
    model = convert_to_pydantic(
        result,
        constraint_metric='latency',
        constraint_threshold=0.05  # ms
    )

    print(model.verdict)  # PASS or FAIL
    print(model.summary)  # Human-readable explanation
"""

import math
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from vitoptics.analysis.unified_analyzer import AnalysisResult


ANALYZER_VERSION = "0.1.0"

# Constraint metrics understood by convert_to_pydantic, with display names
CONSTRAINT_METRICS = {
    'latency': 'Execution time (ms)',
    'energy': 'Energy (μJ)',
    'utilization': 'Throughput utilization (%)',
    'accesses': 'Total accesses',
}


class Verdict(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    UNKNOWN = "UNKNOWN"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# Schemas
# =============================================================================

class ViTConfigModel(BaseModel):
    """ViT configuration snapshot"""
    embedding_dim: int
    num_heads: int
    image_size: int
    patch_size: int
    sequence_length: float


class OpticalCoreModel(BaseModel):
    """Optical-core configuration snapshot"""
    wavelength_channels: int
    microrings_per_channel: int
    parallel_ops: int
    energy_per_access: float
    throughput_gops: float
    clock_cycles_per_op: int


class StepModel(BaseModel):
    """One calculation step"""
    name: str
    formula: str
    access_count: float
    flops: float
    description: str
    share_pct: Optional[float] = None  # Share of total accesses


class OpticalMetricsModel(BaseModel):
    max_parallel_ops: int
    utilization_ratio: float
    energy_uj: float
    execution_time_ms: float
    throughput_utilization_pct: float
    load_level: str


class SweepPointModel(BaseModel):
    """One sweep point in chart units"""
    value: float
    total_accesses_m: float
    projection_accesses_m: float
    attention_accesses_m: float
    energy_uj: float
    execution_time_ms: float
    utilization_pct: float


class ViTOpticalAnalysisModel(BaseModel):
    """Verdict-first analysis result."""

    # Verdict
    verdict: Verdict
    confidence: Confidence
    summary: str

    # Metadata
    timestamp: datetime
    analyzer_version: str = ANALYZER_VERSION

    # Inputs
    vit: ViTConfigModel
    optical_core: OpticalCoreModel

    # Key metrics
    total_accesses: float
    projection_accesses: float
    attention_accesses: float
    metrics: OpticalMetricsModel

    # Detailed breakdowns
    steps: List[StepModel]
    sweep_parameter: str
    sweep_points: List[SweepPointModel] = Field(default_factory=list)

    # Constraint checking
    constraint_metric: Optional[str] = None
    constraint_threshold: Optional[float] = None
    constraint_actual: Optional[float] = None
    constraint_margin_pct: Optional[float] = None

    # Recommendations
    suggestions: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# Conversion
# =============================================================================

def make_verdict(
    actual: float,
    threshold: float,
    metric: str,
    lower_is_better: bool = True
) -> Tuple[Verdict, float, str]:
    """Determine verdict and margin from actual vs threshold.

    Args:
        actual: Estimated value
        threshold: Required threshold value
        metric: Metric name (for summary generation)
        lower_is_better: If True, actual <= threshold is PASS (e.g., latency)
                        If False, actual >= threshold is PASS

    Returns:
        Tuple of (verdict, margin_pct, summary)
    """
    if not math.isfinite(actual) or threshold == 0:
        return Verdict.UNKNOWN, math.nan, f"{metric} of {actual} cannot be compared to {threshold} target"

    if lower_is_better:
        passes = actual <= threshold
        margin_pct = ((threshold - actual) / threshold) * 100
    else:
        passes = actual >= threshold
        margin_pct = ((actual - threshold) / threshold) * 100

    if passes:
        if margin_pct > 20:
            summary = f"{metric} of {actual:.4g} is well under {threshold:.4g} target ({margin_pct:.0f}% headroom)"
        else:
            summary = f"{metric} of {actual:.4g} meets {threshold:.4g} target ({margin_pct:.0f}% headroom)"
        return Verdict.PASS, margin_pct, summary

    summary = f"{metric} of {actual:.4g} exceeds {threshold:.4g} target by {abs(margin_pct):.0f}%"
    return Verdict.FAIL, margin_pct, summary


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _constraint_actual(result: AnalysisResult, metric: str) -> float:
    if metric == 'latency':
        return result.metrics.execution_time_ms
    if metric == 'energy':
        return result.metrics.energy_uj
    if metric == 'utilization':
        return result.metrics.throughput_utilization_percent
    if metric == 'accesses':
        return float(result.total_accesses)
    raise ValueError(
        f"Unknown constraint metric {metric!r} (expected one of: {', '.join(CONSTRAINT_METRICS)})"
    )


def _recommendations(result: AnalysisResult) -> List[str]:
    suggestions = []
    calc = result.calculation
    if calc.total_accesses and calc.attention_accesses / calc.total_accesses > 0.5:
        suggestions.append(
            "Attention dominates accesses; a larger patch size shortens the sequence quadratically"
        )
    if result.metrics.load_level == 'high':
        suggestions.append("Throughput load is high; raise throughput_gops or add wavelength channels")
    return suggestions


def convert_to_pydantic(
    result: AnalysisResult,
    constraint_metric: Optional[str] = None,
    constraint_threshold: Optional[float] = None,
    include_sweep: bool = True,
) -> ViTOpticalAnalysisModel:
    """Convert AnalysisResult to a verdict-first ViTOpticalAnalysisModel.

    Args:
        result: AnalysisResult from ViTOpticalAnalyzer
        constraint_metric: Optional metric to check: 'latency', 'energy',
            'utilization', 'accesses' (all lower is better)
        constraint_threshold: Required threshold for the constraint metric
        include_sweep: Evaluate the sweep and include its points

    Returns:
        ViTOpticalAnalysisModel

    Raises:
        ValueError: If constraint_metric is not recognised
    """
    calc = result.calculation
    metrics = result.metrics
    total = calc.total_accesses

    steps = [
        StepModel(
            name=step.name,
            formula=step.formula,
            access_count=step.access_count,
            flops=step.flops,
            description=step.description,
            share_pct=(step.access_count / total * 100) if total else None,
        )
        for step in calc.steps
    ]

    sweep_points = []
    if include_sweep:
        sweep_points = [
            SweepPointModel(
                value=point.value,
                total_accesses_m=point.total_accesses_m,
                projection_accesses_m=point.projection_accesses_m,
                attention_accesses_m=point.attention_accesses_m,
                energy_uj=point.energy_uj,
                execution_time_ms=point.execution_time_ms,
                utilization_pct=point.utilization_percent,
            )
            for point in result.sweep
        ]

    warnings = []
    if result.vit.embedding_dim % result.vit.num_heads:
        warnings.append(
            f"embedding_dim {result.vit.embedding_dim} is not divisible by "
            f"num_heads {result.vit.num_heads}; head_dim is fractional"
        )
    if result.vit.image_size % result.vit.patch_size:
        warnings.append(
            f"image_size {result.vit.image_size} is not a multiple of "
            f"patch_size {result.vit.patch_size}; sequence length was floored"
        )

    # Determine verdict based on constraint
    constraint_actual = None
    margin_pct = None
    suggestions = []

    if constraint_metric and constraint_threshold is not None:
        actual = _constraint_actual(result, constraint_metric)
        verdict, margin_pct, summary = make_verdict(
            actual, constraint_threshold, CONSTRAINT_METRICS[constraint_metric], lower_is_better=True
        )
        constraint_actual = _finite_or_none(actual)
        margin_pct = _finite_or_none(margin_pct)
        confidence = Confidence.HIGH if verdict != Verdict.UNKNOWN else Confidence.LOW

        if verdict == Verdict.FAIL:
            if constraint_metric in ('latency', 'utilization'):
                suggestions.append("Consider a higher-throughput optical core")
            elif constraint_metric == 'energy':
                suggestions.append("Consider a lower energy_per_access or a smaller model")
            else:
                suggestions.append("Consider a smaller embedding dimension or fewer tokens")
    else:
        # No constraint - just report analysis complete
        verdict = Verdict.PASS
        confidence = Confidence.HIGH
        summary = (
            f"{result.vit} on {result.optical_core}: "
            f"{total:,.0f} accesses, {metrics.energy_uj:.2f} μJ, "
            f"{metrics.execution_time_ms:.6f} ms"
        )

    suggestions.extend(_recommendations(result))

    return ViTOpticalAnalysisModel(
        verdict=verdict,
        confidence=confidence,
        summary=summary,
        timestamp=datetime.fromisoformat(result.analysis_timestamp),
        vit=ViTConfigModel(**result.vit.to_dict()),
        optical_core=OpticalCoreModel(**result.optical_core.to_dict()),
        total_accesses=total,
        projection_accesses=calc.projection_accesses,
        attention_accesses=calc.attention_accesses,
        metrics=OpticalMetricsModel(
            max_parallel_ops=metrics.max_parallel_ops,
            utilization_ratio=metrics.utilization_ratio,
            energy_uj=metrics.energy_uj,
            execution_time_ms=metrics.execution_time_ms,
            throughput_utilization_pct=metrics.throughput_utilization_percent,
            load_level=metrics.load_level,
        ),
        steps=steps,
        sweep_parameter=result.sweep_parameter.value,
        sweep_points=sweep_points,
        constraint_metric=constraint_metric,
        constraint_threshold=constraint_threshold,
        constraint_actual=constraint_actual,
        constraint_margin_pct=margin_pct,
        suggestions=suggestions,
        warnings=warnings,
    )
