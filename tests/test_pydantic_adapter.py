"""Tests for Pydantic output adapters.

Tests the conversion from AnalysisResult to verdict-first
ViTOpticalAnalysisModel output.
"""

import math

import pytest

from vitoptics.adapters.pydantic_output import (
    Confidence,
    Verdict,
    ViTOpticalAnalysisModel,
    convert_to_pydantic,
    make_verdict,
)
from vitoptics.analysis.unified_analyzer import ViTOpticalAnalyzer
from vitoptics.core.structures import OpticalCoreConfig, SweepRange, ViTConfig


@pytest.fixture
def result():
    return ViTOpticalAnalyzer().analyze(
        ViTConfig(), OpticalCoreConfig(), 'num_heads', SweepRange(4, 12, 4)
    )


class TestMakeVerdict:
    """Tests for the make_verdict helper function."""

    def test_pass_with_headroom(self):
        """Test PASS verdict when actual is under threshold."""
        verdict, margin, summary = make_verdict(
            actual=8.0,
            threshold=10.0,
            metric="Latency",
            lower_is_better=True
        )
        assert verdict == Verdict.PASS
        assert margin == pytest.approx(20.0)
        assert "meets" in summary or "under" in summary

    def test_pass_well_under(self):
        verdict, margin, summary = make_verdict(5.0, 10.0, "Latency")
        assert verdict == Verdict.PASS
        assert margin == pytest.approx(50.0)
        assert "well under" in summary

    def test_fail_over_threshold(self):
        """Test FAIL verdict when actual exceeds threshold."""
        verdict, margin, summary = make_verdict(
            actual=15.0,
            threshold=10.0,
            metric="Latency",
            lower_is_better=True
        )
        assert verdict == Verdict.FAIL
        assert margin == pytest.approx(-50.0)
        assert "exceeds" in summary

    def test_higher_is_better(self):
        verdict, margin, _ = make_verdict(12.0, 10.0, "Throughput", lower_is_better=False)
        assert verdict == Verdict.PASS
        assert margin == pytest.approx(20.0)

    def test_zero_threshold_unknown(self):
        verdict, margin, _ = make_verdict(1.0, 0.0, "Latency")
        assert verdict == Verdict.UNKNOWN
        assert math.isnan(margin)

    def test_infinite_actual_unknown(self):
        verdict, _, _ = make_verdict(math.inf, 10.0, "Latency")
        assert verdict == Verdict.UNKNOWN


class TestConvertToPydantic:
    """Tests for the main conversion function."""

    def test_no_constraint(self, result):
        model = convert_to_pydantic(result)
        assert isinstance(model, ViTOpticalAnalysisModel)
        assert model.verdict == Verdict.PASS
        assert model.confidence == Confidence.HIGH
        assert model.total_accesses == pytest.approx(1385304)
        assert model.projection_accesses == pytest.approx(453888)
        assert model.attention_accesses == pytest.approx(931416)
        assert model.constraint_metric is None
        assert "1,385,304 accesses" in model.summary

    def test_steps(self, result):
        model = convert_to_pydantic(result)
        assert [s.name for s in model.steps][0] == 'Input Preparation'
        assert len(model.steps) == 6
        assert sum(s.share_pct for s in model.steps) == pytest.approx(100.0)

    def test_metrics(self, result):
        metrics = convert_to_pydantic(result).metrics
        assert metrics.max_parallel_ops == 65536
        assert metrics.energy_uj == pytest.approx(138.5304)
        assert metrics.load_level == 'low'

    def test_sweep_points(self, result):
        model = convert_to_pydantic(result)
        assert model.sweep_parameter == 'num_heads'
        assert [p.value for p in model.sweep_points] == [4, 8, 12]

    def test_without_sweep(self, result):
        assert convert_to_pydantic(result, include_sweep=False).sweep_points == []

    def test_latency_constraint_pass(self, result):
        model = convert_to_pydantic(result, constraint_metric='latency', constraint_threshold=0.05)
        assert model.verdict == Verdict.PASS
        assert model.constraint_actual == pytest.approx(0.01385304)
        assert model.constraint_margin_pct > 0

    def test_energy_constraint_fail(self, result):
        model = convert_to_pydantic(result, constraint_metric='energy', constraint_threshold=100.0)
        assert model.verdict == Verdict.FAIL
        assert model.constraint_margin_pct < 0
        assert any('energy_per_access' in s for s in model.suggestions)

    def test_zero_threshold(self, result):
        model = convert_to_pydantic(result, constraint_metric='latency', constraint_threshold=0.0)
        assert model.verdict == Verdict.UNKNOWN
        assert model.confidence == Confidence.LOW
        assert model.constraint_margin_pct is None

    def test_unknown_metric(self, result):
        with pytest.raises(ValueError):
            convert_to_pydantic(result, constraint_metric='bandwidth', constraint_threshold=1.0)

    def test_attention_suggestion(self, result):
        model = convert_to_pydantic(result)
        assert any('Attention dominates' in s for s in model.suggestions)

    def test_warnings_for_non_dividing_heads(self):
        result = ViTOpticalAnalyzer().analyze(ViTConfig(num_heads=7), OpticalCoreConfig())
        model = convert_to_pydantic(result, include_sweep=False)
        assert any('num_heads 7' in w for w in model.warnings)

    def test_warnings_for_non_dividing_patches(self):
        result = ViTOpticalAnalyzer().analyze(ViTConfig(image_size=100), OpticalCoreConfig())
        model = convert_to_pydantic(result, include_sweep=False)
        assert any('floored' in w for w in model.warnings)

    def test_json_serialization(self, result):
        model = convert_to_pydantic(result)
        restored = ViTOpticalAnalysisModel.model_validate_json(model.model_dump_json())
        assert restored.verdict == Verdict.PASS
        assert restored.vit.embedding_dim == 768
