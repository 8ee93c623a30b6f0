"""
Unit tests for ViTOpticalAnalyzer and AnalysisSession

The session recomputes the full analysis from the latest committed
configuration and reuses the previous result when nothing changed.
"""

from datetime import datetime

import pytest

from vitoptics.analysis.unified_analyzer import (
    AnalysisResult,
    AnalysisSession,
    ViTOpticalAnalyzer,
)
from vitoptics.core.config_model import ConfigModel
from vitoptics.core.structures import (
    OpticalCoreConfig,
    SweepParameter,
    SweepRange,
    ViTConfig,
)


class TestViTOpticalAnalyzer:
    """Test ViTOpticalAnalyzer"""

    @pytest.fixture
    def result(self):
        return ViTOpticalAnalyzer().analyze(ViTConfig(), OpticalCoreConfig())

    def test_basic_analysis(self, result):
        assert isinstance(result, AnalysisResult)
        assert result.total_accesses == 1385304
        assert result.metrics.energy_consumption == pytest.approx(138530.4)
        assert result.sweep_parameter is SweepParameter.EMBEDDING_DIM

    def test_default_sweep_range(self, result):
        assert result.sweep.sweep_range == SweepRange(256, 2048, 256)
        assert len(result.sweep) == 8

    def test_timestamp_is_iso(self, result):
        datetime.fromisoformat(result.analysis_timestamp)

    def test_custom_sweep(self):
        result = ViTOpticalAnalyzer().analyze(
            ViTConfig(), OpticalCoreConfig(), 'num_heads', SweepRange(2, 6, 2)
        )
        assert [p.value for p in result.sweep] == [2, 4, 6]

    def test_executive_summary(self, result):
        summary = result.get_executive_summary()
        assert summary['total_accesses'] == 1385304
        assert summary['total_accesses_m'] == pytest.approx(1.385304)
        assert summary['energy_uj'] == pytest.approx(138.5304)
        assert summary['execution_time_ms'] == pytest.approx(0.01385304)
        assert summary['load_level'] == 'low'
        assert summary['vit']['sequence_length'] == 197

    def test_analyze_model(self):
        model = ConfigModel()
        model.update_vit('num_heads', 16)
        model.select_parameter('image_size')
        result = ViTOpticalAnalyzer().analyze_model(model)
        assert result.vit.num_heads == 16
        assert result.sweep_parameter is SweepParameter.IMAGE_SIZE


class TestAnalysisSession:
    """Test AnalysisSession recomputation"""

    def test_result_reused_without_edits(self):
        session = AnalysisSession()
        assert session.result is session.result

    def test_recomputes_after_vit_edit(self):
        session = AnalysisSession()
        before = session.result
        session.model.update_vit('embedding_dim', 1024)
        after = session.result
        assert after is not before
        assert after.vit.embedding_dim == 1024
        assert after.total_accesses > before.total_accesses

    def test_recomputes_after_core_edit(self):
        session = AnalysisSession()
        before = session.result
        session.model.update_optical_core('energy_per_access', 0.2)
        assert session.result.metrics.energy_consumption == pytest.approx(2 * before.metrics.energy_consumption)

    def test_recomputes_after_range_edit(self):
        session = AnalysisSession()
        session.result
        session.model.update_sweep_range('embedding_dim', 'max', 512)
        assert [p.value for p in session.result.sweep] == [256, 512]

    def test_same_values_reuse_result(self):
        """An edit that stores the same snapshot does not trigger recomputation."""
        session = AnalysisSession()
        before = session.result
        session.model.update_vit('num_heads', 12)
        assert session.result is before

    def test_matches_fresh_analysis(self):
        model = ConfigModel()
        session = AnalysisSession(model)
        model.update_vit('image_size', 384)
        model.update_optical_core('parallel_ops', 8)
        fresh = ViTOpticalAnalyzer().analyze(model.vit, model.optical_core)
        assert session.result.calculation == fresh.calculation
        assert session.result.metrics == fresh.metrics
