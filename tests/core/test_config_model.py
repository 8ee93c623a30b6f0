"""
Tests for ConfigModel edit handling.

Every edit is clamped to a safe minimum instead of being rejected, and
image/patch edits re-derive the sequence length.
"""

import logging

import pytest

from vitoptics.core.config_model import (
    ConfigModel,
    FIELD_FLOORS,
    clamp,
    coerce_float,
    coerce_int,
)
from vitoptics.core.structures import (
    SweepParameter,
    SweepRange,
    DEFAULT_OPTICAL_CORE,
    DEFAULT_VIT_CONFIG,
)


@pytest.fixture
def model():
    return ConfigModel()


class TestCoercion:
    """Raw value parsing"""

    @pytest.mark.parametrize("raw,expected", [
        (512, 512),
        ("512", 512),
        ("  512", 512),
        ("512px", 512),
        ("99.9", 99),
        (99.9, 99),
        ("", 64),
        ("abc", 64),
        ("0", 64),
        (0, 64),
        ("-5", 64),
        (None, 64),
        (True, 64),
        (float('nan'), 64),
        (float('inf'), 64),
    ])
    def test_coerce_int(self, raw, expected):
        assert coerce_int(raw, 64) == expected

    @pytest.mark.parametrize("raw,expected", [
        (0.5, 0.5),
        ("0.25", 0.25),
        ("1e-2", 0.01),
        (".5", 0.5),
        ("0", 0.001),
        ("junk", 0.001),
        (-1.0, 0.001),
        ("1e999", 0.001),
        (float("inf"), 0.001),
        ("-1e999", 0.001),
    ])
    def test_coerce_float(self, raw, expected):
        assert coerce_float(raw, 0.001) == pytest.approx(expected)

    def test_clamp(self):
        assert clamp(3, 5) == 5
        assert clamp(7, 5) == 7


class TestViTEdits:
    """update_vit"""

    def test_image_size_clamped_to_minimum(self, model):
        """Editing image_size to 10 stores 32."""
        vit = model.update_vit('image_size', 10)
        assert vit.image_size == 32
        assert vit.sequence_length == 5

    def test_image_size_rederives_sequence_length(self, model):
        vit = model.update_vit('image_size', '384')
        assert vit.sequence_length == 577

    def test_patch_size_rederives_sequence_length(self, model):
        vit = model.update_vit('patch_size', 32)
        assert vit.sequence_length == 50

    def test_non_dividing_patch_floors(self, model):
        model.update_vit('image_size', 100)
        assert model.vit.sequence_length == 40

    def test_patch_size_capped_at_image_size(self, model):
        model.update_vit('image_size', 64)
        vit = model.update_vit('patch_size', 300)
        assert vit.patch_size == 64
        assert vit.sequence_length == 2

    def test_shrinking_image_caps_patch(self, model):
        model.update_vit('patch_size', 48)
        vit = model.update_vit('image_size', 32)
        assert vit.patch_size == 32

    def test_embedding_dim_floor(self, model):
        assert model.update_vit('embedding_dim', 1).embedding_dim == FIELD_FLOORS['embedding_dim']

    def test_embedding_edit_keeps_sequence_length(self, model):
        vit = model.update_vit('embedding_dim', 1024)
        assert vit.embedding_dim == 1024
        assert vit.sequence_length == 197

    def test_num_heads_floor(self, model):
        assert model.update_vit('num_heads', '').num_heads == 1

    def test_unknown_field(self, model):
        with pytest.raises(KeyError):
            model.update_vit('sequence_length', 100)

    def test_snapshots_are_replaced_not_mutated(self, model):
        before = model.vit
        model.update_vit('num_heads', 16)
        assert before.num_heads == 12
        assert model.vit.num_heads == 16


class TestOpticalCoreEdits:
    """update_optical_core"""

    def test_integer_field(self, model):
        assert model.update_optical_core('wavelength_channels', '16').wavelength_channels == 16

    def test_integer_field_floor(self, model):
        assert model.update_optical_core('parallel_ops', 0).parallel_ops == 1

    def test_throughput_floor(self, model):
        assert model.update_optical_core('throughput_gops', 0).throughput_gops == pytest.approx(1.0)

    def test_energy_floor(self, model):
        core = model.update_optical_core('energy_per_access', 'abc')
        assert core.energy_per_access == pytest.approx(0.001)

    def test_real_value(self, model):
        core = model.update_optical_core('throughput_gops', '250.5')
        assert core.throughput_gops == pytest.approx(250.5)

    def test_unknown_field(self, model):
        with pytest.raises(KeyError):
            model.update_optical_core('laser_power', 5)


class TestSweepRangeEdits:
    """update_sweep_range and parameter selection"""

    def test_edit_min(self, model):
        r = model.update_sweep_range('embedding_dim', 'min', 512)
        assert r == SweepRange(512, 2048, 256)

    def test_max_floored_at_min(self, model):
        r = model.update_sweep_range(SweepParameter.EMBEDDING_DIM, 'max', 100)
        assert r.max_value == 256

    def test_min_and_step_floor(self, model):
        assert model.update_sweep_range('num_heads', 'min', 0).min_value == 1
        assert model.update_sweep_range('num_heads', 'step', '').step == 1

    def test_min_above_max_gives_empty_range(self, model):
        r = model.update_sweep_range('num_heads', 'min', 100)
        assert len(r) == 0

    def test_unknown_range_field(self, model):
        with pytest.raises(KeyError):
            model.update_sweep_range('num_heads', 'start', 1)

    def test_unknown_parameter(self, model):
        with pytest.raises(ValueError):
            model.update_sweep_range('depth', 'min', 1)

    def test_sweep_ranges_is_a_copy(self, model):
        ranges = model.sweep_ranges
        ranges[SweepParameter.NUM_HEADS] = SweepRange(1, 2, 1)
        assert model.sweep_ranges[SweepParameter.NUM_HEADS] == SweepRange(4, 24, 4)

    def test_partial_ranges_keep_defaults(self):
        model = ConfigModel(sweep_ranges={SweepParameter.NUM_HEADS: SweepRange(1, 3, 1)})
        assert model.sweep_ranges[SweepParameter.NUM_HEADS] == SweepRange(1, 3, 1)
        assert model.selected_range == SweepRange(256, 2048, 256)
        updated = model.update_sweep_range('embedding_dim', 'max', '512')
        assert updated == SweepRange(256, 512, 256)

    def test_select_parameter(self, model):
        model.select_parameter('image_size')
        assert model.selected_parameter is SweepParameter.IMAGE_SIZE
        assert model.selected_range == SweepRange(112, 512, 56)


class TestModelLifecycle:
    """Revisions, presets, reset and logging"""

    def test_revision_increments(self, model):
        start = model.revision
        model.update_vit('num_heads', 8)
        model.update_optical_core('parallel_ops', 16)
        model.select_parameter('num_heads')
        assert model.revision == start + 3

    def test_apply_preset(self, model):
        vit = model.apply_preset('ViT-L/16')
        assert vit.embedding_dim == 1024
        assert vit.num_heads == 16

    def test_reset(self, model):
        model.update_vit('embedding_dim', 2048)
        model.update_optical_core('parallel_ops', 2)
        model.select_parameter('num_heads')
        model.reset()
        assert model.vit == DEFAULT_VIT_CONFIG
        assert model.optical_core == DEFAULT_OPTICAL_CORE
        assert model.selected_parameter is SweepParameter.EMBEDDING_DIM

    def test_clamp_logged_at_debug(self, model, caplog):
        with caplog.at_level(logging.DEBUG, logger='vitoptics.core.config_model'):
            model.update_vit('image_size', 10)
        assert any('image_size' in record.getMessage() for record in caplog.records)

    def test_exact_value_not_logged(self, model, caplog):
        with caplog.at_level(logging.DEBUG, logger='vitoptics.core.config_model'):
            model.update_vit('image_size', 256)
        assert not caplog.records
