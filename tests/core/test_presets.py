"""
Tests for the standard ViT presets.
"""

import pytest

from vitoptics.core.presets import VIT_PRESETS, get_preset, list_presets


class TestPresets:
    def test_base_preset_matches_defaults(self):
        vit = get_preset('vit-b-16')
        assert (vit.embedding_dim, vit.num_heads, vit.image_size, vit.patch_size) == (768, 12, 224, 16)
        assert vit.sequence_length == 197

    @pytest.mark.parametrize("name", ['ViT-B/16', 'vit_b_16', 'VIT-B-16'])
    def test_name_normalisation(self, name):
        assert get_preset(name) == VIT_PRESETS['vit-b-16']

    def test_unknown_lists_available(self):
        with pytest.raises(KeyError, match='vit-b-16'):
            get_preset('vit-giant')

    def test_list_order(self):
        names = list_presets()
        assert names[0] == 'vit-ti-16'
        assert len(names) == len(VIT_PRESETS)

    def test_huge_patch_14(self):
        """224 / 14 = 16 patches per side."""
        assert get_preset('vit-h-14').sequence_length == 257

    def test_heads_divide_embedding(self):
        for vit in VIT_PRESETS.values():
            assert vit.embedding_dim % vit.num_heads == 0
