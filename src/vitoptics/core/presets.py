"""
Standard ViT configurations.

Widths and head counts follow the published ViT family (Dosovitskiy et al.,
DeiT-Ti for the tiny model). Sequence lengths are derived from the image and
patch sizes like any other config.
"""

from typing import Dict, List

from vitoptics.core.structures import ViTConfig


VIT_PRESETS: Dict[str, ViTConfig] = {
    'vit-ti-16': ViTConfig(embedding_dim=192, num_heads=3, image_size=224, patch_size=16),
    'vit-s-16': ViTConfig(embedding_dim=384, num_heads=6, image_size=224, patch_size=16),
    'vit-b-16': ViTConfig(embedding_dim=768, num_heads=12, image_size=224, patch_size=16),
    'vit-b-32': ViTConfig(embedding_dim=768, num_heads=12, image_size=224, patch_size=32),
    'vit-l-16': ViTConfig(embedding_dim=1024, num_heads=16, image_size=224, patch_size=16),
    'vit-h-14': ViTConfig(embedding_dim=1280, num_heads=16, image_size=224, patch_size=14),
}


def list_presets() -> List[str]:
    """Preset names in definition order."""
    return list(VIT_PRESETS)


def get_preset(name: str) -> ViTConfig:
    """Look up a preset by name (case-insensitive, '/' and '_' accepted)."""
    key = name.lower().replace('/', '-').replace('_', '-')
    if key not in VIT_PRESETS:
        raise KeyError(f"Unknown preset {name!r} (available: {', '.join(VIT_PRESETS)})")
    return VIT_PRESETS[key]
