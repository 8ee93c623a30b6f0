"""
Command-line configuration options.

Shared argparse flags for the ViT and optical-core parameters. Values are
parsed as raw strings and applied through ConfigModel, so the command line
follows the same clamping rules as any other front end.
"""

import argparse
import logging
from typing import List, Tuple

from vitoptics.core.config_model import ConfigModel
from vitoptics.core.presets import list_presets

logger = logging.getLogger(__name__)

# (flag, ConfigModel field, help) in the order edits are applied;
# image_size precedes patch_size so the patch cap sees the new image size
VIT_OPTIONS: List[Tuple[str, str, str]] = [
    ('--embedding-dim', 'embedding_dim', 'Embedding dimension d_model (default: 768, min 64)'),
    ('--num-heads', 'num_heads', 'Attention heads (default: 12, min 1)'),
    ('--image-size', 'image_size', 'Image side in pixels (default: 224, min 32)'),
    ('--patch-size', 'patch_size', 'Patch side in pixels (default: 16, min 4, at most image size)'),
]

OPTICAL_OPTIONS: List[Tuple[str, str, str]] = [
    ('--wavelength-channels', 'wavelength_channels', 'WDM channels (default: 32)'),
    ('--microrings-per-channel', 'microrings_per_channel', 'Microrings per channel (default: 64)'),
    ('--parallel-ops', 'parallel_ops', 'Parallel ops per microring (default: 32)'),
    ('--energy-per-access', 'energy_per_access', 'Energy per access (default: 0.1, min 0.001)'),
    ('--throughput-gops', 'throughput_gops', 'Throughput in GOPS (default: 100, min 1)'),
    ('--clock-cycles-per-op', 'clock_cycles_per_op', 'Clock cycles per op (reserved, default: 1)'),
]


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Add preset, ViT and optical-core flags to a parser."""
    parser.add_argument('--preset', choices=list_presets(),
                        help='Start from a standard ViT configuration')

    vit_group = parser.add_argument_group('ViT configuration')
    for flag, _, help_text in VIT_OPTIONS:
        vit_group.add_argument(flag, type=str, metavar='N', help=help_text)

    core_group = parser.add_argument_group('optical core')
    for flag, _, help_text in OPTICAL_OPTIONS:
        core_group.add_argument(flag, type=str, metavar='X', help=help_text)

    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging (clamped values, sweep sizes) on stderr')


def _dest(flag: str) -> str:
    return flag.lstrip('-').replace('-', '_')


def build_config_model(args: argparse.Namespace) -> ConfigModel:
    """Apply parsed flags to a fresh ConfigModel (preset first, then edits)."""
    model = ConfigModel()

    if getattr(args, 'preset', None):
        model.apply_preset(args.preset)

    for flag, field, _ in VIT_OPTIONS:
        raw = getattr(args, _dest(flag), None)
        if raw is not None:
            model.update_vit(field, raw)

    for flag, field, _ in OPTICAL_OPTIONS:
        raw = getattr(args, _dest(flag), None)
        if raw is not None:
            model.update_optical_core(field, raw)

    logger.debug("Configured %r", model)
    return model


def configure_logging(verbose: bool) -> None:
    """Route library debug logging to stderr when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
