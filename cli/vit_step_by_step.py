#!/usr/bin/env python
"""
ViT Attention Step-by-Step: Follow Along Walkthrough

Walks through one multi-head self-attention block of a Vision Transformer,
showing each phase, its formula, the numbers plugged in, and the optical
accesses it costs. Ends with the optical-core figures and a small text
rendering of microring occupancy.

Usage:
    ./cli/vit_step_by_step.py                          # ViT-B/16 defaults, all steps at once
    ./cli/vit_step_by_step.py --animate                # Reveal one step every 1.5 s
    ./cli/vit_step_by_step.py --animate --interval 0.5
    ./cli/vit_step_by_step.py --preset vit-ti-16
    ./cli/vit_step_by_step.py --embedding-dim 1024 --num-heads 16
"""

import argparse
import os
import sys
from functools import partial

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vitoptics.analysis import AnalysisSession
from vitoptics.core import format_quantity
from vitoptics.core.cli_options import add_config_arguments, build_config_model, configure_logging
from vitoptics.reporting import run_walkthrough
from vitoptics.reporting.walkthrough import DEFAULT_INTERVAL_S
from vitoptics.visualization.layout import core_occupancy_cells, patch_grid


def print_header(result):
    vit = result.vit
    grid = patch_grid(vit)

    print()
    print("=" * 90)
    print("  ViT ATTENTION STEP-BY-STEP: Optical Accesses per Phase")
    print("=" * 90)
    print()
    print(f"  Model:   {vit}")
    print(f"  Image:   {grid.image_size}x{grid.image_size} px in "
          f"{grid.patch_size}x{grid.patch_size} px patches "
          f"({format_quantity(grid.num_patches)} patches + 1 CLS token)")
    print(f"  Heads:   {vit.num_heads} x d_k = {vit.head_dim:g}")
    print(f"  Core:    {result.optical_core}")
    print()
    print("-" * 90)


def print_occupancy(result):
    occupancy = core_occupancy_cells(result.calculation, result.metrics, result.optical_core)
    print()
    print(f"  Microring occupancy ({occupancy.num_active}/{occupancy.num_cells} cells lit):")
    for row in occupancy.rows():
        print("    " + " ".join("#" if active else "." for active in row))


def print_summary(result):
    calc = result.calculation
    metrics = result.metrics

    print()
    print("-" * 90)
    print()
    print(f"  Projection accesses:  {format_quantity(calc.projection_accesses):>14}")
    print(f"  Attention accesses:   {format_quantity(calc.attention_accesses):>14}")
    print(f"  Total accesses:       {format_quantity(calc.total_accesses):>14}")
    print()
    print(metrics.format_summary())
    print_occupancy(result)
    print()
    print("=" * 90)


def main():
    parser = argparse.ArgumentParser(
        description="Step-by-Step ViT Attention Walkthrough",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_config_arguments(parser)
    parser.add_argument('--animate', action='store_true',
                        help='Reveal steps one at a time')
    parser.add_argument('--interval', type=float, default=DEFAULT_INTERVAL_S,
                        help=f'Seconds between steps with --animate (default: {DEFAULT_INTERVAL_S})')

    args = parser.parse_args()
    configure_logging(args.verbose)

    result = AnalysisSession(build_config_model(args)).result

    print_header(result)
    print()
    interval_s = max(0.0, args.interval) if args.animate else 0.0
    run_walkthrough(result.calculation, interval_s=interval_s, printer=partial(print, flush=True))
    print_summary(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
