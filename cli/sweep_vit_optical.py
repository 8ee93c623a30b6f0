#!/usr/bin/env python
"""
ViT Optical-Core Sweep Tool

Sweep one ViT hyperparameter (or all of them) around a baseline and report
how optical accesses, energy, execution time and throughput utilization
scale.

Usage:
    python cli/sweep_vit_optical.py                                  # embedding_dim, default range
    python cli/sweep_vit_optical.py --param sequence_length --min 50 --max 1650 --step 200
    python cli/sweep_vit_optical.py --param all --output sweeps/     # one CSV per parameter
    python cli/sweep_vit_optical.py --param image_size --plot plots/
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vitoptics.analysis import SweepGenerator
from vitoptics.core import SweepParameter, format_quantity
from vitoptics.core.cli_options import add_config_arguments, build_config_model, configure_logging


def print_sweep(sweep):
    """Print one sweep as a table followed by its scaling exponents."""
    print()
    print("=" * 90)
    print(f"SWEEP: {sweep.parameter.label}  "
          f"({sweep.sweep_range.min_value}..{sweep.sweep_range.max_value} step {sweep.sweep_range.step})")
    print("=" * 90)
    print()

    points = sweep.points()
    if not points:
        print("  Empty range (min > max): no points")
        return

    print(f"{'Value':>10} {'Total (M)':>11} {'Proj (M)':>10} {'Attn (M)':>10} "
          f"{'Energy μJ':>11} {'Time ms':>11} {'Util %':>8}")
    print("-" * 90)
    for p in points:
        print(f"{format_quantity(p.value):>10} {p.total_accesses_m:>11.3f} "
              f"{p.projection_accesses_m:>10.3f} {p.attention_accesses_m:>10.3f} "
              f"{p.energy_uj:>11.2f} {p.execution_time_ms:>11.6f} {p.utilization_percent:>8.2f}")

    print()
    print("Scaling exponents (log-log slope vs parameter):")
    for attribute in ('total_accesses_m', 'projection_accesses_m', 'attention_accesses_m'):
        exponent = sweep.scaling_exponent(attribute)
        shown = f"{exponent:.3f}" if exponent is not None else "n/a"
        print(f"  {attribute:<24} {shown}")


def main():
    parser = argparse.ArgumentParser(
        description='Sweep ViT hyperparameters on an optical core',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    add_config_arguments(parser)
    parser.add_argument(
        '--param', '-p',
        type=str,
        default=SweepParameter.EMBEDDING_DIM.value,
        choices=[p.value for p in SweepParameter] + ['all'],
        help='Parameter to sweep (default: embedding_dim)',
    )
    parser.add_argument('--min', dest='sweep_min', type=str, help='Sweep start (single parameter only)')
    parser.add_argument('--max', dest='sweep_max', type=str, help='Sweep end, inclusive')
    parser.add_argument('--step', dest='sweep_step', type=str, help='Sweep step')
    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='CSV file (single parameter) or directory (all parameters)',
    )
    parser.add_argument(
        '--plot',
        type=str,
        default=None,
        metavar='DIR',
        help='Write sweep charts into DIR',
    )
    parser.add_argument(
        '--format', '-f',
        type=str,
        default='png',
        choices=['pdf', 'svg', 'png'],
        help='Chart format (default: png)',
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    model = build_config_model(args)
    if args.param != 'all':
        model.select_parameter(args.param)
        for field, raw in (('min', args.sweep_min), ('max', args.sweep_max), ('step', args.sweep_step)):
            if raw is not None:
                model.update_sweep_range(args.param, field, raw)

    generator = SweepGenerator(model.vit, model.optical_core)
    if args.param == 'all':
        sweeps = generator.generate_all(model.sweep_ranges)
    else:
        sweeps = {model.selected_parameter: generator.generate(model.selected_parameter, model.selected_range)}

    print(f"Baseline: {model.vit}")
    print(f"Core:     {model.optical_core}")

    for sweep in sweeps.values():
        print_sweep(sweep)

    if args.output:
        output = Path(args.output)
        if len(sweeps) == 1 and output.suffix.lower() == '.csv':
            next(iter(sweeps.values())).to_csv(output)
            print(f"\nSweep saved to: {output}")
        else:
            for parameter, sweep in sweeps.items():
                path = output / f"sweep_{parameter.value}.csv"
                sweep.to_csv(path)
                print(f"\nSweep saved to: {path}")

    if args.plot:
        from vitoptics.visualization import plot_sweep
        for parameter, sweep in sweeps.items():
            plot_sweep(sweep, Path(args.plot) / f"sweep_{parameter.value}", formats=[args.format])
        print(f"\nCharts written to: {args.plot}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
