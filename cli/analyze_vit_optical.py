#!/usr/bin/env python
"""
ViT Optical-Core Analysis Tool

Estimates the optical-core accesses of one Vision Transformer attention
block, the resulting utilization, energy and execution time, and how those
figures scale across a parameter sweep.

Supports:
- Standard ViT presets or individual hyperparameters
- Multiple output formats (text, JSON, markdown, CSV)
- Verdict-first constraint checking on latency or energy
- Chart output (sweep, access breakdown, core occupancy, patches, attention)

Usage:
    # Defaults (ViT-B/16 on a 32 x 64 x 32 core)
    ./cli/analyze_vit_optical.py

    # Preset with a different sweep
    ./cli/analyze_vit_optical.py --preset vit-l-16 --sweep image_size --min 112 --max 448 --step 56

    # JSON report with a latency budget
    ./cli/analyze_vit_optical.py --max-latency-ms 0.01 --output report.json

    # Exit non-zero when the budget is missed
    ./cli/analyze_vit_optical.py --max-energy-uj 100 --fail-on-verdict

    # Charts
    ./cli/analyze_vit_optical.py --plot plots/
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vitoptics.adapters import Verdict, convert_to_pydantic
from vitoptics.analysis import AnalysisSession
from vitoptics.core import SweepParameter
from vitoptics.core.cli_options import add_config_arguments, build_config_model, configure_logging
from vitoptics.reporting import AnalysisLogger, LogConfig, ReportGenerator, REPORT_FORMATS
from vitoptics.reporting.report_generator import FORMAT_BY_EXTENSION


def main():
    parser = argparse.ArgumentParser(
        description='ViT attention workload on a photonic optical core',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_config_arguments(parser)

    # Sweep
    sweep_group = parser.add_argument_group('sweep')
    sweep_group.add_argument('--sweep', choices=[p.value for p in SweepParameter],
                             default=SweepParameter.EMBEDDING_DIM.value,
                             help='Parameter to sweep (default: embedding_dim)')
    sweep_group.add_argument('--min', dest='sweep_min', type=str, help='Sweep start')
    sweep_group.add_argument('--max', dest='sweep_max', type=str, help='Sweep end (inclusive)')
    sweep_group.add_argument('--step', dest='sweep_step', type=str, help='Sweep step')

    # Constraint checking (verdict-first output)
    budget_group = parser.add_mutually_exclusive_group()
    budget_group.add_argument('--max-latency-ms', type=float, metavar='MS',
                              help='Check execution time against a budget (milliseconds)')
    budget_group.add_argument('--max-energy-uj', type=float, metavar='UJ',
                              help='Check energy against a budget (microjoules)')
    parser.add_argument('--fail-on-verdict', action='store_true',
                        help='Exit with status 1 when the constraint check fails')

    # Output
    parser.add_argument('--output', '-o', type=str,
                        help='Output file path (format auto-detected from extension)')
    parser.add_argument('--format', '-f', choices=REPORT_FORMATS,
                        help='Output format (default: text, or from --output extension)')
    parser.add_argument('--style', choices=['default', 'compact'], default='default',
                        help='Text report style')
    parser.add_argument('--plot', metavar='DIR',
                        help='Write charts (PNG) into DIR')
    parser.add_argument('--log-file', metavar='PATH',
                        help='Also write the run log to PATH')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress progress output')

    args = parser.parse_args()
    configure_logging(args.verbose)

    model = build_config_model(args)
    model.select_parameter(args.sweep)
    for field, raw in (('min', args.sweep_min), ('max', args.sweep_max), ('step', args.sweep_step)):
        if raw is not None:
            model.update_sweep_range(args.sweep, field, raw)

    session = AnalysisSession(model)
    result = session.result

    # Determine constraint (if any)
    constraint_metric = None
    constraint_threshold = None
    if args.max_latency_ms is not None:
        constraint_metric = 'latency'
        constraint_threshold = args.max_latency_ms
    elif args.max_energy_uj is not None:
        constraint_metric = 'energy'
        constraint_threshold = args.max_energy_uj

    verdict_model = convert_to_pydantic(
        result,
        constraint_metric=constraint_metric,
        constraint_threshold=constraint_threshold,
        include_sweep=False,
    )

    generator = ReportGenerator(style=args.style)
    format_type = args.format or 'text'
    if args.output and not args.format:
        format_type = FORMAT_BY_EXTENSION.get(Path(args.output).suffix.lower(), 'text')
    report_kwargs = {}
    if format_type == 'json':
        report_kwargs = {'constraint_metric': constraint_metric,
                         'constraint_threshold': constraint_threshold}

    # Progress output goes to the run log unless a machine-readable report is on stdout
    console = not args.quiet and (args.output is not None or format_type == 'text')

    with AnalysisLogger(log_path=args.log_file, config=LogConfig(console=console)) as log:
        log.section("ViT OPTICAL-CORE ANALYSIS")
        log.info(f"ViT:          {result.vit}")
        log.info(f"Optical core: {result.optical_core}")
        log.info(f"Sweep:        {result.sweep}")
        log.section("Optical Core Metrics", level=2)
        log.metrics(result.metrics)

        if args.output:
            generator.save_report(result, args.output, format=format_type, **report_kwargs)
            log.success(f"Report saved to: {args.output}")
        else:
            print(generator.generate_report(result, format_type, **report_kwargs))

        if args.plot:
            from vitoptics.visualization import plot_all
            plot_all(result, args.plot)
            log.success(f"Charts written to: {args.plot}")

        if constraint_metric:
            log.info(f"Verdict: {verdict_model.verdict.value} - {verdict_model.summary}")
            for suggestion in verdict_model.suggestions:
                log.info(f"  - {suggestion}")

    if args.fail_on_verdict and verdict_model.verdict == Verdict.FAIL:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
