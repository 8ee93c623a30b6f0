"""
Report Generator

Reporting engine that turns an AnalysisResult into various output formats.

Supports:
- Text: Human-readable console output
- JSON: Machine-readable, via the Pydantic schema
- CSV: Spreadsheet-friendly (single-row summary or sweep series)
- Markdown: Documentation-friendly with tables

Usage:
    from vitoptics.reporting import ReportGenerator
    from vitoptics.analysis import ViTOpticalAnalyzer

    result = ViTOpticalAnalyzer().analyze(ViTConfig(), OpticalCoreConfig())

    generator = ReportGenerator()
    print(generator.generate_text_report(result))
    generator.save_report(result, 'report.json')
"""

import csv
from io import StringIO
from pathlib import Path
from typing import List, Optional, Union

from vitoptics.adapters.pydantic_output import convert_to_pydantic
from vitoptics.analysis.unified_analyzer import AnalysisResult
from vitoptics.core.structures import SweepPoint, format_quantity


REPORT_FORMATS = ('text', 'json', 'csv', 'markdown')

FORMAT_BY_EXTENSION = {
    '.json': 'json',
    '.csv': 'csv',
    '.md': 'markdown',
    '.txt': 'text',
}

WIDTH = 79


class ReportGenerator:
    """
    Report generation from analysis results.

    Usage:
        generator = ReportGenerator()

        # Text report
        print(generator.generate_text_report(result))

        # Sweep series as CSV
        csv_text = generator.generate_csv_report(result, include_sweep=True)
    """

    def __init__(self, style: str = 'default'):
        """
        Initialize report generator.

        Args:
            style: Report style ('default' or 'compact'; compact omits the narratives)
        """
        self.style = style

    # =========================================================================
    # Text
    # =========================================================================

    def generate_text_report(
        self,
        result: AnalysisResult,
        include_sections: Optional[List[str]] = None,
    ) -> str:
        """
        Generate human-readable text report.

        Args:
            result: Analysis result
            include_sections: Sections to include (all if None)
                             ['config', 'steps', 'metrics', 'sweep']

        Returns:
            Formatted text report
        """
        def wanted(section):
            return include_sections is None or section in include_sections

        calc = result.calculation
        metrics = result.metrics
        lines = []

        lines.append("=" * WIDTH)
        lines.append("          VISION TRANSFORMER ATTENTION ON AN OPTICAL CORE")
        lines.append("=" * WIDTH)
        lines.append("")

        if wanted('config'):
            lines.append("CONFIGURATION")
            lines.append("-" * WIDTH)
            lines.append(f"ViT:                     {result.vit}")
            lines.append(f"Head Dimension:          {result.vit.head_dim:g}")
            lines.append(f"Patches:                 {format_quantity(result.vit.num_patches)} + 1 CLS token")
            lines.append(f"Optical Core:            {result.optical_core}")
            lines.append(f"Energy per Access:       {result.optical_core.energy_per_access:g}")
            lines.append("")

        if wanted('steps'):
            lines.append("ACCESS BREAKDOWN")
            lines.append("-" * WIDTH)
            lines.append(f"{'Step':<22} {'Accesses':>14} {'Share':>7}  Formula")
            for step in calc.steps:
                share = (step.access_count / calc.total_accesses * 100) if calc.total_accesses else 0.0
                lines.append(
                    f"{step.name:<22} {format_quantity(step.access_count):>14} {share:>6.1f}%  {step.formula}"
                )
                if self.style != 'compact':
                    lines.append(f"{'':<22} {step.description}")
            lines.append("")
            lines.append(f"Projection Accesses:     {format_quantity(calc.projection_accesses)}")
            lines.append(f"Attention Accesses:      {format_quantity(calc.attention_accesses)}")
            lines.append(f"Total Accesses:          {format_quantity(calc.total_accesses)}")
            lines.append("")

        if wanted('metrics'):
            lines.append("OPTICAL CORE METRICS")
            lines.append("-" * WIDTH)
            lines.append(metrics.format_summary())
            lines.append("")

        if wanted('sweep'):
            points = result.sweep.points()
            lines.append(f"SWEEP: {result.sweep_parameter.label}")
            lines.append("-" * WIDTH)
            if not points:
                lines.append("  (empty range)")
            else:
                lines.append(
                    f"{'Value':>10} {'Total (M)':>11} {'Proj (M)':>10} {'Attn (M)':>10} "
                    f"{'Energy μJ':>11} {'Time ms':>11} {'Util %':>8}"
                )
                for point in points:
                    lines.append(
                        f"{format_quantity(point.value):>10} {point.total_accesses_m:>11.3f} "
                        f"{point.projection_accesses_m:>10.3f} {point.attention_accesses_m:>10.3f} "
                        f"{point.energy_uj:>11.2f} {point.execution_time_ms:>11.6f} "
                        f"{point.utilization_percent:>8.2f}"
                    )
            lines.append("")

        lines.append("=" * WIDTH)
        return "\n".join(lines)

    # =========================================================================
    # JSON
    # =========================================================================

    def generate_json_report(
        self,
        result: AnalysisResult,
        constraint_metric: Optional[str] = None,
        constraint_threshold: Optional[float] = None,
        include_sweep: bool = True,
        indent: int = 2,
    ) -> str:
        """
        Generate JSON report from the verdict-first Pydantic model.

        Returns:
            JSON string
        """
        model = convert_to_pydantic(
            result,
            constraint_metric=constraint_metric,
            constraint_threshold=constraint_threshold,
            include_sweep=include_sweep,
        )
        return model.model_dump_json(indent=indent)

    # =========================================================================
    # CSV
    # =========================================================================

    def generate_csv_report(self, result: AnalysisResult, include_sweep: bool = False) -> str:
        """
        Generate CSV report.

        Args:
            result: Analysis result
            include_sweep: Write one row per sweep point instead of the summary row

        Returns:
            CSV string
        """
        output = StringIO()

        if include_sweep:
            parameter = result.sweep_parameter.value
            writer = csv.DictWriter(output, fieldnames=[parameter] + list(SweepPoint.SERIES))
            writer.writeheader()
            for point in result.sweep:
                writer.writerow(point.to_dict())
            return output.getvalue()

        calc = result.calculation
        metrics = result.metrics
        row = {}
        row.update(result.vit.to_dict())
        row.update(result.optical_core.to_dict())
        for step in calc.breakdown():
            row[step.name.lower().replace(' ', '_') + '_accesses'] = step.access_count
        row.update({
            'projection_accesses': calc.projection_accesses,
            'attention_accesses': calc.attention_accesses,
            'total_accesses': calc.total_accesses,
            'max_parallel_ops': metrics.max_parallel_ops,
            'utilization_ratio': metrics.utilization_ratio,
            'energy_uj': metrics.energy_uj,
            'execution_time_ms': metrics.execution_time_ms,
            'throughput_utilization_pct': metrics.throughput_utilization_percent,
        })

        writer = csv.DictWriter(output, fieldnames=list(row))
        writer.writeheader()
        writer.writerow(row)
        return output.getvalue()

    # =========================================================================
    # Markdown
    # =========================================================================

    def generate_markdown_report(self, result: AnalysisResult, include_sweep: bool = True) -> str:
        """
        Generate Markdown report.

        Args:
            result: Analysis result
            include_sweep: Include the sweep table

        Returns:
            Markdown string
        """
        calc = result.calculation
        metrics = result.metrics
        vit = result.vit
        core = result.optical_core
        lines = []

        lines.append("# ViT Attention on an Optical Core")
        lines.append("")
        lines.append(f"**Generated:** {result.analysis_timestamp}")
        lines.append("")

        lines.append("## Configuration")
        lines.append("")
        lines.append("| Parameter | Value |")
        lines.append("|-----------|-------|")
        lines.append(f"| Embedding Dimension | {vit.embedding_dim} |")
        lines.append(f"| Attention Heads | {vit.num_heads} |")
        lines.append(f"| Image Size | {vit.image_size} |")
        lines.append(f"| Patch Size | {vit.patch_size} |")
        lines.append(f"| Sequence Length | {format_quantity(vit.sequence_length)} |")
        lines.append(f"| Wavelength Channels | {core.wavelength_channels} |")
        lines.append(f"| Microrings per Channel | {core.microrings_per_channel} |")
        lines.append(f"| Parallel Ops | {core.parallel_ops} |")
        lines.append(f"| Energy per Access | {core.energy_per_access:g} |")
        lines.append(f"| Throughput (GOPS) | {core.throughput_gops:g} |")
        lines.append("")

        lines.append("## Access Breakdown")
        lines.append("")
        lines.append("| Step | Formula | Accesses | Share |")
        lines.append("|------|---------|---------:|------:|")
        for step in calc.steps:
            share = (step.access_count / calc.total_accesses * 100) if calc.total_accesses else 0.0
            lines.append(f"| {step.name} | `{step.formula}` | {format_quantity(step.access_count)} | {share:.1f}% |")
        lines.append(f"| **Total** | | **{format_quantity(calc.total_accesses)}** | 100.0% |")
        lines.append("")

        lines.append("## Optical Core Metrics")
        lines.append("")
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")
        lines.append(f"| Max Parallel Ops | {metrics.max_parallel_ops:,} |")
        lines.append(f"| Utilization Ratio | {metrics.utilization_ratio:.4f} |")
        lines.append(f"| Energy | {metrics.energy_uj:.2f} μJ |")
        lines.append(f"| Execution Time | {metrics.execution_time_ms:.6f} ms |")
        lines.append(f"| Throughput Utilization | {metrics.throughput_utilization_percent:.2f}% ({metrics.load_level}) |")
        lines.append("")

        if include_sweep:
            lines.append(f"## Sweep: {result.sweep_parameter.label}")
            lines.append("")
            lines.append("| Value | Total (M) | Projection (M) | Attention (M) | Energy (μJ) | Time (ms) | Util (%) |")
            lines.append("|------:|----------:|---------------:|--------------:|------------:|----------:|---------:|")
            for point in result.sweep:
                lines.append(
                    f"| {format_quantity(point.value)} | {point.total_accesses_m:.3f} | "
                    f"{point.projection_accesses_m:.3f} | {point.attention_accesses_m:.3f} | "
                    f"{point.energy_uj:.2f} | {point.execution_time_ms:.6f} | {point.utilization_percent:.2f} |"
                )
            lines.append("")

        return "\n".join(lines)

    # =========================================================================
    # Output
    # =========================================================================

    def generate_report(self, result: AnalysisResult, format: str = 'text', **kwargs) -> str:
        """Dispatch to the generator for one format."""
        if format == 'json':
            return self.generate_json_report(result, **kwargs)
        if format == 'csv':
            return self.generate_csv_report(result, **kwargs)
        if format == 'markdown':
            return self.generate_markdown_report(result, **kwargs)
        if format == 'text':
            return self.generate_text_report(result, **kwargs)
        raise ValueError(f"Unknown report format {format!r} (expected one of: {', '.join(REPORT_FORMATS)})")

    def save_report(
        self,
        result: AnalysisResult,
        output_path: Union[str, Path],
        format: Optional[str] = None,
        **kwargs,
    ) -> None:
        """
        Save report to file.

        Args:
            result: Analysis result
            output_path: Output file path
            format: Format override (auto-detect from extension if None)
        """
        if format is None:
            format = FORMAT_BY_EXTENSION.get(Path(output_path).suffix.lower(), 'text')

        content = self.generate_report(result, format, **kwargs)

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
