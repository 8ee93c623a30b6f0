"""
Analysis Run Logging

Human-readable run log for the command-line tools: every line goes to the
console and, when a log file is configured, to that file with a timestamp.

Usage:
    from vitoptics.reporting.logging import AnalysisLogger, get_logger

    with AnalysisLogger(log_path=Path("runs/vit_b16.log")) as log:
        log.section("Access Breakdown")
        log.table_header("Step", "Accesses", widths=[22, 14])
        log.table_row("Query Projection", "151,296", widths=[22, 14])
        log.summary("Optical Core", energy_uj="138.53 μJ")

    # Anywhere else in the same run
    get_logger().info("Sweep written")
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO, Union

from vitoptics.core.structures import CalculationStep, OpticalMetrics, format_quantity


# Module-level logger instance
_analysis_logger: Optional['AnalysisLogger'] = None


def get_logger() -> 'AnalysisLogger':
    """
    Get the current analysis logger.

    Returns:
        The active AnalysisLogger, or a console-only logger if none was created.
    """
    global _analysis_logger
    if _analysis_logger is None:
        _analysis_logger = AnalysisLogger()
    return _analysis_logger


def set_logger(logger: Optional['AnalysisLogger']):
    """Set (or clear, with None) the module-level analysis logger."""
    global _analysis_logger
    _analysis_logger = logger


@dataclass
class LogConfig:
    """Configuration for analysis logging."""

    # Write to stdout as well as the buffer/file
    console: bool = True

    # Prefix file lines with a wall-clock timestamp
    file_timestamps: bool = True

    # Width for section separators
    separator_width: int = 90

    # Minimum stdlib level forwarded by debug()
    debug_level: int = logging.DEBUG


class AnalysisLogger:
    """
    Structured logger for analysis runs.

    Provides:
    - Dual output to console and file
    - Section headers, tables and key/value summaries
    - Formatters for calculation steps and optical metrics
    - In-memory copy of everything logged (get_content)
    """

    def __init__(
        self,
        log_path: Optional[Union[str, Path]] = None,
        config: Optional[LogConfig] = None,
        register: bool = True,
    ):
        """
        Initialize the analysis logger.

        Args:
            log_path: File to write the log to. If None, logs to console only.
            config: Optional LogConfig
            register: Make this the logger returned by get_logger()
        """
        self.config = config or LogConfig()
        self._log_path: Optional[Path] = Path(log_path) if log_path else None
        self._log_file: Optional[TextIO] = None
        self._lines: List[str] = []
        self._stdlib = logging.getLogger("vitoptics.run")

        if self._log_path is not None:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_file = open(self._log_path, 'w', encoding='utf-8')

        if register:
            set_logger(self)

    @property
    def log_path(self) -> Optional[Path]:
        """Path to the log file, if any."""
        return self._log_path

    def _write(self, message: str, to_console: bool = True):
        """Write a message to the buffer, console and file."""
        self._lines.append(message)

        if to_console and self.config.console:
            print(message)

        if self._log_file:
            timestamp = ""
            if self.config.file_timestamps:
                timestamp = f"[{datetime.now().strftime('%H:%M:%S.%f')[:-3]}] "
            self._log_file.write(f"{timestamp}{message}\n")
            self._log_file.flush()

    def info(self, message: str):
        """Log an informational message."""
        self._write(message)

    def debug(self, message: str):
        """Log a debug message (file and stdlib logging only)."""
        self._stdlib.log(self.config.debug_level, message)
        self._write(message, to_console=False)

    def warning(self, message: str):
        """Log a warning message."""
        self._write(f"⚠ WARNING: {message}")

    def error(self, message: str):
        self._write(f"✗ ERROR: {message}")

    def success(self, message: str):
        self._write(f"✓ {message}")

    def section(self, title: str, level: int = 1):
        """
        Print a section header.

        Args:
            title: Section title
            level: Header level (1=major, 2=minor)
        """
        width = self.config.separator_width
        self._write("")
        if level == 1:
            self._write("=" * width)
            self._write(title)
            self._write("=" * width)
        else:
            self._write(title)
            self._write("-" * width)

    def separator(self, char: str = "-"):
        self._write(char * self.config.separator_width)

    def blank(self):
        self._write("")

    def table_header(self, *columns: str, widths: Optional[List[int]] = None):
        """
        Print a table header row followed by a rule.

        Args:
            columns: Column headers
            widths: Optional column widths (default: auto)
        """
        if widths is None:
            widths = [max(12, len(col) + 2) for col in columns]

        header = "  ".join(f"{col:<{w}}" for col, w in zip(columns, widths))
        self._write(header)
        self._write("-" * len(header))

    def table_row(self, *values, widths: Optional[List[int]] = None):
        """
        Print a table row.

        Args:
            values: Row values
            widths: Optional column widths (must match header)
        """
        if widths is None:
            widths = [max(12, len(str(v)) + 2) for v in values]

        row = "  ".join(f"{str(v):<{w}}" for v, w in zip(values, widths))
        self._write(row)

    def step(self, step: CalculationStep, total_accesses: Optional[float] = None):
        """Log one calculation step as an aligned line."""
        parts = [f"  {step.name:<20s}", f"{format_quantity(step.access_count):>14s}"]
        if total_accesses:
            parts.append(f"{step.access_count / total_accesses * 100:>6.1f}%")
        parts.append(step.formula)
        self._write("  ".join(parts))

    def metrics(self, metrics: OpticalMetrics):
        """Log optical-core metrics as a block."""
        for line in metrics.format_summary().split("\n"):
            self._write(line)

    def summary(self, title: str, **metrics):
        """
        Log a summary with key-value metrics.

        Args:
            title: Summary title
            **metrics: Key-value pairs to display
        """
        self._write("")
        self._write(f"{title}:")
        for key, value in metrics.items():
            formatted_key = key.replace("_", " ").title()
            self._write(f"  {formatted_key}: {value}")

    def get_content(self) -> str:
        """All logged content as a string."""
        return "\n".join(self._lines)

    def close(self):
        """Close the log file and unregister."""
        if self._log_file:
            self._log_file.close()
            self._log_file = None
        if _analysis_logger is self:
            set_logger(None)

    def __enter__(self) -> 'AnalysisLogger':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
