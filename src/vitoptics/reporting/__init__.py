"""
Reporting

Report generation, the step-by-step walkthrough and run logging.
"""

from .report_generator import ReportGenerator, REPORT_FORMATS
from .walkthrough import StepReveal, format_step, run_walkthrough
from .logging import AnalysisLogger, LogConfig, get_logger, set_logger

__all__ = [
    'ReportGenerator',
    'REPORT_FORMATS',
    'StepReveal',
    'format_step',
    'run_walkthrough',
    'AnalysisLogger',
    'LogConfig',
    'get_logger',
    'set_logger',
]
