"""Adapters for converting internal data structures to external formats.

This package provides adapters for converting AnalysisResult to:
- Verdict-first Pydantic models
- JSON (via model_dump_json)
"""

from vitoptics.adapters.pydantic_output import (
    Confidence,
    Verdict,
    ViTOpticalAnalysisModel,
    convert_to_pydantic,
    make_verdict,
)

__all__ = [
    "Confidence",
    "Verdict",
    "ViTOpticalAnalysisModel",
    "convert_to_pydantic",
    "make_verdict",
]
