"""
Core Data Structures

Configuration snapshots, calculation results and the editable ConfigModel
used by the ViT optical-core estimator.
"""

from .structures import (
    Number,
    ViTConfig,
    OpticalCoreConfig,
    CalculationStep,
    DetailedCalculation,
    OpticalMetrics,
    SweepParameter,
    SweepRange,
    SweepPoint,
    DEFAULT_VIT_CONFIG,
    DEFAULT_OPTICAL_CORE,
    DEFAULT_SWEEP_RANGES,
    DEFAULT_SWEEP_PARAMETER,
    derive_sequence_length_floored,
    derive_sequence_length_exact,
    format_quantity,
)

from .config_model import (
    ConfigModel,
    FIELD_FLOORS,
    clamp,
    coerce_int,
    coerce_float,
)

from .presets import (
    VIT_PRESETS,
    get_preset,
    list_presets,
)

__all__ = [
    # Structures
    'Number',
    'ViTConfig',
    'OpticalCoreConfig',
    'CalculationStep',
    'DetailedCalculation',
    'OpticalMetrics',
    'SweepParameter',
    'SweepRange',
    'SweepPoint',
    'DEFAULT_VIT_CONFIG',
    'DEFAULT_OPTICAL_CORE',
    'DEFAULT_SWEEP_RANGES',
    'DEFAULT_SWEEP_PARAMETER',
    'derive_sequence_length_floored',
    'derive_sequence_length_exact',
    'format_quantity',
    # Config state
    'ConfigModel',
    'FIELD_FLOORS',
    'clamp',
    'coerce_int',
    'coerce_float',
    # Presets
    'VIT_PRESETS',
    'get_preset',
    'list_presets',
]
