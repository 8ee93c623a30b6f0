"""
Data structures for ViT optical-core workload estimation.

This module defines the immutable snapshots consumed and produced by the
calculation engine:
- ViTConfig: Vision Transformer hyperparameters (one config snapshot)
- OpticalCoreConfig: Photonic accelerator parameters
- CalculationStep: One phase of the attention block with its access count
- DetailedCalculation: The six ordered steps plus aggregate totals
- OpticalMetrics: Utilization, energy and timing on the optical core
- SweepParameter / SweepRange / SweepPoint: Parameter study definitions

The mutable, user-edited state lives in ConfigModel (config_model.py);
everything here is a frozen value object.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

Number = Union[int, float]


# =============================================================================
# Sequence length derivation
# =============================================================================

def derive_sequence_length_floored(image_size: Number, patch_size: Number) -> int:
    """
    Sequence length used by the interactive config path.

    L = floor((image_size / patch_size)^2) + 1  (patches + class token)
    """
    return math.floor((image_size / patch_size) ** 2) + 1


def derive_sequence_length_exact(image_size: Number, patch_size: Number) -> float:
    """
    Sequence length used when sweeping image size.

    L = (image_size / patch_size)^2 + 1, without flooring. Image sizes that are
    not a multiple of the patch size give a fractional sequence length.
    """
    return (image_size / patch_size) ** 2 + 1


def format_quantity(value: Number) -> str:
    """Render a count for display: integral values without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# =============================================================================
# Configuration snapshots
# =============================================================================

@dataclass(frozen=True)
class ViTConfig:
    """
    Vision Transformer hyperparameters.

    Attributes:
        embedding_dim: Model width (d_model)
        num_heads: Number of attention heads (h)
        image_size: Square image side in pixels
        patch_size: Square patch side in pixels
        sequence_length: Tokens per image (patches + CLS). Derived from
            image_size / patch_size when not given; a sweep over
            sequence_length overrides it directly.
    """
    embedding_dim: int = 768
    num_heads: int = 12
    image_size: int = 224
    patch_size: int = 16
    sequence_length: Optional[Number] = None

    def __post_init__(self):
        if self.sequence_length is None:
            object.__setattr__(
                self,
                'sequence_length',
                derive_sequence_length_floored(self.image_size, self.patch_size),
            )

    @property
    def head_dim(self) -> float:
        """Per-head dimension d_k = d_model / h (real division)."""
        return self.embedding_dim / self.num_heads

    @property
    def num_patches(self) -> Number:
        """Patch tokens, excluding the class token."""
        return self.sequence_length - 1

    @property
    def patches_per_side(self) -> float:
        """Patch grid side length (may be fractional)."""
        return self.image_size / self.patch_size

    def to_dict(self) -> Dict[str, Number]:
        """Convert to dictionary for serialization."""
        return {
            'embedding_dim': self.embedding_dim,
            'num_heads': self.num_heads,
            'image_size': self.image_size,
            'patch_size': self.patch_size,
            'sequence_length': self.sequence_length,
        }

    def __str__(self) -> str:
        return (f"ViT(d={self.embedding_dim}, h={self.num_heads}, "
                f"img={self.image_size}, patch={self.patch_size}, "
                f"L={format_quantity(self.sequence_length)})")


@dataclass(frozen=True)
class OpticalCoreConfig:
    """
    Photonic optical-core accelerator parameters.

    Attributes:
        wavelength_channels: WDM channels carried in parallel
        microrings_per_channel: Microring resonators per channel
        parallel_ops: Concurrent operations per microring
        energy_per_access: Energy per optical access (same unit as reported energy)
        throughput_gops: Sustained throughput in giga-ops per second
        clock_cycles_per_op: Reserved; carried through but not used by any metric
    """
    wavelength_channels: int = 32
    microrings_per_channel: int = 64
    parallel_ops: int = 32
    energy_per_access: float = 0.1
    throughput_gops: float = 100.0
    clock_cycles_per_op: int = 1

    @property
    def total_microrings(self) -> int:
        """Microrings across all channels."""
        return self.wavelength_channels * self.microrings_per_channel

    @property
    def max_parallel_ops(self) -> int:
        """Maximum concurrent accesses (channels x microrings x parallel ops)."""
        return self.wavelength_channels * self.microrings_per_channel * self.parallel_ops

    def to_dict(self) -> Dict[str, Number]:
        """Convert to dictionary for serialization."""
        return {
            'wavelength_channels': self.wavelength_channels,
            'microrings_per_channel': self.microrings_per_channel,
            'parallel_ops': self.parallel_ops,
            'energy_per_access': self.energy_per_access,
            'throughput_gops': self.throughput_gops,
            'clock_cycles_per_op': self.clock_cycles_per_op,
        }

    def __str__(self) -> str:
        return (f"OpticalCore({self.wavelength_channels}ch x "
                f"{self.microrings_per_channel} rings x {self.parallel_ops} ops, "
                f"{self.throughput_gops:g} GOPS)")


# =============================================================================
# Calculation results
# =============================================================================

@dataclass(frozen=True)
class CalculationStep:
    """
    One phase of the attention block.

    access_count feeds the totals; flops is for display only.
    """
    name: str
    formula: str
    narrative: str
    access_count: Number
    description: str
    display_color: str
    flops: Number = 0

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'formula': self.formula,
            'narrative': self.narrative,
            'access_count': self.access_count,
            'description': self.description,
            'display_color': self.display_color,
            'flops': self.flops,
        }


@dataclass(frozen=True)
class DetailedCalculation:
    """
    Ordered calculation steps and aggregate access counts.

    Invariant: total_accesses == projection_accesses + attention_accesses.
    """
    steps: Tuple[CalculationStep, ...]
    total_accesses: Number
    projection_accesses: Number
    attention_accesses: Number

    def step(self, name: str) -> CalculationStep:
        """Look up a step by name."""
        for step in self.steps:
            if step.name == name:
                return step
        raise KeyError(f"No calculation step named {name!r}")

    def breakdown(self) -> List[CalculationStep]:
        """Steps that contribute accesses (everything after input preparation)."""
        return list(self.steps[1:])

    @property
    def total_flops(self) -> Number:
        """Display FLOPs summed over all steps."""
        return sum(step.flops for step in self.steps)

    def __str__(self) -> str:
        return (f"DetailedCalculation(total={format_quantity(self.total_accesses)}, "
                f"projection={format_quantity(self.projection_accesses)}, "
                f"attention={format_quantity(self.attention_accesses)})")


@dataclass(frozen=True)
class OpticalMetrics:
    """
    Optical-core performance metrics for one workload.

    energy_consumption is raw (energy_per_access x accesses); divide by 1000
    for the microjoule figure shown in reports (see energy_uj).
    throughput_utilization_percent is not clamped.
    """
    max_parallel_ops: int
    utilization_ratio: float
    energy_consumption: float
    execution_time_ms: float
    throughput_utilization_percent: float

    # Live-metric thresholds (percent of throughput)
    HIGH_LOAD_PERCENT = 80.0
    MODERATE_LOAD_PERCENT = 60.0

    @property
    def energy_uj(self) -> float:
        """Energy in display units (raw / 1000)."""
        return self.energy_consumption / 1000

    @property
    def load_level(self) -> str:
        """Coarse throughput load: 'high', 'moderate' or 'low'."""
        if self.throughput_utilization_percent > self.HIGH_LOAD_PERCENT:
            return 'high'
        if self.throughput_utilization_percent > self.MODERATE_LOAD_PERCENT:
            return 'moderate'
        return 'low'

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            'max_parallel_ops': self.max_parallel_ops,
            'utilization_ratio': self.utilization_ratio,
            'energy_consumption': self.energy_consumption,
            'execution_time_ms': self.execution_time_ms,
            'throughput_utilization_percent': self.throughput_utilization_percent,
        }

    def format_summary(self) -> str:
        """Detailed multi-line summary"""
        lines = []
        lines.append(f"  Max Parallel Ops:  {self.max_parallel_ops:,}")
        lines.append(f"  Utilization Ratio: {self.utilization_ratio:.4f}")
        lines.append(f"  Energy:            {self.energy_uj:.2f} μJ")
        lines.append(f"  Execution Time:    {self.execution_time_ms:.6f} ms")
        lines.append(f"  Throughput Util:   {self.throughput_utilization_percent:.1f}% ({self.load_level})")
        return "\n".join(lines)


# =============================================================================
# Sweeps
# =============================================================================

class SweepParameter(Enum):
    """ViT parameters that can be swept."""
    EMBEDDING_DIM = "embedding_dim"
    SEQUENCE_LENGTH = "sequence_length"
    NUM_HEADS = "num_heads"
    IMAGE_SIZE = "image_size"

    @property
    def label(self) -> str:
        """Axis label for charts."""
        return _SWEEP_LABELS[self]

    @classmethod
    def parse(cls, value: Union[str, 'SweepParameter']) -> 'SweepParameter':
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(p.value for p in cls)
            raise ValueError(f"Unknown sweep parameter {value!r} (expected one of: {valid})")


_SWEEP_LABELS = {
    SweepParameter.EMBEDDING_DIM: 'Embedding Dimension',
    SweepParameter.SEQUENCE_LENGTH: 'Sequence Length (# patches + 1)',
    SweepParameter.NUM_HEADS: 'Number of Attention Heads',
    SweepParameter.IMAGE_SIZE: 'Image Size (pixels)',
}


@dataclass(frozen=True)
class SweepRange:
    """
    Inclusive range of values for a sweep.

    A step below 1 is clamped to 1. min_value > max_value is a valid,
    empty range.
    """
    min_value: int
    max_value: int
    step: int = 1

    def __post_init__(self):
        if self.step < 1:
            object.__setattr__(self, 'step', 1)

    def values(self) -> range:
        """Values from min_value to max_value inclusive (no overshoot)."""
        return range(self.min_value, self.max_value + 1, self.step)

    def __len__(self) -> int:
        return len(self.values())

    def to_dict(self) -> Dict[str, int]:
        return {'min': self.min_value, 'max': self.max_value, 'step': self.step}


@dataclass(frozen=True)
class SweepPoint:
    """
    One point of a parameter sweep, in chart units.

    Access counts are in millions, energy in μJ (raw / 1000), and
    utilization_percent is clamped to 100.
    """
    parameter: SweepParameter
    value: Number
    total_accesses_m: float
    projection_accesses_m: float
    attention_accesses_m: float
    energy_uj: float
    execution_time_ms: float
    utilization_percent: float

    # Column names of the chart series
    SERIES = (
        'Total Accesses',
        'Projection Accesses',
        'Attention Accesses',
        'Energy (μJ)',
        'Execution Time (ms)',
        'Utilization (%)',
    )

    def to_dict(self) -> Dict[str, Number]:
        """Chart record keyed by the parameter name and series names."""
        return {
            self.parameter.value: self.value,
            'Total Accesses': self.total_accesses_m,
            'Projection Accesses': self.projection_accesses_m,
            'Attention Accesses': self.attention_accesses_m,
            'Energy (μJ)': self.energy_uj,
            'Execution Time (ms)': self.execution_time_ms,
            'Utilization (%)': self.utilization_percent,
        }


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_VIT_CONFIG = ViTConfig()
DEFAULT_OPTICAL_CORE = OpticalCoreConfig()

DEFAULT_SWEEP_RANGES: Dict[SweepParameter, SweepRange] = {
    SweepParameter.EMBEDDING_DIM: SweepRange(256, 2048, 256),
    SweepParameter.SEQUENCE_LENGTH: SweepRange(50, 1600, 100),
    SweepParameter.NUM_HEADS: SweepRange(4, 24, 4),
    SweepParameter.IMAGE_SIZE: SweepRange(112, 512, 56),
}

DEFAULT_SWEEP_PARAMETER = SweepParameter.EMBEDDING_DIM
