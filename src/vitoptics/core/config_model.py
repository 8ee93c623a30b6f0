"""
Editable configuration state.

ConfigModel owns the mutable parameter state that a front end edits. Every
edit is clamped to a per-field floor instead of being rejected, and editing
the image or patch size re-derives the sequence length. The engine only ever
sees the immutable snapshots exposed by the model.

Usage:
    from vitoptics.core.config_model import ConfigModel

    model = ConfigModel()
    model.update_vit('image_size', '10')     # stored as 32
    model.update_vit('patch_size', 32)       # sequence_length -> 2
    model.update_optical_core('throughput_gops', 0)   # stored as 1.0

    vit = model.vit                          # frozen ViTConfig snapshot
"""

import logging
import math
import re
from dataclasses import replace
from typing import Dict, Optional, Union

from vitoptics.core.structures import (
    ViTConfig,
    OpticalCoreConfig,
    SweepParameter,
    SweepRange,
    DEFAULT_VIT_CONFIG,
    DEFAULT_OPTICAL_CORE,
    DEFAULT_SWEEP_RANGES,
    DEFAULT_SWEEP_PARAMETER,
    derive_sequence_length_floored,
)
from vitoptics.core.presets import get_preset

logger = logging.getLogger(__name__)

RawValue = Union[str, int, float, None]

# Lower bounds applied at the edit boundary
VIT_FIELD_FLOORS: Dict[str, int] = {
    'embedding_dim': 64,
    'num_heads': 1,
    'image_size': 32,
    'patch_size': 4,
}

OPTICAL_INT_FIELD_FLOORS: Dict[str, int] = {
    'wavelength_channels': 1,
    'microrings_per_channel': 1,
    'parallel_ops': 1,
    'clock_cycles_per_op': 1,
}

OPTICAL_FLOAT_FIELD_FLOORS: Dict[str, float] = {
    'throughput_gops': 1.0,
    'energy_per_access': 0.001,
}

FIELD_FLOORS: Dict[str, Union[int, float]] = {
    **VIT_FIELD_FLOORS,
    **OPTICAL_INT_FIELD_FLOORS,
    **OPTICAL_FLOAT_FIELD_FLOORS,
}

RANGE_FIELDS = ('min', 'max', 'step')

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def clamp(value, minimum):
    """Clamp value to a lower bound."""
    return max(minimum, value)


def coerce_int(raw: RawValue, minimum: int) -> int:
    """
    Parse a raw edit as an integer and clamp it to minimum.

    Strings use their leading integer prefix ("12px" -> 12). Floats are
    truncated toward zero. Anything unparseable, and zero, falls back to
    minimum.
    """
    value: Optional[int] = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        value = int(raw) if math.isfinite(raw) else None
    elif isinstance(raw, str):
        match = _INT_PREFIX.match(raw)
        value = int(match.group(1)) if match else None

    if not value:
        return minimum
    return clamp(value, minimum)


def coerce_float(raw: RawValue, minimum: float) -> float:
    """Parse a raw edit as a real number and clamp it to minimum."""
    value: Optional[float] = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        value = float(raw) if math.isfinite(raw) else None
    elif isinstance(raw, str):
        match = _FLOAT_PREFIX.match(raw)
        value = float(match.group(1)) if match else None
        if value is not None and not math.isfinite(value):
            value = None

    if not value:
        return float(minimum)
    return float(clamp(value, minimum))


class ConfigModel:
    """
    Mutable parameter state behind an interactive front end.

    Holds the current ViT and optical-core configuration, the sweep range of
    every sweepable parameter, and which parameter is selected for the sweep
    chart. All edits are clamped; no edit raises for an out-of-range value.
    Unknown field names raise KeyError.
    """

    def __init__(
        self,
        vit: ViTConfig = DEFAULT_VIT_CONFIG,
        optical_core: OpticalCoreConfig = DEFAULT_OPTICAL_CORE,
        sweep_ranges: Optional[Dict[SweepParameter, SweepRange]] = None,
        selected_parameter: SweepParameter = DEFAULT_SWEEP_PARAMETER,
    ):
        self._vit = vit
        self._optical_core = optical_core
        self._sweep_ranges = {**DEFAULT_SWEEP_RANGES, **(sweep_ranges or {})}
        self._selected_parameter = SweepParameter.parse(selected_parameter)
        self._revision = 0

    # =========================================================================
    # Snapshots
    # =========================================================================

    @property
    def vit(self) -> ViTConfig:
        """Current ViT configuration snapshot."""
        return self._vit

    @property
    def optical_core(self) -> OpticalCoreConfig:
        """Current optical-core configuration snapshot."""
        return self._optical_core

    @property
    def sweep_ranges(self) -> Dict[SweepParameter, SweepRange]:
        """Copy of the per-parameter sweep ranges."""
        return dict(self._sweep_ranges)

    @property
    def selected_parameter(self) -> SweepParameter:
        return self._selected_parameter

    @property
    def selected_range(self) -> SweepRange:
        """Sweep range of the selected parameter."""
        return self._sweep_ranges[self._selected_parameter]

    @property
    def revision(self) -> int:
        """Incremented on every committed edit."""
        return self._revision

    # =========================================================================
    # Edits
    # =========================================================================

    def update_vit(self, field: str, raw: RawValue) -> ViTConfig:
        """
        Apply one ViT field edit.

        Args:
            field: embedding_dim, num_heads, image_size or patch_size
            raw: New value as typed (string or number)

        Returns:
            The new ViTConfig snapshot
        """
        if field not in VIT_FIELD_FLOORS:
            raise KeyError(f"Unknown ViT field {field!r} (editable: {', '.join(VIT_FIELD_FLOORS)})")

        value = coerce_int(raw, VIT_FIELD_FLOORS[field])
        self._log_clamp(field, raw, value)
        updated = replace(self._vit, **{field: value})

        if field in ('image_size', 'patch_size'):
            patch_size = min(updated.patch_size, updated.image_size)
            updated = replace(
                updated,
                patch_size=patch_size,
                sequence_length=derive_sequence_length_floored(updated.image_size, patch_size),
            )

        self._vit = updated
        self._commit()
        return self._vit

    def update_optical_core(self, field: str, raw: RawValue) -> OpticalCoreConfig:
        """
        Apply one optical-core field edit.

        Integer fields are floored at 1; throughput_gops at 1.0 and
        energy_per_access at 0.001, so no divisor can reach zero.
        """
        if field in OPTICAL_INT_FIELD_FLOORS:
            value = coerce_int(raw, OPTICAL_INT_FIELD_FLOORS[field])
        elif field in OPTICAL_FLOAT_FIELD_FLOORS:
            value = coerce_float(raw, OPTICAL_FLOAT_FIELD_FLOORS[field])
        else:
            editable = ', '.join(list(OPTICAL_INT_FIELD_FLOORS) + list(OPTICAL_FLOAT_FIELD_FLOORS))
            raise KeyError(f"Unknown optical core field {field!r} (editable: {editable})")

        self._log_clamp(field, raw, value)
        self._optical_core = replace(self._optical_core, **{field: value})
        self._commit()
        return self._optical_core

    def update_sweep_range(
        self,
        parameter: Union[str, SweepParameter],
        field: str,
        raw: RawValue,
    ) -> SweepRange:
        """
        Edit the min, max or step of a sweep range.

        min and step are floored at 1; max is floored at the current min.
        """
        parameter = SweepParameter.parse(parameter)
        if field not in RANGE_FIELDS:
            raise KeyError(f"Unknown range field {field!r} (expected one of: {', '.join(RANGE_FIELDS)})")

        current = self._sweep_ranges[parameter]
        if field == 'min':
            updated = replace(current, min_value=coerce_int(raw, 1))
        elif field == 'max':
            updated = replace(current, max_value=coerce_int(raw, current.min_value))
        else:
            updated = replace(current, step=coerce_int(raw, 1))

        self._sweep_ranges[parameter] = updated
        self._commit()
        return updated

    def select_parameter(self, parameter: Union[str, SweepParameter]) -> SweepParameter:
        """Choose which parameter the sweep chart varies."""
        self._selected_parameter = SweepParameter.parse(parameter)
        self._commit()
        return self._selected_parameter

    def apply_preset(self, name: str) -> ViTConfig:
        """Replace the ViT configuration with a named preset."""
        self._vit = get_preset(name)
        self._commit()
        return self._vit

    def reset(self) -> None:
        """Restore every default."""
        self._vit = DEFAULT_VIT_CONFIG
        self._optical_core = DEFAULT_OPTICAL_CORE
        self._sweep_ranges = dict(DEFAULT_SWEEP_RANGES)
        self._selected_parameter = DEFAULT_SWEEP_PARAMETER
        self._commit()

    # =========================================================================
    # Internals
    # =========================================================================

    def _commit(self):
        self._revision += 1

    def _log_clamp(self, field: str, raw: RawValue, value):
        if isinstance(raw, (int, float)) and not isinstance(raw, bool) and raw == value:
            return
        if isinstance(raw, str) and raw.strip() == str(value):
            return
        logger.debug("%s: %r stored as %r", field, raw, value)

    def __repr__(self) -> str:
        return (f"ConfigModel(vit={self._vit}, optical_core={self._optical_core}, "
                f"selected={self._selected_parameter.value})")
