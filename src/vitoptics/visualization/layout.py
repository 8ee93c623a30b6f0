"""
Panel Layouts

Cell-level layouts for the schematic panels: microring occupancy on the
optical core, the image patch grid and per-head attention thumbnails.

These are drawing aids. The attention thumbnails use random intensities and
carry no information about the model; nothing here feeds back into the
access or metric calculations.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from vitoptics.core.structures import (
    DetailedCalculation,
    Number,
    OpticalCoreConfig,
    OpticalMetrics,
    ViTConfig,
)


# Cells drawn for the optical core (8 x 8 grid)
CORE_GRID_CELLS = 64
CORE_GRID_COLUMNS = 8

# Attention thumbnails
MAX_ATTENTION_HEADS = 4
MAX_ATTENTION_GRID = 12
MIN_INTENSITY = 0.2
INTENSITY_SPAN = 0.8


@dataclass(frozen=True)
class CoreOccupancy:
    """
    Microring occupancy panel.

    active[i] is True when i < (total_accesses / max_parallel_ops) * 64.
    """
    active: List[bool]
    columns: int
    total_microrings: int
    utilization_ratio: float

    @property
    def num_cells(self) -> int:
        return len(self.active)

    @property
    def num_active(self) -> int:
        return sum(self.active)

    def rows(self) -> List[List[bool]]:
        """Cells split into grid rows."""
        return [self.active[i:i + self.columns] for i in range(0, len(self.active), self.columns)]


def core_occupancy_cells(
    calculation: DetailedCalculation,
    metrics: OpticalMetrics,
    optical_core: OpticalCoreConfig,
    cells: int = CORE_GRID_CELLS,
) -> CoreOccupancy:
    """
    Lay out the microring occupancy grid.

    Draws min(cells, total_microrings) cells. The fill fraction is always
    scaled to a 64-cell grid, so a core with fewer than 64 microrings shows
    every cell lit once utilization reaches that fraction of 64.
    """
    n_cells = min(cells, optical_core.total_microrings)
    ratio = (calculation.total_accesses / metrics.max_parallel_ops
             if metrics.max_parallel_ops else math.inf)
    threshold = ratio * CORE_GRID_CELLS

    return CoreOccupancy(
        active=[i < threshold for i in range(n_cells)],
        columns=CORE_GRID_COLUMNS,
        total_microrings=optical_core.total_microrings,
        utilization_ratio=ratio,
    )


@dataclass(frozen=True)
class PatchGrid:
    """Image patch grid (patches plus one class token)."""
    image_size: int
    patch_size: int
    patches_per_side: float
    num_patches: Number
    has_cls_token: bool = True

    @property
    def drawn_patches(self) -> int:
        """Whole patch cells that fit in the grid."""
        side = int(self.patches_per_side)
        return side * side

    @property
    def is_exact(self) -> bool:
        """True when the patch size divides the image size."""
        return float(self.patches_per_side).is_integer()


def patch_grid(vit: ViTConfig) -> PatchGrid:
    """Patch grid for a ViT configuration."""
    return PatchGrid(
        image_size=vit.image_size,
        patch_size=vit.patch_size,
        patches_per_side=vit.patches_per_side,
        num_patches=vit.num_patches,
    )


def attention_intensities(
    vit: ViTConfig,
    max_heads: int = MAX_ATTENTION_HEADS,
    max_grid: int = MAX_ATTENTION_GRID,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Decorative attention thumbnails.

    Returns:
        Array of shape (min(max_heads, num_heads), g, g) with
        g = min(max_grid, floor(sequence_length)), values in [0.2, 1.0).
        Pass seed for reproducible output.
    """
    heads = max(0, min(max_heads, vit.num_heads))
    grid = max(0, min(max_grid, int(vit.sequence_length)))
    rng = np.random.default_rng(seed)
    return rng.random((heads, grid, grid)) * INTENSITY_SPAN + MIN_INTENSITY
