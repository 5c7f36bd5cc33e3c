"""
Sector Grid - Noise-driven force field over the viewport

The viewport is cut into square sectors of `resolution` pixels. Every
frame each sector samples 3D simplex noise at (col, row, frame) and turns
it into a force vector and a scalar value. Adjacent sectors sample
nearby noise coordinates, so the field is smooth in space and time.

The grid always has one more column and row than fits the viewport, so a
centred render never shows an empty edge.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from ..config import FieldConfig
from ..noise import SimplexNoise
from ..utils.logger import logger


@dataclass
class SectorGrid:
    """
    Dense grid of force-field cells.

    Arrays are indexed [col, row]. `generation` changes on every rebuild
    so stale particle populations can be detected.
    """
    width: float
    height: float
    resolution: float
    cols: int
    rows: int
    noise: SimplexNoise
    config: FieldConfig
    generation: int = 0
    time_index: int = 0
    values: np.ndarray = field(default=None, repr=False)  # scalar per cell
    fx: np.ndarray = field(default=None, repr=False)      # x force per cell
    fy: np.ndarray = field(default=None, repr=False)      # y force per cell

    def __post_init__(self):
        shape = (self.cols, self.rows)
        if self.values is None:
            self.values = np.zeros(shape, dtype=np.float64)
        if self.fx is None:
            self.fx = np.zeros(shape, dtype=np.float64)
        if self.fy is None:
            self.fy = np.zeros(shape, dtype=np.float64)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.cols, self.rows

    @property
    def overflow(self) -> Tuple[float, float]:
        """Pixels the grid extends past the viewport on each axis."""
        res = self.resolution
        return res - (self.width % res), res - (self.height % res)

    @property
    def render_offset(self) -> Tuple[float, float]:
        """Translation that centres the grid's overflow on the viewport."""
        ox, oy = self.overflow
        return -ox / 2.0, -oy / 2.0

    def cell_index(self, x: float, y: float) -> Tuple[int, int]:
        """Sector (col, row) containing a viewport position. May be out of bounds."""
        return math.floor(x / self.resolution), math.floor(y / self.resolution)

    def contains(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def force_at(self, col: int, row: int) -> Tuple[float, float]:
        """Force of an in-bounds sector."""
        return float(self.fx[col, row]), float(self.fy[col, row])

    def value_at(self, col: int, row: int) -> float:
        return float(self.values[col, row])


def fit_resolution(width: float, height: float, max_sectors: int) -> float:
    """Sector size so the longer viewport side spans max_sectors sectors."""
    if max_sectors <= 0:
        raise ValueError(f"max_sectors must be positive, got {max_sectors}")
    return float(max(1, math.floor(max(width, height) / max_sectors + 0.5)))


def rebuild_grid(width: float, height: float, resolution: float,
                 noise: Optional[SimplexNoise] = None,
                 config: Optional[FieldConfig] = None,
                 generation: int = 0) -> SectorGrid:
    """
    Create a grid covering a width x height viewport.

    Columns = floor(width / resolution) + 1, rows = floor(height / resolution) + 1.
    Forces are zero until the first tick_grid().
    """
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")
    if width < 0 or height < 0:
        raise ValueError(f"viewport must be non-negative, got {width}x{height}")

    cols = int(width // resolution) + 1
    rows = int(height // resolution) + 1
    grid = SectorGrid(
        width=width,
        height=height,
        resolution=resolution,
        cols=cols,
        rows=rows,
        noise=noise if noise is not None else SimplexNoise(),
        config=config or FieldConfig(),
        generation=generation,
    )
    logger.field(f"Grid {cols}x{rows} @ {resolution:g}px", details=f"gen {generation}")
    return grid


def tick_grid(grid: SectorGrid, time_index: int) -> None:
    """Resample every sector's noise, force and value for a frame."""
    cfg = grid.config
    noise3d = grid.noise.noise3d
    xy = cfg.xy_scale
    tz = time_index * cfg.t_scale
    angle_scale = cfg.angle_scale
    strength = cfg.strength
    value_scale = cfg.value_scale
    value_offset = cfg.value_offset

    values, fx, fy = grid.values, grid.fx, grid.fy
    for col in range(grid.cols):
        for row in range(grid.rows):
            n = noise3d(col * xy, row * xy, tz) + 1.0
            angle = n * angle_scale
            fx[col, row] = math.sin(angle) * strength
            fy[col, row] = math.cos(angle) * strength
            values[col, row] = n * value_scale + value_offset
    grid.time_index = time_index
