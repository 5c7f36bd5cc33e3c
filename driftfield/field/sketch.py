"""
Sketch Context - Single owner of one running drift field sketch

Holds the noise generator, sector grid, particle population and frame
counter. A host calls step() once per display refresh; resize() only
flags a rebuild, which happens at the top of the next step so a frame
never sees a half-replaced grid.

Per step:
1. Rebuild grid + particles together if flagged
2. Advance frame counter and velocity multiplier (boost decay)
3. Tick every sector
4. Tick particles against the fresh grid
"""

import math
import random
from typing import Callable, Optional

from ..config import SketchConfig, get_preset, DEFAULT_PRESET
from ..errors import StaleGeometryError
from ..noise import SimplexNoise, create_prng
from ..utils.logger import logger
from .particles import (
    ParticlePopulation,
    Pointer,
    burst,
    dot_count_for_viewport,
    rebuild_particles,
    tick_particles,
)
from .sector_grid import SectorGrid, fit_resolution, rebuild_grid, tick_grid


class SketchContext:
    """
    Simulation state for one sketch.

    Args:
        config: sketch settings (defaults to the default preset)
        width, height: initial viewport size
        rng: float-in-[0, 1) source for particle placement. Defaults to
            an Alea stream derived from the config seed, or ambient
            randomness when the config has no seed.
    """

    def __init__(self, config: Optional[SketchConfig] = None,
                 width: float = 0.0, height: float = 0.0,
                 rng: Optional[Callable[[], float]] = None):
        self.config = config or get_preset(DEFAULT_PRESET)
        self.width = float(width)
        self.height = float(height)

        seed = self.config.seed
        self.noise = SimplexNoise(seed)
        if rng is None:
            rng = create_prng(f"{seed}:dots") if seed is not None else random.random
        self.rng = rng

        self.grid: Optional[SectorGrid] = None
        self.particles: Optional[ParticlePopulation] = None
        self.frame_index = 0
        self.generation = 0
        self.needs_rebuild = True

        # Motion state
        motion = self.config.motion
        self.velocity_mod = motion.velocity_mod
        self.velocity_boost = 1.0
        self.velocity_mult = motion.velocity_mod
        self.active_fraction = motion.active_fraction
        self.pointer: Optional[Pointer] = None

        self.last_reseeded = 0
        self.dropped_frames = 0

    # -------------------------------------------------------------------------
    # Geometry lifecycle
    # -------------------------------------------------------------------------

    def resize(self, width: float, height: float) -> bool:
        """
        Record a new viewport size.

        Returns True if the size changed (rebuild deferred to next step).
        """
        width = float(width)
        height = float(height)
        if width == self.width and height == self.height:
            return False
        self.width = width
        self.height = height
        self.needs_rebuild = True
        return True

    def rebuild(self) -> None:
        """Replace grid and particles together for the current viewport."""
        cfg = self.config
        resolution = cfg.grid.resolution
        if cfg.grid.max_sectors > 0:
            resolution = fit_resolution(self.width, self.height, cfg.grid.max_sectors)

        self.generation += 1
        grid = rebuild_grid(self.width, self.height, resolution,
                            noise=self.noise, config=cfg.grid,
                            generation=self.generation)
        # forces must exist before particles seed their velocity from them
        tick_grid(grid, self.frame_index)
        count = dot_count_for_viewport(self.width, self.height, cfg.dots)
        particles = rebuild_particles(count, grid, cfg.dots, self.rng)

        self.grid = grid
        self.particles = particles
        self.needs_rebuild = False
        logger.info(
            f"Rebuilt {cfg.name}: {grid.cols}x{grid.rows} sectors, {count} dots",
            component="SKETCH",
            details=f"{self.width:g}x{self.height:g}",
        )

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def step(self) -> bool:
        """
        Advance one frame.

        Returns False if the frame was discarded because the geometry went
        stale mid-frame; a rebuild then runs at the start of the next step.
        """
        if self.needs_rebuild or self.grid is None or self.particles is None:
            self.rebuild()

        self.frame_index += 1
        self._update_velocity_mult()

        try:
            tick_grid(self.grid, self.frame_index)
            limit = int(math.floor(len(self.particles) * self.active_fraction))
            self.last_reseeded = tick_particles(
                self.particles, self.grid,
                velocity_mult=self.velocity_mult,
                pointer=self.pointer,
                limit=limit,
            )
        except StaleGeometryError as e:
            self.needs_rebuild = True
            self.dropped_frames += 1
            logger.warning("Stale geometry, frame dropped", component="SKETCH", details=str(e))
            return False
        return True

    def run(self, frames: int) -> int:
        """Step `frames` times. Returns the number of frames completed."""
        completed = 0
        for _ in range(frames):
            if self.step():
                completed += 1
        return completed

    # -------------------------------------------------------------------------
    # Motion / input
    # -------------------------------------------------------------------------

    def set_velocity_mod(self, value: float) -> None:
        """Set base speed; negative values reverse drift direction."""
        self.velocity_mod = float(value)

    def boost(self) -> None:
        """Kick the velocity multiplier up; it decays back over a few frames."""
        self.velocity_boost = self.config.motion.boost_init

    def set_active_fraction(self, value: float) -> None:
        """Fraction of particles ticked per frame, clamped to [0, 1]."""
        self.active_fraction = max(0.0, min(1.0, float(value)))

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer = Pointer(float(x), float(y))

    def clear_pointer(self) -> None:
        self.pointer = None

    def burst(self, x: float, y: float) -> int:
        """Push particles away from (x, y). Returns the number hit."""
        if self.particles is None:
            return 0
        radius = self.width * self.config.dots.burst_radius
        return burst(self.particles, x, y, radius)

    def _update_velocity_mult(self) -> None:
        motion = self.config.motion
        mod = self.velocity_mod
        sign = -1.0 if mod < 0 else 1.0
        if self.velocity_boost > 1:
            mult = max(abs(mod), self.velocity_boost) * sign
            if self.velocity_boost < motion.boost_min:
                self.velocity_boost = 1.0
            else:
                self.velocity_boost *= motion.boost_decay
        else:
            mult = mod
        mult_sign = -1.0 if mult < 0 else 1.0
        self.velocity_mult = max(abs(mult), motion.min_velocity) * mult_sign
