"""
Particles - Dots steered by the sector force field

Each dot looks up the sector under it every frame, eases its velocity
toward that sector's force and moves. Dots that leave the grid are
re-initialised on the spot (random position, or the viewport edge for
drift-style sketches) instead of being clamped or wrapped.

Optional inputs, all additive to the velocity update:
- Pointer gravity: pull toward a cursor, clamped to [min_gravity, max_gravity]
- Bursts: a click pushes nearby dots away with a decaying impulse
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from ..config import DotConfig
from ..errors import StaleGeometryError
from ..utils.logger import logger
from .sector_grid import SectorGrid


@dataclass
class Particle:
    """Single dot in viewport coordinates."""
    x: float = 0.0
    y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    sx: int = 0      # containing sector column
    sy: int = 0      # containing sector row
    size: float = 1.0
    ix: float = 0.0  # burst impulse
    iy: float = 0.0


@dataclass
class Pointer:
    """Cursor / touch position that attracts particles."""
    x: float
    y: float
    active: bool = True


class ParticlePopulation:
    """
    A set of particles bound to one grid generation.

    Built in bulk by rebuild_particles() and replaced in bulk on resize;
    never resized in place.
    """

    def __init__(self, particles: List[Particle], config: DotConfig,
                 rng: Callable[[], float], generation: int):
        self.particles = particles
        self.config = config
        self.rng = rng
        self.generation = generation

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def __getitem__(self, index: int) -> Particle:
        return self.particles[index]

    def positions(self) -> np.ndarray:
        """(N, 2) array of positions."""
        return np.array([(p.x, p.y) for p in self.particles], dtype=np.float64).reshape(-1, 2)

    def velocities(self) -> np.ndarray:
        """(N, 2) array of velocities."""
        return np.array([(p.dx, p.dy) for p in self.particles], dtype=np.float64).reshape(-1, 2)

    def sizes(self) -> np.ndarray:
        return np.array([p.size for p in self.particles], dtype=np.float64)


def dot_count_for_viewport(width: float, height: float, config: DotConfig) -> int:
    """
    Number of dots for a viewport.

    With area_scaling (min_area, max_area, min_count, max_count) the count is
    interpolated linearly on viewport area and clamped; otherwise config.count.
    """
    if not config.area_scaling:
        return max(0, int(config.count))
    min_area, max_area, min_count, max_count = config.area_scaling
    if max_area <= min_area:
        raise ValueError("area_scaling max_area must exceed min_area")
    perc = (width * height - min_area) / (max_area - min_area)
    perc = max(0.0, min(1.0, perc))
    return int(math.floor(min_count + (max_count - min_count) * perc + 0.5))


def _spawn(p: Particle, grid: SectorGrid, config: DotConfig,
           rng: Callable[[], float], from_edge: bool = False,
           direction: float = 1.0) -> None:
    """Place a particle inside the viewport and give it a fresh velocity."""
    width = grid.width
    height = grid.height
    edge_x = 1.0 if direction >= 0 else max(width - 1.0, 0.0)
    # viewports narrower than one pixel have no edge column to enter from
    if from_edge and edge_x < grid.cols * grid.resolution:
        p.x = edge_x
    else:
        p.x = rng() * width
    p.y = rng() * height

    sx, sy = grid.cell_index(p.x, p.y)
    fx, fy = grid.force_at(sx, sy)
    bx, by = config.base_velocity
    jx, jy = config.jitter
    p.dx = fx + bx + (rng() - 0.5) * jx
    p.dy = fy + by + (rng() - 0.5) * jy
    p.sx, p.sy = sx, sy
    p.size = grid.value_at(sx, sy)
    p.ix = p.iy = 0.0


def rebuild_particles(count: int, grid: SectorGrid,
                      config: Optional[DotConfig] = None,
                      rng: Optional[Callable[[], float]] = None) -> ParticlePopulation:
    """Create `count` particles at uniformly random viewport positions."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    config = config or DotConfig()
    rng = rng or random.random

    particles = []
    for _ in range(count):
        p = Particle()
        _spawn(p, grid, config, rng)
        particles.append(p)

    logger.dots(f"Spawned {count} particles", details=f"gen {grid.generation}")
    return ParticlePopulation(particles, config, rng, grid.generation)


def tick_particles(particles: ParticlePopulation, grid: SectorGrid,
                   velocity_mult: float = 1.0,
                   pointer: Optional[Pointer] = None,
                   limit: Optional[int] = None) -> int:
    """
    Advance particles one frame against an already-ticked grid.

    Args:
        velocity_mult: global speed (and direction) multiplier
        pointer: optional attractor
        limit: tick only the first `limit` particles

    Returns:
        Number of particles re-initialised this frame

    Raises:
        StaleGeometryError: population was built for another grid generation
    """
    if particles.generation != grid.generation:
        raise StaleGeometryError(particles.generation, grid.generation)

    cfg = particles.config
    rng = particles.rng
    decay = cfg.decay
    gain = cfg.gain
    v_max = cfg.max_velocity
    res = grid.resolution
    cols, rows = grid.cols, grid.rows
    fx_arr, fy_arr, values = grid.fx, grid.fy, grid.values

    pull = pointer is not None and pointer.active
    burst_decay = cfg.burst_decay
    burst_floor = cfg.burst_floor

    count = len(particles.particles) if limit is None else max(0, min(limit, len(particles.particles)))
    reseeded = 0
    for idx in range(count):
        p = particles.particles[idx]
        sx = math.floor(p.x / res)
        sy = math.floor(p.y / res)
        if sx < 0 or sx >= cols or sy < 0 or sy >= rows:
            _spawn(p, grid, cfg, rng, cfg.reseed_from_edge, velocity_mult)
            reseeded += 1
            continue
        p.sx, p.sy = sx, sy

        ax = float(fx_arr[sx, sy]) * gain
        ay = float(fy_arr[sx, sy]) * gain
        if pull:
            to_x = pointer.x - p.x
            to_y = pointer.y - p.y
            dist = math.sqrt(to_x * to_x + to_y * to_y)
            if dist > 0:
                grav = min(max(cfg.gravity / (dist * dist), cfg.min_gravity), cfg.max_gravity)
                ax += to_x / dist * grav
                ay += to_y / dist * grav

        p.dx = min(max(p.dx * decay + ax, -v_max), v_max)
        p.dy = min(max(p.dy * decay + ay, -v_max), v_max)
        p.x += p.dx * velocity_mult + p.ix
        p.y += p.dy * velocity_mult + p.iy
        p.size = float(values[sx, sy])

        if p.ix or p.iy:
            ix = p.ix * burst_decay
            iy = p.iy * burst_decay
            p.ix = 0.0 if abs(ix) < burst_floor else ix
            p.iy = 0.0 if abs(iy) < burst_floor else iy

    if reseeded:
        logger.dots(f"Re-initialised {reseeded} out-of-grid particles")
    return reseeded


def burst(particles: ParticlePopulation, x: float, y: float,
          radius: float, strength: Optional[float] = None) -> int:
    """
    Push particles within `radius` of (x, y) outward.

    Impulse magnitude falls off linearly from `strength` at the centre to 0
    at the radius. Returns the number of particles hit.
    """
    if radius <= 0:
        return 0
    strength = particles.config.burst_strength if strength is None else strength
    hit = 0
    for p in particles.particles:
        dx = p.x - x
        dy = p.y - y
        if abs(dx) > radius or abs(dy) > radius:
            continue
        dist = math.sqrt(dx * dx + dy * dy)
        if dist > radius or dist == 0:
            continue
        mag = (1.0 - dist / radius) * strength
        p.ix = dx / dist * mag
        p.iy = dy / dist * mag
        hit += 1
    return hit
