"""
Drift Field Simulation

Noise-driven sector grid plus the particle population it steers,
owned together by a SketchContext.
"""

from .sector_grid import SectorGrid, fit_resolution, rebuild_grid, tick_grid
from .particles import (
    Particle,
    ParticlePopulation,
    Pointer,
    burst,
    dot_count_for_viewport,
    rebuild_particles,
    tick_particles,
)
from .sketch import SketchContext

__all__ = [
    'SectorGrid',
    'fit_resolution',
    'rebuild_grid',
    'tick_grid',
    'Particle',
    'ParticlePopulation',
    'Pointer',
    'burst',
    'dot_count_for_viewport',
    'rebuild_particles',
    'tick_particles',
    'SketchContext',
]
