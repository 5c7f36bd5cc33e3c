"""
driftfield - Seeded simplex noise and particle flow fields for generative sketches

A deterministic noise core (Alea PRNG, permutation tables, 2D/3D/4D
simplex noise) and the sector-grid + particle simulation built on it.
Rendering is left to the host: call SketchContext.step() once per frame
and draw particle positions.

Usage:
    python -m driftfield sample --seed 42 0.1 0.2
    python -m driftfield run --preset bioluminescence --frames 300
    python -m driftfield presets
"""

__version__ = "0.1.0"

from .errors import DriftFieldError, SeedError, StaleGeometryError, ConfigError
from .noise import (
    Alea,
    SimplexNoise,
    build_permutation_table,
    create_noise,
    create_prng,
    noise2d,
    noise3d,
    noise4d,
)
from .field import (
    SectorGrid,
    ParticlePopulation,
    Particle,
    Pointer,
    SketchContext,
    rebuild_grid,
    tick_grid,
    rebuild_particles,
    tick_particles,
)
from .config import SketchConfig, get_preset, load_sketch_config

__all__ = [
    "__version__",
    # Errors
    "DriftFieldError",
    "SeedError",
    "StaleGeometryError",
    "ConfigError",
    # Noise
    "Alea",
    "SimplexNoise",
    "build_permutation_table",
    "create_noise",
    "create_prng",
    "noise2d",
    "noise3d",
    "noise4d",
    # Field
    "SectorGrid",
    "ParticlePopulation",
    "Particle",
    "Pointer",
    "SketchContext",
    "rebuild_grid",
    "tick_grid",
    "rebuild_particles",
    "tick_particles",
    # Config
    "SketchConfig",
    "get_preset",
    "load_sketch_config",
]
