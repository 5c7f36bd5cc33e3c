"""
Noise primitives: seedable Alea PRNG, permutation tables and
2D/3D/4D simplex noise.
"""

from .alea import Alea, create_prng
from .permutation import build_permutation_table
from .simplex import SimplexNoise, create_noise, noise2d, noise3d, noise4d

__all__ = [
    'Alea',
    'create_prng',
    'build_permutation_table',
    'SimplexNoise',
    'create_noise',
    'noise2d',
    'noise3d',
    'noise4d',
]
