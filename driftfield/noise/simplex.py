"""
Simplex Noise - 2D, 3D and 4D gradient noise

Stefan Gustavson's speed-improved simplex noise (with Peter Eastman's
optimisations and the 2012 rank-ordering method for 4D), as used by the
browser sketches. Operation order follows the reference so a given
permutation table yields the same doubles here as it does there.

Outputs lie in [-1, 1]. Each noiseNd call is a pure function of the
instance's tables and the input coordinates.

Ported from simplex-noise.js by Jonas Wagner, distributed under the
following licence:

Copyright (c) 2021 Jonas Wagner

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""

import math
from typing import Callable, Optional, Tuple, Union

from .alea import Seed, create_prng
from .permutation import build_permutation_table


# Skew / unskew factors
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0
F3 = 1.0 / 3.0
G3 = 1.0 / 6.0
F4 = (math.sqrt(5.0) - 1.0) / 4.0
G4 = (5.0 - math.sqrt(5.0)) / 20.0

# 12 cube-edge gradients, flattened xyz
GRAD3 = (
    1, 1, 0, -1, 1, 0, 1, -1, 0, -1, -1, 0,
    1, 0, 1, -1, 0, 1, 1, 0, -1, -1, 0, -1,
    0, 1, 1, 0, -1, 1, 0, 1, -1, 0, -1, -1,
)

# 32 tesseract-edge gradients, flattened xyzw
GRAD4 = (
    0, 1, 1, 1, 0, 1, 1, -1, 0, 1, -1, 1, 0, 1, -1, -1,
    0, -1, 1, 1, 0, -1, 1, -1, 0, -1, -1, 1, 0, -1, -1, -1,
    1, 0, 1, 1, 1, 0, 1, -1, 1, 0, -1, 1, 1, 0, -1, -1,
    -1, 0, 1, 1, -1, 0, 1, -1, -1, 0, -1, 1, -1, 0, -1, -1,
    1, 1, 0, 1, 1, 1, 0, -1, 1, -1, 0, 1, 1, -1, 0, -1,
    -1, 1, 0, 1, -1, 1, 0, -1, -1, -1, 0, 1, -1, -1, 0, -1,
    1, 1, 1, 0, 1, 1, -1, 0, 1, -1, 1, 0, 1, -1, -1, 0,
    -1, 1, 1, 0, -1, 1, -1, 0, -1, -1, 1, 0, -1, -1, -1, 0,
)

# Output scaling per dimension
SCALE_2D = 70.0
SCALE_3D = 32.0
SCALE_4D = 27.0


class SimplexNoise:
    """
    Seeded simplex noise generator.

    Args:
        seed_or_random: a float-in-[0, 1) callable used directly, a string
            or number seed for an Alea stream, or None for ambient
            randomness.

    Example:
        noise = SimplexNoise(42)
        noise.noise3d(0.1, 0.2, 0.3)
    """

    def __init__(self, seed_or_random: Optional[Union[Seed, Callable[[], float]]] = None):
        if callable(seed_or_random):
            random_fn = seed_or_random
            self.seed = None
        else:
            random_fn = create_prng(seed_or_random)
            self.seed = seed_or_random

        self.p: Tuple[int, ...] = build_permutation_table(random_fn)
        self.perm: Tuple[int, ...] = tuple(self.p[i & 255] for i in range(512))
        self.perm_mod12: Tuple[int, ...] = tuple(v % 12 for v in self.perm)

    def noise2d(self, x: float, y: float) -> float:
        """Sample 2D simplex noise in [-1, 1]."""
        perm_mod12 = self.perm_mod12
        perm = self.perm
        n0 = n1 = n2 = 0.0

        # Skew to find the containing simplex cell
        s = (x + y) * F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        # Lower or upper triangle
        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        ii = i & 255
        jj = j & 255

        t0 = 0.5 - x0 * x0 - y0 * y0
        if t0 >= 0:
            gi0 = perm_mod12[ii + perm[jj]] * 3
            t0 *= t0
            n0 = t0 * t0 * (GRAD3[gi0] * x0 + GRAD3[gi0 + 1] * y0)

        t1 = 0.5 - x1 * x1 - y1 * y1
        if t1 >= 0:
            gi1 = perm_mod12[ii + i1 + perm[jj + j1]] * 3
            t1 *= t1
            n1 = t1 * t1 * (GRAD3[gi1] * x1 + GRAD3[gi1 + 1] * y1)

        t2 = 0.5 - x2 * x2 - y2 * y2
        if t2 >= 0:
            gi2 = perm_mod12[ii + 1 + perm[jj + 1]] * 3
            t2 *= t2
            n2 = t2 * t2 * (GRAD3[gi2] * x2 + GRAD3[gi2 + 1] * y2)

        return SCALE_2D * (n0 + n1 + n2)

    def noise3d(self, x: float, y: float, z: float) -> float:
        """Sample 3D simplex noise in [-1, 1]."""
        perm_mod12 = self.perm_mod12
        perm = self.perm
        n0 = n1 = n2 = n3 = 0.0

        s = (x + y + z) * F3
        i = math.floor(x + s)
        j = math.floor(y + s)
        k = math.floor(z + s)
        t = (i + j + k) * G3
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)

        # Pick the tetrahedron from the ordering of x0, y0, z0
        if x0 >= y0:
            if y0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
            elif x0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
        else:
            if y0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
            elif x0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

        x1 = x0 - i1 + G3
        y1 = y0 - j1 + G3
        z1 = z0 - k1 + G3
        x2 = x0 - i2 + 2.0 * G3
        y2 = y0 - j2 + 2.0 * G3
        z2 = z0 - k2 + 2.0 * G3
        x3 = x0 - 1.0 + 3.0 * G3
        y3 = y0 - 1.0 + 3.0 * G3
        z3 = z0 - 1.0 + 3.0 * G3

        ii = i & 255
        jj = j & 255
        kk = k & 255

        t0 = 0.6 - x0 * x0 - y0 * y0 - z0 * z0
        if t0 >= 0:
            gi0 = perm_mod12[ii + perm[jj + perm[kk]]] * 3
            t0 *= t0
            n0 = t0 * t0 * (GRAD3[gi0] * x0 + GRAD3[gi0 + 1] * y0 + GRAD3[gi0 + 2] * z0)

        t1 = 0.6 - x1 * x1 - y1 * y1 - z1 * z1
        if t1 >= 0:
            gi1 = perm_mod12[ii + i1 + perm[jj + j1 + perm[kk + k1]]] * 3
            t1 *= t1
            n1 = t1 * t1 * (GRAD3[gi1] * x1 + GRAD3[gi1 + 1] * y1 + GRAD3[gi1 + 2] * z1)

        t2 = 0.6 - x2 * x2 - y2 * y2 - z2 * z2
        if t2 >= 0:
            gi2 = perm_mod12[ii + i2 + perm[jj + j2 + perm[kk + k2]]] * 3
            t2 *= t2
            n2 = t2 * t2 * (GRAD3[gi2] * x2 + GRAD3[gi2 + 1] * y2 + GRAD3[gi2 + 2] * z2)

        t3 = 0.6 - x3 * x3 - y3 * y3 - z3 * z3
        if t3 >= 0:
            gi3 = perm_mod12[ii + 1 + perm[jj + 1 + perm[kk + 1]]] * 3
            t3 *= t3
            n3 = t3 * t3 * (GRAD3[gi3] * x3 + GRAD3[gi3 + 1] * y3 + GRAD3[gi3 + 2] * z3)

        return SCALE_3D * (n0 + n1 + n2 + n3)

    def noise4d(self, x: float, y: float, z: float, w: float) -> float:
        """Sample 4D simplex noise in [-1, 1]."""
        perm = self.perm
        n0 = n1 = n2 = n3 = n4 = 0.0

        s = (x + y + z + w) * F4
        i = math.floor(x + s)
        j = math.floor(y + s)
        k = math.floor(z + s)
        l = math.floor(w + s)
        t = (i + j + k + l) * G4
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)
        w0 = w - (l - t)

        # Rank each axis by how many others it exceeds
        rankx = ranky = rankz = rankw = 0
        if x0 > y0:
            rankx += 1
        else:
            ranky += 1
        if x0 > z0:
            rankx += 1
        else:
            rankz += 1
        if x0 > w0:
            rankx += 1
        else:
            rankw += 1
        if y0 > z0:
            ranky += 1
        else:
            rankz += 1
        if y0 > w0:
            ranky += 1
        else:
            rankw += 1
        if z0 > w0:
            rankz += 1
        else:
            rankw += 1

        i1 = 1 if rankx >= 3 else 0
        j1 = 1 if ranky >= 3 else 0
        k1 = 1 if rankz >= 3 else 0
        l1 = 1 if rankw >= 3 else 0
        i2 = 1 if rankx >= 2 else 0
        j2 = 1 if ranky >= 2 else 0
        k2 = 1 if rankz >= 2 else 0
        l2 = 1 if rankw >= 2 else 0
        i3 = 1 if rankx >= 1 else 0
        j3 = 1 if ranky >= 1 else 0
        k3 = 1 if rankz >= 1 else 0
        l3 = 1 if rankw >= 1 else 0

        x1 = x0 - i1 + G4
        y1 = y0 - j1 + G4
        z1 = z0 - k1 + G4
        w1 = w0 - l1 + G4
        x2 = x0 - i2 + 2.0 * G4
        y2 = y0 - j2 + 2.0 * G4
        z2 = z0 - k2 + 2.0 * G4
        w2 = w0 - l2 + 2.0 * G4
        x3 = x0 - i3 + 3.0 * G4
        y3 = y0 - j3 + 3.0 * G4
        z3 = z0 - k3 + 3.0 * G4
        w3 = w0 - l3 + 3.0 * G4
        x4 = x0 - 1.0 + 4.0 * G4
        y4 = y0 - 1.0 + 4.0 * G4
        z4 = z0 - 1.0 + 4.0 * G4
        w4 = w0 - 1.0 + 4.0 * G4

        ii = i & 255
        jj = j & 255
        kk = k & 255
        ll = l & 255

        t0 = 0.6 - x0 * x0 - y0 * y0 - z0 * z0 - w0 * w0
        if t0 >= 0:
            gi0 = (perm[ii + perm[jj + perm[kk + perm[ll]]]] % 32) * 4
            t0 *= t0
            n0 = t0 * t0 * (GRAD4[gi0] * x0 + GRAD4[gi0 + 1] * y0
                            + GRAD4[gi0 + 2] * z0 + GRAD4[gi0 + 3] * w0)

        t1 = 0.6 - x1 * x1 - y1 * y1 - z1 * z1 - w1 * w1
        if t1 >= 0:
            gi1 = (perm[ii + i1 + perm[jj + j1 + perm[kk + k1 + perm[ll + l1]]]] % 32) * 4
            t1 *= t1
            n1 = t1 * t1 * (GRAD4[gi1] * x1 + GRAD4[gi1 + 1] * y1
                            + GRAD4[gi1 + 2] * z1 + GRAD4[gi1 + 3] * w1)

        t2 = 0.6 - x2 * x2 - y2 * y2 - z2 * z2 - w2 * w2
        if t2 >= 0:
            gi2 = (perm[ii + i2 + perm[jj + j2 + perm[kk + k2 + perm[ll + l2]]]] % 32) * 4
            t2 *= t2
            n2 = t2 * t2 * (GRAD4[gi2] * x2 + GRAD4[gi2 + 1] * y2
                            + GRAD4[gi2 + 2] * z2 + GRAD4[gi2 + 3] * w2)

        t3 = 0.6 - x3 * x3 - y3 * y3 - z3 * z3 - w3 * w3
        if t3 >= 0:
            gi3 = (perm[ii + i3 + perm[jj + j3 + perm[kk + k3 + perm[ll + l3]]]] % 32) * 4
            t3 *= t3
            n3 = t3 * t3 * (GRAD4[gi3] * x3 + GRAD4[gi3 + 1] * y3
                            + GRAD4[gi3 + 2] * z3 + GRAD4[gi3 + 3] * w3)

        t4 = 0.6 - x4 * x4 - y4 * y4 - z4 * z4 - w4 * w4
        if t4 >= 0:
            gi4 = (perm[ii + 1 + perm[jj + 1 + perm[kk + 1 + perm[ll + 1]]]] % 32) * 4
            t4 *= t4
            n4 = t4 * t4 * (GRAD4[gi4] * x4 + GRAD4[gi4 + 1] * y4
                            + GRAD4[gi4 + 2] * z4 + GRAD4[gi4 + 3] * w4)

        return SCALE_4D * (n0 + n1 + n2 + n3 + n4)


# =============================================================================
# Functional API (handle-based, for per-frame collaborators)
# =============================================================================

def create_noise(seed: Optional[Union[Seed, Callable[[], float]]] = None) -> SimplexNoise:
    """Create a noise generator handle."""
    return SimplexNoise(seed)


def noise2d(handle: SimplexNoise, x: float, y: float) -> float:
    return handle.noise2d(x, y)


def noise3d(handle: SimplexNoise, x: float, y: float, z: float) -> float:
    return handle.noise3d(x, y, z)


def noise4d(handle: SimplexNoise, x: float, y: float, z: float, w: float) -> float:
    return handle.noise4d(x, y, z, w)
