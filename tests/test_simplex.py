"""
Tests for simplex noise.

Covers:
- Determinism across instances with the same seed
- Output range over wide coordinate sweeps
- Spatial continuity
- Lattice origin is zero in every dimension
- Seed / callable construction and the functional API
- Pinned values for seeded and hand-built tables
"""

import random

import pytest

from driftfield.errors import SeedError
from driftfield.noise import Alea, SimplexNoise, create_noise, noise2d, noise3d, noise4d


def _coords(n, dims, span=1000.0, seed=1234):
    r = random.Random(seed)
    return [tuple(r.uniform(-span, span) for _ in range(dims)) for _ in range(n)]


class TestDeterminism:
    """Same seed and coordinates → same value."""

    def test_2d_same_seed(self):
        a, b = SimplexNoise(42), SimplexNoise(42)
        for x, y in _coords(10000, 2):
            assert a.noise2d(x, y) == b.noise2d(x, y)

    def test_3d_same_seed(self):
        a, b = SimplexNoise("seed"), SimplexNoise("seed")
        for x, y, z in _coords(10000, 3):
            assert a.noise3d(x, y, z) == b.noise3d(x, y, z)

    def test_4d_same_seed(self):
        a, b = SimplexNoise(7), SimplexNoise(7)
        for x, y, z, w in _coords(10000, 4):
            assert a.noise4d(x, y, z, w) == b.noise4d(x, y, z, w)

    def test_create_noise_same_value(self):
        assert create_noise(42).noise2d(0.1, 0.2) == create_noise(42).noise2d(0.1, 0.2)

    def test_numeric_and_string_seed_match(self):
        assert SimplexNoise(42).perm == SimplexNoise("42").perm

    def test_different_seeds_differ(self):
        a, b = SimplexNoise(1), SimplexNoise(2)
        samples = _coords(50, 3, span=10.0)
        assert [a.noise3d(*c) for c in samples] != [b.noise3d(*c) for c in samples]

    def test_repeated_calls_pure(self, noise):
        first = noise.noise3d(1.5, -2.25, 0.125)
        for _ in range(10):
            noise.noise2d(3.0, 4.0)
            assert noise.noise3d(1.5, -2.25, 0.125) == first


class TestRange:
    """Outputs stay in [-1, 1]."""

    def test_2d_range(self, noise):
        for x, y in _coords(100000, 2):
            v = noise.noise2d(x, y)
            assert -1.0 <= v <= 1.0

    def test_3d_range(self, noise):
        for x, y, z in _coords(100000, 3):
            v = noise.noise3d(x, y, z)
            assert -1.0 <= v <= 1.0

    def test_4d_range(self, noise):
        for x, y, z, w in _coords(100000, 4):
            v = noise.noise4d(x, y, z, w)
            assert -1.0 <= v <= 1.0

    def test_not_constant(self, noise):
        values = {round(noise.noise3d(x, y, z), 6) for x, y, z in _coords(200, 3, span=50.0)}
        assert len(values) > 100

    def test_returns_float(self, noise):
        assert isinstance(noise.noise2d(0.3, 0.7), float)
        assert isinstance(noise.noise3d(0.3, 0.7, 0.1), float)
        assert isinstance(noise.noise4d(0.3, 0.7, 0.1, 0.9), float)


class TestContinuity:
    """Tiny steps give tiny changes."""

    STEP = 1e-4

    def test_2d_continuity(self, noise):
        for x, y in _coords(2000, 2, span=100.0):
            assert abs(noise.noise2d(x, y) - noise.noise2d(x + self.STEP, y)) < 0.01

    def test_3d_continuity(self, noise):
        for x, y, z in _coords(2000, 3, span=100.0):
            assert abs(noise.noise3d(x, y, z) - noise.noise3d(x, y + self.STEP, z)) < 0.01

    def test_4d_continuity(self, noise):
        for x, y, z, w in _coords(2000, 4, span=100.0):
            assert abs(noise.noise4d(x, y, z, w) - noise.noise4d(x, y, z, w + self.STEP)) < 0.01


class TestLatticeOrigin:
    """Every other simplex corner is outside the falloff radius at the origin."""

    @pytest.mark.parametrize("seed", [0, 42, "abc"])
    def test_origin_is_zero(self, seed):
        n = SimplexNoise(seed)
        assert n.noise2d(0.0, 0.0) == 0.0
        assert n.noise3d(0.0, 0.0, 0.0) == 0.0
        assert n.noise4d(0.0, 0.0, 0.0, 0.0) == 0.0


class TestConstruction:
    """Seed handling and tables."""

    def test_tables(self, noise):
        assert len(noise.p) == 256
        assert len(noise.perm) == 512
        assert noise.perm[:256] == noise.perm[256:]
        assert all(m == v % 12 for m, v in zip(noise.perm_mod12, noise.perm))

    def test_callable_used_directly(self):
        """A float generator is consumed as-is, not hashed as a seed."""
        assert SimplexNoise(Alea(42)).p == SimplexNoise(42).p

    def test_callable_has_no_seed(self):
        assert SimplexNoise(lambda: 0.0).seed is None

    def test_zero_generator_gives_identity(self):
        assert SimplexNoise(lambda: 0.0).p == tuple(range(256))

    def test_unseeded_is_valid(self):
        n = SimplexNoise()
        assert sorted(n.p) == list(range(256))
        assert -1.0 <= n.noise2d(3.3, 4.4) <= 1.0

    @pytest.mark.parametrize("bad", [True, [1], object()])
    def test_malformed_seed(self, bad):
        with pytest.raises(SeedError):
            SimplexNoise(bad)


class TestFunctionalApi:
    """create_noise() + noiseNd(handle, ...)."""

    def test_matches_methods(self):
        handle = create_noise("fn")
        assert noise2d(handle, 0.5, 1.5) == handle.noise2d(0.5, 1.5)
        assert noise3d(handle, 0.5, 1.5, 2.5) == handle.noise3d(0.5, 1.5, 2.5)
        assert noise4d(handle, 0.5, 1.5, 2.5, 3.5) == handle.noise4d(0.5, 1.5, 2.5, 3.5)

    def test_create_noise_returns_instance(self):
        assert isinstance(create_noise(1), SimplexNoise)


class TestKnownValues:
    """Pinned outputs, stable across processes and equal to the browser build."""

    def test_seed_42_noise2d(self):
        assert create_noise(42).noise2d(0.1, 0.2) == -0.8703769888188061

    def test_astral_seed_noise2d(self):
        assert create_noise("\U0001F600x").noise2d(0.1, 0.2) == pytest.approx(-0.8684, abs=1e-4)

    def test_identity_table_noise3d(self):
        """Only the origin corner and one gradient (-1, 1, 0) corner are in range."""
        n = SimplexNoise(lambda: 0.0)
        expected = 32.0 * (0.59 ** 4 * 0.1 + (1.0 / 150.0) ** 4 * 0.9)
        assert n.noise3d(0.1, 0.0, 0.0) == pytest.approx(expected, rel=1e-12)
        assert n.noise3d(0.1, 0.0, 0.0) == pytest.approx(0.38775560888888889, rel=1e-12)

    def test_identity_table_noise4d(self):
        """Only the origin corner (gradient 0, 1, 1, 1) is in range."""
        n = SimplexNoise(lambda: 0.0)
        assert n.noise4d(0.0, 0.1, 0.0, 0.0) == pytest.approx(27.0 * 0.59 ** 4 * 0.1, rel=1e-12)
