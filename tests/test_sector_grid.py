"""
Tests for the sector grid force field.

Covers:
- Grid dimensions from viewport and resolution
- Invalid geometry rejected
- Force magnitude and value range after a tick
- Overflow / render offset
- Auto resolution from max sector count
- Cell lookup
"""

import math

import numpy as np
import pytest

from driftfield.config import FieldConfig
from driftfield.field import fit_resolution, rebuild_grid, tick_grid
from driftfield.noise import SimplexNoise


class TestRebuildGrid:
    """rebuild_grid() geometry."""

    def test_dimensions(self, noise):
        grid = rebuild_grid(1000, 500, 50, noise=noise)
        assert (grid.cols, grid.rows) == (21, 11)
        assert grid.shape == (21, 11)
        assert grid.fx.shape == grid.fy.shape == grid.values.shape == (21, 11)

    def test_partial_sector(self, noise):
        grid = rebuild_grid(1010, 505, 50, noise=noise)
        assert (grid.cols, grid.rows) == (21, 11)

    def test_empty_viewport(self, noise):
        grid = rebuild_grid(0, 0, 50, noise=noise)
        assert (grid.cols, grid.rows) == (1, 1)

    @pytest.mark.parametrize("res", [0, -10])
    def test_bad_resolution(self, noise, res):
        with pytest.raises(ValueError):
            rebuild_grid(100, 100, res, noise=noise)

    def test_negative_viewport(self, noise):
        with pytest.raises(ValueError):
            rebuild_grid(-1, 100, 10, noise=noise)

    def test_forces_zero_until_tick(self, noise):
        grid = rebuild_grid(100, 100, 10, noise=noise)
        assert not grid.fx.any()
        assert not grid.fy.any()

    def test_generation_recorded(self, noise):
        assert rebuild_grid(100, 100, 10, noise=noise, generation=3).generation == 3

    def test_default_noise_and_config(self):
        grid = rebuild_grid(100, 100, 10)
        assert isinstance(grid.noise, SimplexNoise)
        assert grid.config == FieldConfig()


class TestTickGrid:
    """tick_grid() sampling."""

    def test_force_magnitude_is_strength(self, noise):
        cfg = FieldConfig(strength=0.25)
        grid = rebuild_grid(400, 300, 25, noise=noise, config=cfg)
        tick_grid(grid, 5)
        mags = np.hypot(grid.fx, grid.fy)
        assert np.allclose(mags, 0.25)

    def test_zero_strength_gives_zero_force(self, noise):
        grid = rebuild_grid(200, 200, 20, noise=noise, config=FieldConfig(strength=0.0))
        tick_grid(grid, 1)
        assert not grid.fx.any()
        assert not grid.fy.any()

    def test_value_range(self, noise):
        cfg = FieldConfig()
        grid = rebuild_grid(800, 600, 20, noise=noise, config=cfg)
        tick_grid(grid, 12)
        lo = cfg.value_offset
        hi = 2.0 * cfg.value_scale + cfg.value_offset
        assert grid.values.min() >= lo
        assert grid.values.max() <= hi

    def test_matches_noise_formula(self, noise):
        cfg = FieldConfig()
        grid = rebuild_grid(200, 100, 50, noise=noise, config=cfg)
        tick_grid(grid, 7)
        n = noise.noise3d(2 * cfg.xy_scale, 1 * cfg.xy_scale, 7 * cfg.t_scale) + 1.0
        assert grid.values[2, 1] == pytest.approx(n * cfg.value_scale + cfg.value_offset)
        assert grid.fx[2, 1] == pytest.approx(math.sin(n * cfg.angle_scale) * cfg.strength)
        assert grid.fy[2, 1] == pytest.approx(math.cos(n * cfg.angle_scale) * cfg.strength)

    def test_adjacent_sectors_smooth(self, noise):
        grid = rebuild_grid(1000, 1000, 20, noise=noise)
        tick_grid(grid, 3)
        assert np.abs(np.diff(grid.values, axis=0)).max() < 0.2
        assert np.abs(np.diff(grid.values, axis=1)).max() < 0.2

    def test_same_seed_same_field(self):
        a = rebuild_grid(300, 200, 10, noise=SimplexNoise(5))
        b = rebuild_grid(300, 200, 10, noise=SimplexNoise(5))
        tick_grid(a, 9)
        tick_grid(b, 9)
        assert np.array_equal(a.fx, b.fx)
        assert np.array_equal(a.values, b.values)

    def test_time_changes_field(self, noise):
        grid = rebuild_grid(300, 200, 10, noise=noise)
        tick_grid(grid, 0)
        before = grid.values.copy()
        tick_grid(grid, 500)
        assert grid.time_index == 500
        assert not np.array_equal(before, grid.values)


class TestGeometryHelpers:
    """Overflow, fit_resolution, cell lookup."""

    def test_overflow_exact_fit(self, noise):
        grid = rebuild_grid(1000, 500, 50, noise=noise)
        assert grid.overflow == (50, 50)
        assert grid.render_offset == (-25, -25)

    def test_overflow_partial(self, noise):
        grid = rebuild_grid(1010, 505, 50, noise=noise)
        assert grid.overflow == (40, 45)
        assert grid.render_offset == (-20, -22.5)

    def test_fit_resolution(self):
        assert fit_resolution(1280, 720, 50) == 26.0
        assert fit_resolution(720, 1280, 50) == 26.0

    def test_fit_resolution_half_rounds_up(self):
        assert fit_resolution(125, 100, 50) == 3.0

    def test_fit_resolution_minimum_one(self):
        assert fit_resolution(10, 10, 50) == 1.0

    def test_fit_resolution_bad_count(self):
        with pytest.raises(ValueError):
            fit_resolution(100, 100, 0)

    def test_cell_index_floors(self, noise):
        grid = rebuild_grid(100, 100, 10, noise=noise)
        assert grid.cell_index(15.0, 99.9) == (1, 9)
        assert grid.cell_index(-0.5, 0.0) == (-1, 0)

    def test_contains(self, noise):
        grid = rebuild_grid(100, 100, 10, noise=noise)
        assert grid.contains(0, 0)
        assert grid.contains(10, 10)
        assert not grid.contains(11, 0)
        assert not grid.contains(0, -1)

    def test_force_and_value_lookup(self, noise):
        grid = rebuild_grid(100, 100, 10, noise=noise)
        grid.fx[3, 4] = 0.5
        grid.fy[3, 4] = -0.5
        grid.values[3, 4] = 0.7
        assert grid.force_at(3, 4) == (0.5, -0.5)
        assert grid.value_at(3, 4) == 0.7
