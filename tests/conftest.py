"""Pytest configuration - shared fixtures for noise and field tests."""
from __future__ import annotations

from pathlib import Path
import pytest

from driftfield.config import DotConfig, FieldConfig, MotionConfig, SketchConfig
from driftfield.noise import Alea, SimplexNoise

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture
def noise():
    """Seeded noise generator."""
    return SimplexNoise(42)


@pytest.fixture
def rng():
    """Seeded float generator for particle placement."""
    return Alea("fixture")


@pytest.fixture
def small_config():
    """Bioluminescence-style sketch small enough to step quickly."""
    return SketchConfig(
        name="small",
        seed=7,
        grid=FieldConfig(resolution=20.0),
        dots=DotConfig(count=200),
        motion=MotionConfig(),
    )
