"""
Central Configuration
All constants, presets and config loading in one place
"""

import copy
import json
import math
import os
from typing import Dict, List, Optional

from ..errors import ConfigError
from .sketch_config import DotConfig, FieldConfig, MotionConfig, SketchConfig

# === FRAME TIMING ===
DEFAULT_FRAMERATE = 30

# === VIEWPORT ===
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720

# === SKETCH PRESETS ===
# Constants lifted from the browser sketches. Order is display order.
SKETCH_PRESETS: Dict[str, SketchConfig] = {
    # Flow field of glowing points: dots ease toward each cell's force vector
    'bioluminescence': SketchConfig(
        name='bioluminescence',
        grid=FieldConfig(
            resolution=50.0,
            xy_scale=0.03,
            t_scale=0.002,
            angle_scale=math.pi * 4,
            strength=0.1,
        ),
        dots=DotConfig(
            count=3500,
            decay=0.994,
            gain=0.095,
            max_velocity=1.0,
            base_velocity=(0.0, 0.0),
            jitter=(1.0, 1.0),
        ),
        motion=MotionConfig(velocity_mod=1.0),
    ),
    # Left-to-right drift: cells only pulse dot size, dots respawn at the edge
    'drift': SketchConfig(
        name='drift',
        grid=FieldConfig(
            max_sectors=50,
            xy_scale=0.035,
            t_scale=0.006,
            strength=0.0,
            value_scale=0.5,
            value_offset=0.2,
        ),
        dots=DotConfig(
            area_scaling=(250125.0, 8294400.0, 22000.0, 120000.0),
            decay=1.0,
            gain=0.0,
            max_velocity=1.0,
            base_velocity=(0.75, 0.0),
            jitter=(0.5, 0.5),
            reseed_from_edge=True,
        ),
        motion=MotionConfig(
            velocity_mod=0.5,
            min_velocity=0.1,
            boost_init=5.0,
            boost_min=1.1,
            boost_decay=0.95,
            active_fraction=0.7,
        ),
    ),
}

DEFAULT_PRESET = 'bioluminescence'


def preset_names() -> List[str]:
    """Get list of available preset names."""
    return list(SKETCH_PRESETS.keys())


def get_preset(name: str) -> SketchConfig:
    """
    Get a copy of a named preset.

    Raises:
        KeyError: unknown preset name
    """
    if name not in SKETCH_PRESETS:
        raise KeyError(f"Unknown preset '{name}' (available: {', '.join(preset_names())})")
    return copy.deepcopy(SKETCH_PRESETS[name])


def load_sketch_config(path: str, base: Optional[str] = None) -> SketchConfig:
    """
    Load a sketch config from a JSON file.

    Keys in the file override the preset named by `base` (or by the file's
    own "preset" key, falling back to the default preset).

    Raises:
        ConfigError: file missing or not valid JSON
    """
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        raise ConfigError(f"Failed to load sketch config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Sketch config {path} must be a JSON object")

    base_name = base or data.get("preset", DEFAULT_PRESET)
    try:
        base_config = get_preset(base_name)
    except KeyError as e:
        raise ConfigError(str(e)) from e
    return SketchConfig.from_dict(data, base_config)


def save_sketch_config(config: SketchConfig, path: str) -> None:
    """Write a sketch config as JSON."""
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)


__all__ = [
    'DEFAULT_FRAMERATE',
    'DEFAULT_WIDTH',
    'DEFAULT_HEIGHT',
    'SKETCH_PRESETS',
    'DEFAULT_PRESET',
    'FieldConfig',
    'DotConfig',
    'MotionConfig',
    'SketchConfig',
    'preset_names',
    'get_preset',
    'load_sketch_config',
    'save_sketch_config',
]
