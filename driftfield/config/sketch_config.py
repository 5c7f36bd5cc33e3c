"""
Sketch Config - Data model for drift field sketch settings

Each sketch is a field (grid sampling + force mapping), a particle
population and a motion layer (velocity multiplier / boost).
Handles serialization/deserialization for JSON config files.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union
import math


@dataclass
class FieldConfig:
    """
    Force-field grid settings.

    Per cell, n = noise3d(col * xy_scale, row * xy_scale, frame * t_scale),
    force = (sin(a), cos(a)) * strength with a = (n + 1) * angle_scale,
    value = (n + 1) * value_scale + value_offset.
    """

    resolution: float = 50.0
    # If > 0, resolution is fitted so the longer side spans this many cells
    max_sectors: int = 0
    xy_scale: float = 0.03
    t_scale: float = 0.002
    angle_scale: float = math.pi * 4
    strength: float = 0.1
    value_scale: float = 0.5
    value_offset: float = 0.2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resolution": self.resolution,
            "max_sectors": self.max_sectors,
            "xy_scale": self.xy_scale,
            "t_scale": self.t_scale,
            "angle_scale": self.angle_scale,
            "strength": self.strength,
            "value_scale": self.value_scale,
            "value_offset": self.value_offset,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["FieldConfig"] = None) -> "FieldConfig":
        b = base or cls()
        return cls(
            resolution=float(data.get("resolution", b.resolution)),
            max_sectors=int(data.get("max_sectors", b.max_sectors)),
            xy_scale=float(data.get("xy_scale", b.xy_scale)),
            t_scale=float(data.get("t_scale", b.t_scale)),
            angle_scale=float(data.get("angle_scale", b.angle_scale)),
            strength=float(data.get("strength", b.strength)),
            value_scale=float(data.get("value_scale", b.value_scale)),
            value_offset=float(data.get("value_offset", b.value_offset)),
        )


@dataclass
class DotConfig:
    """
    Particle population settings.

    Velocity each frame: v = clamp(v * decay + force * gain, -max_velocity, max_velocity).
    Spawn velocity: force + base_velocity + (rand - 0.5) * jitter.
    """

    count: int = 3500
    # (min_area, max_area, min_count, max_count); overrides count when set
    area_scaling: Optional[Tuple[float, float, float, float]] = None

    decay: float = 0.994
    gain: float = 0.095
    max_velocity: float = 1.0
    base_velocity: Tuple[float, float] = (0.0, 0.0)
    jitter: Tuple[float, float] = (1.0, 1.0)
    reseed_from_edge: bool = False

    # Pointer attraction: clamp(gravity / d^2, min_gravity, max_gravity)
    gravity: float = 7500.0
    min_gravity: float = 0.033
    max_gravity: float = 0.1

    # Click burst: radius is a fraction of viewport width
    burst_radius: float = 0.33
    burst_strength: float = 11.0
    burst_decay: float = 0.985
    burst_floor: float = 0.01

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "area_scaling": list(self.area_scaling) if self.area_scaling else None,
            "decay": self.decay,
            "gain": self.gain,
            "max_velocity": self.max_velocity,
            "base_velocity": list(self.base_velocity),
            "jitter": list(self.jitter),
            "reseed_from_edge": self.reseed_from_edge,
            "gravity": self.gravity,
            "min_gravity": self.min_gravity,
            "max_gravity": self.max_gravity,
            "burst_radius": self.burst_radius,
            "burst_strength": self.burst_strength,
            "burst_decay": self.burst_decay,
            "burst_floor": self.burst_floor,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["DotConfig"] = None) -> "DotConfig":
        b = base or cls()
        scaling = data.get("area_scaling", b.area_scaling)
        return cls(
            count=int(data.get("count", b.count)),
            area_scaling=tuple(float(v) for v in scaling) if scaling else None,
            decay=float(data.get("decay", b.decay)),
            gain=float(data.get("gain", b.gain)),
            max_velocity=float(data.get("max_velocity", b.max_velocity)),
            base_velocity=_pair(data.get("base_velocity", b.base_velocity)),
            jitter=_pair(data.get("jitter", b.jitter)),
            reseed_from_edge=bool(data.get("reseed_from_edge", b.reseed_from_edge)),
            gravity=float(data.get("gravity", b.gravity)),
            min_gravity=float(data.get("min_gravity", b.min_gravity)),
            max_gravity=float(data.get("max_gravity", b.max_gravity)),
            burst_radius=float(data.get("burst_radius", b.burst_radius)),
            burst_strength=float(data.get("burst_strength", b.burst_strength)),
            burst_decay=float(data.get("burst_decay", b.burst_decay)),
            burst_floor=float(data.get("burst_floor", b.burst_floor)),
        )


@dataclass
class MotionConfig:
    """Global velocity multiplier and click boost."""

    velocity_mod: float = 1.0
    min_velocity: float = 0.0
    boost_init: float = 5.0
    boost_min: float = 1.1
    boost_decay: float = 0.95
    # Fraction of the population ticked each frame
    active_fraction: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "velocity_mod": self.velocity_mod,
            "min_velocity": self.min_velocity,
            "boost_init": self.boost_init,
            "boost_min": self.boost_min,
            "boost_decay": self.boost_decay,
            "active_fraction": self.active_fraction,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["MotionConfig"] = None) -> "MotionConfig":
        b = base or cls()
        return cls(
            velocity_mod=float(data.get("velocity_mod", b.velocity_mod)),
            min_velocity=float(data.get("min_velocity", b.min_velocity)),
            boost_init=float(data.get("boost_init", b.boost_init)),
            boost_min=float(data.get("boost_min", b.boost_min)),
            boost_decay=float(data.get("boost_decay", b.boost_decay)),
            active_fraction=float(data.get("active_fraction", b.active_fraction)),
        )


@dataclass
class SketchConfig:
    """
    Complete sketch settings.

    Stored as JSON and restored on load. A seed of None means the noise
    field is different on every run.
    """

    name: str = "custom"
    seed: Optional[Union[int, str]] = None
    grid: FieldConfig = field(default_factory=FieldConfig)
    dots: DotConfig = field(default_factory=DotConfig)
    motion: MotionConfig = field(default_factory=MotionConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for saving."""
        return {
            "name": self.name,
            "seed": self.seed,
            "grid": self.grid.to_dict(),
            "dots": self.dots.to_dict(),
            "motion": self.motion.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["SketchConfig"] = None) -> "SketchConfig":
        """Deserialize, filling missing keys from base (or defaults)."""
        b = base or cls()
        return cls(
            name=str(data.get("name", b.name)),
            seed=data.get("seed", b.seed),
            grid=FieldConfig.from_dict(data.get("grid", {}), b.grid),
            dots=DotConfig.from_dict(data.get("dots", {}), b.dots),
            motion=MotionConfig.from_dict(data.get("motion", {}), b.motion),
        )


def _pair(value) -> Tuple[float, float]:
    x, y = value
    return float(x), float(y)
