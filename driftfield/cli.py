"""
driftfield/cli.py
Command-line interface for driftfield

Usage:
    python -m driftfield sample --seed 42 0.1 0.2
    python -m driftfield run --preset drift --width 800 --height 600 --frames 120
    python -m driftfield presets
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .config import (
    DEFAULT_FRAMERATE,
    DEFAULT_HEIGHT,
    DEFAULT_PRESET,
    DEFAULT_WIDTH,
    get_preset,
    load_sketch_config,
    preset_names,
)
from .errors import ConfigError
from .utils.logger import LogLevel, logger, set_log_level


def _parse_seed(value: str):
    """Numeric seeds stay numeric so they hash like the sketches' seeds."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def cmd_sample(args: argparse.Namespace) -> int:
    """Print one noise sample (dimension from coordinate count)."""
    from .noise import create_noise

    coords = args.coords
    if not 2 <= len(coords) <= 4:
        print(f"ERROR: expected 2-4 coordinates, got {len(coords)}")
        return 1

    noise = create_noise(_parse_seed(args.seed) if args.seed is not None else None)
    if len(coords) == 2:
        value = noise.noise2d(*coords)
    elif len(coords) == 3:
        value = noise.noise3d(*coords)
    else:
        value = noise.noise4d(*coords)
    print(repr(value))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run a sketch headless and summarise."""
    import numpy as np
    from .field import SketchContext

    if args.verbose:
        set_log_level(LogLevel.DEBUG)
    if args.log_file:
        logger.enable_file_logging(args.log_file)

    try:
        if args.config:
            config = load_sketch_config(args.config, base=args.preset)
        else:
            config = get_preset(args.preset or DEFAULT_PRESET)
    except (ConfigError, KeyError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.seed is not None:
        config.seed = _parse_seed(args.seed)
    if args.dots is not None:
        config.dots.count = args.dots
        config.dots.area_scaling = None

    ctx = SketchContext(config, args.width, args.height)
    reseeded = 0
    completed = 0
    for _ in range(args.frames):
        if ctx.step():
            completed += 1
            reseeded += ctx.last_reseeded
    if ctx.particles is None:
        ctx.rebuild()

    velocities = ctx.particles.velocities()
    speed = float(np.mean(np.hypot(velocities[:, 0], velocities[:, 1]))) if len(velocities) else 0.0

    print(f"Sketch:      {config.name}")
    print(f"Seed:        {config.seed}")
    print(f"Viewport:    {ctx.width:g}x{ctx.height:g}")
    print(f"Grid:        {ctx.grid.cols}x{ctx.grid.rows} @ {ctx.grid.resolution:g}px")
    print(f"Dots:        {len(ctx.particles)}")
    print(f"Frames:      {completed}/{args.frames} ({completed / DEFAULT_FRAMERATE:.1f}s @ {DEFAULT_FRAMERATE}fps)")
    print(f"Re-inits:    {reseeded}")
    print(f"Mean speed:  {speed:.4f}")

    if args.dump:
        out = Path(args.dump)
        np.savez(
            out,
            positions=ctx.particles.positions(),
            velocities=velocities,
            sizes=ctx.particles.sizes(),
            fx=ctx.grid.fx,
            fy=ctx.grid.fy,
            values=ctx.grid.values,
        )
        print(f"Saved:       {out}")
    if args.log_file:
        logger.disable_file_logging()
    return 0


def cmd_presets(args: argparse.Namespace) -> int:
    """List built-in sketch presets."""
    for name in preset_names():
        cfg = get_preset(name)
        dots = (f"{int(cfg.dots.area_scaling[2])}-{int(cfg.dots.area_scaling[3])} dots"
                if cfg.dots.area_scaling else f"{cfg.dots.count} dots")
        print(f"  {name:16s} {dots}, strength {cfg.grid.strength:g}")
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="driftfield",
        description="Seeded simplex noise and particle flow fields",
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # sample command
    sample_parser = subparsers.add_parser("sample", help="Sample simplex noise")
    sample_parser.add_argument("--seed", "-s", type=str, help="Seed (string or number)")
    sample_parser.add_argument("coords", type=float, nargs="+", help="2-4 coordinates")
    sample_parser.set_defaults(func=cmd_sample)

    # run command
    run_parser = subparsers.add_parser("run", help="Run a sketch headless")
    run_parser.add_argument("--preset", "-p", type=str, choices=preset_names(), help="Sketch preset")
    run_parser.add_argument("--config", "-c", type=str, help="JSON sketch config")
    run_parser.add_argument("--width", type=float, default=DEFAULT_WIDTH, help="Viewport width")
    run_parser.add_argument("--height", type=float, default=DEFAULT_HEIGHT, help="Viewport height")
    run_parser.add_argument("--frames", "-f", type=int, default=DEFAULT_FRAMERATE * 10, help="Frames to run")
    run_parser.add_argument("--seed", "-s", type=str, help="Seed (string or number)")
    run_parser.add_argument("--dots", "-d", type=int, help="Override dot count")
    run_parser.add_argument("--dump", "-o", type=str, help="Save final state to .npz")
    run_parser.add_argument("--log-file", type=str, help="Also log to this file")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    run_parser.set_defaults(func=cmd_run)

    # presets command
    presets_parser = subparsers.add_parser("presets", help="List sketch presets")
    presets_parser.set_defaults(func=cmd_presets)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
