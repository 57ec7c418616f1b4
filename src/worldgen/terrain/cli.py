"""Command-line interface for world generation."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog

from ..config import PresetLevel

_LEVELS = [level.value for level in PresetLevel]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a seeded sandbox world"
    )
    parser.add_argument(
        "--width", type=int, default=4200, help="World width (default: 4200)"
    )
    parser.add_argument(
        "--height", type=int, default=1200, help="World height (default: 1200)"
    )
    parser.add_argument(
        "--seed", type=int, default=12345, help="World seed (default: 12345)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="TOML file with generation knobs (overrides preset flags)",
    )
    for flag, label in (
        ("--terrain", "terrain amplitude"),
        ("--soil", "soil depth"),
        ("--caves", "cave density"),
        ("--ores", "ore density"),
        ("--trees", "tree density"),
    ):
        parser.add_argument(
            flag, choices=_LEVELS, default="normal", help=f"{label} preset"
        )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Path for a PNG preview of the world (optional)",
    )
    parser.add_argument(
        "--scale", type=int, default=1, help="Preview pixels per tile (default: 1)"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Run structural validation"
    )
    parser.add_argument(
        "--locate", action="store_true", help="Print the dragon den location"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for world generation."""
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from ..config import WorldGenConfig, load_config
    from ..exceptions import WorldGenError
    from ..state import World
    from .den import den_info
    from .generator import run_pipeline
    from .preview import save_preview
    from .stats import tile_counts
    from .validation import validate_world

    try:
        if args.config:
            config = load_config(Path(args.config))
        else:
            config = WorldGenConfig.from_presets(
                terrain=args.terrain,
                soil=args.soil,
                caves=args.caves,
                ores=args.ores,
                trees=args.trees,
            )
        world = World(width=args.width, height=args.height)
    except (WorldGenError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.locate:
        den = den_info(world, args.seed)
        if den.is_valid:
            print(
                f"Dragon den at ({den.center_x}, {den.center_y}), "
                f"radius {den.radius_x}x{den.radius_y}"
            )
        else:
            print("This world is too small for a dragon den")

    print(f"Generating {args.width}x{args.height} world with seed {args.seed}")
    start_time = time.time()
    ctx = run_pipeline(world, args.seed, config)
    gen_time = time.time() - start_time
    print(f"Generation complete in {gen_time:.1f}s")

    total = world.width * world.height
    for tile_type, count in tile_counts(world).items():
        print(f"  {tile_type.name.lower()}: {count:,} ({count / total * 100:.1f}%)")

    exit_code = 0
    if args.validate:
        result = validate_world(world, ctx.require_surface(), ctx.den)
        for warning in result.warnings:
            print(f"warning: {warning}")
        for error in result.errors:
            print(f"error: {error}")
        exit_code = 0 if result.passed else 1

    if args.preview:
        output_path = Path(args.preview)
        save_preview(world, output_path, ctx.surface, scale=args.scale)
        print(f"Preview saved to {output_path}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
