"""
Command line entry point for dotsketch.

Renders the example sketch to a PNG file. Options override the
DOTSKETCH_* environment settings.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotsketch.config.palette import list_palettes
from dotsketch.config.settings import Settings, get_settings
from dotsketch.core.random_source import initiate_seed
from dotsketch.graphics.grain import GrainMode
from dotsketch.sketch import NO_GRAIN, render_sketch

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotsketch",
        description="Render a generative dot sketch to PNG",
    )
    parser.add_argument("--size", nargs=2, type=int, metavar=("W", "H"), help="Canvas size in pixels")
    parser.add_argument("--seed", help="Shape seed (random if omitted)")
    parser.add_argument("--color-seed", help="Color seed (random if omitted)")
    parser.add_argument(
        "--grain",
        choices=[mode.value for mode in GrainMode] + [NO_GRAIN],
        help="Grain effect",
    )
    parser.add_argument("--palette", help="Palette name")
    parser.add_argument("--no-footer", action="store_true", help="Skip the info footer")
    parser.add_argument("--out", type=Path, help="Output PNG path")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Merge command line options into a copy of the settings."""
    updates = {}
    if args.size:
        updates["width"], updates["height"] = args.size
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.color_seed is not None:
        updates["color_seed"] = args.color_seed
    if args.grain is not None:
        updates["grain"] = args.grain
    if args.palette is not None:
        updates["palette"] = args.palette
    if args.no_footer:
        updates["footer"] = False
    if args.debug:
        updates["debug"] = True
    return settings.model_copy(update=updates)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = apply_overrides(get_settings(), args)
    setup_logging(settings.debug)

    if settings.width <= 0 or settings.height <= 0:
        logger.error(f"Canvas size must be positive, got {settings.width}x{settings.height}")
        return 2

    if settings.palette not in list_palettes():
        logger.error(f"Unknown palette {settings.palette!r}, available: {', '.join(list_palettes())}")
        return 2

    shape_seed = initiate_seed(settings.seed)
    color_seed = initiate_seed(settings.color_seed)
    logger.info(f"Shape seed: {shape_seed}, color seed: {color_seed}")

    canvas = render_sketch(settings, shape_seed, color_seed)

    out = args.out or settings.output_dir / f"dots_{shape_seed}_{color_seed}.png"
    canvas.save_png(out)
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
