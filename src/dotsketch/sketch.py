"""Example sketch: a grid of dot motifs over a vignette.

Shapes and colors draw from separate random sources, so a shape seed can be
replayed with a different color seed and vice versa.
"""

import logging
import math
from typing import Callable, List

from dotsketch.config.palette import load_palette
from dotsketch.config.settings import Settings
from dotsketch.core.random_source import RandomSource
from dotsketch.graphics.canvas import TAU, Canvas
from dotsketch.graphics.colors import Color, my_colors
from dotsketch.graphics.dots import (
    draw_arc,
    draw_circumpunct,
    draw_concentric_dots,
    draw_radial_gradient,
    draw_radial_vignette,
    draw_segmented_dots,
    draw_splash,
)
from dotsketch.graphics.footer import print_footer
from dotsketch.graphics.grain import add_grain

logger = logging.getLogger(__name__)

GRID = 4
INK_COUNT = 3
NO_GRAIN = "none"

Motif = Callable[[Canvas, float, Color, RandomSource], None]


def _concentric(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    ordered = rng.value() < 0.5
    draw_concentric_dots(canvas, r, color, int(rng.range(3, 9)), r * 0.03, ordered, rng=rng)


def _segmented(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    line_width = r * 0.02 if rng.value() < 0.5 else 0
    draw_segmented_dots(canvas, r * 0.8, color, r * 0.08, int(rng.range(8, 25)), line_width)


def _splash(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    draw_splash(canvas, r, color, rng.range(0.5, 2), rng.range(0.2, 0.6), rng=rng)


def _circumpunct(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    draw_circumpunct(canvas, r * 0.9, color, r * rng.range(0.1, 0.3), r * 0.05)


def _arc(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    start = rng.range(0, TAU)
    sweep = rng.range(TAU * 0.25, TAU * 0.9)
    draw_arc(canvas, r * 0.8, color, r * 0.15, start, start + sweep)


def _glow(canvas: Canvas, r: float, color: Color, rng: RandomSource) -> None:
    draw_radial_gradient(canvas, r, color)


MOTIFS: List[Motif] = [_concentric, _segmented, _splash, _circumpunct, _arc, _glow]


def render_sketch(settings: Settings, shape_seed: str, color_seed: str) -> Canvas:
    """Render the example sketch.

    Args:
        settings: Canvas size, palette, grain and footer options
        shape_seed: Seed for positions, sizes and motif choice
        color_seed: Seed for ink choice

    Returns:
        The finished canvas
    """
    width, height = settings.dimensions
    shape_rng = RandomSource(shape_seed)
    color_rng = RandomSource(color_seed)
    palette = load_palette(settings.palette)

    background = my_colors("white", 1.0, rng=color_rng, palette=palette)
    inks = [
        my_colors("", round(color_rng.range(0.6, 1.0), 2), rng=color_rng, palette=palette)
        for _ in range(INK_COUNT)
    ]
    logger.info(f"Inks: {', '.join(ink.name for ink in inks)}")

    canvas = Canvas(width, height, background=background.hex)

    cell_w = width / (GRID + 1)
    cell_h = height / (GRID + 1)
    radius = min(cell_w, cell_h) * 0.4
    for row in range(GRID):
        for col in range(GRID):
            motif = shape_rng.pick(MOTIFS)
            ink = color_rng.pick(inks)
            canvas.save()
            canvas.translate(cell_w * (col + 1), cell_h * (row + 1))
            motif(canvas, radius, ink, shape_rng)
            canvas.restore()

    canvas.save()
    canvas.translate(width / 2, height / 2)
    draw_radial_vignette(canvas, math.hypot(width, height) / 2, my_colors("black", palette=palette))
    canvas.restore()

    if settings.grain != NO_GRAIN:
        add_grain(canvas, (width, height), settings.grain, rng=shape_rng)

    if settings.footer:
        seeds = {"shape": shape_seed, "color": color_seed}
        print_footer(canvas, width, height, seeds, settings.dimensions, [background] + inks)

    return canvas
