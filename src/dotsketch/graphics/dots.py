"""Dot and arc based shapes.

Every shape is drawn around the canvas's current origin, so callers
``translate`` to a position first. Each helper saves and restores canvas
state around its own drawing.
"""

import math
from typing import Optional

from dotsketch.core.random_source import RandomSource, default_source
from dotsketch.graphics.canvas import TAU, Canvas
from dotsketch.graphics.colors import Color

TRANSPARENT_WHITE = (255, 255, 255, 0)

# Dots drawn by draw_splash per unit of density
SPLASH_DOTS_PER_DENSITY = 200


def draw_single_dot(canvas: Canvas, radius: float, color: Color) -> None:
    """Draw a filled circle."""
    canvas.save()
    canvas.global_alpha = color.alpha
    canvas.fill_circle(radius, color.hex)
    canvas.restore()


def draw_arc(
    canvas: Canvas,
    radius: float,
    color: Color,
    line_width: float,
    start_angle: float,
    end_angle: float,
    is_clockwise: bool = False,
) -> None:
    """Draw a stroked arc.

    Args:
        canvas: Target canvas
        radius: Arc radius
        color: Stroke color
        line_width: Stroke width
        start_angle: Start angle in radians
        end_angle: End angle in radians
        is_clockwise: Passed to the canvas as its anticlockwise flag
    """
    canvas.save()
    canvas.global_alpha = color.alpha
    canvas.stroke_arc(radius, start_angle, end_angle, color.hex, line_width, anticlockwise=is_clockwise)
    canvas.restore()


def draw_outline(canvas: Canvas, radius: float, color: Color, line_width: float) -> None:
    """Draw a circle outline."""
    canvas.save()
    canvas.global_alpha = color.alpha
    canvas.stroke_arc(radius, 0.0, TAU, color.hex, line_width)
    canvas.restore()


def draw_circumpunct(
    canvas: Canvas,
    outer_radius: float,
    color: Color,
    inner_radius: float,
    line_width: float,
) -> None:
    """Draw a circle outline with a dot at its center."""
    draw_outline(canvas, outer_radius, color, line_width)
    draw_single_dot(canvas, inner_radius, color)


def draw_concentric_dots(
    canvas: Canvas,
    max_radius: float,
    color: Color,
    num_circles: int,
    line_width: float,
    ordered: bool,
    rng: Optional[RandomSource] = None,
) -> None:
    """Draw concentric circle outlines.

    Args:
        canvas: Target canvas
        max_radius: Radius of the outermost circle
        color: Stroke color
        num_circles: Number of circles
        line_width: Stroke width
        ordered: Evenly spaced radii if True, random radii otherwise
        rng: Random source for unordered radii
    """
    rng = rng or default_source()
    for i in range(1, num_circles + 1):
        if ordered:
            radius = (i / num_circles) * max_radius
        else:
            radius = rng.range(0.1, 1) * max_radius
        draw_outline(canvas, radius, color, line_width)


def draw_segmented_dots(
    canvas: Canvas,
    radius: float,
    color: Color,
    dot_radius: float,
    num_segments: int,
    line_width: float,
) -> None:
    """Draw dots evenly spaced around a circle.

    A positive line_width draws each dot as an outline, otherwise filled.
    """
    for i in range(num_segments):
        angle = (i / num_segments) * TAU
        x = math.cos(angle) * radius
        y = math.sin(angle) * radius

        canvas.save()
        canvas.translate(x, y)
        if line_width > 0:
            draw_outline(canvas, dot_radius, color, line_width)
        else:
            draw_single_dot(canvas, dot_radius, color)
        canvas.restore()


def draw_splash(
    canvas: Canvas,
    max_radius: float,
    color: Color,
    density: float,
    dot_size_factor: float,
    rng: Optional[RandomSource] = None,
) -> None:
    """Stipple a disc with randomly placed dots.

    Positions cluster toward the center; dot sizes follow a half-normal
    distribution scaled by the disc radius.

    Args:
        canvas: Target canvas
        max_radius: Radius of the stippled area
        color: Dot color
        density: Dot count multiplier (200 dots per unit)
        dot_size_factor: Dot size multiplier
        rng: Random source
    """
    rng = rng or default_source()
    num_dots = math.ceil(SPLASH_DOTS_PER_DENSITY * density)
    for _ in range(num_dots):
        angle = rng.range(0, TAU)
        radius = rng.range(0, max_radius) * math.sqrt(rng.range(0, 1))
        x = math.cos(angle) * radius
        y = math.sin(angle) * radius
        dot_radius = abs(rng.gaussian(0, max_radius * 0.05 * dot_size_factor))

        canvas.save()
        canvas.translate(x, y)
        draw_single_dot(canvas, dot_radius, color)
        canvas.restore()


def draw_radial_gradient(canvas: Canvas, radius: float, color: Color) -> None:
    """Fill a disc fading from color at the center to transparent."""
    canvas.save()
    canvas.fill_radial_gradient(radius, [(0.0, color.hex), (1.0, TRANSPARENT_WHITE)])
    canvas.restore()


def draw_radial_vignette(canvas: Canvas, radius: float, color: Color) -> None:
    """Fill a disc fading from transparent at the center to color at the rim."""
    canvas.save()
    canvas.fill_radial_gradient(radius, [(0.0, TRANSPARENT_WHITE), (1.0, color.hex)])
    canvas.restore()
