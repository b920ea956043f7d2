"""Footer with sketch metadata: dimensions, seeds and colors used."""

from typing import Mapping, Optional, Sequence

from dotsketch.graphics.canvas import SOURCE_OVER, Canvas
from dotsketch.graphics.colors import Color

BOX_FILL = (255, 255, 255, round(0.85 * 255))
TEXT_FILL = (0, 0, 0, round(0.8 * 255))

# Fractions of the canvas size
FONT_SCALE = 0.015
BOX_WIDTH_SCALE = 0.4


def format_color_line(color: Color) -> str:
    """Format the footer text for one color: name, hex and alpha."""
    return f"{color.name} ({color.hex}, α={color.alpha})"


def print_footer(
    canvas: Canvas,
    width: int,
    height: int,
    seeds: Optional[Mapping[str, str]],
    dimensions: Sequence[int],
    color_list: Sequence[Color],
) -> None:
    """Draw a stack of info boxes in the bottom-left corner.

    Lines stack upward from the bottom edge: dimensions first, then the
    color and shape seeds when present, then one line per color (last color
    lowest) with a swatch.

    Args:
        canvas: Target canvas
        width: Canvas width
        height: Canvas height
        seeds: Mapping with optional "shape" and "color" seeds
        dimensions: (width, height) to print
        color_list: Colors to list
    """
    canvas.save()
    canvas.composite = SOURCE_OVER

    font_size = min(width, height) * FONT_SCALE
    box_height = font_size * 1.5
    padding = font_size * 0.5
    box_width = width * BOX_WIDTH_SCALE

    def draw_line(text: str, color: Optional[Color] = None) -> None:
        canvas.translate(0, -box_height - padding / 2)
        canvas.fill_rect(0, 0, box_width, box_height, BOX_FILL)

        if color is not None:
            canvas.fill_rect(padding, padding / 2, font_size, font_size, color.hex)

        text_x = padding * 2 + font_size if color is not None else padding
        canvas.fill_text(text, text_x, padding + font_size * 0.8, font_size, TEXT_FILL)

    canvas.translate(padding, height - padding)

    draw_line(f"{dimensions[0]}x{dimensions[1]}px")

    seeds = seeds or {}
    if seeds.get("color"):
        draw_line(f"Color Seed: {seeds['color']}")
    if seeds.get("shape"):
        draw_line(f"Shape Seed: {seeds['shape']}")

    for color in reversed(color_list):
        draw_line(format_color_line(color), color)

    canvas.restore()
