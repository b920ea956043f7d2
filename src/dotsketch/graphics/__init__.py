"""Drawing helpers for dotsketch."""

from dotsketch.graphics.canvas import Canvas, load_font, to_rgba
from dotsketch.graphics.colors import Color, my_colors
from dotsketch.graphics.dots import (
    draw_arc,
    draw_circumpunct,
    draw_concentric_dots,
    draw_outline,
    draw_radial_gradient,
    draw_radial_vignette,
    draw_segmented_dots,
    draw_single_dot,
    draw_splash,
)
from dotsketch.graphics.footer import print_footer
from dotsketch.graphics.grain import (
    GrainMode,
    add_grain,
    add_grain_stipple,
    synthesize_grain,
)

__all__ = [
    # Surface
    "Canvas",
    "load_font",
    "to_rgba",
    # Colors
    "Color",
    "my_colors",
    # Shapes
    "draw_single_dot",
    "draw_arc",
    "draw_outline",
    "draw_circumpunct",
    "draw_concentric_dots",
    "draw_segmented_dots",
    "draw_splash",
    "draw_radial_gradient",
    "draw_radial_vignette",
    # Effects
    "GrainMode",
    "synthesize_grain",
    "add_grain",
    "add_grain_stipple",
    # Footer
    "print_footer",
]
