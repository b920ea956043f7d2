"""Color selection for sketches."""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from PIL import ImageColor

from dotsketch.config.palette import Palette, load_palette
from dotsketch.core.random_source import RandomSource, default_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Color:
    """A named color with hex value and opacity."""

    name: str
    hex: str
    alpha: float = 1.0

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """Convert hex color to RGB tuple."""
        return ImageColor.getrgb(self.hex)[:3]

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        """RGB plus alpha scaled to 0-255."""
        return self.rgb + (int(round(self.alpha * 255)),)

    def with_alpha(self, alpha: float) -> "Color":
        return replace(self, alpha=alpha)


def _random_entry(palette: Palette, rng: RandomSource) -> Color:
    entry = rng.pick(palette.entries)
    return Color(name=entry.name, hex=entry.hex)


def my_colors(
    color_name: str = "",
    alpha: float = 1.0,
    rng: Optional[RandomSource] = None,
    palette: Optional[Palette] = None,
) -> Color:
    """Pick a color by name, or a random palette ink.

    Lookup order: empty name picks a random ink; a palette ink name matches
    ignoring case; anything else is parsed as a CSS color ("red", "#ff0000",
    "rgb(255, 0, 0)"). Unparseable names log a warning and fall back to a
    random ink.

    Args:
        color_name: Ink name, CSS color, or "" for random
        alpha: Opacity applied to the result (0.0 to 1.0)
        rng: Random source for random picks
        palette: Palette to search, defaults to the Riso inks

    Returns:
        The chosen Color with the requested alpha
    """
    rng = rng or default_source()
    palette = palette or load_palette("riso")

    if color_name == "":
        color = _random_entry(palette, rng)
    else:
        entry = palette.find(color_name)
        if entry is not None:
            color = Color(name=entry.name, hex=entry.hex)
        else:
            try:
                r, g, b = ImageColor.getrgb(color_name)[:3]
                color = Color(name=color_name, hex=f"#{r:02x}{g:02x}{b:02x}")
            except ValueError:
                logger.warning(f"Color {color_name!r} not found, picking a random ink")
                color = _random_entry(palette, rng)

    return color.with_alpha(alpha)
