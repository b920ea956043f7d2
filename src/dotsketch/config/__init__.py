"""Configuration for dotsketch."""

from .palette import Palette, PaletteEntry, list_palettes, load_palette
from .settings import Settings, get_settings

__all__ = [
    "Palette",
    "PaletteEntry",
    "Settings",
    "get_settings",
    "list_palettes",
    "load_palette",
]
