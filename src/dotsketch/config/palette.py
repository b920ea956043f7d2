"""
Palette loading utilities.

Palettes are YAML files in the ``palettes`` directory next to this module.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

PALETTES_PATH = Path(__file__).parent / "palettes"


@dataclass(frozen=True)
class PaletteEntry:
    """A named ink color."""
    name: str
    hex: str


@dataclass(frozen=True)
class Palette:
    """A named, ordered collection of ink colors."""
    name: str = "default"
    description: str = ""
    entries: tuple[PaletteEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "Palette":
        """Create palette from YAML data."""
        entries = tuple(
            PaletteEntry(name=str(item["name"]), hex=str(item["hex"]).lower())
            for item in data.get("colors", [])
        )
        return cls(
            name=data.get("name", "default"),
            description=data.get("description", ""),
            entries=entries,
        )

    def find(self, name: str) -> PaletteEntry | None:
        """Look up an entry by name, ignoring case."""
        wanted = name.lower()
        for entry in self.entries:
            if entry.name.lower() == wanted:
                return entry
        return None


@lru_cache
def load_palette(palette_name: str = "riso", palettes_path: Path | None = None) -> Palette:
    """
    Load a palette from YAML file.

    Args:
        palette_name: Name of the palette (without .yaml extension)
        palettes_path: Path to palettes directory

    Returns:
        Palette instance

    Raises:
        ValueError: If the palette file does not exist or holds no colors
    """
    if palettes_path is None:
        palettes_path = PALETTES_PATH

    palette_file = palettes_path / f"{palette_name}.yaml"

    if not palette_file.exists():
        raise ValueError(f"Unknown palette: {palette_name}")

    with open(palette_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    palette = Palette.from_yaml(data)
    if not palette.entries:
        raise ValueError(f"Palette {palette_name} has no colors")
    return palette


def list_palettes(palettes_path: Path | None = None) -> list[str]:
    """List available palettes."""
    if palettes_path is None:
        palettes_path = PALETTES_PATH

    return sorted(f.stem for f in palettes_path.glob("*.yaml"))
