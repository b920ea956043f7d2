"""
Sketch settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main sketch settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOTSKETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Canvas
    width: int = Field(default=2048, gt=0)
    height: int = Field(default=2048, gt=0)

    # Seeds ("" picks a random one)
    seed: str = ""
    color_seed: str = ""

    # Post effects
    grain: str = "parallel"  # colorful, parallel, red, invert, none
    footer: bool = True

    # Colors
    palette: str = "riso"

    # Output
    output_dir: Path = Path("output")
    debug: bool = False

    @property
    def dimensions(self) -> tuple[int, int]:
        """Canvas size as (width, height)."""
        return self.width, self.height


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
