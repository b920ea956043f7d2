"""Core building blocks for dotsketch."""

from .random_source import RandomSource, default_source, initiate_seed

__all__ = ["RandomSource", "default_source", "initiate_seed"]
