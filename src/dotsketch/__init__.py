"""dotsketch - drawing helpers for generative-art sketches."""

__version__ = "2.5.0"
