from __future__ import annotations

import numpy as np

from dotsketch.config.settings import Settings
from dotsketch.graphics.canvas import Canvas
from dotsketch.sketch import render_sketch


def _settings(**overrides) -> Settings:
    values = {"width": 96, "height": 64, "grain": "none", "footer": False}
    values.update(overrides)
    return Settings(**values)


def test_render_sketch_size_and_opacity() -> None:
    canvas = render_sketch(_settings(), "1", "2")
    assert isinstance(canvas, Canvas)
    assert canvas.size == (96, 64)
    assert np.all(canvas.buffer[..., 3] == 255)


def test_render_sketch_is_reproducible() -> None:
    a = render_sketch(_settings(grain="colorful"), "7", "8")
    b = render_sketch(_settings(grain="colorful"), "7", "8")
    assert np.array_equal(a.buffer, b.buffer)


def test_color_seed_changes_the_output() -> None:
    a = render_sketch(_settings(), "7", "8")
    b = render_sketch(_settings(), "7", "9")
    assert not np.array_equal(a.buffer, b.buffer)


def test_grain_and_footer_change_the_output() -> None:
    plain = render_sketch(_settings(), "3", "4")
    grained = render_sketch(_settings(grain="invert"), "3", "4")
    footed = render_sketch(_settings(footer=True, width=400, height=400), "3", "4")
    assert not np.array_equal(plain.buffer, grained.buffer)
    assert footed.size == (400, 400)
