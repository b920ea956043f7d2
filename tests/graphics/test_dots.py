from __future__ import annotations

import math

import numpy as np
import pytest

from dotsketch.core.random_source import RandomSource
from dotsketch.graphics.canvas import Canvas
from dotsketch.graphics.colors import Color
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

RED = Color(name="red", hex="#ff0000")


def _centered(size: int = 41, background=None) -> Canvas:
    canvas = Canvas(size, size, background=background)
    canvas.translate(size // 2, size // 2)
    return canvas


def _assert_state_balanced(canvas: Canvas, origin: tuple[float, float]) -> None:
    assert canvas.origin == origin
    assert canvas.global_alpha == 1.0
    with pytest.raises(RuntimeError):
        canvas.restore()


def test_single_dot_uses_color_alpha() -> None:
    canvas = _centered(background="white")
    draw_single_dot(canvas, 5, Color(name="black", hex="#000000", alpha=0.5))
    assert canvas.buffer[20, 20, 0] in (127, 128)
    assert canvas.buffer[0, 0, 0] == 255
    _assert_state_balanced(canvas, (20, 20))


def test_zero_alpha_color_is_invisible() -> None:
    canvas = _centered(background="white")
    draw_single_dot(canvas, 5, RED.with_alpha(0.0))
    assert np.all(canvas.buffer == 255)


def test_outline_is_a_ring() -> None:
    canvas = _centered()
    draw_outline(canvas, 10, RED, 2)
    assert tuple(canvas.buffer[20, 30]) == (255, 0, 0, 255)
    assert canvas.buffer[20, 20, 3] == 0
    _assert_state_balanced(canvas, (20, 20))


def test_arc_draws_only_its_sweep() -> None:
    canvas = _centered()
    draw_arc(canvas, 10, RED, 2, 0, math.pi / 2)
    assert canvas.buffer[30, 20, 3] == 255  # quarter below center
    assert canvas.buffer[10, 20, 3] == 0
    assert canvas.buffer[20, 10, 3] == 0


def test_arc_direction_flag() -> None:
    canvas = _centered()
    draw_arc(canvas, 10, RED, 2, 0, math.pi / 2, is_clockwise=True)
    assert canvas.buffer[30, 20, 3] == 0
    assert canvas.buffer[10, 20, 3] == 255
    assert canvas.buffer[20, 10, 3] == 255


def test_circumpunct_has_ring_and_center() -> None:
    canvas = _centered()
    draw_circumpunct(canvas, 12, RED, 3, 2)
    assert canvas.buffer[20, 20, 3] == 255
    assert canvas.buffer[20, 26, 3] == 0
    assert canvas.buffer[20, 32, 3] == 255


def test_ordered_concentric_rings_are_evenly_spaced() -> None:
    canvas = _centered()
    draw_concentric_dots(canvas, 16, RED, 2, 2, ordered=True)
    row = canvas.buffer[20, 20:, 3]
    assert row[8] == 255 and row[16] == 255
    assert row[0] == 0 and row[4] == 0 and row[12] == 0


def test_unordered_concentric_rings_follow_the_seed() -> None:
    a = _centered()
    b = _centered()
    draw_concentric_dots(a, 16, RED, 4, 1, ordered=False, rng=RandomSource(8))
    draw_concentric_dots(b, 16, RED, 4, 1, ordered=False, rng=RandomSource(8))
    assert np.array_equal(a.buffer, b.buffer)
    assert a.buffer[..., 3].any()


def test_unordered_concentric_radius_range(fixed_source) -> None:
    rng = fixed_source(0.5)
    draw_concentric_dots(_centered(), 16, RED, 3, 1, ordered=False, rng=rng)
    assert rng.calls == [(0.1, 1, None)] * 3


def test_segmented_dots_filled_and_outlined() -> None:
    filled = _centered()
    draw_segmented_dots(filled, 12, RED, 2, 4, 0)
    for row, col in [(20, 32), (32, 20), (20, 8), (8, 20)]:
        assert filled.buffer[row, col, 3] == 255
    assert filled.buffer[20, 20, 3] == 0
    _assert_state_balanced(filled, (20, 20))

    outlined = _centered()
    draw_segmented_dots(outlined, 12, RED, 3, 4, 1)
    assert outlined.buffer[20, 32, 3] == 0  # hollow center of the dot
    assert outlined.buffer[20, 34, 3] == 255


def test_splash_stays_near_its_area() -> None:
    canvas = _centered(101)
    draw_splash(canvas, 20, RED, 1, 0.5, rng=RandomSource("splash"))
    covered = np.argwhere(canvas.buffer[..., 3] > 0)
    assert len(covered) > 0
    dist = np.hypot(covered[:, 0] - 50, covered[:, 1] - 50)
    assert dist.max() < 35
    _assert_state_balanced(canvas, (50, 50))


def test_splash_density_controls_draw_count(fixed_source) -> None:
    rng = fixed_source(0.0)
    draw_splash(_centered(), 10, RED, 0.5, 1, rng=rng)
    # angle, radius and sqrt factor per dot
    assert len(rng.calls) == 100 * 3


def test_zero_density_splash_draws_nothing() -> None:
    canvas = _centered()
    draw_splash(canvas, 10, RED, 0, 1, rng=RandomSource(1))
    assert not canvas.buffer.any()


def test_radial_gradient_and_vignette_are_opposites() -> None:
    glow = _centered()
    draw_radial_gradient(glow, 15, RED)
    vignette = _centered()
    draw_radial_vignette(vignette, 15, RED)

    assert glow.buffer[20, 20, 3] > glow.buffer[20, 32, 3]
    assert vignette.buffer[20, 20, 3] < vignette.buffer[20, 32, 3]
    assert glow.buffer[0, 0, 3] == 0 and vignette.buffer[0, 0, 3] == 0
