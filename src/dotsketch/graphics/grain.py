"""Grain effects.

Two variants:

- ``synthesize_grain`` / ``add_grain`` shift the channel values of every
  pixel in one linear pass (four noise modes).
- ``add_grain_stipple`` scatters small dark squares in multiply mode.

The synthesizer never clamps. Float buffers and lists keep out-of-range
values as-is. Integer buffers (integer numpy arrays and bytearrays) get the
result truncated toward zero and wrapped modulo the dtype's range, so -50
stored in a uint8 buffer reads back as 206. Clamping happens when the buffer
is written back to a canvas.
"""

import logging
import math
from collections.abc import MutableSequence
from enum import Enum
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from dotsketch.core.random_source import RandomSource, default_source
from dotsketch.graphics.canvas import MULTIPLY, Canvas

logger = logging.getLogger(__name__)

CHANNELS = 4


class GrainMode(Enum):
    """Per-pixel noise transforms."""

    COLORFUL = "colorful"  # independent jitter per channel
    PARALLEL = "parallel"  # one jitter shared by r, g, b
    RED = "red"            # push red up, green and blue down
    INVERT = "invert"      # 255 - value


# Jitter ranges (min, max)
COLORFUL_RANGE = (-25, 25)
PARALLEL_RANGE = (-15, 15)
RED_RANGE = (50, 100)

OPAQUE = 255

PixelBuffer = Union[MutableSequence, NDArray]


def _resolve_mode(mode: Union[GrainMode, str]) -> Optional[GrainMode]:
    if isinstance(mode, GrainMode):
        return mode
    try:
        return GrainMode(mode)
    except ValueError:
        return None


def _working_copy(pixels: PixelBuffer) -> NDArray:
    """Get a flat float64 buffer to transform.

    Float arrays are viewed directly so they change in place. Everything
    else is copied and written back by ``_store``.
    """
    if isinstance(pixels, np.ndarray):
        flat = pixels.reshape(-1)
        if flat.size and not np.shares_memory(flat, pixels):
            raise ValueError("Pixel buffer must be contiguous to be modified in place")
        if flat.dtype == np.float64:
            return flat
        return flat.astype(np.float64)
    if not isinstance(pixels, MutableSequence):
        raise TypeError(
            f"Pixel buffer must be a numpy array or a mutable sequence, "
            f"got {type(pixels).__name__}"
        )
    return np.asarray(pixels, dtype=np.float64).reshape(-1)


def _wrap(values: NDArray, dtype) -> NDArray:
    # int64 -> narrower int casts wrap modulo 2**bits on every platform
    return np.trunc(values).astype(np.int64).astype(dtype)


def _store(pixels: PixelBuffer, work: NDArray) -> None:
    """Write transformed values back into the caller's buffer."""
    if isinstance(pixels, np.ndarray):
        flat = pixels.reshape(-1)
        if np.shares_memory(flat, work):
            return
        if np.issubdtype(flat.dtype, np.integer):
            flat[:] = _wrap(work, flat.dtype)
        else:
            flat[:] = work.astype(flat.dtype)
    elif isinstance(pixels, bytearray):
        pixels[:] = _wrap(work, np.uint8).tobytes()
    else:
        pixels[:] = work.tolist()


def synthesize_grain(
    pixels: PixelBuffer,
    width: int,
    height: int,
    mode: Union[GrainMode, str],
    rng: Optional[RandomSource] = None,
) -> PixelBuffer:
    """Apply a grain transform to a flat RGBA buffer in place.

    Args:
        pixels: Row-major RGBA channel values, ``width * height * 4`` long.
            A numpy array, list or bytearray; it is mutated in place.
        width: Image width in pixels
        height: Image height in pixels
        mode: One of "colorful", "parallel", "red", "invert"
        rng: Random source for the jitter modes

    Returns:
        The same buffer object, after the transform

    Raises:
        TypeError: If the buffer is immutable (tuple, bytes)
        ValueError: If the buffer length does not match width and height,
            or the array cannot be viewed flat without copying

    Unknown modes log a warning and leave the buffer untouched.
    """
    work = _working_copy(pixels)

    expected = width * height * CHANNELS
    if work.size != expected:
        raise ValueError(
            f"Pixel buffer has {work.size} values, expected {expected} "
            f"for {width}x{height} RGBA"
        )

    grain_mode = _resolve_mode(mode)
    if grain_mode is None:
        logger.warning(f"Unknown grain mode {mode!r}, leaving pixels unchanged")
        return pixels

    count = width * height
    if count == 0:
        return pixels

    rng = rng or default_source()
    view = work.reshape(count, CHANNELS)
    red, green, blue, alpha = (view[:, c] for c in range(CHANNELS))

    if grain_mode is GrainMode.COLORFUL:
        # Draw order follows the pixel pass: r, g, b of pixel 0, then pixel 1...
        deltas = np.asarray(rng.range(*COLORFUL_RANGE, size=(count, 3)))
        red += deltas[:, 0]
        green += deltas[:, 1]
        blue += deltas[:, 2]
        alpha[:] = OPAQUE

    elif grain_mode is GrainMode.PARALLEL:
        variant = np.asarray(rng.range(*PARALLEL_RANGE, size=count))
        red += variant
        green += variant
        blue += variant
        alpha[:] = OPAQUE

    elif grain_mode is GrainMode.RED:
        variant = np.asarray(rng.range(*RED_RANGE, size=count))
        red += variant
        green -= variant * 0.5
        blue -= variant * 0.5

    elif grain_mode is GrainMode.INVERT:
        view[:, :3] = OPAQUE - view[:, :3]

    _store(pixels, work)
    logger.debug(f"Applied {grain_mode.value} grain to {width}x{height} pixels")
    return pixels


def add_grain(
    canvas: Canvas,
    size: Sequence[int],
    style: Union[GrainMode, str] = GrainMode.PARALLEL,
    rng: Optional[RandomSource] = None,
) -> None:
    """Apply grain to the top-left ``size`` region of a canvas.

    Reads the pixels, transforms them with ``synthesize_grain`` and writes
    them back, which clamps every channel to [0, 255].

    Args:
        canvas: Target canvas
        size: (width, height) of the region, usually the sketch dimensions
        style: Grain mode
        rng: Random source
    """
    width, height = int(size[0]), int(size[1])
    pixels = canvas.get_image_data(0, 0, width, height)
    synthesize_grain(pixels, width, height, style, rng=rng)
    canvas.put_image_data(pixels, 0, 0, width, height)


def add_grain_stipple(
    canvas: Canvas,
    width: int,
    height: int,
    density: float = 0.25,
    grain_size: int = 1,
    rng: Optional[RandomSource] = None,
) -> None:
    """Darken a canvas with randomly placed translucent grains.

    Args:
        canvas: Target canvas
        width: Area width
        height: Area height
        density: Share of pixels that become grains (0 to 1)
        grain_size: Edge length of each square grain in pixels
        rng: Random source
    """
    if grain_size <= 0:
        raise ValueError(f"Grain size must be positive, got {grain_size}")

    rng = rng or default_source()
    amount = math.floor(width * height * density / (grain_size * grain_size))

    canvas.save()
    canvas.composite = MULTIPLY
    for _ in range(amount):
        x = rng.range(0, width)
        y = rng.range(0, height)
        alpha = rng.range(0.5, 0.9)
        canvas.fill_rect(x, y, grain_size, grain_size, (0, 0, 0, round(alpha * 255)))
    canvas.restore()
