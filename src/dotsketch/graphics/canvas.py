"""Raster drawing surface for sketches.

The canvas keeps an RGBA numpy buffer of shape (height, width, 4) and a
small stack of drawing state (origin translation, global alpha, composite
operation). Shapes are positioned relative to the current origin and sampled
at pixel centers.
"""

import logging
import math
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageColor, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

# Type aliases
RGBA = Tuple[int, int, int, int]
ColorLike = Union[str, Sequence[int]]
Buffer = NDArray[np.uint8]
GradientStop = Tuple[float, ColorLike]

TAU = math.pi * 2

SOURCE_OVER = "source-over"
MULTIPLY = "multiply"
COMPOSITE_OPERATIONS = (SOURCE_OVER, MULTIPLY)

# Font paths to try, first hit wins
FONT_PATHS = [
    "Inter-Regular.ttf",
    "/usr/share/fonts/truetype/inter/Inter-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
]


def to_rgba(color: ColorLike) -> RGBA:
    """Convert a CSS color string or an RGB(A) tuple to an RGBA tuple."""
    if isinstance(color, str):
        return ImageColor.getcolor(color, "RGBA")
    values = tuple(int(c) for c in color)
    if len(values) == 3:
        return values + (255,)
    if len(values) == 4:
        return values
    raise ValueError(f"Expected 3 or 4 color channels, got {len(values)}")


@lru_cache(maxsize=32)
def load_font(size: int):
    """Get a sans-serif font of the given pixel size, with caching."""
    size = max(1, int(size))
    for path in FONT_PATHS:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    logger.debug(f"No truetype font found, using Pillow default at {size}px")
    return ImageFont.load_default(size=size)


@dataclass
class DrawState:
    """Drawing state saved and restored as a unit."""

    origin_x: float = 0.0
    origin_y: float = 0.0
    global_alpha: float = 1.0
    composite: str = SOURCE_OVER


class Canvas:
    """RGBA raster surface with a minimal 2D-context drawing API."""

    def __init__(self, width: int, height: int, background: Optional[ColorLike] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.buffer: Buffer = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        self._state = DrawState()
        self._stack: List[DrawState] = []
        if background is not None:
            self.clear(background)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def origin(self) -> Tuple[float, float]:
        return self._state.origin_x, self._state.origin_y

    @property
    def global_alpha(self) -> float:
        return self._state.global_alpha

    @global_alpha.setter
    def global_alpha(self, value: float) -> None:
        self._state.global_alpha = max(0.0, min(1.0, float(value)))

    @property
    def composite(self) -> str:
        return self._state.composite

    @composite.setter
    def composite(self, value: str) -> None:
        if value not in COMPOSITE_OPERATIONS:
            raise ValueError(f"Unknown composite operation: {value}")
        self._state.composite = value

    # State
    def save(self) -> None:
        """Push the current drawing state."""
        self._stack.append(replace(self._state))

    def restore(self) -> None:
        """Pop the most recently saved drawing state."""
        if not self._stack:
            raise RuntimeError("restore() called without a matching save()")
        self._state = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        """Move the origin by (dx, dy)."""
        self._state.origin_x += dx
        self._state.origin_y += dy

    # Drawing
    def clear(self, color: ColorLike = (0, 0, 0, 0)) -> None:
        """Set every pixel to color, ignoring state."""
        self.buffer[:, :] = to_rgba(color)

    def fill_circle(self, radius: float, color: ColorLike) -> None:
        """Fill a disc centered on the origin."""
        if radius < 0:
            raise ValueError(f"Negative radius: {radius}")
        grid = self._local_grid(radius)
        if grid is None:
            return
        index, dx, dy = grid
        rgba = to_rgba(color)
        mask = dx ** 2 + dy ** 2 <= radius ** 2
        self._composite(index, rgba[:3], mask * (rgba[3] / 255.0))

    def stroke_arc(
        self,
        radius: float,
        start_angle: float,
        end_angle: float,
        color: ColorLike,
        line_width: float = 1.0,
        anticlockwise: bool = False,
    ) -> None:
        """Stroke an arc centered on the origin.

        Angles are in radians, measured clockwise from the +x axis (y points
        down). A sweep of a full turn or more strokes the whole circle.

        Args:
            radius: Arc radius
            start_angle: Start angle in radians
            end_angle: End angle in radians
            color: Stroke color
            line_width: Stroke width, centered on the arc
            anticlockwise: Sweep direction
        """
        if radius < 0:
            raise ValueError(f"Negative radius: {radius}")
        if line_width <= 0:
            return

        half = line_width / 2.0
        grid = self._local_grid(radius + half)
        if grid is None:
            return
        index, dx, dy = grid

        dist = np.hypot(dx, dy)
        mask = np.abs(dist - radius) <= half

        span = (start_angle - end_angle) if anticlockwise else (end_angle - start_angle)
        if span < TAU:
            span = span % TAU
            if span == 0:
                return
            theta = np.arctan2(dy, dx) % TAU
            if anticlockwise:
                mask &= (start_angle - theta) % TAU <= span
            else:
                mask &= (theta - start_angle) % TAU <= span

        rgba = to_rgba(color)
        self._composite(index, rgba[:3], mask * (rgba[3] / 255.0))

    def fill_radial_gradient(self, radius: float, stops: Sequence[GradientStop]) -> None:
        """Fill a disc with a radial gradient centered on the origin.

        Colors are interpolated in premultiplied alpha, so a stop fading to
        transparent does not tint the other stop.

        Args:
            radius: Gradient (and disc) radius
            stops: (offset, color) pairs with offsets in [0, 1]
        """
        if radius < 0:
            raise ValueError(f"Negative radius: {radius}")
        if not stops:
            raise ValueError("A gradient needs at least one color stop")
        if radius == 0:
            return
        grid = self._local_grid(radius)
        if grid is None:
            return
        index, dx, dy = grid

        ordered = sorted(stops, key=lambda stop: stop[0])
        offsets = np.array([max(0.0, min(1.0, float(o))) for o, _ in ordered])
        colors = np.array([to_rgba(c) for _, c in ordered], dtype=np.float64)
        alphas = colors[:, 3] / 255.0
        premultiplied = colors[:, :3] * alphas[:, None]

        dist = np.hypot(dx, dy)
        t = np.clip(dist / radius, 0.0, 1.0)
        alpha = np.interp(t, offsets, alphas)
        rgb = np.stack([np.interp(t, offsets, premultiplied[:, c]) for c in range(3)], axis=-1)
        rgb = np.divide(rgb, alpha[..., None], out=np.zeros_like(rgb), where=alpha[..., None] > 0)

        mask = dist <= radius
        self._composite(index, rgb, mask * alpha)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: ColorLike) -> None:
        """Fill an axis-aligned rectangle relative to the origin."""
        ox, oy = self.origin
        x0, x1 = sorted((ox + x, ox + x + width))
        y0, y1 = sorted((oy + y, oy + y + height))
        # Pixels whose centers fall inside [x0, x1) x [y0, y1)
        col0 = max(0, math.ceil(x0 - 0.5))
        col1 = min(self.width, math.ceil(x1 - 0.5))
        row0 = max(0, math.ceil(y0 - 0.5))
        row1 = min(self.height, math.ceil(y1 - 0.5))
        if col0 >= col1 or row0 >= row1:
            return
        rgba = to_rgba(color)
        self._composite((slice(row0, row1), slice(col0, col1)), rgba[:3], rgba[3] / 255.0)

    def fill_text(self, text: str, x: float, y: float, font_size: float, color: ColorLike) -> None:
        """Draw text with its left baseline at (x, y) relative to the origin."""
        if not text:
            return
        ox, oy = self.origin
        font = load_font(round(font_size))

        mask_image = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(mask_image)
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((ox + x, oy + y), text, font=font, fill=255, anchor="ls")
        else:
            draw.text((ox + x, oy + y - font_size), text, font=font, fill=255)

        coverage = np.asarray(mask_image, dtype=np.float64) / 255.0
        rgba = to_rgba(color)
        self._composite((slice(None), slice(None)), rgba[:3], coverage * (rgba[3] / 255.0))

    # Pixel access
    def get_image_data(
        self,
        x: int = 0,
        y: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> NDArray[np.float64]:
        """Copy a region as a flat, signed RGBA channel array.

        The copy is float64 so pixel effects can leave [0, 255] freely;
        ``put_image_data`` clamps on the way back.
        """
        width = self.width - x if width is None else width
        height = self.height - y if height is None else height
        self._check_region(x, y, width, height)
        region = self.buffer[y:y + height, x:x + width]
        return region.astype(np.float64).reshape(-1)

    def put_image_data(
        self,
        data: Union[Sequence[float], NDArray],
        x: int = 0,
        y: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> None:
        """Write a flat RGBA channel array, rounding and clamping to bytes."""
        width = self.width - x if width is None else width
        height = self.height - y if height is None else height
        self._check_region(x, y, width, height)

        values = np.asarray(data, dtype=np.float64)
        expected = width * height * 4
        if values.size != expected:
            raise ValueError(
                f"Image data has {values.size} values, expected {expected} "
                f"for a {width}x{height} region"
            )
        values = np.clip(np.rint(values.reshape(height, width, 4)), 0, 255)
        self.buffer[y:y + height, x:x + width] = values.astype(np.uint8)

    # Export
    def to_image(self) -> Image.Image:
        """Get the canvas as a Pillow RGBA image."""
        return Image.fromarray(self.buffer)

    def save_png(self, path: Union[str, Path]) -> Path:
        """Write the canvas to a PNG file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(path, format="PNG")
        logger.info(f"Saved {self.width}x{self.height} canvas to {path}")
        return path

    # Internals
    def _check_region(self, x: int, y: int, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Region size must be positive, got {width}x{height}")
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"Region {width}x{height}+{x}+{y} is outside the "
                f"{self.width}x{self.height} canvas"
            )

    def _local_grid(self, extent: float):
        """Pixel-center offsets from the origin within a bounding box.

        Returns None when the box misses the canvas, otherwise a tuple of
        (buffer index, dx column vector, dy row vector).
        """
        ox, oy = self.origin
        x0 = max(0, int(math.floor(ox - extent)))
        x1 = min(self.width, int(math.ceil(ox + extent)) + 1)
        y0 = max(0, int(math.floor(oy - extent)))
        y1 = min(self.height, int(math.ceil(oy + extent)) + 1)
        if x0 >= x1 or y0 >= y1:
            return None
        ys, xs = np.ogrid[y0:y1, x0:x1]
        dx = xs + 0.5 - ox
        dy = ys + 0.5 - oy
        return (slice(y0, y1), slice(x0, x1)), dx, dy

    def _composite(self, index, rgb, alpha) -> None:
        """Blend rgb over the indexed region with per-pixel alpha."""
        region = self.buffer[index].astype(np.float64)
        if region.size == 0:
            return

        a = np.asarray(alpha, dtype=np.float64) * self._state.global_alpha
        a = np.broadcast_to(a, region.shape[:-1])[..., None]
        src = np.asarray(rgb, dtype=np.float64)
        dst = region[..., :3]
        dst_a = region[..., 3:] / 255.0

        if self._state.composite == MULTIPLY:
            # Blend toward the product where the backdrop is opaque
            src = (1.0 - dst_a) * src + dst_a * (src * dst / 255.0)

        out_a = a + dst_a * (1.0 - a)
        numerator = src * a + dst * dst_a * (1.0 - a)
        # Fully transparent results keep their old color channels
        out_rgb = np.divide(numerator, out_a, out=dst.copy(), where=out_a > 0)

        region[..., :3] = out_rgb
        region[..., 3:] = out_a * 255.0
        self.buffer[index] = np.clip(np.rint(region), 0, 255).astype(np.uint8)
