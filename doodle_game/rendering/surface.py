"""Raster drawing surface that turns pointer input into strokes."""

from __future__ import annotations

import base64
import io
import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageColor, ImageDraw

from ..state.models import DEFAULT_COLOR, Point

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 800
DEFAULT_LINE_WIDTH = 4
BLANK = (0, 0, 0, 0)

RGBA = Tuple[int, int, int, int]


class DrawingSurface:
    """A Pillow image that strokes are committed to as they are drawn.

    Points arrive in logical coordinates and are scaled by the device pixel
    ratio, so the backing image is ``floor(width * dpr)`` by
    ``floor(height * dpr)`` pixels while strokes keep their visible size.
    No stroke history is kept: the image is the drawing.
    """

    def __init__(
        self,
        width: float = DEFAULT_SIZE,
        height: float = DEFAULT_SIZE,
        device_pixel_ratio: float = 1.0,
        line_width: float = DEFAULT_LINE_WIDTH,
    ) -> None:
        self.line_width = line_width
        self._image: Image.Image
        self._draw: ImageDraw.ImageDraw
        self._width = width
        self._height = height
        self._dpr = device_pixel_ratio
        self._is_empty = True
        self._last_point: Optional[Tuple[float, float]] = None
        self._color: RGBA = ImageColor.getcolor(DEFAULT_COLOR, "RGBA")
        self.resize(width, height, device_pixel_ratio)

    # Properties -------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return self._is_empty

    @property
    def is_drawing(self) -> bool:
        return self._last_point is not None

    @property
    def size(self) -> Tuple[float, float]:
        return (self._width, self._height)

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def device_pixel_ratio(self) -> float:
        return self._dpr

    @property
    def image(self) -> Image.Image:
        """Return a copy of the backing image."""

        return self._image.copy()

    # Geometry ---------------------------------------------------------
    def resize(
        self,
        width: float,
        height: float,
        device_pixel_ratio: Optional[float] = None,
    ) -> None:
        """Reallocate the backing image and drop everything drawn so far."""

        if device_pixel_ratio is None:
            device_pixel_ratio = self._dpr
        if not device_pixel_ratio or device_pixel_ratio <= 0:
            device_pixel_ratio = 1.0
        self._width = width
        self._height = height
        self._dpr = device_pixel_ratio
        pixel_size = (
            max(1, math.floor(width * device_pixel_ratio)),
            max(1, math.floor(height * device_pixel_ratio)),
        )
        if self.is_drawing:
            logger.info("Resize interrupted an active stroke; drawing discarded")
        self._image = Image.new("RGBA", pixel_size, BLANK)
        self._draw = ImageDraw.Draw(self._image)
        self._last_point = None
        self._is_empty = True

    def _to_pixels(self, point: Point) -> Tuple[float, float]:
        return (point[0] * self._dpr, point[1] * self._dpr)

    # Strokes ----------------------------------------------------------
    def begin_stroke(self, point: Point, color: str = DEFAULT_COLOR) -> None:
        """Start a path at ``point``; the surface counts as drawn on from here."""

        self._color = ImageColor.getcolor(color, "RGBA")
        self._last_point = self._to_pixels(point)
        self._is_empty = False

    def extend_stroke(self, point: Point) -> bool:
        """Draw a segment to ``point`` if a stroke is active."""

        if self._last_point is None:
            return False
        start = self._last_point
        end = self._to_pixels(point)
        width = max(1, round(self.line_width * self._dpr))
        self._draw.line([start, end], fill=self._color, width=width)
        # round caps and joins
        radius = width / 2
        for x, y in (start, end):
            self._draw.ellipse(
                [x - radius, y - radius, x + radius, y + radius],
                fill=self._color,
            )
        self._last_point = end
        return True

    def end_stroke(self) -> None:
        self._last_point = None

    def clear(self) -> None:
        """Wipe the surface and forget any active stroke."""

        self._image.paste(BLANK, (0, 0, *self._image.size))
        self._last_point = None
        self._is_empty = True

    # Export -----------------------------------------------------------
    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def save(self, path: Union[str, Path]) -> Path:
        target = Path(path)
        target.write_bytes(self.to_png_bytes())
        return target
