"""
Drawable image targets for the painters.

A surface knows its pixel size, hands out exclusive drawing access as a
context manager and tells its host when the picture changed.
"""

import math
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from fractal_painting.errors import SurfaceUnavailable


class DrawingContext(ABC):
    @abstractmethod
    def fill_rectangle(self, color, x: float, y: float, w: float, h: float):
        pass

    @abstractmethod
    def draw_polyline(self, color, points: Sequence[Tuple[float, float]]):
        pass


class ImageSurface(ABC):
    @abstractmethod
    def get_size(self) -> Tuple[int, int]:
        pass

    @abstractmethod
    def start_drawing(self):
        """Context manager yielding a DrawingContext, released on exit."""

    @abstractmethod
    def notify_updated(self):
        pass


class PillowDrawingContext(DrawingContext):
    def __init__(self, image: Image.Image):
        self.width, self.height = image.size
        self.draw = ImageDraw.Draw(image)

    def fill_rectangle(self, color, x, y, w, h):
        if not all(math.isfinite(v) for v in (x, y, w, h)):
            return

        # Pixels covered are floor(x) .. floor(x + w) - 1, clipped to the image
        x0 = max(math.floor(x), 0)
        y0 = max(math.floor(y), 0)
        x1 = min(math.floor(x + w), self.width)
        y1 = min(math.floor(y + h), self.height)
        if x1 <= x0 or y1 <= y0:
            return
        self.draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=tuple(color))

    def draw_polyline(self, color, points):
        points = [(float(x), float(y)) for x, y in points]
        if len(points) < 2:
            return
        self.draw.line(points, fill=tuple(color), width=1)


class PillowImageSurface(ImageSurface):
    """RGB image surface; on_update receives the image on every notification."""

    def __init__(self, width: int, height: int, on_update: Optional[Callable[[Image.Image], None]] = None):
        self.image = Image.new("RGB", (width, height))
        self.on_update = on_update
        self._lock = threading.Lock()

    def get_size(self):
        return self.image.size

    @contextmanager
    def start_drawing(self):
        if not self._lock.acquire(blocking=False):
            raise SurfaceUnavailable("Surface is already being drawn on.")
        try:
            yield PillowDrawingContext(self.image)
        finally:
            self._lock.release()

    def notify_updated(self):
        if self.on_update is not None:
            self.on_update(self.image)

    def recreate(self, image_settings):
        """Replace the image with a blank one of the configured size."""
        with self.start_drawing():
            self.image = Image.new("RGB", (image_settings.width, image_settings.height))
        self.notify_updated()

    def pixels(self) -> np.ndarray:
        return np.array(self.image)
