import logging
from time import time

import numpy as np

from fractal_painting.fractal import DragonTransform, flip_coins, koch_curve
from fractal_painting.parameters import validate_dragon_settings

UPDATE_INTERVAL = 100  # iterations between refresh notifications
SIZE_DIVISOR = 2.1
SHIFT_FACTOR = 0.8
KOCH_BASELINE = 0.9  # height fraction of the Koch baseline
KOCH_MIN_SEGMENT = 2.0


class DragonPainter:
    def __init__(self, surface, settings, palette, seed=None):
        validate_dragon_settings(settings)
        self.surface = surface
        self.settings = settings
        self.palette = palette
        self.seed = seed

    def paint(self):
        """Draw the dragon curve, refreshing the host every UPDATE_INTERVAL points."""
        width, height = self.surface.get_size()
        size = min(width, height) / SIZE_DIVISOR
        transform = DragonTransform(self.settings, shift_factor=size * SHIFT_FACTOR)

        logging.info(f"Painting dragon with {self.settings.iterations_count} iterations on {width}x{height}...")
        start_time = time()
        with self.surface.start_drawing() as graphics:
            graphics.fill_rectangle(self.palette.background_color, 0, 0, width, height)
            rng = np.random.default_rng(self.seed)
            points = transform.trace(flip_coins(rng, self.settings.iterations_count))
            origin_x, origin_y = width / 3, height / 2
            for i, (x, y) in enumerate(points):
                graphics.fill_rectangle(self.palette.primary_color, origin_x + x, origin_y + y, 1, 1)
                if i % UPDATE_INTERVAL == 0:
                    self.surface.notify_updated()

        self.surface.notify_updated()
        logging.info(f"Dragon painted in {time() - start_time:.2f} seconds.")


class KochPainter:
    def __init__(self, surface, palette):
        self.surface = surface
        self.palette = palette

    def paint(self):
        width, height = self.surface.get_size()
        baseline = height * KOCH_BASELINE
        vertices = koch_curve((0, baseline), (width, baseline), min_segment=KOCH_MIN_SEGMENT)

        logging.info(f"Painting Koch curve with {len(vertices)} vertices on {width}x{height}...")
        with self.surface.start_drawing() as graphics:
            graphics.fill_rectangle(self.palette.background_color, 0, 0, width, height)
            graphics.draw_polyline(self.palette.primary_color, vertices)

        self.surface.notify_updated()
