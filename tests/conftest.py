from contextlib import contextmanager

import pytest

from fractal_painting.datatypes import DragonSettings, Palette
from fractal_painting.errors import SurfaceUnavailable

BACKGROUND = (0, 0, 40)
PRIMARY = (255, 255, 0)


class RecordingContext:
    def __init__(self, calls):
        self.calls = calls

    def fill_rectangle(self, color, x, y, w, h):
        self.calls.append(("fill", tuple(color), float(x), float(y), w, h))

    def draw_polyline(self, color, points):
        self.calls.append(("polyline", tuple(color), [tuple(p) for p in points]))


class RecordingSurface:
    def __init__(self, width=100, height=100, unavailable=False):
        self.width = width
        self.height = height
        self.unavailable = unavailable
        self.calls = []
        self.updates = 0

    def get_size(self):
        return self.width, self.height

    @contextmanager
    def start_drawing(self):
        if self.unavailable:
            raise SurfaceUnavailable("not ready")
        self.calls.append(("acquire",))
        try:
            yield RecordingContext(self.calls)
        finally:
            self.calls.append(("release",))

    def notify_updated(self):
        self.updates += 1


@pytest.fixture
def palette():
    return Palette(background_color=BACKGROUND, primary_color=PRIMARY)


@pytest.fixture
def make_settings():
    def make(**overrides):
        values = dict(angle1=0.0, angle2=1.5707963267948966, shift_x=0.0, shift_y=0.0, scale=0.5, iterations_count=1)
        values.update(overrides)
        return DragonSettings(**values)

    return make
