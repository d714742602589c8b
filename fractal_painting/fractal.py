import numpy as np
from numba import njit

MAP_A = 0  # rotate and scale
MAP_B = 1  # rotate, scale and shift


@njit
def trace_dragon(flips, cosa, sina, cosb, sinb, shift_x, shift_y, scale):
    """
    Points visited by the random walk of the two-map system.

    points[0] is the origin, every next point applies the map picked by the
    previous flip. The last flip is never needed.
    """
    n = flips.shape[0]
    points = np.zeros((n, 2), dtype=np.float64)
    x = 0.0
    y = 0.0
    for i in range(n - 1):
        if flips[i] == 0:
            x, y = scale * (x * cosa - y * sina), scale * (x * sina + y * cosa)
        else:
            x, y = scale * (x * cosb - y * sinb) + shift_x, scale * (x * sinb + y * cosb) + shift_y
        points[i + 1, 0] = x
        points[i + 1, 1] = y
    return points


def flip_coins(rng, count):
    """Fair coin flips, MAP_A or MAP_B."""
    return rng.integers(MAP_A, MAP_B + 1, size=max(count, 0), dtype=np.int8)


class DragonTransform:
    def __init__(self, settings, shift_factor=1.0):
        self.cosa = float(np.cos(settings.angle1))
        self.sina = float(np.sin(settings.angle1))
        self.cosb = float(np.cos(settings.angle2))
        self.sinb = float(np.sin(settings.angle2))
        self.shift_x = settings.shift_x * shift_factor
        self.shift_y = settings.shift_y * shift_factor
        self.scale = settings.scale

    def step(self, p, flip):
        """Apply map A for a falsy flip, map B otherwise."""
        x, y = p
        if not flip:
            return (
                self.scale * (x * self.cosa - y * self.sina),
                self.scale * (x * self.sina + y * self.cosa),
            )
        return (
            self.scale * (x * self.cosb - y * self.sinb) + self.shift_x,
            self.scale * (x * self.sinb + y * self.cosb) + self.shift_y,
        )

    def trace(self, flips):
        flips = np.ascontiguousarray(flips, dtype=np.int8)
        return trace_dragon(
            flips, self.cosa, self.sina, self.cosb, self.sinb, self.shift_x, self.shift_y, self.scale
        )


def koch_curve(start, end, min_segment=2.0):
    """
    Vertices of the Koch curve between two points.

    Segments are split into thirds with an equilateral bump rotated towards
    negative y, until the next split would make them shorter than min_segment.
    """
    vertices = np.array([start, end], dtype=np.float64)
    length = np.linalg.norm(vertices[1] - vertices[0])

    cos60, sin60 = np.cos(-np.pi / 3), np.sin(-np.pi / 3)
    while length / 3 >= min_segment:
        a = vertices[:-1]
        d = (vertices[1:] - a) / 3
        p1 = a + d
        p2 = a + 2 * d
        apex = p1 + np.column_stack([d[:, 0] * cos60 - d[:, 1] * sin60, d[:, 0] * sin60 + d[:, 1] * cos60])

        refined = np.empty((4 * len(a) + 1, 2))
        refined[0:-1:4] = a
        refined[1::4] = p1
        refined[2::4] = apex
        refined[3::4] = p2
        refined[-1] = vertices[-1]
        vertices = refined
        length /= 3

    return vertices
