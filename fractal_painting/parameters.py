import logging
import math
import numbers

import numpy as np

from fractal_painting.datatypes import DragonSettings
from fractal_painting.errors import InvalidSettings

ANGLE_SPREAD = 0.15
ANGLE1_RANGE = (np.pi / 4 - ANGLE_SPREAD, np.pi / 4 + ANGLE_SPREAD)
ANGLE2_RANGE = (3 * np.pi / 4 - ANGLE_SPREAD, 3 * np.pi / 4 + ANGLE_SPREAD)
SHIFT_RANGE = (-1.0, 1.0)
SCALE_RANGE = (0.55, 0.85)
DRAGON_ITERATIONS = 200_000


def generate_dragon_settings(rng):
    """
    Draw a random dragon parameter set from a numpy Generator.

    Each value is drawn independently and in a fixed order, so a seeded
    generator always yields the same settings.
    """
    return DragonSettings(
        angle1=float(rng.uniform(*ANGLE1_RANGE)),
        angle2=float(rng.uniform(*ANGLE2_RANGE)),
        shift_x=float(rng.uniform(*SHIFT_RANGE)),
        shift_y=float(rng.uniform(*SHIFT_RANGE)),
        scale=float(rng.uniform(*SCALE_RANGE)),
        iterations_count=DRAGON_ITERATIONS,
    )


def validate_dragon_settings(settings):
    """Raise InvalidSettings for values a painter cannot run with."""
    if isinstance(settings.iterations_count, bool) or not isinstance(settings.iterations_count, numbers.Integral):
        raise InvalidSettings(f"iterations_count must be an integer, got {settings.iterations_count!r}")
    if settings.iterations_count < 0:
        raise InvalidSettings(f"iterations_count must be non-negative, got {settings.iterations_count}")

    for name in ("angle1", "angle2", "shift_x", "shift_y", "scale"):
        value = getattr(settings, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidSettings(f"{name} must be a real number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidSettings(f"{name} must be finite, got {value}")

    if abs(settings.scale) >= 1:
        logging.warning(f"Scale {settings.scale} is not a contraction, the attractor will diverge.")
