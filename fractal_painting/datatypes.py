from dataclasses import dataclass, field

import numpy as np


@dataclass
class DragonSettings:
    angle1: float  # rotation of the first map, radians
    angle2: float  # rotation of the second map, radians
    shift_x: float  # translation of the second map, fraction of the surface size
    shift_y: float
    scale: float  # contraction applied by both maps
    iterations_count: int


default_dragon_settings = DragonSettings(
    angle1=np.pi / 4,
    angle2=3 * np.pi / 4,
    shift_x=1.0,
    shift_y=0.0,
    scale=1 / np.sqrt(2),
    iterations_count=200_000,
)


@dataclass(frozen=True)
class Palette:
    background_color: tuple = (0, 0, 0)
    primary_color: tuple = (255, 255, 0)


@dataclass
class ImageSettings:
    width: int = 1000
    height: int = 800


@dataclass
class AppSettings:
    image_settings: ImageSettings = field(default_factory=ImageSettings)
    colormap: str = "inferno"
