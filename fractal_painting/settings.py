import logging
import os

import yaml

from fractal_painting.datatypes import AppSettings, DragonSettings, ImageSettings


def settings_to_dict(settings):
    """Convert AppSettings to a dictionary for YAML serialization."""
    return {
        "image": {
            "width": settings.image_settings.width,
            "height": settings.image_settings.height,
        },
        "presentation": {
            "colormap": settings.colormap,
        },
    }


def dict_to_settings(settings_dict):
    """Convert a dictionary to an AppSettings object."""
    image = settings_dict["image"]
    presentation = settings_dict["presentation"]
    return AppSettings(
        image_settings=ImageSettings(width=int(image["width"]), height=int(image["height"])),
        colormap=presentation["colormap"],
    )


def dragon_settings_to_dict(settings):
    return {
        "angles": [float(settings.angle1), float(settings.angle2)],
        "shift": {"x": float(settings.shift_x), "y": float(settings.shift_y)},
        "scale": float(settings.scale),
        "iterations": int(settings.iterations_count),
    }


def dict_to_dragon_settings(settings_dict):
    angle1, angle2 = settings_dict["angles"]
    shift = settings_dict["shift"]
    iterations = float(settings_dict["iterations"])
    if not iterations.is_integer():
        raise ValueError(f"iterations must be a whole number, got {settings_dict['iterations']}")
    return DragonSettings(
        angle1=float(angle1),
        angle2=float(angle2),
        shift_x=float(shift["x"]),
        shift_y=float(shift["y"]),
        scale=float(settings_dict["scale"]),
        iterations_count=int(iterations),
    )


def load_settings(file_path):
    """Load AppSettings from a YAML file, falling back to defaults."""
    try:
        with open(file_path, "r") as file:
            settings = dict_to_settings(yaml.safe_load(file))
    except FileNotFoundError:
        logging.info(f"No settings at {file_path}, using defaults.")
        return AppSettings()
    except (yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        logging.warning(f"Could not read settings from {file_path}: {e}. Using defaults.")
        return AppSettings()

    logging.info(f"Settings loaded from {file_path}")
    return settings


def save_settings(file_path, settings):
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(file_path, "w") as file:
        yaml.dump(settings_to_dict(settings), file, default_flow_style=False)
    logging.info(f"Settings saved to {file_path}")


def save_dragon_settings(file_path, settings):
    with open(file_path, "w") as file:
        yaml.dump(dragon_settings_to_dict(settings), file, default_flow_style=False)
    logging.info(f"Dragon settings saved to {file_path}")


def load_dragon_settings(file_path):
    """Read dragon settings; raises OSError, yaml.YAMLError, KeyError, TypeError or ValueError."""
    with open(file_path, "r") as file:
        settings = dict_to_dragon_settings(yaml.safe_load(file))
    logging.info(f"Dragon settings loaded from {file_path}")
    return settings
