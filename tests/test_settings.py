import pytest

from fractal_painting.datatypes import AppSettings, ImageSettings, default_dragon_settings
from fractal_painting.painters import DragonPainter
from fractal_painting.settings import (
    dict_to_dragon_settings, dragon_settings_to_dict, load_dragon_settings, load_settings,
    save_dragon_settings, save_settings,
)
from conftest import RecordingSurface


def test_save_and_load(tmp_path):
    path = tmp_path / "saves" / "settings.yaml"
    settings = AppSettings(image_settings=ImageSettings(width=640, height=480), colormap="viridis")

    save_settings(str(path), settings)

    assert path.exists()
    assert load_settings(str(path)) == settings


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings(str(tmp_path / "nothing.yaml")) == AppSettings()


def test_unreadable_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "broken.yaml"
    path.write_text("image: [1, 2\n")

    assert load_settings(str(path)) == AppSettings()
    assert "Could not read settings" in caplog.text


def test_incomplete_file_gives_defaults(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text("image:\n  width: 10\n")

    assert load_settings(str(path)) == AppSettings()


def test_dragon_settings_dict():
    settings_dict = dragon_settings_to_dict(default_dragon_settings)

    assert settings_dict["iterations"] == default_dragon_settings.iterations_count
    assert settings_dict["shift"] == {"x": 1.0, "y": 0.0}
    assert dict_to_dragon_settings(settings_dict) == default_dragon_settings


def test_dragon_file_values_are_coerced(tmp_path, palette):
    path = tmp_path / "dragon.yaml"
    path.write_text(
        "angles: [0.5, '2.0']\n"
        "shift: {x: 1, y: '0.25'}\n"
        "scale: '0.6'\n"
        "iterations: 1.0e+2\n"
    )

    settings = load_dragon_settings(str(path))

    assert settings.iterations_count == 100
    assert isinstance(settings.iterations_count, int)
    assert settings.scale == 0.6
    assert settings.angle2 == 2.0
    assert (settings.shift_x, settings.shift_y) == (1.0, 0.25)

    surface = RecordingSurface()
    DragonPainter(surface, settings, palette, seed=0).paint()
    assert surface.updates == 2


@pytest.mark.parametrize("body", [
    "angles: [0.5, 2.0]\nshift: {x: 1, y: 0}\nscale: 0.6\niterations: 12.5\n",
    "angles: [0.5, 2.0]\nshift: {x: 1, y: 0}\nscale: half\niterations: 10\n",
    "angles: [0.5, 2.0]\nshift: {x: 1, y: 0}\nscale: 0.6\niterations: .inf\n",
])
def test_malformed_dragon_file_is_rejected_before_painting(tmp_path, body):
    path = tmp_path / "dragon.yaml"
    path.write_text(body)

    with pytest.raises(ValueError):
        load_dragon_settings(str(path))


def test_dragon_file_round_trip(tmp_path):
    path = tmp_path / "dragon.yaml"

    save_dragon_settings(str(path), default_dragon_settings)

    assert load_dragon_settings(str(path)) == default_dragon_settings


def test_unwritable_dragon_path_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        save_dragon_settings(str(tmp_path / "missing" / "dragon.yaml"), default_dragon_settings)
    with pytest.raises(OSError):
        load_dragon_settings(str(tmp_path / "missing.yaml"))
