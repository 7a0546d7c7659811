"""Tests for configuration loading."""

import pytest
from omegaconf.errors import OmegaConfBaseException
from chip8emu import Chip8Config, load_config


def test_defaults():
    config = load_config()
    assert config == Chip8Config()
    assert config.ticks_per_frame == 10
    assert config.fps == 60
    assert config.extended is False
    assert config.bitplane_sprites is False


def test_overrides_are_typed():
    config = load_config(["ticks_per_frame=15", "extended=true", "color_scheme=amber", "log_level=DEBUG"])
    assert config.ticks_per_frame == 15
    assert config.extended is True
    assert config.color_scheme == "amber"
    assert config.log_level == "DEBUG"


def test_unknown_key_rejected():
    with pytest.raises(OmegaConfBaseException):
        load_config(["turbo=true"])


def test_wrong_type_rejected():
    with pytest.raises(OmegaConfBaseException):
        load_config(["ticks_per_frame=fast"])


@pytest.mark.parametrize("field,value", [
    ("ticks_per_frame", 0), ("fps", -1), ("scale", 0), ("frames", -5), ("color_scheme", "nope"),
])
def test_invalid_values(field, value):
    with pytest.raises(ValueError):
        Chip8Config(**{field: value})


def test_invalid_log_level():
    with pytest.raises(ValueError):
        load_config(["log_level=LOUD"])


def test_config_is_immutable():
    config = Chip8Config()
    assert config.replace(fps=30).fps == 30
    assert config.fps == 60


def test_unknown_color_scheme_override():
    with pytest.raises(ValueError, match="color scheme"):
        load_config(["color_scheme=nope"])
