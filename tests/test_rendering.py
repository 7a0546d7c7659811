"""Tests for rendering utilities."""

import numpy as np
import pytest
import jax.numpy as jnp
from chip8emu.rendering import chip8_display_to_rgb, create_color_scheme, display_to_grid, display_to_text


@pytest.fixture
def display():
    # Pixels (2, 1) and (63, 31)
    return jnp.zeros(2048, dtype=jnp.bool_).at[1 * 64 + 2].set(True).at[2047].set(True)


def test_grid_is_row_major(display):
    grid = display_to_grid(display)
    assert grid.shape == (32, 64)
    assert grid[1, 2]
    assert grid[31, 63]
    assert grid.sum() == 2


def test_rgb_shape_and_colors(display):
    frame = chip8_display_to_rgb(display, scale=3, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert frame.shape == (32 * 3, 64 * 3, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[1 * 3, 2 * 3]) == (1, 2, 3)
    assert tuple(frame[1 * 3 + 2, 2 * 3 + 2]) == (1, 2, 3)
    assert tuple(frame[0, 0]) == (9, 9, 9)


def test_rgb_without_scaling(display):
    frame = chip8_display_to_rgb(display, scale=1)
    assert frame.shape == (32, 64, 3)


def test_wrong_display_shape():
    with pytest.raises(ValueError):
        chip8_display_to_rgb(np.zeros((64, 32), dtype=bool))


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError):
        create_color_scheme("plaid")


def test_display_to_text(display):
    lines = display_to_text(display).splitlines()
    assert len(lines) == 32
    assert lines[1] == ".." + "#" + "." * 61
    assert lines[31].endswith("#")
