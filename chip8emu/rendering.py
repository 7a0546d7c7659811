"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from chip8emu.constants import SCREEN_WIDTH, SCREEN_HEIGHT, DISPLAY_SIZE

COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def display_to_grid(display) -> np.ndarray:
    """Reshape the flat framebuffer into a (32 rows, 64 columns) boolean grid."""
    pixels = np.asarray(display, dtype=np.bool_)
    if pixels.shape != (DISPLAY_SIZE,):
        raise ValueError(f"Expected display shape ({DISPLAY_SIZE},), got {pixels.shape}")
    return pixels.reshape(SCREEN_HEIGHT, SCREEN_WIDTH)


def chip8_display_to_rgb(
    display,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (255, 255, 255),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Flat boolean array of 2048 pixels, row-major
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: white)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (32*scale, 64*scale, 3) with uint8 values
    """
    pixels = display_to_grid(display)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Apply upscaling using nearest neighbor interpolation
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "white",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("white", "classic", "amber", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )

    return COLOR_SCHEMES[scheme]


def display_to_text(display, on: str = "#", off: str = ".") -> str:
    """Render the framebuffer as lines of text, one line per pixel row."""
    return "\n".join("".join(on if p else off for p in row) for row in display_to_grid(display))
