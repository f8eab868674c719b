"""Framebuffer rendering utilities for visualization."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np

from vipcore.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]


def unpack_framebuffer(display: jnp.ndarray) -> np.ndarray:
    """Packed framebuffer to a (32, 64) bool array indexed ``[y, x]``."""
    packed = np.asarray(display, dtype=np.uint8)
    return np.unpackbits(packed).reshape(SCREEN_HEIGHT, SCREEN_WIDTH).astype(np.bool_)


def display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (0, 255, 0),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Paint the packed framebuffer as an RGB image.

    Args:
        display: Packed uint8 framebuffer of 256 bytes
        scale: Side length in image pixels of one display pixel
        on_color: RGB of lit pixels
        off_color: RGB of dark pixels

    Returns:
        uint8 array of shape (32*scale, 64*scale, 3), rows first
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")
    pixels = unpack_framebuffer(display)

    rgb_frame = np.empty((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    if scale > 1:
        rgb_frame = rgb_frame.repeat(scale, axis=0).repeat(scale, axis=1)
    return rgb_frame


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Look up a named (on_color, off_color) preset.

    Available: "classic", "amber", "white", "blue", "retro", "vip".
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),
        "white": ((255, 255, 255), (0, 0, 0)),
        "blue": ((0, 255, 255), (0, 0, 64)),
        "retro": ((255, 255, 0), (64, 0, 64)),
        "vip": ((230, 230, 210), (30, 30, 30)),  # Grey phosphor
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def render_ascii(display: jnp.ndarray, on: str = "#", off: str = ".") -> str:
    """Text dump of the framebuffer, one line per row."""
    pixels = unpack_framebuffer(display)
    return "\n".join("".join(on if bit else off for bit in row) for row in pixels)
