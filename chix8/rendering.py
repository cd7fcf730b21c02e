"""Framebuffer to RGB conversion for the pygame window and screenshots."""

import jax.numpy as jnp
import numpy as np
from typing import Tuple

from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Turn the (64, 32) pixel grid into a row-major RGB image.

    Args:
        display: Boolean framebuffer indexed ``[x, y]``
        scale: Each pixel becomes a ``scale`` x ``scale`` block
        on_color: RGB of lit pixels
        off_color: RGB of dark pixels

    Returns:
        uint8 array of shape (32 * scale, 64 * scale, 3)
    """
    pixels = np.asarray(display, dtype=np.bool_)
    if pixels.shape != (SCREEN_WIDTH, SCREEN_HEIGHT):
        raise ValueError(
            f"Expected display shape ({SCREEN_WIDTH}, {SCREEN_HEIGHT}), got {pixels.shape}"
        )

    # Images are indexed [row, column], the framebuffer [x, y]
    lit = pixels.T[:, :, None]
    frame = np.where(
        lit,
        np.asarray(on_color, dtype=np.uint8),
        np.asarray(off_color, dtype=np.uint8),
    )

    if scale > 1:
        frame = frame.repeat(scale, axis=0).repeat(scale, axis=1)
    return frame


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Return ``(on_color, off_color)`` for a scheme in :data:`COLOR_SCHEMES`."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {sorted(COLOR_SCHEMES)}"
        ) from None


def render_frame(display: jnp.ndarray, scale: int = 10, color_scheme: str = "white") -> np.ndarray:
    on_color, off_color = create_color_scheme(color_scheme)
    return chip8_display_to_rgb(display, scale, on_color, off_color)
