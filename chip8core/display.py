"""CHIP-8 framebuffer operations."""

import jax.numpy as jnp
import numpy as np

from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH
from chip8core.errors import OutOfBounds

# Pre-computed pixel coordinates for the flat row-major display
pixel_x = jnp.arange(SCREEN_WIDTH * SCREEN_HEIGHT) % SCREEN_WIDTH
pixel_y = jnp.arange(SCREEN_WIDTH * SCREEN_HEIGHT) // SCREEN_WIDTH


def pixel_index(x: int, y: int) -> int:
    """Linear index of pixel (x, y)."""
    if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
        raise OutOfBounds(f"{x}:{y} is out of bounds for the display of size {SCREEN_WIDTH}x{SCREEN_HEIGHT}")
    return x + y * SCREEN_WIDTH


def draw(display: jnp.ndarray, x: int, y: int, flip: bool) -> tuple[jnp.ndarray, bool]:
    """XOR a single pixel, reporting whether it went from on to off."""
    index = pixel_index(x, y)
    old = bool(display[index])
    new = old != bool(flip)
    return display.at[index].set(new), old and not new


def draw_sprite(display: jnp.ndarray, x: int, y: int, rows: jnp.ndarray) -> tuple[jnp.ndarray, bool]:
    """XOR an 8-pixel-wide sprite with its top-left corner at (x, y).

    Bit 7 of each row byte is the leftmost column. Pixels that fall past the
    right or bottom edge are clipped rather than wrapped.
    """
    height = len(rows)
    if height == 0:
        return display, False

    in_sprite = (
        (pixel_x >= x) & (pixel_x < x + SPRITE_WIDTH) &
        (pixel_y >= y) & (pixel_y < y + height)
    )

    row_offset = jnp.clip(pixel_y - y, 0, height - 1)
    col_offset = jnp.clip(pixel_x - x, 0, SPRITE_WIDTH - 1)
    sprite_bytes = jnp.asarray(rows, dtype=jnp.uint8)[row_offset]
    sprite = ((sprite_bytes >> (7 - col_offset)) & 1).astype(jnp.bool_) & in_sprite

    collided = bool(jnp.any(display & sprite))
    return display ^ sprite, collided


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def framebuffer(display: jnp.ndarray) -> np.ndarray:
    """Snapshot of the display as a (height, width) boolean array."""
    frame = np.array(display, dtype=np.bool_).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    frame.flags.writeable = False
    return frame
