"""CHIP-8 rendering utilities for visualization."""

import numpy as np
from typing import Tuple

from PIL import Image

from chip8core.constants import SCREEN_WIDTH, SCREEN_HEIGHT


def chip8_display_to_rgb(
    frame: np.ndarray,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean framebuffer to RGB array with optional upscaling.

    Args:
        frame: Boolean array of shape (32, 64), or the flat display of length 2048
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    pixels = np.array(frame, dtype=np.bool_).reshape(SCREEN_HEIGHT, SCREEN_WIDTH)
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbour upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def batch_render(
    frames: np.ndarray, scale: int = 4, color_scheme: str = "classic", padding: int = 5
) -> np.ndarray:
    """Render several framebuffers in a grid layout with transparent spacing.

    Args:
        frames: Array of shape (batch_size, 32, 64), e.g. the frames returned by ``run_frames``
        scale: Upscaling factor (smaller for batch rendering)
        color_scheme: Color scheme name
        padding: Transparent pixels between neighbouring frames

    Returns:
        RGBA array showing all frames in a grid
    """
    batch_size = frames.shape[0]
    if batch_size == 0:
        raise ValueError("Cannot render an empty batch of frames")
    on_color, off_color = create_color_scheme(color_scheme)

    grid_cols = int(np.ceil(np.sqrt(batch_size)))
    grid_rows = int(np.ceil(batch_size / grid_cols))

    tile_height, tile_width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    grid_height = grid_rows * tile_height + (grid_rows - 1) * padding
    grid_width = grid_cols * tile_width + (grid_cols - 1) * padding
    grid_image = np.zeros((grid_height, grid_width, 4), dtype=np.uint8)

    for i in range(batch_size):
        row, col = divmod(i, grid_cols)
        y_start = row * (tile_height + padding)
        x_start = col * (tile_width + padding)
        rgb = chip8_display_to_rgb(frames[i], scale, on_color, off_color)
        grid_image[y_start:y_start + tile_height, x_start:x_start + tile_width, :3] = rgb
        grid_image[y_start:y_start + tile_height, x_start:x_start + tile_width, 3] = 255

    return grid_image


def save_frame(frame: np.ndarray, filename: str, scale: int = 8, color_scheme: str = "classic") -> Image.Image:
    """Write a framebuffer to an image file (format chosen from the extension)."""
    on_color, off_color = create_color_scheme(color_scheme)
    image = Image.fromarray(chip8_display_to_rgb(frame, scale, on_color, off_color))
    image.save(filename)
    return image
