"""
Pixel grid helpers

Tiles travel through the engine as numpy RGBA arrays of shape (H, W, 4),
dtype uint8, row 0 at the top. These helpers convert at the PIL boundary.
"""

from typing import Optional, Union

import numpy as np
from PIL import Image

from swatchsmith.exceptions import DimensionMismatchError

PixelSource = Union[Image.Image, np.ndarray]

PLACEHOLDER_COLORS = ((255, 0, 255, 255), (0, 0, 0, 255))


def to_pixels(source: PixelSource) -> np.ndarray:
    """
    Convert a PIL image or array into an RGBA uint8 array.

    Arrays are copied so the caller's buffer is never modified. 2D arrays are
    treated as grayscale, 3-channel arrays as RGB with full alpha.
    """
    if isinstance(source, Image.Image):
        if source.mode != 'RGBA':
            source = source.convert('RGBA')
        return np.array(source, dtype=np.uint8)

    pixels = np.asarray(source)
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)

    if pixels.ndim == 2:
        pixels = np.stack([pixels, pixels, pixels], axis=-1)
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise DimensionMismatchError(f"Expected (H, W, 3|4) pixels, got shape {pixels.shape}")
    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=-1)
    return pixels.copy()


def to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def require_square(pixels: np.ndarray, tile_size: Optional[int] = None) -> int:
    """
    Check that a grid is a square RGBA tile and return its edge length.

    Raises:
        DimensionMismatchError: On any other shape
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise DimensionMismatchError(f"Expected RGBA pixels (H, W, 4), got shape {pixels.shape}")
    height, width = pixels.shape[:2]
    if height == 0 or width == 0:
        raise DimensionMismatchError("Tile is empty")
    if height != width:
        raise DimensionMismatchError(f"Tile must be square, got {width}x{height}")
    if tile_size is not None and width != tile_size:
        raise DimensionMismatchError(f"Expected {tile_size}x{tile_size} tile, got {width}x{height}")
    return width


def frame_count(pixels: np.ndarray) -> int:
    """Number of stacked square frames in a vertical strip (1 for a plain tile)."""
    height, width = pixels.shape[:2]
    if width == 0 or height % width != 0:
        raise DimensionMismatchError(f"{width}x{height} is not a vertical strip of square frames")
    return height // width


def placeholder_tile(size: int = 16) -> np.ndarray:
    """Magenta and black checkerboard used for slots with no input."""
    half = max(1, size // 2)
    ys, xs = np.indices((size, size))
    checker = ((ys // half) + (xs // half)) % 2
    pixels = np.empty((size, size, 4), dtype=np.uint8)
    pixels[checker == 0] = PLACEHOLDER_COLORS[0]
    pixels[checker == 1] = PLACEHOLDER_COLORS[1]
    return pixels
