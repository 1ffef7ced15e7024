"""
Texel preparation before border synthesis.

Decal and cutout tiles have fully transparent texels whose RGB is usually
black or garbage. Texture filtering blends that color into visible edges, so
those texels get the color of their covered neighbours instead. Coverage
(alpha) is never changed.
"""

from typing import Optional

import numpy as np

from .image_utils import PixelSource, to_pixels

_NEIGHBOURS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def key_black_to_transparent(tile: PixelSource) -> np.ndarray:
    """Give pure black texels alpha 0 (for packs that never set alpha)."""
    pixels = to_pixels(tile)
    black = np.all(pixels[..., :3] == 0, axis=-1)
    pixels[black, 3] = 0
    return pixels


def bleed_transparent_texels(tile: PixelSource, max_passes: Optional[int] = None) -> np.ndarray:
    """
    Flood the color of covered texels outward into fully transparent ones.

    Each pass fills every transparent texel that touches a filled one with the
    mean RGB of its filled 8-neighbours. Passes repeat until nothing changes
    (or max_passes is reached).

    Args:
        tile: RGBA pixels of any shape
        max_passes: Upper bound on passes (default: the larger dimension)

    Returns:
        New array; alpha identical to the input
    """
    pixels = to_pixels(tile)
    height, width = pixels.shape[:2]
    known = pixels[..., 3] > 0
    if known.all() or not known.any():
        return pixels

    rgb = pixels[..., :3].astype(np.float64)
    passes = max_passes if max_passes is not None else max(height, width)

    for _ in range(passes):
        padded_rgb = np.pad(rgb * known[..., None], ((1, 1), (1, 1), (0, 0)))
        padded_known = np.pad(known, 1).astype(np.float64)

        sums = np.zeros_like(rgb)
        counts = np.zeros((height, width), dtype=np.float64)
        for dy, dx in _NEIGHBOURS:
            sums += padded_rgb[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]
            counts += padded_known[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]

        frontier = ~known & (counts > 0)
        if not frontier.any():
            break
        rgb[frontier] = sums[frontier] / counts[frontier][:, None]
        known = known | frontier

    pixels[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    return pixels
