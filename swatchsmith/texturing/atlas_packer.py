"""
Fixed-layout atlas packer.

Every catalog slot owns one (N+2)x(N+2) cell of the atlas, so the bled border
of each tile sits inside its own cell and the interior NxN region keeps the
slot's grid coordinate. Nothing is packed dynamically; the layout is the grid.
"""

import base64
import logging
from io import BytesIO
from typing import Dict, List, Tuple

import numpy as np
from PIL import Image

from swatchsmith.exceptions import DimensionMismatchError
from swatchsmith.schema.tiles import AtlasGrid
from .image_utils import to_image

logger = logging.getLogger(__name__)


def atlas_size(grid: AtlasGrid, tile_size: int) -> Tuple[int, int]:
    """(width, height) in pixels of an atlas of bordered cells."""
    cell = tile_size + 2
    return grid.columns * cell, grid.rows * cell


def cell_origin(column: int, row: int, tile_size: int) -> Tuple[int, int]:
    """Top-left pixel of a slot's bordered cell."""
    cell = tile_size + 2
    return column * cell, row * cell


def interior_uv(column: int, row: int, tile_size: int, grid: AtlasGrid) -> List[float]:
    """
    Normalized [u1, v1, u2, v2] of a slot's NxN interior.

    The border pixels are excluded so sampling inside the UV rectangle only
    reaches the border through filtering.
    """
    atlas_width, atlas_height = atlas_size(grid, tile_size)
    x, y = cell_origin(column, row, tile_size)
    x += 1
    y += 1
    return [
        x / atlas_width,
        y / atlas_height,
        (x + tile_size) / atlas_width,
        (y + tile_size) / atlas_height,
    ]


def pack_tiles_into_atlas(
    tiles: Dict[Tuple[int, int], np.ndarray],
    grid: AtlasGrid,
    tile_size: int
) -> Image.Image:
    """
    Paste bordered tiles into their grid cells.

    Args:
        tiles: (column, row) -> (N+2)x(N+2) RGBA pixels
        grid: Atlas grid dimensions
        tile_size: Interior size N

    Returns:
        RGBA atlas image; cells without a tile stay transparent

    Raises:
        DimensionMismatchError: If a tile is not (N+2)x(N+2)
    """
    atlas_width, atlas_height = atlas_size(grid, tile_size)
    atlas = np.zeros((atlas_height, atlas_width, 4), dtype=np.uint8)
    cell = tile_size + 2

    for (column, row), pixels in tiles.items():
        if pixels.shape != (cell, cell, 4):
            raise DimensionMismatchError(
                f"Tile for ({column}, {row}) is {pixels.shape[1]}x{pixels.shape[0]}, expected {cell}x{cell}"
            )
        x, y = cell_origin(column, row, tile_size)
        atlas[y:y + cell, x:x + cell] = pixels

    logger.info(f"Packed {len(tiles)} tiles into {atlas_width}x{atlas_height} atlas ({grid.columns}x{grid.rows} grid)")
    return to_image(atlas)


def encode_atlas_png(atlas: Image.Image) -> str:
    """Base64-encoded PNG, for embedding an atlas in JSON model files."""
    buf = BytesIO()
    atlas.save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode('utf-8')
