"""
Border synthesis

Grows an NxN tile to (N+2)x(N+2) by adding a one-pixel border, so bilinear
sampling at the tile edge in an atlas never picks up a foreign neighbour.

    +---+---------------+---+
    |TL |      top      |TR |
    +---+---------------+---+
    |   |               |   |
    | L |   source NxN  | R |
    |   |               |   |
    +---+---------------+---+
    |BL |    bottom     |BR |
    +---+---------------+---+

Each edge is repeat, clamp or transparent (see TileFlags.edge_policy). A corner
combines its two edges: transparent wins over everything, clamp wins over
repeat, and only two repeat edges wrap to the diagonally opposite pixel.
"""

from typing import Dict, Iterable, Optional, Tuple, Union

import numpy as np

from swatchsmith.schema.tiles import Edge, EdgePolicy, TileFlags
from .image_utils import PixelSource, require_square, to_pixels

FlagsLike = Union[TileFlags, int, Iterable[str]]

# (top|bottom, left|right) -> (border pixel, nearest source corner, diagonal source corner)
_CORNERS: Dict[Tuple[Edge, Edge], Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]]] = {
    (Edge.top, Edge.left): ((0, 0), (0, 0), (-1, -1)),
    (Edge.top, Edge.right): ((0, -1), (0, -1), (-1, 0)),
    (Edge.bottom, Edge.left): ((-1, 0), (-1, 0), (0, -1)),
    (Edge.bottom, Edge.right): ((-1, -1), (-1, -1), (0, 0)),
}


def edge_policies(flags: FlagsLike) -> Dict[Edge, EdgePolicy]:
    return TileFlags.parse(flags).edge_policies()


def corner_policy(first: EdgePolicy, second: EdgePolicy) -> EdgePolicy:
    """Combine the policies of the two edges meeting at a corner."""
    if EdgePolicy.transparent in (first, second):
        return EdgePolicy.transparent
    if first == EdgePolicy.repeat and second == EdgePolicy.repeat:
        return EdgePolicy.repeat
    return EdgePolicy.clamp


def _edge_source(source: np.ndarray, edge: Edge, policy: EdgePolicy) -> Optional[np.ndarray]:
    """Source row/column copied to a border edge (None for transparent)."""
    if policy == EdgePolicy.transparent:
        return None
    repeat = policy == EdgePolicy.repeat
    if edge == Edge.top:
        return source[-1] if repeat else source[0]
    if edge == Edge.bottom:
        return source[0] if repeat else source[-1]
    if edge == Edge.left:
        return source[:, -1] if repeat else source[:, 0]
    return source[:, 0] if repeat else source[:, -1]


def synthesize_border(tile: PixelSource, flags: FlagsLike, tile_size: Optional[int] = None) -> np.ndarray:
    """
    Add a one-pixel bleed border around a square tile.

    Args:
        tile: NxN source tile (PIL image or RGBA array)
        flags: Tile flags deciding each edge's policy
        tile_size: Expected N; checked when given

    Returns:
        New (N+2)x(N+2) RGBA array with the source in the interior

    Raises:
        DimensionMismatchError: If the tile is not square (or not tile_size)
    """
    source = to_pixels(tile)
    size = require_square(source, tile_size)
    policies = edge_policies(flags)

    result = np.zeros((size + 2, size + 2, 4), dtype=np.uint8)
    result[1:-1, 1:-1] = source

    edge_slices = {
        Edge.top: (0, slice(1, -1)),
        Edge.bottom: (-1, slice(1, -1)),
        Edge.left: (slice(1, -1), 0),
        Edge.right: (slice(1, -1), -1),
    }
    for edge, target in edge_slices.items():
        values = _edge_source(source, edge, policies[edge])
        if values is not None:
            result[target] = values

    for (vertical, horizontal), (target, nearest, diagonal) in _CORNERS.items():
        policy = corner_policy(policies[vertical], policies[horizontal])
        if policy == EdgePolicy.repeat:
            result[target] = source[diagonal]
        elif policy == EdgePolicy.clamp:
            result[target] = source[nearest]

    return result


def border_regions(bordered: np.ndarray) -> Dict[str, np.ndarray]:
    """Views of the border strips and corners of an (N+2)x(N+2) tile."""
    return {
        'top': bordered[0, 1:-1],
        'bottom': bordered[-1, 1:-1],
        'left': bordered[1:-1, 0],
        'right': bordered[1:-1, -1],
        'top_left': bordered[0, 0],
        'top_right': bordered[0, -1],
        'bottom_left': bordered[-1, 0],
        'bottom_right': bordered[-1, -1],
        'interior': bordered[1:-1, 1:-1],
    }
