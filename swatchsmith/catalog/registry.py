"""
Tile catalog: the immutable registry of atlas slots.

Built once from a TileTable and read-only afterwards. Construction checks the
table's invariants and refuses to build from a corrupt table.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, Optional, Tuple

from swatchsmith.exceptions import CatalogError
from swatchsmith.schema.tiles import AtlasGrid, TileDescriptor, TileTable

logger = logging.getLogger(__name__)


def fold_name(name: str) -> str:
    """
    Canonical case-folding for every name comparison in the package.

    Upper-casing first makes fold(x) == fold(x.upper()) hold for letters
    like the dotless i, which casefold() alone leaves distinct.
    """
    return name.strip().upper().casefold()


class TileCatalog:
    """
    Lookup of tile descriptors by name and by atlas coordinate.

    Canonical names are indexed before legacy names, so a legacy spelling can
    never shadow another slot's canonical name. A legacy name shared by several
    slots maps to the first one declared.
    """

    def __init__(self, tiles: Tuple[TileDescriptor, ...], grid: Optional[AtlasGrid] = None):
        self.grid = grid or AtlasGrid()
        self._tiles = tuple(tiles)

        by_coordinate: Dict[Tuple[int, int], TileDescriptor] = {}
        by_name: Dict[str, TileDescriptor] = {}

        for tile in self._tiles:
            column, row = tile.coordinate
            if not (0 <= column < self.grid.columns and 0 <= row < self.grid.rows):
                raise CatalogError(
                    f"Tile {tile.name or '<unused>'!r} at ({column}, {row}) is outside the "
                    f"{self.grid.columns}x{self.grid.rows} grid"
                )
            if tile.coordinate in by_coordinate:
                other = by_coordinate[tile.coordinate]
                raise CatalogError(
                    f"Duplicate coordinate ({column}, {row}): {other.name!r} and {tile.name!r}"
                )
            conflicts = tile.flags.edge_conflicts()
            if conflicts:
                edges = ', '.join(edge.value for edge in conflicts)
                raise CatalogError(f"Tile {tile.name!r} asks for both repeat and clamp on: {edges}")
            by_coordinate[tile.coordinate] = tile

            if tile.is_placeholder:
                continue
            key = fold_name(tile.name)
            if key in by_name:
                raise CatalogError(f"Duplicate tile name {tile.name!r}")
            by_name[key] = tile

        for tile in self._tiles:
            if tile.is_placeholder or not tile.legacy_name:
                continue
            key = fold_name(tile.legacy_name)
            if key in by_name:
                if by_name[key] is not tile:
                    logger.debug(f"Legacy name {tile.legacy_name!r} of {tile.name!r} already taken by {by_name[key].name!r}")
                continue
            by_name[key] = tile

        self._by_coordinate = MappingProxyType(by_coordinate)
        self._by_name = MappingProxyType(by_name)

    @classmethod
    def from_table(cls, table: TileTable) -> "TileCatalog":
        return cls(table.tiles, table.grid)

    def lookup(self, name: str) -> Optional[TileDescriptor]:
        """Case-insensitive match against canonical or legacy names."""
        if not name:
            return None
        return self._by_name.get(fold_name(name))

    def at(self, column: int, row: int) -> Optional[TileDescriptor]:
        """Slot at a grid coordinate, placeholders included."""
        return self._by_coordinate.get((column, row))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[TileDescriptor]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def named_tiles(self) -> Iterator[TileDescriptor]:
        """Every slot that can be a lookup target."""
        return (tile for tile in self._tiles if not tile.is_placeholder)

    def placeholders(self) -> Iterator[TileDescriptor]:
        return (tile for tile in self._tiles if tile.is_placeholder)
