"""
Name resolution: arbitrary texture names -> catalog slots.

Order of precedence, highest first:
    1. exclusion set   - retired names never resolve
    2. catalog         - canonical and legacy names are authoritative
    3. alias table     - community spellings, first entry wins
"""

import logging
from pathlib import PurePosixPath, PureWindowsPath
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Optional

from swatchsmith.exceptions import CatalogError
from swatchsmith.schema.tiles import AliasEntry, TileDescriptor, TileTable
from .registry import TileCatalog, fold_name

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ('.png', '.tga', '.jpg', '.jpeg', '.bmp', '.gif', '.webp', '.tif', '.tiff')


def name_from_path(path: str) -> str:
    """
    Reduce a texture file path to the bare name used for resolution.

    Examples:
        >>> name_from_path("textures/block/Oak_Planks.png")
        'Oak_Planks'
        >>> name_from_path("C:\\\\packs\\\\stone.TGA")
        'stone'
    """
    name = PureWindowsPath(PurePosixPath(path).name).name
    lowered = name.lower()
    for ext in IMAGE_EXTENSIONS:
        if lowered.endswith(ext):
            return name[:-len(ext)]
    return name


class NameResolver:
    """
    Maps input names onto catalog descriptors.

    Immutable after construction; resolve() is a pure lookup and safe to call
    from any number of threads.

    Example:
        >>> resolver = NameResolver(catalog, table.aliases, table.excluded)
        >>> resolver.resolve("Stationary_Water").coordinate
        (15, 13)
    """

    def __init__(
        self,
        catalog: TileCatalog,
        aliases: Iterable[AliasEntry] = (),
        excluded: Iterable[str] = ()
    ):
        self.catalog = catalog
        self._excluded: FrozenSet[str] = frozenset(fold_name(name) for name in excluded)

        alias_map: Dict[str, TileDescriptor] = {}
        for entry in aliases:
            target = catalog.lookup(entry.name)
            if target is None:
                raise CatalogError(
                    f"Alias {entry.alternate_name!r} points to unknown tile {entry.name!r}"
                )
            key = fold_name(entry.alternate_name)
            if key in alias_map:
                logger.debug(f"Ignoring repeated alias {entry.alternate_name!r}; first entry wins")
                continue
            alias_map[key] = target
        self._aliases = MappingProxyType(alias_map)

    @classmethod
    def from_table(cls, table: TileTable, catalog: Optional[TileCatalog] = None) -> "NameResolver":
        catalog = catalog or TileCatalog.from_table(table)
        return cls(catalog, table.aliases, table.excluded)

    def is_excluded(self, name: str) -> bool:
        return fold_name(name) in self._excluded

    def resolve(self, raw_name: str) -> Optional[TileDescriptor]:
        """
        Resolve a name to its catalog slot.

        Args:
            raw_name: Name in any case and any supported convention

        Returns:
            The matching TileDescriptor, or None if nothing matches or the
            name is excluded
        """
        key = fold_name(raw_name or '')
        if not key:
            return None

        if key in self._excluded:
            logger.debug(f"{raw_name!r}: excluded")
            return None

        tile = self.catalog.lookup(key)
        if tile is not None:
            logger.debug(f"{raw_name!r}: catalog -> {tile}")
            return tile

        tile = self._aliases.get(key)
        if tile is not None:
            logger.debug(f"{raw_name!r}: alias -> {tile}")
            return tile

        logger.debug(f"{raw_name!r}: not found")
        return None

    def __len__(self) -> int:
        return len(self._aliases)
