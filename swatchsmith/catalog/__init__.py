"""
Tile catalog, alias table and name resolution.

The shipped table (data/tiles.json) is loaded once per process on first use.
Set SWATCHSMITH_TILE_TABLE to point the default registry at another table.

Example:
    >>> from swatchsmith.catalog import resolve
    >>> resolve("grass_top").coordinate
    (0, 0)
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from swatchsmith.exceptions import CatalogError
from swatchsmith.schema.tiles import TileDescriptor, TileTable
from .registry import TileCatalog, fold_name
from .resolver import NameResolver, name_from_path

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "tiles.json"
TABLE_ENV_VAR = "SWATCHSMITH_TILE_TABLE"


def parse_tile_table(data: Dict[str, Any]) -> TileTable:
    """Validate raw table data, converting schema errors into CatalogError."""
    try:
        return TileTable.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid tile table: {e}") from e


def load_tile_table(path: Optional[Union[str, Path]] = None) -> TileTable:
    """
    Load a tile table from JSON.

    Args:
        path: Table file. Defaults to $SWATCHSMITH_TILE_TABLE, then the
              table shipped with the package.

    Raises:
        CatalogError: If the file is missing, unreadable or invalid
    """
    if path is None:
        path = os.environ.get(TABLE_ENV_VAR) or DEFAULT_TABLE_PATH
    path = Path(path)

    if not path.exists():
        raise CatalogError(f"Tile table not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read tile table {path}: {e}") from e

    table = parse_tile_table(data)
    logger.info(f"Loaded tile table {path.name}: {len(table.tiles)} tiles, {len(table.aliases)} aliases, {len(table.excluded)} exclusions")
    return table


@lru_cache(maxsize=None)
def _default_registry(path: Optional[str]) -> NameResolver:
    table = load_tile_table(path)
    return NameResolver.from_table(table)


def default_resolver() -> NameResolver:
    """Process-wide resolver over the default table, built on first call."""
    return _default_registry(os.environ.get(TABLE_ENV_VAR))


def default_catalog() -> TileCatalog:
    return default_resolver().catalog


def resolve(name: str) -> Optional[TileDescriptor]:
    """Resolve a name against the default table."""
    return default_resolver().resolve(name)


__all__ = [
    "TileCatalog",
    "NameResolver",
    "fold_name",
    "name_from_path",
    "parse_tile_table",
    "load_tile_table",
    "default_resolver",
    "default_catalog",
    "resolve",
    "DEFAULT_TABLE_PATH",
]
