"""Tile table schema definitions."""
from .tiles import (
    TileFlags,
    Edge,
    EdgePolicy,
    TileDescriptor,
    AliasEntry,
    AtlasGrid,
    TileTable,
)

__all__ = [
    "TileFlags",
    "Edge",
    "EdgePolicy",
    "TileDescriptor",
    "AliasEntry",
    "AtlasGrid",
    "TileTable",
]
