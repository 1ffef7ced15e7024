"""
Swatchsmith - Resolve texture names to atlas slots and synthesize seam-safe borders

Maps textures named under many conventions (old and new names, community
packs, other editions) onto a fixed 16x47 terrain atlas, then grows each tile
by a one-pixel border so filtered sampling never bleeds between slots.
"""

__version__ = "0.1.0"

from swatchsmith.catalog import resolve
from swatchsmith.engine import AtlasResult, ProcessedTile, TileEngine
from swatchsmith.schema.tiles import TileDescriptor, TileFlags
from swatchsmith.texturing.border import synthesize_border
from swatchsmith.texturing.derived import DerivedInputs, synthesize_derived

__all__ = [
    "TileEngine",
    "ProcessedTile",
    "AtlasResult",
    "TileDescriptor",
    "TileFlags",
    "DerivedInputs",
    "resolve",
    "synthesize_border",
    "synthesize_derived",
]
