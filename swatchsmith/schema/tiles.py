"""
Tile table schema: catalog slots, aliases and behavioral flags

ATLAS LAYOUT:
A fixed grid of 16 columns x 47 rows of square tiles. Every slot is addressed
by (column, row) from the upper left. A slot with an empty name is an unused
placeholder; it keeps its coordinate but is never a lookup target.

FLAGS:
Each slot carries a set of independent capabilities. The bit values are the
ones used by existing configuration data, so an integer bitmask can still be
read at the boundary, but inside the package flags are always TileFlags.

    Edge bleed         repeat_sides, repeat_top_bottom,
                       clamp_top, clamp_bottom, clamp_left, clamp_right
    Material hints     decal, cutout_geometry, alpha_overlay, leaves
    Processing         synthesized, black_alpha

EDGE POLICY:
When a tile is grown from NxN to (N+2)x(N+2), each of its four border edges is
exactly one of:
- repeat:      copy the opposite interior edge (tiling textures: stone, dirt)
- clamp:       copy the same interior edge (cutouts, print geometry)
- transparent: zero coverage (decals that must not bleed into neighbours)

A clamp flag decides its own edge. Otherwise the repeat flag of the axis
applies. Edges with neither stay transparent.

SERIALIZATION:
In JSON, flags are a list of names. Preset names (repeat_all, clamp_all, ...)
are accepted on input; output always lists single capabilities in bit order.
"""

from __future__ import annotations
from enum import Enum, Flag
from typing import Annotated, Dict, List, Tuple, Union, Iterable
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer, PlainValidator

#########################
# FLAGS
#########################

class Edge(str, Enum):
    top = "top"
    bottom = "bottom"
    left = "left"
    right = "right"


class EdgePolicy(str, Enum):
    repeat = "repeat"
    clamp = "clamp"
    transparent = "transparent"


class TileFlags(Flag):
    """Capability set of a tile slot."""
    NONE = 0

    REPEAT_SIDES = 0x01
    REPEAT_TOP_BOTTOM = 0x02
    CLAMP_BOTTOM = 0x04
    CLAMP_TOP = 0x08
    CLAMP_RIGHT = 0x10
    CLAMP_LEFT = 0x20

    # bled before rendering only
    DECAL = 0x40
    # bled for rendering and for exported geometry
    CUTOUT_GEOMETRY = 0x80
    ALPHA_OVERLAY = 0x100
    LEAVES = 0x200
    # input used to compute an output tile under a derived name
    SYNTHESIZED = 0x400
    # black texels are treated as alpha 0
    BLACK_ALPHA = 0x8000

    # Presets
    REPEAT_ALL = REPEAT_SIDES | REPEAT_TOP_BOTTOM
    REPEAT_SIDES_ELSE_CLAMP = REPEAT_SIDES | CLAMP_BOTTOM | CLAMP_TOP
    CLAMP_BOTTOM_AND_RIGHT = CLAMP_BOTTOM | CLAMP_RIGHT
    CLAMP_BOTTOM_AND_TOP = CLAMP_BOTTOM | CLAMP_TOP
    CLAMP_ALL_BUT_TOP = CLAMP_BOTTOM | CLAMP_RIGHT | CLAMP_LEFT
    CLAMP_ALL = CLAMP_TOP | CLAMP_BOTTOM | CLAMP_RIGHT | CLAMP_LEFT

    @classmethod
    def parse(cls, value: Union["TileFlags", int, str, Iterable[str], None]) -> "TileFlags":
        """
        Build a flag set from any accepted encoding.

        Args:
            value: TileFlags, integer bitmask, a single name, or a list of names
                   (case-insensitive; presets allowed)

        Raises:
            ValueError: On unknown names or bits
        """
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid tile flags: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown tile flag bits in {value:#x}") from None
        if isinstance(value, str):
            value = [value]

        result = cls.NONE
        for name in value:
            if not isinstance(name, str):
                raise ValueError(f"Tile flag names must be strings, got {name!r}")
            member = cls.__members__.get(name.strip().upper())
            if member is None:
                raise ValueError(f"Unknown tile flag: {name!r}")
            result |= member
        return result

    def capabilities(self) -> List[str]:
        """Single-capability names in bit order (the serialized form)."""
        return [member.name.lower() for member in CAPABILITIES if member in self]

    def edge_policy(self, edge: Edge) -> EdgePolicy:
        """Bleed policy for one border edge."""
        edge = Edge(edge)
        if _CLAMP_BITS[edge] in self:
            return EdgePolicy.clamp
        if _REPEAT_BITS[edge] in self:
            return EdgePolicy.repeat
        return EdgePolicy.transparent

    def edge_policies(self) -> Dict[Edge, EdgePolicy]:
        return {edge: self.edge_policy(edge) for edge in Edge}

    def edge_conflicts(self) -> List[Edge]:
        """Edges that ask for both repeat and clamp."""
        return [
            edge for edge in Edge
            if _CLAMP_BITS[edge] in self and _REPEAT_BITS[edge] in self
        ]


CAPABILITIES: Tuple[TileFlags, ...] = (
    TileFlags.REPEAT_SIDES,
    TileFlags.REPEAT_TOP_BOTTOM,
    TileFlags.CLAMP_BOTTOM,
    TileFlags.CLAMP_TOP,
    TileFlags.CLAMP_RIGHT,
    TileFlags.CLAMP_LEFT,
    TileFlags.DECAL,
    TileFlags.CUTOUT_GEOMETRY,
    TileFlags.ALPHA_OVERLAY,
    TileFlags.LEAVES,
    TileFlags.SYNTHESIZED,
    TileFlags.BLACK_ALPHA,
)

_CLAMP_BITS = {
    Edge.top: TileFlags.CLAMP_TOP,
    Edge.bottom: TileFlags.CLAMP_BOTTOM,
    Edge.left: TileFlags.CLAMP_LEFT,
    Edge.right: TileFlags.CLAMP_RIGHT,
}

_REPEAT_BITS = {
    Edge.top: TileFlags.REPEAT_TOP_BOTTOM,
    Edge.bottom: TileFlags.REPEAT_TOP_BOTTOM,
    Edge.left: TileFlags.REPEAT_SIDES,
    Edge.right: TileFlags.REPEAT_SIDES,
}

FlagSet = Annotated[
    TileFlags,
    PlainValidator(TileFlags.parse),
    PlainSerializer(lambda flags: flags.capabilities(), return_type=List[str]),
]

#########################
# TABLE MODELS
#########################

class TileDescriptor(BaseModel):
    """
    One atlas slot.

    Immutable and hashable, so descriptors can be used as dict keys and shared
    freely between threads.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    coordinate: Tuple[int, int] = Field(..., description="(column, row) of the slot, from the upper left.")
    type_id: int = Field(..., description="Representative block type whose pixels this slot holds.")
    data_value: int = Field(0, description="Sub-variant selector (e.g. illumination level) when variants share a tile.")
    name: str = Field('', description="Canonical name; empty for unused slots.")
    legacy_name: str = Field('', description="Pre-rename canonical name, or empty.")
    flags: FlagSet = Field(TileFlags.NONE, description="Capability set.")

    @property
    def column(self) -> int:
        return self.coordinate[0]

    @property
    def row(self) -> int:
        return self.coordinate[1]

    @property
    def is_placeholder(self) -> bool:
        return not self.name

    @property
    def is_decal(self) -> bool:
        return TileFlags.DECAL in self.flags

    @property
    def is_cutout_geometry(self) -> bool:
        return TileFlags.CUTOUT_GEOMETRY in self.flags

    @property
    def is_alpha_overlay(self) -> bool:
        return TileFlags.ALPHA_OVERLAY in self.flags

    @property
    def is_leaves(self) -> bool:
        return TileFlags.LEAVES in self.flags

    @property
    def is_synthesized(self) -> bool:
        return TileFlags.SYNTHESIZED in self.flags

    @property
    def needs_color_bleed(self) -> bool:
        """Transparent texels must get neighbour colors before filtering."""
        return self.is_decal or self.is_cutout_geometry

    @property
    def edge_policies(self) -> Dict[Edge, EdgePolicy]:
        return self.flags.edge_policies()

    def __str__(self) -> str:
        label = self.name or '<unused>'
        return f"{label} @ ({self.column}, {self.row})"


class AliasEntry(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    alternate_name: str = Field(..., description="Third-party or historical spelling.")
    name: str = Field(..., description="Canonical (or legacy) catalog name it stands for.")


class AtlasGrid(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    columns: int = Field(16, gt=0)
    rows: int = Field(47, gt=0)


class TileTable(BaseModel):
    """Top-level configuration table, as stored in tiles.json."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    grid: AtlasGrid = Field(default_factory=AtlasGrid)
    tiles: Tuple[TileDescriptor, ...] = Field(..., description="Catalog slots in declaration order.")
    aliases: Tuple[AliasEntry, ...] = Field((), description="Ordered alias list; first match wins.")
    excluded: Tuple[str, ...] = Field((), description="Names that must never resolve.")
