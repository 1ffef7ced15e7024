"""
Core Swatchsmith engine API

Provides the TileEngine class that runs the per-tile pipeline (resolve, derive,
bleed, border) and builds atlases, plus the ProcessedTile and AtlasResult
classes for inspecting and saving the output.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
from PIL import Image

from swatchsmith.catalog import NameResolver, default_resolver, load_tile_table, name_from_path
from swatchsmith.exceptions import TileNotFoundError
from swatchsmith.schema.tiles import TileDescriptor, TileFlags
from swatchsmith.texturing.atlas_packer import encode_atlas_png, interior_uv, pack_tiles_into_atlas
from swatchsmith.texturing.bleed import bleed_transparent_texels, key_black_to_transparent
from swatchsmith.texturing.border import synthesize_border
from swatchsmith.texturing.derived import DERIVED_SUFFIX, DerivedInputs, select_frame, synthesize_derived
from swatchsmith.texturing.image_utils import PixelSource, frame_count, placeholder_tile, to_image, to_pixels

logger = logging.getLogger(__name__)


@dataclass
class ProcessedTile:
    """
    A tile after the full pipeline.

    Attributes:
        descriptor: Catalog slot the input resolved to
        name: Output name (derived name for synthesized tiles)
        pixels: (N+2)x(N+2) RGBA pixels with the bled border
        source_name: Name the caller supplied
        derived: True if the derived-tile synthesizer produced this tile
    """
    descriptor: TileDescriptor
    name: str
    pixels: np.ndarray
    source_name: str = ""
    derived: bool = False

    @property
    def interior(self) -> np.ndarray:
        """The NxN tile without its border."""
        return self.pixels[1:-1, 1:-1]

    def to_image(self) -> Image.Image:
        return to_image(self.pixels)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the bordered tile; the format follows the file extension.

        Example:
            >>> engine.process("grass_top", img).save("grass_block_top_y.png")
        """
        self.to_image().save(path)


@dataclass
class AtlasResult:
    """
    A composed atlas with its lookup data.

    Attributes:
        image: RGBA atlas, columns*(N+2) x rows*(N+2)
        uv_map: Canonical name -> [u1, v1, u2, v2] of the slot interior
        tiles: Canonical name -> ProcessedTile for every supplied input
        unresolved: Input names that matched no slot
        missing: Canonical names that had no input (placeholder used)
    """
    image: Image.Image
    uv_map: Dict[str, List[float]]
    tiles: Dict[str, ProcessedTile] = field(default_factory=dict)
    unresolved: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    def save(self, path: Union[str, Path]) -> None:
        self.image.save(path)

    def to_base64(self) -> str:
        return encode_atlas_png(self.image)


class TileEngine:
    """
    Main entry point: map named textures onto atlas slots and make them seam-safe.

    Examples:
        Single tile:
        >>> engine = TileEngine()
        >>> engine.process("textures/block/stone.png", Image.open("stone.png")).save("stone.png")

        Tinted grass:
        >>> tile = engine.process("grass_top", img, DerivedInputs(tint="#7cbd6b"))
        >>> tile.name
        'grass_block_top_y'

        Whole atlas:
        >>> result = engine.build_atlas({"stone": stone_img, "dirt": dirt_img})
        >>> result.save("terrain.png")
    """

    def __init__(
        self,
        table_path: Optional[Union[str, Path]] = None,
        tile_size: int = 16,
        derived_suffix: str = DERIVED_SUFFIX
    ):
        """
        Initialize the engine.

        Args:
            table_path: Tile table JSON. If None, the shared default registry
                        is used ($SWATCHSMITH_TILE_TABLE or the bundled table).
            tile_size: Edge length N of every input tile
            derived_suffix: Appended to canonical names of synthesized output
        """
        if table_path is None:
            self.resolver = default_resolver()
        else:
            self.resolver = NameResolver.from_table(load_tile_table(table_path))
        self.catalog = self.resolver.catalog
        self.tile_size = tile_size
        self.derived_suffix = derived_suffix

    def resolve(self, name: str) -> Optional[TileDescriptor]:
        """
        Resolve a texture name or file path to its slot.

        Returns:
            TileDescriptor, or None if the name is unknown or excluded
        """
        return self.resolver.resolve(name_from_path(name))

    def require(self, name: str) -> TileDescriptor:
        """
        Like resolve(), but raise when nothing matches.

        Raises:
            TileNotFoundError: If the name does not resolve
        """
        tile = self.resolve(name)
        if tile is None:
            raise TileNotFoundError(f"No atlas slot for {name!r}")
        return tile

    def prepare(
        self,
        descriptor: TileDescriptor,
        image: PixelSource,
        aux: Optional[DerivedInputs] = None,
        source_name: str = ""
    ) -> ProcessedTile:
        """
        Run the pixel pipeline for an already resolved slot.

        Order: black keying, derived synthesis, frame 0 of any remaining
        strip, color bleed, border synthesis.

        Raises:
            DimensionMismatchError: If the image is not an N-wide square or strip
        """
        pixels = to_pixels(image)
        name = descriptor.name
        derived = False

        if descriptor.flags & TileFlags.BLACK_ALPHA:
            pixels = key_black_to_transparent(pixels)

        if descriptor.is_synthesized:
            name, pixels = synthesize_derived(descriptor, pixels, aux, self.derived_suffix)
            derived = True
        elif aux is not None and not aux.is_empty:
            logger.debug(f"Ignoring auxiliary input for {descriptor.name!r}: not a synthesized tile")

        frames = frame_count(pixels)
        if frames > 1:
            logger.debug(f"{descriptor.name!r}: using first of {frames} frames")
            pixels = select_frame(pixels, 0)

        if descriptor.needs_color_bleed:
            pixels = bleed_transparent_texels(pixels)

        bordered = synthesize_border(pixels, descriptor.flags, self.tile_size)
        return ProcessedTile(
            descriptor=descriptor,
            name=name,
            pixels=bordered,
            source_name=source_name or descriptor.name,
            derived=derived
        )

    def process(
        self,
        name: str,
        image: PixelSource,
        aux: Optional[DerivedInputs] = None
    ) -> Optional[ProcessedTile]:
        """
        Resolve a name and run its image through the pipeline.

        Args:
            name: Texture name or file path in any supported convention
            image: NxN tile or N-wide vertical strip
            aux: Tint / frame for synthesized tiles

        Returns:
            ProcessedTile, or None (with a warning) if the name is unresolved
        """
        descriptor = self.resolve(name)
        if descriptor is None:
            logger.warning(f"Unresolved texture name {name!r}; caller should substitute a placeholder")
            return None
        return self.prepare(descriptor, image, aux, source_name=name)

    def build_atlas(
        self,
        images: Mapping[str, PixelSource],
        aux: Optional[Mapping[str, DerivedInputs]] = None
    ) -> AtlasResult:
        """
        Process every input and compose the full atlas.

        Args:
            images: Input name (or path) -> tile image
            aux: Input name -> DerivedInputs for synthesized tiles

        Returns:
            AtlasResult with the atlas image and UV rectangles for every slot
        """
        aux = aux or {}
        tiles: Dict[str, ProcessedTile] = {}
        cells: Dict[Tuple[int, int], np.ndarray] = {}
        unresolved: List[str] = []

        for source_name, image in images.items():
            tile = self.process(source_name, image, aux.get(source_name))
            if tile is None:
                unresolved.append(source_name)
                continue
            coordinate = tile.descriptor.coordinate
            if coordinate in cells:
                winner = tiles[tile.descriptor.name].source_name
                logger.warning(f"{source_name!r} resolves to the same slot as {winner!r}; keeping {winner!r}")
                continue
            tiles[tile.descriptor.name] = tile
            cells[coordinate] = tile.pixels

        missing: List[str] = []
        placeholder = placeholder_tile(self.tile_size)
        for descriptor in self.catalog.named_tiles():
            if descriptor.coordinate in cells:
                continue
            missing.append(descriptor.name)
            cells[descriptor.coordinate] = synthesize_border(placeholder, descriptor.flags, self.tile_size)
        if missing:
            logger.warning(f"{len(missing)} slots had no input and use the placeholder tile")

        grid = self.catalog.grid
        atlas = pack_tiles_into_atlas(cells, grid, self.tile_size)
        uv_map = {
            descriptor.name: interior_uv(descriptor.column, descriptor.row, self.tile_size, grid)
            for descriptor in self.catalog.named_tiles()
        }

        logger.info(f"Built atlas: {len(tiles)} tiles, {len(missing)} placeholders, {len(unresolved)} unresolved")
        return AtlasResult(
            image=atlas,
            uv_map=uv_map,
            tiles=tiles,
            unresolved=unresolved,
            missing=missing
        )
