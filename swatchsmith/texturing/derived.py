"""
Derived tile synthesis

Tiles flagged SYNTHESIZED are grayscale masks or animation strips that only
become final output after combining with external data: a biome tint (grass,
leaves, water) or a chosen animation frame. The result is emitted under a
derived name (canonical name + suffix) so authored inputs and computed outputs
never collide.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from swatchsmith.schema.tiles import TileDescriptor
from .image_utils import PixelSource, frame_count, to_pixels

logger = logging.getLogger(__name__)

DERIVED_SUFFIX = "_y"

TintLike = Union[str, Sequence[int]]


def parse_tint(tint: TintLike) -> Tuple[int, int, int]:
    """
    Normalize a tint to an (r, g, b) tuple.

    Accepts '#rrggbb' / 'rrggbb' strings or a sequence of three 0-255 ints.
    """
    if isinstance(tint, str):
        value = tint.strip().lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Tint must be #rrggbb, got {tint!r}")
        try:
            return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise ValueError(f"Tint must be #rrggbb, got {tint!r}") from None

    channels = tuple(int(c) for c in tint)
    if len(channels) != 3 or any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"Tint must be three values in 0-255, got {tint!r}")
    return channels


@dataclass(frozen=True)
class DerivedInputs:
    """
    Caller-supplied modifiers for a synthesized tile.

    Attributes:
        tint: RGB multiplier, e.g. a biome grass color
        frame: Frame index into a vertical animation strip
    """
    tint: Optional[TintLike] = None
    frame: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.tint is None and self.frame is None


def derived_name(descriptor: TileDescriptor, suffix: str = DERIVED_SUFFIX) -> str:
    return f"{descriptor.name}{suffix}"


def select_frame(strip: PixelSource, index: int) -> np.ndarray:
    """
    Cut one square frame out of a vertical strip.

    The index wraps around the frame count, matching looping animations.

    Raises:
        DimensionMismatchError: If the height is not a multiple of the width
    """
    pixels = to_pixels(strip)
    frames = frame_count(pixels)
    size = pixels.shape[1]
    start = (index % frames) * size
    return pixels[start:start + size].copy()


def apply_tint(tile: PixelSource, tint: TintLike) -> np.ndarray:
    """Per-channel multiply of RGB by tint/255; alpha untouched."""
    pixels = to_pixels(tile)
    factors = np.array(parse_tint(tint), dtype=np.float64) / 255.0
    rgb = pixels[..., :3].astype(np.float64) * factors
    pixels[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    return pixels


def synthesize_derived(
    descriptor: TileDescriptor,
    base: PixelSource,
    aux: Optional[DerivedInputs] = None,
    suffix: str = DERIVED_SUFFIX
) -> Tuple[str, np.ndarray]:
    """
    Combine a synthesized tile's base with its auxiliary inputs.

    Frame selection happens before tinting. Missing inputs are not an error:
    the base is passed through unchanged under the derived name.

    Args:
        descriptor: Catalog slot; must be flagged SYNTHESIZED
        base: Base tile or vertical strip
        aux: Tint and/or frame; None or empty means pass-through
        suffix: Appended to the canonical name

    Returns:
        Tuple of (derived name, RGBA pixels)

    Raises:
        ValueError: If the descriptor is not synthesized
        DimensionMismatchError: If a frame is requested from a malformed strip
    """
    if not descriptor.is_synthesized:
        raise ValueError(f"{descriptor.name!r} is not a synthesized tile")

    name = derived_name(descriptor, suffix)
    pixels = to_pixels(base)

    if aux is None or aux.is_empty:
        logger.info(f"No auxiliary input for {descriptor.name!r}; using untinted base as {name!r}")
        return name, pixels

    if aux.frame is not None:
        pixels = select_frame(pixels, aux.frame)
    if aux.tint is not None:
        pixels = apply_tint(pixels, aux.tint)

    return name, pixels
