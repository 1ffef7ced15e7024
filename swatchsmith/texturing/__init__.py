"""
Pixel processing for atlas tiles.

Includes border synthesis, transparent-texel bleeding, derived (tinted or
frame-selected) tiles and fixed-layout atlas packing.
"""
from .atlas_packer import pack_tiles_into_atlas, interior_uv, encode_atlas_png
from .bleed import bleed_transparent_texels, key_black_to_transparent
from .border import synthesize_border, corner_policy, edge_policies, border_regions
from .derived import DerivedInputs, synthesize_derived, apply_tint, select_frame, derived_name
from .image_utils import to_pixels, to_image, placeholder_tile

__all__ = [
    'pack_tiles_into_atlas',
    'interior_uv',
    'encode_atlas_png',
    'bleed_transparent_texels',
    'key_black_to_transparent',
    'synthesize_border',
    'corner_policy',
    'edge_policies',
    'border_regions',
    'DerivedInputs',
    'synthesize_derived',
    'apply_tint',
    'select_frame',
    'derived_name',
    'to_pixels',
    'to_image',
    'placeholder_tile',
]
