"""
Swatchsmith Advanced Example

This example builds a whole terrain atlas from a resource pack directory and
writes the atlas plus its UV map.

Usage:
    python examples/advanced.py path/to/pack/textures/block
"""

import json
import logging
import os
import sys
from pathlib import Path

from PIL import Image

from swatchsmith import DerivedInputs, TileEngine

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

pack_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("textures")
os.makedirs("output", exist_ok=True)

# Load every PNG in the pack
images = {}
for path in sorted(pack_dir.glob("*.png")):
    with Image.open(path) as image:
        images[path.name] = image.convert("RGBA")
print(f"Loaded {len(images)} textures from {pack_dir}")

# Biome colors for the synthesized masks
plains = DerivedInputs(tint="#91bd59")
aux = {
    "grass_block_top.png": plains,
    "grass_block_side.png": plains,
    "oak_leaves.png": DerivedInputs(tint="#77ab2f"),
    "water_still.png": DerivedInputs(tint="#3f76e4", frame=0),
}

engine = TileEngine()
result = engine.build_atlas(images, aux)

result.save("output/terrain.png")
print(f"✅ Saved atlas ({result.image.size[0]}x{result.image.size[1]})")

with open("output/terrain_uv.json", "w") as f:
    json.dump(result.uv_map, f, indent=2)
print("✅ Saved UV map")

print(f"\n{len(result.tiles)} tiles placed, {len(result.missing)} placeholders")
if result.unresolved:
    print("Unresolved inputs:")
    for name in result.unresolved:
        print(f"  {name}")
