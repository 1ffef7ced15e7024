"""
Swatchsmith Quick Start Example

This example shows the basic usage of Swatchsmith: resolve a few texture
names and write seam-safe bordered tiles.
"""

import os

from PIL import Image

from swatchsmith import DerivedInputs, TileEngine

os.makedirs("output", exist_ok=True)

engine = TileEngine()

for name in ["grass_top", "Stationary_Water", "textures/block/Oak_Planks.png", "shulker_box"]:
    tile = engine.resolve(name)
    print(f"{name:32} -> {tile if tile else 'not found'}")

print("\nBleeding a plain stone tile...")
stone = Image.new("RGBA", (16, 16), (125, 125, 125, 255))
engine.process("stone", stone).save("output/stone.png")
print("✅ Saved to output/stone.png")

print("\nTinting the grass top mask...")
mask = Image.new("RGBA", (16, 16), (255, 255, 255, 255))
grass = engine.process("grass_top", mask, DerivedInputs(tint="#7cbd6b"))
grass.save(f"output/{grass.name}.png")
print(f"✅ Saved to output/{grass.name}.png")

print("\nDone! Check the output/ directory for your tiles.")
