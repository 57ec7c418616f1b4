"""One-pixel-per-tile PNG rendering of a world."""

from pathlib import Path

import numpy as np
from PIL import Image

from ..state import World
from ..tiles import TileType

SKY_COLOR = (135, 190, 235)
CAVE_COLOR = (30, 24, 28)

# Colors for each tile type (RGB)
TILE_COLORS: dict[TileType, tuple[int, int, int]] = {
    TileType.AIR: SKY_COLOR,
    TileType.DIRT: (140, 100, 60),        # Brown
    TileType.STONE: (120, 120, 125),      # Gray
    TileType.GRASS: (60, 150, 60),        # Green
    TileType.COPPER_ORE: (200, 120, 60),  # Copper
    TileType.IRON_ORE: (170, 150, 140),   # Pale gray
    TileType.GOLD_ORE: (235, 200, 50),    # Yellow
    TileType.WOOD: (120, 80, 40),
    TileType.LEAVES: (40, 120, 40),
    TileType.WOOD_PLANK: (180, 140, 90),
    TileType.STONE_BRICK: (150, 150, 160),
    TileType.TREE_TRUNK: (100, 70, 35),   # Dark brown
    TileType.TREE_LEAVES: (30, 110, 30),  # Dark green
    TileType.ARROW: (220, 220, 220),
    TileType.COIN: (250, 220, 0),
}

_PALETTE = np.array([TILE_COLORS[t] for t in TileType], dtype=np.uint8)


def render_preview(world: World, surface: np.ndarray | None = None) -> Image.Image:
    """Render the grid as an RGB image.

    Inactive cells are drawn as sky, or as cave darkness below surface
    when the surface profile is given.
    """
    rgb = _PALETTE[world.types]
    rgb[~world.active] = SKY_COLOR
    if surface is not None:
        rows = np.arange(world.height)[:, None]
        underground = rows > np.asarray(surface)[None, :]
        rgb[~world.active & underground] = CAVE_COLOR
    return Image.fromarray(rgb)


def save_preview(
    world: World,
    path: Path,
    surface: np.ndarray | None = None,
    scale: int = 1,
) -> None:
    """Render and save a PNG, optionally upscaled by an integer factor."""
    image = render_preview(world, surface)
    if scale > 1:
        image = image.resize(
            (world.width * scale, world.height * scale), Image.Resampling.NEAREST
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path)
