"""Tile types and their static properties."""

from enum import IntEnum

import numpy as np


class TileType(IntEnum):
    """Tile tags stored in the world grid.

    Values are stable: they are what the grid's uint8 plane holds and what
    save files persist.
    """

    AIR = 0
    DIRT = 1
    STONE = 2
    GRASS = 3
    COPPER_ORE = 4
    IRON_ORE = 5
    GOLD_ORE = 6
    WOOD = 7
    LEAVES = 8
    WOOD_PLANK = 9
    STONE_BRICK = 10
    TREE_TRUNK = 11
    TREE_LEAVES = 12
    ARROW = 13
    COIN = 14

    @property
    def is_solid(self) -> bool:
        """Whether entities collide with this tile."""
        return self not in _PASSABLE_TYPES

    @property
    def drop_type(self) -> "TileType":
        """What the tile yields when it is removed."""
        return _DROP_OVERRIDES.get(self, self)


# Define sets for O(1) lookup
_PASSABLE_TYPES = frozenset({
    TileType.AIR,
    TileType.ARROW,
    TileType.COIN,
    TileType.TREE_TRUNK,
    TileType.TREE_LEAVES,
})

_DROP_OVERRIDES: dict[TileType, TileType] = {
    TileType.TREE_TRUNK: TileType.WOOD,
    TileType.TREE_LEAVES: TileType.LEAVES,
}

ORE_TYPES = frozenset({
    TileType.COPPER_ORE,
    TileType.IRON_ORE,
    TileType.GOLD_ORE,
})

# Indexed by tile value, for whole-grid queries (e.g. SOLID_LOOKUP[world.types])
SOLID_LOOKUP = np.array([t.is_solid for t in TileType], dtype=np.bool_)
DROP_LOOKUP = np.array([t.drop_type for t in TileType], dtype=np.uint8)
