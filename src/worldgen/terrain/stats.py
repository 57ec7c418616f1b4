"""Terrain statistics for logging and validation."""

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..state import World
from ..tiles import SOLID_LOOKUP, TileType


def tile_counts(world: World) -> dict[TileType, int]:
    """Histogram of tile types present in the grid."""
    counts = np.bincount(world.types.ravel(), minlength=len(TileType))
    return {
        tile_type: int(counts[tile_type])
        for tile_type in TileType
        if counts[tile_type] > 0
    }


def underground_mask(world: World, surface: NDArray[np.int32]) -> NDArray[np.bool_]:
    """Cells strictly below each column's surface row."""
    rows = np.arange(world.height)[:, None]
    return rows > np.asarray(surface)[None, :]


def count_cave_pockets(world: World, surface: NDArray[np.int32]) -> int:
    """Number of connected empty regions below the surface."""
    empty = ~world.active & underground_mask(world, surface)
    _, count = ndimage.label(empty)
    return int(count)


def floating_solid_clusters(world: World) -> int:
    """Number of solid terrain components not connected to the bottom row."""
    solid = world.active & SOLID_LOOKUP[world.types]
    labels, count = ndimage.label(solid)
    if count == 0:
        return 0
    grounded = np.unique(labels[-1, :])
    return int(count - np.count_nonzero(grounded))
