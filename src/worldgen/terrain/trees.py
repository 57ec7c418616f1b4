"""Surface tree placement."""

import numpy as np
import structlog
from numpy.typing import NDArray

from ..state import World
from ..tiles import TileType
from .shapes import disk_window

logger = structlog.get_logger()

MIN_WORLD_WIDTH = 8
SIDE_MARGIN = 3
MIN_SURFACE = 6
BOTTOM_CLEARANCE = 12
MAX_NEIGHBOR_STEP = 3
MIN_TREE_HEIGHT = 5
MAX_TREE_HEIGHT = 9

_SUPPORT_TYPES = (TileType.GRASS, TileType.DIRT)


def gap_range(tree_density: float) -> tuple[int, int]:
    """Inclusive (min, max) columns skipped between placement attempts."""
    density = max(0.2, tree_density)
    gap_min = max(2, round(4 / density))
    gap_max = max(gap_min + 2, round(9 / density))
    return gap_min, gap_max


def canopy_radius(tree_height: int) -> int:
    return max(2, tree_height // 3 + 1)


def place_tree(world: World, x: int, surface_y: int, tree_height: int) -> bool:
    """Grow a tree standing on (x, surface_y).

    The surface tile must be active Grass or Dirt with active Dirt below, and
    the trunk span from surface_y - 1 up to surface_y - tree_height must be
    empty. Otherwise nothing is written.

    Returns:
        True if the tree was placed.
    """
    width, height = world.width, world.height
    trunk_top = surface_y - tree_height
    if tree_height < 1 or not 0 <= x < width:
        return False
    if trunk_top < 0 or surface_y + 1 >= height:
        return False

    support = world.tile(x, surface_y)
    below = world.tile(x, surface_y + 1)
    if not support.active or support.type not in _SUPPORT_TYPES:
        return False
    if not below.active or below.type != TileType.DIRT:
        return False
    if world.active[trunk_top:surface_y, x].any():
        return False

    world.types[trunk_top:surface_y, x] = TileType.TREE_TRUNK
    world.active[trunk_top:surface_y, x] = True

    canopy_y = max(0, trunk_top - 1)
    canopy = disk_window(width, height, x, canopy_y, canopy_radius(tree_height))
    if canopy is not None:
        types = world.types[canopy.rows, canopy.cols]
        active = world.active[canopy.rows, canopy.cols]
        open_cells = canopy.values & (~active | (types == TileType.TREE_LEAVES))
        types[open_cells] = TileType.TREE_LEAVES
        active[open_cells] = True

    return True


def scatter_trees(
    world: World,
    surface: NDArray[np.int32],
    rng: np.random.Generator,
    tree_density: float = 1.0,
) -> int:
    """Walk columns left to right, planting trees on gentle surface spots.

    After a successful tree a fresh gap is drawn; after a failed attempt the
    next column is retried after a one-column pause.

    Args:
        world: Grid after carving.
        surface: Surface rows the columns were painted from.
        rng: Stage random generator.
        tree_density: Inverse spacing multiplier.

    Returns:
        Number of trees placed.
    """
    width, height = world.width, world.height
    if width < MIN_WORLD_WIDTH:
        return 0

    gap_min, gap_max = gap_range(tree_density)
    cooldown = int(rng.integers(gap_min, gap_max, endpoint=True))
    planted = 0

    for x in range(SIDE_MARGIN, width - SIDE_MARGIN):
        if cooldown > 0:
            cooldown -= 1
            continue

        surface_y = int(surface[x])
        if surface_y < MIN_SURFACE or surface_y > height - BOTTOM_CLEARANCE:
            continue
        left_step = abs(surface_y - int(surface[x - 1]))
        right_step = abs(surface_y - int(surface[x + 1]))
        if left_step > MAX_NEIGHBOR_STEP or right_step > MAX_NEIGHBOR_STEP:
            continue

        tree_height = int(rng.integers(MIN_TREE_HEIGHT, MAX_TREE_HEIGHT, endpoint=True))
        if place_tree(world, x, surface_y, tree_height):
            planted += 1
            cooldown = int(rng.integers(gap_min, gap_max, endpoint=True))
        else:
            cooldown = 1

    logger.debug("trees_scattered", trees=planted)
    return planted
