"""Column painting: soil and stone strata under the surface."""

import numpy as np
from numpy.typing import NDArray

from ..exceptions import TileOutOfBoundsError
from ..state import World
from ..tiles import TileType
from .noise import value_noise
from .seeding import SOIL_SALT, derive_seed

TRANSITION_BAND = 18
TRANSITION_STONE_THRESHOLD = 0.35
PEAK_STONE_THRESHOLD = 0.7


def soil_depth_range(soil_depth_scale: float) -> tuple[int, int]:
    """Inclusive (min, max) dirt thickness for a soil scale."""
    soil_min = max(6, round(16 * soil_depth_scale))
    soil_max = max(soil_min + 4, round(28 * soil_depth_scale))
    return soil_min, soil_max


def paint_column(
    world: World,
    x: int,
    surface_y: int,
    seed: int,
    soil_depth_scale: float = 1.0,
) -> None:
    """Fill column x: Air above the surface, then Grass, Dirt, a mixed band, Stone.

    Args:
        world: Grid to paint.
        x: Column index.
        surface_y: Surface row, clamped to [0, height - 2].
        seed: World seed.
        soil_depth_scale: Soil thickness multiplier (already clamped).

    Raises:
        TileOutOfBoundsError: If x is outside the grid.
    """
    height = world.height
    if not 0 <= x < world.width:
        raise TileOutOfBoundsError(x, 0, world.width, height)

    soil_seed = derive_seed(seed, SOIL_SALT)
    surface_y = min(max(surface_y, 0), max(height - 2, 0))

    soil_min, soil_max = soil_depth_range(soil_depth_scale)
    span = soil_max - soil_min + 1
    soil_depth = soil_min + int(float(value_noise(x * 37, soil_seed)) * span)
    transition_depth = soil_depth + TRANSITION_BAND

    rows = np.arange(height, dtype=np.int64)
    depth = rows - surface_y
    column: NDArray[np.uint8] = np.full(height, TileType.STONE, dtype=np.uint8)

    near_peak = surface_y <= height // 6
    if near_peak and float(value_noise(x * 53, soil_seed + 1)) > PEAK_STONE_THRESHOLD:
        column[depth == 0] = TileType.STONE
    else:
        column[depth == 0] = TileType.GRASS

    column[(depth > 0) & (depth <= soil_depth)] = TileType.DIRT

    band = (depth > soil_depth) & (depth <= transition_depth)
    cell_noise = value_noise(x * 65537 + rows, soil_seed + 2)
    column[band & (cell_noise <= TRANSITION_STONE_THRESHOLD)] = TileType.DIRT

    column[depth < 0] = TileType.AIR

    world.types[:, x] = column
    world.active[:, x] = depth >= 0


def paint_columns(
    world: World,
    surface: NDArray[np.int32],
    seed: int,
    soil_depth_scale: float = 1.0,
) -> None:
    """Paint every column from its surface row."""
    for x in range(world.width):
        paint_column(world, x, int(surface[x]), seed, soil_depth_scale)
