"""Dragon den: one large elliptical chamber with a gold shell."""

import math
from dataclasses import dataclass

import numpy as np
import structlog

from ..state import World
from ..tiles import TileType
from .seeding import den_seed
from .shapes import disk_window, ellipse_window

logger = structlog.get_logger()

MIN_WORLD_SIZE = 40
SIDE_MARGIN = 6
SHELL_START = 0.86
SATELLITE_COUNT = 7
SATELLITE_RADIUS = 3


@dataclass(frozen=True)
class DragonDenInfo:
    """Den placement. radius_x == radius_y == 0 means the world has no den."""

    center_x: int
    center_y: int
    radius_x: int
    radius_y: int

    @property
    def is_valid(self) -> bool:
        return self.radius_x > 0 and self.radius_y > 0


NO_DEN = DragonDenInfo(center_x=0, center_y=0, radius_x=0, radius_y=0)


def den_info(world: World, seed: int) -> DragonDenInfo:
    """Locate the den for a world and seed.

    Depends only on (width, height, seed) and draws from its own generator,
    so the answer is the same before generation, after it, and for any config.
    """
    width, height = world.width, world.height
    if width < MIN_WORLD_SIZE or height < MIN_WORLD_SIZE:
        return NO_DEN

    radius_x = min(max(width // 9, 16), 32)
    radius_y = min(max(height // 14, 10), 22)

    rng = np.random.default_rng(den_seed(width, height, seed))

    x_low = radius_x + SIDE_MARGIN
    x_high = width - radius_x - SIDE_MARGIN
    if x_low > x_high:
        x_low = x_high = width // 2
    y_low = max(math.ceil(0.65 * height), radius_y + SIDE_MARGIN)
    y_high = int(0.88 * height)
    if y_low > y_high:
        y_low = y_high

    center_x = int(rng.integers(x_low, x_high, endpoint=True))
    center_y = int(rng.integers(y_low, y_high, endpoint=True))
    return DragonDenInfo(
        center_x=center_x,
        center_y=center_y,
        radius_x=radius_x,
        radius_y=radius_y,
    )


def carve_dragon_den(
    world: World,
    info: DragonDenInfo,
    rng: np.random.Generator,
) -> bool:
    """Hollow the den ellipse, line it with gold and scatter gold clusters.

    Cells with normalized distance < 0.86 become inactive Air; the shell up to
    1.0 becomes active GoldOre. The outermost ring of the grid is never touched.

    Returns:
        False if info marks no den.
    """
    if not info.is_valid:
        return False

    width, height = world.width, world.height
    window = ellipse_window(
        width,
        height,
        info.center_x,
        info.center_y,
        info.radius_x,
        info.radius_y,
        margin=1,
    )
    if window is not None:
        types = world.types[window.rows, window.cols]
        active = world.active[window.rows, window.cols]
        hollow = window.values < SHELL_START
        shell = (window.values >= SHELL_START) & (window.values <= 1.0)
        types[hollow] = TileType.AIR
        active[hollow] = False
        types[shell] = TileType.GOLD_ORE
        active[shell] = True

    for _ in range(SATELLITE_COUNT):
        angle = rng.uniform(0.0, 2.0 * math.pi)
        reach = rng.uniform(0.45, 0.75)
        sx = round(info.center_x + math.cos(angle) * info.radius_x * reach)
        sy = round(info.center_y + math.sin(angle) * info.radius_y * reach)
        cluster = disk_window(width, height, sx, sy, SATELLITE_RADIUS, margin=1)
        if cluster is None:
            continue
        types = world.types[cluster.rows, cluster.cols]
        active = world.active[cluster.rows, cluster.cols]
        types[cluster.values & active] = TileType.GOLD_ORE

    logger.debug(
        "dragon_den_carved",
        center_x=info.center_x,
        center_y=info.center_y,
        radius_x=info.radius_x,
        radius_y=info.radius_y,
    )
    return True
