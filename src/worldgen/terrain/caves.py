"""Cave carving with wandering worms."""

import math

import numpy as np
import structlog

from ..state import World
from ..tiles import TileType
from .shapes import disk_window

logger = structlog.get_logger()

MIN_WORLD_SIZE = 16
EDGE_MARGIN = 4
TURN_LIMIT = 0.35
MIN_RADIUS = 1
MAX_RADIUS = 5


def worm_count(width: int, cave_density: float) -> int:
    """Number of worms for a world width."""
    return max(1, round(max(3, width // 32) * cave_density))


def worm_length_range(cave_density: float) -> tuple[int, int]:
    """Inclusive (min, max) step count per worm."""
    length_min = max(30, round(80 * cave_density))
    length_max = max(length_min + 20, round(200 * cave_density))
    return length_min, length_max


def carve_disk(world: World, cx: int, cy: int, radius: int) -> None:
    """Set a filled disk to inactive Air, clipped to the grid."""
    window = disk_window(world.width, world.height, cx, cy, radius)
    if window is None:
        return
    types = world.types[window.rows, window.cols]
    active = world.active[window.rows, window.cols]
    types[window.values] = TileType.AIR
    active[window.values] = False


def carve_caves(world: World, rng: np.random.Generator, cave_density: float = 1.0) -> int:
    """Carve cave tunnels through the lower two-thirds of the world.

    All worms draw from the one stage generator in sequence. A worm stops when
    it reaches a side margin or climbs above height / 5; at the bottom margin
    it is turned back upward instead.

    Args:
        world: Grid to carve.
        rng: Stage random generator.
        cave_density: Count/length multiplier (already clamped).

    Returns:
        Number of worms carved (0 for worlds below 16x16).
    """
    width, height = world.width, world.height
    if width < MIN_WORLD_SIZE or height < MIN_WORLD_SIZE:
        logger.debug("caves_skipped", width=width, height=height)
        return 0

    count = worm_count(width, cave_density)
    length_min, length_max = worm_length_range(cave_density)
    ceiling = height / 5
    total_steps = 0

    for _ in range(count):
        x = float(rng.integers(8, width - 8, endpoint=True))
        y = float(rng.integers(height // 3, height - 8, endpoint=True))
        angle = rng.uniform(0.0, 2.0 * math.pi)
        radius = int(rng.integers(2, 4, endpoint=True))
        length = int(rng.integers(length_min, length_max, endpoint=True))

        for _ in range(length):
            carve_disk(world, int(x), int(y), radius)
            total_steps += 1

            x += math.cos(angle) * 1.5
            y += math.sin(angle) * 1.2
            angle += rng.uniform(-TURN_LIMIT, TURN_LIMIT)
            radius += round(rng.uniform(-TURN_LIMIT, TURN_LIMIT) * 2.0)
            radius = min(max(radius, MIN_RADIUS), MAX_RADIUS)

            if x <= EDGE_MARGIN or x >= width - EDGE_MARGIN or y <= ceiling:
                break
            if y >= height - EDGE_MARGIN:
                y = float(height - EDGE_MARGIN - 1)
                # Keep the horizontal heading, force the vertical one upward
                angle = math.atan2(-abs(math.sin(angle)), math.cos(angle))

    logger.debug("caves_carved", worms=count, steps=total_steps)
    return count
