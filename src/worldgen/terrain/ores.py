"""Ore vein placement by depth band."""

import math

import numpy as np
import structlog

from ..config import DEFAULT_ORE_TIERS, OreTierConfig
from ..state import World
from ..tiles import TileType
from .shapes import disk_window

logger = structlog.get_logger()

MIN_WORLD_SIZE = 16
TURN_LIMIT = 0.35

_REPLACEABLE = np.array([TileType.STONE, TileType.DIRT], dtype=np.uint8)


def depth_band(tier: OreTierConfig, height: int) -> tuple[int, int]:
    """Inclusive (min_y, max_y) rows of a tier's band."""
    min_y = min(max(int(tier.min_depth_ratio * height), 0), height - 1)
    max_y = min(max(int(tier.max_depth_ratio * height), 0), height - 1)
    return min_y, max_y


def vein_count(tier: OreTierConfig, width: int, ore_density: float) -> int:
    """Veins for a tier: a density-scaled floor, or one per N columns."""
    scaled_min = max(1, round(tier.min_veins * ore_density))
    spacing = max(1, round(tier.vein_scale / ore_density))
    return max(scaled_min, width // spacing)


def vein_length_range(tier: OreTierConfig, ore_density: float) -> tuple[int, int]:
    """Inclusive (min, max) steps per vein, scaled by ore density."""
    length_min = max(1, round(tier.min_length * ore_density))
    length_max = max(length_min, round(tier.max_length * ore_density))
    return length_min, length_max


def stamp_ore(world: World, cx: int, cy: int, radius: int, ore: TileType) -> None:
    """Turn active Stone/Dirt within a disk into ore, keeping active flags."""
    window = disk_window(world.width, world.height, cx, cy, radius)
    if window is None:
        return
    types = world.types[window.rows, window.cols]
    active = world.active[window.rows, window.cols]
    target = window.values & active & np.isin(types, _REPLACEABLE)
    types[target] = ore


def place_ore_tier(
    world: World,
    tier: OreTierConfig,
    rng: np.random.Generator,
    ore_density: float = 1.0,
) -> int:
    """Walk veins of one tier inside its depth band.

    A vein stops when it leaves [1, width - 1) horizontally or its band
    vertically, so every stamped disk is centred inside the band.

    Returns:
        Number of veins walked (0 when the band is empty).
    """
    width, height = world.width, world.height
    min_y, max_y = depth_band(tier, height)
    if min_y >= max_y:
        return 0

    count = vein_count(tier, width, ore_density)
    length_min, length_max = vein_length_range(tier, ore_density)

    for _ in range(count):
        x = float(rng.integers(0, width - 1, endpoint=True))
        y = float(rng.integers(min_y, max_y, endpoint=True))
        angle = rng.uniform(0.0, 2.0 * math.pi)
        length = int(rng.integers(length_min, length_max, endpoint=True))
        radius = int(rng.integers(tier.min_radius, tier.max_radius, endpoint=True))

        for _ in range(length):
            stamp_ore(world, round(x), round(y), radius, tier.tile_type)

            x += math.cos(angle)
            y += math.sin(angle) * 0.9
            angle += rng.uniform(-TURN_LIMIT, TURN_LIMIT)
            radius += round(rng.uniform(-TURN_LIMIT, TURN_LIMIT) * 2.0)
            radius = min(max(radius, tier.min_radius), tier.max_radius)

            if x < 1 or x >= width - 1 or y < min_y or y > max_y:
                break

    return count


def place_ores(
    world: World,
    rng: np.random.Generator,
    ore_density: float = 1.0,
    tiers: tuple[OreTierConfig, ...] = DEFAULT_ORE_TIERS,
) -> dict[TileType, int]:
    """Place every ore tier in order; later tiers never overwrite earlier ore.

    Returns:
        Mapping of ore type to veins walked. Empty for worlds below 16x16.
    """
    if world.width < MIN_WORLD_SIZE or world.height < MIN_WORLD_SIZE:
        logger.debug("ores_skipped", width=world.width, height=world.height)
        return {}

    veins: dict[TileType, int] = {}
    for tier in tiers:
        veins[tier.tile_type] = place_ore_tier(world, tier, rng, ore_density)
        logger.debug(
            "ore_tier_placed",
            ore=tier.tile_type.name.lower(),
            veins=veins[tier.tile_type],
        )
    return veins
