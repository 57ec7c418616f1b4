"""Tests for ore vein placement."""

import numpy as np
import pytest

from worldgen.config import DEFAULT_ORE_TIERS, OreTierConfig
from worldgen.state import World
from worldgen.terrain.ores import (
    depth_band,
    place_ore_tier,
    place_ores,
    stamp_ore,
    vein_count,
    vein_length_range,
)
from worldgen.tiles import ORE_TYPES, TileType

COPPER, IRON, GOLD = DEFAULT_ORE_TIERS


def _stone(width: int, height: int) -> World:
    world = World(width=width, height=height)
    world.types.fill(TileType.STONE)
    world.active.fill(True)
    return world


class TestTierParameters:
    """Tests for per-tier counts and bands."""

    def test_depth_band(self) -> None:
        assert depth_band(COPPER, 200) == (60, 120)
        assert depth_band(IRON, 200) == (110, 176)
        assert depth_band(GOLD, 200) == (156, 196)

    def test_vein_count_width_scaled(self) -> None:
        assert vein_count(COPPER, 400, 1.0) == 28
        assert vein_count(COPPER, 100, 1.0) == 20

    def test_vein_count_grows_with_density(self) -> None:
        assert vein_count(COPPER, 400, 2.0) > vein_count(COPPER, 400, 1.0)
        assert vein_count(GOLD, 100, 0.3) < vein_count(GOLD, 100, 1.0)

    def test_length_grows_with_density(self) -> None:
        assert vein_length_range(COPPER, 1.0) == (10, 18)
        low_min, low_max = vein_length_range(COPPER, 0.3)
        high_min, high_max = vein_length_range(COPPER, 2.5)
        assert low_max < 18 < high_max
        assert 1 <= low_min <= low_max


class TestStampOre:
    """Tests for the ore disk primitive."""

    def test_replaces_stone_and_dirt(self, stone_world: World) -> None:
        stone_world.set_tile(41, 40, TileType.DIRT, True)
        stamp_ore(stone_world, 40, 40, 1, TileType.IRON_ORE)
        assert stone_world.tile(40, 40).type == TileType.IRON_ORE
        assert stone_world.tile(41, 40).type == TileType.IRON_ORE
        assert stone_world.tile(41, 40).active

    def test_skips_air_and_inactive(self, stone_world: World) -> None:
        stone_world.set_tile(40, 40, TileType.AIR, False)
        stone_world.set_tile(41, 40, TileType.STONE, False)
        stamp_ore(stone_world, 40, 40, 1, TileType.IRON_ORE)
        assert stone_world.tile(40, 40).type == TileType.AIR
        assert stone_world.tile(41, 40).type == TileType.STONE

    def test_never_overwrites_other_ore(self, stone_world: World) -> None:
        stone_world.set_tile(40, 40, TileType.COPPER_ORE, True)
        stamp_ore(stone_world, 40, 40, 2, TileType.GOLD_ORE)
        assert stone_world.tile(40, 40).type == TileType.COPPER_ORE

    def test_skips_grass(self, stone_world: World) -> None:
        stone_world.set_tile(40, 40, TileType.GRASS, True)
        stamp_ore(stone_world, 40, 40, 1, TileType.IRON_ORE)
        assert stone_world.tile(40, 40).type == TileType.GRASS


class TestPlaceOres:
    """Tests for full ore placement."""

    @pytest.mark.parametrize("width,height", [(15, 200), (200, 15), (10, 10)])
    def test_small_world_noop(self, width: int, height: int) -> None:
        world = _stone(width, height)
        assert place_ores(world, np.random.default_rng(1)) == {}
        assert not np.isin(world.types, list(ORE_TYPES)).any()

    @pytest.mark.parametrize("density", [0.3, 1.0, 2.5])
    def test_ore_within_bands(self, density: float) -> None:
        world = _stone(400, 200)
        place_ores(world, np.random.default_rng(12345), ore_density=density)
        for tier in DEFAULT_ORE_TIERS:
            min_y, max_y = depth_band(tier, 200)
            rows, _ = np.nonzero(world.types == tier.tile_type)
            assert rows.size > 0
            assert rows.min() >= min_y - tier.max_radius
            assert rows.max() <= max_y + tier.max_radius

    def test_returns_vein_counts(self) -> None:
        world = _stone(400, 200)
        veins = place_ores(world, np.random.default_rng(2))
        assert veins == {
            TileType.COPPER_ORE: 28,
            TileType.IRON_ORE: 22,
            TileType.GOLD_ORE: 18,
        }

    def test_earlier_tier_keeps_contested_cells(self) -> None:
        world = _stone(400, 200)
        rng = np.random.default_rng(8)
        place_ore_tier(world, COPPER, rng)
        copper = world.types == TileType.COPPER_ORE
        place_ore_tier(world, IRON, rng)
        assert np.all(world.types[copper] == TileType.COPPER_ORE)

    def test_ore_keeps_active_flag(self) -> None:
        world = _stone(400, 200)
        place_ores(world, np.random.default_rng(3))
        assert world.active.all()

    def test_empty_band_skipped(self) -> None:
        world = _stone(100, 100)
        flat = OreTierConfig(
            tile_type=TileType.IRON_ORE,
            min_depth_ratio=0.5,
            max_depth_ratio=0.5,
            min_veins=5,
            vein_scale=10,
            min_length=5,
            max_length=5,
            min_radius=1,
            max_radius=1,
        )
        assert place_ore_tier(world, flat, np.random.default_rng(1)) == 0
        assert world.count(TileType.IRON_ORE) == 0

    def test_deterministic(self) -> None:
        a = _stone(300, 150)
        b = _stone(300, 150)
        place_ores(a, np.random.default_rng(77))
        place_ores(b, np.random.default_rng(77))
        assert a.to_bytes() == b.to_bytes()
