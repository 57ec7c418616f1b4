"""Tests for world validation."""

import numpy as np

from worldgen.state import World
from worldgen.terrain.den import DragonDenInfo, carve_dragon_den
from worldgen.terrain.validation import ValidationResult, validate_world
from worldgen.tiles import TileType


class TestValidationResult:
    """Tests for the result container."""

    def test_starts_passed(self) -> None:
        result = ValidationResult()
        assert result.passed
        assert result.errors == []
        assert result.warnings == []

    def test_error_fails(self) -> None:
        result = ValidationResult()
        result.add_error("broken")
        assert not result.passed
        assert result.errors == ["broken"]

    def test_warning_keeps_pass(self) -> None:
        result = ValidationResult()
        result.add_warning("odd")
        assert result.passed
        assert result.warnings == ["odd"]


class TestValidateWorld:
    """Tests for structural checks."""

    def test_painted_world_passes(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        result = validate_world(flat_world, flat_surface)
        assert result.passed
        assert result.warnings == []

    def test_steep_surface(self, flat_world: World) -> None:
        surface = np.full(200, 15, dtype=np.int32)
        surface[100:] = 35
        result = validate_world(flat_world, surface)
        assert not result.passed
        assert "column 100" in result.errors[0]

    def test_ore_outside_band(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        # copper band on a 40-row world is rows 12-24
        flat_world.set_tile(50, 35, TileType.COPPER_ORE, active=True)
        result = validate_world(flat_world, flat_surface)
        assert not result.passed
        assert "COPPER_ORE" in result.errors[0]

    def test_ore_inside_band(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        flat_world.set_tile(50, 20, TileType.COPPER_ORE, active=True)
        assert validate_world(flat_world, flat_surface).passed

    def test_floating_trunk(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        flat_world.set_tile(60, 5, TileType.TREE_TRUNK, active=True)
        result = validate_world(flat_world, flat_surface)
        assert not result.passed
        assert "column 60" in result.errors[0]

    def test_floating_cluster_warns(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        flat_world.set_tile(60, 5, TileType.STONE, active=True)
        result = validate_world(flat_world, flat_surface)
        assert result.passed
        assert len(result.warnings) == 1

    def test_den_gold_is_exempt(self, stone_world: World) -> None:
        info = DragonDenInfo(center_x=64, center_y=40, radius_x=20, radius_y=12)
        carve_dragon_den(stone_world, info, np.random.default_rng(2))
        surface = np.zeros(128, dtype=np.int32)
        assert not validate_world(stone_world, surface).passed
        assert validate_world(stone_world, surface, info).passed

    def test_blocked_den_hollow(self, stone_world: World) -> None:
        info = DragonDenInfo(center_x=64, center_y=100, radius_x=20, radius_y=12)
        carve_dragon_den(stone_world, info, np.random.default_rng(2))
        stone_world.set_tile(64, 100, TileType.DIRT, active=True)
        surface = np.zeros(128, dtype=np.int32)
        result = validate_world(stone_world, surface, info)
        assert not result.passed
        assert "den hollow" in result.errors[0]
