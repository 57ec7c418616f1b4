"""Shared test fixtures for world generation tests."""

import numpy as np
import pytest

from worldgen.state import World
from worldgen.terrain.columns import paint_columns
from worldgen.terrain.generator import GenerationContext, run_pipeline
from worldgen.tiles import TileType


@pytest.fixture
def empty_world() -> World:
    """32x32 world with every tile inactive Air."""
    return World(width=32, height=32)


@pytest.fixture
def stone_world() -> World:
    """128x128 world filled with active Stone."""
    world = World(width=128, height=128)
    world.types.fill(TileType.STONE)
    world.active.fill(True)
    return world


@pytest.fixture
def flat_surface() -> np.ndarray:
    """Surface at row 15 across 200 columns."""
    return np.full(200, 15, dtype=np.int32)


@pytest.fixture
def flat_world(flat_surface: np.ndarray) -> World:
    """200x40 world painted from a flat surface at row 15.

        rows 0-14   air
        row 15      grass
        rows 16-31  dirt (minimum soil depth is 16)
        below       dirt/stone transition, then stone
    """
    world = World(width=200, height=40)
    paint_columns(world, flat_surface, seed=7)
    return world


@pytest.fixture(scope="module")
def scenario_context() -> GenerationContext:
    """Fully generated 256x128 world with seed 42 and default config."""
    return run_pipeline(World(width=256, height=128), seed=42)
