"""Tests for PNG previews."""

from pathlib import Path

import numpy as np
from PIL import Image

from worldgen.state import World
from worldgen.terrain.preview import (
    CAVE_COLOR,
    SKY_COLOR,
    TILE_COLORS,
    render_preview,
    save_preview,
)
from worldgen.tiles import TileType


class TestRenderPreview:
    """Tests for image rendering."""

    def test_every_type_has_color(self) -> None:
        assert set(TILE_COLORS) == set(TileType)

    def test_size_and_colors(
        self, flat_world: World, flat_surface: np.ndarray
    ) -> None:
        flat_world.set_tile(5, 30, TileType.AIR, active=False)
        image = render_preview(flat_world, flat_surface)
        assert image.size == (200, 40)
        assert image.mode == "RGB"
        assert image.getpixel((5, 0)) == SKY_COLOR
        assert image.getpixel((5, 15)) == TILE_COLORS[TileType.GRASS]
        assert image.getpixel((5, 30)) == CAVE_COLOR

    def test_voids_are_sky_without_surface(self, flat_world: World) -> None:
        flat_world.set_tile(5, 30, TileType.AIR, active=False)
        image = render_preview(flat_world)
        assert image.getpixel((5, 30)) == SKY_COLOR


class TestSavePreview:
    """Tests for writing PNG files."""

    def test_writes_scaled_png(self, flat_world: World, tmp_path: Path) -> None:
        path = tmp_path / "out" / "world.png"
        save_preview(flat_world, path, scale=3)
        assert path.exists()
        with Image.open(path) as image:
            assert image.size == (600, 120)
