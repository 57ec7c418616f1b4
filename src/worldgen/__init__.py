"""Procedural terrain for a 2D tile-grid sandbox game."""

from .config import (
    DEFAULT_ORE_TIERS,
    OreTierConfig,
    PresetLevel,
    WorldGenConfig,
    load_config,
)
from .exceptions import (
    ConfigError,
    TileOutOfBoundsError,
    UnknownStageError,
    WorldGenError,
)
from .state import Tile, World
from .terrain import DragonDenInfo, den_info, generate, run_pipeline
from .tiles import TileType

__all__ = [
    # Tiles
    "TileType",
    "Tile",
    "World",
    # Config
    "WorldGenConfig",
    "OreTierConfig",
    "PresetLevel",
    "DEFAULT_ORE_TIERS",
    "load_config",
    # Generation
    "generate",
    "run_pipeline",
    "den_info",
    "DragonDenInfo",
    # Exceptions
    "WorldGenError",
    "TileOutOfBoundsError",
    "UnknownStageError",
    "ConfigError",
]
