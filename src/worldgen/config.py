"""World generation configuration models and loading."""

import tomllib
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .tiles import TileType


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class PresetLevel(str, Enum):
    """World-creation menu levels for each generation knob."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


# knob -> (low, normal, high), as offered by the world-creation menu
PRESET_VALUES: dict[str, tuple[float, float, float]] = {
    "terrain_amplitude": (0.7, 1.0, 1.4),
    "soil_depth_scale": (0.8, 1.0, 1.3),
    "cave_density": (0.6, 1.0, 1.5),
    "ore_density": (0.7, 1.0, 1.4),
    "tree_density": (0.7, 1.0, 1.4),
}

_LEVEL_INDEX = {PresetLevel.LOW: 0, PresetLevel.NORMAL: 1, PresetLevel.HIGH: 2}


class WorldGenConfig(BaseModel, frozen=True):
    """Generation knobs.

    Any float is accepted; each field is clamped to its working range by
    clamped() before the generator uses it.
    """

    terrain_amplitude: float = Field(
        default=1.0, description="Surface relief multiplier, clamped to [0.2, 2.0]"
    )
    soil_depth_scale: float = Field(
        default=1.0, description="Dirt layer thickness multiplier, clamped to [0.4, 2.0]"
    )
    cave_density: float = Field(
        default=1.0, description="Cave worm count/length multiplier, clamped to [0.3, 2.5]"
    )
    ore_density: float = Field(
        default=1.0, description="Ore vein count/length multiplier, clamped to [0.3, 2.5]"
    )
    tree_density: float = Field(
        default=1.0, description="Inverse tree spacing multiplier, floored at 0.2"
    )

    def clamped(self) -> "WorldGenConfig":
        """Return a copy with every knob clamped to its valid range."""
        return self.model_copy(
            update={
                "terrain_amplitude": _clamp(self.terrain_amplitude, 0.2, 2.0),
                "soil_depth_scale": _clamp(self.soil_depth_scale, 0.4, 2.0),
                "cave_density": _clamp(self.cave_density, 0.3, 2.5),
                "ore_density": _clamp(self.ore_density, 0.3, 2.5),
                "tree_density": max(0.2, self.tree_density),
            }
        )

    @classmethod
    def from_presets(
        cls,
        terrain: PresetLevel | str = PresetLevel.NORMAL,
        soil: PresetLevel | str = PresetLevel.NORMAL,
        caves: PresetLevel | str = PresetLevel.NORMAL,
        ores: PresetLevel | str = PresetLevel.NORMAL,
        trees: PresetLevel | str = PresetLevel.NORMAL,
    ) -> "WorldGenConfig":
        """Build a config from menu levels.

        Raises:
            ConfigError: If a level name is not low/normal/high.
        """
        levels = {
            "terrain_amplitude": terrain,
            "soil_depth_scale": soil,
            "cave_density": caves,
            "ore_density": ores,
            "tree_density": trees,
        }
        values: dict[str, float] = {}
        for knob, level in levels.items():
            try:
                index = _LEVEL_INDEX[PresetLevel(level)]
            except ValueError:
                raise ConfigError(
                    f"Unknown preset level {level!r} for {knob}; "
                    f"expected one of {[lvl.value for lvl in PresetLevel]}"
                ) from None
            values[knob] = PRESET_VALUES[knob][index]
        return cls(**values)


class OreTierConfig(BaseModel, frozen=True):
    """One ore tier: what to place and where."""

    tile_type: TileType
    min_depth_ratio: float = Field(description="Top of the depth band (fraction of height)")
    max_depth_ratio: float = Field(description="Bottom of the depth band (fraction of height)")
    min_veins: int = Field(description="Minimum vein count at ore_density 1.0")
    vein_scale: int = Field(description="One vein per this many columns at ore_density 1.0")
    min_length: int
    max_length: int
    min_radius: int
    max_radius: int


# Processing order matters: a cell claimed by an earlier tier keeps its ore
DEFAULT_ORE_TIERS: tuple[OreTierConfig, ...] = (
    OreTierConfig(
        tile_type=TileType.COPPER_ORE,
        min_depth_ratio=0.30,
        max_depth_ratio=0.60,
        min_veins=20,
        vein_scale=14,
        min_length=10,
        max_length=18,
        min_radius=1,
        max_radius=2,
    ),
    OreTierConfig(
        tile_type=TileType.IRON_ORE,
        min_depth_ratio=0.55,
        max_depth_ratio=0.88,
        min_veins=16,
        vein_scale=18,
        min_length=10,
        max_length=20,
        min_radius=1,
        max_radius=2,
    ),
    OreTierConfig(
        tile_type=TileType.GOLD_ORE,
        min_depth_ratio=0.78,
        max_depth_ratio=0.98,
        min_veins=10,
        vein_scale=22,
        min_length=8,
        max_length=16,
        min_radius=1,
        max_radius=2,
    ),
)


def load_config(config_path: Path) -> WorldGenConfig:
    """Load generation knobs from a TOML file.

    Knobs may sit at the top level or under a [worldgen] table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed (unclamped) WorldGenConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the TOML is malformed or holds unknown/invalid knobs.
    """
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed config {config_path}: {e}") from e

    section = data.get("worldgen", data)
    unknown = set(section) - set(WorldGenConfig.model_fields)
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {sorted(unknown)}")
    try:
        return WorldGenConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e
