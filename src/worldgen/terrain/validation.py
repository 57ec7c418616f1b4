"""Post-generation structural checks."""

import numpy as np
import structlog
from numpy.typing import NDArray

from ..config import DEFAULT_ORE_TIERS, OreTierConfig
from ..state import World
from ..tiles import TileType
from .den import SHELL_START, DragonDenInfo
from .ores import depth_band
from .shapes import ellipse_window
from .stats import floating_solid_clusters
from .surface import MAX_STEP

logger = structlog.get_logger()

# Satellite gold, and canopies from trees growing on the den rim
_DEN_HOLLOW_ALLOWED = np.array(
    [TileType.GOLD_ORE, TileType.TREE_TRUNK, TileType.TREE_LEAVES], dtype=np.uint8
)


class ValidationResult:
    """Result of world validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_world(
    world: World,
    surface: NDArray[np.int32],
    den: DragonDenInfo | None = None,
    tiers: tuple[OreTierConfig, ...] = DEFAULT_ORE_TIERS,
) -> ValidationResult:
    """Validate a generated world against its structural invariants.

    Args:
        world: Generated grid.
        surface: Surface rows the columns were painted from.
        den: Den placement, if the world has one; its gold is exempt from
            the ore band check.
        tiers: Ore tiers the world was generated with.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    _check_surface_smoothness(surface, result)
    _check_ore_containment(world, den, tiers, result)
    _check_tree_support(world, result)
    if den is not None and den.is_valid:
        _check_den_hollow(world, den, result)

    floating = floating_solid_clusters(world)
    if floating:
        result.add_warning(f"{floating} solid clusters are not connected to bedrock")

    if result.passed:
        logger.info("validation_passed", warnings=len(result.warnings))
    else:
        logger.warning("validation_failed", errors=result.errors)

    return result


def _check_surface_smoothness(surface: NDArray[np.int32], result: ValidationResult) -> None:
    steps = np.abs(np.diff(surface.astype(np.int64)))
    if steps.size and steps.max() > MAX_STEP:
        x = int(np.argmax(steps)) + 1
        result.add_error(f"Surface step of {int(steps.max())} tiles at column {x}")


def _check_ore_containment(
    world: World,
    den: DragonDenInfo | None,
    tiers: tuple[OreTierConfig, ...],
    result: ValidationResult,
) -> None:
    den_mask = np.zeros(world.types.shape, dtype=np.bool_)
    if den is not None and den.is_valid:
        # Shell plus satellite clusters reach at most 3 tiles past the ellipse
        ys, xs = np.ogrid[: world.height, : world.width]
        dx = (xs - den.center_x) / (den.radius_x + 4)
        dy = (ys - den.center_y) / (den.radius_y + 4)
        den_mask = dx * dx + dy * dy <= 1.0

    for tier in tiers:
        min_y, max_y = depth_band(tier, world.height)
        rows, _ = np.nonzero((world.types == tier.tile_type) & ~den_mask)
        if rows.size == 0:
            continue
        low, high = min_y - tier.max_radius, max_y + tier.max_radius
        outside = np.count_nonzero((rows < low) | (rows > high))
        if outside:
            result.add_error(
                f"{outside} {tier.tile_type.name} tiles outside rows [{low}, {high}]"
            )


def _check_tree_support(world: World, result: ValidationResult) -> None:
    trunk = world.types == TileType.TREE_TRUNK
    for x in np.flatnonzero(trunk.any(axis=0)):
        rows = np.flatnonzero(trunk[:, x])
        base = int(rows.max()) + 1
        if base >= world.height:
            result.add_error(f"Tree trunk at column {x} reaches the world floor")
            continue
        if not world.active[base, x] or world.types[base, x] not in (
            TileType.GRASS,
            TileType.DIRT,
        ):
            result.add_error(f"Tree trunk at column {x} is not standing on soil")


def _check_den_hollow(world: World, den: DragonDenInfo, result: ValidationResult) -> None:
    window = ellipse_window(
        world.width,
        world.height,
        den.center_x,
        den.center_y,
        den.radius_x,
        den.radius_y,
        margin=1,
    )
    if window is None:
        return
    active = world.active[window.rows, window.cols]
    types = world.types[window.rows, window.cols]
    hollow = window.values < SHELL_START
    allowed = np.isin(types, _DEN_HOLLOW_ALLOWED)
    blocked = hollow & active & ~allowed
    if blocked.any():
        result.add_error(f"{int(blocked.sum())} solid tiles inside the den hollow")
