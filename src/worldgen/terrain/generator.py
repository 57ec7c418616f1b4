"""World generation orchestration.

The pipeline is an explicit ordered tuple of stages. Order is part of the
output: every stage after the first reads the grid the earlier ones left,
and reordering changes every world.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
import structlog
from numpy.typing import NDArray

from ..config import WorldGenConfig
from ..exceptions import UnknownStageError
from ..state import World
from .caves import carve_caves
from .columns import paint_columns
from .den import DragonDenInfo, carve_dragon_den, den_info
from .ores import place_ores
from .seeding import (
    CAVE_SALT,
    DEN_CARVE_SALT,
    ORE_SALT,
    normalize_seed,
    stage_rng,
    tree_seed,
)
from .stats import count_cave_pockets, tile_counts
from .surface import build_surface_profile
from .trees import scatter_trees

logger = structlog.get_logger()


@dataclass
class GenerationContext:
    """State handed from stage to stage during one generate() call."""

    world: World
    seed: int
    config: WorldGenConfig
    surface: NDArray[np.int32] | None = None
    den: DragonDenInfo | None = None
    stage_timings_ms: dict[str, float] = field(default_factory=dict)

    def require_surface(self) -> NDArray[np.int32]:
        if self.surface is None:
            raise RuntimeError("surface stage has not run")
        return self.surface


Stage = Callable[[GenerationContext], None]


def _surface_stage(ctx: GenerationContext) -> None:
    world = ctx.world
    surface = build_surface_profile(
        world.width, world.height, ctx.seed, ctx.config.terrain_amplitude
    )
    # Sky band above the highest ground
    ctx.surface = np.maximum(surface - world.height // 8, 0).astype(np.int32)


def _columns_stage(ctx: GenerationContext) -> None:
    paint_columns(
        ctx.world, ctx.require_surface(), ctx.seed, ctx.config.soil_depth_scale
    )


def _caves_stage(ctx: GenerationContext) -> None:
    carve_caves(ctx.world, stage_rng(ctx.seed, CAVE_SALT), ctx.config.cave_density)


def _ores_stage(ctx: GenerationContext) -> None:
    place_ores(ctx.world, stage_rng(ctx.seed, ORE_SALT), ctx.config.ore_density)


def _dragon_den_stage(ctx: GenerationContext) -> None:
    ctx.den = den_info(ctx.world, ctx.seed)
    carve_dragon_den(ctx.world, ctx.den, stage_rng(ctx.seed, DEN_CARVE_SALT))


def _trees_stage(ctx: GenerationContext) -> None:
    world = ctx.world
    rng = np.random.default_rng(tree_seed(world.width, world.height, ctx.seed))
    scatter_trees(world, ctx.require_surface(), rng, ctx.config.tree_density)


STAGES: tuple[tuple[str, Stage], ...] = (
    ("surface", _surface_stage),
    ("columns", _columns_stage),
    ("caves", _caves_stage),
    ("ores", _ores_stage),
    ("dragon_den", _dragon_den_stage),
    ("trees", _trees_stage),
)

STAGE_NAMES: tuple[str, ...] = tuple(name for name, _ in STAGES)


def run_pipeline(
    world: World,
    seed: int,
    config: WorldGenConfig | None = None,
    stop_after: str | None = None,
) -> GenerationContext:
    """Run the stage pipeline over world, optionally stopping early.

    Args:
        world: Freshly constructed (or reset) grid; mutated in place.
        seed: World seed, reduced to 32 bits.
        config: Generation knobs; clamped before use. Defaults apply if None.
        stop_after: Name of the last stage to run (None runs all stages).

    Returns:
        The GenerationContext after the last stage run.

    Raises:
        UnknownStageError: If stop_after is not a stage name.
    """
    if stop_after is not None and stop_after not in STAGE_NAMES:
        raise UnknownStageError(
            f"Unknown stage {stop_after!r}; expected one of {list(STAGE_NAMES)}"
        )

    ctx = GenerationContext(
        world=world,
        seed=normalize_seed(seed),
        config=(config or WorldGenConfig()).clamped(),
    )
    logger.info(
        "worldgen_started",
        width=world.width,
        height=world.height,
        seed=ctx.seed,
    )

    for name, stage in STAGES:
        start = time.perf_counter()
        stage(ctx)
        duration_ms = (time.perf_counter() - start) * 1000
        ctx.stage_timings_ms[name] = duration_ms
        logger.debug("stage_completed", stage=name, duration_ms=round(duration_ms, 2))
        if name == stop_after:
            break

    return ctx


def generate(
    world: World,
    seed: int,
    config: WorldGenConfig | None = None,
) -> None:
    """Generate terrain into world in place.

    A pure function of (width, height, seed, config): the same inputs on a
    fresh grid always produce the same tiles. Never resizes world.
    """
    ctx = run_pipeline(world, seed, config)
    _log_world_stats(ctx)


def _log_world_stats(ctx: GenerationContext) -> None:
    """Log the tile histogram and den placement of a finished world."""
    counts = tile_counts(ctx.world)
    logger.info(
        "worldgen_completed",
        seed=ctx.seed,
        duration_ms=round(sum(ctx.stage_timings_ms.values()), 2),
        cave_pockets=count_cave_pockets(ctx.world, ctx.require_surface()),
        den=(ctx.den.center_x, ctx.den.center_y) if ctx.den and ctx.den.is_valid else None,
    )
    logger.debug(
        "tile_counts",
        **{tile_type.name.lower(): count for tile_type, count in counts.items()},
    )
