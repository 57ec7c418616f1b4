"""Surface profile: one ground height per column."""

import math

import numpy as np
from numpy.typing import NDArray

from .noise import octave_noise, value_noise
from .seeding import SURFACE_SALT, derive_seed

CONTROL_SPACING = 192
MIN_NORMALIZED = 0.12
MAX_NORMALIZED = 0.85
BLUR_PASSES = 2
MAX_STEP = 16


def build_surface_profile(
    width: int,
    height: int,
    seed: int,
    terrain_amplitude: float = 1.0,
) -> NDArray[np.int32]:
    """Build the per-column surface row (y grows downward).

    Three passes: coarse control points interpolated across columns, fine
    noise perturbation scaled by terrain_amplitude, then blur and slope
    limiting. The sky-band shift is applied by the generator, not here.

    Args:
        width: World width in tiles.
        height: World height in tiles.
        seed: World seed.
        terrain_amplitude: Relief multiplier (already clamped).

    Returns:
        Array of shape (width,) with surface rows.
    """
    base_seed = derive_seed(seed, SURFACE_SALT)
    xs = np.arange(width, dtype=np.int64)

    # Pass 1: coarse control points
    control = control_heights(width, base_seed)
    index = xs // CONTROL_SPACING
    t = (xs % CONTROL_SPACING) / CONTROL_SPACING
    normalized = control[index] + (control[index + 1] - control[index]) * t

    # Pass 2: fine perturbation
    continental = octave_noise(xs, base_seed + 7231, 0.00045, 4) - 0.5
    rolling = octave_noise(xs, base_seed + 9127, 0.0009, 4) - 0.5
    phase = float(value_noise(0, base_seed + 4447)) * 2.0 * math.pi
    ridge = np.sin(xs * 0.0005 + phase) * 0.2
    normalized = normalized + terrain_amplitude * (
        continental * 0.25 + rolling * 0.18 + ridge
    )
    normalized = np.clip(normalized, MIN_NORMALIZED, MAX_NORMALIZED)

    surface = (normalized * height).astype(np.int32)
    surface = np.clip(surface, height // 8, (height * 5) // 6).astype(np.int32)

    # Pass 3: post-processing
    surface = smooth_surface(surface, passes=BLUR_PASSES)
    return limit_slope(surface, MAX_STEP)


def control_heights(width: int, seed: int) -> NDArray[np.float64]:
    """Normalized heights at every CONTROL_SPACING columns, plus one past the end."""
    count = width // CONTROL_SPACING + 2
    sample_x = np.arange(count, dtype=np.int64) * CONTROL_SPACING
    broad = octave_noise(sample_x, seed + 2001, 0.00008, 2)
    mesas = octave_noise(sample_x, seed + 3311, 0.0002, 2)
    heights = 0.3 + broad * 0.5 + (mesas - 0.5) * 0.25
    return np.clip(heights, MIN_NORMALIZED, MAX_NORMALIZED)


def smooth_surface(surface: NDArray[np.int32], passes: int = 1) -> NDArray[np.int32]:
    """3-tap box blur (left + 2*center + right) / 4; end columns are kept."""
    result = surface.astype(np.int32)
    for _ in range(passes):
        blurred = result.copy()
        blurred[1:-1] = (result[:-2] + 2 * result[1:-1] + result[2:]) // 4
        result = blurred
    return result


def limit_slope(surface: NDArray[np.int32], max_step: int) -> NDArray[np.int32]:
    """Clamp each column's delta from its left neighbor to +/- max_step."""
    result = surface.astype(np.int32)
    for x in range(1, len(result)):
        prev = int(result[x - 1])
        result[x] = min(max(int(result[x]), prev - max_step), prev + max_step)
    return result
