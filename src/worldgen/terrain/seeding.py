"""Seed handling for the generation pipeline.

Every random stream is derived from the world seed plus a fixed per-stage
salt; nothing reads wall-clock time or a process-wide random source.
"""

import numpy as np

SEED_MASK = 0xFFFFFFFF

# Per-stage salts. Changing any of these changes every world.
SURFACE_SALT = 0x0000_07D1
SOIL_SALT = 0x0000_1F3B
CAVE_SALT = 0x0000_0539
ORE_SALT = 0x0000_1092
DEN_SALT = 0xD2A6_0E5D
DEN_CARVE_SALT = 0x0000_3A7F


def normalize_seed(seed: int) -> int:
    """Reduce any integer seed to an unsigned 32-bit value."""
    return int(seed) & SEED_MASK


def derive_seed(seed: int, salt: int) -> int:
    """Combine a world seed with a stage salt into a 32-bit stream seed."""
    return (normalize_seed(seed) ^ salt) & SEED_MASK


def stage_rng(seed: int, salt: int) -> np.random.Generator:
    """Create the random generator owned by one pipeline stage."""
    return np.random.default_rng(derive_seed(seed, salt))


def tree_seed(width: int, height: int, seed: int) -> int:
    """Seed for tree scattering, tied to the world dimensions."""
    return (width * 977 + height * 131 + normalize_seed(seed)) & SEED_MASK


def den_seed(width: int, height: int, seed: int) -> int:
    """Seed for den placement, independent of every other stream."""
    return (
        normalize_seed(seed) ^ DEN_SALT ^ (width * 31) ^ (height * 131)
    ) & SEED_MASK
