"""Deterministic 1D value noise.

Hashing uses exact 32-bit integer arithmetic (carried in uint64 and masked),
so a given (x, seed) pair maps to the same value on every run and platform.
Both functions accept scalars or integer arrays.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

_MASK32 = np.uint64(0xFFFFFFFF)
_X_PRIME = np.uint64(374761393)
_SEED_PRIME = np.uint64(668265263)
_MIX_PRIME = np.uint64(1274126177)
_MASK24 = np.uint64(0xFFFFFF)
_SCALE24 = float(1 << 24)


def value_noise(x: ArrayLike, seed: int) -> NDArray[np.float64]:
    """Hash integer coordinates and a seed to values in [0, 1).

    Args:
        x: Integer coordinate(s); negative values wrap as 32-bit unsigned.
        seed: Seed; reduced modulo 2**32.

    Returns:
        Array of the same shape as x.
    """
    xs = np.asarray(x, dtype=np.int64).astype(np.uint64) & _MASK32
    s = np.uint64(int(seed) & 0xFFFFFFFF)

    v = (xs * _X_PRIME + s * _SEED_PRIME) & _MASK32
    v ^= v >> np.uint64(13)
    v = (v * _MIX_PRIME) & _MASK32
    return (v & _MASK24).astype(np.float64) / _SCALE24


def octave_noise(
    x: ArrayLike,
    seed: int,
    base_freq: float,
    octaves: int,
) -> NDArray[np.float64]:
    """Sum value noise over octaves of doubling frequency and halving amplitude.

    Args:
        x: Sample coordinate(s).
        seed: Base seed; octave i hashes with seed + 31 * i.
        base_freq: Frequency of the first octave.
        octaves: Number of octaves.

    Returns:
        Amplitude-weighted average, in [0, 1).
    """
    xs = np.asarray(x, dtype=np.float64)
    value = np.zeros_like(xs)
    total = 0.0
    amplitude = 1.0
    freq = base_freq

    for i in range(octaves):
        lattice = np.floor(xs * freq).astype(np.int64)
        value += value_noise(lattice, seed + 31 * i) * amplitude
        total += amplitude
        amplitude *= 0.5
        freq *= 2.0

    if total > 0.0:
        value /= total
    return value
