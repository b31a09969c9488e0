from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)

PSIZE = 2048
PMASK = PSIZE - 1

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_LCG_MUL = 6364136223846793005
_LCG_ADD = 1442695040888963407


def to_int32(v) -> np.ndarray:
    """Wrap integer values to signed 32-bit, returned as int64."""
    u = np.asarray(v, dtype=np.int64) & _MASK32
    return u - ((u & 0x80000000) << 1)


def wrap_seed(seed: int) -> int:
    s = int(seed) & _MASK32
    return s - ((s & 0x80000000) << 1)


def rotl32(u: np.ndarray, r: int) -> np.ndarray:
    # u must already hold unsigned 32-bit values
    return ((u << r) | (u >> (32 - r))) & _MASK32


def fast_floor(f: np.ndarray) -> np.ndarray:
    """Truncate toward zero, minus one for negative input.

    Exact negative integers land one cell lower than ``np.floor`` would put
    them; the fractional part is then 1.0, so the field stays continuous.
    """
    f = np.asarray(f, dtype=np.float64)
    t = np.trunc(f).astype(np.int64)
    return np.where(f >= 0.0, t, t - 1)


def floor_int(f: np.ndarray) -> np.ndarray:
    return np.floor(np.asarray(f, dtype=np.float64)).astype(np.int64)


def hermite(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def quintic(t: np.ndarray) -> np.ndarray:
    """Smootherstep blend for ``interpolation="quintic"`` value noise; C2 at cell edges."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _lcg_step(state: int) -> int:
    return (state * _LCG_MUL + _LCG_ADD) & _MASK64


def _shuffle(seed: int, pick) -> np.ndarray:
    source = list(range(PSIZE))
    perm = np.empty(PSIZE, dtype=np.int32)
    state = int(seed) & _MASK64
    for i in range(PSIZE - 1, -1, -1):
        state = _lcg_step(state)
        r = pick(state, i + 1)
        perm[i] = source[r]
        source[r] = source[i]
    return perm


def _pick_remainder(state: int, n: int) -> int:
    v = (state + 31) & _MASK64
    if v & (1 << 63):
        v -= 1 << 64
    # Python's modulo is already non-negative for a positive divisor
    return v % n


def _pick_multiply_shift(state: int, n: int) -> int:
    return ((state >> 32) * n) >> 32


def build_permutation_remainder(seed: int) -> np.ndarray:
    perm = _shuffle(seed, _pick_remainder)
    logger.debug("built remainder permutation for seed %d", seed)
    return perm


def build_permutation_multiply_shift(seed: int) -> np.ndarray:
    perm = _shuffle(seed, _pick_multiply_shift)
    logger.debug("built multiply-shift permutation for seed %d", seed)
    return perm
