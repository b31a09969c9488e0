from __future__ import annotations

import numpy as np

from .core import fast_floor, wrap_seed


def _wave(t: np.ndarray) -> np.ndarray:
    floor = fast_floor(t) & -2
    t = t - floor
    t = t * (2.0 - t)
    return t * (-0.775 - 0.225 * t) * ((floor & 2) - 1)


def sin(radians) -> np.ndarray:
    """Polynomial sine; absolute error stays under about 0.0011."""
    return _wave(np.asarray(radians, dtype=np.float64) * 0.6366197723675814)


def cos(radians) -> np.ndarray:
    return _wave(np.asarray(radians, dtype=np.float64) * 0.6366197723675814 + 1.0)


def sin_turns(turns) -> np.ndarray:
    """Sine of an angle given as a fraction of a full turn."""
    return _wave(np.asarray(turns, dtype=np.float64) * 4.0)


def cos_turns(turns) -> np.ndarray:
    return _wave(np.asarray(turns, dtype=np.float64) * 4.0 + 1.0)


def _endpoint(seed: np.ndarray) -> np.ndarray:
    h = ((seed ^ 0xD1B54A35) & 0xFFFFFFFF) * 0x1D2473
    return ((h & 0x1FFFFF) - 0x100000) * 2.0**-20


def sway_randomized(seed: int, value) -> np.ndarray:
    """Smooth 1D noise in [-1, 1); ``seed`` picks the path, ``value`` walks along it."""
    value = np.asarray(value, dtype=np.float64)
    floor = fast_floor(value)
    cell = np.asarray(wrap_seed(seed), dtype=np.int64) + floor
    start = _endpoint(cell)
    end = _endpoint(cell + 1)
    t = value - floor
    t = t * t * (3.0 - 2.0 * t)
    return (1.0 - t) * start + t * end
