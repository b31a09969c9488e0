from __future__ import annotations

import numpy as np

from .core import fast_floor, hermite, lerp, quintic, to_int32
from .hashing import hash_part1024

INTERPOLATIONS = ("linear", "hermite", "quintic")

# Lattice coordinates are premultiplied by these before hashing.
_STEPS = {
    2: (0xD1B55, 0xABC99),
    3: (0xDB4F1, 0xBBE05, 0xA0F2F),
    4: (0xE19B1, 0xC6D1D, 0xAF36D, 0x9A695),
}


def check_interpolation(name: str) -> str:
    name = str(name)
    if name not in INTERPOLATIONS:
        raise ValueError(f"unknown interpolation: {name}")
    return name


def _curve(t: np.ndarray, interpolation: str) -> np.ndarray:
    if interpolation == "hermite":
        return hermite(t)
    if interpolation == "quintic":
        return quintic(t)
    return t


def _blend(seed, lo, hi, t, axis, chosen):
    # The last axis is blended outermost, the first innermost.
    if axis < 0:
        return hash_part1024(seed, *chosen)
    a = _blend(seed, lo, hi, t, axis - 1, (lo[axis],) + chosen)
    b = _blend(seed, lo, hi, t, axis - 1, (hi[axis],) + chosen)
    return lerp(a, b, t[axis])


def _lattice(seed: int, coords, interpolation: str) -> np.ndarray:
    steps = _STEPS[len(coords)]
    lo, hi, t = [], [], []
    for c, step in zip(coords, steps):
        c = np.asarray(c, dtype=np.float64)
        f = fast_floor(c)
        t.append(_curve(c - f, interpolation))
        base = to_int32(f * step)
        lo.append(base)
        hi.append(base + step)
    return _blend(seed, lo, hi, t, len(coords) - 1, ())


def value2(seed: int, x, y, *, interpolation: str = "hermite") -> np.ndarray:
    return _lattice(seed, (x, y), interpolation) * 2.0**-9


def value3(seed: int, x, y, z, *, interpolation: str = "hermite") -> np.ndarray:
    return _lattice(seed, (x, y, z), interpolation) * 2.0**-9


def value4(seed: int, x, y, z, w, *, interpolation: str = "hermite") -> np.ndarray:
    return _lattice(seed, (x, y, z, w), interpolation) * 2.0**-9


# Unit-range variants, always Hermite-smoothed; these feed foam noise.


def value_noise2(seed: int, x, y) -> np.ndarray:
    return _lattice(seed, (x, y), "hermite") * 2.0**-10 + 0.5


def value_noise3(seed: int, x, y, z) -> np.ndarray:
    return _lattice(seed, (x, y, z), "hermite") * 2.0**-10 + 0.5


def value_noise4(seed: int, x, y, z, w) -> np.ndarray:
    return _lattice(seed, (x, y, z, w), "hermite") * 2.0**-10 + 0.5
