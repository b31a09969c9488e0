"""Foam noise: several value-noise samples on rotated axes, each one warping the next.

Later samples depend on earlier ones within the same evaluation, so the
samples of one point are always taken in order.
"""

from __future__ import annotations

import numpy as np

from .core import wrap_seed
from .value import value_noise2, value_noise3, value_noise4


def _advance(seed: int) -> int:
    seed = wrap_seed(seed + 0x9E3779BD)
    return wrap_seed(seed ^ ((seed & 0xFFFFFFFF) >> 14))


def foam2(seed: int, x, y) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    seed = wrap_seed(seed)

    p0 = x
    p1 = x * -0.5 + y * 0.8660254037844386
    p2 = x * -0.5 + y * -0.8660254037844387

    a = value_noise2(seed, p2, p0)
    seed = _advance(seed)
    b = value_noise2(seed, p1 + a, p2)
    seed = _advance(seed)
    c = value_noise2(seed, p0 + b, p1)

    r = (a + b + c) * (1.0 / 3.0)
    return np.where(r <= 0.5, r * r * 4.0 - 1.0, 1.0 - (r - 1.0) * (r - 1.0) * 4.0)


def foam3(seed: int, x, y, z) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    seed = wrap_seed(seed)

    p0 = x
    p1 = x * -0.3333333333333333 + y * 0.9428090415820634
    p2 = x * -0.3333333333333333 + y * -0.4714045207910317 + z * 0.816496580927726
    p3 = x * -0.3333333333333333 + y * -0.4714045207910317 + z * -0.816496580927726

    a = value_noise3(seed, p3, p2, p0)
    seed = _advance(seed)
    b = value_noise3(seed, p0 + a, p1, p3)
    seed = _advance(seed)
    c = value_noise3(seed, p1 + b, p2, p3)
    seed = _advance(seed)
    d = value_noise3(seed, p0 + c, p1, p2)

    r = (a + b + c + d) * 0.25
    lo = r * 2.0
    hi = (r - 1.0) * 2.0
    return np.where(r <= 0.5, lo * lo * lo - 1.0, hi * hi * hi + 1.0)


def foam4(seed: int, x, y, z, w) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    w = np.asarray(w, dtype=np.float64)
    seed = wrap_seed(seed)

    p0 = x
    p1 = x * -0.25 + y * 0.9682458365518543
    p2 = x * -0.25 + y * -0.3227486121839514 + z * 0.9128709291752769
    p3 = (
        x * -0.25
        + y * -0.3227486121839514
        + z * -0.45643546458763834
        + w * 0.7905694150420949
    )
    p4 = (
        x * -0.25
        + y * -0.3227486121839514
        + z * -0.45643546458763834
        + w * -0.7905694150420947
    )

    a = value_noise4(seed, p1, p2, p3, p4)
    seed = _advance(seed)
    b = value_noise4(seed, p0 + a, p2, p3, p4)
    seed = _advance(seed)
    c = value_noise4(seed, p0 + b, p1, p3, p4)
    seed = _advance(seed)
    d = value_noise4(seed, p0 + c, p1, p2, p4)
    seed = _advance(seed)
    e = value_noise4(seed, p0 + d, p1, p2, p3)

    r = (a + b + c + d + e) * 0.2
    lo = r * 2.0
    lo = lo * lo
    hi = (r - 1.0) * 2.0
    hi = hi * hi
    return np.where(r <= 0.5, lo * lo - 1.0, 1.0 - hi * hi)
