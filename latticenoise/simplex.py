from __future__ import annotations

import numpy as np

from .core import fast_floor
from .gradients import GRAD_3D, GRAD_4D, PHI_GRAD_2D, SIMPLEX_4D
from .hashing import hash32, hash256

F2 = 0.3660254
G2 = 0.21132487
H2 = 0.42264974

F3 = 1.0 / 3.0
G3 = 1.0 / 6.0
G33 = -0.5

F4 = (2.23606797 - 1.0) / 4.0
G4 = (5.0 - 2.23606797) / 20.0

# (i1, j1, k1, i2, j2, k2) for each rank ordering of the 3D offsets
_RANK_3D = np.array(
    [
        [1, 0, 0, 1, 1, 0],
        [1, 0, 0, 1, 0, 1],
        [0, 0, 1, 1, 0, 1],
        [0, 0, 1, 0, 1, 1],
        [0, 1, 0, 0, 1, 1],
        [0, 1, 0, 1, 1, 0],
    ],
    dtype=np.int64,
)


def _falloff(radius_sq: float, *offsets: np.ndarray) -> np.ndarray:
    t = radius_sq - sum(d * d for d in offsets)
    t = np.where(t > 0.0, t, 0.0)
    t *= t
    return t * t


def _grad2(seed, i, j, x, y) -> np.ndarray:
    g = PHI_GRAD_2D[hash256(seed, i, j)]
    return g[..., 0] * x + g[..., 1] * y


def _grad3(seed, i, j, k, x, y, z) -> np.ndarray:
    g = GRAD_3D[hash32(seed, i, j, k)]
    return g[..., 0] * x + g[..., 1] * y + g[..., 2] * z


def _grad4(seed, i, j, k, l, x, y, z, w) -> np.ndarray:
    g = GRAD_4D[(hash256(seed, i, j, k, l) & 0xFC) >> 2]
    return g[..., 0] * x + g[..., 1] * y + g[..., 2] * z + g[..., 3] * w


def simplex2(seed: int, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    t = (x + y) * F2
    i = fast_floor(x + t)
    j = fast_floor(y + t)

    t = (i + j) * G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    i1 = (x0 > y0).astype(np.int64)
    j1 = 1 - i1

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1.0 + H2
    y2 = y0 - 1.0 + H2

    n = _falloff(0.75, x0, y0) * _grad2(seed, i, j, x0, y0)
    n = n + _falloff(0.75, x1, y1) * _grad2(seed, i + i1, j + j1, x1, y1)
    n = n + _falloff(0.75, x2, y2) * _grad2(seed, i + 1, j + 1, x2, y2)
    return 9.11 * n


def simplex3(seed: int, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)

    t = (x + y + z) * F3
    i = fast_floor(x + t)
    j = fast_floor(y + t)
    k = fast_floor(z + t)

    t = (i + j + k) * G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    xy = x0 >= y0
    yz = y0 >= z0
    xz = x0 >= z0
    case = np.select([xy & yz, xy & xz, xy, ~yz, ~xz], [0, 1, 2, 3, 4], 5)
    r = _RANK_3D[case]
    i1, j1, k1 = r[..., 0], r[..., 1], r[..., 2]
    i2, j2, k2 = r[..., 3], r[..., 4], r[..., 5]

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + F3
    y2 = y0 - j2 + F3
    z2 = z0 - k2 + F3
    x3 = x0 + G33
    y3 = y0 + G33
    z3 = z0 + G33

    n = _falloff(0.6, x0, y0, z0) * _grad3(seed, i, j, k, x0, y0, z0)
    n = n + _falloff(0.6, x1, y1, z1) * _grad3(seed, i + i1, j + j1, k + k1, x1, y1, z1)
    n = n + _falloff(0.6, x2, y2, z2) * _grad3(seed, i + i2, j + j2, k + k2, x2, y2, z2)
    n = n + _falloff(0.6, x3, y3, z3) * _grad3(seed, i + 1, j + 1, k + 1, x3, y3, z3)
    return 31.5 * n


def simplex4(
    seed: int, x: np.ndarray, y: np.ndarray, z: np.ndarray, w: np.ndarray
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)
    w = np.asarray(w, dtype=np.float64)

    t = (x + y + z + w) * F4
    i = fast_floor(x + t)
    j = fast_floor(y + t)
    k = fast_floor(z + t)
    l = fast_floor(w + t)

    t = (i + j + k + l) * G4
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)
    w0 = w - (l - t)

    c = (
        np.where(x0 > y0, 128, 0)
        | np.where(x0 > z0, 64, 0)
        | np.where(y0 > z0, 32, 0)
        | np.where(x0 > w0, 16, 0)
        | np.where(y0 > w0, 8, 0)
        | np.where(z0 > w0, 4, 0)
    )
    sx = SIMPLEX_4D[c]
    sy = SIMPLEX_4D[c | 1]
    sz = SIMPLEX_4D[c | 2]
    sw = SIMPLEX_4D[c | 3]

    # Each table entry packs the three intermediate corners as bits 2, 1, 0.
    corners = [((sx >> b) & 1, (sy >> b) & 1, (sz >> b) & 1, (sw >> b) & 1) for b in (2, 1, 0)]

    n = _falloff(0.62, x0, y0, z0, w0) * _grad4(seed, i, j, k, l, x0, y0, z0, w0)
    for step, (ci, cj, ck, cl) in enumerate(corners, start=1):
        off = step * G4
        xs = x0 - ci + off
        ys = y0 - cj + off
        zs = z0 - ck + off
        ws = w0 - cl + off
        n = n + _falloff(0.62, xs, ys, zs, ws) * _grad4(
            seed, i + ci, j + cj, k + ck, l + cl, xs, ys, zs, ws
        )
    off = 4.0 * G4
    x4 = x0 - 1.0 + off
    y4 = y0 - 1.0 + off
    z4 = z0 - 1.0 + off
    w4 = w0 - 1.0 + off
    n = n + _falloff(0.62, x4, y4, z4, w4) * _grad4(
        seed, i + 1, j + 1, k + 1, l + 1, x4, y4, z4, w4
    )
    return 14.75 * n
