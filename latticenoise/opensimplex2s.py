from __future__ import annotations

import numpy as np

from ._tables import LOOKUP_4D_CODES
from .core import build_permutation_multiply_shift, floor_int
from .gradients import opensimplex_gradients
from .opensimplex import OpenSimplexBase, as_float, build_bcc_table, split_cell

N2 = 0.05481866495625118
N3 = 0.2781926117527186
N4 = 0.11127401889945551

DEFAULT_SEED = 1234567890987654321

SKEW_4D = 0.309016994374947
UNSKEW_4D = -0.138196601125011


def _lookup_2d() -> np.ndarray:
    rows = []
    for i in range(8):
        if i & 1 == 0:
            p1 = (1, 0) if i & 2 else (-1, 0)
            p2 = (0, 1) if i & 4 else (0, -1)
        else:
            p1 = (2, 1) if i & 2 else (0, 1)
            p2 = (1, 2) if i & 4 else (1, 0)
        rows.append([(0, 0), (1, 1), p1, p2])
    return np.array(rows, dtype=np.int64)


def _bcc_nodes(i1: int, j1: int, k1: int) -> list[tuple[int, int, int, int]]:
    i2, j2, k2 = i1 ^ 1, j1 ^ 1, k1 ^ 1
    return [
        (i1, j1, k1, 0),
        (i1 + i2, j1 + j2, k1 + k2, 1),
        # (1, 0, 0) against (0, 1, 1) away from the octant, then on the second half-lattice
        (i1 ^ 1, j1, k1, 0),
        (i1, j1 ^ 1, k1 ^ 1, 0),
        (i1 + (i2 ^ 1), j1 + j2, k1 + k2, 1),
        (i1 + i2, j1 + (j2 ^ 1), k1 + (k2 ^ 1), 1),
        # (0, 1, 0) against (1, 0, 1)
        (i1, j1 ^ 1, k1, 0),
        (i1 ^ 1, j1, k1 ^ 1, 0),
        (i1 + i2, j1 + (j2 ^ 1), k1 + k2, 1),
        (i1 + (i2 ^ 1), j1 + j2, k1 + (k2 ^ 1), 1),
        # (0, 0, 1) against (1, 1, 0)
        (i1, j1, k1 ^ 1, 0),
        (i1 ^ 1, j1 ^ 1, k1, 0),
        (i1 + i2, j1 + j2, k1 + (k2 ^ 1), 1),
        (i1 + (i2 ^ 1), j1 + (j2 ^ 1), k1 + k2, 1),
    ]


# (on failure, on success); a hit on one point of an opposing pair rules out the other.
_BCC_LINKS = (
    (1, 1),
    (2, 2),
    (3, 5),
    (4, 4),
    (5, 6),
    (6, 6),
    (7, 9),
    (8, 8),
    (9, 10),
    (10, 10),
    (11, 13),
    (12, 12),
    (13, -1),
    (-1, -1),
)


def _lookup_4d() -> np.ndarray:
    # Ragged candidate lists padded with -1.
    width = max(len(codes) for codes in LOOKUP_4D_CODES)
    table = np.full((len(LOOKUP_4D_CODES), width), -1, dtype=np.int64)
    for i, codes in enumerate(LOOKUP_4D_CODES):
        table[i, : len(codes)] = codes
    return table


class OpenSimplex2S(OpenSimplexBase):
    """Smooth OpenSimplex2 noise.

    Larger kernels than ``OpenSimplex2F`` (4 points in 2D, 8 in 3D, up to 20
    in 4D) for a smoother look at some extra cost.
    """

    RADIUS_2D = 2.0 / 3.0
    RADIUS_3D = 0.75
    GRADIENTS = opensimplex_gradients(N2, N3, N4)
    LOOKUP_2D = _lookup_2d()
    BCC = build_bcc_table(_bcc_nodes, _BCC_LINKS)
    LOOKUP_4D = _lookup_4d()

    def __init__(self, seed: int = DEFAULT_SEED):
        super().__init__(seed)

    @staticmethod
    def _build_permutation(seed: int) -> np.ndarray:
        return build_permutation_multiply_shift(seed)

    def _row_2d(self, xsi: np.ndarray, ysi: np.ndarray) -> np.ndarray:
        a = np.trunc(xsi + ysi)
        b = np.trunc(xsi - ysi / 2.0 + 1.0 - a / 2.0)
        c = np.trunc(ysi - xsi / 2.0 + 1.0 - a / 2.0)
        return a.astype(np.int64) | (b.astype(np.int64) << 1) | (c.astype(np.int64) << 2)

    def noise4_classic(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        s = SKEW_4D * (x + y + z + w)
        return self._noise4_base(x + s, y + s, z + s, w + s)

    def noise4_xy_before_zw(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        s2 = (x + y) * -0.28522513987434876941 + (z + w) * 0.83897065470611435718
        t2 = (z + w) * 0.21939749883706435719 + (x + y) * -0.48214856493302476942
        return self._noise4_base(x + s2, y + s2, z + t2, w + t2)

    def noise4_xz_before_yw(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        s2 = (x + z) * -0.28522513987434876941 + (y + w) * 0.83897065470611435718
        t2 = (y + w) * 0.21939749883706435719 + (x + z) * -0.48214856493302476942
        return self._noise4_base(x + s2, y + t2, z + s2, w + t2)

    def noise4_xyz_before_w(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        xyz = x + y + z
        ww = w * 1.118033988749894
        s2 = xyz * -0.16666666666666666 + ww
        return self._noise4_base(x + s2, y + s2, z + s2, -0.5 * xyz + ww)

    def _noise4_base(self, xs, ys, zs, ws) -> np.ndarray:
        xsb, xsi = split_cell(xs)
        ysb, ysi = split_cell(ys)
        zsb, zsi = split_cell(zs)
        wsb, wsi = split_cell(ws)

        ssi = (xsi + ysi + zsi + wsi) * UNSKEW_4D
        xi = xsi + ssi
        yi = ysi + ssi
        zi = zsi + ssi
        wi = wsi + ssi

        # 4x4x4x4 partition of the cell selects the candidate list.
        index = (
            (floor_int(xs * 4.0) & 3)
            | ((floor_int(ys * 4.0) & 3) << 2)
            | ((floor_int(zs * 4.0) & 3) << 4)
            | ((floor_int(ws * 4.0) & 3) << 6)
        )
        codes = self.LOOKUP_4D[index]

        value = np.zeros(index.shape, dtype=np.float64)
        for j in range(self.LOOKUP_4D.shape[1]):
            code = codes[..., j]
            valid = code >= 0
            code = np.where(valid, code, 0)
            cx = (code & 3) - 1
            cy = ((code >> 2) & 3) - 1
            cz = ((code >> 4) & 3) - 1
            cw = ((code >> 6) & 3) - 1

            ssv = (cx + cy + cz + cw) * UNSKEW_4D
            dx = xi - cx - ssv
            dy = yi - cy - ssv
            dz = zi - cz - ssv
            dw = wi - cw - ssv
            attn = 0.8 - dx * dx - dy * dy - dz * dz - dw * dw
            attn = np.where(valid & (attn > 0.0), attn, 0.0)
            attn *= attn
            extrapolation = self._grad4_dot(xsb + cx, ysb + cy, zsb + cz, wsb + cw, dx, dy, dz, dw)
            value += attn * attn * extrapolation
        return value
