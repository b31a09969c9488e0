from __future__ import annotations

import numpy as np

from .core import build_permutation_remainder
from .gradients import opensimplex_gradients
from .opensimplex import OpenSimplexBase, as_float, build_bcc_table, split_cell

N2 = 0.01001634121365712
N3 = 0.030485933181293584
N4 = 0.009202377986303158

SKEW_4D = 0.309016994374947
UNSKEW_4D = -0.138196601125011

# Rows of 3 points; row 0 below the x == y diagonal, row 1 above it.
_LOOKUP_2D = np.array(
    [
        [(0, 0), (1, 1), (1, 0)],
        [(0, 0), (1, 1), (0, 1)],
    ],
    dtype=np.int64,
)


def _bcc_nodes(i1: int, j1: int, k1: int) -> list[tuple[int, int, int, int]]:
    i2, j2, k2 = i1 ^ 1, j1 ^ 1, k1 ^ 1
    return [
        # one point from each half-lattice
        (i1, j1, k1, 0),
        (i1 + i2, j1 + j2, k1 + k2, 1),
        # single steps on the first half-lattice
        (i1 ^ 1, j1, k1, 0),
        (i1, j1 ^ 1, k1, 0),
        (i1, j1, k1 ^ 1, 0),
        # single steps on the second half-lattice
        (i1 + (i2 ^ 1), j1 + j2, k1 + k2, 1),
        (i1 + i2, j1 + (j2 ^ 1), k1 + k2, 1),
        (i1 + i2, j1 + j2, k1 + (k2 ^ 1), 1),
    ]


# (on failure, on success). Once a step on either half-lattice lands in
# range, the remaining steps on that half-lattice cannot.
_BCC_LINKS = (
    (1, 1),
    (2, 2),
    (3, 6),
    (4, 5),
    (5, 5),
    (6, -1),
    (7, -1),
    (-1, -1),
)


def _bits(vertex: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    return vertex & 1, (vertex >> 1) & 1, (vertex >> 2) & 1, (vertex >> 3) & 1


class OpenSimplex2F(OpenSimplexBase):
    """Fast OpenSimplex2 noise.

    Uses the smallest kernel that still hides the lattice: 3 points in 2D,
    4 in 3D and 5 in 4D contribute to each sample. Output is roughly in
    [-1, 1].
    """

    RADIUS_2D = 0.5
    RADIUS_3D = 0.5
    GRADIENTS = opensimplex_gradients(N2, N3, N4)
    LOOKUP_2D = _LOOKUP_2D
    BCC = build_bcc_table(_bcc_nodes, _BCC_LINKS)

    @staticmethod
    def _build_permutation(seed: int) -> np.ndarray:
        return build_permutation_remainder(seed)

    def _row_2d(self, xsi: np.ndarray, ysi: np.ndarray) -> np.ndarray:
        return np.trunc((ysi - xsi) / 2.0 + 1.0).astype(np.int64)

    def noise4_classic(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        s = UNSKEW_4D * (x + y + z + w)
        return self._noise4_base(x + s, y + s, z + s, w + s)

    def noise4_xy_before_zw(self, x, y, z, w) -> np.ndarray:
        """4D noise with XY and ZW as orthogonal triangular planes.

        Good for noise(x, y, sin(t), cos(t)) style looping.
        """
        x, y, z, w = as_float(x, y, z, w)
        s2 = (x + y) * -0.178275657951399372 + (z + w) * 0.215623393288842828
        t2 = (z + w) * -0.403949762580207112 + (x + y) * -0.375199083010075342
        return self._noise4_base(x + s2, y + s2, z + t2, w + t2)

    def noise4_xz_before_yw(self, x, y, z, w) -> np.ndarray:
        x, y, z, w = as_float(x, y, z, w)
        s2 = (x + z) * -0.178275657951399372 + (y + w) * 0.215623393288842828
        t2 = (y + w) * -0.403949762580207112 + (x + z) * -0.375199083010075342
        return self._noise4_base(x + s2, y + t2, z + s2, w + t2)

    def noise4_xyz_before_w(self, x, y, z, w) -> np.ndarray:
        """XYZ oriented like ``noise3_classic``, with W as a free extra axis."""
        x, y, z, w = as_float(x, y, z, w)
        xyz = x + y + z
        ww = w * 0.2236067977499788
        s2 = xyz * -0.16666666666666666 + ww
        return self._noise4_base(x + s2, y + s2, z + s2, -0.5 * xyz + ww)

    def _noise4_base(self, xs, ys, zs, ws) -> np.ndarray:
        xsb, xsi = split_cell(xs)
        ysb, ysi = split_cell(ys)
        zsb, zsi = split_cell(zs)
        wsb, wsi = split_cell(ws)

        si_sum = xsi + ysi + zsi + wsi
        ssi = si_sum * SKEW_4D

        # Work as if in the upper half of the stretched tesseract; flip back after.
        lower = si_sum < 2.0
        xsi, ysi, zsi, wsi = (np.where(lower, 1.0 - v, v) for v in (xsi, ysi, zsi, wsi))
        si_sum = np.where(lower, 4.0 - si_sum, si_sum)

        # Opposing vertex pairs of the central octahedral cross-section.
        aabb = xsi + ysi - zsi - wsi
        abab = xsi - ysi + zsi - wsi
        abba = xsi - ysi - zsi + wsi
        aabb_score = np.abs(aabb)
        abab_score = np.abs(abab)
        abba_score = np.abs(abba)

        pick_aabb = (aabb_score > abab_score) & (aabb_score > abba_score)
        pick_abab = ~pick_aabb & (abab_score > abba_score)
        pick_abba = ~pick_aabb & ~pick_abab
        cases = [
            pick_aabb & (aabb > 0),
            pick_aabb,
            pick_abab & (abab > 0),
            pick_abab,
            pick_abba & (abba > 0),
            pick_abba,
        ]
        asi = np.select(cases, [zsi, xsi, ysi, xsi, ysi, xsi])
        bsi = np.select(cases, [wsi, ysi, wsi, zsi, zsi, wsi])
        vertex = np.select(cases, [0b0011, 0b1100, 0b0101, 0b1010, 0b1001, 0b0110])
        via = np.select(cases, [0b0111, 0b1101, 0b0111, 0b1011, 0b1011, 0b0111])
        vib = np.select(cases, [0b1011, 0b1110, 0b1101, 0b1110, 0b1101, 0b1110])

        swap = bsi > asi
        via = np.where(swap, vib, via)
        asi, bsi = np.where(swap, bsi, asi), np.where(swap, asi, bsi)

        upper = si_sum + asi > 3.0
        vertex = np.where(upper, via, vertex)
        vertex = np.where(upper & (si_sum + bsi > 4.0), 0b1111, vertex)

        xsi, ysi, zsi, wsi = (np.where(lower, 1.0 - v, v) for v in (xsi, ysi, zsi, wsi))
        vertex = np.where(lower, vertex ^ 0b1111, vertex)

        # Five points in total, one from each of five copies of the A4 lattice.
        value = np.zeros(vertex.shape, dtype=np.float64)
        for i in range(5):
            vx, vy, vz, vw = _bits(vertex)
            xsb = xsb + vx + 409
            ysb = ysb + vy + 409
            zsb = zsb + vz + 409
            wsb = wsb + vw + 409

            v_sum = vx + vy + vz + vw
            ssv = v_sum * SKEW_4D
            dx = xsi + ssi - vx - ssv
            dy = ysi + ssi - vy - ssv
            dz = zsi + ssi - vz - ssv
            dw = wsi + ssi - vw - ssv
            attn = 0.5 - dx * dx - dy * dy - dz * dz - dw * dw
            hit = attn > 0.0
            attn = np.where(hit, attn, 0.0)
            attn *= attn
            value += attn * attn * self._grad4_dot(xsb, ysb, zsb, wsb, dx, dy, dz, dw)

            if i == 4:
                break

            # Move to the counterpart of this vertex on the copy shifted by -0.2.
            xsi = xsi + 0.2 - vx
            ysi = ysi + 0.2 - vy
            zsi = zsi + 0.2 - vz
            wsi = wsi + 0.2 - vw
            ssi = ssi + (0.8 - v_sum) * SKEW_4D

            # Next: the closest vertex of the simplex based there.
            score0 = 1.0 + ssi * (-1.0 / SKEW_4D)
            vertex = np.select(
                [
                    (xsi >= ysi) & (xsi >= zsi) & (xsi >= wsi) & (xsi >= score0),
                    (ysi > xsi) & (ysi >= zsi) & (ysi >= wsi) & (ysi >= score0),
                    (zsi > xsi) & (zsi > ysi) & (zsi >= wsi) & (zsi >= score0),
                    (wsi > xsi) & (wsi > ysi) & (wsi > zsi) & (wsi >= score0),
                ],
                [0b0001, 0b0010, 0b0100, 0b1000],
                0b0000,
            )
        return value
