"""Shared machinery for the OpenSimplex2 evaluators.

Both variants sample the same lattices (A2 in 2D, BCC in 3D, A4 in 4D) and
differ in kernel radius, candidate sets and normalisation. The lattice
orientation transforms below are common to both; the 4D ones have
per-variant constants and live with each variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from . import area
from .core import PMASK, floor_int
from .gradients import GradientSet

SKEW_2D = 0.366025403784439
UNSKEW_2D = -0.211324865405187
ROOT_THIRD = 0.577350269189626

# (x, y, z, lattice) offsets of the candidate points for one octant
NodeBuilder = Callable[[int, int, int], list[tuple[int, int, int, int]]]


@dataclass(frozen=True)
class BCCTable:
    """Per-octant candidate graph for the BCC lattice, flattened into arrays.

    Every array is indexed ``[octant, node]``. ``next_fail`` and
    ``next_success`` hold the node to visit next, or -1 to stop.
    """

    xrv: np.ndarray
    yrv: np.ndarray
    zrv: np.ndarray
    dxr: np.ndarray
    dyr: np.ndarray
    dzr: np.ndarray
    next_fail: np.ndarray
    next_success: np.ndarray

    @property
    def size(self) -> int:
        return self.xrv.shape[1]


def build_bcc_table(nodes: NodeBuilder, links: tuple[tuple[int, int], ...]) -> BCCTable:
    rows = []
    for octant in range(8):
        i1, j1, k1 = octant & 1, (octant >> 1) & 1, (octant >> 2) & 1
        rows.append(nodes(i1, j1, k1))
    pts = np.array(rows, dtype=np.int64)
    lattice = pts[..., 3]
    offset = lattice * 0.5
    shift = lattice * 1024
    fail = np.array([f for f, _ in links], dtype=np.int64)
    success = np.array([s for _, s in links], dtype=np.int64)
    return BCCTable(
        xrv=pts[..., 0] + shift,
        yrv=pts[..., 1] + shift,
        zrv=pts[..., 2] + shift,
        dxr=-pts[..., 0] + offset,
        dyr=-pts[..., 1] + offset,
        dzr=-pts[..., 2] + offset,
        next_fail=np.broadcast_to(fail, (8, fail.size)),
        next_success=np.broadcast_to(success, (8, success.size)),
    )


def as_float(*coords) -> list[np.ndarray]:
    return [np.asarray(c, dtype=np.float64) for c in coords]


def split_cell(v: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    base = floor_int(v)
    return base, v - base


def _falloff4(attn: np.ndarray, mask: np.ndarray) -> np.ndarray:
    attn = np.where(mask, attn, 0.0)
    attn = attn * attn
    return attn * attn


class OpenSimplexBase:
    """Permutation-table gradient noise on oriented simplex lattices.

    Subclasses provide the permutation builder, gradient set, kernel radii
    and the candidate tables for each dimension.
    """

    RADIUS_2D: float
    RADIUS_3D: float
    GRADIENTS: GradientSet
    LOOKUP_2D: np.ndarray
    BCC: BCCTable

    def __init__(self, seed: int):
        self.seed = int(seed)
        self.perm = self._build_permutation(self.seed)

    @staticmethod
    def _build_permutation(seed: int) -> np.ndarray:  # pragma: no cover
        raise NotImplementedError

    def _row_2d(self, xsi: np.ndarray, ysi: np.ndarray) -> np.ndarray:  # pragma: no cover
        raise NotImplementedError

    def _noise4_base(self, xs, ys, zs, ws) -> np.ndarray:  # pragma: no cover
        raise NotImplementedError

    # 2D

    def noise2(self, x, y) -> np.ndarray:
        """2D noise, standard lattice orientation."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        s = SKEW_2D * (x + y)
        return self._noise2_base(x + s, y + s)

    def noise2_x_before_y(self, x, y) -> np.ndarray:
        """2D noise with Y pointing down the main diagonal.

        Suits side-view worlds where Y is vertical.
        """
        xx = np.asarray(x, dtype=np.float64) * 0.7071067811865476
        yy = np.asarray(y, dtype=np.float64) * 1.224744871380249
        return self._noise2_base(yy + xx, yy - xx)

    def _noise2_base(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        xsb, xsi = split_cell(xs)
        ysb, ysi = split_cell(ys)
        pts = self.LOOKUP_2D[self._row_2d(xsi, ysi)]

        ssi = (xsi + ysi) * UNSKEW_2D
        xi = xsi + ssi
        yi = ysi + ssi

        grads = self.GRADIENTS.grad2
        p = self.perm
        value = np.zeros(np.broadcast(xs, ys).shape, dtype=np.float64)
        for i in range(self.LOOKUP_2D.shape[1]):
            xsv = pts[..., i, 0]
            ysv = pts[..., i, 1]
            ssv = (xsv + ysv) * UNSKEW_2D
            dx = xi - xsv - ssv
            dy = yi - ysv - ssv
            attn = self.RADIUS_2D - dx * dx - dy * dy

            g = grads[p[p[(xsb + xsv) & PMASK] ^ ((ysb + ysv) & PMASK)]]
            value += _falloff4(attn, attn > 0.0) * (g[..., 0] * dx + g[..., 1] * dy)
        return value

    # 3D

    def noise3_classic(self, x, y, z) -> np.ndarray:
        """3D BCC noise under a plain rotation.

        Prefer the xy/xz variants when one axis is special (vertical, time).
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        r = (2.0 / 3.0) * (x + y + z)
        return self._noise3_bcc(r - x, r - y, r - z)

    def noise3_xy_before_z(self, x, y, z) -> np.ndarray:
        """3D noise whose (x, y) slices look like 2D noise; z is the odd axis out."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        xy = x + y
        s2 = xy * UNSKEW_2D
        zz = z * ROOT_THIRD
        return self._noise3_bcc(x + s2 - zz, y + s2 - zz, xy * ROOT_THIRD + zz)

    def noise3_xz_before_y(self, x, y, z) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        xz = x + z
        s2 = xz * UNSKEW_2D
        yy = y * ROOT_THIRD
        return self._noise3_bcc(x + s2 - yy, xz * ROOT_THIRD + yy, z + s2 - yy)

    def _noise3_bcc(self, xr: np.ndarray, yr: np.ndarray, zr: np.ndarray) -> np.ndarray:
        xrb, xri = split_cell(xr)
        yrb, yri = split_cell(yr)
        zrb, zri = split_cell(zr)

        # The octant picks one point on each half-lattice to start from.
        octant = (
            np.trunc(xri + 0.5).astype(np.int64)
            | (np.trunc(yri + 0.5).astype(np.int64) << 1)
            | (np.trunc(zri + 0.5).astype(np.int64) << 2)
        )

        table = self.BCC
        grads = self.GRADIENTS.grad3
        p = self.perm
        value = np.zeros(octant.shape, dtype=np.float64)
        node = np.zeros(octant.shape, dtype=np.int64)
        active = np.ones(octant.shape, dtype=bool)

        # Successors always have a higher index, so the walk ends within size steps.
        for _ in range(table.size):
            if not active.any():
                break
            n = np.where(active, node, 0)
            dxr = xri + table.dxr[octant, n]
            dyr = yri + table.dyr[octant, n]
            dzr = zri + table.dzr[octant, n]
            attn = self.RADIUS_3D - dxr * dxr - dyr * dyr - dzr * dzr
            hit = active & (attn >= 0.0)

            pxm = (xrb + table.xrv[octant, n]) & PMASK
            pym = (yrb + table.yrv[octant, n]) & PMASK
            pzm = (zrb + table.zrv[octant, n]) & PMASK
            g = grads[p[p[p[pxm] ^ pym] ^ pzm]]
            value += _falloff4(attn, hit) * (g[..., 0] * dxr + g[..., 1] * dyr + g[..., 2] * dzr)

            node = np.where(hit, table.next_success[octant, n], table.next_fail[octant, n])
            active &= node >= 0
        return value

    # 4D

    def _grad4_dot(self, xsb, ysb, zsb, wsb, dx, dy, dz, dw) -> np.ndarray:
        p = self.perm
        idx = p[p[p[p[xsb & PMASK] ^ (ysb & PMASK)] ^ (zsb & PMASK)] ^ (wsb & PMASK)]
        g = self.GRADIENTS.grad4[idx]
        return g[..., 0] * dx + g[..., 1] * dy + g[..., 2] * dz + g[..., 3] * dw

    # Area generation

    def context2d(
        self,
        orientation: area.LatticeOrientation2D | str,
        x_frequency: float,
        y_frequency: float,
        amplitude: float = 1.0,
    ) -> area.GenerateContext2D:
        return area.GenerateContext2D(
            orientation,
            x_frequency,
            y_frequency,
            amplitude,
            radius_sq=self.RADIUS_2D,
            gradients=self.GRADIENTS,
        )

    def context3d(
        self,
        orientation: area.LatticeOrientation3D | str,
        x_frequency: float,
        y_frequency: float,
        z_frequency: float,
        amplitude: float = 1.0,
    ) -> area.GenerateContext3D:
        return area.GenerateContext3D(
            orientation,
            x_frequency,
            y_frequency,
            z_frequency,
            amplitude,
            radius_sq=self.RADIUS_3D,
            gradients=self.GRADIENTS,
        )

    def generate2(
        self, context: area.GenerateContext2D, buffer: np.ndarray, x0: int, y0: int, **region
    ) -> int:
        """Flood-fill ``buffer`` with 2D noise; see ``area.generate2`` for ``region``."""
        return area.generate2(self.perm, context, buffer, x0, y0, **region)

    def generate3(
        self,
        context: area.GenerateContext3D,
        buffer: np.ndarray,
        x0: int,
        y0: int,
        z0: int,
        **region,
    ) -> int:
        return area.generate3(self.perm, context, buffer, x0, y0, z0, **region)
