"""Flood-fill area generation for OpenSimplex noise.

Instead of evaluating every sample independently, each lattice point is
visited once and its contribution kernel is splatted onto the samples it
reaches. The walk starts from the lattice point under the region origin and
floods outward through lattice neighbours whose footprint overlaps the
region.

Results may slightly exceed [-1, 1]: the kernel is pre-rasterised at
half-sample offsets, so it is snapped to the sample grid.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass

import numpy as np

from .core import PMASK
from .gradients import GradientSet

logger = logging.getLogger(__name__)

# Hexagon surrounding each vertex.
NEIGHBORS_2D = ((1, 0), (1, 1), (0, 1), (0, -1), (-1, -1), (-1, 0))

# Cube surrounding each vertex; stepping across it switches half-lattice.
NEIGHBORS_3D = (
    tuple((1024 + (i & 1), 1024 + ((i >> 1) & 1), 1024 + ((i >> 2) & 1)) for i in range(8)),
    tuple((-1024 - (i & 1), -1024 - ((i >> 1) & 1), -1024 - ((i >> 2) & 1)) for i in range(8)),
)


@dataclass(frozen=True)
class LatticeOrientation2D:
    """Skew matrix ``s`` into lattice space and its inverse ``t``.

    Matrices are row-major ``(m00, m01, m10, m11)``.
    """

    name: str
    gradients: str
    s: tuple[float, float, float, float]
    t: tuple[float, float, float, float]


@dataclass(frozen=True)
class LatticeOrientation3D:
    name: str
    gradients: str
    # rotation quaternion (qx, qy, qz, qw)
    q: tuple[float, float, float, float]


STANDARD = LatticeOrientation2D(
    name="standard",
    gradients="grad2",
    s=(1.366025403784439, 0.366025403784439, 0.366025403784439, 1.366025403784439),
    t=(0.788675134594813, -0.211324865405187, -0.211324865405187, 0.788675134594813),
)
X_BEFORE_Y = LatticeOrientation2D(
    name="x_before_y",
    gradients="grad2_x_before_y",
    s=(0.7071067811865476, 1.224744871380249, -0.7071067811865476, 1.224744871380249),
    t=(0.7071067811865476, -0.7071067811865476, 0.40824829046764305, 0.40824829046764305),
)

CLASSIC = LatticeOrientation3D(
    name="classic",
    gradients="grad3_classic",
    q=(0.577350269189626, 0.577350269189626, 0.577350269189626, 0.0),
)
XY_BEFORE_Z = LatticeOrientation3D(
    name="xy_before_z",
    gradients="grad3_xy_before_z",
    q=(0.3250575836718682, -0.3250575836718682, 0.0, 0.8880738339771154),
)
XZ_BEFORE_Y = LatticeOrientation3D(
    name="xz_before_y",
    gradients="grad3_xz_before_y",
    q=(-0.3250575836718682, 0.0, 0.3250575836718682, 0.8880738339771154),
)

ORIENTATIONS_2D = {o.name: o for o in (STANDARD, X_BEFORE_Y)}
ORIENTATIONS_3D = {o.name: o for o in (CLASSIC, XY_BEFORE_Z, XZ_BEFORE_Y)}


def orientation_2d(orientation: LatticeOrientation2D | str) -> LatticeOrientation2D:
    if isinstance(orientation, LatticeOrientation2D):
        return orientation
    name = str(orientation)
    if name not in ORIENTATIONS_2D:
        raise ValueError(f"unknown 2D orientation: {name}")
    return ORIENTATIONS_2D[name]


def orientation_3d(orientation: LatticeOrientation3D | str) -> LatticeOrientation3D:
    if isinstance(orientation, LatticeOrientation3D):
        return orientation
    name = str(orientation)
    if name not in ORIENTATIONS_3D:
        raise ValueError(f"unknown 3D orientation: {name}")
    return ORIENTATIONS_3D[name]


def _check_frequency(*freqs: float) -> None:
    for f in freqs:
        if not f > 0.0:
            raise ValueError("frequency must be > 0")


def _scaled_radius(radius_sq: float, frequency: float) -> int:
    # 0.25 because the kernel centre sits half a sample off the lattice point
    return int(math.ceil(math.sqrt(radius_sq) / frequency + 0.25))


def _half_widths(offsets_sq: np.ndarray, radius: int) -> np.ndarray:
    # Negative radicands only occur outside the sphere; their width is 0.
    return np.ceil(np.sqrt(np.maximum(1.0 - offsets_sq, 0.0)) * radius).astype(np.int64)


def _centred(n: int) -> np.ndarray:
    return np.arange(2 * n, dtype=np.float64) + 0.5 - n


class GenerateContext2D:
    """Pre-rasterised contribution kernel for one orientation and frequency pair.

    Reusable across any number of ``generate2`` calls.
    """

    def __init__(
        self,
        orientation: LatticeOrientation2D | str,
        x_frequency: float,
        y_frequency: float,
        amplitude: float,
        *,
        radius_sq: float,
        gradients: GradientSet,
    ):
        self.orientation = orientation_2d(orientation)
        self.x_frequency = float(x_frequency)
        self.y_frequency = float(y_frequency)
        _check_frequency(self.x_frequency, self.y_frequency)
        self.amplitude = float(amplitude)
        self.radius_sq = float(radius_sq)
        self.gradients = getattr(gradients, self.orientation.gradients)

        self.x_frequency_inverse = 1.0 / self.x_frequency
        self.y_frequency_inverse = 1.0 / self.y_frequency
        rx = _scaled_radius(self.radius_sq, self.x_frequency)
        ry = _scaled_radius(self.radius_sq, self.y_frequency)
        self.scaled_radius_x = rx
        self.scaled_radius_y = ry

        cy = _centred(ry)
        cx = _centred(rx)
        self.kernel_bounds = _half_widths((cy / ry) ** 2, rx)

        dx = cx * self.x_frequency
        dy = cy * self.y_frequency
        attn = self.radius_sq - dx[None, :] ** 2 - dy[:, None] ** 2
        attn = np.where(attn > 0.0, attn, 0.0)
        attn *= attn
        kernel = attn * attn * self.amplitude

        kx = np.arange(2 * rx)[None, :]
        bounds = self.kernel_bounds[:, None]
        self.kernel = np.where((kx >= rx - bounds) & (kx < rx + bounds), kernel, 0.0)

    def dest_point(self, xsv: int, ysv: int) -> tuple[int, int]:
        """Sample-space position of lattice point ``(xsv, ysv)``, rounded up."""
        t00, t01, t10, t11 = self.orientation.t
        return (
            math.ceil((t00 * xsv + t01 * ysv) * self.x_frequency_inverse),
            math.ceil((t10 * xsv + t11 * ysv) * self.y_frequency_inverse),
        )


class GenerateContext3D:
    def __init__(
        self,
        orientation: LatticeOrientation3D | str,
        x_frequency: float,
        y_frequency: float,
        z_frequency: float,
        amplitude: float,
        *,
        radius_sq: float,
        gradients: GradientSet,
    ):
        self.orientation = orientation_3d(orientation)
        self.x_frequency = float(x_frequency)
        self.y_frequency = float(y_frequency)
        self.z_frequency = float(z_frequency)
        _check_frequency(self.x_frequency, self.y_frequency, self.z_frequency)
        self.amplitude = float(amplitude)
        self.radius_sq = float(radius_sq)
        self.gradients = getattr(gradients, self.orientation.gradients)

        self.x_frequency_inverse = 1.0 / self.x_frequency
        self.y_frequency_inverse = 1.0 / self.y_frequency
        self.z_frequency_inverse = 1.0 / self.z_frequency
        rx = _scaled_radius(self.radius_sq, self.x_frequency)
        ry = _scaled_radius(self.radius_sq, self.y_frequency)
        rz = _scaled_radius(self.radius_sq, self.z_frequency)
        self.scaled_radius_x = rx
        self.scaled_radius_y = ry
        self.scaled_radius_z = rz

        cz = _centred(rz)
        cy = _centred(ry)
        cx = _centred(rx)
        self.kernel_bounds_y = _half_widths((cz / rz) ** 2, ry)
        self.kernel_bounds_x = _half_widths((cy[None, :] / ry) ** 2 + (cz[:, None] / rz) ** 2, rx)

        dx = (cx * self.x_frequency)[None, None, :]
        dy = (cy * self.y_frequency)[None, :, None]
        dz = (cz * self.z_frequency)[:, None, None]
        attn = self.radius_sq - dx * dx - dy * dy - dz * dz
        attn = np.where(attn > 0.0, attn, 0.0)
        attn *= attn
        kernel = attn * attn * self.amplitude

        ky = np.arange(2 * ry)[None, :, None]
        kx = np.arange(2 * rx)[None, None, :]
        by = self.kernel_bounds_y[:, None, None]
        bx = self.kernel_bounds_x[:, :, None]
        inside = (ky >= ry - by) & (ky < ry + by) & (kx >= rx - bx) & (kx < rx + bx)
        self.kernel = np.where(inside, kernel, 0.0)

    def dest_point(self, xsv: int, ysv: int, zsv: int, lattice: int) -> tuple[int, int, int]:
        # Inverse rotation: conjugate quaternion.
        qx, qy, qz, qw = self.orientation.q
        xr, yr, zr = _rotate(
            -qx, -qy, -qz, qw,
            xsv - lattice * 1024.5,
            ysv - lattice * 1024.5,
            zsv - lattice * 1024.5,
        )
        return (
            math.ceil(xr * self.x_frequency_inverse),
            math.ceil(yr * self.y_frequency_inverse),
            math.ceil(zr * self.z_frequency_inverse),
        )


def _rotate(qx, qy, qz, qw, x, y, z) -> tuple[float, float, float]:
    tx = 2.0 * (qy * z - qz * y)
    ty = 2.0 * (qz * x - qx * z)
    tz = 2.0 * (qx * y - qy * x)
    return (
        x + qw * tx + (qy * tz - qz * ty),
        y + qw * ty + (qz * tx - qx * tz),
        z + qw * tz + (qx * ty - qy * tx),
    )


def _region(buffer, dims: int, origin, extent, skip) -> tuple[np.ndarray, list[int], list[int]]:
    if not isinstance(buffer, np.ndarray) or buffer.ndim != dims:
        raise ValueError(f"buffer must be a {dims}D numpy array")
    # extent is (width, height[, depth]); buffer axes run the other way
    shape = buffer.shape[::-1]
    extent = [shape[i] if e is None else int(e) for i, e in enumerate(extent)]
    skip = [int(s) for s in skip]
    if any(s < 0 for s in skip):
        raise ValueError("skip offsets must be >= 0")
    if any(e < 0 or e > n for e, n in zip(extent, shape)):
        raise ValueError("buffer is too small for the requested region")
    lo = [int(o) + s for o, s in zip(origin, skip)]
    hi = [int(o) + e for o, e in zip(origin, extent)]
    return buffer, lo, hi


def walk2(context: GenerateContext2D, lo, hi):
    """Yield ``((xsv, ysv), (dest_x, dest_y))`` for the lattice points whose
    kernel reaches samples ``lo <= (xx, yy) < hi``, each point exactly once.
    """
    xs0, ys0 = lo
    xs1, ys1 = hi
    rx = context.scaled_radius_x
    ry = context.scaled_radius_y

    s00, s01, s10, s11 = context.orientation.s
    x0f = xs0 * context.x_frequency
    y0f = ys0 * context.y_frequency
    start = (math.floor(s00 * x0f + s01 * y0f), math.floor(s10 * x0f + s11 * y0f))

    queue: deque[tuple[tuple[int, int], tuple[int, int]]] = deque()
    seen: set[tuple[int, int]] = set()

    # The first point is always taken, whether or not it reaches the region.
    seen.add(start)
    queue.append((start, context.dest_point(*start)))

    while queue:
        key, dest = queue.popleft()
        yield key, dest

        xsv, ysv = key
        for nx, ny in NEIGHBORS_2D:
            nxt = (xsv + nx, ysv + ny)
            if nxt in seen:
                continue
            dest_x, dest_y = context.dest_point(*nxt)
            if dest_x + rx < xs0 or dest_x - rx > xs1 - 1:
                continue
            if dest_y + ry < ys0 or dest_y - ry > ys1 - 1:
                continue
            seen.add(nxt)
            queue.append((nxt, (dest_x, dest_y)))


def walk3(context: GenerateContext3D, lo, hi):
    """3D counterpart of ``walk2``; keys carry the half-lattice as a 4th item."""
    xs0, ys0, zs0 = lo
    xs1, ys1, zs1 = hi
    rx = context.scaled_radius_x
    ry = context.scaled_radius_y
    rz = context.scaled_radius_z

    xr, yr, zr = _rotate(
        *context.orientation.q,
        xs0 * context.x_frequency,
        ys0 * context.y_frequency,
        zs0 * context.z_frequency,
    )
    start = (math.floor(xr), math.floor(yr), math.floor(zr), 0)

    def overlaps(dest: tuple[int, int, int]) -> bool:
        dest_x, dest_y, dest_z = dest
        return (
            dest_x + rx >= xs0
            and dest_x - rx <= xs1 - 1
            and dest_y + ry >= ys0
            and dest_y - ry <= ys1 - 1
            and dest_z + rz >= zs0
            and dest_z - rz <= zs1 - 1
        )

    queue: deque[tuple[tuple[int, int, int, int], tuple[int, int, int]]] = deque()
    seen: set[tuple[int, int, int, int]] = set()

    seen.add(start)
    queue.append((start, context.dest_point(*start)))

    while queue:
        key, dest = queue.popleft()
        yield key, dest

        xsv, ysv, zsv, lattice = key
        for nx, ny, nz in NEIGHBORS_3D[lattice]:
            nxt = (xsv + nx, ysv + ny, zsv + nz, lattice ^ 1)
            if nxt in seen:
                continue
            nxt_dest = context.dest_point(*nxt)
            if overlaps(nxt_dest):
                seen.add(nxt)
                queue.append((nxt, nxt_dest))


def generate2(
    perm: np.ndarray,
    context: GenerateContext2D,
    buffer: np.ndarray,
    x0: int,
    y0: int,
    width: int | None = None,
    height: int | None = None,
    skip_x: int = 0,
    skip_y: int = 0,
) -> int:
    """Accumulate 2D noise into ``buffer[yy - y0, xx - x0]``.

    Only samples with ``x0 + skip_x <= xx < x0 + width`` (and likewise for y)
    are written, so a region can be split into tiles that share an origin.
    Returns the number of lattice points visited.
    """
    buffer, lo, hi = _region(buffer, 2, (x0, y0), (width, height), (skip_x, skip_y))
    xs0, ys0 = lo
    xs1, ys1 = hi
    rx = context.scaled_radius_x
    ry = context.scaled_radius_y
    kernel = context.kernel
    grads = context.gradients
    xf = context.x_frequency
    yf = context.y_frequency

    visited = 0
    for (xsv, ysv), (dest_x, dest_y) in walk2(context, lo, hi):
        visited += 1

        g = grads[perm[perm[xsv & PMASK] ^ (ysv & PMASK)]]
        gx = g[0] * xf
        gy = g[1] * yf
        g_off = 0.5 * (gx + gy)

        yy0 = max(dest_y - ry, ys0)
        yy1 = min(dest_y + ry, ys1)
        xx0 = max(dest_x - rx, xs0)
        xx1 = min(dest_x + rx, xs1)
        if yy0 < yy1 and xx0 < xx1:
            dx = np.arange(xx0 - dest_x, xx1 - dest_x, dtype=np.float64)
            dy = np.arange(yy0 - dest_y, yy1 - dest_y, dtype=np.float64)
            ky = yy0 - dest_y + ry
            kx = xx0 - dest_x + rx
            block = kernel[ky : ky + yy1 - yy0, kx : kx + xx1 - xx0]
            buffer[yy0 - y0 : yy1 - y0, xx0 - x0 : xx1 - x0] += block * (
                gx * dx[None, :] + gy * dy[:, None] + g_off
            )

    logger.debug(
        "generate2 visited %d lattice points for a %dx%d region", visited, xs1 - xs0, ys1 - ys0
    )
    return visited


def generate3(
    perm: np.ndarray,
    context: GenerateContext3D,
    buffer: np.ndarray,
    x0: int,
    y0: int,
    z0: int,
    width: int | None = None,
    height: int | None = None,
    depth: int | None = None,
    skip_x: int = 0,
    skip_y: int = 0,
    skip_z: int = 0,
) -> int:
    """Accumulate 3D noise into ``buffer[zz - z0, yy - y0, xx - x0]``.

    Lattice points alternate between the two cubic half-lattices of the BCC
    lattice; the second one lives 1024 units away in table space.
    """
    buffer, lo, hi = _region(
        buffer, 3, (x0, y0, z0), (width, height, depth), (skip_x, skip_y, skip_z)
    )
    xs0, ys0, zs0 = lo
    xs1, ys1, zs1 = hi
    rx = context.scaled_radius_x
    ry = context.scaled_radius_y
    rz = context.scaled_radius_z
    kernel = context.kernel
    grads = context.gradients
    xf = context.x_frequency
    yf = context.y_frequency
    zf = context.z_frequency

    visited = 0
    for (xsv, ysv, zsv, _), (dest_x, dest_y, dest_z) in walk3(context, lo, hi):
        visited += 1

        g = grads[perm[perm[perm[xsv & PMASK] ^ (ysv & PMASK)] ^ (zsv & PMASK)]]
        gx = g[0] * xf
        gy = g[1] * yf
        gz = g[2] * zf
        g_off = 0.5 * (gx + gy + gz)

        zz0 = max(dest_z - rz, zs0)
        zz1 = min(dest_z + rz, zs1)
        yy0 = max(dest_y - ry, ys0)
        yy1 = min(dest_y + ry, ys1)
        xx0 = max(dest_x - rx, xs0)
        xx1 = min(dest_x + rx, xs1)
        if zz0 < zz1 and yy0 < yy1 and xx0 < xx1:
            dx = np.arange(xx0 - dest_x, xx1 - dest_x, dtype=np.float64)[None, None, :]
            dy = np.arange(yy0 - dest_y, yy1 - dest_y, dtype=np.float64)[None, :, None]
            dz = np.arange(zz0 - dest_z, zz1 - dest_z, dtype=np.float64)[:, None, None]
            block = kernel[
                zz0 - dest_z + rz : zz1 - dest_z + rz,
                yy0 - dest_y + ry : yy1 - dest_y + ry,
                xx0 - dest_x + rx : xx1 - dest_x + rx,
            ]
            buffer[zz0 - z0 : zz1 - z0, yy0 - y0 : yy1 - y0, xx0 - x0 : xx1 - x0] += block * (
                gx * dx + gy * dy + gz * dz + g_off
            )

    logger.debug(
        "generate3 visited %d lattice points for a %dx%dx%d region",
        visited,
        xs1 - xs0,
        ys1 - ys0,
        zs1 - zs0,
    )
    return visited
