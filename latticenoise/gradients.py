from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from . import _tables
from .core import PSIZE

PHI_GRAD_2D = np.array(_tables.PHI_GRAD_2D, dtype=np.float64)
GRAD_3D = np.array(_tables.GRAD_3D, dtype=np.float64)
GRAD_4D = np.array(_tables.GRAD_4D, dtype=np.float64)
SIMPLEX_4D = np.array(_tables.SIMPLEX_4D, dtype=np.int64)

_OS_GRAD_2D = np.array(_tables.OS_GRAD_2D, dtype=np.float64)
_OS_GRAD_3D = np.array(_tables.OS_GRAD_3D, dtype=np.float64)
_OS_GRAD_4D = np.array(_tables.OS_GRAD_4D, dtype=np.float64)

_ROOT_HALF = 0.7071067811865476
_SKEW2 = -0.211324865405187
_ROOT_THIRD = 0.577350269189626


def _tile(g: np.ndarray) -> np.ndarray:
    idx = np.arange(PSIZE) % g.shape[0]
    return np.ascontiguousarray(g[idx])


def _x_before_y_2d(g: np.ndarray) -> np.ndarray:
    xx = g[:, 0] * _ROOT_HALF
    yy = g[:, 1] * _ROOT_HALF
    return np.stack([xx - yy, xx + yy], axis=1)


def _classic_3d(g: np.ndarray) -> np.ndarray:
    grr = (2.0 / 3.0) * g.sum(axis=1, keepdims=True)
    return grr - g


def _xy_before_z_3d(g: np.ndarray) -> np.ndarray:
    gx, gy, gz = g[:, 0], g[:, 1], g[:, 2]
    s2 = (gx + gy) * _SKEW2
    zz = gz * _ROOT_THIRD
    return np.stack([gx + s2 + zz, gy + s2 + zz, (gz - gx - gy) * _ROOT_THIRD], axis=1)


def _xz_before_y_3d(g: np.ndarray) -> np.ndarray:
    gx, gy, gz = g[:, 0], g[:, 1], g[:, 2]
    s2 = (gx + gz) * _SKEW2
    yy = gy * _ROOT_THIRD
    return np.stack([gx + s2 + yy, (gy - gx - gz) * _ROOT_THIRD, gz + s2 + yy], axis=1)


@dataclass(frozen=True)
class GradientSet:
    """Normalised OpenSimplex gradients, tiled to the permutation size."""

    grad2: np.ndarray
    grad2_x_before_y: np.ndarray
    grad3: np.ndarray
    grad3_classic: np.ndarray
    grad3_xy_before_z: np.ndarray
    grad3_xz_before_y: np.ndarray
    grad4: np.ndarray


def opensimplex_gradients(n2: float, n3: float, n4: float) -> GradientSet:
    g2 = _OS_GRAD_2D / n2
    g3 = _OS_GRAD_3D / n3
    g4 = _OS_GRAD_4D / n4
    return GradientSet(
        grad2=_tile(g2),
        grad2_x_before_y=_tile(_x_before_y_2d(g2)),
        grad3=_tile(g3),
        grad3_classic=_tile(_classic_3d(g3)),
        grad3_xy_before_z=_tile(_xy_before_z_3d(g3)),
        grad3_xz_before_y=_tile(_xz_before_y_3d(g3)),
        grad4=_tile(g4),
    )
