from __future__ import annotations

import math

import numpy as np

from .engine import NoiseEngine


def noise_map_2d(
    *,
    width: int,
    height: int,
    engine: NoiseEngine | None = None,
    seed: int = 1337,
    frequency: float = 0.03125,
    noise_type: str = "simplex_fractal",
    octaves: int = 1,
    lacunarity: float = 2.0,
    gain: float = 0.5,
    interpolation: str = "hermite",
    fractal_type: str = "fbm",
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    normalize: bool = False,
    tileable: bool = False,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Sample noise on an integer grid into a ``(height, width)`` array.

    Pass a configured ``engine``, or the engine fields to build one. With
    ``tileable`` the map wraps around both edges: column ``width`` would equal
    column 0, so copies of the map can be laid side by side.
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")

    if engine is None:
        engine = NoiseEngine(
            seed=seed,
            frequency=frequency,
            noise_type=noise_type,
            octaves=octaves,
            lacunarity=lacunarity,
            gain=gain,
            interpolation=interpolation,
            fractal_type=fractal_type,
        )

    xs = np.arange(width, dtype=np.float64) + float(offset_x)
    ys = np.arange(height, dtype=np.float64) + float(offset_y)
    xg, yg = np.meshgrid(xs, ys)

    if bool(tileable):
        z = engine.seamless2d(xg, yg, float(width), float(height), engine.seed)
    else:
        z = engine.evaluate2d(xg, yg)

    if bool(normalize):
        zmin = float(np.min(z))
        zmax = float(np.max(z))
        if math.isclose(zmin, zmax):
            z = np.zeros_like(z)
        else:
            z = (z - zmin) / (zmax - zmin)

    if dtype is not None:
        z = np.asarray(z, dtype=dtype)
    return z
