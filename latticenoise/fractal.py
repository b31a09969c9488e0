from __future__ import annotations

from typing import Protocol

import numpy as np

from .core import wrap_seed
from .simplex import simplex2, simplex3

FRACTAL_TYPES = ("fbm", "billow", "ridged_multi")


class Kernel(Protocol):
    def __call__(self, seed: int, *coords: np.ndarray) -> np.ndarray:  # pragma: no cover
        ...


def check_fractal_type(name: str) -> str:
    name = str(name)
    if name not in FRACTAL_TYPES:
        raise ValueError(f"unknown fractal type: {name}")
    return name


def check_octaves(octaves: int) -> int:
    octaves = int(octaves)
    if octaves <= 0:
        raise ValueError("octaves must be >= 1")
    return octaves


def fractal_bounding(octaves: int, gain: float) -> float:
    """Reciprocal of the summed FBM amplitudes, 1 / (1 + gain + gain^2 + ...)."""
    amp = float(gain)
    amp_fractal = 1.0
    for _ in range(1, int(octaves)):
        amp_fractal += amp
        amp *= gain
    return 1.0 / amp_fractal


def _next_coords(coords: list[np.ndarray], lacunarity: float, swap_axes: bool) -> list[np.ndarray]:
    if swap_axes:
        x, y = coords
        return [y * lacunarity, x * lacunarity]
    return [c * lacunarity for c in coords]


def fbm(
    kernel: Kernel,
    seed: int,
    coords,
    *,
    octaves: int,
    lacunarity: float,
    gain: float,
    swap_axes: bool = False,
) -> np.ndarray:
    coords = [np.asarray(c, dtype=np.float64) for c in coords]
    total = kernel(wrap_seed(seed), *coords)
    amp = 1.0
    for i in range(1, octaves):
        coords = _next_coords(coords, lacunarity, swap_axes)
        amp *= gain
        total = total + kernel(wrap_seed(seed + i), *coords) * amp
    return total * fractal_bounding(octaves, gain)


def billow(
    kernel: Kernel,
    seed: int,
    coords,
    *,
    octaves: int,
    lacunarity: float,
    gain: float,
    swap_axes: bool = False,
) -> np.ndarray:
    coords = [np.asarray(c, dtype=np.float64) for c in coords]
    total = np.abs(kernel(wrap_seed(seed), *coords)) * 2.0 - 1.0
    amp = 1.0
    for i in range(1, octaves):
        coords = _next_coords(coords, lacunarity, swap_axes)
        amp *= gain
        total = total + (np.abs(kernel(wrap_seed(seed + i), *coords)) * 2.0 - 1.0) * amp
    return total * fractal_bounding(octaves, gain)


def ridged_multi(
    kernel: Kernel,
    seed: int,
    coords,
    *,
    octaves: int,
    lacunarity: float,
    swap_axes: bool = False,
) -> np.ndarray:
    """Ridged multifractal.

    Each octave's weight is the clamped spike of the octave before it, so
    octaves only add detail where the previous layer sits near a ridge.
    """
    coords = [np.asarray(c, dtype=np.float64) for c in coords]
    total = 0.0
    amp = 1.0
    amp_bias = 1.0
    for i in range(octaves):
        spike = 1.0 - np.abs(kernel(wrap_seed(seed + i), *coords))
        spike = spike * spike * amp
        amp = np.clip(spike * 2.0, 0.0, 1.0)
        total = total + spike * amp_bias
        amp_bias *= 2.0
        coords = _next_coords(coords, lacunarity, swap_axes)
    return total / ((amp_bias - 1.0) * 0.5) - 1.0


def combine(
    kernel: Kernel,
    seed: int,
    coords,
    *,
    octaves: int,
    lacunarity: float = 2.0,
    gain: float = 0.5,
    rule: str = "fbm",
    swap_axes: bool = False,
) -> np.ndarray:
    octaves = check_octaves(octaves)
    rule = check_fractal_type(rule)
    if rule == "ridged_multi":
        return ridged_multi(
            kernel, seed, coords, octaves=octaves, lacunarity=lacunarity, swap_axes=swap_axes
        )
    combiner = billow if rule == "billow" else fbm
    return combiner(
        kernel, seed, coords, octaves=octaves, lacunarity=lacunarity, gain=gain, swap_axes=swap_axes
    )


def layered2d(
    x,
    y,
    seed: int,
    octaves: int,
    *,
    frequency: float = 0.03125,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> np.ndarray:
    # Plain FBM for every argument combination, normalised by fractal_bounding.
    # Ridge folding (1 - |n|) lives in ridged2d only.
    x = np.asarray(x, dtype=np.float64) * frequency
    y = np.asarray(y, dtype=np.float64) * frequency
    octaves = check_octaves(octaves)
    return fbm(simplex2, seed, (x, y), octaves=octaves, lacunarity=lacunarity, gain=gain)


def layered3d(
    x,
    y,
    z,
    seed: int,
    octaves: int,
    *,
    frequency: float = 0.03125,
    lacunarity: float = 2.0,
    gain: float = 0.5,
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64) * frequency
    y = np.asarray(y, dtype=np.float64) * frequency
    z = np.asarray(z, dtype=np.float64) * frequency
    octaves = check_octaves(octaves)
    return fbm(simplex3, seed, (x, y, z), octaves=octaves, lacunarity=lacunarity, gain=gain)


def ridged2d(
    x, y, seed: int, octaves: int, *, frequency: float = 0.03125, lacunarity: float = 2.0
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64) * frequency
    y = np.asarray(y, dtype=np.float64) * frequency
    octaves = check_octaves(octaves)
    return ridged_multi(simplex2, seed, (x, y), octaves=octaves, lacunarity=lacunarity)


def ridged3d(
    x, y, z, seed: int, octaves: int, *, frequency: float = 0.03125, lacunarity: float = 2.0
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64) * frequency
    y = np.asarray(y, dtype=np.float64) * frequency
    z = np.asarray(z, dtype=np.float64) * frequency
    octaves = check_octaves(octaves)
    return ridged_multi(simplex3, seed, (x, y, z), octaves=octaves, lacunarity=lacunarity)
