import numpy as np
import pytest

from latticenoise.fractal import (
    billow,
    combine,
    fbm,
    fractal_bounding,
    layered2d,
    layered3d,
    ridged2d,
    ridged3d,
    ridged_multi,
)
from latticenoise.simplex import simplex2, simplex3


def _xy(n: int = 400) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(3)
    return rng.uniform(-30.0, 30.0, size=n), rng.uniform(-30.0, 30.0, size=n)


def test_fractal_bounding():
    assert fractal_bounding(1, 0.5) == 1.0
    assert np.isclose(fractal_bounding(3, 0.5), 1.0 / 1.75)


def test_single_octave_fbm_and_billow_match_kernel():
    x, y = _xy()
    base = simplex2(10, x, y)
    assert np.allclose(fbm(simplex2, 10, (x, y), octaves=1, lacunarity=2.0, gain=0.5), base)
    assert np.allclose(
        billow(simplex2, 10, (x, y), octaves=1, lacunarity=2.0, gain=0.5),
        np.abs(base) * 2.0 - 1.0,
    )


def test_fbm_uses_next_seed_per_octave():
    x, y = _xy()
    two = fbm(simplex2, 10, (x, y), octaves=2, lacunarity=2.0, gain=0.5)
    expected = (simplex2(10, x, y) + 0.5 * simplex2(11, x * 2.0, y * 2.0)) / 1.5
    assert np.allclose(two, expected)


def test_ridged_saturated_kernels_stay_finite() -> None:
    x, y = _xy(10)

    def flat(value):
        return lambda seed, *coords: np.full(np.shape(coords[0]), value)

    for value in (0.0, 1.0, -1.0):
        out = ridged_multi(flat(value), 0, (x, y), octaves=4, lacunarity=2.0)
        assert np.isfinite(out).all()
        assert np.all(np.abs(out) <= 1.0)
    # A kernel stuck at +-1 has no ridges anywhere.
    assert np.allclose(ridged_multi(flat(1.0), 0, (x, y), octaves=3, lacunarity=2.0), -1.0)


def test_swap_axes_swaps_between_octaves():
    x = np.array([1.0, 2.0])
    y = np.array([10.0, 20.0])

    def first(seed, a, b):
        return a

    out = fbm(first, 0, (x, y), octaves=2, lacunarity=2.0, gain=0.5, swap_axes=True)
    assert np.allclose(out, (x + 0.5 * (y * 2.0)) / 1.5)


def test_combine_dispatch_and_validation():
    x, y = _xy()
    assert np.allclose(
        combine(simplex2, 4, (x, y), octaves=3, rule="billow"),
        billow(simplex2, 4, (x, y), octaves=3, lacunarity=2.0, gain=0.5),
    )
    with pytest.raises(ValueError):
        combine(simplex2, 4, (x, y), octaves=0)
    with pytest.raises(ValueError):
        combine(simplex2, 4, (x, y), octaves=2, rule="hybrid")


def test_layered_and_ridged_helpers() -> None:
    x, y = _xy()
    z = x * 0.5
    for v in (
        layered2d(x, y, 8, 4),
        layered3d(x, y, z, 8, 4),
        ridged2d(x, y, 8, 4),
        ridged3d(x, y, z, 8, 4),
    ):
        assert np.isfinite(v).all()
        assert np.max(np.abs(v)) <= 1.01

    assert np.allclose(layered2d(x, y, 8, 1), simplex2(8, x * 0.03125, y * 0.03125))
    expected = simplex3(8, x * 0.5, y * 0.5, z * 0.5)
    assert np.allclose(layered3d(x, y, z, 8, 1, frequency=0.5), expected)
