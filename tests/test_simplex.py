import numpy as np

from latticenoise.simplex import simplex2, simplex3, simplex4


def _points(n: int, dims: int, scale: float = 50.0) -> list[np.ndarray]:
    rng = np.random.default_rng(11)
    return [rng.uniform(-scale, scale, size=n) for _ in range(dims)]


def test_simplex_range_and_finite() -> None:
    for fn, dims in ((simplex2, 2), (simplex3, 3), (simplex4, 4)):
        v = fn(1337, *_points(4000, dims))
        assert np.isfinite(v).all()
        assert np.max(np.abs(v)) <= 1.01
        assert np.std(v) > 0.05


def test_simplex_deterministic_and_seeded():
    pts = _points(200, 3)
    assert np.allclose(simplex3(5, *pts), simplex3(5, *pts))
    assert not np.allclose(simplex3(5, *pts), simplex3(6, *pts))


def test_simplex_scalar_input_gives_0d_array():
    v = simplex2(0, 1.25, -3.5)
    assert isinstance(v, np.ndarray)
    assert v.ndim == 0


def test_simplex_broadcasts():
    x = np.linspace(0.0, 4.0, 5)
    y = np.linspace(0.0, 3.0, 4)[:, None]
    v = simplex2(9, x, y)
    assert v.shape == (4, 5)
    assert np.isclose(v[2, 3], simplex2(9, x[3], y[2, 0]))


def test_simplex_is_continuous() -> None:
    eps = 1e-6
    for fn, dims in ((simplex2, 2), (simplex3, 3), (simplex4, 4)):
        pts = _points(500, dims, scale=20.0)
        moved = [pts[0] + eps] + pts[1:]
        assert np.max(np.abs(fn(3, *pts) - fn(3, *moved))) < 1e-3


def test_simplex_continuous_across_negative_integers():
    # The shifted floor for exact negative integers must not open a seam.
    y = np.full(3, 0.37)
    x = np.array([-2.0 - 1e-9, -2.0, -2.0 + 1e-9])
    v = simplex2(21, x, y)
    assert np.max(np.abs(np.diff(v))) < 1e-6
