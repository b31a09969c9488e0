import numpy as np
import pytest

from latticenoise.area import NEIGHBORS_3D, orientation_2d, orientation_3d, walk2, walk3
from latticenoise.opensimplex2f import OpenSimplex2F
from latticenoise.opensimplex2s import OpenSimplex2S

VARIANTS = [OpenSimplex2F, OpenSimplex2S]


@pytest.mark.parametrize("cls", VARIANTS)
@pytest.mark.parametrize(
    ("orientation", "method"),
    [("standard", "noise2"), ("x_before_y", "noise2_x_before_y")],
)
def test_generate2_matches_point_evaluation(cls, orientation: str, method: str) -> None:
    noise = cls(31)
    f = 1.0 / 128.0
    ctx = noise.context2d(orientation, f, f, 1.0)
    buf = np.zeros((64, 64), dtype=np.float64)
    visited = noise.generate2(ctx, buf, 0, 0)
    assert visited > 0

    yy, xx = np.mgrid[0:64, 0:64].astype(np.float64)
    expected = getattr(noise, method)(xx * f, yy * f)
    diff = np.abs(buf - expected)
    assert diff.max() < 0.15
    assert diff.mean() < 0.03


@pytest.mark.parametrize("cls", VARIANTS)
def test_generate2_tiles_add_up(cls) -> None:
    noise = cls(8)
    ctx = noise.context2d("standard", 1.0 / 24.0, 1.0 / 16.0, 1.0)

    full = np.zeros((40, 64), dtype=np.float64)
    noise.generate2(ctx, full, -100, 250)

    tiled = np.zeros((40, 64), dtype=np.float64)
    noise.generate2(ctx, tiled, -100, 250, width=32)
    noise.generate2(ctx, tiled, -100, 250, skip_x=32)
    assert np.allclose(tiled, full)

    rows = np.zeros((40, 64), dtype=np.float64)
    noise.generate2(ctx, rows, -100, 250, height=10)
    noise.generate2(ctx, rows, -100, 250, skip_y=10)
    assert np.allclose(rows, full)


def test_generate2_accumulates_into_buffer():
    noise = OpenSimplex2F(2)
    ctx = noise.context2d("standard", 0.05, 0.05, 1.0)
    once = np.zeros((16, 16))
    noise.generate2(ctx, once, 5, 5)
    twice = np.full((16, 16), 1.0)
    noise.generate2(ctx, twice, 5, 5)
    noise.generate2(ctx, twice, 5, 5)
    assert np.allclose(twice, 1.0 + 2.0 * once)


@pytest.mark.parametrize("cls", VARIANTS)
@pytest.mark.parametrize(
    ("orientation", "method"),
    [
        ("classic", "noise3_classic"),
        ("xy_before_z", "noise3_xy_before_z"),
        ("xz_before_y", "noise3_xz_before_y"),
    ],
)
def test_generate3_tracks_point_evaluation(cls, orientation: str, method: str) -> None:
    noise = cls(12)
    f = 1.0 / 32.0
    ctx = noise.context3d(orientation, f, f, f, 1.0)
    buf = np.zeros((12, 20, 20), dtype=np.float64)
    visited = noise.generate3(ctx, buf, 3, -7, 40)
    assert visited > 0
    assert np.isfinite(buf).all()

    zz, yy, xx = np.mgrid[0:12, 0:20, 0:20].astype(np.float64)
    expected = getattr(noise, method)((xx + 3) * f, (yy - 7) * f, (zz + 40) * f)
    assert np.std(buf) > 0.0
    assert np.corrcoef(buf.ravel(), expected.ravel())[0, 1] > 0.9
    assert np.abs(buf - expected).mean() < 0.05


def test_generate3_tiles_add_up():
    noise = OpenSimplex2S(4)
    ctx = noise.context3d("xy_before_z", 0.1, 0.1, 0.2, 1.0)
    full = np.zeros((6, 10, 10))
    noise.generate3(ctx, full, 0, 0, 0)
    split = np.zeros((6, 10, 10))
    noise.generate3(ctx, split, 0, 0, 0, depth=3)
    noise.generate3(ctx, split, 0, 0, 0, skip_z=3)
    assert np.allclose(split, full)


def test_neighbor_maps_switch_half_lattice():
    assert len(set(NEIGHBORS_3D[0])) == 8
    assert len(set(NEIGHBORS_3D[1])) == 8
    # Stepping out and back must be able to return to the starting point.
    back = {(-a, -b, -c) for a, b, c in NEIGHBORS_3D[0]}
    assert back == set(NEIGHBORS_3D[1])


def test_context_kernel_is_symmetric():
    ctx = OpenSimplex2F(0).context2d("standard", 0.1, 0.2, 1.0)
    assert np.allclose(ctx.kernel, ctx.kernel[::-1, ::-1])
    assert ctx.kernel.shape == (2 * ctx.scaled_radius_y, 2 * ctx.scaled_radius_x)
    assert ctx.kernel.min() >= 0.0


def test_validation():
    noise = OpenSimplex2F(0)
    with pytest.raises(ValueError):
        noise.context2d("standard", 0.0, 0.1)
    with pytest.raises(ValueError):
        noise.context3d("classic", 0.1, -0.1, 0.1)
    with pytest.raises(ValueError):
        orientation_2d("diagonal")
    with pytest.raises(ValueError):
        orientation_3d("xy_before_w")

    ctx = noise.context2d("standard", 0.1, 0.1)
    with pytest.raises(ValueError):
        noise.generate2(ctx, np.zeros((4, 4, 4)), 0, 0)
    with pytest.raises(ValueError):
        noise.generate2(ctx, np.zeros((4, 4)), 0, 0, width=8)
    with pytest.raises(ValueError):
        noise.generate2(ctx, np.zeros((4, 4)), 0, 0, skip_x=-1)


@pytest.mark.parametrize("cls", VARIANTS)
def test_walk2_visits_each_lattice_point_once(cls) -> None:
    noise = cls(19)
    ctx = noise.context2d("x_before_y", 1.0 / 20.0, 1.0 / 12.0, 1.0)
    buf = np.zeros((40, 64))

    for lo, hi, region in (
        ((-30, 7), (34, 47), {}),
        ((2, 7), (34, 47), {"skip_x": 32}),
        ((-30, 27), (34, 47), {"skip_y": 20}),
    ):
        keys = [key for key, _ in walk2(ctx, lo, hi)]
        assert len(keys) == len(set(keys))
        assert noise.generate2(ctx, buf, -30, 7, **region) == len(keys)


@pytest.mark.parametrize("cls", VARIANTS)
def test_walk3_visits_each_lattice_point_once(cls) -> None:
    noise = cls(23)
    ctx = noise.context3d("classic", 0.1, 0.15, 0.2, 1.0)
    buf = np.zeros((8, 12, 10))

    for lo, hi, region in (
        ((5, -4, 11), (15, 8, 19), {}),
        ((5, -4, 14), (15, 8, 19), {"skip_z": 3}),
        ((5, -4, 11), (10, 8, 19), {"width": 5}),
    ):
        keys = [key for key, _ in walk3(ctx, lo, hi)]
        assert len(keys) == len(set(keys))
        assert {k[3] for k in keys} == {0, 1}
        assert noise.generate3(ctx, buf, 5, -4, 11, **region) == len(keys)
