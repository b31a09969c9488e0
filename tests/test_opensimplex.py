import numpy as np
import pytest

from latticenoise.core import PSIZE
from latticenoise.opensimplex2f import OpenSimplex2F
from latticenoise.opensimplex2s import DEFAULT_SEED, OpenSimplex2S

VARIANTS = [OpenSimplex2F, OpenSimplex2S]

METHODS = {
    2: ("noise2", "noise2_x_before_y"),
    3: ("noise3_classic", "noise3_xy_before_z", "noise3_xz_before_y"),
    4: ("noise4_classic", "noise4_xy_before_zw", "noise4_xz_before_yw", "noise4_xyz_before_w"),
}


def _points(n: int, dims: int, scale: float = 25.0) -> list[np.ndarray]:
    rng = np.random.default_rng(17)
    return [rng.uniform(-scale, scale, size=n) for _ in range(dims)]


@pytest.mark.parametrize("cls", VARIANTS)
def test_range_and_finite(cls) -> None:
    noise = cls(2024)
    for dims, names in METHODS.items():
        pts = _points(3000, dims)
        for name in names:
            v = getattr(noise, name)(*pts)
            assert v.shape == (3000,)
            assert np.isfinite(v).all()
            assert np.max(np.abs(v)) <= 1.01
            assert np.std(v) > 0.05


@pytest.mark.parametrize("cls", VARIANTS)
def test_deterministic_and_seeded(cls):
    pts = _points(300, 3)
    a = cls(1).noise3_classic(*pts)
    assert np.allclose(a, cls(1).noise3_classic(*pts))
    assert not np.allclose(a, cls(2).noise3_classic(*pts))


@pytest.mark.parametrize("cls", VARIANTS)
def test_array_matches_scalar_calls(cls) -> None:
    noise = cls(77)
    for dims, names in METHODS.items():
        pts = _points(25, dims)
        for name in names:
            fn = getattr(noise, name)
            batch = fn(*pts)
            single = np.array([float(fn(*p)) for p in zip(*pts)])
            assert np.allclose(batch, single)


@pytest.mark.parametrize("cls", VARIANTS)
def test_continuity(cls) -> None:
    noise = cls(5)
    eps = 1e-7
    for dims, names in METHODS.items():
        pts = _points(500, dims, scale=10.0)
        moved = [p + eps for p in pts]
        for name in names:
            fn = getattr(noise, name)
            assert np.max(np.abs(fn(*pts) - fn(*moved))) < 1e-3


def test_scalar_returns_0d_array():
    v = OpenSimplex2F(0).noise2(0.3, 0.7)
    assert isinstance(v, np.ndarray)
    assert v.ndim == 0


def test_permutation_is_bijection():
    for noise in (OpenSimplex2F(-8), OpenSimplex2S(9)):
        assert np.array_equal(np.sort(noise.perm), np.arange(PSIZE))


def test_smooth_default_seed():
    assert OpenSimplex2S().seed == DEFAULT_SEED
    assert np.array_equal(OpenSimplex2S().perm, OpenSimplex2S(DEFAULT_SEED).perm)


def test_variants_differ():
    pts = _points(200, 2)
    assert not np.allclose(OpenSimplex2F(3).noise2(*pts), OpenSimplex2S(3).noise2(*pts))


def test_bcc_walk_tables_terminate():
    for cls in VARIANTS:
        table = cls.BCC
        nodes = np.arange(table.size)
        for nxt in (table.next_fail, table.next_success):
            assert np.all((nxt == -1) | (nxt > nodes))
