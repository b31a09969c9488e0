import numpy as np

from latticenoise.core import (
    PSIZE,
    build_permutation_multiply_shift,
    build_permutation_remainder,
    fast_floor,
    hermite,
    lerp,
    quintic,
    to_int32,
    wrap_seed,
)


def test_curve_endpoints():
    t = np.array([0.0, 0.5, 1.0], dtype=np.float64)
    for curve in (hermite, quintic):
        out = curve(t)
        assert out[0] == 0.0
        assert out[1] == 0.5
        assert out[2] == 1.0


def test_lerp_hits_endpoints_and_broadcasts():
    a = np.array([[-3.0], [4.0]])
    b = np.array([[5.0], [-4.0]])
    t = np.array([0.0, 0.25, 1.0])
    out = lerp(a, b, t)
    assert out.shape == (2, 3)
    assert out[:, 0].tolist() == [-3.0, 4.0]
    assert out[:, 2].tolist() == [5.0, -4.0]
    assert np.allclose(out[:, 1], [-1.0, 2.0])


def test_fast_floor_sends_negative_integers_down():
    f = fast_floor(np.array([1.5, 0.0, -0.5, -1.5, -2.0]))
    assert f.tolist() == [1, 0, -1, -2, -3]


def test_int32_wrapping():
    assert to_int32(2**31).item() == -(2**31)
    assert to_int32(np.array([2**32 + 5, -1])).tolist() == [5, -1]
    assert wrap_seed(2**32 + 7) == 7
    assert wrap_seed(0xFFFFFFFF) == -1


def test_permutations_are_bijections() -> None:
    for build in (build_permutation_remainder, build_permutation_multiply_shift):
        perm = build(1234)
        assert perm.shape == (PSIZE,)
        assert np.array_equal(np.sort(perm), np.arange(PSIZE))


def test_permutations_deterministic_and_seeded() -> None:
    for build in (build_permutation_remainder, build_permutation_multiply_shift):
        assert np.array_equal(build(42), build(42))
        assert not np.array_equal(build(42), build(43))


def test_permutation_builders_differ():
    assert not np.array_equal(build_permutation_remainder(7), build_permutation_multiply_shift(7))


def test_negative_and_wide_seeds_are_accepted():
    perm = build_permutation_remainder(-(2**63))
    assert np.array_equal(np.sort(perm), np.arange(PSIZE))
    perm = build_permutation_multiply_shift(2**64 - 1)
    assert np.array_equal(np.sort(perm), np.arange(PSIZE))
