import numpy as np
import pytest

from latticenoise.hashing import hash32, hash64, hash256, hash2048, hash_all, hash_part1024


def _coords(n: int, dims: int) -> list[np.ndarray]:
    rng = np.random.default_rng(5)
    return [rng.integers(-(2**31), 2**31, size=n) for _ in range(dims)]


@pytest.mark.parametrize("dims", [2, 3, 4])
def test_hash_ranges(dims: int) -> None:
    coords = _coords(2000, dims)
    for fn, hi in ((hash256, 256), (hash64, 64), (hash32, 32), (hash2048, 2048)):
        h = fn(99, *coords)
        assert h.min() >= 0
        assert h.max() < hi

    h = hash_all(99, *coords)
    assert h.min() >= -(2**31)
    assert h.max() < 2**31


@pytest.mark.parametrize("dims", [2, 3, 4])
def test_hash_part1024_range(dims: int) -> None:
    h = hash_part1024(-17, *_coords(2000, dims))
    assert h.min() >= -512
    assert h.max() < 512


def test_hash_depends_on_seed_and_coords():
    x, y = _coords(500, 2)
    assert not np.array_equal(hash256(1, x, y), hash256(2, x, y))
    assert not np.array_equal(hash256(1, x, y), hash256(1, y, x))


def test_hash_scalar_matches_array():
    x, y, z = _coords(20, 3)
    batch = hash2048(3, x, y, z)
    single = [int(hash2048(3, int(a), int(b), int(c))) for a, b, c in zip(x, y, z)]
    assert batch.tolist() == single


def test_hash_rejects_other_dimensions():
    with pytest.raises(ValueError):
        hash256(0, 1)
    with pytest.raises(ValueError):
        hash256(0, 1, 2, 3, 4, 5)
