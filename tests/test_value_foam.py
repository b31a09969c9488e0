import numpy as np
import pytest

from latticenoise.core import to_int32
from latticenoise.foam import foam2, foam3, foam4
from latticenoise.hashing import hash_part1024
from latticenoise.value import (
    INTERPOLATIONS,
    check_interpolation,
    value2,
    value3,
    value4,
    value_noise2,
    value_noise3,
    value_noise4,
)


def _points(n: int, dims: int) -> list[np.ndarray]:
    rng = np.random.default_rng(23)
    return [rng.uniform(-40.0, 40.0, size=n) for _ in range(dims)]


@pytest.mark.parametrize("interpolation", INTERPOLATIONS)
def test_value_range(interpolation: str) -> None:
    for fn, dims in ((value2, 2), (value3, 3), (value4, 4)):
        v = fn(77, *_points(3000, dims), interpolation=interpolation)
        assert v.min() >= -1.0
        assert v.max() < 1.0


def test_value_noise_unit_range():
    for fn, dims in ((value_noise2, 2), (value_noise3, 3), (value_noise4, 4)):
        v = fn(77, *_points(3000, dims))
        assert v.min() >= 0.0
        assert v.max() < 1.0


def test_value_on_lattice_is_corner_hash():
    v = value2(4, 3.0, 5.0)
    expected = hash_part1024(4, to_int32(3 * 0xD1B55), to_int32(5 * 0xABC99)) * 2.0**-9
    assert np.isclose(v, expected)


def test_linear_value_at_cell_centre_is_corner_mean():
    cells = ((2, 6), (3, 6), (2, 7), (3, 7))
    corners = [value2(9, cx, cy, interpolation="linear") for cx, cy in cells]
    centre = value2(9, 2.5, 6.5, interpolation="linear")
    assert np.isclose(centre, np.mean(corners))


def test_interpolation_changes_off_lattice_values():
    x, y = _points(100, 2)
    lin = value2(1, x, y, interpolation="linear")
    herm = value2(1, x, y, interpolation="hermite")
    quin = value2(1, x, y, interpolation="quintic")
    assert not np.allclose(lin, herm)
    assert not np.allclose(herm, quin)


def test_unknown_interpolation_rejected():
    with pytest.raises(ValueError):
        check_interpolation("cubic")


def test_foam_range_and_deterministic() -> None:
    for fn, dims in ((foam2, 2), (foam3, 3), (foam4, 4)):
        pts = _points(2000, dims)
        v = fn(1337, *pts)
        assert np.isfinite(v).all()
        assert np.max(np.abs(v)) <= 1.0
        assert np.allclose(v, fn(1337, *pts))
        assert not np.allclose(v, fn(1338, *pts))
