import numpy as np
import pytest

from latticenoise.engine import NoiseEngine
from latticenoise.map2d import noise_map_2d


def test_noise_map_2d_shape_and_deterministic() -> None:
    z1 = noise_map_2d(seed=0, width=64, height=48, octaves=4, offset_x=10.0, offset_y=-3.0)
    z2 = noise_map_2d(seed=0, width=64, height=48, octaves=4, offset_x=10.0, offset_y=-3.0)
    assert z1.shape == (48, 64)
    assert np.allclose(z1, z2)


def test_noise_map_2d_matches_engine() -> None:
    engine = NoiseEngine(seed=6, noise_type="value_fractal", octaves=2, frequency=0.05)
    z = noise_map_2d(engine=engine, width=20, height=10, offset_x=4.0)
    assert np.isclose(z[3, 7], engine.evaluate2d(11.0, 3.0))


def test_noise_map_2d_normalize_bounds() -> None:
    z = noise_map_2d(
        seed=1, width=64, height=64, octaves=3, fractal_type="ridged_multi", normalize=True
    )
    assert float(np.min(z)) >= 0.0
    assert float(np.max(z)) <= 1.0
    assert np.isclose(float(np.min(z)), 0.0)
    assert np.isclose(float(np.max(z)), 1.0)


def test_noise_map_2d_tileable_wraps() -> None:
    kwargs = dict(seed=2, width=32, height=24, frequency=1.0, octaves=2, tileable=True)
    z = noise_map_2d(**kwargs)
    assert np.allclose(z, noise_map_2d(offset_x=32.0, **kwargs))
    assert np.allclose(z, noise_map_2d(offset_y=24.0, **kwargs))
    # Shifting by one column moves the first column to the end.
    shifted = noise_map_2d(offset_x=1.0, **kwargs)
    assert np.allclose(shifted[:, -1], z[:, 0])


def test_noise_map_2d_dtype_and_validation() -> None:
    z = noise_map_2d(seed=3, width=8, height=8, dtype=np.float32)
    assert z.dtype == np.float32
    with pytest.raises(ValueError):
        noise_map_2d(seed=3, width=0, height=8)
    with pytest.raises(ValueError):
        noise_map_2d(seed=3, width=8, height=8, noise_type="worley")
