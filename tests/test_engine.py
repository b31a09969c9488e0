import numpy as np
import pytest

from latticenoise.engine import NOISE_TYPES, EngineConfig, NoiseEngine
from latticenoise.fractal import FRACTAL_TYPES
from latticenoise.simplex import simplex2
from latticenoise.value import value3


def _grid(n: int = 300, dims: int = 2) -> list[np.ndarray]:
    rng = np.random.default_rng(8)
    return [rng.uniform(-500.0, 500.0, size=n) for _ in range(dims)]


def test_defaults():
    cfg = NoiseEngine().config
    assert cfg == EngineConfig()
    assert cfg.seed == 1337
    assert cfg.frequency == 0.03125
    assert cfg.noise_type == "simplex_fractal"
    assert cfg.octaves == 1
    assert cfg.fractal_type == "fbm"
    assert cfg.interpolation == "hermite"


def test_same_configuration_same_output() -> None:
    a = NoiseEngine(seed=1337)
    b = NoiseEngine(seed=1337)
    assert np.allclose(a.evaluate2d(100.0, 100.0), b.evaluate2d(100.0, 100.0))

    cfg = EngineConfig(seed=9, noise_type="value_fractal", octaves=3, fractal_type="billow")
    x, y, z = _grid(dims=3)
    assert np.allclose(
        NoiseEngine.from_config(cfg).evaluate3d(x, y, z),
        NoiseEngine.from_config(cfg).evaluate3d(x, y, z),
    )


def test_seed_override_leaves_stored_seed() -> None:
    engine = NoiseEngine(seed=5, octaves=3)
    x, y = _grid()
    out = engine.evaluate2d(x, y, seed=99)
    assert engine.seed == 5
    assert np.allclose(out, NoiseEngine(seed=99, octaves=3).evaluate2d(x, y))
    assert not np.allclose(out, engine.evaluate2d(x, y))


def test_plain_types_match_kernels():
    x, y, z = _grid(dims=3)
    engine = NoiseEngine(seed=3, frequency=0.1, noise_type="simplex")
    assert np.allclose(engine.evaluate2d(x, y), simplex2(3, x * 0.1, y * 0.1))
    assert np.allclose(engine.evaluate2d(x, y), engine.simplex2d(x, y))

    engine.noise_type = "value"
    engine.interpolation = "quintic"
    expected = value3(3, x * 0.1, y * 0.1, z * 0.1, interpolation="quintic")
    assert np.allclose(engine.evaluate3d(x, y, z), expected)
    assert np.allclose(engine.value3d(x, y, z), expected)

    engine.noise_type = "foam"
    assert np.allclose(engine.evaluate2d(x, y), engine.foam2d(x, y))


def test_single_octave_fractal_equals_plain():
    x, y, z, w = _grid(dims=4)
    for family in ("simplex", "value", "foam"):
        plain = NoiseEngine(seed=12, noise_type=family)
        fractal = NoiseEngine(seed=12, noise_type=f"{family}_fractal", octaves=1)
        assert np.allclose(plain.evaluate4d(x, y, z, w), fractal.evaluate4d(x, y, z, w))


@pytest.mark.parametrize("noise_type", NOISE_TYPES)
@pytest.mark.parametrize("fractal_type", FRACTAL_TYPES)
def test_output_range(noise_type: str, fractal_type: str) -> None:
    engine = NoiseEngine(seed=2, noise_type=noise_type, octaves=3, fractal_type=fractal_type)
    for dims in (2, 3, 4):
        coords = _grid(500, dims)
        v = getattr(engine, f"evaluate{dims}d")(*coords)
        assert np.isfinite(v).all()
        assert np.max(np.abs(v)) <= 1.01


def test_validation():
    engine = NoiseEngine()
    with pytest.raises(ValueError):
        engine.octaves = 0
    with pytest.raises(ValueError):
        engine.noise_type = "perlin"
    with pytest.raises(ValueError):
        engine.fractal_type = "turbulence"
    with pytest.raises(ValueError):
        engine.interpolation = "cosine"
    with pytest.raises(ValueError):
        EngineConfig(octaves=-1)
    with pytest.raises(ValueError):
        NoiseEngine(noise_type="cellular")
    assert engine.octaves == 1


def test_seed_wraps_to_int32():
    assert NoiseEngine(seed=2**32 + 7).seed == 7
    engine = NoiseEngine()
    engine.seed = -(2**31) - 1
    assert engine.seed == 2**31 - 1


def test_seamless_repeats_with_period() -> None:
    engine = NoiseEngine(seed=4, frequency=1.0, octaves=2)
    x = np.arange(0.0, 64.0)
    y = np.arange(0.0, 64.0)[:, None]
    assert np.allclose(engine.seamless1d(x, 64.0, 4), engine.seamless1d(x + 64.0, 64.0, 4))
    base = engine.seamless2d(x, y, 64.0, 32.0, 4)
    assert np.allclose(base, engine.seamless2d(x + 64.0, y, 64.0, 32.0, 4))
    assert np.allclose(base, engine.seamless2d(x, y + 32.0, 64.0, 32.0, 4))
    assert np.std(base) > 0.0
