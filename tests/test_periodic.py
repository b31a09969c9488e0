import numpy as np

from latticenoise.periodic import cos, cos_turns, sin, sin_turns, sway_randomized


def test_turn_waves_track_numpy():
    t = np.linspace(-3.0, 3.0, 2001)
    assert np.max(np.abs(sin_turns(t) - np.sin(2.0 * np.pi * t))) < 0.002
    assert np.max(np.abs(cos_turns(t) - np.cos(2.0 * np.pi * t))) < 0.002


def test_radian_waves_track_numpy():
    r = np.linspace(-20.0, 20.0, 4001)
    assert np.max(np.abs(sin(r) - np.sin(r))) < 0.002
    assert np.max(np.abs(cos(r) - np.cos(r))) < 0.002
    assert np.isclose(sin(np.pi / 2.0), 1.0)
    assert np.isclose(cos(0.0), 1.0)


def test_turn_waves_are_periodic():
    t = np.linspace(0.0, 1.0, 101)
    assert np.allclose(sin_turns(t), sin_turns(t + 1.0))
    assert np.allclose(cos_turns(t), cos_turns(t - 2.0))


def test_sway_randomized_range_and_determinism():
    v = np.linspace(-50.0, 50.0, 5001)
    a = sway_randomized(42, v)
    assert np.all(a >= -1.0)
    assert np.all(a < 1.0)
    assert np.allclose(a, sway_randomized(42, v))
    assert not np.allclose(a, sway_randomized(43, v))


def test_sway_randomized_is_continuous():
    v = np.linspace(-10.0, 10.0, 2001)
    a = sway_randomized(7, v)
    b = sway_randomized(7, v + 1e-6)
    assert np.max(np.abs(a - b)) < 1e-4
