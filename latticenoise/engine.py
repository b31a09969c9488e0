from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from functools import partial

import numpy as np

from .core import wrap_seed
from .foam import foam2, foam3, foam4
from .fractal import FRACTAL_TYPES, check_fractal_type, check_octaves, combine
from .periodic import cos_turns, sin_turns
from .simplex import simplex2, simplex3, simplex4
from .value import INTERPOLATIONS, check_interpolation, value2, value3, value4

logger = logging.getLogger(__name__)

NOISE_TYPES = (
    "simplex",
    "simplex_fractal",
    "foam",
    "foam_fractal",
    "value",
    "value_fractal",
)

__all__ = [
    "EngineConfig",
    "FRACTAL_TYPES",
    "INTERPOLATIONS",
    "NOISE_TYPES",
    "NoiseEngine",
]


def check_noise_type(name: str) -> str:
    name = str(name)
    if name not in NOISE_TYPES:
        raise ValueError(f"unknown noise type: {name}")
    return name


@dataclass(frozen=True)
class EngineConfig:
    seed: int = 1337
    frequency: float = 0.03125
    interpolation: str = "hermite"
    noise_type: str = "simplex_fractal"
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    fractal_type: str = "fbm"

    def __post_init__(self) -> None:
        check_interpolation(self.interpolation)
        check_noise_type(self.noise_type)
        check_octaves(self.octaves)
        check_fractal_type(self.fractal_type)


class NoiseEngine:
    """Configurable point evaluator over simplex, value and foam noise.

    Evaluation is a pure function of the configuration and the input; the
    only mutable state is the configuration itself. Threads may share one
    engine as long as nobody reconfigures it concurrently.
    """

    def __init__(
        self,
        *,
        seed: int = 1337,
        frequency: float = 0.03125,
        noise_type: str = "simplex_fractal",
        octaves: int = 1,
        lacunarity: float = 2.0,
        gain: float = 0.5,
        interpolation: str = "hermite",
        fractal_type: str = "fbm",
    ):
        self._seed = wrap_seed(seed)
        self._frequency = float(frequency)
        self._noise_type = check_noise_type(noise_type)
        self._octaves = check_octaves(octaves)
        self._lacunarity = float(lacunarity)
        self._gain = float(gain)
        self._interpolation = check_interpolation(interpolation)
        self._fractal_type = check_fractal_type(fractal_type)

    @classmethod
    def from_config(cls, config: EngineConfig) -> "NoiseEngine":
        return cls(**asdict(config))

    @property
    def config(self) -> EngineConfig:
        return EngineConfig(
            seed=self._seed,
            frequency=self._frequency,
            interpolation=self._interpolation,
            noise_type=self._noise_type,
            octaves=self._octaves,
            lacunarity=self._lacunarity,
            gain=self._gain,
            fractal_type=self._fractal_type,
        )

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = wrap_seed(value)
        logger.debug("seed set to %d", self._seed)

    @property
    def frequency(self) -> float:
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        # Zero is allowed and collapses every input onto the origin.
        self._frequency = float(value)
        logger.debug("frequency set to %g", self._frequency)

    @property
    def interpolation(self) -> str:
        return self._interpolation

    @interpolation.setter
    def interpolation(self, value: str) -> None:
        self._interpolation = check_interpolation(value)
        logger.debug("interpolation set to %s", self._interpolation)

    @property
    def noise_type(self) -> str:
        return self._noise_type

    @noise_type.setter
    def noise_type(self, value: str) -> None:
        self._noise_type = check_noise_type(value)
        logger.debug("noise type set to %s", self._noise_type)

    @property
    def octaves(self) -> int:
        return self._octaves

    @octaves.setter
    def octaves(self, value: int) -> None:
        self._octaves = check_octaves(value)
        logger.debug("octaves set to %d", self._octaves)

    @property
    def lacunarity(self) -> float:
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = float(value)

    @property
    def gain(self) -> float:
        return self._gain

    @gain.setter
    def gain(self, value: float) -> None:
        self._gain = float(value)

    @property
    def fractal_type(self) -> str:
        return self._fractal_type

    @fractal_type.setter
    def fractal_type(self, value: str) -> None:
        self._fractal_type = check_fractal_type(value)
        logger.debug("fractal type set to %s", self._fractal_type)

    def _kernel(self, dims: int):
        family = self._noise_type.split("_")[0]
        if family == "value":
            fn = (value2, value3, value4)[dims - 2]
            return partial(fn, interpolation=self._interpolation)
        if family == "foam":
            return (foam2, foam3, foam4)[dims - 2]
        return (simplex2, simplex3, simplex4)[dims - 2]

    def _evaluate(self, coords, seed: int | None) -> np.ndarray:
        seed = self._seed if seed is None else wrap_seed(seed)
        coords = [np.asarray(c, dtype=np.float64) * self._frequency for c in coords]
        kernel = self._kernel(len(coords))
        if not self._noise_type.endswith("_fractal"):
            return kernel(seed, *coords)
        return combine(
            kernel,
            seed,
            coords,
            octaves=self._octaves,
            lacunarity=self._lacunarity,
            gain=self._gain,
            rule=self._fractal_type,
            swap_axes=(self._noise_type == "foam_fractal" and len(coords) == 2),
        )

    def evaluate2d(self, x, y, *, seed: int | None = None) -> np.ndarray:
        """Configured noise at (x, y), nominally in [-1, 1].

        ``seed`` overrides the stored seed for this call only.
        """
        return self._evaluate((x, y), seed)

    def evaluate3d(self, x, y, z, *, seed: int | None = None) -> np.ndarray:
        return self._evaluate((x, y, z), seed)

    def evaluate4d(self, x, y, z, w, *, seed: int | None = None) -> np.ndarray:
        return self._evaluate((x, y, z, w), seed)

    def simplex2d(self, x, y) -> np.ndarray:
        f = self._frequency
        return simplex2(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y)))

    def simplex3d(self, x, y, z) -> np.ndarray:
        f = self._frequency
        return simplex3(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z)))

    def simplex4d(self, x, y, z, w) -> np.ndarray:
        f = self._frequency
        return simplex4(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z, w)))

    def value2d(self, x, y) -> np.ndarray:
        f = self._frequency
        return value2(
            self._seed,
            np.asarray(x, dtype=np.float64) * f,
            np.asarray(y, dtype=np.float64) * f,
            interpolation=self._interpolation,
        )

    def value3d(self, x, y, z) -> np.ndarray:
        f = self._frequency
        return value3(
            self._seed,
            *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z)),
            interpolation=self._interpolation,
        )

    def value4d(self, x, y, z, w) -> np.ndarray:
        f = self._frequency
        return value4(
            self._seed,
            *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z, w)),
            interpolation=self._interpolation,
        )

    def foam2d(self, x, y) -> np.ndarray:
        f = self._frequency
        return foam2(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y)))

    def foam3d(self, x, y, z) -> np.ndarray:
        f = self._frequency
        return foam3(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z)))

    def foam4d(self, x, y, z, w) -> np.ndarray:
        f = self._frequency
        return foam4(self._seed, *(np.asarray(c, dtype=np.float64) * f for c in (x, y, z, w)))

    def seamless1d(self, x, size_x: float, seed: int) -> np.ndarray:
        """Noise that repeats every ``size_x`` units, sampled off a circle in 2D."""
        t = np.asarray(x, dtype=np.float64) / size_x
        return self.evaluate2d(cos_turns(t), sin_turns(t), seed=seed)

    def seamless2d(self, x, y, size_x: float, size_y: float, seed: int) -> np.ndarray:
        """Noise that tiles on both axes, sampled off a torus in 4D."""
        tx = np.asarray(x, dtype=np.float64) / size_x
        ty = np.asarray(y, dtype=np.float64) / size_y
        return self.evaluate4d(
            cos_turns(tx), sin_turns(tx), cos_turns(ty), sin_turns(ty), seed=seed
        )
