from .engine import EngineConfig, NoiseEngine
from .map2d import noise_map_2d
from .opensimplex2f import OpenSimplex2F
from .opensimplex2s import OpenSimplex2S

__all__ = ["EngineConfig", "NoiseEngine", "OpenSimplex2F", "OpenSimplex2S", "noise_map_2d"]
