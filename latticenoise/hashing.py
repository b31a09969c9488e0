from __future__ import annotations

import numpy as np

from .core import _MASK32, rotl32, to_int32

_MULTIPLIERS = {
    2: (0x1827F5, 0x123C21),
    3: (0x1A36A9, 0x157931, 0x119725),
    4: (0x1B69E1, 0x177C0B, 0x141E5D, 0x113C31),
}


def _avalanche(s: np.ndarray) -> np.ndarray:
    # s holds unsigned 32-bit values; result is unsigned 32-bit
    mixed = s ^ rotl32(s, 19) ^ rotl32(s, 5) ^ 0xD1B54A35
    return (mixed * 0x125493) & _MASK32


def _mix(seed, coords) -> np.ndarray:
    mults = _MULTIPLIERS.get(len(coords))
    if mults is None:
        raise ValueError(f"point hashes take 2 to 4 coordinates, got {len(coords)}")
    s = np.asarray(seed, dtype=np.int64) & _MASK32
    for c, m in zip(coords, mults):
        s = s ^ ((np.asarray(c, dtype=np.int64) & _MASK32) * m & _MASK32)
    return _avalanche(s)


def hash_all(seed, *coords) -> np.ndarray:
    v = _mix(seed, coords)
    return to_int32(v ^ (v >> 11))


def hash256(seed, *coords) -> np.ndarray:
    return _mix(seed, coords) >> 24


def hash64(seed, *coords) -> np.ndarray:
    return _mix(seed, coords) >> 26


def hash32(seed, *coords) -> np.ndarray:
    return _mix(seed, coords) >> 27


def hash2048(seed, *coords) -> np.ndarray:
    return _mix(seed, coords) >> 21


def hash_part1024(seed, *premultiplied) -> np.ndarray:
    """Signed 10-bit hash of premultiplied lattice coordinates, in [-512, 512)."""
    acc = np.asarray(premultiplied[0], dtype=np.int64) & _MASK32
    for c in premultiplied[1:]:
        acc = acc ^ (np.asarray(c, dtype=np.int64) & _MASK32)
    s = (np.asarray(seed, dtype=np.int64) + acc) & _MASK32
    return to_int32(_avalanche(s)) >> 22
