"""
Deterministic uniform stream for the estimator.

A seed key (normally the site address) is folded to 32 bits with FNV-1a and
drives a 32-bit linear congruential generator. Nothing here touches a global
random source, so a given seed key always replays the same stream.
"""

import numpy as np

from site_intel_internal.monte_carlo.config import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    LCG_INCREMENT,
    LCG_MULTIPLIER,
    UINT32_MASK,
    UINT32_RANGE,
)


def hash_seed_key(seed_key: str) -> int:
    """
    FNV-1a hash of the seed key, modulo 2**32.

    The key is folded one UTF-16 code unit at a time, so a character outside
    the Basic Multilingual Plane contributes its two surrogate halves. Web
    clients hashing the same address therefore derive the same seed.
    """
    encoded = seed_key.encode("utf-16-le", errors="surrogatepass")
    value = FNV_OFFSET_BASIS
    for i in range(0, len(encoded), 2):
        value ^= encoded[i] | (encoded[i + 1] << 8)
        value = (value * FNV_PRIME) & UINT32_MASK
    return value


def lcg_next(state: int) -> tuple[int, float]:
    """
    Advance the generator one step.

    Returns:
        (next_state, uniform) where uniform = next_state / 2**32, in [0, 1).
    """
    next_state = (LCG_MULTIPLIER * state + LCG_INCREMENT) & UINT32_MASK
    return next_state, next_state / UINT32_RANGE


class SeededUniformStream:
    """Stateful wrapper over lcg_next carrying the explicit 32-bit state."""

    def __init__(self, seed: int):
        self.state = seed & UINT32_MASK

    @classmethod
    def from_seed_key(cls, seed_key: str) -> "SeededUniformStream":
        return cls(hash_seed_key(seed_key))

    def next_uniform(self) -> float:
        self.state, value = lcg_next(self.state)
        return value

    def uniforms(self, size: int) -> np.ndarray:
        """Draw the next `size` values, in stream order."""
        values = np.empty(size, dtype=float)
        state = self.state
        for i in range(size):
            state, values[i] = lcg_next(state)
        self.state = state
        return values
