"""
PURPOSE: Triangular sampling by inverse transform of caller-supplied uniforms.

RESPONSIBILITIES:
- Map a uniform u in [0, 1) onto a triangular (min, mode, max) distribution
- Vectorized variant for whole trial x driver matrices
- Single responsibility: only sampling, no random source, no aggregation
"""

import math
from typing import Optional

import numpy as np

from site_intel_internal.monte_carlo.prng import SeededUniformStream


def triangular_inverse_cdf(minimum: float, maximum: float, u: float, mode: Optional[float] = None) -> float:
    """
    Inverse CDF of the triangular distribution.

    Args:
        minimum: Left bound
        maximum: Right bound
        u: Uniform draw in [0, 1)
        mode: Peak. Defaults to the midpoint; clamped into [minimum, maximum].

    Returns:
        The sample. A degenerate range (maximum <= minimum) returns minimum.
    """
    if maximum <= minimum:
        return minimum
    if mode is None:
        mode = (minimum + maximum) / 2
    mode = min(max(mode, minimum), maximum)

    span = maximum - minimum
    split = (mode - minimum) / span
    if u < split:
        return minimum + math.sqrt(u * span * (mode - minimum))
    return maximum - math.sqrt((1 - u) * span * (maximum - mode))


def triangular_inverse_cdf_array(minimum, maximum, uniforms, mode=None) -> np.ndarray:
    """
    Vectorized triangular_inverse_cdf.

    minimum, maximum and mode broadcast against uniforms, so per-driver bounds of
    shape (drivers,) work with a uniforms matrix of shape (trials, drivers).
    """
    minimum = np.asarray(minimum, dtype=float)
    maximum = np.asarray(maximum, dtype=float)
    u = np.asarray(uniforms, dtype=float)
    if mode is None:
        mode = (minimum + maximum) / 2
    mode = np.clip(np.asarray(mode, dtype=float), minimum, np.maximum(minimum, maximum))

    degenerate = maximum <= minimum
    span = np.where(degenerate, 1.0, maximum - minimum)
    split = (mode - minimum) / span

    lower = minimum + np.sqrt(np.maximum(u * span * (mode - minimum), 0.0))
    upper = maximum - np.sqrt(np.maximum((1 - u) * span * (maximum - mode), 0.0))
    samples = np.where(u < split, lower, upper)
    return np.where(degenerate, minimum, samples)


def sample_triangular(minimum: float, maximum: float, stream: SeededUniformStream, size: int = 1, mode: Optional[float] = None) -> np.ndarray:
    """Draw `size` triangular samples from the stream."""
    return triangular_inverse_cdf_array(minimum, maximum, stream.uniforms(size), mode=mode)
