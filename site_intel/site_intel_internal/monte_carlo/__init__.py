"""
Monte Carlo estimator for site-risk cost and schedule impact.

PURPOSE:
    Turn each cost driver's (min, max) cost-percent and schedule-day ranges into
    P10/P50/P90 outcome figures with a seeded, replayable simulation.

RESPONSIBILITIES:
    - Seeded uniform stream (FNV-1a seed hash + 32-bit LCG)
    - Triangular sampling by inverse transform
    - Nearest-rank percentile extraction and dollar scaling
    - Variance-based driver sensitivity ranking

SRP/DRY CHECK:
    Each submodule has a single responsibility:
    - prng.py: Deterministic uniform stream only
    - distributions.py: Triangular inverse transform only
    - simulation.py: Trial loop and aggregation only
    - outputs.py: Percentile extraction and USD scaling only
    - sensitivity.py: Sensitivity analysis only
"""

from site_intel_internal.monte_carlo.distributions import sample_triangular, triangular_inverse_cdf
from site_intel_internal.monte_carlo.outputs import nearest_rank_percentile, percentile_triple
from site_intel_internal.monte_carlo.prng import SeededUniformStream, hash_seed_key
from site_intel_internal.monte_carlo.sensitivity import SensitivityAnalyzer, SensitivityDriver
from site_intel_internal.monte_carlo.simulation import ProbabilisticEstimator, SimulationTrials, estimate_impact

__all__ = [
    "sample_triangular",
    "triangular_inverse_cdf",
    "nearest_rank_percentile",
    "percentile_triple",
    "SeededUniformStream",
    "hash_seed_key",
    "SensitivityAnalyzer",
    "SensitivityDriver",
    "ProbabilisticEstimator",
    "SimulationTrials",
    "estimate_impact",
]
