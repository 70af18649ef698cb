"""
PURPOSE: Simulation constants for the cost/schedule impact estimator.

RESPONSIBILITIES:
- Define simulation hyperparameters (sample size, percentiles, rounding)
- Pin the seed hash and generator constants that make runs replayable
- Single responsibility: configuration only, no simulation logic
"""

# Simulation Parameters
DEFAULT_SAMPLE_SIZE = 2000  # Trials per estimate

# Percentile Outputs
PERCENTILES = (10, 50, 90)  # P10, P50, P90

# Output Configuration
ROUND_PERCENTILE = 2  # Decimal places for pct, days and USD figures

# Seed hash (FNV-1a, 32-bit)
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

# Linear congruential generator (Numerical Recipes constants)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223

UINT32_MASK = 0xFFFFFFFF
UINT32_RANGE = 2**32

# Sensitivity Analysis
TOP_N_DRIVERS = 5  # Number of top uncertainty drivers to report

METHODOLOGY = (
    "Monte Carlo simulation: each cost driver's cost-percent and schedule-day ranges are sampled "
    "independently from triangular distributions with the mode at the range midpoint, and samples "
    "are summed per trial. P10/P50/P90 are taken by nearest rank from the sorted trial totals. "
    "The generator is seeded from the site address, so identical inputs reproduce identical results. "
    "Dollar figures, when a baseline cost is given, scale each cost-percent percentile by the "
    "baseline; they approximate, and are not drawn from, a per-trial dollar simulation."
)
