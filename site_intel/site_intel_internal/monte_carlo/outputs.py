"""
PURPOSE: Reduce simulated trial totals to reported percentile figures.

Percentiles use nearest rank on the ascending-sorted totals,
index = clamp(floor(p / 100 * n), 0, n - 1). There is no interpolation
between neighbouring trials, so at small sample sizes adjacent percentiles
can coincide or jump.

SRP/DRY: Single responsibility = percentile extraction and dollar scaling.
         No sampling, no simulation loop.
"""

import math
from typing import Optional

import numpy as np

from site_intel_api.result_models import PercentileTriple
from site_intel_internal.monte_carlo.config import ROUND_PERCENTILE


def nearest_rank_percentile(sorted_values: np.ndarray, percentile: float) -> float:
    """
    Nearest-rank percentile of an ascending-sorted array.

    Args:
        sorted_values: Values sorted ascending.
        percentile: Percentile in [0, 100].

    Returns:
        The selected value, or 0.0 for an empty array.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    index = math.floor((percentile / 100) * n)
    index = min(max(index, 0), n - 1)
    return float(sorted_values[index])


def percentile_triple(totals: np.ndarray) -> PercentileTriple:
    """P10/P50/P90 of unsorted trial totals, rounded for reporting."""
    sorted_totals = np.sort(np.asarray(totals, dtype=float))
    return PercentileTriple(
        p10=round(nearest_rank_percentile(sorted_totals, 10), ROUND_PERCENTILE),
        p50=round(nearest_rank_percentile(sorted_totals, 50), ROUND_PERCENTILE),
        p90=round(nearest_rank_percentile(sorted_totals, 90), ROUND_PERCENTILE),
    )


def scale_to_usd(impact_pct: PercentileTriple, baseline_cost_usd: Optional[float]) -> Optional[PercentileTriple]:
    """
    Convert a cost-percent triple to dollars against a baseline cost.

    Each percentile is scaled on its own. Returns None unless the baseline is positive.
    """
    if baseline_cost_usd is None or baseline_cost_usd <= 0:
        return None

    def to_usd(pct: float) -> float:
        return round((pct / 100) * baseline_cost_usd, ROUND_PERCENTILE)

    return PercentileTriple(
        p10=to_usd(impact_pct.p10),
        p50=to_usd(impact_pct.p50),
        p90=to_usd(impact_pct.p90),
    )
