"""
PURPOSE: Seeded Monte Carlo estimate of cost and schedule impact from cost drivers.

Each trial draws, for every cost driver, one triangular sample of its
cost-percent range and one of its schedule-day range (mode at the midpoint),
and sums them into a cost total and a schedule total for the trial.

SINGLE RESPONSIBILITY:
- Execute N trials for a list of cost drivers
- Return raw trial matrices, or the reduced ProbabilisticEstimate

CONSTRAINTS:
- Deterministic: outputs depend only on (drivers, baseline, seed key, sample size)
- Does NOT read global random state and does NOT modify the drivers
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from site_intel_api.result_models import CostDriver, ProbabilisticEstimate
from site_intel_internal.monte_carlo.config import DEFAULT_SAMPLE_SIZE, METHODOLOGY
from site_intel_internal.monte_carlo.distributions import triangular_inverse_cdf_array
from site_intel_internal.monte_carlo.outputs import percentile_triple, scale_to_usd
from site_intel_internal.monte_carlo.prng import SeededUniformStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationTrials:
    """Raw simulation output.

    Attributes:
        driver_ids (list): Driver ids, one per column of the sample matrices.
        cost_samples (np.ndarray): Cost-percent samples, shape (trials, drivers).
        schedule_samples (np.ndarray): Schedule-day samples, shape (trials, drivers).
        cost_totals (np.ndarray): Per-trial cost-percent totals, shape (trials,).
        schedule_totals (np.ndarray): Per-trial schedule-day totals, shape (trials,).
    """
    driver_ids: list
    cost_samples: np.ndarray
    schedule_samples: np.ndarray
    cost_totals: np.ndarray
    schedule_totals: np.ndarray


class ProbabilisticEstimator:
    """
    Monte Carlo estimator for the aggregate impact of a cost driver list.

    Drivers are treated as independent and additive. An empty driver list is a
    valid input and yields all-zero totals.
    """

    def __init__(self, sample_size: int = DEFAULT_SAMPLE_SIZE):
        """
        Args:
            sample_size: Number of trials (default 2000). Must be positive.
        """
        if isinstance(sample_size, bool) or not isinstance(sample_size, int) or sample_size < 1:
            raise ValueError(f"sample_size must be a positive integer, got {sample_size!r}")
        self.sample_size = sample_size

    def simulate(self, cost_drivers: Sequence[CostDriver], seed_key: str) -> SimulationTrials:
        """
        Run the trials.

        Uniforms are consumed trial by trial, driver by driver, cost sample
        before schedule sample.
        """
        driver_count = len(cost_drivers)
        stream = SeededUniformStream.from_seed_key(seed_key)
        uniforms = stream.uniforms(self.sample_size * driver_count * 2)
        uniforms = uniforms.reshape(self.sample_size, driver_count, 2)

        cost_min = np.array([d.cost_delta_pct.min for d in cost_drivers], dtype=float)
        cost_max = np.array([d.cost_delta_pct.max for d in cost_drivers], dtype=float)
        days_min = np.array([d.schedule_delta_days.min for d in cost_drivers], dtype=float)
        days_max = np.array([d.schedule_delta_days.max for d in cost_drivers], dtype=float)

        cost_samples = triangular_inverse_cdf_array(cost_min, cost_max, uniforms[:, :, 0])
        schedule_samples = triangular_inverse_cdf_array(days_min, days_max, uniforms[:, :, 1])

        return SimulationTrials(
            driver_ids=[d.id for d in cost_drivers],
            cost_samples=cost_samples,
            schedule_samples=schedule_samples,
            cost_totals=cost_samples.sum(axis=1),
            schedule_totals=schedule_samples.sum(axis=1),
        )

    def summarize(self, trials: SimulationTrials, baseline_cost_usd: Optional[float] = None) -> ProbabilisticEstimate:
        """Reduce trials to P10/P50/P90 figures."""
        if baseline_cost_usd is not None and baseline_cost_usd < 0:
            raise ValueError(f"baseline_cost_usd must be non-negative, got {baseline_cost_usd}")

        impact_pct = percentile_triple(trials.cost_totals)
        return ProbabilisticEstimate(
            baseline_cost_usd=baseline_cost_usd,
            impact_pct=impact_pct,
            schedule_days=percentile_triple(trials.schedule_totals),
            impact_cost_usd=scale_to_usd(impact_pct, baseline_cost_usd),
            methodology=METHODOLOGY,
            sample_size=self.sample_size,
        )

    def run(
        self,
        cost_drivers: Sequence[CostDriver],
        seed_key: str,
        baseline_cost_usd: Optional[float] = None,
    ) -> ProbabilisticEstimate:
        """
        Simulate and summarize in one call.

        Args:
            cost_drivers: Priced drivers; each contributes its cost-percent and schedule-day range.
            seed_key: Stable string (typically the site address) seeding the generator.
            baseline_cost_usd: Optional project cost used to express the cost percentiles in dollars.

        Returns:
            ProbabilisticEstimate

        Raises:
            ValueError: If baseline_cost_usd is negative.
        """
        started = time.perf_counter()
        trials = self.simulate(cost_drivers, seed_key)
        estimate = self.summarize(trials, baseline_cost_usd)
        logger.debug(
            "Simulated %s trials over %s drivers in %.1f ms",
            self.sample_size,
            len(cost_drivers),
            (time.perf_counter() - started) * 1000,
        )
        return estimate


def estimate_impact(
    cost_drivers: Sequence[CostDriver],
    seed_key: str,
    baseline_cost_usd: Optional[float] = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> ProbabilisticEstimate:
    """Module-level wrapper for ProbabilisticEstimator.run."""
    return ProbabilisticEstimator(sample_size=sample_size).run(cost_drivers, seed_key, baseline_cost_usd)
