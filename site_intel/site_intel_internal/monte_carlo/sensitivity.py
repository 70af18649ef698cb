"""
PURPOSE: Rank cost drivers by how much of the simulated outcome variance they explain.

Uses a between-group variance estimate: each driver's own samples are binned
into quartiles, and the spread of mean outcome across those bins is taken as
that driver's first-order contribution. Drivers are independent in the
simulation, so no interaction terms are modeled.

SRP/DRY: Single responsibility = sensitivity analysis only.
         No simulation, no result formatting.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal

import numpy as np

from site_intel_internal.monte_carlo.config import TOP_N_DRIVERS
from site_intel_internal.monte_carlo.simulation import SimulationTrials

Dimension = Literal["cost", "schedule"]


@dataclass
class SensitivityDriver:
    """A cost driver and its sensitivity score.

    Attributes:
        name (str): Cost driver id (e.g., "driver-flood-zone").
        sensitivity_score (float): Normalized sensitivity index [0, 1].
        variance_contribution (float): Between-group variance attributed to the driver.
        rank (int): Rank order (1 = most sensitive).
    """
    name: str
    sensitivity_score: float
    variance_contribution: float
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "sensitivity_score": round(self.sensitivity_score, 4),
            "variance_contribution": round(self.variance_contribution, 4),
            "rank": self.rank,
        }


class SensitivityAnalyzer:
    """
    Computes variance-based sensitivity indices for simulated cost drivers.

    Requires a reasonable number of trials (hundreds or more) for stable ranks.
    """

    def __init__(self, top_n: int = TOP_N_DRIVERS):
        self.top_n = top_n

    def analyze(self, trials: SimulationTrials, dimension: Dimension = "cost") -> List[SensitivityDriver]:
        """
        Rank drivers for one outcome dimension.

        Args:
            trials: Output of ProbabilisticEstimator.simulate.
            dimension: "cost" (impact percent) or "schedule" (days).

        Returns:
            Up to top_n SensitivityDriver objects, most sensitive first. Ties keep
            driver order. Empty when there are no drivers.

        Raises:
            ValueError: If dimension is not "cost" or "schedule".
        """
        if dimension == "cost":
            samples, output = trials.cost_samples, trials.cost_totals
        elif dimension == "schedule":
            samples, output = trials.schedule_samples, trials.schedule_totals
        else:
            raise ValueError(f"Unknown dimension: {dimension}. Must be 'cost' or 'schedule'")

        if not trials.driver_ids:
            return []

        total_variance = float(np.var(output))
        if total_variance < 1e-10:
            # Every trial produced the same outcome; nothing to attribute.
            return [
                SensitivityDriver(name=name, sensitivity_score=0.0, variance_contribution=0.0, rank=i + 1)
                for i, name in enumerate(trials.driver_ids[: self.top_n])
            ]

        contributions = [
            (name, self._between_group_variance(samples[:, column], output))
            for column, name in enumerate(trials.driver_ids)
        ]
        contributions.sort(key=lambda item: item[1], reverse=True)

        return [
            SensitivityDriver(
                name=name,
                sensitivity_score=min(1.0, max(0.0, contribution / total_variance)),
                variance_contribution=contribution,
                rank=rank,
            )
            for rank, (name, contribution) in enumerate(contributions[: self.top_n], 1)
        ]

    @staticmethod
    def _between_group_variance(driver_values: np.ndarray, output: np.ndarray) -> float:
        edges = np.unique(np.percentile(driver_values, [0, 25, 50, 75, 100]))
        if len(edges) < 2:
            # Constant driver explains nothing.
            return 0.0
        groups = np.digitize(driver_values, edges[1:-1])

        overall_mean = float(np.mean(output))
        between = 0.0
        for group_id in np.unique(groups):
            mask = groups == group_id
            between += np.sum(mask) * (float(np.mean(output[mask])) - overall_mean) ** 2
        return between / len(output)

    @staticmethod
    def to_dataframe_compatible(drivers: List[SensitivityDriver]) -> Dict[str, List]:
        """Column-oriented view (rank, driver, scores) for CSV or tabular display."""
        return {
            "rank": [d.rank for d in drivers],
            "driver": [d.name for d in drivers],
            "sensitivity_score": [round(d.sensitivity_score, 4) for d in drivers],
            "variance_contribution": [round(d.variance_contribution, 4) for d in drivers],
        }
