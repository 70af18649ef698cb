"""
PURPOSE: Assemble the decision package for one site.

Every resolver is a pure function of (signals, config); they run in any order
and share nothing. The cost drivers then feed the Monte Carlo estimator.
"""

import logging
from typing import Optional, Sequence

from site_intel_api.result_models import SiteAnalysisResult
from site_intel_api.signal_models import Signal
from site_intel_internal.monte_carlo.config import DEFAULT_SAMPLE_SIZE
from site_intel_internal.monte_carlo.simulation import ProbabilisticEstimator
from site_intel_internal.synthesis.bid_assumptions import build_bid_assumptions
from site_intel_internal.synthesis.confidence import score_confidence
from site_intel_internal.synthesis.config import RulesConfig
from site_intel_internal.synthesis.contingency import build_contingency
from site_intel_internal.synthesis.cost_drivers import build_cost_drivers
from site_intel_internal.synthesis.implications import build_implications
from site_intel_internal.synthesis.pm_actions import build_pm_actions

logger = logging.getLogger(__name__)


def analyze_site(
    signals: Sequence[Signal],
    config: RulesConfig,
    seed_key: str,
    baseline_cost_usd: Optional[float] = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    warnings: Sequence[str] = (),
) -> SiteAnalysisResult:
    """
    Synthesize cost drivers, actions, contingency, bid language and the probabilistic estimate.

    Args:
        signals: Site signals in upstream order. Order breaks ties between equal-priority actions.
        config: Loaded rule table.
        seed_key: Seeds the simulation; normally the analyzed address.
        baseline_cost_usd: Optional project cost for dollar-denominated percentiles.
        sample_size: Monte Carlo trials.
        warnings: Upstream data-source warnings; each lowers the confidence score.

    Raises:
        ValueError: Non-positive sample_size or negative baseline_cost_usd.
    """
    if baseline_cost_usd is not None and baseline_cost_usd < 0:
        raise ValueError(f"baseline_cost_usd must be non-negative, got {baseline_cost_usd}")
    estimator = ProbabilisticEstimator(sample_size=sample_size)

    signals = list(signals)
    warnings = list(warnings)

    confidence = score_confidence(signals, warnings)
    cost_drivers = build_cost_drivers(signals, config)
    result = SiteAnalysisResult(
        address=seed_key,
        signals=signals,
        implications=build_implications(signals),
        warnings=warnings,
        confidence_score=confidence.confidence_score,
        data_completeness_pct=confidence.data_completeness_pct,
        contingency=build_contingency(signals, config),
        cost_drivers=cost_drivers,
        actions=build_pm_actions(signals, config),
        bid_assumptions=build_bid_assumptions(signals, config),
        probabilistic_estimate=estimator.run(cost_drivers, seed_key, baseline_cost_usd),
    )
    logger.info(
        "Analyzed %r: %s signals, %s cost drivers, %s actions, confidence %s",
        seed_key,
        len(signals),
        len(result.cost_drivers),
        len(result.actions),
        result.confidence_score,
    )
    return result
