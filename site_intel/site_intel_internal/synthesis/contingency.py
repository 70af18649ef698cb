from typing import Sequence

from site_intel_api.result_models import ContingencyRange
from site_intel_api.signal_models import Signal
from site_intel_internal.synthesis.config import RulesConfig
from site_intel_internal.synthesis.severity import rank_severity


def contingency_score(signals: Sequence[Signal]) -> int:
    """Sum of severity ranks over every signal, matched by a rule or not."""
    return sum(rank_severity(signal.severity) for signal in signals)


def build_contingency(signals: Sequence[Signal], config: RulesConfig) -> ContingencyRange:
    """
    Pick the contingency band for the aggregate risk score.

    Bands are walked from the highest minScore down; the first one the score
    reaches wins. A score below every threshold gets the lowest band.
    """
    score = contingency_score(signals)
    bands = sorted(config.contingency_bands, key=lambda band: band.min_score, reverse=True)
    band = next((candidate for candidate in bands if score >= candidate.min_score), bands[-1])
    return ContingencyRange(min_pct=band.min_pct, max_pct=band.max_pct, basis=band.basis)
