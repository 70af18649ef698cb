import math
from dataclasses import dataclass
from typing import Sequence

from site_intel_api.signal_models import Signal

CONFIDENCE_FLOOR = 35
WARNING_PENALTY_PER_WARNING = 6
WARNING_PENALTY_CAP = 30
AVAILABILITY_PENALTY_WEIGHT = 0.4


@dataclass(frozen=True)
class ConfidenceScore:
    confidence_score: int
    data_completeness_pct: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_confidence(signals: Sequence[Signal], warnings: Sequence[str]) -> ConfidenceScore:
    """
    Score how much the analysis can be trusted given missing data and source warnings.

    The score never drops below CONFIDENCE_FLOOR.
    """
    total_signals = len(signals) or 1
    known_signals = sum(1 for signal in signals if signal.is_available)
    completeness = _round_half_up(100 * known_signals / total_signals)

    warning_penalty = min(WARNING_PENALTY_PER_WARNING * len(warnings), WARNING_PENALTY_CAP)
    availability_penalty = max(0, 100 - completeness) * AVAILABILITY_PENALTY_WEIGHT
    score = max(CONFIDENCE_FLOOR, _round_half_up(100 - warning_penalty - availability_penalty))

    return ConfidenceScore(confidence_score=score, data_completeness_pct=completeness)
