"""
Bid qualification language.

The baseline list from the rule table is always included. Conditional
clauses are appended by a small fixed trigger table; add a row to
CONDITIONAL_TRIGGERS (and the matching key to ConditionalBidAssumptions)
to support another hazard.
"""
from typing import Sequence

from site_intel_api.result_models import BidAssumption
from site_intel_api.signal_models import Signal
from site_intel_internal.synthesis.config import RulesConfig

# (signal id, severity that triggers, attribute on ConditionalBidAssumptions)
CONDITIONAL_TRIGGERS = (
    ("flood-zone", "high", "high_flood"),
    ("wildfire-risk", "high", "high_fire"),
)


def build_bid_assumptions(signals: Sequence[Signal], config: RulesConfig) -> list[BidAssumption]:
    assumptions = list(config.baseline_bid_assumptions)
    for signal_id, severity, clause_name in CONDITIONAL_TRIGGERS:
        triggered = any(signal.id == signal_id and signal.severity == severity for signal in signals)
        if triggered:
            assumptions.append(getattr(config.conditional_bid_assumptions, clause_name))
    return assumptions
