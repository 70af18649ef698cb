import logging
from typing import Sequence

from site_intel_api.result_models import PMAction
from site_intel_api.signal_models import Signal
from site_intel_internal.synthesis.config import RulesConfig

logger = logging.getLogger(__name__)

PRIORITY_RANKS = {
    "high": 3,
    "medium": 2,
    "low": 1,
}

BASELINE_ACTION = PMAction(
    id="action-baseline",
    title="Proceed with standard preconstruction validation",
    owner="Project Manager",
    due_phase="Bid",
    lead_time_days=3,
    priority="low",
    related_signal_id="baseline",
)


def build_pm_actions(signals: Sequence[Signal], config: RulesConfig) -> list[PMAction]:
    """
    Turn elevated signals into owner-assigned preconstruction actions.

    Only high and medium signals with a template in the action library produce
    an action. When nothing qualifies the baseline action is returned alone.
    """
    actions = []
    for signal in signals:
        if signal.severity not in ("high", "medium"):
            continue
        template = config.action_library.get(signal.id)
        if template is None:
            logger.debug(f"No action template for signal {signal.id!r}")
            continue
        actions.append(
            PMAction(
                id=f"action-{signal.id}",
                title=template.title,
                owner=template.owner,
                due_phase=template.due_phase,
                lead_time_days=template.lead_time_days,
                priority=signal.severity,
                related_signal_id=signal.id,
            )
        )

    if not actions:
        actions.append(BASELINE_ACTION)

    return sorted(actions, key=lambda action: PRIORITY_RANKS[action.priority], reverse=True)
