import logging
from typing import Sequence

from site_intel_api.result_models import CostDriver, NumericRange
from site_intel_api.signal_models import Signal
from site_intel_internal.synthesis.config import RulesConfig
from site_intel_internal.synthesis.severity import as_driver_severity, rank_severity

logger = logging.getLogger(__name__)


def build_cost_drivers(signals: Sequence[Signal], config: RulesConfig) -> list[CostDriver]:
    """
    Price every signal that has a cost rule.

    A rule whose signal is absent, or whose signal has no usable severity, is
    skipped without error. The result is ordered by descending severity; ties
    keep the order of the rule table.
    """
    by_id = {signal.id: signal for signal in signals}

    drivers = []
    for rule in config.cost_rules:
        signal = by_id.get(rule.signal_id)
        if signal is None:
            logger.debug(f"No signal for cost rule {rule.signal_id!r}")
            continue
        severity = as_driver_severity(signal.severity)
        if severity is None:
            logger.debug(f"Signal {rule.signal_id!r} has severity {signal.severity!r}; not priced")
            continue

        delta = rule.deltas[severity]
        drivers.append(
            CostDriver(
                id=f"driver-{rule.signal_id}",
                signal_id=rule.signal_id,
                label=signal.label,
                severity=severity,
                cost_category=rule.cost_category,
                impact_type=rule.impact_type,
                cost_delta_pct=NumericRange(min=delta.pct_range[0], max=delta.pct_range[1]),
                schedule_delta_days=NumericRange(min=delta.day_range[0], max=delta.day_range[1]),
                rationale=rule.rationale,
            )
        )

    # sorted() is stable, so equal ranks stay in rule-table order
    return sorted(drivers, key=lambda driver: rank_severity(driver.severity), reverse=True)
