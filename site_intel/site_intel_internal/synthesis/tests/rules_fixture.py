"""Small rule tables shared by the synthesis tests."""
import copy

from site_intel_api.signal_models import Signal


def delta(pct, days):
    return {"pct": list(pct), "days": list(days)}


BASE_RULES = {
    "costRules": [
        {
            "signalId": "flood-zone",
            "costCategory": "Flood mitigation",
            "impactType": "capex",
            "deltas": {
                "high": delta((5, 12), (10, 25)),
                "medium": delta((2, 5), (5, 10)),
                "low": delta((0, 1), (0, 2)),
            },
            "rationale": "Flood.",
        },
        {
            "signalId": "sdc",
            "costCategory": "Lateral system",
            "impactType": "capex",
            "deltas": {
                "high": delta((4, 9), (10, 20)),
                "medium": delta((1.5, 4), (5, 10)),
                "low": delta((0, 1), (0, 3)),
            },
            "rationale": "Seismic.",
        },
        {
            "signalId": "clay",
            "costCategory": "Expansive soil",
            "impactType": "capex",
            "deltas": {
                "high": delta((2, 5), (5, 12)),
                "medium": delta((1, 2.5), (2, 6)),
                "low": delta((0, 0.5), (0, 1)),
            },
            "rationale": "Clay.",
        },
        {
            "signalId": "wildfire-risk",
            "costCategory": "Insurance",
            "impactType": "insurance",
            "deltas": {
                "high": delta((2, 5), (3, 10)),
                "medium": delta((0.5, 2), (1, 4)),
                "low": delta((0, 0.5), (0, 1)),
            },
            "rationale": "Fire.",
        },
    ],
    "actionLibrary": {
        "flood-zone": {"title": "Confirm flood zone", "owner": "Civil Engineer", "duePhase": "Design Development", "leadTimeDays": 14},
        "sdc": {"title": "Validate lateral system", "owner": "Structural Engineer", "duePhase": "Design Development", "leadTimeDays": 21},
        "wildfire-risk": {"title": "Quote wildfire coverage", "owner": "Project Manager", "duePhase": "Procurement", "leadTimeDays": 10},
    },
    "contingencyBands": [
        {"minScore": 0, "minPct": 5, "maxPct": 8, "basis": "Low"},
        {"minScore": 6, "minPct": 8, "maxPct": 12, "basis": "Moderate"},
        {"minScore": 10, "minPct": 12, "maxPct": 18, "basis": "High"},
    ],
    "baselineBidAssumptions": [
        {"title": "Site data basis", "text": "Public data only.", "type": "assumption"},
        {"title": "Hazardous materials", "text": "Excluded.", "type": "exclusion"},
    ],
    "conditionalBidAssumptions": {
        "highFlood": {"title": "Flood hazard area", "text": "Flood costs excluded.", "type": "exclusion"},
        "highFire": {"title": "Wildfire exposure", "text": "Fire allowance carried.", "type": "allowance"},
    },
}


def rules_dict():
    return copy.deepcopy(BASE_RULES)


def signal(signal_id, severity, value="Reported", label=None):
    return Signal(
        id=signal_id,
        label=label or signal_id.replace("-", " ").title(),
        value=value,
        severity=severity,
        explanation=f"{signal_id} explanation",
    )
