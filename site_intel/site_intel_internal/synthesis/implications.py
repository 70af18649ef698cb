from typing import Sequence

from site_intel_api.result_models import Implication
from site_intel_api.signal_models import Signal

HIGH_SEVERITY_IMPLICATIONS = (
    (
        "flood-zone",
        "Flood Mitigation Budget",
        "Allocate contingency for elevation, floodproofing, and potential insurance premiums.",
    ),
    (
        "sdc",
        "Structural Seismic Premium",
        "Expect higher lateral system cost, detailing complexity, and review time.",
    ),
    (
        "soil-drainage",
        "Dewatering & Subgrade",
        "Plan for dewatering, subgrade stabilization, and moisture protection for slabs.",
    ),
    (
        "clay",
        "Expansive Soil Controls",
        "Consider moisture conditioning, thicker slabs, and jointing strategy.",
    ),
    (
        "site-slope",
        "Grading & Retaining",
        "Budget for cut/fill, slope stabilization, and erosion controls.",
    ),
    (
        "wildfire-risk",
        "Fire Defensibility & Insurance",
        "Consider defensible space, fire-resistant materials, and specialized insurance requirements.",
    ),
)

BASELINE_IMPLICATION = Implication(
    title="Baseline Controls",
    detail="No extreme signals detected. Proceed with standard geotech validation.",
)


def build_implications(signals: Sequence[Signal]) -> list[Implication]:
    """Headline implications for high-severity signals, in a fixed order."""
    high_ids = {signal.id for signal in signals if signal.severity == "high"}
    implications = [
        Implication(title=title, detail=detail)
        for signal_id, title, detail in HIGH_SEVERITY_IMPLICATIONS
        if signal_id in high_ids
    ]
    return implications or [BASELINE_IMPLICATION]
