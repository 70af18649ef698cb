from typing import Optional

SEVERITY_RANKS = {
    "high": 3,
    "medium": 2,
    "low": 1,
}


def rank_severity(severity: Optional[str]) -> int:
    """Ordinal weight of a severity label. Anything unrecognized ranks 0."""
    return SEVERITY_RANKS.get(severity, 0)


def as_driver_severity(severity: Optional[str]) -> Optional[str]:
    """Return the severity if it can be priced, else None."""
    if severity in SEVERITY_RANKS:
        return severity
    return None
