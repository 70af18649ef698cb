"""
Serialize a SiteAnalysisResult for download.

JSON carries the whole record with camelCase keys and parses back into an
equal record. Unset optional figures (no baseline cost) are left out rather
than written as null. CSV is a flat Section,Field,Value listing, one row
per labeled field.
"""

import csv
import io

from site_intel_api.result_models import PercentileTriple, SiteAnalysisResult

CSV_HEADER = ("Section", "Field", "Value")


def result_to_json(result: SiteAnalysisResult, indent: int = 2) -> str:
    return result.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def result_from_json(text: str) -> SiteAnalysisResult:
    return SiteAnalysisResult.model_validate_json(text)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _format_range(low: float, high: float) -> str:
    return f"{_format_number(low)}-{_format_number(high)}"


def _percentile_rows(section: str, name: str, triple: PercentileTriple) -> list[tuple[str, str, str]]:
    return [
        (section, f"{name} P10", _format_number(triple.p10)),
        (section, f"{name} P50", _format_number(triple.p50)),
        (section, f"{name} P90", _format_number(triple.p90)),
    ]


def result_to_rows(result: SiteAnalysisResult) -> list[tuple[str, str, str]]:
    rows = [
        ("Summary", "Address", result.address),
        ("Summary", "Confidence Score", str(result.confidence_score)),
        ("Summary", "Data Completeness %", str(result.data_completeness_pct)),
        ("Summary", "Contingency Min %", _format_number(result.contingency.min_pct)),
        ("Summary", "Contingency Max %", _format_number(result.contingency.max_pct)),
        ("Summary", "Contingency Basis", result.contingency.basis),
    ]
    for warning in result.warnings:
        rows.append(("Summary", "Warning", warning))

    for driver in result.cost_drivers:
        rows.extend([
            ("Cost Driver", "Label", driver.label),
            ("Cost Driver", "Severity", driver.severity),
            ("Cost Driver", "Cost Category", driver.cost_category),
            ("Cost Driver", "Impact Type", driver.impact_type),
            ("Cost Driver", "Cost Impact %", _format_range(driver.cost_delta_pct.min, driver.cost_delta_pct.max)),
            ("Cost Driver", "Schedule Days", _format_range(driver.schedule_delta_days.min, driver.schedule_delta_days.max)),
            ("Cost Driver", "Rationale", driver.rationale),
        ])

    for action in result.actions:
        rows.extend([
            ("PM Action", "Title", action.title),
            ("PM Action", "Owner", action.owner),
            ("PM Action", "Due Phase", action.due_phase),
            ("PM Action", "Lead Time Days", str(action.lead_time_days)),
            ("PM Action", "Priority", action.priority),
        ])

    for assumption in result.bid_assumptions:
        rows.extend([
            ("Bid Assumption", "Title", assumption.title),
            ("Bid Assumption", "Type", assumption.type),
            ("Bid Assumption", "Text", assumption.text),
        ])

    estimate = result.probabilistic_estimate
    section = "Probabilistic Estimate"
    rows.extend(_percentile_rows(section, "Cost Impact %", estimate.impact_pct))
    rows.extend(_percentile_rows(section, "Schedule Days", estimate.schedule_days))
    if estimate.baseline_cost_usd is not None:
        rows.append((section, "Baseline Cost USD", _format_number(estimate.baseline_cost_usd)))
    if estimate.impact_cost_usd is not None:
        rows.extend(_percentile_rows(section, "Cost Impact USD", estimate.impact_cost_usd))
    rows.append((section, "Sample Size", str(estimate.sample_size)))
    rows.append((section, "Methodology", estimate.methodology))
    return rows


def result_to_csv(result: SiteAnalysisResult) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(result_to_rows(result))
    return buffer.getvalue()
