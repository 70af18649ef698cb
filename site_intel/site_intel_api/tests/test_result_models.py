import pytest
from pydantic import ValidationError

from site_intel_api.result_models import CostDriver, NumericRange, PercentileTriple, ProbabilisticEstimate
from site_intel_api.signal_models import Signal


class TestSignal:
    def test_parses_camel_case_payload(self):
        signal = Signal.model_validate(
            {"id": "flood-zone", "label": "Flood Hazard Zone", "value": "AE", "severity": "high", "explanation": "FEMA."}
        )
        assert signal.severity == "high"
        assert signal.is_available

    @pytest.mark.parametrize("value", ["Not available", "Unknown"])
    def test_sentinel_values_are_unavailable(self, value):
        signal = Signal(id="sdc", label="SDC", value=value, severity="unknown")
        assert not signal.is_available

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            Signal(id="sdc", label="SDC", value="D", severity="critical")

    def test_frozen(self):
        signal = Signal(id="sdc", label="SDC", value="D", severity="high")
        with pytest.raises(ValidationError):
            signal.severity = "low"


class TestCostDriver:
    def make(self, **overrides):
        fields = dict(
            id="driver-sdc",
            signal_id="sdc",
            label="Seismic Design Category",
            severity="high",
            cost_category="Structural lateral system",
            impact_type="capex",
            cost_delta_pct=NumericRange(min=4, max=9),
            schedule_delta_days=NumericRange(min=10, max=20),
            rationale="Seismic.",
        )
        fields.update(overrides)
        return CostDriver(**fields)

    def test_dumps_camel_case(self):
        data = self.make().model_dump(by_alias=True)
        assert data["signalId"] == "sdc"
        assert data["costDeltaPct"] == {"min": 4, "max": 9}
        assert data["scheduleDeltaDays"] == {"min": 10, "max": 20}
        assert data["impactType"] == "capex"

    def test_unknown_severity_not_allowed(self):
        with pytest.raises(ValidationError):
            self.make(severity="unknown")


class TestProbabilisticEstimate:
    def test_optional_usd(self):
        triple = PercentileTriple(p10=1, p50=2, p90=3)
        estimate = ProbabilisticEstimate(impact_pct=triple, schedule_days=triple, methodology="m", sample_size=10)
        data = estimate.model_dump(by_alias=True)
        assert data["impactCostUsd"] is None
        assert data["baselineCostUsd"] is None
        assert data["impactPct"] == {"p10": 1, "p50": 2, "p90": 3}
