from typing import Literal, Optional

from site_intel_api.signal_models import ContractModel, Signal

ImpactType = Literal["capex", "general_conditions", "insurance", "schedule"]
DriverSeverity = Literal["high", "medium", "low"]
ActionOwner = Literal["Estimator", "Project Manager", "Civil Engineer", "Structural Engineer", "Geotech"]
DuePhase = Literal["Bid", "Design Development", "Permit", "Procurement", "Mobilization"]
ActionPriority = Literal["high", "medium", "low"]
BidAssumptionType = Literal["assumption", "allowance", "exclusion"]


class NumericRange(ContractModel):
    min: float
    max: float


class CostDriver(ContractModel):
    id: str
    signal_id: str
    label: str
    severity: DriverSeverity
    cost_category: str
    impact_type: ImpactType
    cost_delta_pct: NumericRange
    schedule_delta_days: NumericRange
    rationale: str


class PMAction(ContractModel):
    id: str
    title: str
    owner: ActionOwner
    due_phase: DuePhase
    lead_time_days: int
    priority: ActionPriority
    related_signal_id: str


class BidAssumption(ContractModel):
    title: str
    text: str
    type: BidAssumptionType


class ContingencyRange(ContractModel):
    min_pct: float
    max_pct: float
    basis: str


class PercentileTriple(ContractModel):
    p10: float
    p50: float
    p90: float


class ProbabilisticEstimate(ContractModel):
    baseline_cost_usd: Optional[float] = None
    impact_pct: PercentileTriple
    schedule_days: PercentileTriple
    impact_cost_usd: Optional[PercentileTriple] = None
    methodology: str
    sample_size: int


class Implication(ContractModel):
    title: str
    detail: str


class SiteAnalysisResult(ContractModel):
    """Decision package assembled from one set of site signals."""

    version: Literal["v2"] = "v2"
    address: str
    signals: list[Signal]
    implications: list[Implication]
    warnings: list[str]
    confidence_score: int
    data_completeness_pct: int
    contingency: ContingencyRange
    cost_drivers: list[CostDriver]
    actions: list[PMAction]
    bid_assumptions: list[BidAssumption]
    probabilistic_estimate: ProbabilisticEstimate
