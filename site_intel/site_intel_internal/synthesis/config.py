"""
PURPOSE: Rule-table schema and loader for the decision-package synthesis.

RESPONSIBILITIES:
- Define the pydantic schema of the rule table (cost rules, action library,
  contingency bands, bid assumption templates)
- Reject broken deployments at load time (missing severity deltas, inverted
  ranges, empty contingency ladder)
- Load the table once per process; resolvers receive it as an argument
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from site_intel_api.result_models import ActionOwner, BidAssumption, DuePhase, DriverSeverity, ImpactType

logger = logging.getLogger(__name__)

RULES_PATH_ENV_VAR = "SITE_INTEL_RULES_PATH"
DEFAULT_RULES_PATH = Path(__file__).parent / "data" / "rules.json"

REQUIRED_SEVERITIES = ("high", "medium", "low")


class ConfigurationError(ValueError):
    """The rule table is unusable. Raised at load time, never per request."""


class ConfigModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


def _pair(values: Any, field_name: str) -> tuple[float, float]:
    # [a] is shorthand for [a, a]
    if isinstance(values, (int, float)):
        return float(values), float(values)
    if not isinstance(values, (list, tuple)) or not 1 <= len(values) <= 2:
        raise ValueError(f"{field_name} must be a [min, max] pair, got {values!r}")
    first = float(values[0])
    second = float(values[1]) if len(values) == 2 else first
    return first, second


class SeverityDelta(ConfigModel):
    pct_range: tuple[float, float]
    day_range: tuple[float, float]

    @model_validator(mode="before")
    @classmethod
    def accept_short_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "pct" in data:
            data["pctRange"] = data.pop("pct")
        if "days" in data:
            data["dayRange"] = data.pop("days")
        for key in ("pctRange", "dayRange", "pct_range", "day_range"):
            if key in data:
                data[key] = _pair(data[key], key)
        return data

    @model_validator(mode="after")
    def check_ordered(self) -> "SeverityDelta":
        if self.pct_range[1] < self.pct_range[0]:
            raise ValueError(f"pctRange max < min: {list(self.pct_range)}")
        if self.day_range[1] < self.day_range[0]:
            raise ValueError(f"dayRange max < min: {list(self.day_range)}")
        return self


class CostRuleConfig(ConfigModel):
    signal_id: str
    cost_category: str
    impact_type: ImpactType
    deltas: Mapping[DriverSeverity, SeverityDelta]
    rationale: str

    @field_validator("deltas")
    @classmethod
    def check_all_severities(cls, deltas: Mapping) -> Mapping:
        missing = [severity for severity in REQUIRED_SEVERITIES if severity not in deltas]
        if missing:
            raise ValueError(f"deltas missing severities: {', '.join(missing)}")
        return MappingProxyType(dict(deltas))

    @field_serializer("deltas")
    def serialize_deltas(self, deltas: Mapping) -> dict:
        return dict(deltas)


class ActionTemplate(ConfigModel):
    title: str
    owner: ActionOwner
    due_phase: DuePhase
    lead_time_days: int = Field(ge=0)


class ContingencyBand(ConfigModel):
    min_score: float
    max_score: Optional[float] = None
    min_pct: float
    max_pct: float
    basis: str

    @model_validator(mode="after")
    def check_ordered(self) -> "ContingencyBand":
        if self.max_score is not None and self.max_score < self.min_score:
            raise ValueError(f"maxScore {self.max_score} < minScore {self.min_score}")
        if self.max_pct < self.min_pct:
            raise ValueError(f"maxPct {self.max_pct} < minPct {self.min_pct}")
        return self


class ConditionalBidAssumptions(ConfigModel):
    high_flood: BidAssumption
    high_fire: BidAssumption


class RulesConfig(ConfigModel):
    cost_rules: tuple[CostRuleConfig, ...]
    action_library: Mapping[str, ActionTemplate]
    contingency_bands: tuple[ContingencyBand, ...]
    baseline_bid_assumptions: tuple[BidAssumption, ...]
    conditional_bid_assumptions: ConditionalBidAssumptions

    @field_validator("contingency_bands")
    @classmethod
    def check_ladder_not_empty(cls, bands: tuple) -> tuple:
        if not bands:
            raise ValueError("contingencyBands must contain at least one band")
        return bands

    @field_validator("action_library")
    @classmethod
    def freeze_action_library(cls, library: Mapping) -> Mapping:
        return MappingProxyType(dict(library))

    @field_serializer("action_library")
    def serialize_action_library(self, library: Mapping) -> dict:
        return dict(library)


def parse_rules_config(data: Any, source: str = "<memory>") -> RulesConfig:
    """Validate a decoded rule table, converting schema errors to ConfigurationError."""
    try:
        config = RulesConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid rule table {source}: {e}") from e
    logger.debug(
        "Loaded rule table %s: %s cost rules, %s action templates, %s contingency bands",
        source,
        len(config.cost_rules),
        len(config.action_library),
        len(config.contingency_bands),
    )
    return config


def resolve_rules_path(path: Optional[os.PathLike] = None) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.environ.get(RULES_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_RULES_PATH


def load_rules_config(path: Optional[os.PathLike] = None) -> RulesConfig:
    """
    Read and validate a rule table.

    Args:
        path: JSON file to read. Defaults to $SITE_INTEL_RULES_PATH, then to the
              table shipped with the package.

    Raises:
        ConfigurationError: file missing, not JSON, or failing validation.
    """
    rules_path = resolve_rules_path(path)
    try:
        raw = rules_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read rule table {rules_path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Rule table {rules_path} is not valid JSON: {e}") from e
    logger.info(f"Loading rule table from {rules_path}")
    return parse_rules_config(data, source=str(rules_path))


@lru_cache(maxsize=1)
def get_rules_config() -> RulesConfig:
    """Process-wide default rule table, read on first use."""
    return load_rules_config()
