from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SignalSeverity = Literal["high", "medium", "low", "unknown"]

# Sentinel display values meaning the upstream source had no data.
UNAVAILABLE_VALUES = frozenset({"Not available", "Unknown"})


class ContractModel(BaseModel):
    """Frozen model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Signal(ContractModel):
    id: str
    label: str
    value: str
    severity: SignalSeverity
    explanation: str = ""

    @property
    def is_available(self) -> bool:
        return self.value not in UNAVAILABLE_VALUES
