"""Health entity and static recommendation record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fuel_engine.models.enums import Severity, SymptomKey


@dataclass(frozen=True)
class HealthRecommendation:
    """One knowledge-base entry: a condition, its symptoms and crew actions."""

    condition: str
    symptoms: tuple[SymptomKey, ...]
    actions: tuple[str, ...]
    severity: Severity


@dataclass(frozen=True)
class HealthFlags:
    """Coarse risk flags derived from matched conditions. Never set by hand."""

    hypo_risk: bool = False   # hyponatremia
    hyper_risk: bool = False  # hypernatremia / dehydration
    gi_risk: bool = False


def _all_symptoms_off() -> dict[SymptomKey, bool]:
    return {key: False for key in SymptomKey}


@dataclass
class HealthData:
    """Crew-observed athlete health state."""

    last_updated: datetime
    symptoms: dict[SymptomKey, bool] = field(default_factory=_all_symptoms_off)
    flags: HealthFlags = field(default_factory=HealthFlags)
    actions: list[str] = field(default_factory=list)  # ticked-off actions
    weight_kg: float | None = None
    urine_color: int | None = None

    def active_symptoms(self) -> frozenset[SymptomKey]:
        return frozenset(key for key, active in self.symptoms.items() if active)
