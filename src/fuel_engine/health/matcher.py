"""Symptom → recommendation matching and risk-flag derivation.

A condition matches when at least two of its symptoms are active, or when at
least one is active and the condition lists no more than two symptoms. The
second branch lets single-signal injuries surface while multi-symptom
syndromes need corroboration.
"""

from __future__ import annotations

from typing import Iterable

from fuel_engine.health.knowledge_base import (
    DEHYDRATION,
    GI_DISTRESS,
    HEALTH_RECOMMENDATIONS,
    HYPERNATREMIA,
    HYPONATREMIA,
)
from fuel_engine.models.enums import SymptomKey
from fuel_engine.models.health import HealthFlags, HealthRecommendation

_CORROBORATED_MATCHES = 2
_SHORT_CONDITION_MAX_SYMPTOMS = 2


def matches(rec: HealthRecommendation, active: frozenset[SymptomKey]) -> bool:
    """Apply the asymmetric match rule to one knowledge-base entry."""
    hit_count = sum(1 for symptom in rec.symptoms if symptom in active)
    if hit_count >= _CORROBORATED_MATCHES:
        return True
    return hit_count >= 1 and len(rec.symptoms) <= _SHORT_CONDITION_MAX_SYMPTOMS


def match_recommendations(
    active_symptoms: Iterable[SymptomKey],
    knowledge_base: tuple[HealthRecommendation, ...] = HEALTH_RECOMMENDATIONS,
) -> list[HealthRecommendation]:
    """Matching conditions, most severe first.

    ``sorted`` is stable, so conditions of equal severity keep their
    knowledge-base order.
    """
    active = frozenset(active_symptoms)
    if not active:
        return []
    found = [rec for rec in knowledge_base if matches(rec, active)]
    return sorted(found, key=lambda rec: rec.severity, reverse=True)


def derive_flags(matched: Iterable[HealthRecommendation]) -> HealthFlags:
    """Risk flags as a pure function of the matched conditions."""
    names = [rec.condition for rec in matched]
    return HealthFlags(
        hypo_risk=any(HYPONATREMIA in name for name in names),
        hyper_risk=any(name in (HYPERNATREMIA, DEHYDRATION) for name in names),
        gi_risk=any(name == GI_DISTRESS for name in names),
    )
