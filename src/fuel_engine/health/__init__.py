"""Symptom knowledge base and recommendation matcher."""

from fuel_engine.health.knowledge_base import HEALTH_RECOMMENDATIONS, SYMPTOM_LABELS
from fuel_engine.health.matcher import derive_flags, match_recommendations

__all__ = [
    "HEALTH_RECOMMENDATIONS",
    "SYMPTOM_LABELS",
    "derive_flags",
    "match_recommendations",
]
