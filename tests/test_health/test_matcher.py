"""Tests for symptom matching, severity ordering and risk flags."""

from __future__ import annotations

from fuel_engine.health.knowledge_base import HEALTH_RECOMMENDATIONS, SYMPTOM_LABELS
from fuel_engine.health.matcher import derive_flags, match_recommendations
from fuel_engine.models.enums import Severity, SymptomKey
from fuel_engine.models.health import HealthFlags

S = SymptomKey


def _conditions(active) -> list[str]:
    return [rec.condition for rec in match_recommendations(active)]


class TestKnowledgeBase:
    def test_every_symptom_has_a_label(self) -> None:
        assert set(SYMPTOM_LABELS) == set(SymptomKey)

    def test_every_listed_symptom_is_known(self) -> None:
        for rec in HEALTH_RECOMMENDATIONS:
            assert rec.symptoms
            assert all(isinstance(s, SymptomKey) for s in rec.symptoms)


class TestMatchRecommendations:
    def test_two_of_three_matches(self, dehydrated_symptoms) -> None:
        assert "Dehydration" in _conditions(dehydrated_symptoms)

    def test_one_of_three_does_not_match(self) -> None:
        assert "Dehydration" not in _conditions({S.THIRST})

    def test_single_symptom_injury_matches(self) -> None:
        assert _conditions({S.SUDDEN_MUSCLE_SPASM}) == ["Cramps"]

    def test_one_of_two_matches(self) -> None:
        assert _conditions({S.HOT_SPOT}) == ["Blisters"]

    def test_no_symptoms_no_matches(self) -> None:
        assert match_recommendations([]) == []

    def test_sorted_by_severity(self) -> None:
        matched = match_recommendations({S.RED_SORES_SKIN, S.NAIL_PRESSURE, S.WHEEZING})
        assert [r.severity for r in matched] == [Severity.HIGH, Severity.MEDIUM, Severity.LOW]

    def test_equal_severity_keeps_knowledge_base_order(self) -> None:
        matched = _conditions({S.GRADUAL_PAIN, S.RED_SORES_SKIN, S.HOT_SPOT})
        assert matched == ["Blisters", "Chafing", "Overuse injury"]

    def test_shared_symptom_can_match_two_conditions(self) -> None:
        # darkUrine is listed by both dehydration and rhabdomyolysis
        matched = _conditions({S.DARK_URINE, S.THIRST, S.EXTREME_MUSCLE_PAIN})
        assert matched == ["Dehydration", "Rhabdomyolysis"]


class TestDeriveFlags:
    def test_no_matches_no_flags(self) -> None:
        assert derive_flags([]) == HealthFlags()

    def test_dehydration_sets_hyper_risk(self, dehydrated_symptoms) -> None:
        flags = derive_flags(match_recommendations(dehydrated_symptoms))
        assert flags == HealthFlags(hyper_risk=True)

    def test_hyponatremia_sets_hypo_risk(self) -> None:
        flags = derive_flags(match_recommendations({S.WEIGHT_GAIN, S.HEADACHE}))
        assert flags.hypo_risk
        assert not flags.gi_risk

    def test_gi_distress(self) -> None:
        flags = derive_flags(match_recommendations({S.VOMITING, S.DIARRHEA}))
        assert flags == HealthFlags(gi_risk=True)

    def test_nausea_and_headache_flag_both(self) -> None:
        # nausea counts toward both hyponatremia and GI distress
        flags = derive_flags(match_recommendations({S.NAUSEA, S.HEADACHE, S.VOMITING}))
        assert flags.hypo_risk and flags.gi_risk
