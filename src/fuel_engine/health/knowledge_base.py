"""Static knowledge base of exertional illnesses and acute race injuries.

Entries are in declared order; the matcher keeps this order among conditions
of equal severity. Condition names double as markers for risk-flag
derivation, so renaming one requires updating ``matcher``.
"""

from __future__ import annotations

from fuel_engine.models.enums import Severity, SymptomKey as S
from fuel_engine.models.health import HealthRecommendation

HYPONATREMIA = "Hyponatremia"
HYPERNATREMIA = "Hypernatremia"
DEHYDRATION = "Dehydration"
GI_DISTRESS = "GI distress"

SYMPTOM_LABELS: dict[S, str] = {
    S.THIRST: "Thirst",
    S.DARK_URINE: "Dark urine",
    S.DIZZINESS: "Dizziness",
    S.WEIGHT_LOSS: "Large weight loss",
    S.INTENSE_THIRST: "Intense thirst",
    S.WEIGHT_GAIN: "Weight gain / oedema",
    S.NAUSEA: "Nausea",
    S.HEADACHE: "Headache",
    S.WARM_SKIN: "Hot skin",
    S.CONFUSION: "Confusion",
    S.RAPID_PULSE: "Rapid pulse",
    S.SHIVERING: "Shivering",
    S.COLD_WET_SKIN: "Cold / wet skin",
    S.SLUGGISH: "Sluggish",
    S.TREMBLING: "Trembling",
    S.COLD_SWEATS: "Cold sweats",
    S.EMPTY_FEELING: "Empty feeling",
    S.VOMITING: "Vomiting",
    S.DIARRHEA: "Diarrhoea",
    S.EXTREME_MUSCLE_PAIN: "Extreme muscle pain",
    S.MUSCLE_SWELLING: "Muscle swelling",
    S.WHEEZING: "Wheezing",
    S.CHEST_TIGHTNESS: "Chest tightness",
    S.BLURRED_VISION: "Blurred vision",
    S.SEEING_THINGS: "Seeing things",
    S.MICROSLEEP: "Microsleep",
    S.HOT_SPOT: "Hot spot",
    S.FLUID_BUBBLE: "Fluid blister",
    S.RED_SORES_SKIN: "Red / sore skin",
    S.WHITE_WRINKLED_SKIN: "White / wrinkled skin",
    S.SKIN_CRACKS: "Skin cracks",
    S.NAIL_PRESSURE: "Pressure under nail",
    S.ACUTE_PAIN_SWELLING: "Acute pain / swelling",
    S.DEFORMITY: "Deformity",
    S.SEVERE_PAIN: "Severe pain",
    S.GRADUAL_PAIN: "Gradual pain",
    S.SUDDEN_MUSCLE_SPASM: "Sudden muscle spasm",
}


def _rec(
    condition: str, symptoms: tuple[S, ...], actions: tuple[str, ...], severity: Severity
) -> HealthRecommendation:
    return HealthRecommendation(
        condition=condition, symptoms=symptoms, actions=actions, severity=severity
    )


HEALTH_RECOMMENDATIONS: tuple[HealthRecommendation, ...] = (
    # -- Illness --------------------------------------------------------
    _rec(
        DEHYDRATION,
        (S.THIRST, S.DARK_URINE, S.DIZZINESS),
        ("Small sips of electrolyte drink", "Find shade", "Rest"),
        Severity.HIGH,
    ),
    _rec(
        HYPERNATREMIA,
        (S.WEIGHT_LOSS, S.INTENSE_THIRST),
        (
            "Drink water / isotonic without extra salt",
            "Rest",
            "Avoid more salt until symptoms improve",
        ),
        Severity.HIGH,
    ),
    _rec(
        HYPONATREMIA,
        (S.WEIGHT_GAIN, S.NAUSEA, S.HEADACHE),
        (
            "Stop water intake",
            "Take salt or seek medical help",
            "Monitor symptoms closely",
        ),
        Severity.HIGH,
    ),
    _rec(
        "Heat illness / heat stroke",
        (S.WARM_SKIN, S.CONFUSION, S.RAPID_PULSE),
        (
            "Get into shade immediately",
            "Active cooling with ice / water",
            "Call 113 if heat stroke is suspected",
        ),
        Severity.HIGH,
    ),
    _rec(
        "Hypothermia",
        (S.SHIVERING, S.COLD_WET_SKIN, S.SLUGGISH),
        (
            "Find shelter and remove wet clothing",
            "Warm up with blankets / heat",
            "Call 113 for moderate or worse hypothermia",
        ),
        Severity.HIGH,
    ),
    _rec(
        "Hypoglycemia",
        (S.TREMBLING, S.COLD_SWEATS, S.EMPTY_FEELING),
        ("Take fast sugar (dextrose / gel)", "Follow up with food / drink", "Monitor blood sugar"),
        Severity.MEDIUM,
    ),
    _rec(
        GI_DISTRESS,
        (S.NAUSEA, S.VOMITING, S.DIARRHEA),
        ("Slow down", "Take small sips of isotonic", "Switch fuel", "Consider a break"),
        Severity.MEDIUM,
    ),
    _rec(
        "Rhabdomyolysis",
        (S.EXTREME_MUSCLE_PAIN, S.MUSCLE_SWELLING, S.DARK_URINE),
        ("STOP activity immediately", "Drink fluids", "Call 113 - medical emergency"),
        Severity.HIGH,
    ),
    _rec(
        "Breathing difficulty",
        (S.WHEEZING, S.CHEST_TIGHTNESS),
        (
            "Stop activity",
            "Use inhaler if available",
            "Get fresh air / use a mask",
            "Seek help if it worsens",
        ),
        Severity.HIGH,
    ),
    _rec(
        "Corneal oedema",
        (S.BLURRED_VISION,),
        ("Stop activity", "Close the eyes", "Use saline drops", "Rest the eyes"),
        Severity.MEDIUM,
    ),
    _rec(
        "Sleep deprivation / hallucination",
        (S.SEEING_THINGS, S.MICROSLEEP),
        (
            "Take a power nap (15-20 min)",
            "Drink caffeine",
            "Get a pacer / company",
            "Consider stopping if severe",
        ),
        Severity.MEDIUM,
    ),
    # -- Injury ---------------------------------------------------------
    _rec(
        "Blisters",
        (S.HOT_SPOT, S.FLUID_BUBBLE),
        ("Clean the area", "Protect with tape / padding", "Consider sterile draining"),
        Severity.LOW,
    ),
    _rec(
        "Chafing",
        (S.RED_SORES_SKIN,),
        ("Wash and dry the area", "Apply barrier cream", "Use tape", "Change to dry clothing"),
        Severity.LOW,
    ),
    _rec(
        "Foot maceration",
        (S.WHITE_WRINKLED_SKIN, S.SKIN_CRACKS),
        ("Dry the feet thoroughly", "Change to dry socks / shoes", "Use foot powder", "Keep feet dry"),
        Severity.LOW,
    ),
    _rec(
        "Black toenail",
        (S.NAIL_PRESSURE,),
        ("Relieve the toe box", "Cool the area", "Consider medical trephination if very painful"),
        Severity.MEDIUM,
    ),
    _rec(
        "Ankle sprain",
        (S.ACUTE_PAIN_SWELLING,),
        ("RICE: rest, ice, compression, elevation", "Assess further treatment", "Avoid loading"),
        Severity.MEDIUM,
    ),
    _rec(
        "Fracture / trauma",
        (S.DEFORMITY, S.SEVERE_PAIN),
        ("Immobilise the area", "Call 113 immediately", "Do not move the injured area"),
        Severity.HIGH,
    ),
    _rec(
        "Overuse injury",
        (S.GRADUAL_PAIN,),
        ("Reduce pace", "Use ice / tape", "Paracetamol (caution with NSAIDs)", "Monitor progression"),
        Severity.LOW,
    ),
    _rec(
        "Cramps",
        (S.SUDDEN_MUSCLE_SPASM,),
        ("Gently stretch the muscle", "Light massage", "Drink electrolytes / fluid", "Consider salt / magnesium"),
        Severity.LOW,
    ),
)
