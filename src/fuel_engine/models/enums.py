"""Enumerations and fueling constants for the race-day fuel engine.

Nutrient figures are per canonical serving: one piece for gels, 150 ml for
every drink. Inventory still counts the protein drink in 300 ml bottles.
"""

from enum import Enum, IntEnum


class ItemKind(Enum):
    """Consumable item types carried by the crew."""

    PH1000 = "PH1000"    # Precision Hydration 1000 electrolyte, 150 ml serving
    PH1500 = "PH1500"    # Precision Hydration 1500 electrolyte, 150 ml serving
    M320 = "M320"        # Maurten 320 drink mix, 150 ml serving
    GEL100 = "GEL100"    # small gel
    GEL160 = "GEL160"    # large gel
    YT = "YT"            # protein recovery drink, 300 ml bottle


class Unit(Enum):
    """How an item's quantity is measured."""

    ML = "ml"
    PIECE = "piece"


class EventStatus(Enum):
    """Adherence status of a scheduled event."""

    DUE = "due"
    DONE = "done"
    SKIPPED = "skipped"
    REPLACED = "replaced"


class YTMode(Enum):
    """Protein-drink substitution mode applied every third hour.

    A = add a drink at the first slot, B = replace the last slot entirely,
    C = swap the small gel at the first slot, D = swap the large gel at the
    second slot.
    """

    OFF = "OFF"
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Severity(IntEnum):
    """Condition severity — higher value sorts first."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class SymptomKey(Enum):
    """Symptoms the crew can toggle on the health screen."""

    # Illness
    THIRST = "thirst"
    DARK_URINE = "darkUrine"
    DIZZINESS = "dizziness"
    WEIGHT_LOSS = "weightLoss"
    INTENSE_THIRST = "intenseThirst"
    WEIGHT_GAIN = "weightGain"
    NAUSEA = "nausea"
    HEADACHE = "headache"
    WARM_SKIN = "warmSkin"
    CONFUSION = "confusion"
    RAPID_PULSE = "rapidPulse"
    SHIVERING = "shivering"
    COLD_WET_SKIN = "coldWetSkin"
    SLUGGISH = "sluggish"
    TREMBLING = "trembling"
    COLD_SWEATS = "coldSweats"
    EMPTY_FEELING = "emptyFeeling"
    VOMITING = "vomiting"
    DIARRHEA = "diarrhea"
    EXTREME_MUSCLE_PAIN = "extremeMusclePain"
    MUSCLE_SWELLING = "muscleSwelling"
    WHEEZING = "wheezing"
    CHEST_TIGHTNESS = "chestTightness"
    BLURRED_VISION = "blurredVision"
    SEEING_THINGS = "seeingThings"
    MICROSLEEP = "microsleep"
    # Injury
    HOT_SPOT = "hotSpot"
    FLUID_BUBBLE = "fluidBubble"
    RED_SORES_SKIN = "redSoresSkin"
    WHITE_WRINKLED_SKIN = "whiteWrinkledSkin"
    SKIN_CRACKS = "skinCracks"
    NAIL_PRESSURE = "nailPressure"
    ACUTE_PAIN_SWELLING = "acutePainSwelling"
    DEFORMITY = "deformity"
    SEVERE_PAIN = "severePain"
    GRADUAL_PAIN = "gradualPain"
    SUDDEN_MUSCLE_SPASM = "suddenMuscleSpasm"


# ---------------------------------------------------------------------------
# Serving sizes
# ---------------------------------------------------------------------------
LIQUID_SERVING_ML = 150.0        # canonical serving for nutrient profiles
PROTEIN_DRINK_SERVING_ML = 300   # one YT bottle

# PH powder adds 15 g carbs per 500 ml the tablet form lacks → 4.5 g / 150 ml
PH_POWDER_CARB_BONUS_G = 4.5

# ---------------------------------------------------------------------------
# Race configuration bounds
# ---------------------------------------------------------------------------
MIN_RACE_HOURS = 1
MAX_RACE_HOURS = 48
DEFAULT_RACE_HOURS = 24
YT_MODE_HOUR_INTERVAL = 3        # protein drink every 3rd hour (h % 3 == 0)

# ---------------------------------------------------------------------------
# Adherence
# ---------------------------------------------------------------------------
SKIP_ALARM_THRESHOLD = 4         # consecutive skips before the alarm latches
SKIP_REASON_MAX_CHARS = 100
ACTION_TEXT_MAX_CHARS = 200
PREVIOUS_EVENT_GRACE_MIN = 20    # late logging window for the last due event
OVERDUE_THRESHOLD_MIN = 5
NEXT_EVENTS_COUNT = 3

# Urine colour chart (Armstrong 1994): 1 = pale, 8 = dark
URINE_COLOR_MIN = 1
URINE_COLOR_MAX = 8

# ---------------------------------------------------------------------------
# Persistence / backup
# ---------------------------------------------------------------------------
AUTOSAVE_DEBOUNCE_S = 1.0
BACKUP_INTERVAL_DEFAULT_MIN = 30
BACKUP_INTERVAL_MIN_MIN = 5
BACKUP_INTERVAL_MAX_MIN = 120
BACKUP_MAX_SNAPSHOTS = 48        # 24 h at one snapshot per 30 min
BACKUP_VERSION = "1.0.0"
