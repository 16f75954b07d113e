"""Nutrient content per canonical serving of each item kind.

Liquids are listed per 150 ml, gels per piece and the protein drink per
300 ml bottle. Every ItemKind must have an entry.
"""

from __future__ import annotations

from fuel_engine.models.enums import ItemKind
from fuel_engine.models.item import NutrientProfile

NUTRIENT_PROFILES: dict[ItemKind, NutrientProfile] = {
    ItemKind.PH1000: NutrientProfile(carbs=0, sodium=150, fluid=150),
    ItemKind.PH1500: NutrientProfile(carbs=0, sodium=225, fluid=150),
    ItemKind.M320: NutrientProfile(carbs=24, sodium=74, fluid=150),
    ItemKind.GEL100: NutrientProfile(carbs=25, sodium=20, fluid=0),
    ItemKind.GEL160: NutrientProfile(carbs=40, sodium=30, fluid=0),
    ItemKind.YT: NutrientProfile(carbs=50, sodium=0, fluid=300, protein=30),
}

# Electrolyte tablets that switch to carb-bearing powder when the toggle is on
POWDER_ELIGIBLE_KINDS = frozenset({ItemKind.PH1000, ItemKind.PH1500})
