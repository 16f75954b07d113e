"""Nutrition aggregation — sum an item list into a single NutrientProfile."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from fuel_engine.models.enums import LIQUID_SERVING_ML, PH_POWDER_CARB_BONUS_G, Unit
from fuel_engine.models.item import Item, NutrientProfile
from fuel_engine.nutrition.profiles import NUTRIENT_PROFILES, POWDER_ELIGIBLE_KINDS


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (2.5 → 3, not 2)."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def serving_multiplier(item: Item) -> float:
    """Number of canonical servings represented by *item*.

    Every ml quantity is scaled against 150 ml, the protein drink included;
    pieces count one serving each.
    """
    if item.unit == Unit.ML:
        return item.quantity / LIQUID_SERVING_ML
    return float(item.quantity)


def _nutrient_vector(item: Item, ph_powder_active: bool) -> np.ndarray:
    """[carbs, sodium, fluid, protein] contributed by one item."""
    profile = NUTRIENT_PROFILES[item.kind]
    vector = np.array(
        [profile.carbs, profile.sodium, profile.fluid, profile.protein],
        dtype=np.float64,
    ) * serving_multiplier(item)
    if (
        ph_powder_active
        and item.kind in POWDER_ELIGIBLE_KINDS
        and item.unit == Unit.ML
    ):
        vector[0] += PH_POWDER_CARB_BONUS_G * (item.quantity / LIQUID_SERVING_ML)
    return vector


def aggregate(items: Iterable[Item], ph_powder_active: bool = False) -> NutrientProfile:
    """Total nutrients for *items*.

    When *ph_powder_active* is set, PH1000/PH1500 measured in ml gain
    ``PH_POWDER_CARB_BONUS_G`` carbs per 150 ml. Carbs and protein are rounded
    to 0.1 g, sodium and fluid to whole units.

    Args:
        items: Items to total. Order does not matter.
        ph_powder_active: Race toggle for powder instead of tablets.

    Returns:
        The rounded NutrientProfile.
    """
    vectors = [_nutrient_vector(item, ph_powder_active) for item in items]
    if not vectors:
        return NutrientProfile()

    carbs, sodium, fluid, protein = (float(v) for v in np.sum(vectors, axis=0))
    return NutrientProfile(
        carbs=round_half_up(carbs, 1),
        sodium=int(round_half_up(sodium)),
        fluid=int(round_half_up(fluid)),
        protein=round_half_up(protein, 1),
    )
