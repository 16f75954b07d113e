"""Consumable items and nutrient profiles."""

from __future__ import annotations

from dataclasses import dataclass

from fuel_engine.models.enums import ItemKind, Unit


@dataclass(frozen=True)
class Item:
    """One consumable line inside a pattern slot or event.

    Always embedded by value in a tuple; never shared by identity.
    """

    kind: ItemKind
    quantity: float  # ml if unit is ML, count if unit is PIECE
    unit: Unit

    def describe(self) -> str:
        """Short label, e.g. 'GEL100 1piece' or 'M320 150ml'."""
        qty = int(self.quantity) if float(self.quantity).is_integer() else self.quantity
        return f"{self.kind.value} {qty}{self.unit.value}"


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrient totals. All values non-negative."""

    carbs: float = 0.0    # g
    sodium: float = 0.0   # mg
    fluid: float = 0.0    # ml
    protein: float = 0.0  # g


def describe_items(items: tuple[Item, ...] | list[Item]) -> str:
    """Comma-joined item labels."""
    return ", ".join(item.describe() for item in items)
