"""Crew inventory — SKU → remaining count, floored at zero."""

from __future__ import annotations

from dataclasses import dataclass, field

from fuel_engine.models.enums import PROTEIN_DRINK_SERVING_ML, ItemKind, Unit
from fuel_engine.models.item import Item

INITIAL_INVENTORY: dict[str, float] = {
    "GEL100": 30,
    "GEL160": 30,
    "M320_150ml": 0,
    "M320_500mlBags": 8,
    "PH1000_150ml": 0,
    "PH1500_150ml": 0,
    "PH1000_500mlBags": 8,
    "PH1500_500mlBags": 8,
    "TabletsPH1000": 8,
    "TabletsPH1500": 8,
    "YT_300ml": 0,
}

# Every ItemKind must appear here. None = mixed from bulk supplies at the
# aid station, not decremented by event completion.
ITEM_SKU: dict[ItemKind, str | None] = {
    ItemKind.PH1000: None,
    ItemKind.PH1500: None,
    ItemKind.M320: None,
    ItemKind.GEL100: "GEL100",
    ItemKind.GEL160: "GEL160",
    ItemKind.YT: "YT_300ml",
}


def consumed_units(item: Item) -> tuple[str, float] | None:
    """Map an item to (sku, count consumed), or None for bulk-mixed liquids."""
    sku = ITEM_SKU[item.kind]
    if sku is None:
        return None
    if item.kind == ItemKind.YT and item.unit == Unit.ML:
        return sku, item.quantity / PROTEIN_DRINK_SERVING_ML
    return sku, float(item.quantity)


@dataclass
class Inventory:
    """Flat SKU → count mapping with zero-floored decrements."""

    counts: dict[str, float] = field(default_factory=lambda: dict(INITIAL_INVENTORY))

    def get(self, sku: str) -> float:
        return self.counts.get(sku, 0)

    def decrement(self, sku: str, amount: float) -> float:
        """Subtract *amount* from *sku*, never going below zero. Returns new count."""
        remaining = max(0, self.get(sku) - amount)
        self.counts[sku] = remaining
        return remaining

    def consume(self, items: tuple[Item, ...] | list[Item]) -> None:
        """Decrement every discrete SKU referenced by *items*."""
        for item in items:
            consumed = consumed_units(item)
            if consumed is not None:
                self.decrement(*consumed)

    def update(self, **counts: float) -> list[str]:
        """Set counts line by line. Unknown SKUs and negative values are skipped.

        Returns the SKUs that were rejected.
        """
        rejected: list[str] = []
        for sku, value in counts.items():
            if sku not in self.counts or value is None or value < 0:
                rejected.append(sku)
                continue
            self.counts[sku] = value
        return rejected

    def to_dict(self) -> dict[str, float]:
        return dict(self.counts)
