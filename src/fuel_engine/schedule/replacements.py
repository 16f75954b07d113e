"""Quick replacement options and custom item parsing for the replace action."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable

from fuel_engine.models.enums import LIQUID_SERVING_ML, PROTEIN_DRINK_SERVING_ML, ItemKind, Unit
from fuel_engine.models.item import Item

_GELS = (ItemKind.GEL100, ItemKind.GEL160)


@dataclass(frozen=True)
class ReplacementOption:
    """A named transform from the planned items to what was actually taken."""

    option_id: str
    name: str
    description: str
    transform: Callable[[tuple[Item, ...]], tuple[Item, ...]]
    note: str


def _swap_kind(source: ItemKind, target: ItemKind) -> Callable:
    def _transform(items: tuple[Item, ...]) -> tuple[Item, ...]:
        return tuple(replace(i, kind=target) if i.kind == source else i for i in items)
    return _transform


def _swap_item(source: ItemKind, target: Item) -> Callable:
    def _transform(items: tuple[Item, ...]) -> tuple[Item, ...]:
        return tuple(target if i.kind == source else i for i in items)
    return _transform


def _double_gel(items: tuple[Item, ...]) -> tuple[Item, ...]:
    for item in items:
        if item.kind in _GELS:
            return items + (item,)
    return items + (Item(ItemKind.GEL100, 1, Unit.PIECE),)


def _drop_gel(items: tuple[Item, ...]) -> tuple[Item, ...]:
    return tuple(i for i in items if i.kind not in _GELS)


def _half_portion(items: tuple[Item, ...]) -> tuple[Item, ...]:
    # Halves round half up (1 gel → 1, 150 ml → 75 ml)
    return tuple(replace(i, quantity=int(i.quantity * 0.5 + 0.5)) for i in items)


REPLACEMENT_OPTIONS: tuple[ReplacementOption, ...] = (
    ReplacementOption(
        "gel100-to-160", "GEL100 → GEL160", "Swap the small gel for a large one (+15 g carbs)",
        _swap_kind(ItemKind.GEL100, ItemKind.GEL160), "GEL100 → GEL160",
    ),
    ReplacementOption(
        "gel160-to-100", "GEL160 → GEL100", "Swap the large gel for a small one (-15 g carbs)",
        _swap_kind(ItemKind.GEL160, ItemKind.GEL100), "GEL160 → GEL100",
    ),
    ReplacementOption(
        "m320-to-yt", "M320 → YT", "Swap the drink mix for a protein drink",
        _swap_item(ItemKind.M320, Item(ItemKind.YT, PROTEIN_DRINK_SERVING_ML, Unit.ML)),
        "M320 → YT",
    ),
    ReplacementOption(
        "yt-to-m320", "YT → M320", "Swap the protein drink for drink mix",
        _swap_item(ItemKind.YT, Item(ItemKind.M320, int(LIQUID_SERVING_ML), Unit.ML)),
        "YT → M320",
    ),
    ReplacementOption(
        "double-gel", "Double gel", "Add one extra gel of the same type",
        _double_gel, "Double gel",
    ),
    ReplacementOption(
        "skip-gel", "Drop gel", "Remove the gel from this event",
        _drop_gel, "Dropped gel",
    ),
    ReplacementOption(
        "half-portion", "Half portion", "Halve every quantity",
        _half_portion, "Half portion",
    ),
)


def get_option(option_id: str) -> ReplacementOption | None:
    for option in REPLACEMENT_OPTIONS:
        if option.option_id == option_id:
            return option
    return None


_ENTRY_RE = re.compile(r"^\s*([A-Za-z0-9]+)\s*:\s*(\d+)\s*(ml)?\s*$", re.IGNORECASE)


def parse_custom_items(text: str) -> tuple[Item, ...] | None:
    """Parse 'GEL100:1, M320:150ml' into items.

    An ``ml`` suffix makes the entry a liquid; otherwise it counts pieces.
    Returns None if the text is empty, any entry is malformed, the type is
    unknown or a quantity is zero.
    """
    if not text or not text.strip():
        return None

    items: list[Item] = []
    for entry in text.split(","):
        match = _ENTRY_RE.match(entry)
        if match is None:
            return None
        kind_str, quantity_str, ml_suffix = match.groups()
        try:
            kind = ItemKind(kind_str.upper())
        except ValueError:
            return None
        quantity = int(quantity_str)
        if quantity <= 0:
            return None
        items.append(Item(kind, quantity, Unit.ML if ml_suffix else Unit.PIECE))
    return tuple(items)
