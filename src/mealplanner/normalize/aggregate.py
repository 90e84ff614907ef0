"""Ingredient aggregation for grocery list generation."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from mealplanner.normalize.ingredients import parse_ingredient_line

QUARTER = 4


class IngredientLike(Protocol):
    name: str
    quantity: float | None
    unit: str | None


@dataclass(frozen=True)
class AggregatedItem:
    """An ingredient summed across every line that shares its name and unit."""

    name: str
    quantity: float | None
    unit: str | None

    @property
    def display_text(self) -> str:
        return format_display_text(self)


def round_up_to_quarter(quantity: float) -> float | None:
    """
    Round a quantity up to the next 1/4 so the list never under-buys.

    Returns None when the quantity is too large to round.

    Examples:
        2.1 -> 2.25
        2.3 -> 2.5
        2.0 -> 2.0
    """
    quarters = quantity * QUARTER
    if not math.isfinite(quarters):
        return None
    return math.ceil(quarters) / QUARTER


def capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def aggregate_parsed(items: Iterable[IngredientLike]) -> list[AggregatedItem]:
    """
    Group structured ingredients by (name, unit) and sum their quantities.

    Items with an empty name are skipped. Items without a quantity join
    their group but add nothing to it; a group where no item has a quantity
    keeps quantity None, as does a group whose sum is too large to
    represent. Different units are never merged.

    Returns:
        Aggregated items sorted by name, case-insensitive.
    """
    groups: dict[tuple[str, str], list[IngredientLike]] = {}

    for item in items:
        if not item.name:
            continue
        key = (item.name.lower(), item.unit or "")
        groups.setdefault(key, []).append(item)

    result: list[AggregatedItem] = []

    for (name, unit), members in groups.items():
        quantities = [m.quantity for m in members if m.quantity is not None]

        total: float | None = None
        if quantities:
            total = round_up_to_quarter(sum(quantities))

        result.append(
            AggregatedItem(
                name=capitalize_first(name),
                quantity=total,
                unit=unit or None,
            )
        )

    return sorted(result, key=lambda i: (i.name.casefold(), i.unit or ""))


def aggregate_ingredients(lines: Iterable[str], singular: bool = True) -> list[AggregatedItem]:
    """
    Parse ingredient lines and aggregate duplicates.

    Examples:
        ["2 cups flour", "1 cup flour"] -> [Flour 3 cup]
        ["1 tsp salt", "pinch of salt"] -> [Salt None pinch, Salt 1 tsp]
    """
    return aggregate_parsed(parse_ingredient_line(line, singular=singular) for line in lines)


def format_quantity_number(quantity: float) -> str:
    """Render 3.0 as "3" and 0.5 as "0.5"."""
    if quantity == int(quantity):
        return str(int(quantity))
    return repr(quantity)


def format_display_text(item: IngredientLike) -> str:
    """
    Format an aggregated item for display.

    Examples:
        Flour, 3, cup -> "Flour (3 cup)"
        Butter, 0.5, lb -> "Butter (0.5 lb)"
        Garlic, 2, None -> "Garlic (2)"
        Salt, None, None -> "Salt"
    """
    if item.quantity is None:
        return item.name

    quantity = format_quantity_number(item.quantity)

    if item.unit:
        return f"{item.name} ({quantity} {item.unit})"

    return f"{item.name} ({quantity})"
