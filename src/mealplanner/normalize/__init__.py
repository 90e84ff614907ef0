"""Parse, normalize and aggregate free-form ingredient text."""

from mealplanner.normalize.aggregate import (
    AggregatedItem,
    aggregate_ingredients,
    aggregate_parsed,
    format_display_text,
    round_up_to_quarter,
)
from mealplanner.normalize.ingredients import (
    ParsedIngredient,
    parse_ingredient_line,
    singularize,
)
from mealplanner.normalize.quantity import (
    ParsedQuantity,
    format_quantity,
    parse_quantity,
    scale_ingredient_line,
    scale_quantity,
)
from mealplanner.normalize.units import (
    KNOWN_UNITS,
    identify_unit_type,
    normalize_unit,
)

__all__ = [
    "KNOWN_UNITS",
    "AggregatedItem",
    "ParsedIngredient",
    "ParsedQuantity",
    "aggregate_ingredients",
    "aggregate_parsed",
    "format_display_text",
    "format_quantity",
    "identify_unit_type",
    "normalize_unit",
    "parse_ingredient_line",
    "parse_quantity",
    "round_up_to_quarter",
    "scale_ingredient_line",
    "scale_quantity",
    "singularize",
]
