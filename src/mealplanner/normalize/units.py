"""Recognised units and their canonical singular forms."""

from types import MappingProxyType

# =============================================================================
# Unit Tables
# =============================================================================

# Every spelling the line parser accepts as a unit, mapped to its canonical form.
VOLUME_UNITS = MappingProxyType(
    {
        "cup": "cup",
        "cups": "cup",
        "tbsp": "tbsp",
        "tablespoon": "tbsp",
        "tablespoons": "tbsp",
        "tsp": "tsp",
        "teaspoon": "tsp",
        "teaspoons": "tsp",
        "ml": "ml",
        "liter": "liter",
        "liters": "liter",
    }
)

WEIGHT_UNITS = MappingProxyType(
    {
        "oz": "oz",
        "ounce": "oz",
        "ounces": "oz",
        "lb": "lb",
        "lbs": "lb",
        "pound": "lb",
        "pounds": "lb",
        "g": "g",
        "gram": "g",
        "grams": "g",
        "kg": "kg",
    }
)

COUNT_UNITS = MappingProxyType(
    {
        "clove": "clove",
        "cloves": "clove",
        "slice": "slice",
        "slices": "slice",
        "piece": "piece",
        "pieces": "piece",
        "can": "can",
        "cans": "can",
        "bunch": "bunch",
        "bunches": "bunch",
        "head": "head",
        "heads": "head",
    }
)

# Amounts too small to measure
INFORMAL_UNITS = MappingProxyType(
    {
        "pinch": "pinch",
        "dash": "dash",
    }
)

_UNIT_TABLES = {
    "volume": VOLUME_UNITS,
    "weight": WEIGHT_UNITS,
    "count": COUNT_UNITS,
    "informal": INFORMAL_UNITS,
}

UNIT_NORMALIZATION = MappingProxyType(
    {word: canonical for table in _UNIT_TABLES.values() for word, canonical in table.items()}
)

KNOWN_UNITS = frozenset(UNIT_NORMALIZATION)


def is_known_unit(word: str) -> bool:
    """Check if a word is a recognised unit spelling."""
    return word.lower() in KNOWN_UNITS


def normalize_unit(unit: str) -> str:
    """
    Normalize a unit to its singular, standardized form.

    Unrecognised words are returned lowercased but otherwise unchanged.

    Examples:
        "cups" -> "cup"
        "Tablespoons" -> "tbsp"
        "lbs" -> "lb"
        "cup" -> "cup"
    """
    lower = unit.lower()
    return UNIT_NORMALIZATION.get(lower, lower)


def identify_unit_type(unit: str | None) -> str:
    """Return "volume", "weight", "count", "informal" or "unknown" for a unit."""
    if not unit:
        return "unknown"

    lower = unit.lower().strip()
    for unit_type, table in _UNIT_TABLES.items():
        if lower in table:
            return unit_type

    return "unknown"
