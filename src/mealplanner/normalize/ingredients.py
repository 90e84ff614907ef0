"""Ingredient line parsing and name normalization."""

from dataclasses import dataclass
from types import MappingProxyType

from mealplanner.normalize.quantity import parse_quantity
from mealplanner.normalize.units import is_known_unit, normalize_unit

IRREGULAR_PLURALS = MappingProxyType(
    {
        "tomatoes": "tomato",
        "potatoes": "potato",
        "mangoes": "mango",
        "leaves": "leaf",
        "loaves": "loaf",
        "knives": "knife",
        "halves": "half",
    }
)

# Endings after which a plural takes "es" rather than "s"
_ES_STEMS = ("s", "x", "z", "ch", "sh")


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured view of one ingredient line."""

    quantity: float | None
    unit: str | None
    name: str
    original_line: str = ""


def singularize(word: str) -> str:
    """
    Strip a plural ending from a word.

    A heuristic, not a linguistic singularizer:
        "berries" -> "berry"
        "radishes" -> "radish"
        "beans" -> "bean"
        "tomatoes" -> "tomato" (irregular table)
        "grass" -> "grass"
    """
    lower = word.lower()

    if lower in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[lower]

    if lower.endswith("ies") and len(lower) > 4:
        return lower[:-3] + "y"

    if lower.endswith("es") and len(lower) > 3:
        stem = lower[:-2]
        if stem.endswith(_ES_STEMS):
            return stem

    if lower.endswith("s") and len(lower) > 2 and not lower.endswith("ss"):
        return lower[:-1]

    return lower


def singularize_name(name: str) -> str:
    """Singularize the last word of an ingredient name ("black beans" -> "black bean")."""
    head, _, last = name.rpartition(" ")
    if not last:
        return name
    singular = singularize(last)
    return f"{head} {singular}" if head else singular


def normalize_name(words: list[str]) -> str:
    """Join name words, lowercase, and drop one leading "of "."""
    name = " ".join(words).lower()
    if name.startswith("of "):
        name = name[3:]
    return name.strip()


def parse_ingredient_line(line: str, singular: bool = True) -> ParsedIngredient:
    """
    Parse an ingredient line into quantity, unit and name.

    Examples:
        "2 cups flour" -> (2, "cup", "flour")
        "1/2 tsp salt" -> (0.5, "tsp", "salt")
        "pinch of salt" -> (None, "pinch", "salt")
        "salt to taste" -> (None, None, "salt to taste")
        "3 carrots" -> (3, None, "carrot")

    Args:
        line: Free-form ingredient text.
        singular: Singularize the name so "beans" and "bean" group together.
            Pass False to keep the name as written.
    """
    parsed = parse_quantity(line)

    words = parsed.rest.split()
    unit: str | None = None

    if words and is_known_unit(words[0]):
        unit = normalize_unit(words[0])
        words = words[1:]

    name = normalize_name(words)
    if singular:
        name = singularize_name(name)

    return ParsedIngredient(
        quantity=parsed.quantity,
        unit=unit,
        name=name,
        original_line=line,
    )
