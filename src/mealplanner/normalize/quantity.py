"""Leading-quantity parsing, fraction formatting and serving scaling."""

import math
import re
from dataclasses import dataclass
from fractions import Fraction

# Tried in order; the first match wins.
MIXED_PATTERN = re.compile(r"^(\d+)\s+(\d+)/(\d+)\s*")
FRACTION_PATTERN = re.compile(r"^(\d+)/(\d+)\s*")
DECIMAL_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*")

# Fractional parts below this render as a whole number
FRACTION_EPSILON = 0.01

# Denominators a cook can measure with
VULGAR_DENOMINATORS = frozenset({2, 3, 4, 8})

SCALE_GRANULARITY = 8


@dataclass(frozen=True)
class ParsedQuantity:
    """A leading quantity split off an ingredient line."""

    quantity: float | None
    rest: str

    @property
    def has_quantity(self) -> bool:
        return self.quantity is not None


# Each matcher returns None when its pattern does not apply, or
# (quantity, end) where quantity is None for a zero denominator or a
# value too large to represent.


def _checked(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _match_mixed(text: str) -> tuple[float | None, int] | None:
    match = MIXED_PATTERN.match(text)
    if not match:
        return None
    whole, numerator, denominator = (float(g) for g in match.groups())
    if denominator == 0:
        return None, 0
    return _checked(whole + numerator / denominator), match.end()


def _match_fraction(text: str) -> tuple[float | None, int] | None:
    match = FRACTION_PATTERN.match(text)
    if not match:
        return None
    numerator, denominator = (float(g) for g in match.groups())
    if denominator == 0:
        return None, 0
    return _checked(numerator / denominator), match.end()


def _match_decimal(text: str) -> tuple[float | None, int] | None:
    match = DECIMAL_PATTERN.match(text)
    if not match:
        return None
    return _checked(float(match.group(1))), match.end()


_MATCHERS = (_match_mixed, _match_fraction, _match_decimal)


def parse_quantity(line: str) -> ParsedQuantity:
    """
    Parse the leading quantity from an ingredient line.

    Handles:
    - "2 cups flour" -> (2, "cups flour")
    - "1.5 tsp salt" -> (1.5, "tsp salt")
    - "1/2 cup sugar" -> (0.5, "cup sugar")
    - "1 1/2 cups milk" -> (1.5, "cups milk")
    - "pinch of salt" -> (None, "pinch of salt")

    Only a quantity at the very start of the trimmed line is recognised.
    A zero denominator ("1/0 cup") leaves the whole line unquantified.
    """
    trimmed = line.strip()

    for matcher in _MATCHERS:
        found = matcher(trimmed)
        if found is None:
            continue
        quantity, end = found
        if quantity is None:
            break
        return ParsedQuantity(quantity=quantity, rest=trimmed[end:])

    return ParsedQuantity(quantity=None, rest=trimmed)


def round_to_nearest_eighth(value: float) -> float | None:
    """Round to the nearest 1/8, halves rounding up. None if the value is too large to round."""
    eighths = value * SCALE_GRANULARITY + 0.5
    if not math.isfinite(eighths):
        return None
    return math.floor(eighths) / SCALE_GRANULARITY


def scale_quantity(quantity: float, scale_factor: float) -> float | None:
    """Scale a quantity and round it to the nearest eighth."""
    return round_to_nearest_eighth(quantity * scale_factor)


def to_vulgar(fraction_part: float) -> str | None:
    """
    Render a value in (0, 1) as "n/d".

    Returns None when no measuring-friendly fraction matches the value.
    """
    fraction = Fraction(fraction_part).limit_denominator(max(VULGAR_DENOMINATORS))
    if fraction.numerator == 0 or fraction.denominator not in VULGAR_DENOMINATORS:
        return None
    if abs(float(fraction) - fraction_part) > 1e-6:
        return None
    return f"{fraction.numerator}/{fraction.denominator}"


def format_quantity(quantity: float) -> str:
    """
    Format a quantity with vulgar fractions.

    Examples:
        0.5 -> "1/2"
        1.5 -> "1 1/2"
        2 -> "2"
        2.75 -> "2 3/4"
        0.2 -> "0.20"
    """
    whole_part = math.floor(quantity)
    fraction_part = quantity - whole_part

    if fraction_part < FRACTION_EPSILON:
        return str(whole_part)

    vulgar = to_vulgar(fraction_part)

    if whole_part == 0:
        return vulgar if vulgar else f"{fraction_part:.2f}"

    if vulgar:
        return f"{whole_part} {vulgar}"

    return f"{quantity:.2f}"


def scale_ingredient_line(line: str, scale_factor: float) -> str:
    """
    Scale the leading quantity of an ingredient line.

    Lines without a quantity ("pinch of salt", "salt to taste"), and lines
    whose scaled quantity is too large to represent, are returned unchanged.
    """
    parsed = parse_quantity(line)

    if parsed.quantity is None:
        return line

    scaled = scale_quantity(parsed.quantity, scale_factor)
    if scaled is None:
        return line

    return f"{format_quantity(scaled)} {parsed.rest}"
