"""Unit tests for quantity parsing, fraction formatting and line scaling."""

import pytest

from mealplanner.normalize.quantity import (
    format_quantity,
    parse_quantity,
    round_to_nearest_eighth,
    scale_ingredient_line,
    scale_quantity,
    to_vulgar,
)


class TestParseQuantity:
    """Tests for parse_quantity."""

    def test_parse_integer(self):
        parsed = parse_quantity("2 cups flour")
        assert parsed.quantity == 2.0
        assert parsed.rest == "cups flour"

    def test_parse_decimal(self):
        parsed = parse_quantity("1.5 tsp salt")
        assert parsed.quantity == 1.5
        assert parsed.rest == "tsp salt"

    def test_parse_fraction(self):
        parsed = parse_quantity("1/2 cup sugar")
        assert parsed.quantity == 0.5
        assert parsed.rest == "cup sugar"

    def test_parse_mixed_number(self):
        parsed = parse_quantity("1 1/2 cups milk")
        assert parsed.quantity == 1.5
        assert parsed.rest == "cups milk"

    def test_mixed_number_wins_over_integer(self):
        """'2 3/4' must not parse as 2 with rest '3/4 ...'."""
        parsed = parse_quantity("2 3/4 cups stock")
        assert parsed.quantity == 2.75
        assert parsed.rest == "cups stock"

    def test_no_quantity(self):
        parsed = parse_quantity("pinch of salt")
        assert parsed.quantity is None
        assert not parsed.has_quantity
        assert parsed.rest == "pinch of salt"

    @pytest.mark.parametrize(
        "line",
        ["salt to taste", "  fresh basil  ", "a handful of spinach", ""],
    )
    def test_no_leading_numeral_returns_trimmed_line(self, line):
        parsed = parse_quantity(line)
        assert parsed.quantity is None
        assert parsed.rest == line.strip()

    def test_embedded_quantity_is_ignored(self):
        parsed = parse_quantity("eggs, 2 large")
        assert parsed.quantity is None
        assert parsed.rest == "eggs, 2 large"

    def test_leading_whitespace_is_trimmed(self):
        parsed = parse_quantity("   3 carrots ")
        assert parsed.quantity == 3.0
        assert parsed.rest == "carrots"

    def test_number_glued_to_unit(self):
        parsed = parse_quantity("500g flour")
        assert parsed.quantity == 500.0
        assert parsed.rest == "g flour"

    def test_quantity_only(self):
        parsed = parse_quantity("4")
        assert parsed.quantity == 4.0
        assert parsed.rest == ""

    def test_zero_denominator_is_not_a_quantity(self):
        parsed = parse_quantity("1/0 cup sugar")
        assert parsed.quantity is None
        assert parsed.rest == "1/0 cup sugar"

    def test_zero_denominator_in_mixed_number(self):
        parsed = parse_quantity("1 1/0 cup sugar")
        assert parsed.quantity is None
        assert parsed.rest == "1 1/0 cup sugar"

    def test_huge_number_is_not_a_quantity(self):
        line = "9" * 400 + " cups water"
        parsed = parse_quantity(line)
        assert parsed.quantity is None
        assert parsed.rest == line


class TestRounding:
    """Tests for the serving-scale rounding policy."""

    def test_round_to_nearest_eighth(self):
        assert round_to_nearest_eighth(0.3333) == 0.375
        assert round_to_nearest_eighth(0.05) == 0.0
        assert round_to_nearest_eighth(1.0) == 1.0

    def test_half_eighth_rounds_up(self):
        assert round_to_nearest_eighth(0.0625) == 0.125

    def test_rounds_down_when_closer(self):
        """Scaling rounds to nearest, unlike the grocery list which always rounds up."""
        assert round_to_nearest_eighth(2.05) == 2.0

    def test_scale_quantity(self):
        assert scale_quantity(1, 1.5) == 1.5
        assert scale_quantity(0.3333, 1) == 0.375
        assert scale_quantity(2, 0.5) == 1.0

    def test_too_large_to_round(self):
        assert round_to_nearest_eighth(1e308) is None
        assert scale_quantity(1e307, 100) is None


class TestFormatQuantity:
    """Tests for vulgar fraction formatting."""

    def test_whole_numbers(self):
        assert format_quantity(2) == "2"
        assert format_quantity(2.0) == "2"
        assert format_quantity(0) == "0"

    def test_fraction_only(self):
        assert format_quantity(0.5) == "1/2"
        assert format_quantity(0.25) == "1/4"
        assert format_quantity(0.375) == "3/8"

    def test_mixed_numbers(self):
        assert format_quantity(1.5) == "1 1/2"
        assert format_quantity(2.75) == "2 3/4"
        assert format_quantity(3.125) == "3 1/8"

    def test_tiny_fraction_renders_whole(self):
        assert format_quantity(3.004) == "3"

    def test_unrepresentable_fraction_falls_back_to_decimal(self):
        assert format_quantity(0.2) == "0.20"
        assert format_quantity(1.2) == "1.20"

    def test_to_vulgar(self):
        assert to_vulgar(0.5) == "1/2"
        assert to_vulgar(0.875) == "7/8"
        assert to_vulgar(0.2) is None

    def test_whole_number_round_trip(self):
        assert format_quantity(parse_quantity("2 cups flour").quantity) == "2"


class TestScaleIngredientLine:
    """Tests for scale_ingredient_line."""

    def test_scale_up(self):
        assert scale_ingredient_line("1 cup rice", 1.5) == "1 1/2 cup rice"

    def test_scale_down(self):
        assert scale_ingredient_line("1 1/2 cups milk", 0.5) == "3/4 cups milk"

    def test_scale_identity_rounds_to_eighth(self):
        assert scale_ingredient_line("0.3333 cup oil", 1) == "3/8 cup oil"

    def test_scale_double(self):
        assert scale_ingredient_line("2 eggs", 2) == "4 eggs"

    def test_overflowing_scale_leaves_line_unchanged(self):
        line = "1" + "0" * 307 + " cups flour"
        assert scale_ingredient_line(line, 100) == line

    @pytest.mark.parametrize("line", ["pinch of salt", "salt to taste", "Fresh parsley"])
    def test_lines_without_quantity_pass_through(self, line):
        assert scale_ingredient_line(line, 2) == line
