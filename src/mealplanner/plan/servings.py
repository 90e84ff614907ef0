"""Serving-size scaling for a single recipe."""

from dataclasses import dataclass

from mealplanner.config import get_settings
from mealplanner.normalize.quantity import scale_ingredient_line


def scale_factor(current_servings: int, original_servings: int | None) -> float:
    """Ratio of wanted to written servings; 1 when the recipe has no serving count."""
    if not original_servings:
        return 1.0
    return current_servings / original_servings


def scale_ingredients(lines: list[str], factor: float) -> list[str]:
    """Scale every ingredient line, passing quantity-less lines through."""
    return [scale_ingredient_line(line, factor) for line in lines]


def clamp_servings(servings: int) -> int:
    settings = get_settings()
    return max(settings.min_servings, min(settings.max_servings, servings))


@dataclass
class ServingScale:
    """
    Serving stepper state for one recipe.

    Starts at the saved preference when there is one, otherwise at the
    recipe's own serving count.
    """

    original_servings: int | None
    current_servings: int

    @classmethod
    def for_recipe(
        cls, original_servings: int | None, saved_servings: int | None = None
    ) -> "ServingScale":
        start = saved_servings or original_servings or 1
        return cls(original_servings=original_servings, current_servings=clamp_servings(start))

    @property
    def factor(self) -> float:
        return scale_factor(self.current_servings, self.original_servings)

    def set_servings(self, servings: int) -> int:
        self.current_servings = clamp_servings(servings)
        return self.current_servings

    def increment(self) -> int:
        return self.set_servings(self.current_servings + 1)

    def decrement(self) -> int:
        return self.set_servings(self.current_servings - 1)

    def scale(self, lines: list[str]) -> list[str]:
        return scale_ingredients(lines, self.factor)
