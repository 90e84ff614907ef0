"""Request and response schemas for the HTTP API."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_iso_date(value: str) -> str:
    date.fromisoformat(value)
    return value


# =============================================================================
# Ingredients
# =============================================================================


class IngredientLinesRequest(BaseModel):
    """A batch of free-form ingredient lines."""

    lines: list[str] = Field(default_factory=list)


class ParsedIngredientSchema(BaseModel):
    """One parsed ingredient line."""

    quantity: float | None = None
    unit: str | None = None
    unit_type: str = "unknown"
    name: str
    original_line: str


class AggregatedItemSchema(BaseModel):
    """One aggregated grocery entry."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    display_text: str


class ScaleRequest(BaseModel):
    """Scale ingredient lines by a factor."""

    lines: list[str] = Field(default_factory=list)
    scale_factor: float = Field(gt=0)


class ScaleResponse(BaseModel):
    lines: list[str]
    scale_factor: float


# =============================================================================
# Recipes
# =============================================================================


class RecipeCreateRequest(BaseModel):
    """Request to create a recipe."""

    household_id: str | None = Field(None, description="Defaults to the configured household")
    title: str = Field(min_length=1)
    ingredients: list[str] = Field(default_factory=list)
    instructions: str | None = None
    prep_time: int | None = Field(None, ge=0, description="Minutes")
    servings: int | None = Field(None, ge=1)


class RecipeUpdateRequest(BaseModel):
    """Partial recipe update."""

    title: str | None = Field(None, min_length=1)
    ingredients: list[str] | None = None
    instructions: str | None = None
    prep_time: int | None = Field(None, ge=0)
    servings: int | None = Field(None, ge=1)
    scaled_servings: int | None = Field(None, ge=1, le=99)


class RecipeResponse(BaseModel):
    """Stored recipe."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    household_id: str
    title: str
    ingredients: list[str]
    instructions: str | None = None
    prep_time: int | None = None
    servings: int | None = None
    scaled_servings: int | None = None
    sort_order: int
    last_used: datetime


class ScaledRecipeResponse(BaseModel):
    """A recipe's ingredient lines at a chosen serving count."""

    recipe_id: str
    original_servings: int | None
    servings: int
    scale_factor: float
    ingredients: list[str]


# =============================================================================
# Meal Plans
# =============================================================================


class MealSetRequest(BaseModel):
    recipe_id: str


class MealPlanResponse(BaseModel):
    """A recipe scheduled on a date."""

    id: int
    household_id: str
    date: str
    recipe_id: str
    recipe_title: str | None = None


# =============================================================================
# Grocery Lists
# =============================================================================


class GenerateRequest(BaseModel):
    """Request to (re)generate a week's grocery list."""

    week_start: str | None = Field(None, description="YYYY-MM-DD, defaults to next Monday")
    use_ai: bool = False

    @field_validator("week_start")
    @classmethod
    def check_week_start(cls, value: str | None) -> str | None:
        return _validate_iso_date(value) if value is not None else None


class GenerateResponse(BaseModel):
    count: int
    week_start: str
    source: Literal["local", "ai", "fallback", "empty"]


class ManualItemRequest(BaseModel):
    text: str = Field(min_length=1, description="Free-form text, e.g. '2 cups milk'")


class GroceryItemResponse(BaseModel):
    """One entry on the grocery list."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: float | None = None
    unit: str | None = None
    display_text: str
    is_checked: bool
    is_generated: bool
    week_start: str | None = None


class ToggleResponse(BaseModel):
    id: int
    is_checked: bool


class CountResponse(BaseModel):
    count: int
