"""Grocery list generation and serving scaling."""

from mealplanner.plan.ai_aggregator import AggregationServiceError, AIAggregationClient
from mealplanner.plan.grocery_list import (
    EmptyItemError,
    GroceryItemNotFoundError,
    GroceryListService,
    next_week_start,
)
from mealplanner.plan.servings import ServingScale, scale_factor, scale_ingredients

__all__ = [
    "AIAggregationClient",
    "AggregationServiceError",
    "EmptyItemError",
    "GroceryItemNotFoundError",
    "GroceryListService",
    "ServingScale",
    "next_week_start",
    "scale_factor",
    "scale_ingredients",
]
