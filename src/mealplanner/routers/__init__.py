"""API routers for the meal planner application."""

from mealplanner.routers.grocery_lists import router as grocery_lists_router
from mealplanner.routers.ingredients import router as ingredients_router
from mealplanner.routers.meal_plans import router as meal_plans_router
from mealplanner.routers.recipes import router as recipes_router

__all__ = [
    "grocery_lists_router",
    "ingredients_router",
    "meal_plans_router",
    "recipes_router",
]
