"""API routes for recipes and serving scaling."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mealplanner.config import get_settings
from mealplanner.database import get_db
from mealplanner.logging_config import get_logger
from mealplanner.models import Recipe, utc_now
from mealplanner.plan.servings import ServingScale
from mealplanner.routers.dependencies import get_or_create_household
from mealplanner.schemas import (
    RecipeCreateRequest,
    RecipeResponse,
    RecipeUpdateRequest,
    ScaledRecipeResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


async def get_recipe_or_404(db: AsyncSession, recipe_id: str) -> Recipe:
    recipe = await db.get(Recipe, recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found",
        )
    return recipe


@router.post("/", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: RecipeCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> Recipe:
    """Create a recipe, placed last in the household's sort order."""
    household_id = request.household_id or get_settings().default_household_id
    await get_or_create_household(db, household_id)

    result = await db.execute(
        select(func.max(Recipe.sort_order)).where(Recipe.household_id == household_id)
    )
    sort_order = (result.scalar() or 0) + 1

    recipe = Recipe(
        id=str(uuid.uuid4()),
        household_id=household_id,
        title=request.title,
        ingredients=request.ingredients,
        instructions=request.instructions,
        prep_time=request.prep_time,
        servings=request.servings,
        sort_order=sort_order,
        last_used=utc_now(),
    )
    db.add(recipe)
    await db.commit()
    await db.refresh(recipe)

    logger.info(f"Created recipe {recipe.id} ({recipe.title!r})")
    return recipe


@router.get("/", response_model=list[RecipeResponse])
async def list_recipes(
    household_id: Annotated[str | None, Query(description="Household to list recipes for")] = None,
    db: AsyncSession = Depends(get_db),
) -> list[Recipe]:
    """List a household's recipes, most recently used first."""
    household_id = household_id or get_settings().default_household_id
    result = await db.execute(
        select(Recipe)
        .where(Recipe.household_id == household_id)
        .order_by(Recipe.last_used.desc())
    )
    return list(result.scalars().all())


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    db: AsyncSession = Depends(get_db),
) -> Recipe:
    return await get_recipe_or_404(db, recipe_id)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str,
    request: RecipeUpdateRequest,
    db: AsyncSession = Depends(get_db),
) -> Recipe:
    """Update the given fields of a recipe."""
    recipe = await get_recipe_or_404(db, recipe_id)

    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(recipe, field, value)

    await db.commit()
    await db.refresh(recipe)
    return recipe


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str,
    db: AsyncSession = Depends(get_db),
) -> None:
    logger.info(f"Deleting recipe {recipe_id}")
    recipe = await get_recipe_or_404(db, recipe_id)
    await db.delete(recipe)
    await db.commit()


@router.get("/{recipe_id}/scaled", response_model=ScaledRecipeResponse)
async def get_scaled_recipe(
    recipe_id: str,
    servings: Annotated[int | None, Query(ge=1, le=99)] = None,
    db: AsyncSession = Depends(get_db),
) -> ScaledRecipeResponse:
    """
    Ingredient lines scaled to a serving count.

    Uses the requested servings, else the saved preference, else the
    recipe's own serving count.
    """
    recipe = await get_recipe_or_404(db, recipe_id)

    scale = ServingScale.for_recipe(recipe.servings, recipe.scaled_servings)
    if servings is not None:
        scale.set_servings(servings)

    return ScaledRecipeResponse(
        recipe_id=recipe.id,
        original_servings=recipe.servings,
        servings=scale.current_servings,
        scale_factor=scale.factor,
        ingredients=scale.scale(list(recipe.ingredients or [])),
    )
