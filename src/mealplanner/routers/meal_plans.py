"""API routes for assigning recipes to calendar dates."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealplanner.database import get_db
from mealplanner.logging_config import get_logger
from mealplanner.models import MealPlan, utc_now
from mealplanner.routers.dependencies import get_or_create_household
from mealplanner.routers.recipes import get_recipe_or_404
from mealplanner.schemas import MealPlanResponse, MealSetRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])


def to_response(mp: MealPlan, recipe_title: str | None = None) -> MealPlanResponse:
    if recipe_title is None and mp.recipe:
        recipe_title = mp.recipe.title
    return MealPlanResponse(
        id=mp.id,
        household_id=mp.household_id,
        date=mp.date,
        recipe_id=mp.recipe_id,
        recipe_title=recipe_title,
    )


async def find_meal(db: AsyncSession, household_id: str, day: str) -> MealPlan | None:
    result = await db.execute(
        select(MealPlan)
        .where(MealPlan.household_id == household_id, MealPlan.date == day)
        .options(selectinload(MealPlan.recipe))
    )
    return result.scalar_one_or_none()


@router.put("/{household_id}/{day}", response_model=MealPlanResponse)
async def set_meal(
    household_id: str,
    day: date,
    request: MealSetRequest,
    db: AsyncSession = Depends(get_db),
) -> MealPlanResponse:
    """
    Set the meal for a date.

    Replaces the recipe if the date already has one, and marks the recipe
    as just used.
    """
    await get_or_create_household(db, household_id)
    recipe = await get_recipe_or_404(db, request.recipe_id)
    if recipe.household_id != household_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe.id} not found",
        )

    day_str = day.isoformat()
    meal = await find_meal(db, household_id, day_str)

    if meal:
        meal.recipe_id = recipe.id
    else:
        meal = MealPlan(household_id=household_id, date=day_str, recipe_id=recipe.id)
        db.add(meal)

    recipe.last_used = utc_now()
    await db.commit()

    logger.info(f"Planned {recipe.title!r} for {day_str}")
    return to_response(meal, recipe.title)


@router.delete("/{household_id}/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_meal(
    household_id: str,
    day: date,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Remove the meal for a date, if any."""
    meal = await find_meal(db, household_id, day.isoformat())
    if meal:
        await db.delete(meal)
        await db.commit()


@router.get("/{household_id}", response_model=list[MealPlanResponse])
async def list_meals(
    household_id: str,
    start: Annotated[date, Query(description="First date, inclusive")],
    end: Annotated[date, Query(description="Last date, inclusive")],
    db: AsyncSession = Depends(get_db),
) -> list[MealPlanResponse]:
    """List planned meals in a date range with their recipe titles."""
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end must not be before start",
        )

    result = await db.execute(
        select(MealPlan)
        .where(
            MealPlan.household_id == household_id,
            MealPlan.date >= start.isoformat(),
            MealPlan.date <= end.isoformat(),
        )
        .options(selectinload(MealPlan.recipe))
        .order_by(MealPlan.date)
    )
    return [to_response(mp) for mp in result.scalars().all()]
