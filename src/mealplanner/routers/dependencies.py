"""Shared FastAPI dependencies and helpers."""

from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mealplanner.config import get_settings
from mealplanner.database import get_db
from mealplanner.models import Household
from mealplanner.plan.ai_aggregator import AIAggregationClient
from mealplanner.plan.grocery_list import GroceryListService


async def get_or_create_household(db: AsyncSession, household_id: str) -> Household:
    """Get existing household or create a placeholder."""
    result = await db.execute(select(Household).where(Household.id == household_id))
    household = result.scalar_one_or_none()

    if not household:
        household = Household(id=household_id, name=household_id)
        db.add(household)
        await db.flush()

    return household


async def get_ai_client() -> AsyncIterator[AIAggregationClient | None]:
    """AI aggregation client closed after the request, or None when no endpoint is configured."""
    if not get_settings().ai_aggregation_enabled:
        yield None
        return
    async with AIAggregationClient() as client:
        yield client


async def get_grocery_service(
    db: AsyncSession = Depends(get_db),
    ai_client: AIAggregationClient | None = Depends(get_ai_client),
) -> GroceryListService:
    return GroceryListService(db, ai_client)
