"""API routes for the household grocery list."""

from fastapi import APIRouter, Depends, HTTPException, status

from mealplanner.logging_config import get_logger
from mealplanner.models import GroceryItem
from mealplanner.plan.grocery_list import (
    EmptyItemError,
    GroceryItemNotFoundError,
    GroceryListService,
    next_week_start,
)
from mealplanner.routers.dependencies import get_grocery_service, get_or_create_household
from mealplanner.schemas import (
    CountResponse,
    GenerateRequest,
    GenerateResponse,
    GroceryItemResponse,
    ManualItemRequest,
    ToggleResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery-lists", tags=["grocery-lists"])


@router.get("/{household_id}", response_model=list[GroceryItemResponse])
async def list_items(
    household_id: str,
    service: GroceryListService = Depends(get_grocery_service),
) -> list[GroceryItem]:
    """List items: generated first, then manual, each alphabetical."""
    return await service.list_items(household_id)


@router.post("/{household_id}/generate", response_model=GenerateResponse)
async def generate(
    household_id: str,
    request: GenerateRequest,
    service: GroceryListService = Depends(get_grocery_service),
) -> GenerateResponse:
    """
    Regenerate the generated part of the list from a week's meal plan.

    Manual items are kept. With use_ai the AI aggregator is tried first and
    the local aggregator is used if it is unavailable.
    """
    week_start = request.week_start or next_week_start()
    await get_or_create_household(service.db, household_id)

    if request.use_ai:
        count, source = await service.generate_with_ai(household_id, week_start)
    else:
        count = await service.generate(household_id, week_start)
        source = "local"

    logger.info(f"Generated {count} items for {household_id} week {week_start} ({source})")
    return GenerateResponse(count=count, week_start=week_start, source=source)


@router.post(
    "/{household_id}/items",
    response_model=GroceryItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_manual_item(
    household_id: str,
    request: ManualItemRequest,
    service: GroceryListService = Depends(get_grocery_service),
) -> GroceryItem:
    """Add a manual item, merging with an existing manual item of the same name and unit."""
    await get_or_create_household(service.db, household_id)
    try:
        return await service.add_manual_item(household_id, request.text)
    except EmptyItemError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.post("/{household_id}/items/{item_id}/toggle", response_model=ToggleResponse)
async def toggle_item(
    household_id: str,
    item_id: int,
    service: GroceryListService = Depends(get_grocery_service),
) -> ToggleResponse:
    try:
        is_checked = await service.toggle_item(item_id, household_id)
    except GroceryItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return ToggleResponse(id=item_id, is_checked=is_checked)


@router.delete("/{household_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    household_id: str,
    item_id: int,
    service: GroceryListService = Depends(get_grocery_service),
) -> None:
    try:
        await service.delete_item(item_id, household_id)
    except GroceryItemNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/{household_id}/uncheck-all", response_model=CountResponse)
async def uncheck_all(
    household_id: str,
    service: GroceryListService = Depends(get_grocery_service),
) -> CountResponse:
    """Uncheck every item, e.g. at the start of a shopping trip."""
    return CountResponse(count=await service.uncheck_all(household_id))


@router.delete("/{household_id}/generated", response_model=CountResponse)
async def clear_generated(
    household_id: str,
    service: GroceryListService = Depends(get_grocery_service),
) -> CountResponse:
    """Remove generated items, keeping manual ones."""
    return CountResponse(count=await service.clear_generated(household_id))
