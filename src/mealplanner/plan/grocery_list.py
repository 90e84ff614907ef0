"""Grocery list generation from meal plans and manual item management."""

from collections.abc import Sequence
from datetime import date, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealplanner.logging_config import LoggingContext, get_logger
from mealplanner.models import GroceryItem, MealPlan
from mealplanner.normalize.aggregate import (
    AggregatedItem,
    aggregate_ingredients,
    capitalize_first,
    format_display_text,
    round_up_to_quarter,
)
from mealplanner.normalize.ingredients import parse_ingredient_line
from mealplanner.plan.ai_aggregator import AggregationServiceError, AIAggregationClient

logger = get_logger(__name__)

WEEK_LENGTH_DAYS = 7


class GroceryListError(Exception):
    """Base exception for grocery list operations."""


class GroceryItemNotFoundError(GroceryListError):
    """Raised when a grocery item id does not exist."""

    def __init__(self, item_id: int):
        super().__init__(f"Grocery item {item_id} not found")
        self.item_id = item_id


class EmptyItemError(GroceryListError):
    """Raised when manual item text has no ingredient name."""


def week_range(week_start: str) -> tuple[str, str]:
    """Return the inclusive (start, end) ISO dates of the week beginning at week_start."""
    start = date.fromisoformat(week_start)
    end = start + timedelta(days=WEEK_LENGTH_DAYS - 1)
    return start.isoformat(), end.isoformat()


def next_week_start(today: date | None = None) -> str:
    """Monday of the week after today, as YYYY-MM-DD."""
    today = today or date.today()
    this_monday = today - timedelta(days=today.weekday())
    return (this_monday + timedelta(days=WEEK_LENGTH_DAYS)).isoformat()


def merge_manual_quantity(existing: float | None, added: float | None) -> float | None:
    """
    Combine quantities when a manual item is added again.

    A side without a quantity counts as nothing when it is the existing
    entry and as one when it is the new entry. Two quantity-less entries
    stay quantity-less.
    """
    if existing is None and added is None:
        return None
    total = (existing or 0) + (added if added is not None else 1)
    return round_up_to_quarter(total)


def sort_grocery_items(items: Sequence[GroceryItem]) -> list[GroceryItem]:
    """Generated items first, then manual items, each alphabetical."""
    return sorted(items, key=lambda i: (not i.is_generated, i.name.casefold(), i.unit or ""))


class GroceryListService:
    """
    Builds and edits a household's grocery list.

    Generated items are replaced wholesale each time a week is generated.
    Manual items survive regeneration and merge with later manual entries
    that share their name and unit.
    """

    def __init__(self, db: AsyncSession, ai_client: AIAggregationClient | None = None):
        self.db = db
        self.ai_client = ai_client

    async def collect_week_ingredients(self, household_id: str, week_start: str) -> list[str]:
        """Collect every ingredient line of the recipes planned in the week."""
        start, end = week_range(week_start)

        result = await self.db.execute(
            select(MealPlan)
            .where(
                MealPlan.household_id == household_id,
                MealPlan.date >= start,
                MealPlan.date <= end,
            )
            .options(selectinload(MealPlan.recipe))
            .order_by(MealPlan.date)
        )
        meal_plans = result.scalars().all()

        lines: list[str] = []
        for mp in meal_plans:
            if mp.recipe and mp.recipe.ingredients:
                lines.extend(str(line) for line in mp.recipe.ingredients)

        logger.debug(f"Collected {len(lines)} lines from {len(meal_plans)} planned meals")
        return lines

    async def _delete_generated(self, household_id: str) -> int:
        result = await self.db.execute(
            delete(GroceryItem).where(
                GroceryItem.household_id == household_id,
                GroceryItem.is_generated.is_(True),
            )
        )
        return result.rowcount or 0

    async def save_generated_items(
        self,
        household_id: str,
        week_start: str,
        items: Sequence[AggregatedItem],
    ) -> int:
        """Replace the household's generated items with the given aggregated items."""
        removed = await self._delete_generated(household_id)

        for item in items:
            self.db.add(
                GroceryItem(
                    household_id=household_id,
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    display_text=format_display_text(item),
                    is_checked=False,
                    is_generated=True,
                    week_start=week_start,
                )
            )

        await self.db.commit()
        logger.info(f"Replaced {removed} generated items with {len(items)} new ones")
        return len(items)

    async def generate(self, household_id: str, week_start: str) -> int:
        """Generate the week's list with the deterministic aggregator."""
        with LoggingContext(household_id=household_id, week_start=week_start):
            lines = await self.collect_week_ingredients(household_id, week_start)
            aggregated = aggregate_ingredients(lines)
            return await self.save_generated_items(household_id, week_start, aggregated)

    async def generate_with_ai(self, household_id: str, week_start: str) -> tuple[int, str]:
        """
        Generate the week's list through the AI aggregator.

        Falls back to the deterministic aggregator over the same lines when
        the AI service is missing, fails or times out.

        Returns:
            Tuple of (item count, "ai", "fallback" or "empty").
        """
        with LoggingContext(household_id=household_id, week_start=week_start):
            lines = await self.collect_week_ingredients(household_id, week_start)

            if not lines:
                count = await self.save_generated_items(household_id, week_start, [])
                return count, "empty"

            source = "ai"
            try:
                if self.ai_client is None:
                    raise AggregationServiceError("No AI aggregation client")
                aggregated = await self.ai_client.aggregate(lines)
            except AggregationServiceError as e:
                logger.warning(f"AI aggregation unavailable: {e}, falling back to local aggregation")
                aggregated = aggregate_ingredients(lines)
                source = "fallback"

            count = await self.save_generated_items(household_id, week_start, aggregated)
            return count, source

    async def add_manual_item(self, household_id: str, text: str) -> GroceryItem:
        """
        Add a manual item, merging with a manual item of the same name and unit.

        A merge sums the quantities and unchecks the existing item.
        """
        parsed = parse_ingredient_line(text)
        if not parsed.name:
            raise EmptyItemError(f"No ingredient name in {text!r}")

        name = capitalize_first(parsed.name)

        result = await self.db.execute(
            select(GroceryItem).where(
                GroceryItem.household_id == household_id,
                GroceryItem.is_generated.is_(False),
            )
        )
        match = next(
            (
                item
                for item in result.scalars().all()
                if item.name.lower() == name.lower() and (item.unit or None) == parsed.unit
            ),
            None,
        )

        if match:
            match.quantity = merge_manual_quantity(match.quantity, parsed.quantity)
            match.display_text = format_display_text(
                AggregatedItem(name=name, quantity=match.quantity, unit=parsed.unit)
            )
            match.is_checked = False
            await self.db.commit()
            logger.info(f"Merged manual item into {match.display_text!r}")
            return match

        new_item = AggregatedItem(name=name, quantity=parsed.quantity, unit=parsed.unit)
        grocery_item = GroceryItem(
            household_id=household_id,
            name=name,
            quantity=parsed.quantity,
            unit=parsed.unit,
            display_text=format_display_text(new_item),
            is_checked=False,
            is_generated=False,
        )
        self.db.add(grocery_item)
        await self.db.commit()
        await self.db.refresh(grocery_item)
        logger.info(f"Added manual item {grocery_item.display_text!r}")
        return grocery_item

    async def _get_item(self, item_id: int, household_id: str | None = None) -> GroceryItem:
        item = await self.db.get(GroceryItem, item_id)
        if item is None or (household_id is not None and item.household_id != household_id):
            raise GroceryItemNotFoundError(item_id)
        return item

    async def toggle_item(self, item_id: int, household_id: str | None = None) -> bool:
        """Flip an item's checked state and return the new state."""
        item = await self._get_item(item_id, household_id)
        new_state = not item.is_checked
        item.is_checked = new_state
        await self.db.commit()
        return new_state

    async def delete_item(self, item_id: int, household_id: str | None = None) -> None:
        item = await self._get_item(item_id, household_id)
        await self.db.delete(item)
        await self.db.commit()

    async def list_items(self, household_id: str) -> list[GroceryItem]:
        result = await self.db.execute(
            select(GroceryItem).where(GroceryItem.household_id == household_id)
        )
        return sort_grocery_items(result.scalars().all())

    async def uncheck_all(self, household_id: str) -> int:
        """Uncheck every item of the household, returning how many items it has."""
        items = await self.list_items(household_id)
        for item in items:
            item.is_checked = False
        await self.db.commit()
        return len(items)

    async def clear_generated(self, household_id: str) -> int:
        """Remove all generated items, keeping manual ones."""
        removed = await self._delete_generated(household_id)
        await self.db.commit()
        return removed
