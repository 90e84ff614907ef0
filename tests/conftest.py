"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mealplanner.database import Base
from mealplanner.models import Household, MealPlan, Recipe

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Ingredient Fixtures
# =============================================================================


@pytest.fixture
def pancake_ingredients():
    """Ingredient lines of a pancake recipe."""
    return [
        "1 1/2 cups flour",
        "2 tbsp sugar",
        "1 tsp salt",
        "2 eggs",
        "1 1/4 cups milk",
        "3 tablespoons butter",
    ]


@pytest.fixture
def chili_ingredients():
    """Ingredient lines of a chili recipe."""
    return [
        "1 lb ground beef",
        "2 cans kidney beans",
        "1 can tomatoes",
        "3 cloves garlic",
        "1 tsp salt",
        "pinch of salt",
        "2 onions",
    ]


# =============================================================================
# In-memory Database Fixtures
# =============================================================================

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def test_db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_db_engine):
    """Database session bound to the in-memory engine."""
    session_factory = async_sessionmaker(
        test_db_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def household(test_session):
    """A household with no recipes."""
    household = Household(id="household-1", name="Test Household")
    test_session.add(household)
    await test_session.commit()
    return household


@pytest_asyncio.fixture
async def planned_week(test_session, household, pancake_ingredients, chili_ingredients):
    """
    Two recipes planned in the week of 2026-10-19.

    A third meal on the following Monday must not be picked up.
    """
    pancakes = Recipe(
        id="recipe-pancakes",
        household_id=household.id,
        title="Pancakes",
        ingredients=pancake_ingredients,
        servings=4,
    )
    chili = Recipe(
        id="recipe-chili",
        household_id=household.id,
        title="Chili",
        ingredients=chili_ingredients,
        servings=6,
    )
    leftovers = Recipe(
        id="recipe-next-week",
        household_id=household.id,
        title="Next Week Soup",
        ingredients=["1 bunch celery"],
    )
    test_session.add_all([pancakes, chili, leftovers])
    test_session.add_all(
        [
            MealPlan(household_id=household.id, date="2026-10-19", recipe_id=pancakes.id),
            MealPlan(household_id=household.id, date="2026-10-25", recipe_id=chili.id),
            MealPlan(household_id=household.id, date="2026-10-26", recipe_id=leftovers.id),
        ]
    )
    await test_session.commit()
    return "2026-10-19"
