"""SQLAlchemy database models."""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mealplanner.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Household(Base):
    """A household sharing one recipe box, calendar and grocery list."""

    __tablename__ = "households"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    recipes: Mapped[list["Recipe"]] = relationship("Recipe", back_populates="household")
    meal_plans: Mapped[list["MealPlan"]] = relationship("MealPlan", back_populates="household")
    grocery_items: Mapped[list["GroceryItem"]] = relationship(
        "GroceryItem", back_populates="household"
    )


class Recipe(Base):
    """Recipe with free-form ingredient lines."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    household_id: Mapped[str] = mapped_column(String, ForeignKey("households.id"))
    title: Mapped[str] = mapped_column(String, nullable=False)
    ingredients: Mapped[list] = mapped_column(JSON, default=list)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    prep_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scaled_servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    last_used: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    household: Mapped["Household"] = relationship("Household", back_populates="recipes")
    meal_plans: Mapped[list["MealPlan"]] = relationship("MealPlan", back_populates="recipe")

    __table_args__ = (
        Index("idx_recipes_household_id", "household_id"),
        Index("idx_recipes_household_last_used", "household_id", "last_used"),
    )


class MealPlan(Base):
    """A recipe assigned to one calendar date."""

    __tablename__ = "meal_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[str] = mapped_column(String, ForeignKey("households.id"))
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    recipe_id: Mapped[str] = mapped_column(String, ForeignKey("recipes.id"))

    household: Mapped["Household"] = relationship("Household", back_populates="meal_plans")
    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="meal_plans")

    __table_args__ = (
        UniqueConstraint("household_id", "date", name="uq_meal_plan_household_date"),
        Index("idx_meal_plans_household_date", "household_id", "date"),
    )


class GroceryItem(Base):
    """One entry on a household's grocery list."""

    __tablename__ = "grocery_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    household_id: Mapped[str] = mapped_column(String, ForeignKey("households.id"))
    name: Mapped[str] = mapped_column(String, nullable=False)
    quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    display_text: Mapped[str] = mapped_column(String, nullable=False)
    is_checked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    week_start: Mapped[str | None] = mapped_column(String(10), nullable=True)  # YYYY-MM-DD
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    household: Mapped["Household"] = relationship("Household", back_populates="grocery_items")

    __table_args__ = (
        Index("idx_grocery_items_household_id", "household_id"),
        Index("idx_grocery_items_household_generated", "household_id", "is_generated"),
    )
