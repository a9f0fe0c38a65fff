"""SQLAlchemy ORM models for the recipe ideas service.

Tables:
- recipe_idea_sessions: A user's prompt/preference context for generating recipes
- generated_recipes: Recipes produced from a session (or standalone), user scoped
- generated_recipe_ingredients: Ingredient lines of a recipe
- generated_recipe_steps: Ordered instructions of a recipe
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Text,
    Integer,
    Boolean,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func, false

from .db import Base
from .utils import generate_uuid


class RecipeIdeaSession(Base):
    """Prompt context a user generates recipes from.

    Every row carries the owning user id; all queries filter on it.
    """
    __tablename__ = "recipe_idea_sessions"
    __table_args__ = (
        Index("ix_recipe_idea_sessions_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_uuid
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)

    title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # "High-protein breakfast ideas"
    prompt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cuisine_preference: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    dietary_preference: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # "vegan", "keto"
    serving_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class GeneratedRecipe(Base):
    """Recipe record, optionally traced back to an idea session."""
    __tablename__ = "generated_recipes"
    __table_args__ = (
        Index("ix_generated_recipes_user_id", "user_id"),
        Index("ix_generated_recipes_session_id", "session_id"),
    )

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_uuid
    )
    session_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("recipe_idea_sessions.id"), nullable=True
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)  # "Spicy Paneer Wrap"
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cuisine: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    meal_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # "breakfast", "lunch"
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    prep_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cook_time_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_favorite: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    ingredients: Mapped[list["GeneratedRecipeIngredient"]] = relationship(
        "GeneratedRecipeIngredient", back_populates="recipe",
        order_by="GeneratedRecipeIngredient.order_index"
    )
    steps: Mapped[list["GeneratedRecipeStep"]] = relationship(
        "GeneratedRecipeStep", back_populates="recipe",
        order_by="GeneratedRecipeStep.order_index"
    )


class GeneratedRecipeIngredient(Base):
    """Ingredient line; replaced as a whole set on recipe upsert."""
    __tablename__ = "generated_recipe_ingredients"
    __table_args__ = (
        Index("ix_generated_recipe_ingredients_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("generated_recipes.id"), nullable=False
    )

    order_index: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)  # "Onion", "Olive oil"
    quantity: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # free text: "1/2 cup"
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # "finely chopped"

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    recipe: Mapped["GeneratedRecipe"] = relationship("GeneratedRecipe", back_populates="ingredients")


class GeneratedRecipeStep(Base):
    """Ordered cooking step (order_index starts at 1)."""
    __tablename__ = "generated_recipe_steps"
    __table_args__ = (
        Index("ix_generated_recipe_steps_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("generated_recipes.id"), nullable=False
    )

    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    instruction: Mapped[str] = mapped_column(Text, nullable=False)
    tip: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    recipe: Mapped["GeneratedRecipe"] = relationship("GeneratedRecipe", back_populates="steps")
