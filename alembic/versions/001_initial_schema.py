"""Initial schema with recipe_idea_sessions, generated_recipes, ingredients, steps

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Idea sessions table
    op.create_table(
        "recipe_idea_sessions",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("user_id", sa.String, nullable=False),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("prompt", sa.Text, nullable=True),
        sa.Column("cuisine_preference", sa.Text, nullable=True),
        sa.Column("dietary_preference", sa.Text, nullable=True),
        sa.Column("serving_count", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_recipe_idea_sessions_user_id", "recipe_idea_sessions", ["user_id"])

    # Generated recipes table
    op.create_table(
        "generated_recipes",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("session_id", sa.String, sa.ForeignKey("recipe_idea_sessions.id"), nullable=True),
        sa.Column("user_id", sa.String, nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("cuisine", sa.Text, nullable=True),
        sa.Column("meal_type", sa.Text, nullable=True),
        sa.Column("tags", sa.Text, nullable=True),
        sa.Column("servings", sa.Integer, nullable=True),
        sa.Column("prep_time_minutes", sa.Integer, nullable=True),
        sa.Column("cook_time_minutes", sa.Integer, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("is_favorite", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_generated_recipes_user_id", "generated_recipes", ["user_id"])
    op.create_index("ix_generated_recipes_session_id", "generated_recipes", ["session_id"])

    # Ingredients table
    op.create_table(
        "generated_recipe_ingredients",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("recipe_id", sa.String, sa.ForeignKey("generated_recipes.id"), nullable=False),
        sa.Column("order_index", sa.Integer, nullable=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("quantity", sa.Text, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_generated_recipe_ingredients_recipe_id", "generated_recipe_ingredients", ["recipe_id"])

    # Steps table
    op.create_table(
        "generated_recipe_steps",
        sa.Column("id", sa.String, primary_key=True),
        sa.Column("recipe_id", sa.String, sa.ForeignKey("generated_recipes.id"), nullable=False),
        sa.Column("order_index", sa.Integer, nullable=False),
        sa.Column("instruction", sa.Text, nullable=False),
        sa.Column("tip", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_generated_recipe_steps_recipe_id", "generated_recipe_steps", ["recipe_id"])


def downgrade() -> None:
    op.drop_table("generated_recipe_steps")
    op.drop_table("generated_recipe_ingredients")
    op.drop_table("generated_recipes")
    op.drop_table("recipe_idea_sessions")
