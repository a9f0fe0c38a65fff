"""Generated recipe handlers: upsert with child replacement, list, get."""

import logging
from datetime import datetime
from typing import Any

from ..auth import RequestContext, require_user
from ..errors import NotFoundError, ValidationFailedError
from ..infra.store import DataStore
from ..models import (
    RecipeIdeaSession,
    GeneratedRecipe,
    GeneratedRecipeIngredient,
    GeneratedRecipeStep,
)
from ..schemas import (
    ActionResponse, IdOut, Page,
    GeneratedRecipeUpsert, GeneratedRecipeList, GeneratedRecipeGet,
    GeneratedRecipeOut, GeneratedRecipeDetailOut, IngredientOut, StepOut,
    IngredientIn, StepIn,
)

logger = logging.getLogger("recipe_ideas.recipes")

# Overwritten on every update, even when absent from the request
OVERWRITE_FIELDS = (
    "description",
    "cuisine",
    "meal_type",
    "tags",
    "servings",
    "prep_time_minutes",
    "cook_time_minutes",
    "notes",
)


def _ensure_session_owned(store: DataStore, session_id: str, user_id: str) -> None:
    if not store.select(RecipeIdeaSession, {"id": session_id, "user_id": user_id}, limit=1):
        logger.warning(f"Linked idea session {session_id} not found for user {user_id}")
        raise NotFoundError("Linked recipe idea session not found.")


def _ensure_recipe_owned(store: DataStore, recipe_id: str, user_id: str) -> dict[str, Any]:
    rows = store.select(GeneratedRecipe, {"id": recipe_id, "user_id": user_id}, limit=1)
    if not rows:
        logger.warning(f"Generated recipe {recipe_id} not found for user {user_id}")
        raise NotFoundError("Generated recipe not found.")
    return rows[0]


def _ensure_child_ids_free(store: DataStore, table: type, items: list, field: str) -> None:
    # Runs after this recipe's own rows are deleted, so any hit belongs elsewhere
    issues = [
        {"path": f"{field}.{index}.id", "message": "Id is already in use."}
        for index, item in enumerate(items)
        if item.id and store.select(table, {"id": item.id}, limit=1)
    ]
    if issues:
        logger.warning(f"Rejected {len(issues)} reused {field} id(s)")
        raise ValidationFailedError(issues)


def _ingredient_row(context: RequestContext, recipe_id: str, item: IngredientIn, now: datetime) -> dict[str, Any]:
    return {
        "id": item.id or context.new_id(),
        "recipe_id": recipe_id,
        "order_index": item.order_index,
        "name": item.name,
        "quantity": item.quantity,
        "notes": item.notes,
        "created_at": now,
    }


def _step_row(context: RequestContext, recipe_id: str, item: StepIn, now: datetime) -> dict[str, Any]:
    return {
        "id": item.id or context.new_id(),
        "recipe_id": recipe_id,
        "order_index": item.order_index,
        "instruction": item.instruction,
        "tip": item.tip,
        "created_at": now,
    }


def upsert_generated_recipe(
    store: DataStore,
    context: RequestContext,
    payload: GeneratedRecipeUpsert,
) -> ActionResponse[IdOut]:
    """Create (no id) or update (id, must exist) a recipe.

    If ingredients or steps are provided, they replace all existing rows of
    that kind; an empty list clears them.
    """
    user = require_user(context)
    now = context.now()

    if payload.session_id:
        _ensure_session_owned(store, payload.session_id, user.id)

    recipe_id = payload.id or context.new_id()

    with store.transaction():
        if payload.id:
            _ensure_recipe_owned(store, payload.id, user.id)

            update_data: dict[str, Any] = {"title": payload.title, "updated_at": now}
            for field in OVERWRITE_FIELDS:
                update_data[field] = getattr(payload, field)
            if payload.session_id is not None:
                update_data["session_id"] = payload.session_id
            if payload.is_favorite is not None:
                update_data["is_favorite"] = payload.is_favorite

            store.update(GeneratedRecipe, update_data, {"id": recipe_id, "user_id": user.id})
            logger.info(f"Updated generated recipe {recipe_id}")
        else:
            store.insert(GeneratedRecipe, [{
                "id": recipe_id,
                "session_id": payload.session_id,
                "user_id": user.id,
                "title": payload.title,
                **{field: getattr(payload, field) for field in OVERWRITE_FIELDS},
                "is_favorite": payload.is_favorite if payload.is_favorite is not None else False,
                "created_at": now,
                "updated_at": now,
            }])
            logger.info(f"Created generated recipe {recipe_id} for user {user.id}")

        if payload.ingredients is not None:
            store.delete(GeneratedRecipeIngredient, {"recipe_id": recipe_id})
            if payload.ingredients:
                _ensure_child_ids_free(store, GeneratedRecipeIngredient, payload.ingredients, "ingredients")
                store.insert(GeneratedRecipeIngredient, [
                    _ingredient_row(context, recipe_id, item, now) for item in payload.ingredients
                ])
            logger.info(f"Replaced ingredients of recipe {recipe_id} ({len(payload.ingredients)} rows)")

        if payload.steps is not None:
            store.delete(GeneratedRecipeStep, {"recipe_id": recipe_id})
            if payload.steps:
                _ensure_child_ids_free(store, GeneratedRecipeStep, payload.steps, "steps")
                store.insert(GeneratedRecipeStep, [
                    _step_row(context, recipe_id, item, now) for item in payload.steps
                ])
            logger.info(f"Replaced steps of recipe {recipe_id} ({len(payload.steps)} rows)")

    return ActionResponse[IdOut](data=IdOut(id=recipe_id))


def list_generated_recipes(
    store: DataStore,
    context: RequestContext,
    payload: GeneratedRecipeList,
) -> ActionResponse[Page[GeneratedRecipeOut]]:
    user = require_user(context)

    filters: dict[str, Any] = {"user_id": user.id}
    if payload.session_id:
        filters["session_id"] = payload.session_id
    if payload.favorites_only:
        filters["is_favorite"] = True

    rows = store.select(
        GeneratedRecipe,
        filters,
        order_by=["created_at"],
        limit=payload.page_size,
        offset=payload.offset,
    )
    items = [GeneratedRecipeOut.model_validate(row) for row in rows]

    return ActionResponse[Page[GeneratedRecipeOut]](
        data=Page[GeneratedRecipeOut](
            items=items,
            total=len(items),
            page=payload.page,
            page_size=payload.page_size,
        )
    )


def get_generated_recipe(
    store: DataStore,
    context: RequestContext,
    payload: GeneratedRecipeGet,
) -> ActionResponse[GeneratedRecipeDetailOut]:
    """Recipe with its ingredients and steps in display order."""
    user = require_user(context)
    recipe = _ensure_recipe_owned(store, payload.id, user.id)

    ingredients = store.select(
        GeneratedRecipeIngredient,
        {"recipe_id": payload.id},
        order_by=["order_index", "created_at"],
    )
    steps = store.select(
        GeneratedRecipeStep,
        {"recipe_id": payload.id},
        order_by=["order_index"],
    )

    detail = GeneratedRecipeDetailOut(
        **GeneratedRecipeOut.model_validate(recipe).model_dump(),
        ingredients=[IngredientOut.model_validate(row) for row in ingredients],
        steps=[StepOut.model_validate(row) for row in steps],
    )
    return ActionResponse[GeneratedRecipeDetailOut](data=detail)
