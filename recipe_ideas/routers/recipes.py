"""Generated recipe actions.

Endpoints:
- POST /api/actions/upsertGeneratedRecipe - Create or update a recipe with ingredients/steps
- POST /api/actions/listGeneratedRecipes - List recipes (session / favorites filters)
- POST /api/actions/getGeneratedRecipe - Get a recipe with ingredients and steps
"""

from fastapi import APIRouter, Depends

from ..auth import RequestContext
from ..deps import get_context, get_store
from ..infra.store import DataStore
from ..schemas import (
    ActionResponse, IdOut, Page,
    GeneratedRecipeUpsert, GeneratedRecipeList, GeneratedRecipeGet,
    GeneratedRecipeOut, GeneratedRecipeDetailOut,
)
from ..services import generated_recipes

router = APIRouter(prefix="/actions")


@router.post("/upsertGeneratedRecipe", response_model=ActionResponse[IdOut])
def upsert_generated_recipe(
    payload: GeneratedRecipeUpsert,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    return generated_recipes.upsert_generated_recipe(store, context, payload)


@router.post("/listGeneratedRecipes", response_model=ActionResponse[Page[GeneratedRecipeOut]])
def list_generated_recipes(
    payload: GeneratedRecipeList,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    return generated_recipes.list_generated_recipes(store, context, payload)


@router.post("/getGeneratedRecipe", response_model=ActionResponse[GeneratedRecipeDetailOut])
def get_generated_recipe(
    payload: GeneratedRecipeGet,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    return generated_recipes.get_generated_recipe(store, context, payload)
