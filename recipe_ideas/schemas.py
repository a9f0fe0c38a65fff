"""Pydantic schemas for the recipe ideas API.

Request/response models for:
- Recipe idea sessions
- Generated recipes (with nested ingredients and steps)
- The uniform success envelope

Wire names are camelCase (``servingCount``, ``pageSize``); Python attributes
stay snake_case and either form is accepted on input.
"""

from datetime import datetime
from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ActionInput(CamelModel):
    """Request payload. Optional fields may be omitted, never sent as null."""

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("null_not_allowed", "Field may be omitted but not null")
        return value


DataT = TypeVar("DataT")
ItemT = TypeVar("ItemT")


# --- Envelope ---

class ActionResponse(CamelModel, Generic[DataT]):
    success: Literal[True] = True
    data: DataT


class IdOut(CamelModel):
    id: str


class Page(CamelModel, Generic[ItemT]):
    items: list[ItemT]
    total: int  # items on this page, not a row count
    page: int
    page_size: int


class PageParams(ActionInput):
    page: StrictInt = Field(1, ge=1)
    page_size: StrictInt = Field(20, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


# --- Recipe Idea Session ---

class IdeaSessionFields(ActionInput):
    title: Optional[str] = None
    prompt: Optional[str] = None
    cuisine_preference: Optional[str] = None
    dietary_preference: Optional[str] = None
    serving_count: Optional[StrictInt] = Field(None, gt=0)


class IdeaSessionCreate(IdeaSessionFields):
    pass


class IdeaSessionUpdate(IdeaSessionFields):
    """Patch: only fields present in the request are written."""
    id: str


class IdeaSessionList(PageParams):
    pass


class IdeaSessionOut(CamelModel):
    id: str
    user_id: str
    title: Optional[str]
    prompt: Optional[str]
    cuisine_preference: Optional[str]
    dietary_preference: Optional[str]
    serving_count: Optional[int]
    created_at: datetime
    updated_at: datetime


# --- Ingredient / Step ---

class IngredientIn(ActionInput):
    id: Optional[str] = None
    order_index: Optional[StrictInt] = Field(None, ge=0)
    name: str = Field(..., min_length=1)
    quantity: Optional[str] = None
    notes: Optional[str] = None


class StepIn(ActionInput):
    id: Optional[str] = None
    order_index: StrictInt = Field(..., ge=1)
    instruction: str = Field(..., min_length=1)
    tip: Optional[str] = None


class IngredientOut(CamelModel):
    id: str
    recipe_id: str
    order_index: Optional[int]
    name: str
    quantity: Optional[str]
    notes: Optional[str]
    created_at: datetime


class StepOut(CamelModel):
    id: str
    recipe_id: str
    order_index: int
    instruction: str
    tip: Optional[str]
    created_at: datetime


# --- Generated Recipe ---

class GeneratedRecipeUpsert(ActionInput):
    id: Optional[str] = Field(None, min_length=1)  # absent -> create
    session_id: Optional[str] = Field(None, min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    cuisine: Optional[str] = None
    meal_type: Optional[str] = None
    tags: Optional[str] = None
    servings: Optional[StrictInt] = Field(None, gt=0)
    prep_time_minutes: Optional[StrictInt] = Field(None, ge=0)
    cook_time_minutes: Optional[StrictInt] = Field(None, ge=0)
    notes: Optional[str] = None
    is_favorite: Optional[StrictBool] = None
    ingredients: Optional[list[IngredientIn]] = None  # Replaces all ingredients if provided
    steps: Optional[list[StepIn]] = None  # Replaces all steps if provided

    @field_validator("ingredients", "steps")
    @classmethod
    def unique_child_ids(cls, items: Optional[list[Any]]) -> Optional[list[Any]]:
        seen: set[str] = set()
        for item in items or []:
            if not item.id:
                continue
            if item.id in seen:
                raise PydanticCustomError("duplicate_id", "Duplicate id {id}", {"id": item.id})
            seen.add(item.id)
        return items


class GeneratedRecipeList(PageParams):
    session_id: Optional[str] = None
    favorites_only: Optional[StrictBool] = None


class GeneratedRecipeGet(ActionInput):
    id: str


class GeneratedRecipeOut(CamelModel):
    id: str
    session_id: Optional[str]
    user_id: str
    title: str
    description: Optional[str]
    cuisine: Optional[str]
    meal_type: Optional[str]
    tags: Optional[str]
    servings: Optional[int]
    prep_time_minutes: Optional[int]
    cook_time_minutes: Optional[int]
    notes: Optional[str]
    is_favorite: bool
    created_at: datetime
    updated_at: datetime


class GeneratedRecipeDetailOut(GeneratedRecipeOut):
    ingredients: list[IngredientOut] = []
    steps: list[StepOut] = []
