"""Recipe idea session handlers.

Every handler takes the data store, the request context and a validated
payload, and returns a success envelope or raises an ``ActionError``.
"""

import logging

from ..auth import RequestContext, require_user
from ..errors import NotFoundError
from ..infra.store import DataStore
from ..models import RecipeIdeaSession
from ..schemas import (
    ActionResponse, IdOut, Page,
    IdeaSessionCreate, IdeaSessionUpdate, IdeaSessionList, IdeaSessionOut,
)

logger = logging.getLogger("recipe_ideas.sessions")


def create_idea_session(
    store: DataStore,
    context: RequestContext,
    payload: IdeaSessionCreate,
) -> ActionResponse[IdOut]:
    user = require_user(context)
    now = context.now()
    session_id = context.new_id()

    store.insert(RecipeIdeaSession, [{
        "id": session_id,
        "user_id": user.id,
        "title": payload.title,
        "prompt": payload.prompt,
        "cuisine_preference": payload.cuisine_preference,
        "dietary_preference": payload.dietary_preference,
        "serving_count": payload.serving_count,
        "created_at": now,
        "updated_at": now,
    }])
    logger.info(f"Created idea session {session_id} for user {user.id}")

    return ActionResponse[IdOut](data=IdOut(id=session_id))


def update_idea_session(
    store: DataStore,
    context: RequestContext,
    payload: IdeaSessionUpdate,
) -> ActionResponse[IdOut]:
    """Partial update: fields absent from the request are left untouched."""
    user = require_user(context)
    owned = {"id": payload.id, "user_id": user.id}

    if not store.select(RecipeIdeaSession, owned, limit=1):
        logger.warning(f"Idea session {payload.id} not found for user {user.id}")
        raise NotFoundError("Recipe idea session not found.")

    update_data = payload.model_dump(exclude_unset=True, exclude={"id"})
    update_data["updated_at"] = context.now()

    store.update(RecipeIdeaSession, update_data, owned)
    logger.info(f"Updated idea session {payload.id}: {sorted(update_data)}")

    return ActionResponse[IdOut](data=IdOut(id=payload.id))


def list_idea_sessions(
    store: DataStore,
    context: RequestContext,
    payload: IdeaSessionList,
) -> ActionResponse[Page[IdeaSessionOut]]:
    user = require_user(context)

    rows = store.select(
        RecipeIdeaSession,
        {"user_id": user.id},
        order_by=["created_at"],
        limit=payload.page_size,
        offset=payload.offset,
    )
    items = [IdeaSessionOut.model_validate(row) for row in rows]

    return ActionResponse[Page[IdeaSessionOut]](
        data=Page[IdeaSessionOut](
            items=items,
            total=len(items),
            page=payload.page,
            page_size=payload.page_size,
        )
    )
