"""Recipe idea session actions.

Endpoints:
- POST /api/actions/createRecipeIdeaSession
- POST /api/actions/updateRecipeIdeaSession
- POST /api/actions/listRecipeIdeaSessions
"""

from fastapi import APIRouter, Depends

from ..auth import RequestContext
from ..deps import get_context, get_store
from ..infra.store import DataStore
from ..schemas import (
    ActionResponse, IdOut, Page,
    IdeaSessionCreate, IdeaSessionUpdate, IdeaSessionList, IdeaSessionOut,
)
from ..services import idea_sessions

router = APIRouter(prefix="/actions")


@router.post("/createRecipeIdeaSession", response_model=ActionResponse[IdOut])
def create_recipe_idea_session(
    payload: IdeaSessionCreate,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    """Create a new idea session for the signed-in user."""
    return idea_sessions.create_idea_session(store, context, payload)


@router.post("/updateRecipeIdeaSession", response_model=ActionResponse[IdOut])
def update_recipe_idea_session(
    payload: IdeaSessionUpdate,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    """Update only the fields present in the request."""
    return idea_sessions.update_idea_session(store, context, payload)


@router.post("/listRecipeIdeaSessions", response_model=ActionResponse[Page[IdeaSessionOut]])
def list_recipe_idea_sessions(
    payload: IdeaSessionList,
    store: DataStore = Depends(get_store),
    context: RequestContext = Depends(get_context),
):
    """List the user's sessions, oldest first."""
    return idea_sessions.list_idea_sessions(store, context, payload)
