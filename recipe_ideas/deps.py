"""FastAPI dependencies for the recipe ideas API.

Provides:
- Data store dependency (wraps the request-scoped DB session)
- Request context resolution (request.state.user → trusted header → anonymous)
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from .auth import CurrentUser, RequestContext
from .db import get_db
from .infra.store import DataStore, SqlAlchemyStore
from .settings import settings


def get_store(db: Session = Depends(get_db)) -> DataStore:
    return SqlAlchemyStore(db)


def get_current_user_optional(
    request: Request,
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> Optional[CurrentUser]:
    """Resolve the signed-in user, or None.

    Resolution order:
    1. request.state.user, set by the upstream auth layer
    2. X-User-Id header, only when settings.trust_user_header is enabled
    """
    user = getattr(request.state, "user", None)
    if user is not None:
        if isinstance(user, CurrentUser):
            return user
        if isinstance(user, dict):
            return CurrentUser.model_validate(user)
        return CurrentUser.model_validate(user, from_attributes=True)

    if x_user_id and settings.trust_user_header:
        return CurrentUser(id=x_user_id)

    return None


def get_context(
    user: Optional[CurrentUser] = Depends(get_current_user_optional),
) -> RequestContext:
    # The handler decides whether a user is required
    return RequestContext(user=user)
