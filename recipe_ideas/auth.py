"""Identity gate.

The signed-in user is provided by an upstream auth layer on
``request.state.user``; handlers only ever see it through ``RequestContext``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from .errors import UnauthorizedError
from .utils import generate_uuid, utcnow


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None


@dataclass
class RequestContext:
    """Per-request collaborators handed to every handler."""
    user: Optional[CurrentUser] = None
    new_id: Callable[[], str] = generate_uuid
    now: Callable[[], datetime] = field(default=utcnow)


def require_user(context: RequestContext) -> CurrentUser:
    """Return the authenticated user or fail closed with UNAUTHORIZED."""
    user = context.user
    if user is None:
        raise UnauthorizedError()
    return user
