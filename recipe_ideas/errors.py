from __future__ import annotations

from typing import Any, Optional


class ActionError(Exception):
    """Typed, coded failure surfaced directly to the caller."""

    code: str = "INTERNAL_SERVER_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class UnauthorizedError(ActionError):
    code = "UNAUTHORIZED"
    status_code = 401

    def __init__(self, message: str = "You must be signed in to perform this action."):
        super().__init__(message)


class NotFoundError(ActionError):
    # Also raised for rows owned by another user, so existence never leaks
    code = "NOT_FOUND"
    status_code = 404


class ValidationFailedError(ActionError):
    code = "VALIDATION_FAILED"
    status_code = 422

    def __init__(self, issues: list[dict[str, str]], message: Optional[str] = None):
        super().__init__(message or "Input failed validation.")
        self.issues = issues

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["issues"] = self.issues
        return data

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "ValidationFailedError":
        """Build from pydantic / FastAPI error dicts (``loc``, ``msg``)."""
        issues = []
        for err in errors:
            loc = list(err.get("loc", ()))
            if loc and loc[0] == "body":
                loc = loc[1:]
            issues.append({
                "path": ".".join(str(part) for part in loc),
                "message": err.get("msg", "Invalid value"),
            })
        return cls(issues)
