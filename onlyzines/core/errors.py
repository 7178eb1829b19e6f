"""Application error hierarchy.

Every error carries an HTTP status, a stable machine-readable ``code`` and a
human-readable ``message``. Services raise these; ``onlyzines.main`` renders
them as ``{"error": {"code": ..., "message": ...}}``.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class BadRequestError(AppError):
    status_code = 400
    default_code = "BAD_REQUEST"
    default_message = "Bad request"


class UnauthorizedError(AppError):
    status_code = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    """Raised when a referenced resource does not exist."""

    status_code = 404
    default_code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", *, code: str | None = None) -> None:
        super().__init__(f"{resource} not found", code=code)
        self.resource = resource


class ConflictError(AppError):
    """Duplicate unique key or invalid lifecycle transition."""

    status_code = 409
    default_code = "CONFLICT"
    default_message = "Conflict"


class ValidationError(AppError):
    status_code = 422
    default_code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class InternalError(AppError):
    pass
