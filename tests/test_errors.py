from __future__ import annotations

from onlyzines.core.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


def test_error_defaults() -> None:
    error = UnauthorizedError()

    assert error.status_code == 401
    assert error.to_dict() == {"code": "UNAUTHORIZED", "message": "Unauthorized"}


def test_not_found_names_the_resource() -> None:
    error = NotFoundError("Zine")

    assert error.status_code == 404
    assert error.message == "Zine not found"
    assert error.code == "NOT_FOUND"


def test_conflict_carries_custom_code() -> None:
    error = ConflictError("Already published", code="ALREADY_PUBLISHED")

    assert isinstance(error, AppError)
    assert error.status_code == 409
    assert error.to_dict() == {"code": "ALREADY_PUBLISHED", "message": "Already published"}


def test_details_are_included_when_present() -> None:
    error = ValidationError(details=[{"loc": ["pages"], "msg": "Field required"}])

    assert error.to_dict()["details"] == [{"loc": ["pages"], "msg": "Field required"}]
    assert error.status_code == 422


def test_internal_error_is_a_server_error() -> None:
    from onlyzines.core.errors import InternalError

    error = InternalError()

    assert error.status_code == 500
    assert error.to_dict() == {"code": "INTERNAL_ERROR", "message": "Internal server error"}
