"""Request dependencies resolving the authenticated caller."""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from onlyzines.core.errors import UnauthorizedError
from onlyzines.db import get_db
from onlyzines.models.publisher import Publisher
from onlyzines.models.user import User
from onlyzines.services.auth import AuthService
from onlyzines.services.ownership import require_publisher

_bearer_scheme = HTTPBearer(auto_error=False)
_auth_service = AuthService()


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Require a valid bearer access token."""

    if credentials is None:
        raise UnauthorizedError()
    return _auth_service.authenticate(db, credentials.credentials)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    if credentials is None:
        return None
    try:
        return _auth_service.authenticate(db, credentials.credentials)
    except UnauthorizedError:
        return None


def get_current_publisher(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Publisher:
    return require_publisher(db, user)
