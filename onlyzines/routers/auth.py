"""Authentication endpoints for the OnlyZines API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from onlyzines.db import get_db
from onlyzines.models.user import User
from onlyzines.routers.deps import get_current_user, get_optional_user
from onlyzines.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    RefreshResponse,
    SignupRequest,
    SuccessResponse,
    UserProfile,
    UserRead,
)
from onlyzines.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
_auth_service = AuthService()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Create an account and sign it in."""

    user, tokens = _auth_service.signup(
        db,
        email=payload.email,
        password=payload.password,
        display_name=payload.display_name,
    )
    return AuthResponse(user=UserRead.model_validate(user), tokens=tokens)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    """Authenticate with email and password."""

    user, tokens = _auth_service.login(db, email=payload.email, password=payload.password)
    return AuthResponse(user=UserRead.model_validate(user), tokens=tokens)


@router.post("/refresh", response_model=RefreshResponse)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)) -> RefreshResponse:
    """Rotate a refresh token: the presented token is revoked."""

    tokens = _auth_service.refresh(db, payload.refresh_token)
    return RefreshResponse(tokens=tokens)


@router.post("/logout", response_model=SuccessResponse)
def logout(
    user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    if user is not None:
        _auth_service.logout(db, user)
    return SuccessResponse()


@router.get("/me", response_model=MeResponse)
def read_me(user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserProfile.model_validate(user))
