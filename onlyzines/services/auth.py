"""Account signup/login and rotating refresh tokens."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from onlyzines.core.config import Settings, get_settings
from onlyzines.core.errors import ConflictError, UnauthorizedError
from onlyzines.core.security import (
    create_access_token,
    create_password_hash,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    refresh_token_expiry,
    verify_password,
)
from onlyzines.models.user import User
from onlyzines.repositories.user import RefreshTokenRepository, UserRepository
from onlyzines.schemas.auth import TokenPair

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class AuthService:
    """Issues access tokens and rotating refresh tokens for users."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._users = UserRepository()
        self._tokens = RefreshTokenRepository()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _issue_tokens(self, session: Session, user: User) -> TokenPair:
        record = self._tokens.create(
            session, user_id=user.id, expires_at=refresh_token_expiry(self.settings)
        )
        return TokenPair(
            access_token=create_access_token(
                user_id=user.id, email=user.email, settings=self.settings
            ),
            refresh_token=create_refresh_token(
                user_id=user.id, token_id=record.id, settings=self.settings
            ),
            expires_in=self.settings.access_token_expires_seconds,
        )

    def signup(
        self, session: Session, *, email: str, password: str, display_name: str | None = None
    ) -> tuple[User, TokenPair]:
        normalized_email = email.strip().lower()
        if self._users.get_by_email(session, normalized_email) is not None:
            raise ConflictError(
                "An account with this email already exists", code="EMAIL_EXISTS"
            )

        try:
            user = self._users.add(
                session,
                User(
                    email=normalized_email,
                    hashed_password=create_password_hash(password),
                    display_name=display_name,
                ),
            )
            tokens = self._issue_tokens(session, user)
            session.commit()
        except Exception:
            session.rollback()
            raise

        logger.info("Created user_id=%s", user.id)
        return user, tokens

    def login(self, session: Session, *, email: str, password: str) -> tuple[User, TokenPair]:
        user = self._users.get_by_email(session, email.strip().lower())
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid email or password", code="INVALID_CREDENTIALS")

        try:
            tokens = self._issue_tokens(session, user)
            session.commit()
        except Exception:
            session.rollback()
            raise
        return user, tokens

    def refresh(self, session: Session, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new pair, revoking the old one."""

        try:
            payload = decode_refresh_token(refresh_token, settings=self.settings)
            token_id = int(payload["tid"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedError(
                "Invalid or expired refresh token", code="INVALID_TOKEN"
            ) from exc

        record = self._tokens.get(session, token_id)
        now = datetime.now(timezone.utc)
        if record is None or record.revoked_at is not None or _as_utc(record.expires_at) < now:
            raise UnauthorizedError("Token has been revoked or expired", code="TOKEN_REVOKED")

        try:
            self._tokens.revoke(session, record)
            tokens = self._issue_tokens(session, record.user)
            session.commit()
        except Exception:
            session.rollback()
            raise
        return tokens

    def logout(self, session: Session, user: User) -> int:
        revoked = self._tokens.revoke_all_for_user(session, user.id)
        session.commit()
        logger.info("Revoked %d refresh tokens for user_id=%s", revoked, user.id)
        return revoked

    def authenticate(self, session: Session, access_token: str) -> User:
        """Resolve the user behind an access token."""

        try:
            payload = decode_access_token(access_token, settings=self.settings)
            user_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UnauthorizedError() from exc

        user = self._users.get(session, user_id)
        if user is None:
            raise UnauthorizedError()
        return user
