"""Repository utilities for user and refresh token persistence."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from onlyzines.models.user import RefreshToken, User
from onlyzines.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data-access helper for user accounts."""

    def __init__(self) -> None:
        super().__init__(model=User)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a user matching the supplied email if it exists."""

        statement = select(self.model).where(self.model.email == email)
        result = session.execute(statement)
        return result.scalars().one_or_none()


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    def __init__(self) -> None:
        super().__init__(model=RefreshToken)

    def create(self, session: Session, *, user_id: int, expires_at: datetime) -> RefreshToken:
        return self.add(session, RefreshToken(user_id=user_id, expires_at=expires_at))

    def revoke(self, session: Session, token: RefreshToken) -> RefreshToken:
        token.revoked_at = datetime.now(timezone.utc)
        session.flush()
        return token

    def revoke_all_for_user(self, session: Session, user_id: int) -> int:
        """Revoke every live refresh token of a user; return how many."""

        statement = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=datetime.now(timezone.utc))
        )
        result = session.execute(statement)
        return result.rowcount or 0
