"""Database access helpers for publisher entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from onlyzines.models.publisher import Publisher
from onlyzines.repositories.base import BaseRepository


class PublisherRepository(BaseRepository[Publisher]):
    """Repository for interacting with publisher records."""

    def __init__(self) -> None:
        super().__init__(model=Publisher)

    def get_by_user_id(self, session: Session, user_id: int) -> Publisher | None:
        statement = select(Publisher).where(Publisher.user_id == user_id)
        return session.scalars(statement).first()

    def get_by_handle(self, session: Session, handle: str) -> Publisher | None:
        """Fetch a publisher by its (lowercase) handle."""
        statement = select(Publisher).where(Publisher.handle == handle)
        result = session.execute(statement)
        return result.scalars().first()

    def get_with_zines(self, session: Session, user_id: int) -> Publisher | None:
        """Fetch a user's publisher with zines eager-loaded to avoid N+1 queries."""
        statement = (
            select(Publisher)
            .options(selectinload(Publisher.zines))
            .where(Publisher.user_id == user_id)
        )
        return session.scalars(statement).first()

    def create(self, session: Session, *, data: dict[str, object]) -> Publisher:
        return self.add(session, Publisher(**data))
