"""Database access helpers for zines."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from onlyzines.models.issue import Issue
from onlyzines.models.zine import Zine
from onlyzines.repositories.base import BaseRepository


class ZineRepository(BaseRepository[Zine]):
    """Repository for interacting with zine records."""

    def __init__(self) -> None:
        super().__init__(model=Zine)

    def get_by_publisher_and_slug(
        self, session: Session, *, publisher_id: int, slug: str
    ) -> Zine | None:
        """Find a zine by slug within one publisher's zines."""
        statement = select(Zine).where(Zine.publisher_id == publisher_id, Zine.slug == slug)
        return session.scalars(statement).first()

    def list_for_publisher(self, session: Session, publisher_id: int) -> list[Zine]:
        """List a publisher's zines, most recently updated first, issues eager-loaded."""
        statement = (
            select(Zine)
            .options(selectinload(Zine.issues))
            .where(Zine.publisher_id == publisher_id)
            .order_by(Zine.updated_at.desc(), Zine.id.desc())
        )
        return list(session.scalars(statement).all())

    def create(self, session: Session, *, data: dict[str, object]) -> Zine:
        return self.add(session, Zine(**data))

    def count_published_issues(self, session: Session, zine_id: int) -> int:
        statement = select(func.count(Issue.id)).where(
            Issue.zine_id == zine_id, Issue.published_at.is_not(None)
        )
        return int(session.scalar(statement) or 0)

    def refresh_issue_count(self, session: Session, zine: Zine) -> int:
        """Recompute the cached published-issue counter from the issues table."""

        session.flush()
        zine.issue_count = self.count_published_issues(session, zine.id)
        session.flush()
        return zine.issue_count
