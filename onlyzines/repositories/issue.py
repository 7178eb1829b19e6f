"""Database access helpers for issues, pages and spreads."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from onlyzines.models.issue import Issue
from onlyzines.models.page import Block, Page
from onlyzines.models.spread import Spread
from onlyzines.models.zine import Zine
from onlyzines.repositories.base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """Repository for interacting with issue records."""

    def __init__(self) -> None:
        super().__init__(model=Issue)

    def get_with_owner(self, session: Session, issue_id: int) -> Issue | None:
        """Fetch an issue together with its zine and publisher."""
        statement = (
            select(Issue)
            .options(joinedload(Issue.zine).joinedload(Zine.publisher))
            .where(Issue.id == issue_id)
        )
        return session.scalars(statement).first()

    def get_with_pages(self, session: Session, issue_id: int) -> Issue | None:
        """Fetch an issue with pages and blocks eager-loaded, in document order."""
        statement = (
            select(Issue)
            .options(
                joinedload(Issue.zine),
                selectinload(Issue.pages).selectinload(Page.blocks),
            )
            .where(Issue.id == issue_id)
        )
        return session.scalars(statement).first()

    def get_published(
        self, session: Session, *, zine_id: int, issue_number: int
    ) -> Issue | None:
        """Fetch a published issue with pages, blocks and spreads for the reader."""
        statement = (
            select(Issue)
            .options(
                selectinload(Issue.pages).selectinload(Page.blocks),
                selectinload(Issue.spreads),
            )
            .where(
                Issue.zine_id == zine_id,
                Issue.issue_number == issue_number,
                Issue.published_at.is_not(None),
            )
        )
        return session.scalars(statement).first()

    def next_issue_number(self, session: Session, zine_id: int) -> int:
        statement = select(func.max(Issue.issue_number)).where(Issue.zine_id == zine_id)
        return int(session.scalar(statement) or 0) + 1

    def get_by_number(self, session: Session, *, zine_id: int, issue_number: int) -> Issue | None:
        statement = select(Issue).where(
            Issue.zine_id == zine_id, Issue.issue_number == issue_number
        )
        return session.scalars(statement).first()

    def list_drafts(self, session: Session, publisher_id: int) -> list[Issue]:
        """List unpublished issues across a publisher's zines, newest edits first."""
        statement = (
            select(Issue)
            .join(Issue.zine)
            .options(joinedload(Issue.zine))
            .where(Zine.publisher_id == publisher_id, Issue.published_at.is_(None))
            .order_by(Issue.updated_at.desc(), Issue.id.desc())
        )
        return list(session.scalars(statement).all())

    def list_ids(self, session: Session) -> list[int]:
        return list(session.scalars(select(Issue.id).order_by(Issue.id)).all())

    def create(self, session: Session, *, data: dict[str, object]) -> Issue:
        return self.add(session, Issue(**data))


class PageRepository(BaseRepository[Page]):
    """Repository for the pages (and blocks) of an issue."""

    def __init__(self) -> None:
        super().__init__(model=Page)

    def list_ids_for_issue(self, session: Session, issue_id: int) -> list[int]:
        """Return page ids of an issue ordered by ascending page number."""
        statement = (
            select(Page.id).where(Page.issue_id == issue_id).order_by(Page.page_number)
        )
        return list(session.scalars(statement).all())

    def count_for_issue(self, session: Session, issue_id: int) -> int:
        statement = select(func.count(Page.id)).where(Page.issue_id == issue_id)
        return int(session.scalar(statement) or 0)

    def delete_for_issue(self, session: Session, issue_id: int) -> int:
        """Delete every page of an issue along with its blocks; return the page count."""

        page_ids = select(Page.id).where(Page.issue_id == issue_id)
        session.execute(
            delete(Block).where(Block.page_id.in_(page_ids)),
            execution_options={"synchronize_session": "fetch"},
        )
        result = session.execute(
            delete(Page).where(Page.issue_id == issue_id),
            execution_options={"synchronize_session": "fetch"},
        )
        return result.rowcount or 0

    def add_page(self, session: Session, page: Page) -> Page:
        session.add(page)
        session.flush()
        return page

    def add_blocks(self, session: Session, blocks: Iterable[Block]) -> None:
        session.add_all(list(blocks))
        session.flush()


class SpreadRepository(BaseRepository[Spread]):
    """Repository for derived spreads."""

    def __init__(self) -> None:
        super().__init__(model=Spread)

    def list_for_issue(self, session: Session, issue_id: int) -> list[Spread]:
        statement = (
            select(Spread).where(Spread.issue_id == issue_id).order_by(Spread.spread_number)
        )
        return list(session.scalars(statement).all())

    def delete_for_issue(self, session: Session, issue_id: int) -> int:
        result = session.execute(
            delete(Spread).where(Spread.issue_id == issue_id),
            execution_options={"synchronize_session": "fetch"},
        )
        return result.rowcount or 0

    def add_many(self, session: Session, spreads: Iterable[Spread]) -> None:
        session.add_all(list(spreads))
        session.flush()
