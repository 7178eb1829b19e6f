"""Issue lifecycle: save, publish, unpublish and delete.

Every mutating operation runs in a single transaction on the session it is
given. Pages and blocks are replaced wholesale on save, spreads are rebuilt
from the new page order, and cached counters are recomputed (never
incremented) after the triggering change has been flushed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pydantic
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from onlyzines.core.errors import ConflictError, NotFoundError, ValidationError
from onlyzines.models.issue import Issue
from onlyzines.models.page import Block, Page
from onlyzines.models.publisher import Publisher
from onlyzines.monitoring.middleware import record_spread_regeneration
from onlyzines.repositories.issue import IssueRepository, PageRepository
from onlyzines.repositories.zine import ZineRepository
from onlyzines.schemas.builder import BuilderState
from onlyzines.schemas.issue import IssueSaveSummary
from onlyzines.services.builder_state import PageRecord, from_builder_state
from onlyzines.services.ownership import require_issue_ownership, require_zine_ownership
from onlyzines.services.spreads import regenerate_spreads

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishResult:
    issue: Issue
    url: str


def public_issue_path(handle: str, slug: str, issue_number: int) -> str:
    """Reader-facing path of a published issue."""
    return f"/{handle}/{slug}/{issue_number}"


@contextmanager
def atomic(session: Session) -> Iterator[None]:
    """Commit on success, roll everything back on any failure."""

    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise


def coerce_builder_state(builder_state: BuilderState | Mapping[str, Any]) -> BuilderState:
    if isinstance(builder_state, BuilderState):
        return builder_state
    try:
        return BuilderState.model_validate(builder_state)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            "Builder state is malformed",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


class IssueLifecycleService:
    """Orchestrates the draft/published lifecycle of issues."""

    def __init__(
        self,
        *,
        issue_repository: IssueRepository | None = None,
        page_repository: PageRepository | None = None,
        zine_repository: ZineRepository | None = None,
    ) -> None:
        self._issues = issue_repository or IssueRepository()
        self._pages = page_repository or PageRepository()
        self._zines = zine_repository or ZineRepository()

    def create_issue(
        self,
        session: Session,
        publisher: Publisher,
        zine_id: int,
        *,
        title: str,
        issue_number: int | None = None,
    ) -> Issue:
        """Create a draft issue, numbering it after the zine's last issue by default."""

        zine = require_zine_ownership(session, publisher, zine_id)
        number = issue_number or self._issues.next_issue_number(session, zine.id)
        conflict = ConflictError(f"Issue #{number} already exists", code="ISSUE_NUMBER_EXISTS")

        if self._issues.get_by_number(session, zine_id=zine.id, issue_number=number) is not None:
            raise conflict

        try:
            with atomic(session):
                issue = self._issues.create(
                    session,
                    data={"zine_id": zine.id, "title": title, "issue_number": number},
                )
        except IntegrityError as exc:
            raise conflict from exc

        logger.info("Created issue_id=%s (#%d) in zine_id=%s", issue.id, number, zine.id)
        return issue

    def load_issue(self, session: Session, publisher: Publisher, issue_id: int) -> Issue:
        """Return an owned issue with its pages and blocks loaded in document order."""

        require_issue_ownership(session, publisher, issue_id)
        issue = self._issues.get_with_pages(session, issue_id)
        if issue is None:
            raise NotFoundError("Issue")
        return issue

    def list_drafts(self, session: Session, publisher: Publisher) -> list[Issue]:
        return self._issues.list_drafts(session, publisher.id)

    def save_issue(
        self,
        session: Session,
        publisher: Publisher,
        issue_id: int,
        builder_state: BuilderState | Mapping[str, Any],
    ) -> IssueSaveSummary:
        """Replace an issue's pages and blocks with the submitted document."""

        issue = require_issue_ownership(session, publisher, issue_id)
        state = coerce_builder_state(builder_state)
        records = from_builder_state(state)

        with atomic(session):
            issue.title = state.project.name
            issue.updated_at = func.now()
            self._pages.delete_for_issue(session, issue.id)
            session.expire(issue, ["pages"])
            for record in records:
                self._write_page(session, issue, record)
            layout = regenerate_spreads(session, issue)
        record_spread_regeneration(layout.page_count, layout.spread_count)

        logger.info(
            "Saved issue_id=%s: pages=%d spreads=%d",
            issue_id,
            layout.page_count,
            layout.spread_count,
        )
        return IssueSaveSummary(
            id=issue.id,
            title=issue.title,
            page_count=issue.page_count,
            spread_count=issue.spread_count,
            updated_at=issue.updated_at,
        )

    def _write_page(self, session: Session, issue: Issue, record: PageRecord) -> Page:
        page = self._pages.add_page(
            session,
            Page(
                issue_id=issue.id,
                page_number=record.page_number,
                canvas_width=record.canvas_width,
                canvas_height=record.canvas_height,
                background_color=record.background_color,
                page_metadata=record.metadata,
            ),
        )
        if record.blocks:
            self._pages.add_blocks(
                session,
                (
                    Block(
                        page_id=page.id,
                        block_type=block.block_type,
                        position_x=block.position_x,
                        position_y=block.position_y,
                        width=block.width,
                        height=block.height,
                        rotation=block.rotation,
                        z_index=block.z_index,
                        data=block.data,
                    )
                    for block in record.blocks
                ),
            )
        return page

    def publish_issue(self, session: Session, publisher: Publisher, issue_id: int) -> PublishResult:
        """Publish a draft issue and return its public URL path."""

        issue = require_issue_ownership(session, publisher, issue_id)
        if issue.published_at is not None:
            raise ConflictError("This issue is already published", code="ALREADY_PUBLISHED")
        if self._pages.count_for_issue(session, issue.id) == 0:
            raise ConflictError("Cannot publish an issue with no pages", code="NO_PAGES")

        with atomic(session):
            layout = regenerate_spreads(session, issue)
            issue.published_at = datetime.now(timezone.utc)
            issue_count = self._zines.refresh_issue_count(session, issue.zine)
        record_spread_regeneration(layout.page_count, layout.spread_count)

        zine = issue.zine
        url = public_issue_path(zine.publisher.handle, zine.slug, issue.issue_number)
        logger.info(
            "Published issue_id=%s at %s (zine_id=%s issue_count=%d)",
            issue_id,
            url,
            zine.id,
            issue_count,
        )
        return PublishResult(issue=issue, url=url)

    def unpublish_issue(self, session: Session, publisher: Publisher, issue_id: int) -> Issue:
        """Return a published issue to draft."""

        issue = require_issue_ownership(session, publisher, issue_id)
        if issue.published_at is None:
            raise ConflictError("This issue is not published", code="NOT_PUBLISHED")

        with atomic(session):
            issue.published_at = None
            issue_count = self._zines.refresh_issue_count(session, issue.zine)

        logger.info(
            "Unpublished issue_id=%s (zine_id=%s issue_count=%d)",
            issue_id,
            issue.zine_id,
            issue_count,
        )
        return issue

    def delete_issue(self, session: Session, publisher: Publisher, issue_id: int) -> None:
        """Delete a draft issue with its pages, blocks and spreads."""

        issue = require_issue_ownership(session, publisher, issue_id)
        if issue.published_at is not None:
            raise ConflictError("Cannot delete a published issue", code="ALREADY_PUBLISHED")

        with atomic(session):
            self._issues.delete(session, issue)

        logger.info("Deleted issue_id=%s", issue_id)
