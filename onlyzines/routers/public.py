"""Unauthenticated reader endpoint for published issues."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from onlyzines.core.errors import BadRequestError, NotFoundError
from onlyzines.db import get_db
from onlyzines.repositories.issue import IssueRepository
from onlyzines.repositories.publisher import PublisherRepository
from onlyzines.repositories.zine import ZineRepository
from onlyzines.schemas.issue import (
    IssuePublishedSummary,
    PublicIssueResponse,
    PublicPublisherRef,
    PublicZineRef,
    SpreadRead,
)
from onlyzines.services.builder_state import to_builder_state

router = APIRouter(prefix="/public", tags=["Public"])
_publisher_repository = PublisherRepository()
_zine_repository = ZineRepository()
_issue_repository = IssueRepository()


@router.get("/{handle}/{slug}/{issue_number}", response_model=PublicIssueResponse)
def read_published_issue(
    handle: str,
    slug: str,
    issue_number: str,
    db: Session = Depends(get_db),
) -> PublicIssueResponse:
    """Return a published issue with its spreads and builder state."""

    try:
        number = int(issue_number)
    except ValueError as exc:
        raise BadRequestError(
            "Issue number must be a number", code="INVALID_ISSUE_NUMBER"
        ) from exc

    publisher = _publisher_repository.get_by_handle(db, handle.lower())
    if publisher is None:
        raise NotFoundError("Publisher")
    zine = _zine_repository.get_by_publisher_and_slug(
        db, publisher_id=publisher.id, slug=slug.lower()
    )
    if zine is None:
        raise NotFoundError("Zine")
    issue = _issue_repository.get_published(db, zine_id=zine.id, issue_number=number)
    if issue is None:
        raise NotFoundError("Published issue")

    return PublicIssueResponse(
        issue=IssuePublishedSummary.model_validate(issue),
        zine=PublicZineRef.model_validate(zine),
        publisher=PublicPublisherRef.model_validate(publisher),
        spreads=[SpreadRead.model_validate(spread) for spread in issue.spreads],
        builder_state=to_builder_state(issue.title, issue.pages),
    )
