"""Publisher-facing endpoints: account, zines and issue lifecycle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from onlyzines.db import get_db
from onlyzines.models.publisher import Publisher
from onlyzines.models.user import User
from onlyzines.repositories.publisher import PublisherRepository
from onlyzines.repositories.zine import ZineRepository
from onlyzines.routers.deps import get_current_publisher, get_current_user
from onlyzines.schemas.auth import SuccessResponse
from onlyzines.schemas.issue import (
    DraftItem,
    DraftListResponse,
    IssueCreate,
    IssueCreatedResponse,
    IssueDetail,
    IssueEditorResponse,
    IssuePublishedSummary,
    IssuePublishResponse,
    IssueRead,
    IssueSaveRequest,
    IssueSaveResponse,
    IssueUnpublishResponse,
)
from onlyzines.schemas.publisher import (
    PublisherAccountResponse,
    PublisherCreate,
    PublisherCreatedResponse,
    PublisherRead,
    PublisherWithZines,
)
from onlyzines.schemas.zine import (
    ZineCreate,
    ZineCreatedResponse,
    ZineIssueItem,
    ZineListResponse,
    ZineRead,
    ZineRef,
    ZineSummary,
    ZineWithIssues,
)
from onlyzines.services.builder_state import to_builder_state
from onlyzines.services.issues import IssueLifecycleService
from onlyzines.services.publishing import create_publisher_account, create_zine

router = APIRouter(prefix="/publisher", tags=["Publisher"])
_publisher_repository = PublisherRepository()
_zine_repository = ZineRepository()
_issue_service = IssueLifecycleService()


# =============================================================================
# Publisher account
# =============================================================================


@router.get("/account", response_model=PublisherAccountResponse)
def read_account(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PublisherAccountResponse:
    """Return the caller's publisher account (or null) with its zines."""

    publisher = _publisher_repository.get_with_zines(db, user.id)
    if publisher is None:
        return PublisherAccountResponse(publisher=None)

    zines = sorted(publisher.zines, key=lambda zine: zine.updated_at, reverse=True)
    account = PublisherWithZines(
        **PublisherRead.model_validate(publisher).model_dump(),
        zines=[ZineSummary.model_validate(zine) for zine in zines],
    )
    return PublisherAccountResponse(publisher=account)


@router.post(
    "/account", response_model=PublisherCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_account(
    payload: PublisherCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PublisherCreatedResponse:
    publisher = create_publisher_account(
        db, user, handle=payload.handle, display_name=payload.display_name
    )
    return PublisherCreatedResponse(publisher=PublisherRead.model_validate(publisher))


# =============================================================================
# Zines
# =============================================================================


@router.get("/zines", response_model=ZineListResponse)
def list_zines(
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> ZineListResponse:
    zines = _zine_repository.list_for_publisher(db, publisher.id)
    items = []
    for zine in zines:
        issues = sorted(zine.issues, key=lambda issue: issue.issue_number, reverse=True)
        items.append(
            ZineWithIssues(
                **ZineRead.model_validate(zine).model_dump(),
                issues=[ZineIssueItem.model_validate(issue) for issue in issues],
            )
        )
    return ZineListResponse(zines=items)


@router.post("/zines", response_model=ZineCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_zine_endpoint(
    payload: ZineCreate,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> ZineCreatedResponse:
    zine = create_zine(
        db,
        publisher,
        title=payload.title,
        slug=payload.slug,
        description=payload.description,
        visibility=payload.visibility,
        password=payload.password,
    )
    return ZineCreatedResponse(zine=ZineRead.model_validate(zine))


# =============================================================================
# Issues
# =============================================================================


@router.get("/drafts", response_model=DraftListResponse)
def list_drafts(
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> DraftListResponse:
    drafts = _issue_service.list_drafts(db, publisher)
    return DraftListResponse(drafts=[DraftItem.model_validate(issue) for issue in drafts])


@router.post(
    "/zines/{zine_id}/issues",
    response_model=IssueCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_issue(
    zine_id: int,
    payload: IssueCreate,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> IssueCreatedResponse:
    issue = _issue_service.create_issue(
        db, publisher, zine_id, title=payload.title, issue_number=payload.issue_number
    )
    return IssueCreatedResponse(issue=IssueRead.model_validate(issue))


@router.get("/issues/{issue_id}", response_model=IssueEditorResponse)
def read_issue(
    issue_id: int,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> IssueEditorResponse:
    """Load an issue for the editor as builder state."""

    issue = _issue_service.load_issue(db, publisher, issue_id)
    return IssueEditorResponse(
        issue=IssueDetail.model_validate(issue),
        zine=ZineRef.model_validate(issue.zine),
        builder_state=to_builder_state(issue.title, issue.pages, placeholder_page=True),
    )


@router.put("/issues/{issue_id}/save", response_model=IssueSaveResponse)
def save_issue(
    issue_id: int,
    payload: IssueSaveRequest,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> IssueSaveResponse:
    """Replace the issue's pages with the submitted builder state."""

    summary = _issue_service.save_issue(db, publisher, issue_id, payload.builder_state)
    return IssueSaveResponse(issue=summary)


@router.delete("/issues/{issue_id}", response_model=SuccessResponse)
def delete_issue(
    issue_id: int,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    _issue_service.delete_issue(db, publisher, issue_id)
    return SuccessResponse()


@router.post("/issues/{issue_id}/publish", response_model=IssuePublishResponse)
def publish_issue(
    issue_id: int,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> IssuePublishResponse:
    result = _issue_service.publish_issue(db, publisher, issue_id)
    return IssuePublishResponse(
        issue=IssuePublishedSummary.model_validate(result.issue),
        url=result.url,
    )


@router.post("/issues/{issue_id}/unpublish", response_model=IssueUnpublishResponse)
def unpublish_issue(
    issue_id: int,
    publisher: Publisher = Depends(get_current_publisher),
    db: Session = Depends(get_db),
) -> IssueUnpublishResponse:
    issue = _issue_service.unpublish_issue(db, publisher, issue_id)
    return IssueUnpublishResponse(issue=IssueRead.model_validate(issue))
