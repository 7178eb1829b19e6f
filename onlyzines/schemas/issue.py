"""Pydantic schemas for issues and their lifecycle operations."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from onlyzines.schemas.base import CamelModel
from onlyzines.schemas.builder import BuilderState
from onlyzines.schemas.zine import ZineRef


class IssueCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    issue_number: int | None = Field(default=None, gt=0)


class IssueRead(CamelModel):
    id: int
    zine_id: int
    title: str
    issue_number: int
    published_at: datetime | None = None
    page_count: int
    spread_count: int
    created_at: datetime
    updated_at: datetime


class IssueCreatedResponse(CamelModel):
    issue: IssueRead


class IssueSaveRequest(CamelModel):
    builder_state: BuilderState


class IssueSaveSummary(CamelModel):
    """Counters returned after a save."""

    id: int
    title: str
    page_count: int
    spread_count: int
    updated_at: datetime


class IssueSaveResponse(CamelModel):
    issue: IssueSaveSummary


class IssuePublishedSummary(CamelModel):
    id: int
    title: str
    issue_number: int
    published_at: datetime | None = None
    page_count: int
    spread_count: int


class IssuePublishResponse(CamelModel):
    issue: IssuePublishedSummary
    url: str


class IssueUnpublishResponse(CamelModel):
    issue: IssueRead
    message: str = "Issue unpublished"


class IssueDetail(CamelModel):
    id: int
    title: str
    issue_number: int
    published_at: datetime | None = None
    page_count: int
    created_at: datetime
    updated_at: datetime


class IssueEditorResponse(CamelModel):
    issue: IssueDetail
    zine: ZineRef
    builder_state: dict[str, Any]


class DraftItem(IssueRead):
    zine: ZineRef


class DraftListResponse(CamelModel):
    drafts: list[DraftItem]


class SpreadRead(CamelModel):
    spread_number: int
    left_page_id: int | None = None
    right_page_id: int | None = None


class PublicPublisherRef(CamelModel):
    handle: str
    display_name: str


class PublicZineRef(CamelModel):
    title: str
    slug: str


class PublicIssueResponse(CamelModel):
    issue: IssuePublishedSummary
    zine: PublicZineRef
    publisher: PublicPublisherRef
    spreads: list[SpreadRead]
    builder_state: dict[str, Any]
