"""Pydantic schemas for zines."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from onlyzines.models.zine import ZineAccessType, ZineVisibility
from onlyzines.schemas.base import CamelModel


class ZineCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str | None = Field(
        default=None, min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_-]+$"
    )
    description: str | None = Field(default=None, max_length=2000)
    visibility: ZineVisibility = ZineVisibility.UNLISTED
    password: str | None = Field(default=None, min_length=4)


class ZineSummary(CamelModel):
    id: int
    slug: str
    title: str
    cover_image_url: str | None = None
    visibility: ZineVisibility
    issue_count: int
    updated_at: datetime


class ZineRead(ZineSummary):
    publisher_id: int
    description: str | None = None
    access_type: ZineAccessType
    created_at: datetime


class ZineRef(CamelModel):
    id: int
    slug: str
    title: str


class ZineIssueItem(CamelModel):
    id: int
    title: str
    issue_number: int
    published_at: datetime | None = None
    page_count: int
    updated_at: datetime


class ZineWithIssues(ZineRead):
    issues: list[ZineIssueItem] = Field(default_factory=list)


class ZineListResponse(CamelModel):
    zines: list[ZineWithIssues]


class ZineCreatedResponse(CamelModel):
    zine: ZineRead
