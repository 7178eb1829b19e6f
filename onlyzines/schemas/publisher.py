"""Pydantic schemas for publisher accounts."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from onlyzines.schemas.base import CamelModel
from onlyzines.schemas.zine import ZineSummary


class PublisherCreate(CamelModel):
    handle: str = Field(..., min_length=3, max_length=30, pattern=r"^[A-Za-z0-9_-]+$")
    display_name: str = Field(..., min_length=1, max_length=100)


class PublisherRead(CamelModel):
    id: int
    handle: str
    display_name: str
    created_at: datetime
    updated_at: datetime


class PublisherWithZines(PublisherRead):
    zines: list[ZineSummary] = Field(default_factory=list)


class PublisherAccountResponse(CamelModel):
    publisher: PublisherWithZines | None


class PublisherCreatedResponse(CamelModel):
    publisher: PublisherRead
