"""ORM model for zines (publication series)."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onlyzines.db.base import Base

if TYPE_CHECKING:
    from onlyzines.models.issue import Issue
    from onlyzines.models.publisher import Publisher


class ZineVisibility(str, enum.Enum):
    """Who can discover and read a zine."""

    PUBLIC = "PUBLIC"
    UNLISTED = "UNLISTED"
    PASSWORD = "PASSWORD"


class ZineAccessType(str, enum.Enum):
    OPEN = "OPEN"
    PASSWORD = "PASSWORD"


class Zine(Base):
    """A zine owned by a publisher; its slug is unique per publisher."""

    __tablename__ = "zines"
    __table_args__ = (
        UniqueConstraint("publisher_id", "slug", name="uq_zines_publisher_slug"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    publisher_id: Mapped[int] = mapped_column(
        ForeignKey("publishers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    visibility: Mapped[ZineVisibility] = mapped_column(
        Enum(ZineVisibility, name="zine_visibility", native_enum=False),
        nullable=False,
        default=ZineVisibility.UNLISTED,
        server_default=ZineVisibility.UNLISTED.value,
    )
    access_type: Mapped[ZineAccessType] = mapped_column(
        Enum(ZineAccessType, name="zine_access_type", native_enum=False),
        nullable=False,
        default=ZineAccessType.OPEN,
        server_default=ZineAccessType.OPEN.value,
    )
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Cached count of published issues; recomputed on publish/unpublish
    issue_count: Mapped[int] = mapped_column(nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    publisher: Mapped["Publisher"] = relationship("Publisher", back_populates="zines")
    issues: Mapped[list["Issue"]] = relationship(
        "Issue",
        back_populates="zine",
        cascade="all, delete-orphan",
        order_by="Issue.issue_number",
    )
