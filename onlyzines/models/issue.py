"""ORM model for zine issues."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onlyzines.db.base import Base

if TYPE_CHECKING:
    from onlyzines.models.page import Page
    from onlyzines.models.spread import Spread
    from onlyzines.models.zine import Zine


class ReadingDirection(str, enum.Enum):
    """Applied by the reader at render time; spreads ignore it."""

    LTR = "LTR"
    RTL = "RTL"


class Issue(Base):
    """One edition of a zine. ``published_at`` is null while drafting."""

    __tablename__ = "issues"
    __table_args__ = (
        UniqueConstraint("zine_id", "issue_number", name="uq_issues_zine_issue_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    zine_id: Mapped[int] = mapped_column(
        ForeignKey("zines.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    issue_number: Mapped[int] = mapped_column(nullable=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reading_direction: Mapped[ReadingDirection] = mapped_column(
        Enum(ReadingDirection, name="reading_direction", native_enum=False),
        nullable=False,
        default=ReadingDirection.LTR,
        server_default=ReadingDirection.LTR.value,
    )
    # Cached counters; rewritten whenever spreads are regenerated
    page_count: Mapped[int] = mapped_column(nullable=False, default=0, server_default="0")
    spread_count: Mapped[int] = mapped_column(nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    zine: Mapped["Zine"] = relationship("Zine", back_populates="issues")
    pages: Mapped[list["Page"]] = relationship(
        "Page",
        back_populates="issue",
        cascade="all, delete-orphan",
        order_by="Page.page_number",
    )
    spreads: Mapped[list["Spread"]] = relationship(
        "Spread",
        back_populates="issue",
        cascade="all, delete-orphan",
        order_by="Spread.spread_number",
    )
