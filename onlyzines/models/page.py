"""ORM models for pages and the blocks placed on them."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import DateTime, Float, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onlyzines.db.base import Base, JSONType

if TYPE_CHECKING:
    from onlyzines.models.issue import Issue


class Page(Base):
    """A fixed-size canvas within an issue, ordered by ``page_number`` (1-based)."""

    __tablename__ = "pages"
    __table_args__ = (
        UniqueConstraint("issue_id", "page_number", name="uq_pages_issue_page_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_id: Mapped[int] = mapped_column(
        ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    page_number: Mapped[int] = mapped_column(nullable=False)
    canvas_width: Mapped[int] = mapped_column(nullable=False, default=900)
    canvas_height: Mapped[int] = mapped_column(nullable=False, default=1200)
    background_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    # ``metadata`` is reserved on declarative classes, hence the attribute name
    page_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSONType, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    issue: Mapped["Issue"] = relationship("Issue", back_populates="pages")
    blocks: Mapped[list["Block"]] = relationship(
        "Block",
        back_populates="page",
        cascade="all, delete-orphan",
        order_by=lambda: [Block.z_index, Block.id],  # ties keep submission order
    )


class Block(Base):
    """A positioned element on a page; geometry is percent of the canvas."""

    __tablename__ = "blocks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    page_id: Mapped[int] = mapped_column(
        ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    block_type: Mapped[str] = mapped_column(String(64), nullable=False)
    position_x: Mapped[float] = mapped_column(Float, nullable=False)
    position_y: Mapped[float] = mapped_column(Float, nullable=False)
    width: Mapped[float] = mapped_column(Float, nullable=False)
    height: Mapped[float] = mapped_column(Float, nullable=False)
    rotation: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    z_index: Mapped[int] = mapped_column(nullable=False, default=0)
    data: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    page: Mapped[Page] = relationship("Page", back_populates="blocks")
