"""ORM model for derived reader spreads."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onlyzines.db.base import Base

if TYPE_CHECKING:
    from onlyzines.models.issue import Issue


class Spread(Base):
    """A left/right page pairing, always rebuilt from the page order.

    The page references are plain foreign keys without ORM relationships:
    removing a spread never touches pages, and removing a page only nulls
    the reference.
    """

    __tablename__ = "spreads"
    __table_args__ = (
        UniqueConstraint("issue_id", "spread_number", name="uq_spreads_issue_spread_number"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_id: Mapped[int] = mapped_column(
        ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    spread_number: Mapped[int] = mapped_column(nullable=False)
    left_page_id: Mapped[int | None] = mapped_column(
        ForeignKey("pages.id", ondelete="SET NULL"), nullable=True
    )
    right_page_id: Mapped[int | None] = mapped_column(
        ForeignKey("pages.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    issue: Mapped["Issue"] = relationship("Issue", back_populates="spreads")
