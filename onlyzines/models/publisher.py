"""ORM model for publisher accounts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onlyzines.db.base import Base

if TYPE_CHECKING:
    from onlyzines.models.user import User
    from onlyzines.models.zine import Zine


class Publisher(Base):
    """The publishing identity of a user (one per user)."""

    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    handle: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="publisher")
    # Deleting a publisher deletes its zines (and through them every issue)
    zines: Mapped[list["Zine"]] = relationship(
        "Zine", back_populates="publisher", cascade="all, delete-orphan"
    )
