"""SQLAlchemy model for posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lireddit.db.session import Base
from lireddit.db.time import utcnow

if TYPE_CHECKING:
    from .user import User


class Post(Base):
    """A titled text post owned by the user who created it."""

    __tablename__ = "post"
    __table_args__ = (
        # Feed pages walk this index backwards.
        Index("ix_post_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    # Sum of upvote.value for this post; only ever adjusted by a relative delta.
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id"),
        nullable=False,
    )
    creator: Mapped[User] = relationship("User", back_populates="posts")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
