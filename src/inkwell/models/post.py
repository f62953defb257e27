"""SQLAlchemy model for blog posts and their moderation status."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.models.like import PostLike
from inkwell.models.user import User

# Moderation status values.
POST_STATUS_PENDING = "pending"
POST_STATUS_PUBLISHED = "published"
POST_STATUS_REJECTED = "rejected"
POST_STATUS_HIDDEN = "hidden"
POST_STATUSES = (
    POST_STATUS_PENDING,
    POST_STATUS_PUBLISHED,
    POST_STATUS_REJECTED,
    POST_STATUS_HIDDEN,
)

TITLE_MAX_LENGTH = 200
CONTENT_MIN_LENGTH = 10


class Post(Base):
    """A blog post moving through the moderation lifecycle.

    Posts start ``pending``; an administrator publishes or rejects them, and
    published posts may later be hidden. Only published posts are public.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'published', 'rejected', 'hidden')",
            name="ck_post_status",
        ),
        CheckConstraint("comments_count >= 0", name="ck_post_comments_count"),
        Index("ix_post_status_published_at", "status", "published_at"),
        Index("ix_post_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=POST_STATUS_PENDING,
    )
    # Maintained by an external comments feature; never mutated here.
    comments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def likes_count(self) -> int:
        """Return the cardinality of the liker set."""
        return len(self.likes)

    def is_liked_by(self, user_id: int) -> bool:
        """Return True when `user_id` is in the liker set."""
        return any(like.user_id == user_id for like in self.likes)

    def is_visible_to(self, viewer: User | None) -> bool:
        """Return True if `viewer` may read this post individually."""
        if self.status == POST_STATUS_PUBLISHED:
            return True
        if viewer is None:
            return False
        return viewer.id == self.author_id or viewer.is_admin
