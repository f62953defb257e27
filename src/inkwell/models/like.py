"""Model capturing which users liked which posts."""

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from inkwell.db.session import Base


class PostLike(Base):
    """Membership row of a post's liker set."""

    __tablename__ = "post_like"
    __table_args__ = (Index("ix_post_like_user_id", "user_id"),)

    # Composite primary key keeps each user in the set at most once.
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
