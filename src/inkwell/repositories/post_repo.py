"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.db.time import utcnow
from inkwell.models.like import PostLike
from inkwell.models.post import POST_STATUS_PENDING, POST_STATUS_PUBLISHED, POST_STATUSES, Post

__all__ = [
    "MAX_SQL_INTEGER",
    "PostRepository",
    "SORT_LATEST",
    "SORT_OLDEST",
    "SORT_POPULAR",
    "SORT_MODES",
]

SORT_LATEST = "latest"
SORT_OLDEST = "oldest"
SORT_POPULAR = "popular"
SORT_MODES = (SORT_LATEST, SORT_OLDEST, SORT_POPULAR)

# Largest value a signed 64-bit INTEGER column or LIMIT/OFFSET can bind.
MAX_SQL_INTEGER = 2**63 - 1

logger = logging.getLogger(__name__)


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier, or None if no row can carry that id."""
        if not 1 <= post_id <= MAX_SQL_INTEGER:
            return None
        return self.session.get(Post, post_id)

    def create(self, *, title: str, content: str, author_id: int) -> Post:
        """Insert a new pending post and return the persisted ORM instance."""
        post = Post(
            title=title,
            content=content,
            author_id=author_id,
            status=POST_STATUS_PENDING,
            comments_count=0,
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def transition(self, post: Post, from_status: str, **values: Any) -> bool:
        """Move `post` out of `from_status`, applying `values` atomically.

        The UPDATE only matches while the stored status still equals
        `from_status`, so two racing transitions cannot both succeed.

        Returns:
            True if the row was updated, False if its status had changed.
        """
        values.setdefault("updated_at", utcnow())
        result = self.session.execute(
            update(Post)
            .where(Post.id == post.id, Post.status == from_status)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.refresh(post)
            return False
        self.session.commit()
        self.session.refresh(post)
        return True

    def delete(self, post: Post) -> None:
        """Permanently remove a post and its liker set."""
        self.session.delete(post)
        self.session.commit()

    def count(self, status: str | None = None) -> int:
        """Count posts, optionally restricted to one status."""
        stmt = select(func.count()).select_from(Post)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        return int(self.session.scalar(stmt) or 0)

    def count_by_status(self) -> dict[str, int]:
        """Return the number of posts in every status, zero-filled."""
        rows = self.session.execute(
            select(Post.status, func.count()).group_by(Post.status)
        ).all()
        counts = {status: 0 for status in POST_STATUSES}
        for status, total in rows:
            counts[status] = int(total)
        return counts

    def total_published_likes(self) -> int:
        """Sum the liker-set sizes of published posts."""
        stmt = (
            select(func.count())
            .select_from(PostLike)
            .join(Post, Post.id == PostLike.post_id)
            .where(Post.status == POST_STATUS_PUBLISHED)
        )
        return int(self.session.scalar(stmt) or 0)

    def list_published(self, *, sort: str, offset: int, limit: int) -> list[Post]:
        """Return one page of published posts in the requested order."""
        stmt = select(Post).where(Post.status == POST_STATUS_PUBLISHED)
        stmt = self._apply_sort(stmt, sort)
        return list(self.session.scalars(stmt.offset(offset).limit(limit)))

    def list_all(self, *, status: str | None, offset: int, limit: int) -> list[Post]:
        """Return one page of posts of any status, newest submissions first."""
        stmt = select(Post)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        return list(self.session.scalars(stmt.offset(offset).limit(limit)))

    @staticmethod
    def _apply_sort(stmt: Select[tuple[Post]], sort: str) -> Select[tuple[Post]]:
        if sort == SORT_OLDEST:
            return stmt.order_by(Post.published_at.asc(), Post.id.asc())
        if sort == SORT_POPULAR:
            likes_count = (
                select(func.count())
                .select_from(PostLike)
                .where(PostLike.post_id == Post.id)
                .correlate(Post)
                .scalar_subquery()
            )
            return stmt.order_by(likes_count.desc(), Post.published_at.desc(), Post.id.desc())
        return stmt.order_by(Post.published_at.desc(), Post.id.desc())

    def add_like(self, post: Post, user_id: int) -> None:
        """Insert `user_id` into the liker set of `post`.

        A concurrent insert for the same pair trips the composite primary key;
        that request then leaves the existing membership in place.
        """
        post.likes.append(PostLike(post_id=post.id, user_id=user_id))
        post.updated_at = utcnow()
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Like by user %s on post %s already recorded", user_id, post.id)
        self.session.refresh(post)

    def remove_like(self, post: Post, user_id: int) -> None:
        """Remove `user_id` from the liker set of `post`."""
        for like in list(post.likes):
            if like.user_id == user_id:
                post.likes.remove(like)
        post.updated_at = utcnow()
        self.session.commit()
        self.session.refresh(post)
