"""Like toggling on published posts."""
from __future__ import annotations

from typing import NamedTuple

from sqlalchemy.orm import Session

from inkwell.core.errors import ConflictingStateError, NotFoundError
from inkwell.models import User
from inkwell.models.post import POST_STATUS_PUBLISHED
from inkwell.repositories.post_repo import PostRepository
from inkwell.services.post_lifecycle import POST_NOT_FOUND


class LikeResult(NamedTuple):
    is_liked: bool
    likes_count: int


def toggle_like(db: Session, post_id: int, user: User) -> LikeResult:
    """Flip `user`'s membership in the post's liker set.

    Raises:
        NotFoundError: If the post does not exist.
        ConflictingStateError: If the post is not published.
    """
    repo = PostRepository(db)
    post = repo.get_by_id(post_id)
    if post is None:
        raise NotFoundError(POST_NOT_FOUND)
    if post.status != POST_STATUS_PUBLISHED:
        raise ConflictingStateError(
            "Can only like published blogs",
            current=post.status,
            required=POST_STATUS_PUBLISHED,
        )

    if post.is_liked_by(user.id):
        repo.remove_like(post, user.id)
    else:
        repo.add_like(post, user.id)
    return LikeResult(is_liked=post.is_liked_by(user.id), likes_count=post.likes_count)
