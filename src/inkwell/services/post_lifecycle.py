# src/inkwell/services/post_lifecycle.py
"""Moderation lifecycle of blog posts."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from inkwell.core.errors import ConflictingStateError, NotFoundError, ValidationFailedError
from inkwell.db.time import utcnow
from inkwell.models import Post, User
from inkwell.models.post import (
    CONTENT_MIN_LENGTH,
    POST_STATUS_HIDDEN,
    POST_STATUS_PENDING,
    POST_STATUS_PUBLISHED,
    POST_STATUS_REJECTED,
    TITLE_MAX_LENGTH,
)
from inkwell.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Blog not found"

# action -> (required status, resulting status)
TRANSITIONS: dict[str, tuple[str, str]] = {
    "approve": (POST_STATUS_PENDING, POST_STATUS_PUBLISHED),
    "reject": (POST_STATUS_PENDING, POST_STATUS_REJECTED),
    "hide": (POST_STATUS_PUBLISHED, POST_STATUS_HIDDEN),
}


@dataclass(frozen=True)
class DeletedPost:
    """Snapshot of a post taken just before it was removed."""

    id: int
    title: str
    status: str


def validate_post_fields(title: str | None, content: str | None) -> tuple[str, str]:
    """Check title and content, returning the normalised pair.

    Raises:
        ValidationFailedError: Listing every violated rule.
    """
    errors: list[str] = []
    title = (title or "").strip()
    if not title:
        errors.append("Title is required")
    elif len(title) > TITLE_MAX_LENGTH:
        errors.append(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")

    content = content or ""
    if not content.strip():
        errors.append("Content is required")
    elif len(content) < CONTENT_MIN_LENGTH:
        errors.append(f"Content must be at least {CONTENT_MIN_LENGTH} characters long")

    if errors:
        raise ValidationFailedError(errors)
    return title, content


class PostLifecycleService:
    """Service owning post creation, visibility and status transitions.

    Every operation receives the caller explicitly; role checks for the
    moderation actions happen upstream in the HTTP dependencies.
    """

    def __init__(self, db: Session) -> None:
        self.repo = PostRepository(db)

    def create_post(self, *, title: str | None, content: str | None, author: User) -> Post:
        """Submit a new post for review on behalf of `author`."""
        title, content = validate_post_fields(title, content)
        post = self.repo.create(title=title, content=content, author_id=author.id)
        logger.info("Post %s submitted for review by user %s", post.id, author.id)
        return post

    def get_post(self, post_id: int) -> Post:
        """Return a post regardless of status, or raise NotFoundError."""
        post = self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        return post

    def get_visible_post(self, post_id: int, viewer: User | None) -> Post:
        """Return a post the viewer is allowed to read.

        Unpublished posts are reported exactly like missing ones unless the
        viewer is the author or an administrator.
        """
        post = self.repo.get_by_id(post_id)
        if post is None or not post.is_visible_to(viewer):
            raise NotFoundError(POST_NOT_FOUND)
        return post

    def approve(self, post_id: int) -> Post:
        """Publish a pending post and stamp its publication time."""
        return self._transition(post_id, "approve", published_at=utcnow())

    def reject(self, post_id: int, reason: str | None = None) -> Post:
        """Reject a pending post, recording an optional reason."""
        reason = (reason or "").strip() or None
        return self._transition(post_id, "reject", rejection_reason=reason)

    def hide(self, post_id: int) -> Post:
        """Withdraw a published post from public view."""
        return self._transition(post_id, "hide")

    def delete(self, post_id: int) -> DeletedPost:
        """Permanently remove a post in any status."""
        post = self.get_post(post_id)
        snapshot = DeletedPost(id=post.id, title=post.title, status=post.status)
        self.repo.delete(post)
        logger.info("Post %s deleted (status was %s)", snapshot.id, snapshot.status)
        return snapshot

    def _transition(self, post_id: int, action: str, **values: object) -> Post:
        required, target = TRANSITIONS[action]
        post = self.get_post(post_id)
        if post.status != required:
            raise ConflictingStateError.for_transition(action, post.status, required)
        if not self.repo.transition(post, required, status=target, **values):
            # Another request moved the post first.
            raise ConflictingStateError.for_transition(action, post.status, required)
        logger.info("Post %s moved %s -> %s", post.id, required, target)
        return post
