"""Assembly of post listings and per-viewer post views.

The raw liker set never leaves this module: listings carry the derived
``likesCount`` and, for an identified viewer, ``isLikedByCurrentUser``.
"""
from __future__ import annotations

import math

from sqlalchemy.orm import Session

from inkwell.core.settings import settings
from inkwell.models import Post, User
from inkwell.models.post import POST_STATUS_PUBLISHED, POST_STATUSES
from inkwell.repositories.post_repo import MAX_SQL_INTEGER, SORT_LATEST, SORT_MODES, PostRepository
from inkwell.schemas.admin import AdminPostItem, AdminPostListResponse, StatsResponse
from inkwell.schemas.common import Pagination
from inkwell.schemas.post import PostDetail, PostListItem, PostListResponse


def normalize_sort(sort: str | None) -> str:
    """Return a known sort mode, falling back to ``latest``."""
    return sort if sort in SORT_MODES else SORT_LATEST


def normalize_status(status: str | None) -> str | None:
    """Return `status` if it is a real post status, otherwise None."""
    return status if status in POST_STATUSES else None


def clamp_limit(limit: int) -> int:
    """Cap a requested page size at the configured maximum."""
    return min(limit, settings.max_page_size)


def page_offset(page: int, limit: int) -> int | None:
    """Return the row offset of `page`, or None when no row can lie that far."""
    offset = (page - 1) * limit
    return offset if offset <= MAX_SQL_INTEGER else None


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


def _liked_flag(post: Post, viewer: User | None) -> bool | None:
    if viewer is None:
        return None
    return post.is_liked_by(viewer.id)


def to_post_detail(post: Post, viewer: User | None) -> PostDetail:
    """Render a single post for `viewer`."""
    detail = PostDetail.model_validate(post)
    return detail.model_copy(update={"is_liked_by_current_user": _liked_flag(post, viewer)})


def to_post_list_item(post: Post, viewer: User | None) -> PostListItem:
    item = PostListItem.model_validate(post)
    return item.model_copy(update={"is_liked_by_current_user": _liked_flag(post, viewer)})


def list_published_posts(
    db: Session,
    *,
    page: int,
    limit: int,
    sort: str | None,
    viewer: User | None,
) -> PostListResponse:
    """Return one page of published posts for `viewer`.

    Args:
        db: Database session.
        page: 1-based page number.
        limit: Page size.
        sort: ``latest``, ``oldest`` or ``popular``; anything else means latest.
        viewer: The caller, when identified.
    """
    repo = PostRepository(db)
    limit = clamp_limit(limit)
    offset = page_offset(page, limit)
    posts = (
        []
        if offset is None
        else repo.list_published(sort=normalize_sort(sort), offset=offset, limit=limit)
    )
    total = repo.count(POST_STATUS_PUBLISHED)
    return PostListResponse(
        blogs=[to_post_list_item(post, viewer) for post in posts],
        pagination=build_pagination(page, limit, total),
    )


def list_admin_posts(
    db: Session,
    *,
    page: int,
    limit: int,
    status: str | None = None,
) -> AdminPostListResponse:
    """Return one page of posts of any status, newest submissions first."""
    repo = PostRepository(db)
    status = normalize_status(status)
    limit = clamp_limit(limit)
    offset = page_offset(page, limit)
    posts = [] if offset is None else repo.list_all(status=status, offset=offset, limit=limit)
    total = repo.count(status)
    return AdminPostListResponse(
        blogs=[AdminPostItem.model_validate(post) for post in posts],
        pagination=build_pagination(page, limit, total),
    )


def moderation_stats(db: Session) -> StatsResponse:
    """Return post counts per status plus likes on published posts."""
    repo = PostRepository(db)
    counts = repo.count_by_status()
    return StatsResponse(
        **counts,
        total=sum(counts.values()),
        total_likes=repo.total_published_likes(),
    )
