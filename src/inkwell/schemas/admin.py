"""Schemas used by the administrator endpoints."""

from datetime import datetime

from .common import CamelModel, Pagination
from .post import AuthorDetail


class RejectRequest(CamelModel):
    """Optional justification attached to a rejection."""

    reason: str | None = None


class AdminPostItem(CamelModel):
    """A post of any status as seen by an administrator."""

    id: int
    title: str
    content: str
    author: AuthorDetail
    status: str
    likes_count: int
    comments_count: int
    created_at: datetime
    published_at: datetime | None = None
    rejection_reason: str | None = None


class AdminPostListResponse(CamelModel):
    """Page of posts for moderation."""

    blogs: list[AdminPostItem]
    pagination: Pagination


class ModerationSummary(CamelModel):
    """Post summary returned by a moderation transition."""

    id: int
    title: str
    author: AuthorDetail
    status: str


class ApprovalSummary(ModerationSummary):
    published_at: datetime


class RejectionSummary(ModerationSummary):
    reason: str | None = None


class ApproveResponse(CamelModel):
    message: str
    blog: ApprovalSummary


class RejectResponse(CamelModel):
    message: str
    blog: RejectionSummary


class HideResponse(CamelModel):
    message: str
    blog: ModerationSummary


class DeletedPostSummary(CamelModel):
    id: int
    title: str
    status: str


class DeleteResponse(CamelModel):
    message: str
    deleted_blog: DeletedPostSummary


class StatsResponse(CamelModel):
    """Moderation dashboard counters."""

    pending: int
    published: int
    rejected: int
    hidden: int
    total: int
    total_likes: int
