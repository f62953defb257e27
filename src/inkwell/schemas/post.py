"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel, Pagination


class PostCreate(CamelModel):
    """Schema for submitting a new post.

    Length rules are enforced by the lifecycle service so that all violations
    are reported in one message.
    """

    title: str | None = Field(None, description="Post title, at most 200 characters")
    content: str | None = Field(None, description="Post body, at least 10 characters")


class AuthorSummary(CamelModel):
    """Author reference shown in public listings."""

    id: int
    username: str


class AuthorDetail(AuthorSummary):
    """Author reference shown on single posts and admin views."""

    email: str


class PostCreated(CamelModel):
    """Representation of a freshly submitted post."""

    id: int
    title: str
    content: str
    author: AuthorDetail
    status: str
    likes_count: int
    comments_count: int
    created_at: datetime


class PostDetail(CamelModel):
    """A single post as seen by the current viewer."""

    id: int
    title: str
    content: str
    author: AuthorDetail
    status: str
    likes_count: int
    comments_count: int
    published_at: datetime | None = None
    created_at: datetime
    # Null for anonymous viewers.
    is_liked_by_current_user: bool | None = None


class PostListItem(CamelModel):
    """A published post inside a public listing."""

    id: int
    title: str
    content: str
    author: AuthorSummary
    status: str
    likes_count: int
    comments_count: int
    published_at: datetime | None = None
    created_at: datetime
    is_liked_by_current_user: bool | None = None


class PostCreatedResponse(CamelModel):
    """Envelope returned after submitting a post."""

    message: str
    blog: PostCreated


class PostDetailResponse(CamelModel):
    """Envelope for a single post."""

    blog: PostDetail


class PostListResponse(CamelModel):
    """Page of published posts."""

    blogs: list[PostListItem]
    pagination: Pagination


class LikeToggleResponse(CamelModel):
    """Result of toggling a like."""

    message: str
    is_liked: bool
    likes_count: int
