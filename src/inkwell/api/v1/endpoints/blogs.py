"""Public blog endpoints: submission, reading and likes."""

from fastapi import APIRouter, Query, status

from inkwell.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from inkwell.core.errors import NotFoundError
from inkwell.core.settings import settings
from inkwell.repositories.post_repo import MAX_SQL_INTEGER
from inkwell.schemas.post import (
    LikeToggleResponse,
    PostCreate,
    PostCreated,
    PostCreatedResponse,
    PostDetailResponse,
    PostListResponse,
)
from inkwell.services import listing
from inkwell.services.likes import toggle_like
from inkwell.services.post_lifecycle import POST_NOT_FOUND, PostLifecycleService

router = APIRouter(prefix="/blogs", tags=["blogs"])


def parse_post_id(raw: str) -> int:
    """Convert a path segment to a post id; unusable ids are simply not found."""
    try:
        post_id = int(raw)
    except ValueError as err:
        raise NotFoundError(POST_NOT_FOUND) from err
    if not 1 <= post_id <= MAX_SQL_INTEGER:
        raise NotFoundError(POST_NOT_FOUND)
    return post_id


@router.post(
    "",
    summary="Submit a post for review",
    status_code=status.HTTP_201_CREATED,
    response_model=PostCreatedResponse,
)
def create_blog(payload: PostCreate, db: SessionDep, user: CurrentUserDep) -> PostCreatedResponse:
    """Create a post in ``pending`` status authored by the caller."""
    post = PostLifecycleService(db).create_post(
        title=payload.title,
        content=payload.content,
        author=user,
    )
    return PostCreatedResponse(
        message="Blog created successfully and submitted for review",
        blog=PostCreated.model_validate(post),
    )


@router.get("", summary="List published posts", response_model=PostListResponse)
def list_blogs(
    db: SessionDep,
    viewer: OptionalUserDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        description="Posts per page, capped at the configured maximum",
    ),
    sort: str = Query("latest", description="latest, oldest or popular"),
) -> PostListResponse:
    """List published posts; unknown sort values fall back to ``latest``."""
    return listing.list_published_posts(db, page=page, limit=limit, sort=sort, viewer=viewer)


@router.get("/{post_id}", summary="Read a single post", response_model=PostDetailResponse)
def get_blog(post_id: str, db: SessionDep, viewer: OptionalUserDep) -> PostDetailResponse:
    """Return a published post, or an unpublished one to its author or an admin."""
    post = PostLifecycleService(db).get_visible_post(parse_post_id(post_id), viewer)
    return PostDetailResponse(blog=listing.to_post_detail(post, viewer))


@router.post("/{post_id}/like", summary="Toggle a like", response_model=LikeToggleResponse)
def like_blog(post_id: str, db: SessionDep, user: CurrentUserDep) -> LikeToggleResponse:
    """Like the post, or remove the caller's like if already present."""
    result = toggle_like(db, parse_post_id(post_id), user)
    return LikeToggleResponse(
        message="Blog liked" if result.is_liked else "Blog unliked",
        is_liked=result.is_liked,
        likes_count=result.likes_count,
    )
