"""Administrator endpoints for moderating posts."""

from fastapi import APIRouter, Depends, Query

from inkwell.api.v1.dependencies import SessionDep, require_admin
from inkwell.api.v1.endpoints.blogs import parse_post_id
from inkwell.core.settings import settings
from inkwell.models.post import POST_STATUS_PENDING
from inkwell.schemas.admin import (
    AdminPostListResponse,
    ApprovalSummary,
    ApproveResponse,
    DeletedPostSummary,
    DeleteResponse,
    HideResponse,
    ModerationSummary,
    RejectionSummary,
    RejectRequest,
    RejectResponse,
    StatsResponse,
)
from inkwell.services import listing
from inkwell.services.post_lifecycle import PostLifecycleService

# Every route here requires an authenticated administrator.
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

PageQuery = Query(1, ge=1, description="1-based page number")
LimitQuery = Query(
    settings.default_page_size,
    ge=1,
    description="Posts per page, capped at the configured maximum",
)


@router.get("/blogs/pending", summary="List posts awaiting review", response_model=AdminPostListResponse)
def list_pending_blogs(
    db: SessionDep,
    page: int = PageQuery,
    limit: int = LimitQuery,
) -> AdminPostListResponse:
    return listing.list_admin_posts(db, page=page, limit=limit, status=POST_STATUS_PENDING)


@router.get("/blogs", summary="List posts of any status", response_model=AdminPostListResponse)
def list_all_blogs(
    db: SessionDep,
    page: int = PageQuery,
    limit: int = LimitQuery,
    status: str | None = Query(None, description="Optional exact status filter"),
) -> AdminPostListResponse:
    """List posts, newest submissions first; unknown status filters are ignored."""
    return listing.list_admin_posts(db, page=page, limit=limit, status=status)


@router.post("/blogs/{post_id}/approve", summary="Publish a pending post", response_model=ApproveResponse)
def approve_blog(post_id: str, db: SessionDep) -> ApproveResponse:
    post = PostLifecycleService(db).approve(parse_post_id(post_id))
    return ApproveResponse(
        message="Blog approved and published successfully",
        blog=ApprovalSummary.model_validate(post),
    )


@router.post("/blogs/{post_id}/reject", summary="Reject a pending post", response_model=RejectResponse)
def reject_blog(
    post_id: str,
    db: SessionDep,
    payload: RejectRequest | None = None,
) -> RejectResponse:
    """Reject a pending post with an optional reason."""
    reason = payload.reason if payload is not None else None
    post = PostLifecycleService(db).reject(parse_post_id(post_id), reason)
    summary = ModerationSummary.model_validate(post)
    return RejectResponse(
        message="Blog rejected successfully",
        blog=RejectionSummary(**summary.model_dump(), reason=post.rejection_reason),
    )


@router.post("/blogs/{post_id}/hide", summary="Hide a published post", response_model=HideResponse)
def hide_blog(post_id: str, db: SessionDep) -> HideResponse:
    post = PostLifecycleService(db).hide(parse_post_id(post_id))
    return HideResponse(
        message="Blog hidden successfully",
        blog=ModerationSummary.model_validate(post),
    )


@router.delete("/blogs/{post_id}", summary="Delete a post permanently", response_model=DeleteResponse)
def delete_blog(post_id: str, db: SessionDep) -> DeleteResponse:
    deleted = PostLifecycleService(db).delete(parse_post_id(post_id))
    return DeleteResponse(
        message="Blog deleted successfully",
        deleted_blog=DeletedPostSummary.model_validate(deleted),
    )


@router.get("/stats", summary="Moderation dashboard counters", response_model=StatsResponse)
def get_stats(db: SessionDep) -> StatsResponse:
    return listing.moderation_stats(db)
