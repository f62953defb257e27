"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
Response keys are camelCase.
"""

from .admin import AdminPostListResponse, RejectRequest, StatsResponse
from .common import Pagination
from .post import PostCreate, PostDetail, PostListItem, PostListResponse
from .user import LoginRequest, RegisterRequest, UserResponse

__all__ = [
    "AdminPostListResponse", "RejectRequest", "StatsResponse",
    "Pagination",
    "PostCreate", "PostDetail", "PostListItem", "PostListResponse",
    "LoginRequest", "RegisterRequest", "UserResponse",
]
