"""SQLAlchemy models for the Inkwell application."""

from .like import PostLike
from .post import Post
from .user import User

__all__ = [
    "Post",
    "PostLike",
    "User",
]
