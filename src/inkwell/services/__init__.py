"""Business logic services for the Inkwell application."""

from .likes import LikeResult, toggle_like
from .post_lifecycle import PostLifecycleService

__all__ = [
    "LikeResult",
    "PostLifecycleService",
    "toggle_like",
]
