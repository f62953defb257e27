"""Version 1 API endpoints."""

from .endpoints import admin_router, auth_router, blogs_router

__all__ = [
    "admin_router",
    "auth_router",
    "blogs_router",
]
