"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    evaluation_router,
    moderation_router,
    posts_router,
    replies_router,
    reputation_router,
    users_router,
)

__all__ = [
    "admin_router",
    "evaluation_router",
    "moderation_router",
    "posts_router",
    "replies_router",
    "reputation_router",
    "users_router",
]
