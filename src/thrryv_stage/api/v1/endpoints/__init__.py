"""API endpoint modules for version 1."""

from .evaluation import router as evaluation_router
from .moderation import admin_router
from .moderation import router as moderation_router
from .posts import replies_router
from .posts import router as posts_router
from .reputation import router as reputation_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "evaluation_router",
    "moderation_router",
    "posts_router",
    "replies_router",
    "reputation_router",
    "users_router",
]
