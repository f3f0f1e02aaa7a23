"""SQLAlchemy models for the Thrryv application."""

from .follow import Follow
from .moderation import ModerationFlag
from .post import Post, PostLike, Reply, ReplyLike
from .reputation import ReputationHistory
from .user import User

__all__ = [
    "Follow",
    "ModerationFlag",
    "Post", "PostLike", "Reply", "ReplyLike",
    "ReputationHistory",
    "User",
]
