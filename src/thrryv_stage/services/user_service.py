"""Helpers for user profiles and the follow graph."""
from __future__ import annotations

from sqlalchemy.orm import Session

from thrryv_stage.core.errors import InvalidInputError, NotFoundError
from thrryv_stage.models import Follow, ReputationHistory, User

__all__ = [
    "get_user",
    "get_user_or_404",
    "is_following",
    "follow_user",
    "unfollow_user",
    "list_reputation_history",
]


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_or_404(db: Session, user_id: str) -> User:
    """Return a user or raise `NotFoundError`."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def is_following(db: Session, follower_id: str, following_id: str) -> bool:
    """Return True if `follower_id` currently follows `following_id`."""
    return (
        db.query(Follow)
        .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
        .first()
        is not None
    )


def follow_user(db: Session, follower: User, following_id: str) -> User:
    """Create a follow edge and update the counters on both ends.

    Returns the followed user. Following someone twice is a no-op.
    """
    if follower.id == following_id:
        raise InvalidInputError("Users cannot follow themselves")
    target = get_user_or_404(db, following_id)
    if is_following(db, follower.id, target.id):
        return target

    db.add(Follow(follower_id=follower.id, following_id=target.id))
    follower.following_count += 1
    target.followers_count += 1
    db.commit()
    db.refresh(target)
    return target


def unfollow_user(db: Session, follower: User, following_id: str) -> User:
    """Remove a follow edge if present and update both counters."""
    target = get_user_or_404(db, following_id)
    edge = (
        db.query(Follow)
        .filter(Follow.follower_id == follower.id, Follow.following_id == target.id)
        .first()
    )
    if edge is not None:
        db.delete(edge)
        follower.following_count = max(0, follower.following_count - 1)
        target.followers_count = max(0, target.followers_count - 1)
        db.commit()
        db.refresh(target)
    return target


def list_reputation_history(db: Session, user_id: str, limit: int = 50) -> list[ReputationHistory]:
    """Return a user's reputation audit entries, newest first."""
    get_user_or_404(db, user_id)
    return (
        db.query(ReputationHistory)
        .filter(ReputationHistory.user_id == user_id)
        .order_by(ReputationHistory.id.desc())
        .limit(limit)
        .all()
    )
