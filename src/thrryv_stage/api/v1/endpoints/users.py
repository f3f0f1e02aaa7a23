"""User profile and follow endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from thrryv_stage.api.v1.dependencies import CurrentUserDep, SessionDep
from thrryv_stage.models import Post, ReputationHistory
from thrryv_stage.repositories.post_repo import PostRepository
from thrryv_stage.schemas.post import PostResponse
from thrryv_stage.schemas.reputation import ReputationHistoryResponse
from thrryv_stage.schemas.user import FollowResponse, UserResponse
from thrryv_stage.services import user_service
from thrryv_stage.services.reputation import reputation_tier

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user_profile(user_id: str, db: SessionDep) -> UserResponse:
    """Return a user's public profile and reputation tier."""
    user = user_service.get_user_or_404(db, user_id)
    return UserResponse(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        reputation_score=user.reputation_score,
        reputation_tier=reputation_tier(user.reputation_score).name,
        total_posts=user.total_posts,
        followers_count=user.followers_count,
        following_count=user.following_count,
    )


@router.get("/{user_id}/posts", response_model=list[PostResponse])
async def get_user_posts(
    user_id: str,
    db: SessionDep,
    limit: int = Query(20, ge=1, le=100),
) -> list[Post]:
    """Return a user's most recent posts."""
    user_service.get_user_or_404(db, user_id)
    return PostRepository(db).list_by_author(user_id, limit)


@router.get("/{user_id}/reputation-history", response_model=list[ReputationHistoryResponse])
async def get_reputation_history(
    user_id: str,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=200),
) -> list[ReputationHistory]:
    """Return the audit trail of a user's reputation recomputations."""
    return user_service.list_reputation_history(db, user_id, limit)


@router.post("/{user_id}/follow", response_model=FollowResponse)
async def follow(user_id: str, current_user: CurrentUserDep, db: SessionDep) -> FollowResponse:
    """Follow a user."""
    target = user_service.follow_user(db, current_user, user_id)
    return FollowResponse(following=True, followers_count=target.followers_count)


@router.delete("/{user_id}/follow", response_model=FollowResponse)
async def unfollow(user_id: str, current_user: CurrentUserDep, db: SessionDep) -> FollowResponse:
    """Stop following a user."""
    target = user_service.unfollow_user(db, current_user, user_id)
    return FollowResponse(following=False, followers_count=target.followers_count)
