"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public profile with reputation standing."""

    id: str
    username: str | None
    display_name: str | None
    reputation_score: float
    reputation_tier: str
    total_posts: int
    followers_count: int
    following_count: int

    model_config = ConfigDict(from_attributes=True)


class FollowResponse(BaseModel):
    """Follow state after a follow or unfollow request."""

    following: bool
    followers_count: int
