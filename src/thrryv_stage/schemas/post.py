"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    content: str = Field(..., min_length=1, max_length=5000, description="Post body")


class ReplyCreate(BaseModel):
    """Schema for replying to a post."""

    content: str = Field(..., min_length=1, max_length=5000, description="Reply body")


class ReplyResponse(BaseModel):
    """Schema for reply information returned by the API."""

    id: int
    post_id: int
    user_id: str
    content: str
    quality_score: float
    likes_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    user_id: str
    content: str
    quality_score: float
    credibility_score: float
    misinformation_risk: float
    overall_score: float
    is_flagged: bool
    flagged_reason: str | None
    likes_count: int
    replies_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostDetailResponse(PostResponse):
    """Post with its evaluation and replies."""

    ai_evaluation: dict | None = None
    replies: list[ReplyResponse] = Field(default_factory=list)


class LikeResponse(BaseModel):
    """Like state after a like or unlike request."""

    liked: bool
    likes_count: int
