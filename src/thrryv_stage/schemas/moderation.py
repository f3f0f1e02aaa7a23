"""Moderation-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FlagContentRequest(BaseModel):
    """Body of the flag-content endpoint."""

    post_id: int | None = Field(None, alias="postId", description="Post being reported")
    reason: str | None = Field(None, description="Why the post is being reported")

    model_config = ConfigDict(populate_by_name=True)


class FlagContentResponse(BaseModel):
    """Acknowledgement returned after a flag is recorded."""

    success: bool = True


class FlagDecision(BaseModel):
    """Administrative decision payload for a pending flag."""

    admin_notes: str | None = Field(None, description="Optional reviewer notes")


class ModerationFlagResponse(BaseModel):
    """Schema for moderation flag information returned by the API."""

    id: int
    post_id: int | None
    user_id: str
    reason: str
    status: str
    admin_notes: str | None
    created_at: datetime
    reviewed_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class PlatformStats(BaseModel):
    """Moderation dashboard counters."""

    total_users: int
    total_posts: int
    flagged_posts: int
    pending_flags: int
