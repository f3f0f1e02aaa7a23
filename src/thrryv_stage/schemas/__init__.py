"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .evaluation import EvaluateContentRequest, Evaluation, FactCheck
from .moderation import (
    FlagContentRequest,
    FlagContentResponse,
    FlagDecision,
    ModerationFlagResponse,
    PlatformStats,
)
from .post import (
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostResponse,
    ReplyCreate,
    ReplyResponse,
)
from .reputation import (
    CalculateReputationRequest,
    CalculateReputationResponse,
    ReputationHistoryResponse,
)
from .user import FollowResponse, UserResponse

__all__ = [
    "EvaluateContentRequest", "Evaluation", "FactCheck",
    "FlagContentRequest", "FlagContentResponse", "FlagDecision",
    "ModerationFlagResponse", "PlatformStats",
    "LikeResponse", "PostCreate", "PostDetailResponse", "PostResponse",
    "ReplyCreate", "ReplyResponse",
    "CalculateReputationRequest", "CalculateReputationResponse",
    "ReputationHistoryResponse",
    "FollowResponse", "UserResponse",
]
