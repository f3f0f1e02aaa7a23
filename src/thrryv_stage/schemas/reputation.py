"""Reputation-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CalculateReputationRequest(BaseModel):
    """Body of the calculate-reputation endpoint."""

    user_id: str | None = Field(None, alias="userId", description="User to recompute")

    model_config = ConfigDict(populate_by_name=True)


class CalculateReputationResponse(BaseModel):
    """Outcome of a reputation recomputation as returned by the API."""

    success: bool = True
    user_id: str = Field(..., alias="userId")
    old_score: float = Field(..., alias="oldScore")
    new_score: float = Field(..., alias="newScore")
    change: float
    breakdown: dict[str, float]

    model_config = ConfigDict(populate_by_name=True)


class ReputationHistoryResponse(BaseModel):
    """One audit entry from a user's reputation history."""

    id: int
    old_score: float
    new_score: float
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
