"""Reputation endpoints for the Thrryv API."""

from fastapi import APIRouter

from thrryv_stage.api.v1.dependencies import ReputationEngineDep
from thrryv_stage.core.errors import InvalidInputError
from thrryv_stage.schemas.reputation import (
    CalculateReputationRequest,
    CalculateReputationResponse,
)

router = APIRouter(tags=["reputation"])


@router.post("/calculate-reputation", response_model=CalculateReputationResponse)
async def calculate_reputation(
    payload: CalculateReputationRequest,
    engine: ReputationEngineDep,
) -> CalculateReputationResponse:
    """Recompute a user's reputation from their current activity."""
    if not payload.user_id:
        raise InvalidInputError("userId is required")

    result = engine.recompute(payload.user_id)
    return CalculateReputationResponse(
        user_id=result.user_id,
        old_score=result.old_score,
        new_score=result.new_score,
        change=result.delta,
        breakdown=result.breakdown,
    )
