"""Content evaluation endpoint."""

from fastapi import APIRouter

from thrryv_stage.api.v1.dependencies import EvaluatorDep
from thrryv_stage.schemas.evaluation import EvaluateContentRequest, Evaluation
from thrryv_stage.services.normalizer import normalize

router = APIRouter(tags=["evaluation"])


@router.post("/evaluate-content", response_model=Evaluation)
async def evaluate_content(payload: EvaluateContentRequest, evaluator: EvaluatorDep) -> Evaluation:
    """Score content with the AI evaluator; scores are clamped to [0, 100]."""
    evaluation = await evaluator.evaluate(payload.content)
    return normalize(evaluation)
