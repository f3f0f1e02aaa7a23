"""Clamp evaluator output into the ranges the rest of the system relies on."""

from __future__ import annotations

from thrryv_stage.schemas.evaluation import Evaluation

SCORE_MIN = 0.0
SCORE_MAX = 100.0

SCORE_FIELDS = (
    "quality_score",
    "credibility_score",
    "misinformation_risk",
    "overall_score",
)


def clamp_score(value: float) -> float:
    """Clamp a single score to [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, float(value)))


def normalize(evaluation: Evaluation) -> Evaluation:
    """Return a copy of `evaluation` with every score clamped to [0, 100].

    Never fails; upstream values are never trusted as-is.
    """
    return evaluation.model_copy(
        update={field: clamp_score(getattr(evaluation, field)) for field in SCORE_FIELDS}
    )
