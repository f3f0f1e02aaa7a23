"""Tests for clamping evaluator scores."""

import pytest

from thrryv_stage.schemas.evaluation import Evaluation
from thrryv_stage.services.normalizer import SCORE_FIELDS, clamp_score, normalize


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(-10, 0.0), (0, 0.0), (42.5, 42.5), (100, 100.0), (150, 100.0)],
)
def test_clamp_score(raw, expected) -> None:
    assert clamp_score(raw) == expected


def test_normalize_clamps_every_score() -> None:
    evaluation = Evaluation(
        quality_score=150,
        credibility_score=-5,
        misinformation_risk=70,
        overall_score=101,
    )

    normalized = normalize(evaluation)

    assert normalized.quality_score == 100.0
    assert normalized.credibility_score == 0.0
    assert normalized.misinformation_risk == 70.0
    assert normalized.overall_score == 100.0
    for field in SCORE_FIELDS:
        assert 0.0 <= getattr(normalized, field) <= 100.0


def test_normalize_keeps_other_fields_and_input() -> None:
    evaluation = Evaluation(
        quality_score=120,
        credibility_score=50,
        misinformation_risk=20,
        overall_score=60,
        improvements=["Add sources"],
        should_flag=True,
        flag_reason="Unverified claim",
    )

    normalized = normalize(evaluation)

    assert normalized.improvements == ["Add sources"]
    assert normalized.should_flag is True
    assert normalized.flag_reason == "Unverified claim"
    # The input is left untouched.
    assert evaluation.quality_score == 120
