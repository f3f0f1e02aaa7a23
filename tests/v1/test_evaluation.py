# mypy: ignore-errors
"""Tests for the content evaluation endpoint."""

import json

from fastapi import status

from tests.conftest import DEFAULT_EVALUATION
from thrryv_stage.core.errors import EvaluationError, EvaluationTimeoutError


def test_evaluate_content(client, fake_generator) -> None:
    """Evaluation results are returned with every field."""
    response = client.post("/api/v1/evaluate-content", json={"content": "Water boils at 100C."})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["quality_score"] == 80
    assert data["overall_score"] == 78
    assert data["improvements"] == ["Cite a source"]
    assert data["should_flag"] is False
    assert len(fake_generator.calls) == 1


def test_evaluate_content_clamps_scores(client, fake_generator) -> None:
    """Out-of-range provider scores are clamped before they are returned."""
    fake_generator.reply = json.dumps(
        dict(DEFAULT_EVALUATION, quality_score=150, misinformation_risk=-20)
    )

    response = client.post("/api/v1/evaluate-content", json={"content": "Anything"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["quality_score"] == 100
    assert data["misinformation_risk"] == 0


def test_evaluate_content_requires_content(client, fake_generator) -> None:
    """Blank content is rejected without contacting the provider."""
    for body in ({}, {"content": ""}, {"content": "   "}):
        response = client.post("/api/v1/evaluate-content", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Content is required"}

    assert fake_generator.calls == []


def test_evaluate_content_malformed_reply(client, fake_generator) -> None:
    """An unparseable provider reply surfaces as a server error."""
    fake_generator.reply = "I cannot evaluate that."

    response = client.post("/api/v1/evaluate-content", json={"content": "Anything"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "error" in response.json()


def test_evaluate_content_provider_unreachable(client, fake_generator) -> None:
    fake_generator.error = EvaluationError("AI provider is unreachable")

    response = client.post("/api/v1/evaluate-content", json={"content": "Anything"})

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json() == {"error": "AI provider is unreachable"}


def test_evaluate_content_timeout(client, fake_generator) -> None:
    fake_generator.error = EvaluationTimeoutError("AI evaluation timed out")

    response = client.post("/api/v1/evaluate-content", json={"content": "Anything"})

    assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT
