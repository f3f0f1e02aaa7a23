# mypy: ignore-errors
"""Tests for the reputation endpoint."""

from fastapi import status

from thrryv_stage.models import ReputationHistory


def test_calculate_reputation(client, test_user, make_post, db_session) -> None:
    """A recompute returns the old and new score with its breakdown."""
    make_post(test_user, overall_score=80, likes_count=10)

    response = client.post("/api/v1/calculate-reputation", json={"userId": test_user.id})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data == {
        "success": True,
        "userId": test_user.id,
        "oldScore": 50.0,
        "newScore": 51.5,
        "change": 1.5,
        "breakdown": {"high_quality_posts": 0.5, "engagement_likes": 1.0},
    }
    assert db_session.query(ReputationHistory).filter_by(user_id=test_user.id).count() == 1


def test_calculate_reputation_requires_user_id(client) -> None:
    for body in ({}, {"userId": ""}):
        response = client.post("/api/v1/calculate-reputation", json=body)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "userId is required"}


def test_calculate_reputation_unknown_user(client) -> None:
    response = client.post("/api/v1/calculate-reputation", json={"userId": "nobody"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "User not found"}


def test_reputation_history_endpoint(client, test_user) -> None:
    client.post("/api/v1/calculate-reputation", json={"userId": test_user.id})
    client.post("/api/v1/calculate-reputation", json={"userId": test_user.id})

    response = client.get(f"/api/v1/users/{test_user.id}/reputation-history")

    assert response.status_code == status.HTTP_200_OK
    entries = response.json()
    assert len(entries) == 2
    assert entries[0]["id"] > entries[1]["id"]
    assert entries[0]["reason"] == "Reputation update: {}"
