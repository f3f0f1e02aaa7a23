"""Tests for the health and root endpoints."""

from fastapi import status


def test_health_check(client) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Thrryv API"


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "error" in response.json()
