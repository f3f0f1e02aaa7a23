"""Tests for the operational scripts."""

from unittest.mock import MagicMock

import pytest

from thrryv_stage.core.security import decode_access_token
from thrryv_stage.models import ReputationHistory, User
from thrryv_stage.scripts import recompute_reputation, tokens


@pytest.fixture
def script_session(db_session, mocker):
    session = MagicMock(wraps=db_session)
    session.close = MagicMock()
    mocker.patch.object(tokens, "SessionLocal", return_value=session)
    mocker.patch.object(recompute_reputation, "SessionLocal", return_value=session)
    return session


def test_token_script_creates_admin(db_session, script_session, monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.argv", ["tokens", "user-cli", "--admin", "--username", "cli"])

    tokens.main()

    token = capsys.readouterr().out.strip()
    assert decode_access_token(token) == "user-cli"
    user = db_session.get(User, "user-cli")
    assert user.is_admin is True
    assert user.username == "cli"
    script_session.close.assert_called_once()


def test_recompute_script_for_single_user(
    db_session, script_session, test_user, make_post, monkeypatch, capsys
) -> None:
    make_post(test_user, overall_score=80, likes_count=10)
    monkeypatch.setattr("sys.argv", ["recompute", "--user", test_user.id])

    recompute_reputation.main()

    assert f"{test_user.id}: 50.00 -> 51.50" in capsys.readouterr().out
    assert db_session.query(ReputationHistory).count() == 1


def test_recompute_script_for_everyone(
    db_session, script_session, test_user, other_user, monkeypatch, capsys
) -> None:
    monkeypatch.setattr("sys.argv", ["recompute", "--batch-size", "1"])

    recompute_reputation.main()

    assert "Recomputed reputation for 2 users" in capsys.readouterr().out
    script_session.close.assert_called_once()
