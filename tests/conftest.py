# tests/conftest.py
from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.pop("EVALUATOR_API_KEY", None)

from thrryv_stage.api.v1.dependencies import get_recompute_dispatcher, get_text_generator
from thrryv_stage.core.security import create_access_token
from thrryv_stage.db.session import Base
from thrryv_stage.db.session import get_db as app_get_session
from thrryv_stage.main import app as fastapi_app
from thrryv_stage.models import Post, User

TEST_DB_URL = "sqlite://"

DEFAULT_EVALUATION: dict[str, Any] = {
    "quality_score": 80,
    "credibility_score": 75,
    "misinformation_risk": 10,
    "overall_score": 78,
    "fact_checks": [],
    "improvements": ["Cite a source"],
    "should_flag": False,
    "flag_reason": None,
}


class FakeTextGenerator:
    """Stand-in for the AI provider that replays a canned reply."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply if reply is not None else json.dumps(DEFAULT_EVALUATION)
        self.error = error
        self.calls: list[tuple[str, str, float]] = []

    async def generate(self, system_instructions: str, prompt: str, temperature: float) -> str:
        self.calls.append((system_instructions, prompt, temperature))
        if self.error is not None:
            raise self.error
        return self.reply


class RecordingDispatcher:
    """Collects recompute requests instead of queueing them."""

    def __init__(self) -> None:
        self.user_ids: list[str] = []

    def __call__(self, user_id: str) -> None:
        self.user_ids.append(user_id)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def fake_generator() -> FakeTextGenerator:
    """Return the AI provider stand-in used by the API under test."""
    return FakeTextGenerator()


@pytest.fixture()
def recompute_requests() -> RecordingDispatcher:
    """Return the recorder receiving reputation recompute requests."""
    return RecordingDispatcher()


@pytest.fixture(autouse=True)
def override_collaborators(
    app: FastAPI,
    fake_generator: FakeTextGenerator,
    recompute_requests: RecordingDispatcher,
) -> Iterator[None]:
    """Keep the API away from the real AI provider and background worker."""
    overrides: dict[Callable[..., Any], Callable[[], Any]] = {
        get_text_generator: lambda: fake_generator,
        get_recompute_dispatcher: lambda: recompute_requests,
    }
    for dependency, override in overrides.items():
        app.dependency_overrides[dependency] = override

    try:
        yield
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db_session: Session, user_id: str, username: str, *, is_admin: bool = False) -> User:
    user = User(id=user_id, username=username, display_name=username.title(), is_admin=is_admin)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, "user-test", "tester")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "user-other", "other")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create and return a persisted administrator."""
    return _create_user(db_session, "user-admin", "admin", is_admin=True)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    token = create_access_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts with explicit scores."""

    def _make_post(
        author: User,
        *,
        content: str = "Test post content",
        overall_score: float = 50.0,
        misinformation_risk: float = 0.0,
        quality_score: float = 50.0,
        credibility_score: float = 50.0,
        likes_count: int = 0,
        is_flagged: bool = False,
    ) -> Post:
        post = Post(
            user_id=author.id,
            content=content,
            quality_score=quality_score,
            credibility_score=credibility_score,
            misinformation_risk=misinformation_risk,
            overall_score=overall_score,
            likes_count=likes_count,
            is_flagged=is_flagged,
        )
        author.total_posts += 1
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post for tests."""
    return make_post(test_user)
