"""Shared API dependencies for authentication and injected collaborators."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from thrryv_stage.core.errors import ForbiddenError, UnauthorizedError
from thrryv_stage.core.security import decode_access_token
from thrryv_stage.db.session import get_db
from thrryv_stage.models import User
from thrryv_stage.services.ai_client import TextGenerator
from thrryv_stage.services.evaluator import ContentEvaluator
from thrryv_stage.services.moderation import ModerationService
from thrryv_stage.services.reputation import ReputationEngine
from thrryv_stage.services.reputation_worker import RecomputeDispatcher

# HTTP Bearer scheme for JWT authentication; missing credentials are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        UnauthorizedError: If the token is missing or invalid, or the user is unknown
    """
    if credentials is None:
        raise UnauthorizedError("Unauthorized")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_admin_user(current_user: CurrentUserDep) -> User:
    """Require the authenticated user to be an administrator."""
    if not current_user.is_admin:
        raise ForbiddenError("Administrator privileges required")
    return current_user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def get_text_generator(request: Request) -> TextGenerator:
    """Return the AI client owned by the application."""
    return request.app.state.ai_client


def get_content_evaluator(
    generator: Annotated[TextGenerator, Depends(get_text_generator)],
) -> ContentEvaluator:
    """Build a content evaluator around the application's AI client."""
    return ContentEvaluator(generator)


EvaluatorDep = Annotated[ContentEvaluator, Depends(get_content_evaluator)]


def get_recompute_dispatcher(request: Request) -> RecomputeDispatcher:
    """Return the enqueue function of the application's recompute worker."""
    return request.app.state.reputation_worker.enqueue


def get_moderation_service(
    db: SessionDep,
    dispatch_recompute: Annotated[RecomputeDispatcher, Depends(get_recompute_dispatcher)],
) -> ModerationService:
    """Build a moderation service bound to the request session."""
    return ModerationService(db, dispatch_recompute)


ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]


def get_reputation_engine(db: SessionDep) -> ReputationEngine:
    """Build a reputation engine bound to the request session."""
    return ReputationEngine(db)


ReputationEngineDep = Annotated[ReputationEngine, Depends(get_reputation_engine)]
