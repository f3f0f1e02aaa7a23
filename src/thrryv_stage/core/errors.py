"""Error taxonomy shared by the scoring and moderation services.

Every error carries the HTTP status the API layer renders it with, so
services raise domain errors and never import FastAPI.
"""

from __future__ import annotations


class ThrryvError(RuntimeError):
    """Base exception for failures surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(ThrryvError):
    """Caller supplied missing or malformed fields."""

    status_code = 400


class UnauthorizedError(ThrryvError):
    """No authenticated caller for an action that requires one."""

    status_code = 401


class ForbiddenError(ThrryvError):
    """Authenticated caller lacks the privileges for an action."""

    status_code = 403


class NotFoundError(ThrryvError):
    """Referenced entity does not exist."""

    status_code = 404


class StorageError(ThrryvError):
    """Datastore failure that cannot be recovered locally."""

    status_code = 500


class EvaluationError(ThrryvError):
    """Base exception for AI evaluation failures.

    Raised directly when the AI provider cannot be reached or rejects the
    request; the whole evaluate call is safe to retry.
    """

    status_code = 502


class MalformedEvaluationError(EvaluationError):
    """The AI provider replied with text that is not a valid evaluation."""

    status_code = 500


class EvaluationTimeoutError(EvaluationError):
    """The AI provider did not answer within the configured timeout."""

    status_code = 504
