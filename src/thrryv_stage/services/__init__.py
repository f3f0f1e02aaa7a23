"""Business logic services for the Thrryv application."""

from .ai_client import AIClient
from .evaluator import ContentEvaluator
from .moderation import ModerationService
from .normalizer import normalize
from .reputation import ReputationEngine
from .reputation_worker import ReputationRecomputeWorker

__all__ = [
    "AIClient",
    "ContentEvaluator",
    "ModerationService",
    "normalize",
    "ReputationEngine",
    "ReputationRecomputeWorker",
]
