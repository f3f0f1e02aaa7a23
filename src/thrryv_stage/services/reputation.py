"""Reputation scoring for Thrryv.

A user's reputation is re-derived from scratch on every call: the configured
base score plus the sum of bonuses and penalties earned by the user's current
posts, replies, followers and pending flags. Because nothing is carried over
from the previous score, repeated calls without new activity settle on the
same value instead of drifting.

Contributions:
- High-quality posts (overall score >= 70): +0.5 each
- Likes on posts: +0.1 per like
- Replies on high-quality posts: +0.3 each
- Likes on replies: +0.1 per like
- Followers: +0.05 each, capped at +5

Penalties:
- Misinformation (risk >= 70): -5 per post
- Flagged posts: -2 per post
- Pending flags against the user's posts: -1 per flag
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thrryv_stage.core.errors import NotFoundError, StorageError
from thrryv_stage.core.settings import settings
from thrryv_stage.models import Follow, ModerationFlag, Post, Reply, ReputationHistory, User
from thrryv_stage.models.moderation import FLAG_STATUS_PENDING

# Configure logger for this module
logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 100.0
# Breakdown terms are rounded so float noise never reaches the audit trail.
ROUND_DIGITS = 4

HIGH_QUALITY_POSTS = "high_quality_posts"
MISINFORMATION_PENALTY = "misinformation_penalty"
FLAGGED_CONTENT = "flagged_content"
ENGAGEMENT_LIKES = "engagement_likes"
HELPFUL_REPLIES = "helpful_replies"
REPLY_ENGAGEMENT = "reply_engagement"
FOLLOWER_BONUS = "follower_bonus"
MULTIPLE_FLAGS = "multiple_flags"


@dataclass(frozen=True)
class ReputationWeights:
    """Thresholds and per-item contributions of the scoring function."""

    quality_threshold: float = 70.0
    high_quality_post_bonus: float = 0.5
    misinformation_threshold: float = 70.0
    misinformation_penalty: float = -5.0
    flagged_post_penalty: float = -2.0
    like_bonus: float = 0.1
    helpful_reply_bonus: float = 0.3
    follower_bonus: float = 0.05
    follower_bonus_cap: float = 5.0
    pending_flag_penalty: float = -1.0


DEFAULT_WEIGHTS = ReputationWeights()


@dataclass
class ReputationResult:
    """Outcome of one recomputation."""

    user_id: str
    old_score: float
    new_score: float
    delta: float
    breakdown: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ReputationTier:
    """Named reputation band shown on profiles."""

    name: str
    description: str


def reputation_tier(score: float) -> ReputationTier:
    """Return the reputation band for a score."""
    if score >= 85:
        return ReputationTier("Trusted Authority", "Consistently high-quality contributor")
    if score >= 70:
        return ReputationTier("Reliable", "Generally trustworthy content")
    if score >= 50:
        return ReputationTier("Participant", "Moderate quality contributions")
    return ReputationTier("New Member", "Build reputation through quality posts")


def clamp_reputation(value: float) -> float:
    """Clamp a reputation score to [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, value))


def format_reason(breakdown: dict[str, float]) -> str:
    """Serialize a breakdown for the reputation history."""
    return f"Reputation update: {json.dumps(breakdown, sort_keys=True)}"


def _add(breakdown: dict[str, float], key: str, amount: float) -> None:
    breakdown[key] = breakdown.get(key, 0.0) + amount


class ReputationEngine:
    """Recomputes and persists user reputation scores.

    `recompute` is `compute` followed by `persist`. The two halves are exposed
    separately because concurrent recomputes for one user are not serialized:
    both read the same inputs and the last `persist` wins, each leaving its
    own history entry.
    """

    def __init__(
        self,
        db: Session,
        *,
        weights: ReputationWeights = DEFAULT_WEIGHTS,
        base_score: float | None = None,
    ) -> None:
        self.db = db
        self.weights = weights
        self.base_score = settings.reputation_base_score if base_score is None else base_score

    def recompute(self, user_id: str) -> ReputationResult:
        """Recompute, persist and return a user's reputation.

        Raises:
            NotFoundError: If the user does not exist.
            StorageError: If the datastore fails while reading or writing.
        """
        result = self.compute(user_id)
        self.persist(result)
        logger.info(
            "Reputation for %s: %.2f -> %.2f (%+.2f)",
            user_id,
            result.old_score,
            result.new_score,
            result.delta,
        )
        return result

    def compute(self, user_id: str) -> ReputationResult:
        """Derive a user's reputation from current data without writing it."""
        try:
            user = self.db.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")
            old_score = float(user.reputation_score)

            posts = (
                self.db.query(
                    Post.overall_score,
                    Post.misinformation_risk,
                    Post.is_flagged,
                    Post.likes_count,
                )
                .filter(Post.user_id == user_id)
                .all()
            )
            replies = (
                self.db.query(Reply.likes_count, Post.overall_score)
                .join(Post, Reply.post_id == Post.id)
                .filter(Reply.user_id == user_id)
                .all()
            )
            follower_count = (
                self.db.query(func.count(Follow.id))
                .filter(Follow.following_id == user_id)
                .scalar()
                or 0
            )
            pending_flags = (
                self.db.query(func.count(ModerationFlag.id))
                .join(Post, ModerationFlag.post_id == Post.id)
                .filter(
                    Post.user_id == user_id,
                    ModerationFlag.status == FLAG_STATUS_PENDING,
                )
                .scalar()
                or 0
            )
        except SQLAlchemyError as exc:
            logger.error("Failed to load reputation inputs for %s", user_id, exc_info=True)
            raise StorageError("Failed to load reputation inputs") from exc

        w = self.weights
        breakdown: dict[str, float] = {}

        for overall_score, misinformation_risk, is_flagged, likes_count in posts:
            if overall_score >= w.quality_threshold:
                _add(breakdown, HIGH_QUALITY_POSTS, w.high_quality_post_bonus)
            if misinformation_risk >= w.misinformation_threshold:
                _add(breakdown, MISINFORMATION_PENALTY, w.misinformation_penalty)
            if is_flagged:
                _add(breakdown, FLAGGED_CONTENT, w.flagged_post_penalty)
            _add(breakdown, ENGAGEMENT_LIKES, likes_count * w.like_bonus)

        for likes_count, parent_overall_score in replies:
            if parent_overall_score >= w.quality_threshold:
                _add(breakdown, HELPFUL_REPLIES, w.helpful_reply_bonus)
            _add(breakdown, REPLY_ENGAGEMENT, likes_count * w.like_bonus)

        if follower_count > 0:
            breakdown[FOLLOWER_BONUS] = min(follower_count * w.follower_bonus, w.follower_bonus_cap)

        if pending_flags > 0:
            breakdown[MULTIPLE_FLAGS] = pending_flags * w.pending_flag_penalty

        breakdown = {key: round(value, ROUND_DIGITS) for key, value in breakdown.items()}
        delta = round(sum(breakdown.values()), ROUND_DIGITS)

        return ReputationResult(
            user_id=user_id,
            old_score=old_score,
            new_score=clamp_reputation(self.base_score + delta),
            delta=delta,
            breakdown=breakdown,
        )

    def persist(self, result: ReputationResult) -> None:
        """Store the new score and its history entry in one transaction."""
        try:
            user = self.db.get(User, result.user_id)
            if user is None:
                raise NotFoundError("User not found")

            user.reputation_score = result.new_score
            self.db.add(
                ReputationHistory(
                    user_id=result.user_id,
                    old_score=result.old_score,
                    new_score=result.new_score,
                    reason=format_reason(result.breakdown),
                )
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to persist reputation for %s", result.user_id, exc_info=True)
            raise StorageError("Failed to persist reputation update") from exc


def recompute_all(db: Session, *, batch_size: int = 500) -> int:
    """Recompute every user's reputation; return how many users were updated."""
    engine = ReputationEngine(db)
    updated = 0
    offset = 0
    while True:
        user_ids = [
            row[0]
            for row in db.query(User.id).order_by(User.id).offset(offset).limit(batch_size).all()
        ]
        if not user_ids:
            break
        for user_id in user_ids:
            try:
                engine.recompute(user_id)
            except NotFoundError:
                continue
            updated += 1
        offset += batch_size
    return updated
