"""Moderation services for Thrryv."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from thrryv_stage.core.errors import InvalidInputError, NotFoundError, StorageError
from thrryv_stage.core.settings import settings
from thrryv_stage.db.session import utcnow
from thrryv_stage.models import ModerationFlag, Post, User
from thrryv_stage.models.moderation import (
    FLAG_STATUS_APPROVED,
    FLAG_STATUS_PENDING,
    FLAG_STATUS_REJECTED,
)
from thrryv_stage.repositories.post_repo import PostRepository
from thrryv_stage.services.reputation_worker import RecomputeDispatcher

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlagOutcome:
    """Result of a flag submission."""

    flag_id: int
    post_id: int
    post_flagged: bool
    recompute_requested: bool


@dataclass(frozen=True)
class PlatformCounts:
    """Counters shown on the moderation dashboard."""

    total_users: int
    total_posts: int
    flagged_posts: int
    pending_flags: int


class ModerationService:
    """Service handling flag submission and administrative decisions."""

    def __init__(
        self,
        db: Session,
        dispatch_recompute: RecomputeDispatcher,
        *,
        misinformation_threshold: float | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            db: Database session
            dispatch_recompute: Emits a reputation recompute request for a user id
            misinformation_threshold: Risk at or above which a reported post is flagged
        """
        self.db = db
        self.posts = PostRepository(db)
        self.dispatch_recompute = dispatch_recompute
        self.misinformation_threshold = (
            settings.misinformation_flag_threshold
            if misinformation_threshold is None
            else misinformation_threshold
        )

    def flag(self, post_id: int | None, reporter_id: str, reason: str | None) -> FlagOutcome:
        """Record a report against a post.

        The first report against a high-risk post also marks the post flagged
        and requests a reputation recompute for its author. Later reports only
        add rows.

        Raises:
            InvalidInputError: If the reason or post id is missing.
            NotFoundError: If the post does not exist.
            StorageError: If the flag cannot be stored.
        """
        if post_id is None or reason is None or not reason.strip():
            raise InvalidInputError("postId and reason are required")

        post = self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")

        flag = ModerationFlag(
            post_id=post.id,
            user_id=reporter_id,
            reason=reason,
            status=FLAG_STATUS_PENDING,
        )
        post_flagged = False
        try:
            self.db.add(flag)
            if post.misinformation_risk >= self.misinformation_threshold and not post.is_flagged:
                post.is_flagged = True
                post.flagged_reason = reason
                post_flagged = True
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to record flag on post %s", post_id, exc_info=True)
            raise StorageError("Failed to flag content") from exc

        recompute_requested = False
        if post_flagged:
            logger.info("Post %s flagged after report (risk %.1f)", post.id, post.misinformation_risk)
            recompute_requested = self._request_recompute(post.user_id)

        return FlagOutcome(
            flag_id=flag.id,
            post_id=post.id,
            post_flagged=post_flagged,
            recompute_requested=recompute_requested,
        )

    def approve_flag(self, flag_id: int, admin_notes: str | None = None) -> ModerationFlag:
        """Uphold a report: close the flag as approved and remove the post.

        Other pending reports against the same post are closed as approved too,
        since the content they point at no longer exists.
        """
        flag = self._get_pending_flag(flag_id)
        now = utcnow()
        author_id: str | None = None

        try:
            flag.status = FLAG_STATUS_APPROVED
            flag.admin_notes = admin_notes
            flag.reviewed_at = now

            post = self.posts.get_by_id(flag.post_id) if flag.post_id is not None else None
            if post is not None:
                author_id = post.user_id
                siblings = (
                    self.db.query(ModerationFlag)
                    .filter(ModerationFlag.post_id == post.id, ModerationFlag.id != flag.id)
                    .all()
                )
                for sibling in siblings:
                    if sibling.status == FLAG_STATUS_PENDING:
                        sibling.status = FLAG_STATUS_APPROVED
                        sibling.reviewed_at = now
                    sibling.post_id = None
                flag.post_id = None
                # Detach the audit rows before the post row goes away.
                self.db.flush()
                self.posts.delete(post)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to approve flag %s", flag_id, exc_info=True)
            raise StorageError("Failed to approve flag") from exc

        logger.info("Flag %s approved; post removed for author %s", flag_id, author_id)
        if author_id is not None:
            self._request_recompute(author_id)
        return flag

    def reject_flag(self, flag_id: int, admin_notes: str | None = None) -> ModerationFlag:
        """Dismiss a report; the content stays as it is."""
        flag = self._get_pending_flag(flag_id)

        try:
            flag.status = FLAG_STATUS_REJECTED
            flag.admin_notes = admin_notes
            flag.reviewed_at = utcnow()
            post = self.posts.get_by_id(flag.post_id) if flag.post_id is not None else None
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to reject flag %s", flag_id, exc_info=True)
            raise StorageError("Failed to reject flag") from exc

        logger.info("Flag %s rejected", flag_id)
        if post is not None:
            self._request_recompute(post.user_id)
        return flag

    def list_pending_flags(self, limit: int = 50) -> list[ModerationFlag]:
        """Return pending flags, newest first."""
        return (
            self.db.query(ModerationFlag)
            .filter(ModerationFlag.status == FLAG_STATUS_PENDING)
            .order_by(ModerationFlag.id.desc())
            .limit(limit)
            .all()
        )

    def platform_counts(self) -> PlatformCounts:
        """Return dashboard counters."""
        return PlatformCounts(
            total_users=self.db.query(func.count(User.id)).scalar() or 0,
            total_posts=self.db.query(func.count(Post.id)).scalar() or 0,
            flagged_posts=(
                self.db.query(func.count(Post.id)).filter(Post.is_flagged.is_(True)).scalar() or 0
            ),
            pending_flags=(
                self.db.query(func.count(ModerationFlag.id))
                .filter(ModerationFlag.status == FLAG_STATUS_PENDING)
                .scalar()
                or 0
            ),
        )

    def _get_pending_flag(self, flag_id: int) -> ModerationFlag:
        flag = self.db.get(ModerationFlag, flag_id)
        if flag is None:
            raise NotFoundError("Flag not found")
        if flag.status != FLAG_STATUS_PENDING:
            raise InvalidInputError("Flag has already been reviewed")
        return flag

    def _request_recompute(self, user_id: str) -> bool:
        # The triggering action already succeeded; a failed request is only logged.
        try:
            self.dispatch_recompute(user_id)
        except Exception:
            logger.error("Failed to request reputation recompute for %s", user_id, exc_info=True)
            return False
        return True
