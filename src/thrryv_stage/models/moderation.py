"""Models tracking user-submitted moderation flags."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from thrryv_stage.db.session import Base, utcnow

FLAG_STATUS_PENDING = "pending"
FLAG_STATUS_APPROVED = "approved"
FLAG_STATUS_REJECTED = "rejected"

FLAG_STATUSES = (FLAG_STATUS_PENDING, FLAG_STATUS_APPROVED, FLAG_STATUS_REJECTED)


class ModerationFlag(Base):
    """One user's report against one post.

    Lifecycle: pending -> approved | rejected. Both outcomes are terminal and
    reached only through an administrative decision.
    """

    __tablename__ = "moderation_flags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Nulled when an approved flag removes the post; the audit row survives.
    post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # Reporter, not the author of the flagged post.
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=FLAG_STATUS_PENDING,
        index=True,
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
