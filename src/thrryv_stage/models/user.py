"""SQLAlchemy models for user identities and their reputation."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from thrryv_stage.db.session import Base, utcnow

DEFAULT_REPUTATION_SCORE = 50.0


class User(Base):
    """Platform member keyed by the identifier issued by the external auth provider."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Written only by the reputation engine; always within [0, 100].
    reputation_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=DEFAULT_REPUTATION_SCORE,
    )
    total_posts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    followers_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    following_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
