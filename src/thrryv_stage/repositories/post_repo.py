"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy.orm import Session

from thrryv_stage.models.post import Post
from thrryv_stage.models.user import User
from thrryv_stage.schemas.evaluation import Evaluation

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_feed(self, limit: int, before: int | None = None) -> list[Post]:
        """Return unflagged posts, newest first."""
        query = self.session.query(Post).filter(Post.is_flagged.is_(False))
        if before is not None:
            query = query.filter(Post.id < before)
        return query.order_by(Post.id.desc()).limit(limit).all()

    def list_by_author(self, user_id: str, limit: int | None = None) -> list[Post]:
        """Return a user's posts, newest first."""
        query = self.session.query(Post).filter(Post.user_id == user_id).order_by(Post.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, *, author: User, content: str, evaluation: Evaluation) -> Post:
        """Insert a scored post and bump the author's post counter.

        Args:
            author: User writing the post.
            content: Post body.
            evaluation: Evaluation that already went through the score normalizer.
        """
        post = Post(
            user_id=author.id,
            content=content,
            quality_score=evaluation.quality_score,
            credibility_score=evaluation.credibility_score,
            misinformation_risk=evaluation.misinformation_risk,
            overall_score=evaluation.overall_score,
            ai_evaluation=evaluation.model_dump(mode="json"),
        )
        self.session.add(post)
        author.total_posts = (author.total_posts or 0) + 1
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post together with its replies and likes."""
        author = self.session.get(User, post.user_id)
        if author is not None and author.total_posts > 0:
            author.total_posts -= 1
        self.session.delete(post)
        self.session.flush()
