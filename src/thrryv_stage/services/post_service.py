"""Service-level helpers for posts, replies and likes."""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from thrryv_stage.core.errors import InvalidInputError, NotFoundError
from thrryv_stage.core.settings import settings
from thrryv_stage.models import Post, PostLike, Reply, ReplyLike, User
from thrryv_stage.repositories.post_repo import PostRepository
from thrryv_stage.services.evaluator import ContentEvaluator
from thrryv_stage.services.normalizer import normalize


async def create_post(
    *,
    repo: PostRepository,
    evaluator: ContentEvaluator,
    author: User,
    content: str,
) -> Post:
    """Evaluate, normalize and store a new post.

    Args:
        repo: Repository used to persist the post.
        evaluator: Evaluator producing the post's scores.
        author: User writing the post.
        content: Post body submitted by the client.

    Returns:
        The persisted post.

    Raises:
        InvalidInputError: If the content is blank.
        EvaluationError: If the content could not be evaluated; nothing is stored.
    """
    evaluation = normalize(await evaluator.evaluate(content))
    post = repo.create(author=author, content=content, evaluation=evaluation)
    repo.session.commit()
    repo.session.refresh(post)
    return post


def get_post_or_404(db: Session, post_id: int) -> Post:
    """Return a post or raise `NotFoundError`."""
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def add_reply(db: Session, *, post_id: int, author: User, content: str) -> Reply:
    """Attach a reply to a post.

    Replies are not evaluated; they carry the configured neutral quality score.
    """
    if not content.strip():
        raise InvalidInputError("Reply content is required")
    post = get_post_or_404(db, post_id)
    reply = Reply(
        post_id=post.id,
        user_id=author.id,
        content=content,
        quality_score=settings.reply_default_quality_score,
    )
    db.add(reply)
    db.commit()
    db.refresh(reply)
    return reply


def like_post(db: Session, *, post_id: int, user: User) -> Post:
    """Like a post once; repeated likes are no-ops."""
    post = get_post_or_404(db, post_id)
    existing = (
        db.query(PostLike)
        .filter(PostLike.post_id == post.id, PostLike.user_id == user.id)
        .first()
    )
    if existing is None:
        db.add(PostLike(post_id=post.id, user_id=user.id))
        post.likes_count += 1
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent like from the same user.
            db.rollback()
    db.refresh(post)
    return post


def unlike_post(db: Session, *, post_id: int, user: User) -> Post:
    """Remove a like from a post if present."""
    post = get_post_or_404(db, post_id)
    existing = (
        db.query(PostLike)
        .filter(PostLike.post_id == post.id, PostLike.user_id == user.id)
        .first()
    )
    if existing is not None:
        db.delete(existing)
        post.likes_count = max(0, post.likes_count - 1)
        db.commit()
        db.refresh(post)
    return post


def _get_reply_or_404(db: Session, reply_id: int) -> Reply:
    reply = db.get(Reply, reply_id)
    if reply is None:
        raise NotFoundError("Reply not found")
    return reply


def like_reply(db: Session, *, reply_id: int, user: User) -> Reply:
    """Like a reply once; repeated likes are no-ops."""
    reply = _get_reply_or_404(db, reply_id)
    existing = (
        db.query(ReplyLike)
        .filter(ReplyLike.reply_id == reply.id, ReplyLike.user_id == user.id)
        .first()
    )
    if existing is None:
        db.add(ReplyLike(reply_id=reply.id, user_id=user.id))
        reply.likes_count += 1
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
    db.refresh(reply)
    return reply


def unlike_reply(db: Session, *, reply_id: int, user: User) -> Reply:
    """Remove a like from a reply if present."""
    reply = _get_reply_or_404(db, reply_id)
    existing = (
        db.query(ReplyLike)
        .filter(ReplyLike.reply_id == reply.id, ReplyLike.user_id == user.id)
        .first()
    )
    if existing is not None:
        db.delete(existing)
        reply.likes_count = max(0, reply.likes_count - 1)
        db.commit()
        db.refresh(reply)
    return reply
