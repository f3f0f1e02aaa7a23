"""Post-related endpoints for the Thrryv API."""

from fastapi import APIRouter, Query, status

from thrryv_stage.api.v1.dependencies import CurrentUserDep, EvaluatorDep, SessionDep
from thrryv_stage.models import Post, Reply
from thrryv_stage.repositories.post_repo import PostRepository
from thrryv_stage.schemas.post import (
    LikeResponse,
    PostCreate,
    PostDetailResponse,
    PostResponse,
    ReplyCreate,
    ReplyResponse,
)
from thrryv_stage.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])
replies_router = APIRouter(prefix="/replies", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    before: int | None = Query(None, description="Return posts with an id below this one"),
) -> list[Post]:
    """List unflagged posts, newest first."""
    return PostRepository(db).list_feed(limit, before)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    evaluator: EvaluatorDep,
) -> Post:
    """Create a post scored by the content evaluator."""
    return await post_service.create_post(
        repo=PostRepository(db),
        evaluator=evaluator,
        author=current_user,
        content=post_data.content,
    )


@router.get("/{post_id}", response_model=PostDetailResponse)
async def get_post(post_id: int, db: SessionDep) -> Post:
    """Return a post with its evaluation and replies."""
    return post_service.get_post_or_404(db, post_id)


@router.post(
    "/{post_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    post_id: int,
    reply_data: ReplyCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Reply:
    """Reply to a post."""
    return post_service.add_reply(db, post_id=post_id, author=current_user, content=reply_data.content)


@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Like a post."""
    post = post_service.like_post(db, post_id=post_id, user=current_user)
    return LikeResponse(liked=True, likes_count=post.likes_count)


@router.delete("/{post_id}/like", response_model=LikeResponse)
async def unlike_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Remove a like from a post."""
    post = post_service.unlike_post(db, post_id=post_id, user=current_user)
    return LikeResponse(liked=False, likes_count=post.likes_count)


@replies_router.post("/{reply_id}/like", response_model=LikeResponse)
async def like_reply(reply_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Like a reply."""
    reply = post_service.like_reply(db, reply_id=reply_id, user=current_user)
    return LikeResponse(liked=True, likes_count=reply.likes_count)


@replies_router.delete("/{reply_id}/like", response_model=LikeResponse)
async def unlike_reply(reply_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Remove a like from a reply."""
    reply = post_service.unlike_reply(db, reply_id=reply_id, user=current_user)
    return LikeResponse(liked=False, likes_count=reply.likes_count)
