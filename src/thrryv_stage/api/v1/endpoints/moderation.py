"""Moderation endpoints for the Thrryv API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from thrryv_stage.api.v1.dependencies import AdminUserDep, CurrentUserDep, ModerationServiceDep
from thrryv_stage.models import ModerationFlag
from thrryv_stage.schemas.moderation import (
    FlagContentRequest,
    FlagContentResponse,
    FlagDecision,
    ModerationFlagResponse,
    PlatformStats,
)

router = APIRouter(tags=["moderation"])
admin_router = APIRouter(prefix="/admin", tags=["moderation", "admin"])


@router.post("/flag-content", response_model=FlagContentResponse)
async def flag_content(
    payload: FlagContentRequest,
    current_user: CurrentUserDep,
    moderation: ModerationServiceDep,
) -> FlagContentResponse:
    """Report a post for moderation."""
    moderation.flag(payload.post_id, current_user.id, payload.reason)
    return FlagContentResponse(success=True)


@admin_router.get("/flags", response_model=list[ModerationFlagResponse])
async def list_pending_flags(
    _admin: AdminUserDep,
    moderation: ModerationServiceDep,
    limit: int = Query(50, ge=1, le=100),
) -> list[ModerationFlag]:
    """List pending flags, newest first."""
    return moderation.list_pending_flags(limit)


@admin_router.get("/stats", response_model=PlatformStats)
async def platform_stats(_admin: AdminUserDep, moderation: ModerationServiceDep) -> PlatformStats:
    """Return moderation dashboard counters."""
    counts = moderation.platform_counts()
    return PlatformStats(
        total_users=counts.total_users,
        total_posts=counts.total_posts,
        flagged_posts=counts.flagged_posts,
        pending_flags=counts.pending_flags,
    )


@admin_router.post("/flags/{flag_id}/approve", response_model=ModerationFlagResponse)
async def approve_flag(
    flag_id: int,
    _admin: AdminUserDep,
    moderation: ModerationServiceDep,
    decision: FlagDecision | None = None,
) -> ModerationFlag:
    """Uphold a flag and remove the reported post."""
    return moderation.approve_flag(flag_id, decision.admin_notes if decision else None)


@admin_router.post("/flags/{flag_id}/reject", response_model=ModerationFlagResponse)
async def reject_flag(
    flag_id: int,
    _admin: AdminUserDep,
    moderation: ModerationServiceDep,
    decision: FlagDecision | None = None,
) -> ModerationFlag:
    """Dismiss a flag; the post is left untouched."""
    return moderation.reject_flag(flag_id, decision.admin_notes if decision else None)
