"""Admin Routes — moderation, platform messages and overview.

Invariants:
    - Every route requires an active admin (get_admin_user)
    - Admins cannot ban themselves or other admins (enforced in user_service)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.dependencies import get_admin_user
from skillswap.config import get_settings
from skillswap.core.domain_types import RequestStatus
from skillswap.infrastructure.database import get_db
from skillswap.models import User
from skillswap.schemas.admin import PlatformOverview
from skillswap.schemas.message import MessageCreate, MessageResponse
from skillswap.schemas.request import SkillRequestResponse
from skillswap.schemas.user import OwnProfile
from skillswap.services import admin_service, message_service, request_service, user_service

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/overview", response_model=PlatformOverview)
async def overview(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    return await admin_service.platform_overview(db)


# ─── Users ───────────────────────────────────────────────────────

@router.get("/users", response_model=list[OwnProfile])
async def all_users(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    users = await user_service.list_all_users(db)
    return [OwnProfile.from_model(u, include_feedback=False) for u in users]


@router.post("/users/{user_id}/ban", response_model=OwnProfile)
async def ban_user(
    user_id: UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.set_banned(db, admin, user_id, True)
    return OwnProfile.from_model(user)


@router.post("/users/{user_id}/unban", response_model=OwnProfile)
async def unban_user(
    user_id: UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.set_banned(db, admin, user_id, False)
    return OwnProfile.from_model(user)


# ─── Requests ────────────────────────────────────────────────────

@router.get("/requests", response_model=list[SkillRequestResponse])
async def all_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.get_all_requests(db, status_filter)


@router.delete("/requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    await request_service.delete_request(db, admin, request_id, as_admin=True)


# ─── Messages ────────────────────────────────────────────────────

@router.post(
    "/messages", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    body: MessageCreate,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    message = await message_service.create_admin_message(
        db, admin, body.message, get_settings().message_max_length,
    )
    return MessageResponse.from_model(message)


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    await message_service.delete_message(db, admin, message_id)
