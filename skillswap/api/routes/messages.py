"""Platform Message Routes — list, seen marks and live stream for members.

Admin create/delete live in routes/admin.py. The stream closes its auth
session before streaming; snapshots read through their own sessions.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.dependencies import get_active_user
from skillswap.api.routes.stream_helpers import SSE_HEADERS, snapshot_stream
from skillswap.config import get_settings
from skillswap.infrastructure.broadcaster import ALL, message_events
from skillswap.infrastructure.database import get_db
from skillswap.models import User
from skillswap.schemas.message import MarkSeenResult, MessageResponse
from skillswap.schemas.request import UnreadCount
from skillswap.services import message_service

router = APIRouter(prefix="/api/v1/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    messages = await message_service.get_messages(db)
    return [MessageResponse.from_model(m, viewer_id=user.id) for m in messages]


@router.get("/unread-count", response_model=UnreadCount)
async def unread_messages(
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return UnreadCount(unread=await message_service.unseen_count(db, user.id))


@router.post("/seen", response_model=MarkSeenResult)
async def mark_all_seen(
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return MarkSeenResult(marked=await message_service.mark_all_as_seen(db, user.id))


@router.get("/stream")
async def stream_messages(
    request: Request,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    """SSE: message list (with is_unread for the caller) now and after every change."""
    user_id = user.id
    # Release the auth session now; each snapshot opens its own
    await db.close()

    async def load(db: AsyncSession) -> dict:
        messages = await message_service.get_messages(db)
        views = [MessageResponse.from_model(m, viewer_id=user_id) for m in messages]
        return {
            "messages": [v.model_dump(mode="json") for v in views],
            "unread": sum(1 for v in views if v.is_unread),
        }

    return StreamingResponse(
        snapshot_stream(
            request, message_events, ALL, load,
            get_settings().stream_keepalive_seconds,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/{message_id}/seen", response_model=MarkSeenResult)
async def mark_seen(
    message_id: UUID,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    marked = await message_service.mark_message_as_seen(db, message_id, user.id)
    return MarkSeenResult(marked=int(marked))
