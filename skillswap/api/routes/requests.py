"""Skill Request Routes — send, list, answer, read-mark, withdraw and live stream.

Invariants:
    - Sending needs an active caller with a complete profile
    - Every other route needs an active caller; recipient/sender checks live in services
    - Static paths (/received, /sent, /unread-count, /stream) are declared before /{request_id}
    - The stream emits {"requests": [...], "unread": n} on connect and after each change
    - The stream holds no DB session between snapshots (auth session closed up front)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.dependencies import get_active_user, get_complete_user
from skillswap.api.routes.stream_helpers import SSE_HEADERS, snapshot_stream
from skillswap.config import get_settings
from skillswap.core.domain_types import RequestStatus
from skillswap.infrastructure.broadcaster import request_events
from skillswap.infrastructure.database import get_db
from skillswap.models import User
from skillswap.schemas.request import (
    SkillRequestCreate, SkillRequestResponse, StatusUpdate, UnreadCount,
)
from skillswap.services import request_service

router = APIRouter(prefix="/api/v1/requests", tags=["requests"])


@router.post(
    "", response_model=SkillRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_request(
    body: SkillRequestCreate,
    sender: User = Depends(get_complete_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.create_request(db, sender, body)


@router.get("/received", response_model=list[SkillRequestResponse])
async def received_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.get_received_requests(db, user.id, status_filter)


@router.get("/sent", response_model=list[SkillRequestResponse])
async def sent_requests(
    status_filter: RequestStatus | None = Query(None, alias="status"),
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.get_sent_requests(db, user.id, status_filter)


@router.get("/unread-count", response_model=UnreadCount)
async def unread_requests(
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return UnreadCount(unread=await request_service.unread_count(db, user.id))


@router.get("/stream")
async def stream_received_requests(
    request: Request,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    """SSE: received-request snapshot now and after every change for the caller."""
    user_id = user.id
    # Release the auth session now; each snapshot opens its own
    await db.close()

    async def load(db: AsyncSession) -> dict:
        received = await request_service.get_received_requests(db, user_id)
        return {
            "requests": [
                SkillRequestResponse.model_validate(r).model_dump(mode="json")
                for r in received
            ],
            "unread": sum(1 for r in received if not r.is_read),
        }

    return StreamingResponse(
        snapshot_stream(
            request, request_events, user_id, load,
            get_settings().stream_keepalive_seconds,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.patch("/{request_id}/status", response_model=SkillRequestResponse)
async def answer_request(
    request_id: UUID,
    body: StatusUpdate,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.update_request_status(
        db, user, request_id, RequestStatus(body.status),
    )


@router.post("/{request_id}/read", response_model=SkillRequestResponse)
async def mark_read(
    request_id: UUID,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.mark_request_as_read(db, user, request_id)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def withdraw_request(
    request_id: UUID,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    await request_service.delete_request(db, user, request_id)
