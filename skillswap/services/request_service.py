"""Request Service — create, list, answer and withdraw skill swap requests.

Invariants:
    - Received / sent / all lists are newest first (core/ordering.py)
    - Status answers and read marks come only from the recipient
    - Every committed change wakes the recipient's live stream (request_events)
    - has_accepted_request is directed: (from, to) != (to, from)
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import RequestId, RequestStatus
from skillswap.core.errors import (
    InvalidInputError, InvalidStatusTransitionError, ResourceNotFoundError,
)
from skillswap.core.ordering import newest_first
from skillswap.core.request_rules import (
    check_can_respond, check_can_withdraw, check_status_transition,
    validate_new_request,
)
from skillswap.infrastructure.broadcaster import request_events
from skillswap.models import SkillRequest, User
from skillswap.schemas.request import SkillRequestCreate

logger = logging.getLogger(__name__)


async def create_request(
    db: AsyncSession, sender: User, payload: SkillRequestCreate,
) -> SkillRequest:
    """Send a pending, unread request from sender to payload.to_user_id."""
    target = await db.get(User, payload.to_user_id)
    if target is None:
        raise ResourceNotFoundError("User", str(payload.to_user_id))
    if target.is_banned:
        raise InvalidInputError(
            "This user is not accepting requests.", "to_user_id",
        )
    clean = validate_new_request(
        sender.id, target.id, sender.skills_offered,
        payload.offered_skill, payload.wanted_skill, payload.message,
    )
    now = datetime.now(timezone.utc)
    request = SkillRequest(
        from_user_id=sender.id,
        from_user_name=sender.name,
        from_user_photo=sender.profile_photo_url or "",
        to_user_id=target.id,
        to_user_name=target.name,
        offered_skill=clean.offered_skill,
        wanted_skill=clean.wanted_skill,
        message=clean.message,
        status=RequestStatus.PENDING.value,
        is_read=False,
        created_at=now,
        updated_at=now,
    )
    db.add(request)
    await db.commit()
    request_events.publish(target.id)
    logger.info(
        "Skill request created",
        extra={"request_id": request.id, "user_id": sender.id, "target_user_id": target.id},
    )
    return request


async def get_request_or_404(db: AsyncSession, request_id: RequestId) -> SkillRequest:
    request = await db.get(SkillRequest, request_id)
    if request is None:
        raise ResourceNotFoundError("Request", str(request_id))
    return request


async def _list(db: AsyncSession, *criteria) -> list[SkillRequest]:
    result = await db.execute(select(SkillRequest).where(*criteria))
    return newest_first(list(result.scalars().all()))


async def get_received_requests(
    db: AsyncSession, user_id: UUID, status: RequestStatus | None = None,
) -> list[SkillRequest]:
    criteria = [SkillRequest.to_user_id == user_id]
    if status is not None:
        criteria.append(SkillRequest.status == status.value)
    return await _list(db, *criteria)


async def get_sent_requests(
    db: AsyncSession, user_id: UUID, status: RequestStatus | None = None,
) -> list[SkillRequest]:
    criteria = [SkillRequest.from_user_id == user_id]
    if status is not None:
        criteria.append(SkillRequest.status == status.value)
    return await _list(db, *criteria)


async def get_all_requests(
    db: AsyncSession, status: RequestStatus | None = None,
) -> list[SkillRequest]:
    criteria = []
    if status is not None:
        criteria.append(SkillRequest.status == status.value)
    return await _list(db, *criteria)


async def update_request_status(
    db: AsyncSession, actor: User, request_id: UUID, status: RequestStatus,
) -> SkillRequest:
    request = await get_request_or_404(db, request_id)
    check_can_respond(request.to_user_id, actor.id)
    check_status_transition(request.status, status)
    # Conditional write: a concurrent answer leaves no pending row to match
    result = await db.execute(
        update(SkillRequest)
        .where(
            SkillRequest.id == request.id,
            SkillRequest.status == RequestStatus.PENDING.value,
        )
        .values(status=status.value, updated_at=datetime.now(timezone.utc)),
    )
    if result.rowcount == 0:
        await db.rollback()
        await db.refresh(request)
        raise InvalidStatusTransitionError(request.status, status.value)
    await db.commit()
    request_events.publish(request.to_user_id)
    logger.info(
        "Skill request answered",
        extra={"request_id": request.id, "user_id": actor.id, "status": status.value},
    )
    return request


async def mark_request_as_read(
    db: AsyncSession, actor: User, request_id: UUID,
) -> SkillRequest:
    request = await get_request_or_404(db, request_id)
    check_can_respond(request.to_user_id, actor.id)
    if not request.is_read:
        request.is_read = True
        request.updated_at = datetime.now(timezone.utc)
        await db.commit()
        request_events.publish(request.to_user_id)
    return request


async def delete_request(
    db: AsyncSession, actor: User, request_id: UUID, as_admin: bool = False,
) -> None:
    """Sender withdraws a pending request; admins may delete any request."""
    request = await get_request_or_404(db, request_id)
    if not as_admin:
        check_can_withdraw(request.from_user_id, request.status, actor.id)
    recipient = request.to_user_id
    await db.delete(request)
    await db.commit()
    request_events.publish(recipient)
    logger.info(
        "Skill request deleted",
        extra={"request_id": request_id, "user_id": actor.id},
    )


async def unread_count(db: AsyncSession, user_id: UUID) -> int:
    result = await db.execute(
        select(func.count(SkillRequest.id)).where(
            SkillRequest.to_user_id == user_id,
            SkillRequest.is_read.is_(False),
        ),
    )
    return int(result.scalar_one())


async def has_accepted_request(
    db: AsyncSession, from_user_id: UUID, to_user_id: UUID,
) -> bool:
    result = await db.execute(
        select(SkillRequest.id).where(
            SkillRequest.from_user_id == from_user_id,
            SkillRequest.to_user_id == to_user_id,
            SkillRequest.status == RequestStatus.ACCEPTED.value,
        ).limit(1),
    )
    return result.first() is not None


async def count_by_status(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(
        select(SkillRequest.status, func.count(SkillRequest.id))
        .group_by(SkillRequest.status),
    )
    return {status: int(count) for status, count in result.all()}
