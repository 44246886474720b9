"""Message Service — admin broadcasts and per-user seen tracking.

Invariants:
    - Messages listed newest first
    - mark_message_as_seen / mark_all_as_seen are idempotent
    - Every committed change wakes message stream subscribers
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import MessageId
from skillswap.core.errors import ResourceNotFoundError
from skillswap.core.message_rules import clean_message_text, count_unseen, is_unseen
from skillswap.core.ordering import newest_first
from skillswap.infrastructure.broadcaster import message_events
from skillswap.models import Message, MessageReceipt, User

logger = logging.getLogger(__name__)


async def create_admin_message(
    db: AsyncSession, admin: User, text: str, max_length: int,
) -> Message:
    body = clean_message_text(text, max_length)
    message = Message(message=body, created_by=admin.id, receipts=[])
    db.add(message)
    await db.commit()
    message_events.publish()
    logger.info(
        "Platform message sent",
        extra={"message_id": message.id, "user_id": admin.id},
    )
    return message


async def get_messages(db: AsyncSession) -> list[Message]:
    result = await db.execute(select(Message))
    return newest_first(list(result.scalars().all()))


async def get_message_or_404(db: AsyncSession, message_id: MessageId) -> Message:
    message = await db.get(Message, message_id)
    if message is None:
        raise ResourceNotFoundError("Message", str(message_id))
    return message


async def mark_message_as_seen(
    db: AsyncSession, message_id: UUID, user_id: UUID,
) -> bool:
    """Add user to seen_by. Returns False when it was already there."""
    message = await get_message_or_404(db, message_id)
    if not is_unseen(message.seen_by, user_id):
        return False
    message.receipts.append(MessageReceipt(user_id=user_id))
    try:
        await db.commit()
    except IntegrityError:
        # Another request recorded the same receipt first
        await db.rollback()
        return False
    message_events.publish()
    return True


async def _add_missing_receipts(db: AsyncSession, user_id: UUID) -> int:
    marked = 0
    for message in await get_messages(db):
        if is_unseen(message.seen_by, user_id):
            message.receipts.append(MessageReceipt(user_id=user_id))
            marked += 1
    return marked


async def mark_all_as_seen(db: AsyncSession, user_id: UUID) -> int:
    """Mark every unseen message for user. Returns how many were marked."""
    marked = await _add_missing_receipts(db, user_id)
    if not marked:
        return 0
    try:
        await db.commit()
    except IntegrityError:
        # Another request recorded some of the same receipts; redo on fresh rows
        await db.rollback()
        marked = await _add_missing_receipts(db, user_id)
        if not marked:
            return 0
        await db.commit()
    message_events.publish()
    logger.info(f"Marked {marked} message(s) as seen", extra={"user_id": user_id})
    return marked


async def unseen_count(db: AsyncSession, user_id: UUID) -> int:
    messages = await get_messages(db)
    return count_unseen([m.seen_by for m in messages], user_id)


async def delete_message(db: AsyncSession, admin: User, message_id: UUID) -> None:
    message = await get_message_or_404(db, message_id)
    await db.delete(message)
    await db.commit()
    message_events.publish()
    logger.info(
        "Platform message deleted",
        extra={"message_id": message_id, "user_id": admin.id},
    )


async def count_messages(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Message.id)))
    return int(result.scalar_one())
