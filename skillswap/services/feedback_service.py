"""Feedback Service — leave a rating on a profile and recompute its mean.

Invariants:
    - The new row and the recomputed rating are committed together
    - rating is recomputed from the stored rows inside the transaction, never
      from a client-side copy of the feedback list
    - The (to_user_id, from_user_id) unique constraint is the final guard
      against two concurrent submissions from the same giver
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.errors import DuplicateFeedbackError
from skillswap.core.ratings import (
    can_give_feedback, check_feedback_allowed, check_rating, clean_comment,
    mean_rating,
)
from skillswap.models import Feedback, User
from skillswap.services.request_service import has_accepted_request
from skillswap.services.user_service import get_user_profile

logger = logging.getLogger(__name__)


def _has_given(target: User, giver_id: UUID) -> bool:
    return any(f.from_user_id == giver_id for f in target.feedback_received)


async def feedback_eligibility(
    db: AsyncSession, giver: User, target_id: UUID,
) -> dict:
    target = await get_user_profile(db, target_id)
    accepted = await has_accepted_request(db, giver.id, target.id)
    given = _has_given(target, giver.id)
    return {
        "can_give_feedback": can_give_feedback(giver.id, target.id, accepted, given),
        "has_given_feedback": given,
        "has_accepted_request": accepted,
    }


async def submit_feedback(
    db: AsyncSession, giver: User, target_id: UUID, rating: int, comment: str,
) -> User:
    """Append feedback to target's profile and return the updated profile."""
    check_rating(rating)
    text = clean_comment(comment)
    target = await get_user_profile(db, target_id)
    accepted = await has_accepted_request(db, giver.id, target.id)
    check_feedback_allowed(giver.id, target.id, accepted, _has_given(target, giver.id))

    entry = Feedback(
        from_user_id=giver.id,
        from_name=giver.name,
        rating=rating,
        comment=text,
        created_at=datetime.now(timezone.utc),
    )
    target.feedback_received.append(entry)
    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        logger.warning(
            "Concurrent duplicate feedback rejected",
            extra={"user_id": giver.id, "target_user_id": target_id},
        )
        raise DuplicateFeedbackError()

    ratings = (
        await db.execute(
            select(Feedback.rating).where(Feedback.to_user_id == target.id),
        )
    ).scalars().all()
    target.rating = mean_rating(list(ratings))
    target.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info(
        "Feedback submitted",
        extra={"user_id": giver.id, "target_user_id": target.id},
    )
    return target
