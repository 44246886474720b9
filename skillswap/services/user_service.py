"""User Service — profile reads, owner edits, public browse and moderation.

Invariants:
    - get_public_users returns public, complete, non-banned profiles, never the caller
    - update_user_profile recomputes is_profile_complete from the stored values
    - Admins cannot ban themselves or other admins
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import ALL_AVAILABILITY, UserId, UserRole
from skillswap.core.errors import PermissionDeniedError, ResourceNotFoundError
from skillswap.core.profile_rules import is_profile_complete, normalize_skills
from skillswap.core.user_search import PageSlice, filter_users, paginate
from skillswap.models import User
from skillswap.schemas.user import ProfileUpdate

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: UUID) -> User | None:
    return await db.get(User, user_id)


async def get_user_profile(db: AsyncSession, user_id: UserId) -> User:
    """Get user or raise 404."""
    user = await db.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def update_user_profile(
    db: AsyncSession, user: User, changes: ProfileUpdate,
) -> User:
    """Apply the owner's edits; None fields are left unchanged."""
    fields = changes.model_dump(exclude_unset=True)

    if fields.get("name") is not None:
        user.name = fields["name"]
    if "location" in fields:
        user.location = (fields["location"] or "").strip() or None
    if "profile_photo_url" in fields:
        user.profile_photo_url = (fields["profile_photo_url"] or "").strip() or None
    if fields.get("skills_offered") is not None:
        user.skills_offered = normalize_skills(fields["skills_offered"])
    if fields.get("skills_wanted") is not None:
        user.skills_wanted = normalize_skills(fields["skills_wanted"])
    if "availability" in fields:
        availability = fields["availability"]
        user.availability = availability.value if availability else None
    if fields.get("is_public") is not None:
        user.is_public = fields["is_public"]
    if "contact_info" in fields:
        contact = changes.contact_info
        user.contact_info = (
            contact.model_dump(exclude_none=True) if contact else None
        ) or None

    user.is_profile_complete = is_profile_complete(
        user.name, user.skills_offered, user.skills_wanted, user.availability,
    )
    user.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info(
        "Profile updated",
        extra={"user_id": user.id, "status": "complete" if user.is_profile_complete else "incomplete"},
    )
    return user


async def get_public_users(
    db: AsyncSession, exclude_user_id: UUID | None = None,
) -> list[User]:
    """Profiles visible on the Home page."""
    query = (
        select(User)
        .where(
            User.is_public.is_(True),
            User.is_profile_complete.is_(True),
            User.is_banned.is_(False),
        )
        .order_by(User.created_at.desc())
    )
    if exclude_user_id is not None:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def browse_users(
    db: AsyncSession,
    exclude_user_id: UUID | None,
    query: str = "",
    availability: str = ALL_AVAILABILITY,
    page: int = 1,
    per_page: int = 6,
) -> PageSlice[User]:
    users = await get_public_users(db, exclude_user_id)
    return paginate(filter_users(users, query, availability), page, per_page)


async def list_all_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def set_banned(
    db: AsyncSession, admin: User, user_id: UUID, banned: bool,
) -> User:
    """Ban or unban a user. Idempotent."""
    target = await get_user_profile(db, user_id)
    if target.id == admin.id:
        raise PermissionDeniedError("Admins cannot ban themselves.")
    if target.role == UserRole.ADMIN.value:
        raise PermissionDeniedError("Admins cannot ban other admins.")
    if target.is_banned != banned:
        target.is_banned = banned
        target.updated_at = datetime.now(timezone.utc)
        await db.commit()
        logger.info(
            f"User {'banned' if banned else 'unbanned'}",
            extra={"user_id": admin.id, "target_user_id": target.id},
        )
    return target
