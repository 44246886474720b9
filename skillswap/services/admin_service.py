"""Admin Service — platform overview counts for the admin dashboard."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import UserRole
from skillswap.models import User
from skillswap.schemas.admin import PlatformOverview, RequestCounts
from skillswap.services.message_service import count_messages
from skillswap.services.request_service import count_by_status


async def platform_overview(db: AsyncSession) -> PlatformOverview:
    users = (await db.execute(select(func.count(User.id)))).scalar_one()
    banned = (
        await db.execute(
            select(func.count(User.id)).where(User.is_banned.is_(True)),
        )
    ).scalar_one()
    admins = (
        await db.execute(
            select(func.count(User.id)).where(User.role == UserRole.ADMIN.value),
        )
    ).scalar_one()
    return PlatformOverview(
        users=users,
        banned_users=banned,
        admins=admins,
        requests=RequestCounts(**await count_by_status(db)),
        messages=await count_messages(db),
    )
