"""Auth Service — account creation and credential checks."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import UserRole
from skillswap.core.errors import AuthenticationError, ConflictError
from skillswap.infrastructure.security import hash_password, verify_password
from skillswap.models import User
from skillswap.services.user_service import get_user_by_email

logger = logging.getLogger(__name__)


async def signup(
    db: AsyncSession,
    email: str,
    password: str,
    name: str | None = None,
    admin_emails: list[str] | None = None,
) -> User:
    """Create an account with an empty, incomplete profile."""
    email = email.strip().lower()
    if await get_user_by_email(db, email):
        raise ConflictError("An account with this email already exists.")

    is_admin = email in {e.strip().lower() for e in admin_emails or []}
    user = User(
        email=email,
        password_hash=hash_password(password),
        name=(name or "").strip(),
        skills_offered=[],
        skills_wanted=[],
        role=UserRole.ADMIN.value if is_admin else UserRole.USER.value,
        is_profile_complete=False,
        feedback_received=[],
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("An account with this email already exists.")
    logger.info("Account created", extra={"user_id": user.id})
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid email or password", "INVALID_CREDENTIALS")
    return user
