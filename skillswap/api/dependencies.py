"""Auth Dependencies — resolve the caller from the bearer token.

Invariants:
    - get_current_user: 401 when the token is missing, invalid or its user is gone
    - get_optional_user: None for anonymous callers, never raises on a missing token
    - get_active_user: 403 USER_BANNED for banned users
    - get_complete_user: active and profile complete, else 403 PROFILE_INCOMPLETE
    - get_admin_user: active and role admin, else 403 PERMISSION_DENIED

Design Decisions:
    - HTTPBearer(auto_error=False): missing credentials surface as our own
      AuthenticationError envelope instead of FastAPI's default 403
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.core.domain_types import UserRole
from skillswap.core.errors import (
    AuthenticationError, PermissionDeniedError, ProfileIncompleteError,
    UserBannedError,
)
from skillswap.infrastructure.database import get_db
from skillswap.infrastructure.security import decode_access_token
from skillswap.models import User
from skillswap.services.user_service import get_user

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if credentials is None:
        return None
    user = await get_user(db, decode_access_token(credentials.credentials))
    if user is None:
        raise AuthenticationError("Account no longer exists", "INVALID_TOKEN")
    return user


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    if user is None:
        raise AuthenticationError()
    return user


async def get_active_user(user: User = Depends(get_current_user)) -> User:
    if user.is_banned:
        raise UserBannedError()
    return user


async def get_complete_user(user: User = Depends(get_active_user)) -> User:
    if not user.is_profile_complete:
        raise ProfileIncompleteError()
    return user


async def get_admin_user(user: User = Depends(get_active_user)) -> User:
    if user.role != UserRole.ADMIN.value:
        raise PermissionDeniedError("Admin access required.")
    return user
