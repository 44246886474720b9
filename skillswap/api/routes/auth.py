"""Auth Routes — signup, login and the caller's session state.

Invariants:
    - Signup and login both return a fresh access token plus the caller's own profile
    - Banned users can log in; /me reports is_banned and lands them on the banned page
    - /me never requires a token: anonymous callers get is_authenticated=False
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.dependencies import get_optional_user
from skillswap.config import get_settings
from skillswap.core.domain_types import Page, UserRole
from skillswap.core.navigation import resolve_page
from skillswap.infrastructure.database import get_db
from skillswap.infrastructure.security import create_access_token
from skillswap.models import User
from skillswap.schemas.auth import (
    LoginRequest, SessionState, SignupRequest, TokenResponse,
)
from skillswap.schemas.user import OwnProfile
from skillswap.services import auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=OwnProfile.from_model(user),
    )


@router.post(
    "/signup", response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    user = await auth_service.signup(
        db, body.email, body.password, body.name,
        admin_emails=get_settings().admin_emails,
    )
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await auth_service.authenticate(db, body.email, body.password)
    return _token_response(user)


@router.get("/me", response_model=SessionState)
async def me(user: User | None = Depends(get_optional_user)):
    if user is None:
        return SessionState(
            is_authenticated=False,
            is_profile_complete=False,
            is_banned=False,
            is_admin=False,
            landing_page=Page.HOME,
        )
    return SessionState(
        user=OwnProfile.from_model(user),
        is_authenticated=True,
        is_profile_complete=user.is_profile_complete,
        is_banned=user.is_banned,
        is_admin=user.role == UserRole.ADMIN.value,
        landing_page=resolve_page(Page.HOME, True, user),
    )
