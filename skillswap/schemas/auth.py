"""Auth & Navigation Schemas — signup/login payloads and session state.

Invariants:
    - email normalised to lower case, surrounding whitespace stripped
    - password 6..128 chars (checked, never echoed back)
"""

from pydantic import BaseModel, Field, field_validator

from skillswap.core.domain_types import Page
from skillswap.schemas.user import OwnProfile


class SignupRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6, max_length=128)
    name: str | None = Field(None, max_length=120)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: OwnProfile


class SessionState(BaseModel):
    """What the auth hook exposes: current user and profile flags."""
    user: OwnProfile | None = None
    is_authenticated: bool
    is_profile_complete: bool
    is_banned: bool
    is_admin: bool
    landing_page: Page


class NavigationResponse(BaseModel):
    current: Page
    page: Page
