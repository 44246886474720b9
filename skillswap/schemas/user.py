"""User Schemas — profile edits, public profile view and browse results.

Invariants:
    - ProfileUpdate fields are all optional; None means "leave unchanged"
    - availability limited to the Availability enum values
    - PublicProfile.feedback is newest first
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillswap.core.domain_types import Availability
from skillswap.core.ordering import newest_first


class ContactInfo(BaseModel):
    email: str | None = Field(None, max_length=320)
    linkedin: str | None = Field(None, max_length=500)
    github: str | None = Field(None, max_length=500)
    portfolio: str | None = Field(None, max_length=500)


class ProfileUpdate(BaseModel):
    """Owner-editable profile fields."""
    name: str | None = Field(None, max_length=120)
    location: str | None = Field(None, max_length=120)
    profile_photo_url: str | None = Field(None, max_length=1000)
    skills_offered: list[str] | None = Field(None, max_length=30)
    skills_wanted: list[str] | None = Field(None, max_length=30)
    availability: Availability | None = None
    is_public: bool | None = None
    contact_info: ContactInfo | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class FeedbackEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    from_user_id: UUID
    rating: int
    comment: str
    created_at: datetime | None = None


class PublicProfile(BaseModel):
    """Profile as shown on the UserProfile page and in browse cards."""
    uid: UUID
    name: str
    location: str | None = None
    profile_photo_url: str | None = None
    skills_offered: list[str]
    skills_wanted: list[str]
    availability: str | None = None
    rating: float
    feedback_count: int
    feedback: list[FeedbackEntry] = []
    contact_info: ContactInfo | None = None
    role: str
    is_public: bool

    @classmethod
    def from_model(cls, user, include_feedback: bool = True) -> "PublicProfile":
        entries = newest_first(list(user.feedback_received)) if include_feedback else []
        return cls(
            uid=user.id,
            name=user.name,
            location=user.location,
            profile_photo_url=user.profile_photo_url,
            skills_offered=list(user.skills_offered or []),
            skills_wanted=list(user.skills_wanted or []),
            availability=user.availability,
            rating=user.rating,
            feedback_count=len(user.feedback_received),
            feedback=[
                FeedbackEntry(
                    from_=f.from_name,
                    from_user_id=f.from_user_id,
                    rating=f.rating,
                    comment=f.comment,
                    created_at=f.created_at,
                )
                for f in entries
            ],
            contact_info=(
                ContactInfo(**user.contact_info) if user.contact_info else None
            ),
            role=user.role,
            is_public=user.is_public,
        )


class OwnProfile(PublicProfile):
    """Profile as seen by its owner (or an admin)."""
    email: str
    is_banned: bool
    is_profile_complete: bool
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user, include_feedback: bool = True) -> "OwnProfile":
        public = PublicProfile.from_model(user, include_feedback)
        return cls(
            **public.model_dump(),
            email=user.email,
            is_banned=user.is_banned,
            is_profile_complete=user.is_profile_complete,
            created_at=user.created_at,
        )


class UserPage(BaseModel):
    users: list[PublicProfile]
    page: int
    total_pages: int
    total: int


class FeedbackCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1, max_length=1000)


class FeedbackEligibility(BaseModel):
    can_give_feedback: bool
    has_given_feedback: bool
    has_accepted_request: bool
