"""User Routes — browse, profile view/edit and feedback.

Invariants:
    - Browse is open to anonymous callers and never lists the caller
    - Only the owner edits a profile (PUT /me), and banned owners cannot
    - The owner and admins see the full profile; everyone else the public view
    - Feedback needs a complete, active giver
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.api.dependencies import (
    get_active_user, get_complete_user, get_current_user, get_optional_user,
)
from skillswap.config import get_settings
from skillswap.core.domain_types import ALL_AVAILABILITY, Availability, UserRole
from skillswap.core.errors import InvalidInputError
from skillswap.infrastructure.database import get_db
from skillswap.models import User
from skillswap.schemas.user import (
    FeedbackCreate, FeedbackEligibility, OwnProfile, ProfileUpdate,
    PublicProfile, UserPage,
)
from skillswap.services import feedback_service, user_service

router = APIRouter(prefix="/api/v1/users", tags=["users"])

_AVAILABILITY_FILTERS = {ALL_AVAILABILITY} | {a.value for a in Availability}


@router.get("", response_model=UserPage)
async def browse_users(
    q: str = Query("", max_length=100),
    availability: str = Query(ALL_AVAILABILITY),
    page: int = Query(1, ge=1),
    viewer: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Home page listing: search, availability filter, pagination."""
    if availability not in _AVAILABILITY_FILTERS:
        raise InvalidInputError(
            f"availability must be one of {sorted(_AVAILABILITY_FILTERS)}",
            "availability",
        )
    result = await user_service.browse_users(
        db,
        exclude_user_id=viewer.id if viewer else None,
        query=q,
        availability=availability,
        page=page,
        per_page=get_settings().users_per_page,
    )
    return UserPage(
        users=[PublicProfile.from_model(u, include_feedback=False) for u in result.items],
        page=result.page,
        total_pages=result.total_pages,
        total=result.total,
    )


@router.get("/me", response_model=OwnProfile)
async def get_my_profile(user: User = Depends(get_current_user)):
    return OwnProfile.from_model(user)


@router.put("/me", response_model=OwnProfile)
async def update_my_profile(
    body: ProfileUpdate,
    user: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.update_user_profile(db, user, body)
    return OwnProfile.from_model(user)


@router.get("/{user_id}")
async def get_profile(
    user_id: UUID,
    viewer: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Full profile for the owner and admins, public view for everyone else."""
    user = await user_service.get_user_profile(db, user_id)
    if viewer and (viewer.id == user.id or viewer.role == UserRole.ADMIN.value):
        return OwnProfile.from_model(user)
    return PublicProfile.from_model(user)


@router.post(
    "/{user_id}/feedback", response_model=PublicProfile,
    status_code=status.HTTP_201_CREATED,
)
async def give_feedback(
    user_id: UUID,
    body: FeedbackCreate,
    giver: User = Depends(get_complete_user),
    db: AsyncSession = Depends(get_db),
):
    target = await feedback_service.submit_feedback(
        db, giver, user_id, body.rating, body.comment,
    )
    return PublicProfile.from_model(target)


@router.get("/{user_id}/feedback-eligibility", response_model=FeedbackEligibility)
async def feedback_eligibility(
    user_id: UUID,
    viewer: User = Depends(get_active_user),
    db: AsyncSession = Depends(get_db),
):
    return FeedbackEligibility(
        **await feedback_service.feedback_eligibility(db, viewer, user_id),
    )
