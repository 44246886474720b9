"""Navigation Route — which page the client should render for the caller."""

from fastapi import APIRouter, Depends, Query

from skillswap.api.dependencies import get_optional_user
from skillswap.core.errors import InvalidInputError
from skillswap.core.navigation import parse_page, resolve_page
from skillswap.models import User
from skillswap.schemas.auth import NavigationResponse

router = APIRouter(prefix="/api/v1/navigation", tags=["navigation"])


@router.get("", response_model=NavigationResponse)
async def navigate(
    current: str = Query("home"),
    user: User | None = Depends(get_optional_user),
):
    page = parse_page(current)
    if page is None:
        raise InvalidInputError(f"Unknown page '{current}'", "current")
    return NavigationResponse(
        current=page, page=resolve_page(page, user is not None, user),
    )
