"""Page Navigation — decides which page a client should show.

Invariants:
    - resolve_page is PURE: same inputs always give the same Page
    - Banned users always land on BANNED, whatever page they asked for
    - Signed-in users with a missing or incomplete profile are held on PROFILE
    - Anonymous users only reach HOME, LOGIN and SIGNUP
    - Admin pages fall back to HOME for non-admins

Design Decisions:
    - profile is duck-typed (is_banned / is_profile_complete / role) so the ORM
      model and test doubles both fit without core importing models/
"""

from typing import Protocol

from skillswap.core.domain_types import (
    ADMIN_PAGES, ANONYMOUS_PAGES, Page, UserRole,
)


class ProfileFlags(Protocol):
    is_banned: bool
    is_profile_complete: bool
    role: str


def resolve_page(
    current: Page, is_authenticated: bool, profile: ProfileFlags | None,
) -> Page:
    """Return the page to render given the requested page and session state."""
    if not is_authenticated:
        return current if current in ANONYMOUS_PAGES else Page.HOME

    if profile is not None and profile.is_banned:
        return Page.BANNED

    if profile is None or not profile.is_profile_complete:
        return Page.PROFILE

    if current in (Page.LOGIN, Page.SIGNUP, Page.BANNED):
        return Page.HOME

    if current in ADMIN_PAGES and profile.role != UserRole.ADMIN.value:
        return Page.HOME

    return current


def parse_page(value: str) -> Page | None:
    """Parse a page name; None when the name is unknown."""
    try:
        return Page(value)
    except ValueError:
        return None
