"""User Browse — search, availability filter and pagination for the Home page.

Invariants:
    - Empty query matches everyone; matching is case-insensitive substring of the raw query
      against name, offered skills and wanted skills
    - Availability "All" disables the availability filter
    - paginate is 1-based; total_pages is 0 for an empty list
    - A page past the end returns an empty slice, never an error
"""

import math
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from skillswap.core.domain_types import ALL_AVAILABILITY


class Browsable(Protocol):
    name: str
    skills_offered: list[str]
    skills_wanted: list[str]
    availability: str | None


T = TypeVar("T")


@dataclass
class PageSlice(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total: int


def matches_query(user: Browsable, query: str) -> bool:
    q = query.casefold()
    if not q:
        return True
    if q in (user.name or "").casefold():
        return True
    return any(
        q in skill.casefold()
        for skill in (*user.skills_offered, *user.skills_wanted)
    )


def matches_availability(user: Browsable, availability: str) -> bool:
    return availability == ALL_AVAILABILITY or user.availability == availability


def filter_users(
    users: list[T], query: str = "", availability: str = ALL_AVAILABILITY,
) -> list[T]:
    """Apply the Home page search box and availability dropdown."""
    return [
        u for u in users
        if matches_query(u, query) and matches_availability(u, availability)
    ]


def paginate(items: list[T], page: int, per_page: int) -> PageSlice[T]:
    """Slice items for a 1-based page number."""
    if per_page < 1:
        raise ValueError("per_page must be >= 1")
    page = max(page, 1)
    total = len(items)
    start = (page - 1) * per_page
    return PageSlice(
        items=items[start:start + per_page],
        page=page,
        total_pages=math.ceil(total / per_page),
        total=total,
    )
