"""Domain Types — identity aliases and enums shared across the codebase.

Invariants:
    - UserId, RequestId, MessageId wrap UUIDs
    - All valid states encoded as str Enums (serialize to JSON as their value)
    - RequestStatus has exactly three members; only PENDING is non-terminal
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
RequestId = NewType("RequestId", UUID)
MessageId = NewType("MessageId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Availability(str, Enum):
    """When a user is free to swap skills. Browse filter uses "All" on top of these."""
    WEEKENDS = "Weekends"
    EVENINGS = "Evenings"
    WEEKDAYS = "Weekdays"


class RequestStatus(str, Enum):
    """Skill request lifecycle: pending -> accepted | rejected."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Page(str, Enum):
    """Named client pages. Navigation is a single value of this enum."""
    HOME = "home"
    LOGIN = "login"
    SIGNUP = "signup"
    PROFILE = "profile"
    USER_PROFILE = "user-profile"
    REQUESTS = "requests"
    ADMIN = "admin"
    ADMIN_USERS = "admin-users"
    ADMIN_SWAPS = "admin-swaps"
    ADMIN_MESSAGES = "admin-messages"
    MESSAGES = "messages"
    BANNED = "banned"


ADMIN_PAGES: frozenset[Page] = frozenset({
    Page.ADMIN, Page.ADMIN_USERS, Page.ADMIN_SWAPS, Page.ADMIN_MESSAGES,
})

ANONYMOUS_PAGES: frozenset[Page] = frozenset({
    Page.HOME, Page.LOGIN, Page.SIGNUP,
})

ALL_AVAILABILITY = "All"
