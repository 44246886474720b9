"""Newest-first ordering for requests, messages and feedback."""

from datetime import datetime, timezone
from typing import Callable, TypeVar

T = TypeVar("T")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_aware(value: datetime | None) -> datetime:
    # Missing timestamps sort last; naive values (SQLite) are read as UTC.
    if value is None:
        return EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def newest_first(
    items: list[T], key: Callable[[T], datetime | None] = lambda x: x.created_at,
) -> list[T]:
    """Return a new list sorted by timestamp descending. Stable for ties."""
    return sorted(items, key=lambda item: _as_aware(key(item)), reverse=True)
