"""Platform message text validation and seen/unseen bookkeeping."""

from uuid import UUID

from skillswap.core.errors import InvalidInputError


def clean_message_text(text: str, max_length: int) -> str:
    body = text.strip()
    if not body:
        raise InvalidInputError(
            "Please enter a message before sending.", "message",
        )
    if len(body) > max_length:
        raise InvalidInputError(
            f"Message exceeds {max_length} characters.", "message",
        )
    return body


def is_unseen(seen_by: list[UUID], user_id: UUID) -> bool:
    return user_id not in seen_by


def count_unseen(seen_lists: list[list[UUID]], user_id: UUID) -> int:
    return sum(1 for seen_by in seen_lists if is_unseen(seen_by, user_id))
