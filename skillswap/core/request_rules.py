"""Skill Request Rules — field validation and status transitions.

Invariants:
    - A request joins exactly one (from, to) pair and from != to
    - offered_skill must be one of the sender's offered skills
    - wanted_skill may be any non-blank skill (custom skills allowed)
    - Only PENDING may move, and only to ACCEPTED or REJECTED
    - Only the sender may withdraw, and only while PENDING
"""

from dataclasses import dataclass
from uuid import UUID

from skillswap.core.domain_types import RequestStatus
from skillswap.core.errors import (
    InvalidInputError, InvalidStatusTransitionError, PermissionDeniedError,
)
from skillswap.core.profile_rules import has_skill

MAX_REQUEST_MESSAGE_LENGTH = 1000


@dataclass(frozen=True)
class CleanRequest:
    offered_skill: str
    wanted_skill: str
    message: str


def validate_new_request(
    from_user_id: UUID,
    to_user_id: UUID,
    sender_skills_offered: list[str],
    offered_skill: str,
    wanted_skill: str,
    message: str,
) -> CleanRequest:
    """Check a new request's fields and return them trimmed."""
    if from_user_id == to_user_id:
        raise InvalidInputError(
            "You cannot send a skill swap request to yourself.", "to_user_id",
        )
    offered = offered_skill.strip()
    wanted = wanted_skill.strip()
    text = message.strip()
    if not offered:
        raise InvalidInputError("Choose a skill to offer.", "offered_skill")
    if not has_skill(sender_skills_offered, offered):
        raise InvalidInputError(
            f"'{offered}' is not one of your offered skills.", "offered_skill",
        )
    if not wanted:
        raise InvalidInputError("Choose a skill you want.", "wanted_skill")
    if not text:
        raise InvalidInputError("Add a message to your request.", "message")
    if len(text) > MAX_REQUEST_MESSAGE_LENGTH:
        raise InvalidInputError(
            f"Message exceeds {MAX_REQUEST_MESSAGE_LENGTH} characters.", "message",
        )
    return CleanRequest(offered_skill=offered, wanted_skill=wanted, message=text)


def check_status_transition(current: str, target: RequestStatus) -> None:
    if target == RequestStatus.PENDING or current != RequestStatus.PENDING.value:
        raise InvalidStatusTransitionError(current, target.value)


def check_can_respond(request_to_user_id: UUID, actor_id: UUID) -> None:
    """Only the recipient answers or marks a request as read."""
    if request_to_user_id != actor_id:
        raise PermissionDeniedError("Only the recipient can update this request.")


def check_can_withdraw(
    request_from_user_id: UUID, status: str, actor_id: UUID,
) -> None:
    if request_from_user_id != actor_id:
        raise PermissionDeniedError("Only the sender can withdraw this request.")
    if status != RequestStatus.PENDING.value:
        raise InvalidStatusTransitionError(status, "withdrawn")
