"""Ratings & Feedback — mean rating and feedback eligibility.

Invariants:
    - mean_rating of no ratings is 0.0
    - Feedback rating is an integer 1..5, comment non-blank after trimming
    - A giver needs an accepted request from themselves to the target,
      may not rate themselves and may rate a given user only once
"""

from uuid import UUID

from skillswap.core.errors import (
    DuplicateFeedbackError, FeedbackNotAllowedError, InvalidInputError,
)

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000


def mean_rating(ratings: list[int]) -> float:
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def clean_comment(comment: str) -> str:
    text = comment.strip()
    if not text:
        raise InvalidInputError("Please enter a comment.", "comment")
    if len(text) > MAX_COMMENT_LENGTH:
        raise InvalidInputError(
            f"Comment exceeds {MAX_COMMENT_LENGTH} characters.", "comment",
        )
    return text


def check_rating(rating: int) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInputError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}.", "rating",
        )


def can_give_feedback(
    giver_id: UUID, target_id: UUID, has_accepted: bool, already_given: bool,
) -> bool:
    return giver_id != target_id and has_accepted and not already_given


def check_feedback_allowed(
    giver_id: UUID, target_id: UUID, has_accepted: bool, already_given: bool,
) -> None:
    """Raise the specific reason feedback is refused, if any."""
    if giver_id == target_id:
        raise FeedbackNotAllowedError("You cannot leave feedback on your own profile.")
    if not has_accepted:
        raise FeedbackNotAllowedError(
            "Feedback is only possible after this user accepted your swap request.",
        )
    if already_given:
        raise DuplicateFeedbackError()
