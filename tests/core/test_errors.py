"""Error Hierarchy — codes, statuses and the REST envelope."""

import pytest

from skillswap.core.errors import (
    AuthenticationError, ConflictError, DatabaseError, DuplicateFeedbackError,
    ErrorCategory, FeedbackNotAllowedError, InvalidInputError,
    InvalidStatusTransitionError, PermissionDeniedError, ProfileIncompleteError,
    ResourceNotFoundError, SkillSwapError, UserBannedError,
)


@pytest.mark.parametrize("error, code, status", [
    (InvalidInputError("bad", "field"), "VALIDATION_ERROR", 400),
    (AuthenticationError(), "AUTHENTICATION_REQUIRED", 401),
    (AuthenticationError("nope", "INVALID_CREDENTIALS"), "INVALID_CREDENTIALS", 401),
    (PermissionDeniedError("no"), "PERMISSION_DENIED", 403),
    (UserBannedError(), "USER_BANNED", 403),
    (ProfileIncompleteError(), "PROFILE_INCOMPLETE", 403),
    (ResourceNotFoundError("User", "42"), "RESOURCE_NOT_FOUND", 404),
    (ConflictError("taken"), "CONFLICT", 409),
    (InvalidStatusTransitionError("accepted", "rejected"), "INVALID_STATUS_TRANSITION", 409),
    (FeedbackNotAllowedError("no"), "FEEDBACK_NOT_ALLOWED", 403),
    (DuplicateFeedbackError(), "DUPLICATE_FEEDBACK", 409),
    (DatabaseError("down", "execute"), "DATABASE_ERROR", 503),
])
def test_codes_and_statuses(error, code, status):
    assert isinstance(error, SkillSwapError)
    assert error.code == code
    assert error.http_status == status


def test_to_response_envelope():
    body = ResourceNotFoundError("Request", "abc").to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Request 'abc' not found"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"]["resource_id"] == "abc"
    assert "timestamp" in body
