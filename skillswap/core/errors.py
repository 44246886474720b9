"""Error Hierarchy — typed, categorized exceptions for all Skill Swap failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 4xx; infrastructure errors are 5xx
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SkillSwapError base: one global FastAPI handler renders all of them
    - ErrorContext as dataclass: carries user/resource ids for logs without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for observability."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None


class SkillSwapError(Exception):
    """Base exception for all Skill Swap errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(SkillSwapError):
    """Input passed schema validation but breaks a domain rule (blank text, unknown skill)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthenticationError(SkillSwapError):
    """Missing, invalid or expired credentials."""
    def __init__(
        self,
        message: str = "Authentication required",
        code: str = "AUTHENTICATION_REQUIRED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(SkillSwapError):
    """Caller is authenticated but not allowed to perform the operation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class UserBannedError(SkillSwapError):
    """Banned accounts may only read their own session state."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This account has been banned from the platform.",
            "USER_BANNED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ProfileIncompleteError(SkillSwapError):
    """Operation requires a completed profile."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Complete your profile before using this feature.",
            "PROFILE_INCOMPLETE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(SkillSwapError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class ConflictError(SkillSwapError):
    """Write collides with existing state (e.g. email already registered)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class InvalidStatusTransitionError(SkillSwapError):
    """Skill request status change not allowed from its current status."""
    def __init__(self, current: str, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot change request status from '{current}' to '{target}'",
            "INVALID_STATUS_TRANSITION", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.current = current
        self.target = target


class FeedbackNotAllowedError(SkillSwapError):
    """Feedback requires an accepted request from the giver to the target."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FEEDBACK_NOT_ALLOWED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class DuplicateFeedbackError(SkillSwapError):
    """A user may leave at most one feedback entry per profile."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You have already left feedback for this user.",
            "DUPLICATE_FEEDBACK", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SkillSwapError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
