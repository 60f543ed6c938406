from __future__ import annotations

from dataclasses import dataclass

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection and try again."
SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
REFRESH_FAILED_MESSAGE = "Authentication failed. Please log in again."
REMARK_CANCEL_FORBIDDEN_MESSAGE = "You do not have permission to cancel this remark."


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or the bearer token was rejected."""


class SessionExpiredError(AuthError):
    """Token refresh was impossible; the caller must re-authenticate."""


class AccessDeniedError(ForbiddenError):
    """The authenticated user lacks the role for this action."""


class RemarkCancelForbiddenError(AccessDeniedError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""

    @property
    def is_network_error(self) -> bool:
        return True


class EnvelopeError(ApiError):
    """The transport succeeded but the envelope reported success=false."""


class RemarkLimitReachedError(ApiError):
    """The server refused a remark because the parent hit its cap."""


class TokenRefreshError(RuntimeError):
    """The identity provider could not issue a fresh token."""


class PreconditionError(ValueError):
    """A client-side rule rejected the action before any request was sent."""

    reason = "precondition_failed"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EmptyRemarkError(PreconditionError):
    reason = "empty_remark"


class RemarkLimitError(PreconditionError):
    reason = "remark_limit_reached"


class MissingReasonError(PreconditionError):
    reason = "missing_reason"


class EntityLockedError(PreconditionError):
    reason = "entity_locked"


class RemarkAlreadyCancelledError(PreconditionError):
    reason = "remark_already_cancelled"


class RemarkPermissionDeniedError(PreconditionError):
    reason = "remark_permission_denied"
