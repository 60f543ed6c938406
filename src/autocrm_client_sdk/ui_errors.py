from __future__ import annotations

from dataclasses import dataclass

from .error_mapper import fallback_message
from .exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PreconditionError,
    RateLimitError,
    ServerError,
    SessionExpiredError,
    TransportError,
    ValidationError,
)

GENERIC_MESSAGE = "Something went wrong. Please try again."


@dataclass(frozen=True)
class UserFacingError:
    kind: str
    message: str
    retryable: bool = False
    requires_reauth: bool = False
    details: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def _kind(exc: ApiError) -> str:
    if isinstance(exc, TransportError):
        return "network"
    if isinstance(exc, SessionExpiredError):
        return "session_expired"
    if isinstance(exc, AuthError):
        return "auth"
    if isinstance(exc, AccessDeniedError):
        return "forbidden"
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, ValidationError):
        return "validation"
    if isinstance(exc, ConflictError):
        return "conflict"
    if isinstance(exc, RateLimitError):
        return "rate_limited"
    if isinstance(exc, ServerError):
        return "server"
    return "business"


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, PreconditionError):
        return UserFacingError(kind="precondition", message=exc.message, details=exc.reason)
    if not isinstance(exc, ApiError):
        return UserFacingError(kind="unknown", message=GENERIC_MESSAGE, details=type(exc).__name__)

    kind = _kind(exc)
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    if kind == "server":
        # 5xx bodies are not shown verbatim
        message = fallback_message(503 if exc.status_code == 503 else 500)
    else:
        message = exc.message.strip() or fallback_message(exc.status_code)
    return UserFacingError(
        kind=kind,
        message=message,
        retryable=kind in {"network", "rate_limited", "server"},
        requires_reauth=kind in {"session_expired", "auth"},
        details=details,
    )
