from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    AccessDeniedError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)

FALLBACK_MESSAGES: Mapping[int, str] = {
    400: "Invalid request. Please check your input.",
    401: "Authentication required. Please log in.",
    403: "Access denied. You don't have permission for this action.",
    404: "Resource not found.",
    409: "Conflict. The resource already exists or is in use.",
    422: "Validation failed. Please check your input.",
    429: "Too many requests. Please try again later.",
    500: "Server error. Please try again later.",
    503: "Service temporarily unavailable. Please try again later.",
}
DEFAULT_FALLBACK_MESSAGE = "An unexpected error occurred. Please try again."

# Order in which error bodies are searched for a human-readable message.
MESSAGE_FIELDS = ("message", "error", "detail")


def fallback_message(status_code: int) -> str:
    return FALLBACK_MESSAGES.get(status_code, DEFAULT_FALLBACK_MESSAGE)


def resolve_message(status_code: int, payload: object) -> str:
    if isinstance(payload, Mapping):
        for field in MESSAGE_FIELDS:
            value = payload.get(field)
            if isinstance(value, str) and value.strip():
                return value
    elif isinstance(payload, str) and payload.strip():
        return payload
    return fallback_message(status_code)


def error_class_for_status(status_code: int) -> type[ApiError]:
    if status_code == 401:
        return AuthError
    if status_code == 403:
        return AccessDeniedError
    if status_code == 404:
        return NotFoundError
    if status_code in {400, 422}:
        return ValidationError
    if status_code == 409:
        return ConflictError
    if status_code == 429:
        return RateLimitError
    if status_code >= 500:
        return ServerError
    return ApiError


def map_error(status_code: int, payload: object) -> ApiError:
    body = payload if isinstance(payload, Mapping) else {}
    code = str(body.get("code") or f"HTTP_{status_code}")
    details = body.get("details") or body.get("errors")
    mapped = error_class_for_status(status_code)
    return mapped(
        code=code,
        message=resolve_message(status_code, payload),
        details=details,
        status_code=status_code,
        raw_payload=dict(body) if body else payload,
    )
