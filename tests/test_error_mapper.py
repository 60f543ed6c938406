from __future__ import annotations

import pytest

from autocrm_client_sdk.error_mapper import DEFAULT_FALLBACK_MESSAGE, map_error, resolve_message
from autocrm_client_sdk.exceptions import (
    AccessDeniedError,
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (400, ValidationError),
        (401, AuthError),
        (403, AccessDeniedError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
        (429, RateLimitError),
        (500, ServerError),
        (503, ServerError),
        (418, ApiError),
    ],
)
def test_map_error_classes(status: int, expected: type[ApiError]) -> None:
    err = map_error(status, {"message": "nope"})
    assert type(err) is expected
    assert err.status_code == status
    assert err.code == f"HTTP_{status}"


def test_message_precedence() -> None:
    assert resolve_message(400, {"message": "m", "error": "e", "detail": "d"}) == "m"
    assert resolve_message(400, {"error": "e", "detail": "d"}) == "e"
    assert resolve_message(400, {"detail": "d"}) == "d"
    assert resolve_message(400, "plain text body") == "plain text body"
    assert resolve_message(400, {"message": "   "}) == "Invalid request. Please check your input."


def test_static_fallbacks() -> None:
    assert map_error(404, None).message == "Resource not found."
    assert map_error(429, {}).message == "Too many requests. Please try again later."
    assert map_error(503, {}).message == "Service temporarily unavailable. Please try again later."
    assert map_error(418, {}).message == DEFAULT_FALLBACK_MESSAGE


def test_code_and_details_are_kept() -> None:
    err = map_error(422, {"code": "BAD_FIELD", "message": "bad", "errors": [{"field": "email"}]})
    assert err.code == "BAD_FIELD"
    assert err.details == [{"field": "email"}]
    assert err.raw_payload["code"] == "BAD_FIELD"
    assert str(err) == "[422] BAD_FIELD: bad"
