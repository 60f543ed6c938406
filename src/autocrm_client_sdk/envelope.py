"""Uniform handling of the ``{success, message, data}`` response envelope.

Every JSON endpoint answers with the same wrapper.  Resource clients never
inspect it themselves; they go through :func:`unwrap` and the two
normalization helpers below so that the precedence rules for the backend's
inconsistent nesting live in exactly one place.

Entity precedence (``normalize_entity``):
    1. ``data[entity_key]``  e.g. ``{"enquiry": {...}}``
    2. ``data["data"]``      a doubly wrapped payload
    3. ``data`` itself

Collection precedence (``normalize_collection``):
    1. ``data[collection_key]`` when it is a list
    2. ``data["data"]`` when it is a list
    3. ``data`` itself when it is a list
    4. ``[]``
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import EnvelopeError
from .models import Page, Pagination

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)


class Envelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool
    message: str = ""
    data: Any = None


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    message: str = ""


@dataclass(frozen=True)
class Err:
    message: str
    payload: object | None = None


Result = Union[Ok[Any], Err]


def parse_envelope(payload: object) -> Result:
    """Classify a raw JSON body. ``None`` (304 / empty body) is an empty success."""
    if payload is None:
        return Ok(None)
    if not isinstance(payload, Mapping):
        return Err("Malformed response: expected a JSON object envelope", payload)
    try:
        envelope = Envelope.model_validate(payload)
    except PydanticValidationError:
        return Err("Malformed response: missing success flag", payload)
    if not envelope.success:
        # data is ignored on failure even when present
        return Err(envelope.message or "API call failed", payload)
    return Ok(envelope.data, envelope.message)


def unwrap(payload: object, *, status_code: int = 200) -> Any:
    result = parse_envelope(payload)
    if isinstance(result, Err):
        raise EnvelopeError(
            code="REQUEST_FAILED",
            message=result.message,
            status_code=status_code,
            raw_payload=result.payload,
        )
    return result.value


def normalize_entity(data: Any, entity_key: str | None = None) -> Any:
    if isinstance(data, Mapping):
        if entity_key and isinstance(data.get(entity_key), Mapping):
            return data[entity_key]
        if isinstance(data.get("data"), Mapping):
            return data["data"]
    return data if data is not None else {}


def normalize_collection(data: Any, collection_key: str | None = None) -> list[Any]:
    if isinstance(data, Mapping):
        if collection_key and isinstance(data.get(collection_key), list):
            return data[collection_key]
        if isinstance(data.get("data"), list):
            return data["data"]
        return []
    if isinstance(data, list):
        return data
    return []


def normalize_pagination(data: Any) -> Pagination:
    raw = data.get("pagination") if isinstance(data, Mapping) else None
    if isinstance(raw, Mapping):
        return Pagination.model_validate(raw)
    return Pagination()


def build_page(data: Any, collection_key: str, model_type: type[ModelT]) -> Page[ModelT]:
    items = [model_type.model_validate(item) for item in normalize_collection(data, collection_key)]
    return Page[model_type](items=items, pagination=normalize_pagination(data))
