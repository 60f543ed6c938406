from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Union

from .exceptions import (
    REMARK_CANCEL_FORBIDDEN_MESSAGE,
    EmptyRemarkError,
    EntityLockedError,
    MissingReasonError,
    RemarkAlreadyCancelledError,
    RemarkLimitError,
    RemarkPermissionDeniedError,
)
from .models import RoleName, SessionUser
from .models_bookings import Booking
from .models_enquiries import Enquiry
from .models_remarks import Remark

MAX_ACTIVE_REMARKS = 20
RECENT_REMARKS_WINDOW = 5

ELEVATED_ROLES = frozenset(
    {
        RoleName.ADMIN.value,
        RoleName.GENERAL_MANAGER.value,
        RoleName.SALES_MANAGER.value,
        RoleName.TEAM_LEAD.value,
    }
)
LOCKED_ENQUIRY_STATES = frozenset({"BOOKED", "LOST", "CLOSED"})
CLOSED_BOOKING_STATUSES = frozenset({"CANCELLED", "DELIVERED"})

REMARK_LIMIT_MESSAGE = f"Remark limit reached. A maximum of {MAX_ACTIVE_REMARKS} active remarks is allowed."
EMPTY_REMARK_MESSAGE = "Remark cannot be empty."
MISSING_REASON_MESSAGE = "Please provide a reason for cancelling this remark."
LOCKED_MESSAGE = "This record is locked and can no longer be changed."

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

Parent = Union[Enquiry, Booking]


@dataclass(frozen=True)
class RemarkPolicy:
    """Locked parents accept remarks by default. Set ``allow_remarks_on_locked=False`` to refuse them."""

    max_active: int = MAX_ACTIVE_REMARKS
    recent_window: int = RECENT_REMARKS_WINDOW
    allow_remarks_on_locked: bool = True


DEFAULT_POLICY = RemarkPolicy()


@dataclass(frozen=True)
class RemarkActionAvailability:
    can_add: bool
    can_change_category: bool
    locked: bool


def _upper(value: str | Enum | None) -> str:
    if value is None:
        return ""
    raw = value.value if isinstance(value, Enum) else value
    return str(raw).strip().upper()


def is_elevated(role: str | Enum | None) -> bool:
    return _upper(role) in ELEVATED_ROLES


def is_enquiry_locked(enquiry: Enquiry) -> bool:
    return _upper(enquiry.category) in LOCKED_ENQUIRY_STATES or _upper(enquiry.status) in LOCKED_ENQUIRY_STATES


def is_booking_locked(booking: Booking) -> bool:
    return _upper(booking.status) in CLOSED_BOOKING_STATUSES


def is_locked(entity: Parent) -> bool:
    if isinstance(entity, Booking):
        return is_booking_locked(entity)
    return is_enquiry_locked(entity)


def created_at_key(remark: Remark) -> datetime:
    if not remark.created_at:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(remark.created_at.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_newest_first(remarks: Iterable[Remark]) -> list[Remark]:
    return sorted(remarks, key=created_at_key, reverse=True)


def active_remarks(remarks: Iterable[Remark]) -> list[Remark]:
    return sort_newest_first(remark for remark in remarks if not remark.cancelled)


def recent_remarks(remarks: Iterable[Remark], window: int = RECENT_REMARKS_WINDOW) -> list[Remark]:
    return active_remarks(remarks)[:window]


def can_cancel_remark(remark: Remark, actor: SessionUser) -> bool:
    """Author or elevated role. The server still has the final say."""
    if remark.cancelled:
        return False
    author_id = remark.created_by.id if remark.created_by else None
    if actor.id and author_id == actor.id:
        return True
    return is_elevated(actor.role)


def validate_remark_text(text: str | None) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise EmptyRemarkError(EMPTY_REMARK_MESSAGE)
    return cleaned


def validate_cancellation_reason(reason: str | None) -> str:
    cleaned = (reason or "").strip()
    if not cleaned:
        raise MissingReasonError(MISSING_REASON_MESSAGE)
    return cleaned


def ensure_can_add(
    remarks: Iterable[Remark],
    entity: Parent | None = None,
    policy: RemarkPolicy = DEFAULT_POLICY,
) -> None:
    if entity is not None and not policy.allow_remarks_on_locked and is_locked(entity):
        raise EntityLockedError(LOCKED_MESSAGE)
    if len(active_remarks(remarks)) >= policy.max_active:
        raise RemarkLimitError(REMARK_LIMIT_MESSAGE)


def ensure_can_cancel(remark: Remark, actor: SessionUser) -> None:
    if remark.cancelled:
        raise RemarkAlreadyCancelledError("This remark has already been cancelled.")
    if not can_cancel_remark(remark, actor):
        raise RemarkPermissionDeniedError(REMARK_CANCEL_FORBIDDEN_MESSAGE)


def action_availability(
    entity: Parent,
    remarks: Iterable[Remark],
    policy: RemarkPolicy = DEFAULT_POLICY,
) -> RemarkActionAvailability:
    locked = is_locked(entity)
    under_cap = len(active_remarks(remarks)) < policy.max_active
    return RemarkActionAvailability(
        can_add=under_cap and (policy.allow_remarks_on_locked or not locked),
        can_change_category=isinstance(entity, Enquiry) and not locked,
        locked=locked,
    )
