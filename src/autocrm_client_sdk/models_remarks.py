from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import Field

from .models import CrmModel, RoleField


class RemarkType(str, Enum):
    ENQUIRY = "enquiry"
    BOOKING = "booking"


class RemarkAuthor(CrmModel):
    id: str
    name: str | None = None
    role: RoleField = None

    @property
    def role_name(self) -> str | None:
        return self.role.name if self.role else None


class Remark(CrmModel):
    """One entry of an enquiry's or booking's remark history."""

    id: str
    remark: str = ""
    remark_type: str | None = None
    created_at: str | None = None
    created_by: RemarkAuthor | None = None
    cancelled: bool = False
    cancellation_reason: str | None = None
    cancelled_at: str | None = None

    @property
    def is_active(self) -> bool:
        return not self.cancelled


class AddRemarkRequest(CrmModel):
    remark: str


class CancelRemarkRequest(CrmModel):
    reason: str


class PendingRemarksParams(CrmModel):
    dealership_id: str | None = None
    dealership_code: str | None = None
    scope: str | None = None


class PendingRemarksSummary(CrmModel):
    enquiries_pending_count: int = 0
    bookings_pending_count: int = 0
    enquiry_ids: List[str] = Field(default_factory=list)
    booking_ids: List[str] = Field(default_factory=list)
