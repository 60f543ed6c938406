from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field

from .models import CrmModel, SortOrder, UserSummary
from .models_remarks import Remark


class EnquiryCategory(str, Enum):
    HOT = "HOT"
    LOST = "LOST"
    BOOKED = "BOOKED"


class EnquiryStatus(str, Enum):
    OPEN = "OPEN"
    CONTACTED = "CONTACTED"
    QUALIFIED = "QUALIFIED"
    CONVERTED = "CONVERTED"
    IN_PROGRESS = "IN_PROGRESS"
    CLOSED = "CLOSED"


class EnquirySource(str, Enum):
    WALK_IN = "WALK_IN"
    PHONE_CALL = "PHONE_CALL"
    WEBSITE = "WEBSITE"
    DIGITAL = "DIGITAL"
    SOCIAL_MEDIA = "SOCIAL_MEDIA"
    REFERRAL = "REFERRAL"
    ADVERTISEMENT = "ADVERTISEMENT"
    EMAIL = "EMAIL"
    SHOWROOM_VISIT = "SHOWROOM_VISIT"
    EVENT = "EVENT"
    BTL_ACTIVITY = "BTL_ACTIVITY"
    WHATSAPP = "WHATSAPP"
    OUTBOUND_CALL = "OUTBOUND_CALL"
    OTHER = "OTHER"


class EnquiryCounts(CrmModel):
    bookings: int = 0
    quotations: int = 0


class Enquiry(CrmModel):
    # status/category stay plain strings so unknown backend values still parse
    id: str
    customer_name: str | None = None
    customer_contact: str | None = None
    customer_email: str | None = None
    model: str | None = None
    variant: str | None = None
    color: str | None = None
    source: str | None = None
    status: str | None = None
    category: str | None = None
    expected_booking_date: str | None = None
    next_follow_up_date: str | None = None
    location: str | None = None
    ca_remarks: str | None = None
    dealer_code: str | None = None
    created_by_user_id: str | None = None
    assigned_to_user_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    created_by: UserSummary | None = None
    assigned_to: UserSummary | None = None
    bookings: List[Dict[str, Any]] | None = None
    quotations: List[Dict[str, Any]] | None = None
    counts: EnquiryCounts | None = Field(default=None, alias="_count")
    remark_history: List[Remark] = Field(default_factory=list)


class CreateEnquiryRequest(CrmModel):
    customer_name: str
    customer_contact: str
    model: str
    variant: str | None = None
    customer_email: str | None = None
    color: str | None = None
    source: EnquirySource | None = None
    location: str | None = None
    expected_booking_date: str | None = None
    next_follow_up_date: str | None = None
    ca_remarks: str | None = None
    category: EnquiryCategory | None = None
    assigned_to_user_id: str | None = None
    dealer_code: str | None = None
    dealership_id: str | None = None


class UpdateEnquiryRequest(CrmModel):
    customer_name: str | None = None
    customer_contact: str | None = None
    customer_email: str | None = None
    model: str | None = None
    variant: str | None = None
    color: str | None = None
    source: EnquirySource | None = None
    location: str | None = None
    expected_booking_date: str | None = None
    next_follow_up_date: str | None = None
    status: EnquiryStatus | None = None
    category: EnquiryCategory | None = None
    ca_remarks: str | None = None
    assigned_to_user_id: str | None = None


class EnquiryFilters(CrmModel):
    page: int | None = None
    limit: int | None = None
    status: EnquiryStatus | None = None
    category: EnquiryCategory | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    dealership_id: str | None = None
    dealership_code: str | None = None
    scope: str | None = None


class AssignEnquiryRequest(CrmModel):
    assigned_to_id: str
    notes: str | None = None


class EnquiryStats(CrmModel):
    total: int = 0
    new: int | None = None
    assigned: int | None = None
    in_progress: int | None = None
    quoted: int | None = None
    closed: int | None = None
    cancelled: int | None = None
    conversion_rate: float | None = None
    avg_response_time: float | None = None


class StockValidation(CrmModel):
    variant: str | None = None
    in_stock: bool | None = None
    stock_locations: Dict[str, Optional[int]] | None = None


class CategoryChangeResult(CrmModel):
    """Outcome of a category update; BOOKED may create a booking server-side."""

    enquiry: Enquiry
    booking: Dict[str, Any] | None = None
    stock_validation: StockValidation | None = None


class VehicleModels(CrmModel):
    models_by_brand: Dict[str, List[str]] = Field(default_factory=dict)
