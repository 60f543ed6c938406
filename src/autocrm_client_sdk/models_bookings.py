from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping

from pydantic import Field

from .models import CrmModel, SortOrder, UserSummary
from .models_remarks import Remark


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    DELIVERED = "DELIVERED"
    IN_PROGRESS = "IN_PROGRESS"
    NO_SHOW = "NO_SHOW"
    WAITLISTED = "WAITLISTED"
    RESCHEDULED = "RESCHEDULED"
    BACK_ORDER = "BACK_ORDER"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class StockAvailability(str, Enum):
    VNA = "VNA"
    VEHICLE_AVAILABLE = "VEHICLE_AVAILABLE"


class TimelineCategory(str, Enum):
    TODAY = "today"
    DELIVERY_TODAY = "delivery_today"
    PENDING_UPDATE = "pending_update"
    OVERDUE = "overdue"


class AssignmentStrategy(str, Enum):
    ROUND_ROBIN = "ROUND_ROBIN"
    LEAST_LOAD = "LEAST_LOAD"
    RANDOM = "RANDOM"


class Booking(CrmModel):
    id: str
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    status: str | None = None
    variant: str | None = None
    vc_code: str | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    advisor_id: str | None = None
    advisor: UserSummary | None = None
    booking_date: str | None = None
    expected_delivery_date: str | None = None
    finance_required: bool | None = None
    financer_name: str | None = None
    file_login_date: str | None = None
    approval_date: str | None = None
    stock_availability: str | None = None
    rto_date: str | None = None
    advisor_remarks: str | None = None
    team_lead_remarks: str | None = None
    sales_manager_remarks: str | None = None
    general_manager_remarks: str | None = None
    admin_remarks: str | None = None
    dealer_code: str | None = None
    zone: str | None = None
    region: str | None = None
    chassis_number: str | None = None
    allocation_order_number: str | None = None
    source: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    remark_history: List[Remark] = Field(default_factory=list)


class BookingFilters(CrmModel):
    """Query parameters of the booking list endpoints."""

    page: int | None = None
    limit: int | None = None
    status: BookingStatus | None = None
    timeline: TimelineCategory | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None
    dealership_id: str | None = None
    dealership_code: str | None = None
    scope: str | None = None

    def to_query(self) -> dict[str, str]:
        # unset fields are omitted entirely, never sent as empty strings
        return {key: str(value) for key, value in self.to_wire().items()}

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "BookingFilters":
        return cls.model_validate({key: value for key, value in params.items() if value not in (None, "")})


class BookingSearchFilters(CrmModel):
    status: BookingStatus | None = None
    date_from: str | None = None
    date_to: str | None = None
    advisor_id: str | None = None
    variant: str | None = None
    color: str | None = None


class BookingAnalyticsFilters(CrmModel):
    date_from: str | None = None
    date_to: str | None = None
    group_by: str | None = None
    advisor_id: str | None = None


class BookingExportFilters(CrmModel):
    status: BookingStatus | None = None
    date_from: str | None = None
    date_to: str | None = None
    advisor_id: str | None = None
    format: str | None = None


class CreateBookingRequest(CrmModel):
    customer_name: str
    dealer_code: str
    customer_phone: str | None = None
    customer_email: str | None = None
    variant: str | None = None
    vc_code: str | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    advisor_id: str | None = None
    booking_date: str | None = None
    expected_delivery_date: str | None = None
    finance_required: bool | None = None
    financer_name: str | None = None
    remarks: str | None = None


class UpdateBookingRequest(CrmModel):
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    variant: str | None = None
    vc_code: str | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    status: BookingStatus | None = None
    advisor_id: str | None = None
    booking_date: str | None = None
    expected_delivery_date: str | None = None
    stock_availability: StockAvailability | None = None
    finance_required: bool | None = None
    financer_name: str | None = None
    advisor_remarks: str | None = None
    team_lead_remarks: str | None = None
    sales_manager_remarks: str | None = None
    general_manager_remarks: str | None = None
    admin_remarks: str | None = None
    chassis_number: str | None = None
    allocation_order_number: str | None = None


class BookingStatusUpdate(CrmModel):
    status: BookingStatus | None = None
    expected_delivery_date: str | None = None
    finance_required: bool | None = None
    financer_name: str | None = None
    advisor_remarks: str | None = None
    stock_availability: StockAvailability | None = None


class RoleRemarks(CrmModel):
    advisor_remarks: str | None = None
    team_lead_remarks: str | None = None
    sales_manager_remarks: str | None = None
    general_manager_remarks: str | None = None
    admin_remarks: str | None = None


class AssignmentOutcome(CrmModel):
    booking_id: str
    advisor_id: str | None = None
    advisor_name: str | None = None
    success: bool | None = None
    error: str | None = None


class BulkAssignResult(CrmModel):
    successful: int = 0
    failed: int = 0
    assignments: List[AssignmentOutcome] = Field(default_factory=list)


class BulkUpdateOutcome(CrmModel):
    booking_id: str
    status: str
    error: str | None = None


class BulkUpdateResult(CrmModel):
    updated: int = 0
    failed: int = 0
    results: List[BulkUpdateOutcome] = Field(default_factory=list)


class ImportRowError(CrmModel):
    row: int
    field: str | None = None
    message: str


class ImportProgress(CrmModel):
    id: str | None = None
    import_id: str | None = None
    status: str | None = None
    total_records: int = 0
    processed_records: int = 0
    successful_records: int = 0
    failed_records: int = 0
    errors: List[ImportRowError] = Field(default_factory=list)
    created_at: str | None = None
    completed_at: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.status in {"COMPLETED", "FAILED"}


class ImportPreview(CrmModel):
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    errors: List[ImportRowError] = Field(default_factory=list)


class BookingAnalytics(CrmModel):
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_advisor: Dict[str, int] = Field(default_factory=dict)
    by_variant: Dict[str, int] = Field(default_factory=dict)
    revenue: Dict[str, Any] | None = None
    trends: List[Dict[str, Any]] = Field(default_factory=list)
