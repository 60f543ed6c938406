from __future__ import annotations

from typing import Any, Dict, List

from pydantic import Field

from .models import CrmModel


class Activity(CrmModel):
    id: str
    type: str | None = None
    action: str | None = None
    description: str | None = None
    timestamp: str | None = None
    user: str | None = None


class DashboardStats(CrmModel):
    total_employees: int = 0
    active_enquiries: int = 0
    pending_quotations: int = 0
    total_bookings: int = 0
    stock_count: int = 0
    revenue: float = 0.0
    enquiry_stats: Dict[str, Any] | None = None
    quotation_stats: Dict[str, Any] | None = None


class SalesPerformance(CrmModel):
    total_sales: float = 0.0
    total_bookings: int = 0
    conversion_rate: float | None = None
    by_period: List[Dict[str, Any]] = Field(default_factory=list)


class BookingPlanToday(CrmModel):
    enquiries: Any = None
    bookings: Any = None
    total_enquiries: int | None = None
    total_bookings: int | None = None


class TeamLeaderSummary(CrmModel):
    team_size: int = 0
    total_hot_inquiry_count: int = 0
    pending_ca_on_update: int = Field(default=0, alias="pendingCAOnUpdate")
    pending_enquiries_to_update: int = 0
    todays_booking_plan: int = 0


class BookingsFunnel(CrmModel):
    carry_forward: int = 0
    new_this_month: int = 0
    delivered: int = 0
    lost: int = 0
    actual_live: int = 0


class Notification(CrmModel):
    id: str
    title: str | None = None
    body: str | None = None
    type: str | None = None
    sent_at: str | None = None
    delivered: bool | None = None
    read: bool | None = None
    data: Any = None


class NotificationStats(CrmModel):
    total_notifications: int = 0
    unread_count: int = 0
    recent_notifications: int = 0
    by_type: Dict[str, int] = Field(default_factory=dict)


class NotificationPreferences(CrmModel):
    enabled: bool | None = None
    enquiry_updates: bool | None = None
    booking_updates: bool | None = None
    follow_up_reminders: bool | None = None
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None


class FcmTokenStatus(CrmModel):
    has_token: bool = False
    token_updated_at: str | None = None
