from __future__ import annotations

from typing import Any

from ..models_dashboard import (
    Activity,
    BookingPlanToday,
    BookingsFunnel,
    DashboardStats,
    SalesPerformance,
    TeamLeaderSummary,
)
from .base import BaseClient


class DashboardClient(BaseClient):
    def stats(self) -> DashboardStats:
        return self._entity("GET", "/dashboard/stats", DashboardStats)

    def recent_activities(self, limit: int | None = None, activity_type: str | None = None) -> list[Activity]:
        return self._items(
            "GET",
            "/dashboard/recent-activities",
            Activity,
            collection_key="activities",
            params={"limit": limit, "type": activity_type},
        )

    def sales_performance(
        self,
        period: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> SalesPerformance:
        params: dict[str, Any] = {"period": period, "startDate": start_date, "endDate": end_date}
        return self._entity("GET", "/dashboard/sales-performance", SalesPerformance, params=params)

    def booking_plan_today(
        self,
        dealership_id: str | None = None,
        dealership_code: str | None = None,
    ) -> BookingPlanToday:
        params = {"dealershipId": dealership_id, "dealershipCode": dealership_code}
        return self._entity("GET", "/dashboard/booking-plan/today", BookingPlanToday, params=params)

    def team_leader_summary(self) -> TeamLeaderSummary:
        return self._entity("GET", "/dashboard/team-leader", TeamLeaderSummary)

    def bookings_funnel(self) -> BookingsFunnel:
        return self._entity("GET", "/dashboard/bookings/funnel", BookingsFunnel)
