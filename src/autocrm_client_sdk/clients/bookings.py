from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..models import BinaryPayload, Page
from ..models_bookings import (
    AssignmentStrategy,
    Booking,
    BookingAnalytics,
    BookingAnalyticsFilters,
    BookingExportFilters,
    BookingFilters,
    BookingSearchFilters,
    BookingStatus,
    BookingStatusUpdate,
    BulkAssignResult,
    BulkUpdateResult,
    CreateBookingRequest,
    ImportPreview,
    ImportProgress,
    RoleRemarks,
    UpdateBookingRequest,
)
from .base import BaseClient, Upload, coerce_model, file_part, to_params

IMPORT_FILENAME = "bookings.xlsx"


class BookingsClient(BaseClient):
    def list_bookings(self, filters: BookingFilters | Mapping[str, Any] | None = None) -> Page[Booking]:
        return self._page("/bookings", "bookings", Booking, params=filters)

    def my_bookings(self, filters: BookingFilters | Mapping[str, Any] | None = None) -> Page[Booking]:
        return self._page("/bookings/advisor/my-bookings", "bookings", Booking, params=filters)

    def search(self, query: str, filters: BookingSearchFilters | Mapping[str, Any] | None = None) -> Page[Booking]:
        params = {"search": query, **(to_params(filters) or {})}
        return self._page("/bookings/search", "bookings", Booking, params=params)

    def analytics(self, filters: BookingAnalyticsFilters | Mapping[str, Any] | None = None) -> BookingAnalytics:
        return self._entity("GET", "/bookings/analytics", BookingAnalytics, params=to_params(filters))

    def get_booking(self, booking_id: str) -> Booking:
        return self._entity("GET", f"/bookings/{booking_id}", Booking, entity_key="booking")

    def create_booking(self, request: CreateBookingRequest | Mapping[str, Any]) -> Booking:
        payload = coerce_model(request, CreateBookingRequest)
        return self._entity("POST", "/bookings", Booking, entity_key="booking", json_body=payload.to_wire())

    def update_booking(self, booking_id: str, request: UpdateBookingRequest | Mapping[str, Any]) -> Booking:
        payload = coerce_model(request, UpdateBookingRequest)
        return self._entity(
            "PUT",
            f"/bookings/{booking_id}",
            Booking,
            entity_key="booking",
            json_body=payload.to_wire(),
        )

    def update_status(self, booking_id: str, request: BookingStatusUpdate | Mapping[str, Any]) -> Booking:
        payload = coerce_model(request, BookingStatusUpdate)
        return self._entity(
            "PUT",
            f"/bookings/{booking_id}/update-status",
            Booking,
            entity_key="booking",
            json_body=payload.to_wire(),
        )

    def delete_booking(self, booking_id: str) -> None:
        self._data("DELETE", f"/bookings/{booking_id}")

    def assign(self, booking_id: str, advisor_id: str) -> Booking:
        return self._entity(
            "PATCH",
            f"/bookings/{booking_id}/assign",
            Booking,
            entity_key="booking",
            json_body={"advisorId": advisor_id},
        )

    def unassign(self, booking_id: str) -> Booking:
        return self._entity("PATCH", f"/bookings/{booking_id}/unassign", Booking, entity_key="booking", json_body={})

    def bulk_assign(self, booking_ids: Sequence[str], advisor_id: str) -> BulkAssignResult:
        data = self._data(
            "POST",
            "/bookings/bulk-assign",
            json_body={"bookingIds": list(booking_ids), "advisorId": advisor_id},
        )
        return BulkAssignResult.model_validate(data or {})

    def auto_assign(self, booking_ids: Sequence[str], strategy: AssignmentStrategy | str) -> BulkAssignResult:
        data = self._data(
            "POST",
            "/bookings/auto-assign",
            json_body={"bookingIds": list(booking_ids), "strategy": AssignmentStrategy(strategy).value},
        )
        return BulkAssignResult.model_validate(data or {})

    def bulk_update_status(self, booking_ids: Sequence[str], status: BookingStatus | str) -> BulkUpdateResult:
        data = self._data(
            "POST",
            "/bookings/bulk-update-status",
            json_body={"bookingIds": list(booking_ids), "status": BookingStatus(status).value},
        )
        return BulkUpdateResult.model_validate(data or {})

    def bulk_update_remarks(self, booking_ids: Sequence[str], remarks: RoleRemarks | Mapping[str, Any]) -> BulkUpdateResult:
        payload = coerce_model(remarks, RoleRemarks)
        data = self._data(
            "POST",
            "/bookings/bulk-update-remarks",
            json_body={"bookingIds": list(booking_ids), "remarks": payload.to_wire()},
        )
        return BulkUpdateResult.model_validate(data or {})

    def upload_import(self, upload: Upload, filename: str | None = None) -> ImportProgress:
        part = file_part(upload, filename, default_name=IMPORT_FILENAME)
        data = self._data("POST", "/bookings/import/upload", files={"file": part})
        return ImportProgress.model_validate(data or {})

    def preview_import(self, upload: Upload, filename: str | None = None) -> ImportPreview:
        part = file_part(upload, filename, default_name=IMPORT_FILENAME)
        data = self._data("POST", "/bookings/import/preview", files={"file": part})
        return ImportPreview.model_validate(data or {})

    def import_status(self, import_id: str) -> ImportProgress:
        return self._entity("GET", f"/bookings/import/status/{import_id}", ImportProgress, entity_key="import")

    def import_history(self, page: int | None = None, limit: int | None = None) -> Page[ImportProgress]:
        return self._page("/bookings/imports", "imports", ImportProgress, params={"page": page, "limit": limit})

    def export(self, filters: BookingExportFilters | Mapping[str, Any] | None = None) -> BinaryPayload:
        return self._download("/bookings/export", params=filters)
