from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence

from ..envelope import normalize_entity
from ..exceptions import ApiError
from ..models import BinaryPayload, Page
from ..models_enquiries import (
    AssignEnquiryRequest,
    CategoryChangeResult,
    CreateEnquiryRequest,
    Enquiry,
    EnquiryCategory,
    EnquiryFilters,
    EnquiryStats,
    EnquiryStatus,
    UpdateEnquiryRequest,
    VehicleModels,
)
from .base import BaseClient, coerce_model, to_params

OUT_OF_STOCK_MARKER = "out of stock"


class EnquiriesClient(BaseClient):
    def list_enquiries(self, filters: EnquiryFilters | Mapping[str, Any] | None = None) -> Page[Enquiry]:
        return self._page("/enquiries", "enquiries", Enquiry, params=filters)

    def my_enquiries(self, filters: EnquiryFilters | Mapping[str, Any] | None = None) -> Page[Enquiry]:
        return self._page("/enquiries/my", "enquiries", Enquiry, params=filters)

    def search(self, query: str, filters: EnquiryFilters | Mapping[str, Any] | None = None) -> list[Enquiry]:
        params = {"q": query, **(to_params(filters) or {})}
        return self._items("GET", "/enquiries/search", Enquiry, collection_key="enquiries", params=params)

    def stats(self, filters: EnquiryFilters | Mapping[str, Any] | None = None) -> EnquiryStats:
        return self._entity("GET", "/enquiries/stats", EnquiryStats, entity_key="stats", params=to_params(filters))

    def get_enquiry(self, enquiry_id: str) -> Enquiry:
        return self._entity("GET", f"/enquiries/{enquiry_id}", Enquiry, entity_key="enquiry")

    def create_enquiry(self, request: CreateEnquiryRequest | Mapping[str, Any]) -> Enquiry:
        payload = coerce_model(request, CreateEnquiryRequest)
        return self._entity("POST", "/enquiries", Enquiry, entity_key="enquiry", json_body=payload.to_wire())

    def update_enquiry(self, enquiry_id: str, request: UpdateEnquiryRequest | Mapping[str, Any]) -> Enquiry:
        payload = coerce_model(request, UpdateEnquiryRequest)
        return self._entity(
            "PUT",
            f"/enquiries/{enquiry_id}",
            Enquiry,
            entity_key="enquiry",
            json_body=payload.to_wire(),
        )

    def update_category(
        self,
        enquiry_id: str,
        category: EnquiryCategory | str,
        remarks: str | None = None,
    ) -> CategoryChangeResult:
        """Change the category; BOOKED can trigger an automatic booking server-side.

        Stock rejections are re-raised with a ``Cannot convert to booking:``
        prefix so callers can tell them apart from other validation errors.
        """
        body: dict[str, Any] = {"category": EnquiryCategory(category).value}
        if remarks:
            body["caRemarks"] = remarks
        try:
            data = self._data("PUT", f"/enquiries/{enquiry_id}", json_body=body)
        except ApiError as exc:
            if OUT_OF_STOCK_MARKER in exc.message.lower():
                raise dataclasses.replace(exc, message=f"Cannot convert to booking: {exc.message}") from exc
            raise
        if isinstance(data, Mapping) and isinstance(data.get("enquiry"), Mapping):
            return CategoryChangeResult.model_validate(data)
        return CategoryChangeResult(enquiry=Enquiry.model_validate(normalize_entity(data)))

    def update_status(self, enquiry_id: str, status: EnquiryStatus | str, notes: str | None = None) -> Enquiry:
        body: dict[str, Any] = {"status": EnquiryStatus(status).value}
        if notes:
            body["notes"] = notes
        return self._entity("PATCH", f"/enquiries/{enquiry_id}/status", Enquiry, entity_key="enquiry", json_body=body)

    def delete_enquiry(self, enquiry_id: str) -> None:
        self._data("DELETE", f"/enquiries/{enquiry_id}")

    def assign(self, enquiry_id: str, request: AssignEnquiryRequest | Mapping[str, Any]) -> Enquiry:
        payload = coerce_model(request, AssignEnquiryRequest)
        return self._entity(
            "POST",
            f"/enquiries/{enquiry_id}/assign",
            Enquiry,
            entity_key="enquiry",
            json_body=payload.to_wire(),
        )

    def unassign(self, enquiry_id: str) -> Enquiry:
        return self._entity("POST", f"/enquiries/{enquiry_id}/unassign", Enquiry, entity_key="enquiry")

    def add_notes(self, enquiry_id: str, notes: str) -> Enquiry:
        return self._entity(
            "POST",
            f"/enquiries/{enquiry_id}/notes",
            Enquiry,
            entity_key="enquiry",
            json_body={"notes": notes},
        )

    def bulk_update(self, enquiry_ids: Sequence[str], updates: UpdateEnquiryRequest | Mapping[str, Any]) -> list[Enquiry]:
        payload = coerce_model(updates, UpdateEnquiryRequest)
        return self._items(
            "PATCH",
            "/enquiries/bulk",
            Enquiry,
            collection_key="enquiries",
            json_body={"ids": list(enquiry_ids), "updates": payload.to_wire()},
        )

    def models(self) -> VehicleModels:
        return VehicleModels.model_validate(self._data("GET", "/enquiries/models") or {})

    def variants(self, model: str | None = None) -> list[str]:
        return self._strings("/enquiries/variants", "variants", params={"model": model} if model else None)

    def colors(self) -> list[str]:
        return self._strings("/enquiries/colors", "colors")

    def sources(self) -> list[str]:
        return self._strings("/enquiries/sources", "sources")

    def export_csv(self, filters: EnquiryFilters | Mapping[str, Any] | None = None) -> BinaryPayload:
        return self._download("/enquiries/export/csv", params=filters)
