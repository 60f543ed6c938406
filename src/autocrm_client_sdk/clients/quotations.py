from __future__ import annotations

from typing import Any, Mapping

from ..models import BinaryPayload, Page
from ..models_quotations import (
    ApproveQuotationRequest,
    CreateQuotationRequest,
    Quotation,
    QuotationFilters,
    QuotationStats,
    QuotationTemplate,
    RejectQuotationRequest,
    SendQuotationRequest,
    TemplateCustomer,
    UpdateQuotationRequest,
)
from .base import BaseClient, coerce_model, to_body, to_params


class QuotationsClient(BaseClient):
    def list_quotations(self, filters: QuotationFilters | Mapping[str, Any] | None = None) -> Page[Quotation]:
        return self._page("/quotations", "quotations", Quotation, params=filters)

    def my_quotations(self, filters: QuotationFilters | Mapping[str, Any] | None = None) -> Page[Quotation]:
        return self._page("/quotations/my", "quotations", Quotation, params=filters)

    def search(self, query: str, filters: QuotationFilters | Mapping[str, Any] | None = None) -> list[Quotation]:
        params = {"q": query, **(to_params(filters) or {})}
        return self._items("GET", "/quotations/search", Quotation, collection_key="quotations", params=params)

    def stats(self, filters: QuotationFilters | Mapping[str, Any] | None = None) -> QuotationStats:
        return self._entity("GET", "/quotations/stats", QuotationStats, params=to_params(filters))

    def expiring(self, days: int = 7) -> list[Quotation]:
        return self._items("GET", "/quotations/expiring", Quotation, collection_key="quotations", params={"days": days})

    def templates(self) -> list[QuotationTemplate]:
        return self._items("GET", "/quotations/templates", QuotationTemplate, collection_key="templates")

    def create_from_template(self, template_id: str, customer: TemplateCustomer | Mapping[str, Any]) -> Quotation:
        payload = coerce_model(customer, TemplateCustomer)
        return self._entity(
            "POST",
            f"/quotations/templates/{template_id}/create",
            Quotation,
            entity_key="quotation",
            json_body=payload.to_wire(),
        )

    def get_quotation(self, quotation_id: str) -> Quotation:
        return self._entity("GET", f"/quotations/{quotation_id}", Quotation, entity_key="quotation")

    def create_quotation(self, request: CreateQuotationRequest | Mapping[str, Any]) -> Quotation:
        payload = coerce_model(request, CreateQuotationRequest)
        return self._entity("POST", "/quotations", Quotation, entity_key="quotation", json_body=payload.to_wire())

    def update_quotation(self, quotation_id: str, request: UpdateQuotationRequest | Mapping[str, Any]) -> Quotation:
        payload = coerce_model(request, UpdateQuotationRequest)
        return self._entity(
            "PUT",
            f"/quotations/{quotation_id}",
            Quotation,
            entity_key="quotation",
            json_body=payload.to_wire(),
        )

    def delete_quotation(self, quotation_id: str) -> None:
        self._data("DELETE", f"/quotations/{quotation_id}")

    def send(self, quotation_id: str, request: SendQuotationRequest | Mapping[str, Any] | None = None) -> Quotation:
        body = to_body(coerce_model(request, SendQuotationRequest)) if request is not None else None
        return self._entity("POST", f"/quotations/{quotation_id}/send", Quotation, entity_key="quotation", json_body=body)

    def approve(self, quotation_id: str, request: ApproveQuotationRequest | Mapping[str, Any] | None = None) -> Quotation:
        body = to_body(coerce_model(request, ApproveQuotationRequest)) if request is not None else None
        return self._entity(
            "POST",
            f"/quotations/{quotation_id}/approve",
            Quotation,
            entity_key="quotation",
            json_body=body,
        )

    def reject(self, quotation_id: str, request: RejectQuotationRequest | Mapping[str, Any]) -> Quotation:
        payload = coerce_model(request, RejectQuotationRequest)
        return self._entity(
            "POST",
            f"/quotations/{quotation_id}/reject",
            Quotation,
            entity_key="quotation",
            json_body=payload.to_wire(),
        )

    def duplicate(self, quotation_id: str) -> Quotation:
        return self._entity("POST", f"/quotations/{quotation_id}/duplicate", Quotation, entity_key="quotation")

    def activity(self, quotation_id: str) -> list[dict[str, Any]]:
        data = self._data("GET", f"/quotations/{quotation_id}/activity")
        if isinstance(data, Mapping):
            data = data.get("activity") or data.get("data") or []
        return list(data or [])

    def pdf(self, quotation_id: str) -> BinaryPayload:
        return self._download(f"/quotations/{quotation_id}/pdf")

    def export_csv(self, filters: QuotationFilters | Mapping[str, Any] | None = None) -> BinaryPayload:
        return self._download("/quotations/export/csv", params=filters)
