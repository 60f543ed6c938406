from __future__ import annotations

from typing import Any, Mapping

from ..models import Page
from ..models_dealerships import (
    CreateDealershipRequest,
    Dealership,
    DealershipListParams,
    UpdateDealershipRequest,
)
from .base import BaseClient, coerce_model


class DealershipsClient(BaseClient):
    def list_dealerships(self, params: DealershipListParams | Mapping[str, Any] | None = None) -> Page[Dealership]:
        return self._page("/dealerships", "dealerships", Dealership, params=params)

    def get_dealership(self, dealership_id: str) -> Dealership:
        return self._entity("GET", f"/dealerships/{dealership_id}", Dealership, entity_key="dealership")

    def create_dealership(self, request: CreateDealershipRequest | Mapping[str, Any]) -> Dealership:
        payload = coerce_model(request, CreateDealershipRequest)
        return self._entity("POST", "/dealerships", Dealership, entity_key="dealership", json_body=payload.to_wire())

    def update_dealership(self, dealership_id: str, request: UpdateDealershipRequest | Mapping[str, Any]) -> Dealership:
        payload = coerce_model(request, UpdateDealershipRequest)
        return self._entity(
            "PATCH",
            f"/dealerships/{dealership_id}",
            Dealership,
            entity_key="dealership",
            json_body=payload.to_wire(),
        )

    def activate(self, dealership_id: str) -> Dealership:
        return self._entity("POST", f"/dealerships/{dealership_id}/activate", Dealership, entity_key="dealership")

    def deactivate(self, dealership_id: str) -> Dealership:
        return self._entity("POST", f"/dealerships/{dealership_id}/deactivate", Dealership, entity_key="dealership")

    def complete_onboarding(self, dealership_id: str) -> Dealership:
        return self._entity(
            "POST",
            f"/dealerships/{dealership_id}/complete-onboarding",
            Dealership,
            entity_key="dealership",
        )
