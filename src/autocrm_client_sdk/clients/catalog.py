from __future__ import annotations

from typing import Any, Mapping

from ..models_dealerships import (
    CatalogEntry,
    CatalogModel,
    CompleteCatalog,
    CreateCatalogEntryRequest,
    ModelVariants,
    UpdateCatalogEntryRequest,
)
from .base import BaseClient, coerce_model


class CatalogClient(BaseClient):
    """Vehicle catalog of one dealership, under ``/dealerships/:id/catalog``."""

    def _path(self, dealership_id: str, suffix: str = "") -> str:
        return f"/dealerships/{dealership_id}/catalog{suffix}"

    def catalog(self, dealership_id: str) -> list[CatalogEntry]:
        return self._items("GET", self._path(dealership_id), CatalogEntry, collection_key="catalog")

    def complete_catalog(self, dealership_id: str, search: str | None = None) -> CompleteCatalog:
        params = {"search": search} if search else None
        return self._entity("GET", self._path(dealership_id, "/complete"), CompleteCatalog, params=params)

    def search(self, dealership_id: str, query: str) -> CompleteCatalog:
        return self.complete_catalog(dealership_id, search=query)

    def brands(self, dealership_id: str) -> list[str]:
        return self._strings(self._path(dealership_id, "/brands"), "brands")

    def models_by_brand(self, dealership_id: str, brand: str) -> list[CatalogModel]:
        return self._items(
            "GET",
            self._path(dealership_id, "/models"),
            CatalogModel,
            collection_key="models",
            params={"brand": brand},
        )

    def model_variants(self, dealership_id: str, catalog_id: str) -> ModelVariants:
        return self._entity("GET", self._path(dealership_id, f"/{catalog_id}/variants"), ModelVariants)

    def create_entry(self, dealership_id: str, request: CreateCatalogEntryRequest | Mapping[str, Any]) -> CatalogEntry:
        payload = coerce_model(request, CreateCatalogEntryRequest)
        return self._entity(
            "POST",
            self._path(dealership_id),
            CatalogEntry,
            entity_key="catalog",
            json_body=payload.to_wire(),
        )

    def update_entry(
        self,
        dealership_id: str,
        catalog_id: str,
        request: UpdateCatalogEntryRequest | Mapping[str, Any],
    ) -> CatalogEntry:
        payload = coerce_model(request, UpdateCatalogEntryRequest)
        return self._entity(
            "PATCH",
            self._path(dealership_id, f"/{catalog_id}"),
            CatalogEntry,
            entity_key="catalog",
            json_body=payload.to_wire(),
        )

    def delete_entry(self, dealership_id: str, catalog_id: str) -> None:
        self._data("DELETE", self._path(dealership_id, f"/{catalog_id}"))

    def stats(self, dealership_id: str) -> dict[str, Any]:
        data = self._data("GET", self._path(dealership_id, "/stats"))
        return dict(data) if isinstance(data, Mapping) else {}
