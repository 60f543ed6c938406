from __future__ import annotations

from typing import Any, Mapping

from ..models import Page
from ..models_stock import CreateStockRequest, StockItem, StockListParams, StockStats, UpdateStockRequest
from .base import BaseClient, coerce_model


class StockClient(BaseClient):
    def list_stock(self, params: StockListParams | Mapping[str, Any] | None = None) -> Page[StockItem]:
        return self._page("/stock", "vehicles", StockItem, params=params)

    def get_stock(self, stock_id: str) -> StockItem:
        return self._entity("GET", f"/stock/{stock_id}", StockItem, entity_key="vehicle")

    def create_stock(self, request: CreateStockRequest | Mapping[str, Any]) -> StockItem:
        payload = coerce_model(request, CreateStockRequest)
        return self._entity("POST", "/stock", StockItem, entity_key="vehicle", json_body=payload.to_wire())

    def update_stock(self, stock_id: str, request: UpdateStockRequest | Mapping[str, Any]) -> StockItem:
        payload = coerce_model(request, UpdateStockRequest)
        return self._entity("PUT", f"/stock/{stock_id}", StockItem, entity_key="vehicle", json_body=payload.to_wire())

    def delete_stock(self, stock_id: str) -> None:
        self._data("DELETE", f"/stock/{stock_id}")

    def stats(self) -> StockStats:
        return self._entity("GET", "/stock/stats", StockStats)

    def reserve(self, stock_id: str, quantity: int) -> StockItem:
        return self._quantity_action(stock_id, "reserve", quantity)

    def release(self, stock_id: str, quantity: int) -> StockItem:
        return self._quantity_action(stock_id, "release", quantity)

    def mark_sold(self, stock_id: str, quantity: int) -> StockItem:
        return self._quantity_action(stock_id, "sold", quantity)

    def by_variant(self, variant: str) -> list[StockItem]:
        return self._items("GET", "/stock/variant", StockItem, collection_key="vehicles", params={"variant": variant})

    def by_color(self, color: str) -> list[StockItem]:
        return self._items("GET", "/stock/color", StockItem, collection_key="vehicles", params={"color": color})

    def search(self, query: str) -> list[StockItem]:
        return self._items("GET", "/stock/search", StockItem, collection_key="vehicles", params={"q": query})

    def _quantity_action(self, stock_id: str, action: str, quantity: int) -> StockItem:
        if quantity <= 0:
            raise ValueError("quantity must be positive")
        return self._entity(
            "POST",
            f"/stock/{stock_id}/{action}",
            StockItem,
            entity_key="vehicle",
            json_body={"quantity": quantity},
        )
