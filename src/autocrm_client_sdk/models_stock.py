from __future__ import annotations

from enum import Enum
from typing import List

from .models import CrmModel, SortOrder


class StockStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    SOLD = "SOLD"
    MAINTENANCE = "MAINTENANCE"


class StockItem(CrmModel):
    id: str
    vehicle_id: str | None = None
    variant: str | None = None
    vc_code: str | None = None
    color: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    quantity: int | None = None
    available_quantity: int | None = None
    reserved_quantity: int | None = None
    location: str | None = None
    status: str | None = None
    price: float | None = None
    discount: float | None = None
    created_at: str | None = None
    updated_at: str | None = None


class StockListParams(CrmModel):
    page: int | None = None
    limit: int | None = None
    status: List[StockStatus] | None = None
    variant: List[str] | None = None
    color: List[str] | None = None
    fuel_type: List[str] | None = None
    transmission: List[str] | None = None
    location: List[str] | None = None
    min_price: float | None = None
    max_price: float | None = None
    available_only: bool | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None


class CreateStockRequest(CrmModel):
    vehicle_id: str
    variant: str
    vc_code: str
    color: str
    fuel_type: str
    transmission: str
    quantity: int
    location: str
    price: float
    discount: float | None = None


class UpdateStockRequest(CrmModel):
    quantity: int | None = None
    location: str | None = None
    status: StockStatus | None = None
    price: float | None = None
    discount: float | None = None


class StockStats(CrmModel):
    total_vehicles: int = 0
    available_vehicles: int = 0
    reserved_vehicles: int = 0
    sold_vehicles: int = 0
    maintenance_vehicles: int = 0
    total_value: float | None = None
    average_price: float | None = None
