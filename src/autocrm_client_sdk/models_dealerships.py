from __future__ import annotations

from typing import Any, Dict, List

from pydantic import Field

from .models import CrmModel


class Dealership(CrmModel):
    id: str
    name: str | None = None
    code: str | None = None
    type: str | None = None
    brands: List[str] = Field(default_factory=list)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool | None = None
    onboarding_completed: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


class DealershipListParams(CrmModel):
    page: int | None = None
    limit: int | None = None
    type: str | None = None
    search: str | None = None
    is_active: bool | None = None
    include_count: bool | None = None


class CreateDealershipRequest(CrmModel):
    name: str
    code: str
    type: str | None = None
    brands: List[str] | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    phone: str | None = None
    email: str | None = None


class UpdateDealershipRequest(CrmModel):
    name: str | None = None
    type: str | None = None
    brands: List[str] | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    pincode: str | None = None
    phone: str | None = None
    email: str | None = None
    is_active: bool | None = None


class VariantColor(CrmModel):
    name: str
    code: str | None = None
    additional_cost: float = 0.0
    is_available: bool = True


class VehicleVariant(CrmModel):
    name: str
    vc_code: str | None = None
    fuel_types: List[str] = Field(default_factory=list)
    transmissions: List[str] = Field(default_factory=list)
    colors: List[VariantColor] = Field(default_factory=list)
    ex_showroom_price: float | None = None
    rto_charges: float | None = None
    insurance: float | None = None
    accessories: float | None = None
    on_road_price: float | None = None
    is_available: bool = True


class CatalogModel(CrmModel):
    model: str
    catalog_id: str | None = None
    is_active: bool | None = None


class CatalogEntry(CrmModel):
    id: str | None = None
    brand: str | None = None
    model: str | None = None
    is_active: bool | None = None
    variants: List[VehicleVariant] = Field(default_factory=list)


class ModelVariants(CrmModel):
    brand: str | None = None
    model: str | None = None
    variants: List[VehicleVariant] = Field(default_factory=list)


class CreateCatalogEntryRequest(CrmModel):
    brand: str
    model: str
    variants: List[VehicleVariant] = Field(default_factory=list)


class UpdateCatalogEntryRequest(CrmModel):
    is_active: bool | None = None
    variants: List[VehicleVariant] | None = None


class CompleteCatalog(CrmModel):
    dealership: Dict[str, Any] | None = None
    models: List[CatalogEntry] = Field(default_factory=list)
    brands: List[Dict[str, Any]] = Field(default_factory=list)
