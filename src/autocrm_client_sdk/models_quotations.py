from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import Field

from .models import CrmModel, SortOrder


class QuotationStatus(str, Enum):
    PENDING = "PENDING"
    DRAFT = "DRAFT"
    SENT = "SENT"
    VIEWED = "VIEWED"
    ACCEPTED = "ACCEPTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class QuotationItem(CrmModel):
    id: str | None = None
    description: str
    quantity: int = 1
    unit_price: float = 0.0
    discount: float | None = None
    tax: float | None = None
    total: float | None = None


class Quotation(CrmModel):
    id: str
    quotation_number: str | None = None
    enquiry_id: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    vehicle_details: str | None = None
    amount: float | None = None
    status: str | None = None
    items: List[QuotationItem] = Field(default_factory=list)
    subtotal: float | None = None
    tax_amount: float | None = None
    discount_amount: float | None = None
    total_amount: float | None = None
    pdf_url: str | None = None
    valid_until: str | None = None
    created_by: Any = None
    created_by_id: str | None = None
    approved_by: Any = None
    approved_at: str | None = None
    sent_at: str | None = None
    viewed_at: str | None = None
    notes: str | None = None
    terms: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    enquiry: Dict[str, Any] | None = None


class QuotationFilters(CrmModel):
    page: int | None = None
    limit: int | None = None
    status: List[QuotationStatus] | None = None
    created_by: List[str] | None = None
    customer_id: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    search: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    expiring: bool | None = None
    sort_by: str | None = None
    sort_order: SortOrder | None = None


class CreateQuotationRequest(CrmModel):
    enquiry_id: str
    amount: float
    pdf_url: str | None = None


class UpdateQuotationRequest(CrmModel):
    amount: float | None = None
    status: QuotationStatus | None = None
    pdf_url: str | None = None


class SendQuotationRequest(CrmModel):
    recipient_email: str | None = None
    subject: str | None = None
    message: str | None = None
    attach_pdf: bool | None = Field(default=None, alias="attachPDF")


class ApproveQuotationRequest(CrmModel):
    notes: str | None = None


class RejectQuotationRequest(CrmModel):
    reason: str
    notes: str | None = None


class QuotationStats(CrmModel):
    total: int = 0
    draft: int | None = None
    sent: int | None = None
    viewed: int | None = None
    approved: int | None = None
    rejected: int | None = None
    expired: int | None = None
    total_value: float | None = None
    approved_value: float | None = None
    conversion_rate: float | None = None
    avg_quotation_value: float | None = None


class QuotationTemplate(CrmModel):
    id: str
    name: str
    description: str | None = None
    items: List[QuotationItem] = Field(default_factory=list)
    terms: str | None = None
    validity_days: int | None = None
    is_active: bool = True


class TemplateCustomer(CrmModel):
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    enquiry_id: str | None = None
