from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate

ItemType = Literal["service", "medicine", "injection", "custom"]


class BillItem(BaseModel):
    name: str = Field(..., min_length=1)
    type: ItemType = "custom"
    quantity: int = Field(1, ge=0)
    unit_price: float = Field(0, ge=0)
    total: Optional[float] = None
    medicine_id: Optional[int] = None
    service_id: Optional[int] = None
    package_id: Optional[int] = None
    package_name: Optional[str] = None


class BillCreate(BaseModel):
    """Totals and status are derived from the items when omitted"""
    bill_no: Optional[str] = None
    patient_id: int
    visit_id: Optional[int] = None
    items: List[BillItem] = Field(..., min_length=1)
    subtotal: Optional[Decimal] = None
    discount: Decimal = Decimal("0")
    discount_type: Literal["amount", "percentage"] = "amount"
    tax: Optional[Decimal] = None
    total: Optional[Decimal] = None
    paid_amount: Decimal = Decimal("0")
    payment_method: Optional[str] = "cash"
    reference_doctor: Optional[str] = None
    payment_date: Optional[date] = None
    status: Optional[Literal["paid", "partial", "unpaid"]] = None


class BillUpdate(PartialUpdate):
    non_nullable = ("bill_no", "patient_id", "items", "subtotal", "discount", "tax", "total", "paid_amount", "status")

    bill_no: Optional[str] = None
    patient_id: Optional[int] = None
    visit_id: Optional[int] = None
    items: Optional[List[BillItem]] = None
    subtotal: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    discount_type: Optional[Literal["amount", "percentage"]] = None
    tax: Optional[Decimal] = None
    total: Optional[Decimal] = None
    paid_amount: Optional[Decimal] = None
    payment_method: Optional[str] = None
    reference_doctor: Optional[str] = None
    payment_date: Optional[date] = None
    status: Optional[Literal["paid", "partial", "unpaid"]] = None


class BillResponse(ORMModel):
    id: int
    bill_no: str
    patient_id: int
    visit_id: Optional[int] = None
    items: List[BillItem]
    subtotal: Decimal
    discount: Decimal
    discount_type: Optional[str] = None
    tax: Decimal
    total: Decimal
    paid_amount: Decimal
    payment_method: Optional[str] = None
    reference_doctor: Optional[str] = None
    payment_date: Optional[date] = None
    status: str
    created_at: Optional[datetime] = None
    patient_name: Optional[str] = None
