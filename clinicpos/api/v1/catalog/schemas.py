from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


# Services

class ServiceBase(BaseModel):
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True
    is_lab_test: bool = False
    sample_collection_required: bool = False
    sample_type: Optional[str] = None
    report_parameters: Optional[List[Any]] = None


class ServiceCreate(ServiceBase):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)


class ServiceUpdate(PartialUpdate):
    non_nullable = ("name", "category", "price", "is_active", "is_lab_test", "sample_collection_required")

    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    is_lab_test: Optional[bool] = None
    sample_collection_required: Optional[bool] = None
    sample_type: Optional[str] = None
    report_parameters: Optional[List[Any]] = None


class ServiceResponse(ServiceBase, ORMModel):
    id: int
    name: str
    category: str
    price: Decimal


# Injections

class InjectionCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    is_active: bool = True


class InjectionUpdate(PartialUpdate):
    non_nullable = ("name", "category", "price", "is_active")

    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class InjectionResponse(InjectionCreate, ORMModel):
    id: int


# Packages

class PackageItem(BaseModel):
    type: Literal["service", "medicine", "injection", "custom"] = "service"
    ref_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)
    unit_price: float = Field(0, ge=0)


class PackageCreate(BaseModel):
    name: str
    description: Optional[str] = None
    items: List[PackageItem] = []
    is_active: bool = True


class PackageUpdate(PartialUpdate):
    non_nullable = ("name", "items", "is_active")

    name: Optional[str] = None
    description: Optional[str] = None
    items: Optional[List[PackageItem]] = None
    is_active: Optional[bool] = None


class PackageResponse(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    items: List[PackageItem]
    is_active: bool
    total_price: Decimal
    created_at: Optional[datetime] = None


# Medicines

class MedicineBase(BaseModel):
    generic_name: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    batch_no: Optional[str] = None
    expiry_date: Optional[date] = None
    unit: str = "Box"
    unit_count: int = 1
    box_price: Decimal = Decimal("0")
    qty_per_box: int = 1
    per_med_price: Decimal = Decimal("0")
    total_purchase_price: Decimal = Decimal("0")
    selling_price_local: Decimal = Decimal("0")
    selling_price_foreigner: Decimal = Decimal("0")
    stock_count: int = Field(0, ge=0)
    total_stock: int = 0
    stock_alert: int = 10
    image_url: Optional[str] = None
    quantity: int = 0
    unit_price: Decimal = Decimal("0")
    selling_price: Decimal = Decimal("0")
    is_active: bool = True


class MedicineCreate(MedicineBase):
    name: str = Field(..., min_length=1)


class MedicineUpdate(PartialUpdate):
    non_nullable = ("name", "unit", "unit_count", "box_price", "qty_per_box", "per_med_price", "total_purchase_price",
                    "selling_price_local", "selling_price_foreigner", "stock_count", "total_stock",
                    "stock_alert", "quantity", "unit_price", "selling_price", "is_active")

    name: Optional[str] = None
    generic_name: Optional[str] = None
    category: Optional[str] = None
    manufacturer: Optional[str] = None
    batch_no: Optional[str] = None
    expiry_date: Optional[date] = None
    unit: Optional[str] = None
    unit_count: Optional[int] = None
    box_price: Optional[Decimal] = None
    qty_per_box: Optional[int] = None
    per_med_price: Optional[Decimal] = None
    total_purchase_price: Optional[Decimal] = None
    selling_price_local: Optional[Decimal] = None
    selling_price_foreigner: Optional[Decimal] = None
    stock_count: Optional[int] = Field(None, ge=0)
    total_stock: Optional[int] = None
    stock_alert: Optional[int] = None
    image_url: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    selling_price: Optional[Decimal] = None
    is_active: Optional[bool] = None


class MedicinePatch(MedicineUpdate):
    """A stock_count change is written to the stock history with this reason"""
    reason: Optional[str] = None
    adjustment_type: Optional[Literal["set", "add", "subtract"]] = None


class MedicineResponse(MedicineBase, ORMModel):
    id: int
    name: str


class StockAdjustmentResponse(ORMModel):
    id: int
    medicine_id: int
    previous_stock: int
    new_stock: int
    adjustment_type: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


# Lab tests

class LabTestBase(BaseModel):
    description: Optional[str] = None
    turnaround_time: Optional[str] = None
    patient_id: Optional[int] = None
    service_id: Optional[int] = None
    bill_id: Optional[int] = None
    sample_collection_required: bool = False
    report_file_url: Optional[str] = None
    report_file_name: Optional[str] = None
    report_results: Optional[Any] = None
    referrer_name: Optional[str] = None
    status: str = "processing"


class LabTestCreate(LabTestBase):
    test_code: Optional[str] = None
    test_name: str = Field(..., min_length=1)
    category: str
    sample_type: str
    price: Decimal = Field(..., ge=0)


class LabTestUpdate(PartialUpdate):
    non_nullable = ("test_code", "test_name", "category", "sample_type", "price",
                    "sample_collection_required", "status")

    test_code: Optional[str] = None
    test_name: Optional[str] = None
    category: Optional[str] = None
    sample_type: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    turnaround_time: Optional[str] = None
    patient_id: Optional[int] = None
    service_id: Optional[int] = None
    bill_id: Optional[int] = None
    sample_collection_required: Optional[bool] = None
    report_file_url: Optional[str] = None
    report_file_name: Optional[str] = None
    report_results: Optional[Any] = None
    referrer_name: Optional[str] = None
    status: Optional[str] = None


class LabTestResponse(LabTestBase, ORMModel):
    id: int
    test_code: str
    test_name: str
    category: str
    sample_type: str
    price: Decimal
    created_at: Optional[datetime] = None
    patient_name: Optional[str] = None


class NextCodeResponse(BaseModel):
    code: str
