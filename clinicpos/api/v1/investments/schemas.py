import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


class InvestorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    share_percentage: Decimal = Field(Decimal("100"), ge=0, le=100)


class InvestorUpdate(PartialUpdate):
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    share_percentage: Optional[Decimal] = Field(None, ge=0, le=100)


class InvestorResponse(ORMModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    share_percentage: Optional[Decimal] = None
    created_at: Optional[dt.datetime] = None


class InvestmentInvestor(BaseModel):
    """One shareholder of an investment; shares are rescaled to total 100"""
    investor_id: Optional[int] = None
    name: str = Field(..., min_length=1)
    share_percentage: float = Field(..., ge=0)
    amount: Optional[str] = None


class InvestmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    return_amount: Decimal = Field(Decimal("0"), ge=0)
    investor_name: Optional[str] = None
    investors: List[InvestmentInvestor] = []
    payment_method: str = "cash"
    status: str = "active"
    start_date: dt.date
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None


class InvestmentUpdate(PartialUpdate):
    non_nullable = ("title", "category", "amount", "status", "start_date")

    title: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    amount: Optional[Decimal] = Field(None, ge=0)
    return_amount: Optional[Decimal] = Field(None, ge=0)
    investor_name: Optional[str] = None
    investors: Optional[List[InvestmentInvestor]] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None


class InvestmentResponse(ORMModel):
    id: int
    title: str
    category: str
    amount: Decimal
    return_amount: Optional[Decimal] = None
    investor_name: Optional[str] = None
    investors: List[InvestmentInvestor] = []
    payment_method: Optional[str] = None
    status: str
    start_date: dt.date
    end_date: Optional[dt.date] = None
    notes: Optional[str] = None


class ContributionCreate(BaseModel):
    investment_id: int
    investor_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: dt.date
    category: Optional[str] = None
    payment_slip: Optional[str] = None
    images: Optional[List[str]] = None
    note: Optional[str] = None


class ContributionUpdate(PartialUpdate):
    non_nullable = ("investor_name", "amount", "date")

    investor_name: Optional[str] = Field(None, min_length=1)
    amount: Optional[Decimal] = Field(None, gt=0)
    date: Optional[dt.date] = None
    category: Optional[str] = None
    payment_slip: Optional[str] = None
    images: Optional[List[str]] = None
    note: Optional[str] = None


class ContributionResponse(ContributionCreate, ORMModel):
    id: int
    created_at: Optional[dt.datetime] = None
