import datetime as dt
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


class ExpenseCreate(BaseModel):
    category: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    payment_method: Optional[str] = "cash"
    date: dt.date
    notes: Optional[str] = None
    status: Optional[str] = "pending"
    approved_by: Optional[str] = None
    receipt_url: Optional[str] = None


class ExpenseUpdate(PartialUpdate):
    non_nullable = ("category", "description", "amount", "date")

    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(None, ge=0)
    payment_method: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    approved_by: Optional[str] = None
    receipt_url: Optional[str] = None


class ExpenseResponse(ExpenseCreate, ORMModel):
    id: int


class BankTransactionCreate(BaseModel):
    type: Literal["deposit", "withdrawal"]
    amount: Decimal = Field(..., gt=0)
    bank_name: str = Field(..., min_length=1)
    account_no: Optional[str] = None
    reference_no: Optional[str] = None
    description: Optional[str] = None
    date: dt.date


class BankTransactionResponse(BankTransactionCreate, ORMModel):
    id: int
    type: str


class BankSummaryResponse(BaseModel):
    deposits: Decimal
    withdrawals: Decimal
    balance: Decimal
