from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


# Doctors

class DoctorBase(BaseModel):
    department: Optional[str] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    consultation_fee: Optional[Decimal] = Decimal("0")
    schedule: Optional[str] = None
    status: str = "active"
    joining_date: Optional[str] = None
    photo_url: Optional[str] = None
    notes: Optional[str] = None


class DoctorCreate(DoctorBase):
    doctor_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    specialization: str = Field(..., min_length=1)


class DoctorUpdate(PartialUpdate):
    non_nullable = ("name", "specialization", "status")

    name: Optional[str] = None
    specialization: Optional[str] = None
    department: Optional[str] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    consultation_fee: Optional[Decimal] = None
    schedule: Optional[str] = None
    status: Optional[str] = None
    joining_date: Optional[str] = None
    photo_url: Optional[str] = None
    notes: Optional[str] = None


class DoctorResponse(DoctorBase, ORMModel):
    id: int
    doctor_id: str
    name: str
    specialization: str
    created_at: Optional[datetime] = None


class NextDoctorIdResponse(BaseModel):
    id: str


# Salaries

class SalaryCreate(BaseModel):
    staff_id: Optional[int] = None
    staff_name: str = Field(..., min_length=1)
    role: Optional[str] = None
    department: Optional[str] = None
    category: Optional[str] = None
    base_salary: Decimal = Field(..., ge=0)
    allowances: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    net_salary: Optional[Decimal] = None
    payment_method: Optional[str] = "bank_transfer"
    payment_date: str
    month: str
    year: str
    status: str = "pending"
    notes: Optional[str] = None


class SalaryUpdate(PartialUpdate):
    non_nullable = ("staff_name", "base_salary", "net_salary", "payment_date", "month", "year", "status")

    staff_id: Optional[int] = None
    staff_name: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    category: Optional[str] = None
    base_salary: Optional[Decimal] = None
    allowances: Optional[Decimal] = None
    deductions: Optional[Decimal] = None
    net_salary: Optional[Decimal] = None
    payment_method: Optional[str] = None
    payment_date: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class SalaryResponse(SalaryCreate, ORMModel):
    id: int
    net_salary: Decimal
    created_at: Optional[datetime] = None


# Salary profiles

class SalaryProfileBase(BaseModel):
    staff_id: Optional[str] = None
    department: Optional[str] = None
    category: Optional[str] = None
    role: Optional[str] = None
    base_salary: Decimal = Field(Decimal("0"), ge=0)
    housing_allowance: Decimal = Decimal("0")
    transport_allowance: Decimal = Decimal("0")
    meal_allowance: Decimal = Decimal("0")
    other_allowance: Decimal = Decimal("0")
    phone: Optional[str] = None
    email: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account: Optional[str] = None
    join_date: Optional[str] = None
    status: str = "active"


class SalaryProfileCreate(SalaryProfileBase):
    staff_name: str = Field(..., min_length=1)


class SalaryProfileUpdate(PartialUpdate):
    non_nullable = ("staff_name", "base_salary", "status")

    staff_name: Optional[str] = None
    staff_id: Optional[str] = None
    department: Optional[str] = None
    category: Optional[str] = None
    role: Optional[str] = None
    base_salary: Optional[Decimal] = None
    housing_allowance: Optional[Decimal] = None
    transport_allowance: Optional[Decimal] = None
    meal_allowance: Optional[Decimal] = None
    other_allowance: Optional[Decimal] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account: Optional[str] = None
    join_date: Optional[str] = None
    status: Optional[str] = None


class SalaryProfileResponse(SalaryProfileCreate, ORMModel):
    id: int
    created_at: Optional[datetime] = None


# Loans

class SalaryLoanCreate(BaseModel):
    profile_id: Optional[int] = None
    staff_name: str = Field(..., min_length=1)
    type: str = "loan"
    principal: Decimal = Field(..., gt=0)
    interest_rate: Decimal = Decimal("0")
    term_months: int = Field(1, ge=1)
    installment_amount: Optional[Decimal] = None
    total_paid: Decimal = Decimal("0")
    outstanding: Optional[Decimal] = None
    start_date: str
    status: str = "active"
    notes: Optional[str] = None


class SalaryLoanUpdate(PartialUpdate):
    non_nullable = ("staff_name", "type", "principal", "term_months", "installment_amount", "outstanding",
                    "start_date", "status")

    profile_id: Optional[int] = None
    staff_name: Optional[str] = None
    type: Optional[str] = None
    principal: Optional[Decimal] = None
    interest_rate: Optional[Decimal] = None
    term_months: Optional[int] = Field(None, ge=1)
    installment_amount: Optional[Decimal] = None
    total_paid: Optional[Decimal] = None
    outstanding: Optional[Decimal] = None
    start_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class SalaryLoanResponse(SalaryLoanCreate, ORMModel):
    id: int
    installment_amount: Decimal
    outstanding: Decimal
    created_at: Optional[datetime] = None


class LoanInstallmentCreate(BaseModel):
    loan_id: int
    due_date: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    status: str = "due"
    paid_date: Optional[str] = None


class LoanInstallmentResponse(ORMModel):
    id: int
    loan_id: int
    due_date: str
    amount: Decimal
    paid_amount: Optional[Decimal] = None
    status: str
    paid_date: Optional[str] = None


# Payroll

class PayrollRunCreate(BaseModel):
    month: str = Field(..., min_length=1)
    year: str = Field(..., min_length=4, max_length=4)
    run_date: Optional[str] = None
    status: str = "draft"
    notes: Optional[str] = None


class PayrollRunUpdate(PartialUpdate):
    non_nullable = ("month", "year", "run_date", "status")

    month: Optional[str] = None
    year: Optional[str] = None
    run_date: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class PayrollRunResponse(ORMModel):
    id: int
    month: str
    year: str
    run_date: str
    total_gross: Optional[Decimal] = None
    total_deductions: Optional[Decimal] = None
    total_net: Optional[Decimal] = None
    employee_count: Optional[int] = None
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class PayslipCreate(BaseModel):
    payroll_run_id: int
    profile_id: Optional[int] = None
    staff_name: str = Field(..., min_length=1)
    department: Optional[str] = None
    base_salary: Decimal
    allowances: Decimal = Decimal("0")
    loan_deductions: Decimal = Decimal("0")
    other_deductions: Decimal = Decimal("0")
    gross_pay: Decimal
    net_pay: Decimal
    payment_method: Optional[str] = "bank_transfer"
    status: str = "pending"
    paid_date: Optional[str] = None
    notes: Optional[str] = None


class PayslipUpdate(PartialUpdate):
    non_nullable = ("net_pay", "status")

    other_deductions: Optional[Decimal] = None
    net_pay: Optional[Decimal] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    paid_date: Optional[str] = None
    notes: Optional[str] = None


class PayslipResponse(PayslipCreate, ORMModel):
    id: int


class PayrollGenerateResponse(BaseModel):
    payslips: List[PayslipResponse]
    employee_count: int
