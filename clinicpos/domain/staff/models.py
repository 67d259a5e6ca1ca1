from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from clinicpos.infrastructure.database import Base


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    doctor_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=False)
    department = Column(String(100))
    experience = Column(String(100))
    qualification = Column(String(255))
    phone = Column(String(50))
    email = Column(String(255))
    address = Column(Text)
    consultation_fee = Column(Numeric(10, 2), default=0)
    schedule = Column(Text)
    status = Column(String(20), nullable=False, default="active")
    joining_date = Column(String(10))
    photo_url = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class Salary(Base):
    """One salary payment record"""
    __tablename__ = "salaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer)
    staff_name = Column(String(255), nullable=False)
    role = Column(String(100))
    department = Column(String(100))
    category = Column(String(100))
    base_salary = Column(Numeric(10, 2), nullable=False)
    allowances = Column(Numeric(10, 2), default=0)
    deductions = Column(Numeric(10, 2), default=0)
    net_salary = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), default="bank_transfer")
    payment_date = Column(String(10), nullable=False)
    month = Column(String(20), nullable=False)
    year = Column(String(4), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class SalaryProfile(Base):
    """Standing pay terms for one employee, used by payroll runs"""
    __tablename__ = "salary_profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_name = Column(String(255), nullable=False)
    staff_id = Column(String(50))
    department = Column(String(100))
    category = Column(String(100))
    role = Column(String(100))
    base_salary = Column(Numeric(10, 2), nullable=False, default=0)
    housing_allowance = Column(Numeric(10, 2), default=0)
    transport_allowance = Column(Numeric(10, 2), default=0)
    meal_allowance = Column(Numeric(10, 2), default=0)
    other_allowance = Column(Numeric(10, 2), default=0)
    phone = Column(String(50))
    email = Column(String(255))
    bank_name = Column(String(255))
    bank_account = Column(String(100))
    join_date = Column(String(10))
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, default=datetime.now)


class SalaryLoan(Base):
    """Salary advance or loan repaid through payroll deductions"""
    __tablename__ = "salary_loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Integer, ForeignKey("salary_profiles.id"), index=True)
    staff_name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="loan")
    principal = Column(Numeric(10, 2), nullable=False)
    interest_rate = Column(Numeric(5, 2), default=0)
    term_months = Column(Integer, nullable=False, default=1)
    installment_amount = Column(Numeric(10, 2), nullable=False)
    total_paid = Column(Numeric(10, 2), default=0)
    outstanding = Column(Numeric(10, 2), nullable=False)
    start_date = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default="active")
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class LoanInstallment(Base):
    __tablename__ = "loan_installments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("salary_loans.id"), index=True)
    due_date = Column(String(10), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    paid_amount = Column(Numeric(10, 2), default=0)
    status = Column(String(20), nullable=False, default="due")
    paid_date = Column(String(10))


class PayrollRun(Base):
    __tablename__ = "payroll_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month = Column(String(20), nullable=False)
    year = Column(String(4), nullable=False)
    run_date = Column(String(10), nullable=False)
    total_gross = Column(Numeric(12, 2), default=0)
    total_deductions = Column(Numeric(12, 2), default=0)
    total_net = Column(Numeric(12, 2), default=0)
    employee_count = Column(Integer, default=0)
    status = Column(String(20), nullable=False, default="draft")
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class Payslip(Base):
    __tablename__ = "payslips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    payroll_run_id = Column(Integer, ForeignKey("payroll_runs.id"), index=True)
    profile_id = Column(Integer, ForeignKey("salary_profiles.id"))
    staff_name = Column(String(255), nullable=False)
    department = Column(String(100))
    base_salary = Column(Numeric(10, 2), nullable=False)
    allowances = Column(Numeric(10, 2), default=0)
    loan_deductions = Column(Numeric(10, 2), default=0)
    other_deductions = Column(Numeric(10, 2), default=0)
    gross_pay = Column(Numeric(10, 2), nullable=False)
    net_pay = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), default="bank_transfer")
    status = Column(String(20), nullable=False, default="pending")
    paid_date = Column(String(10))
    notes = Column(Text)
