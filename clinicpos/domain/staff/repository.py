from typing import List

from sqlalchemy import select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.staff.models import (
    Doctor,
    LoanInstallment,
    PayrollRun,
    Payslip,
    Salary,
    SalaryLoan,
    SalaryProfile,
)


class DoctorRepository(BaseRepository[Doctor]):
    model = Doctor
    default_order = Doctor.name.asc()


class SalaryRepository(BaseRepository[Salary]):
    model = Salary
    default_order = Salary.created_at.desc()


class SalaryProfileRepository(BaseRepository[SalaryProfile]):
    model = SalaryProfile
    default_order = SalaryProfile.staff_name.asc()

    async def get_active(self) -> List[SalaryProfile]:
        result = await self.db.execute(
            select(SalaryProfile).where(SalaryProfile.status == "active").order_by(SalaryProfile.id)
        )
        return list(result.scalars().all())


class SalaryLoanRepository(BaseRepository[SalaryLoan]):
    model = SalaryLoan
    default_order = SalaryLoan.created_at.desc()

    async def get_active_for_profile(self, profile_id: int) -> List[SalaryLoan]:
        result = await self.db.execute(
            select(SalaryLoan)
            .where(SalaryLoan.profile_id == profile_id, SalaryLoan.status == "active")
            .order_by(SalaryLoan.id)
        )
        return list(result.scalars().all())


class LoanInstallmentRepository(BaseRepository[LoanInstallment]):
    model = LoanInstallment

    async def get_by_loan(self, loan_id: int) -> List[LoanInstallment]:
        result = await self.db.execute(
            select(LoanInstallment)
            .where(LoanInstallment.loan_id == loan_id)
            .order_by(LoanInstallment.due_date, LoanInstallment.id)
        )
        return list(result.scalars().all())


class PayrollRunRepository(BaseRepository[PayrollRun]):
    model = PayrollRun
    default_order = PayrollRun.created_at.desc()


class PayslipRepository(BaseRepository[Payslip]):
    model = Payslip

    async def get_by_run(self, payroll_run_id: int) -> List[Payslip]:
        result = await self.db.execute(
            select(Payslip).where(Payslip.payroll_run_id == payroll_run_id).order_by(Payslip.id)
        )
        return list(result.scalars().all())
