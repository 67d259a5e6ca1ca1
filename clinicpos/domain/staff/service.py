from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError
from clinicpos.domain.staff.models import (
    Doctor,
    LoanInstallment,
    PayrollRun,
    Payslip,
    Salary,
    SalaryLoan,
    SalaryProfile,
)
from clinicpos.domain.staff.repository import (
    DoctorRepository,
    LoanInstallmentRepository,
    PayrollRunRepository,
    PayslipRepository,
    SalaryLoanRepository,
    SalaryProfileRepository,
    SalaryRepository,
)
from clinicpos.utils.formatting import money, next_code, to_decimal


class DoctorService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = DoctorRepository(db)

    async def list_doctors(self) -> List[Doctor]:
        return await self.repo.get_all()

    async def get_doctor(self, doctor_id: int) -> Doctor:
        doctor = await self.repo.get_by_id(doctor_id)
        if not doctor:
            raise NotFoundError("Doctor not found")
        return doctor

    async def next_doctor_id(self) -> str:
        return next_code("DOC", await self.repo.max_id() + 1)

    async def create_doctor(self, data: Dict[str, Any]) -> Doctor:
        data = dict(data)
        if not data.get("doctor_id"):
            data["doctor_id"] = await self.next_doctor_id()
        return await self.repo.create(data)

    async def update_doctor(self, doctor_id: int, data: Dict[str, Any]) -> Doctor:
        doctor = await self.get_doctor(doctor_id)
        return await self.repo.update(doctor, data)

    async def delete_doctor(self, doctor_id: int) -> None:
        await self.repo.delete(await self.get_doctor(doctor_id))


class SalaryService:
    """Salary payment records, profiles and loans"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.salaries = SalaryRepository(db)
        self.profiles = SalaryProfileRepository(db)
        self.loans = SalaryLoanRepository(db)
        self.installments = LoanInstallmentRepository(db)

    # Salaries
    async def list_salaries(self) -> List[Salary]:
        return await self.salaries.get_all()

    async def get_salary(self, salary_id: int) -> Salary:
        salary = await self.salaries.get_by_id(salary_id)
        if not salary:
            raise NotFoundError("Salary not found")
        return salary

    async def create_salary(self, data: Dict[str, Any]) -> Salary:
        data = dict(data)
        if data.get("net_salary") is None:
            data["net_salary"] = money(
                to_decimal(data.get("base_salary"))
                + to_decimal(data.get("allowances"))
                - to_decimal(data.get("deductions"))
            )
        return await self.salaries.create(data)

    async def update_salary(self, salary_id: int, data: Dict[str, Any]) -> Salary:
        salary = await self.get_salary(salary_id)
        return await self.salaries.update(salary, data)

    async def delete_salary(self, salary_id: int) -> None:
        await self.salaries.delete(await self.get_salary(salary_id))

    # Profiles
    async def list_profiles(self) -> List[SalaryProfile]:
        return await self.profiles.get_all()

    async def get_profile(self, profile_id: int) -> SalaryProfile:
        profile = await self.profiles.get_by_id(profile_id)
        if not profile:
            raise NotFoundError("Salary profile not found")
        return profile

    async def create_profile(self, data: Dict[str, Any]) -> SalaryProfile:
        return await self.profiles.create(data)

    async def update_profile(self, profile_id: int, data: Dict[str, Any]) -> SalaryProfile:
        profile = await self.get_profile(profile_id)
        return await self.profiles.update(profile, data)

    async def delete_profile(self, profile_id: int) -> None:
        await self.profiles.delete(await self.get_profile(profile_id))

    # Loans
    async def list_loans(self) -> List[SalaryLoan]:
        return await self.loans.get_all()

    async def get_loan(self, loan_id: int) -> SalaryLoan:
        loan = await self.loans.get_by_id(loan_id)
        if not loan:
            raise NotFoundError("Salary loan not found")
        return loan

    async def create_loan(self, data: Dict[str, Any]) -> SalaryLoan:
        data = dict(data)
        principal = to_decimal(data.get("principal"))
        term = data.get("term_months") or 1
        if data.get("outstanding") is None:
            data["outstanding"] = principal
        if data.get("installment_amount") is None:
            data["installment_amount"] = money(principal / Decimal(term))
        loan = await self.loans.create(data)
        logger.info(f"Opened {loan.type} of {loan.principal} for {loan.staff_name}")
        return loan

    async def update_loan(self, loan_id: int, data: Dict[str, Any]) -> SalaryLoan:
        loan = await self.get_loan(loan_id)
        return await self.loans.update(loan, data)

    async def delete_loan(self, loan_id: int) -> None:
        await self.loans.delete(await self.get_loan(loan_id))

    async def list_installments(self, loan_id: int) -> List[LoanInstallment]:
        return await self.installments.get_by_loan(loan_id)

    async def create_installment(self, data: Dict[str, Any]) -> LoanInstallment:
        await self.get_loan(data["loan_id"])
        return await self.installments.create(data)


class PayrollService:
    """Monthly payroll runs and the payslips they generate"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.runs = PayrollRunRepository(db)
        self.payslips = PayslipRepository(db)
        self.profiles = SalaryProfileRepository(db)
        self.loans = SalaryLoanRepository(db)
        self.installments = LoanInstallmentRepository(db)

    async def list_runs(self) -> List[PayrollRun]:
        return await self.runs.get_all()

    async def get_run(self, run_id: int) -> PayrollRun:
        run = await self.runs.get_by_id(run_id)
        if not run:
            raise NotFoundError("Payroll run not found")
        return run

    async def create_run(self, data: Dict[str, Any]) -> PayrollRun:
        data = dict(data)
        if not data.get("run_date"):
            data["run_date"] = date.today().isoformat()
        return await self.runs.create(data)

    async def update_run(self, run_id: int, data: Dict[str, Any]) -> PayrollRun:
        run = await self.get_run(run_id)
        return await self.runs.update(run, data)

    async def delete_run(self, run_id: int) -> None:
        await self.runs.delete(await self.get_run(run_id))

    async def generate(self, run_id: int) -> List[Payslip]:
        """
        Create a payslip for every active salary profile.

        Gross pay is base salary plus the four allowances. Each active loan of
        the profile is charged one installment (capped at what is still
        outstanding); a loan whose outstanding balance reaches zero is closed
        and the paid installment is recorded.
        """
        run = await self.get_run(run_id)
        profiles = await self.profiles.get_active()
        today = date.today().isoformat()

        total_gross = Decimal("0")
        total_deductions = Decimal("0")
        total_net = Decimal("0")
        payslips = []

        for profile in profiles:
            base_salary = to_decimal(profile.base_salary)
            allowances = (
                to_decimal(profile.housing_allowance)
                + to_decimal(profile.transport_allowance)
                + to_decimal(profile.meal_allowance)
                + to_decimal(profile.other_allowance)
            )
            gross_pay = base_salary + allowances

            loan_deductions = Decimal("0")
            for loan in await self.loans.get_active_for_profile(profile.id):
                outstanding = to_decimal(loan.outstanding)
                deduction = min(to_decimal(loan.installment_amount), outstanding)
                loan_deductions += deduction

                new_outstanding = max(Decimal("0"), outstanding - deduction)
                await self.loans.update(loan, {
                    "total_paid": to_decimal(loan.total_paid) + deduction,
                    "outstanding": new_outstanding,
                    "status": "closed" if new_outstanding <= 0 else "active",
                })
                await self.installments.create({
                    "loan_id": loan.id,
                    "due_date": today,
                    "amount": deduction,
                    "paid_amount": deduction,
                    "status": "paid",
                    "paid_date": today,
                })

            net_pay = gross_pay - loan_deductions
            payslip = await self.payslips.create({
                "payroll_run_id": run.id,
                "profile_id": profile.id,
                "staff_name": profile.staff_name,
                "department": profile.department,
                "base_salary": money(base_salary),
                "allowances": money(allowances),
                "loan_deductions": money(loan_deductions),
                "other_deductions": Decimal("0"),
                "gross_pay": money(gross_pay),
                "net_pay": money(net_pay),
                "payment_method": "bank_transfer",
                "status": "pending",
            })
            payslips.append(payslip)

            total_gross += gross_pay
            total_deductions += loan_deductions
            total_net += net_pay

        await self.runs.update(run, {
            "total_gross": money(total_gross),
            "total_deductions": money(total_deductions),
            "total_net": money(total_net),
            "employee_count": len(profiles),
            "status": "generated",
        })
        logger.info(f"Payroll run {run.id} generated {len(payslips)} payslips, net {money(total_net)}")
        return payslips

    async def list_payslips(self, run_id: int) -> List[Payslip]:
        return await self.payslips.get_by_run(run_id)

    async def create_payslip(self, data: Dict[str, Any]) -> Payslip:
        return await self.payslips.create(data)

    async def update_payslip(self, payslip_id: int, data: Dict[str, Any]) -> Payslip:
        payslip = await self.payslips.get_by_id(payslip_id)
        if not payslip:
            raise NotFoundError("Payslip not found")
        return await self.payslips.update(payslip, data)
