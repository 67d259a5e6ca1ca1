from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.schemas import SuccessResponse
from clinicpos.api.v1.staff.schemas import (
    DoctorCreate,
    DoctorResponse,
    DoctorUpdate,
    LoanInstallmentCreate,
    LoanInstallmentResponse,
    NextDoctorIdResponse,
    PayrollGenerateResponse,
    PayrollRunCreate,
    PayrollRunResponse,
    PayrollRunUpdate,
    PayslipCreate,
    PayslipResponse,
    PayslipUpdate,
    SalaryCreate,
    SalaryLoanCreate,
    SalaryLoanResponse,
    SalaryLoanUpdate,
    SalaryProfileCreate,
    SalaryProfileResponse,
    SalaryProfileUpdate,
    SalaryResponse,
    SalaryUpdate,
)
from clinicpos.domain.staff.service import DoctorService, PayrollService, SalaryService
from clinicpos.infrastructure.database import get_db

doctors_router = APIRouter(prefix="/doctors", tags=["Doctors"])
salaries_router = APIRouter(prefix="/salaries", tags=["Salaries"])
profiles_router = APIRouter(prefix="/salary-profiles", tags=["Salaries"])
loans_router = APIRouter(prefix="/salary-loans", tags=["Salaries"])
installments_router = APIRouter(prefix="/loan-installments", tags=["Salaries"])
payroll_router = APIRouter(prefix="/payroll-runs", tags=["Payroll"])
payslips_router = APIRouter(prefix="/payslips", tags=["Payroll"])


# Doctors

@doctors_router.get("", response_model=List[DoctorResponse])
async def list_doctors(db: AsyncSession = Depends(get_db)):
    return await DoctorService(db).list_doctors()


@doctors_router.get("/next-id", response_model=NextDoctorIdResponse)
async def next_doctor_id(db: AsyncSession = Depends(get_db)):
    return NextDoctorIdResponse(id=await DoctorService(db).next_doctor_id())


@doctors_router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(doctor_in: DoctorCreate, db: AsyncSession = Depends(get_db)):
    return await DoctorService(db).create_doctor(doctor_in.model_dump())


@doctors_router.patch("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(doctor_id: int, doctor_in: DoctorUpdate, db: AsyncSession = Depends(get_db)):
    return await DoctorService(db).update_doctor(doctor_id, doctor_in.model_dump(exclude_unset=True))


@doctors_router.delete("/{doctor_id}", response_model=SuccessResponse)
async def delete_doctor(doctor_id: int, db: AsyncSession = Depends(get_db)):
    await DoctorService(db).delete_doctor(doctor_id)
    return SuccessResponse()


# Salaries

@salaries_router.get("", response_model=List[SalaryResponse])
async def list_salaries(db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).list_salaries()


@salaries_router.post("", response_model=SalaryResponse, status_code=status.HTTP_201_CREATED)
async def create_salary(salary_in: SalaryCreate, db: AsyncSession = Depends(get_db)):
    """Net salary defaults to base + allowances - deductions"""
    return await SalaryService(db).create_salary(salary_in.model_dump())


@salaries_router.patch("/{salary_id}", response_model=SalaryResponse)
async def update_salary(salary_id: int, salary_in: SalaryUpdate, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).update_salary(salary_id, salary_in.model_dump(exclude_unset=True))


@salaries_router.delete("/{salary_id}", response_model=SuccessResponse)
async def delete_salary(salary_id: int, db: AsyncSession = Depends(get_db)):
    await SalaryService(db).delete_salary(salary_id)
    return SuccessResponse()


# Salary profiles

@profiles_router.get("", response_model=List[SalaryProfileResponse])
async def list_profiles(db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).list_profiles()


@profiles_router.get("/{profile_id}", response_model=SalaryProfileResponse)
async def get_profile(profile_id: int, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).get_profile(profile_id)


@profiles_router.post("", response_model=SalaryProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(profile_in: SalaryProfileCreate, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).create_profile(profile_in.model_dump())


@profiles_router.put("/{profile_id}", response_model=SalaryProfileResponse)
async def update_profile(profile_id: int, profile_in: SalaryProfileUpdate, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).update_profile(profile_id, profile_in.model_dump(exclude_unset=True))


@profiles_router.delete("/{profile_id}", response_model=SuccessResponse)
async def delete_profile(profile_id: int, db: AsyncSession = Depends(get_db)):
    await SalaryService(db).delete_profile(profile_id)
    return SuccessResponse()


# Loans

@loans_router.get("", response_model=List[SalaryLoanResponse])
async def list_loans(db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).list_loans()


@loans_router.get("/{loan_id}", response_model=SalaryLoanResponse)
async def get_loan(loan_id: int, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).get_loan(loan_id)


@loans_router.post("", response_model=SalaryLoanResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(loan_in: SalaryLoanCreate, db: AsyncSession = Depends(get_db)):
    """
    Open a salary loan or advance.

    ``outstanding`` defaults to the principal and ``installment_amount`` to
    principal divided by the term.
    """
    return await SalaryService(db).create_loan(loan_in.model_dump())


@loans_router.put("/{loan_id}", response_model=SalaryLoanResponse)
async def update_loan(loan_id: int, loan_in: SalaryLoanUpdate, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).update_loan(loan_id, loan_in.model_dump(exclude_unset=True))


@loans_router.delete("/{loan_id}", response_model=SuccessResponse)
async def delete_loan(loan_id: int, db: AsyncSession = Depends(get_db)):
    await SalaryService(db).delete_loan(loan_id)
    return SuccessResponse()


@installments_router.get("/{loan_id}", response_model=List[LoanInstallmentResponse])
async def list_installments(loan_id: int, db: AsyncSession = Depends(get_db)):
    return await SalaryService(db).list_installments(loan_id)


@installments_router.post("", response_model=LoanInstallmentResponse, status_code=status.HTTP_201_CREATED)
async def create_installment(installment_in: LoanInstallmentCreate, db: AsyncSession = Depends(get_db)):
    """Record an installment by hand; the loan balance is left as it is"""
    return await SalaryService(db).create_installment(installment_in.model_dump())


# Payroll

@payroll_router.get("", response_model=List[PayrollRunResponse])
async def list_runs(db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).list_runs()


@payroll_router.get("/{run_id}", response_model=PayrollRunResponse)
async def get_run(run_id: int, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).get_run(run_id)


@payroll_router.post("", response_model=PayrollRunResponse, status_code=status.HTTP_201_CREATED)
async def create_run(run_in: PayrollRunCreate, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).create_run(run_in.model_dump())


@payroll_router.post("/{run_id}/generate", response_model=PayrollGenerateResponse,
                     status_code=status.HTTP_201_CREATED)
async def generate_payroll(run_id: int, db: AsyncSession = Depends(get_db)):
    payslips = await PayrollService(db).generate(run_id)
    return {"payslips": payslips, "employee_count": len(payslips)}


@payroll_router.put("/{run_id}", response_model=PayrollRunResponse)
async def update_run(run_id: int, run_in: PayrollRunUpdate, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).update_run(run_id, run_in.model_dump(exclude_unset=True))


@payroll_router.delete("/{run_id}", response_model=SuccessResponse)
async def delete_run(run_id: int, db: AsyncSession = Depends(get_db)):
    await PayrollService(db).delete_run(run_id)
    return SuccessResponse()


@payslips_router.get("/{run_id}", response_model=List[PayslipResponse])
async def list_payslips(run_id: int, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).list_payslips(run_id)


@payslips_router.post("", response_model=PayslipResponse, status_code=status.HTTP_201_CREATED)
async def create_payslip(payslip_in: PayslipCreate, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).create_payslip(payslip_in.model_dump())


@payslips_router.patch("/{payslip_id}", response_model=PayslipResponse)
async def update_payslip(payslip_id: int, payslip_in: PayslipUpdate, db: AsyncSession = Depends(get_db)):
    return await PayrollService(db).update_payslip(payslip_id, payslip_in.model_dump(exclude_unset=True))
