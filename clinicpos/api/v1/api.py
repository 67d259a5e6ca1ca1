from fastapi import APIRouter, Depends

from clinicpos.api.deps import require_permission
from clinicpos.api.v1.auth import routes as auth
from clinicpos.api.v1.billing import routes as billing
from clinicpos.api.v1.catalog import routes as catalog
from clinicpos.api.v1.finance import routes as finance
from clinicpos.api.v1.integrations import routes as integrations
from clinicpos.api.v1.investments import routes as investments
from clinicpos.api.v1.opd import routes as opd
from clinicpos.api.v1.patients import routes as patients
from clinicpos.api.v1.reports import routes as reports
from clinicpos.api.v1.settings import routes as clinic_settings
from clinicpos.api.v1.staff import routes as staff

# Login, logout and public branding are reachable without a session
api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(clinic_settings.public_router)

protected_routers = [
    auth.users_router,
    auth.roles_router,
    auth.activity_router,
    patients.router,
    opd.router,
    opd.appointments_router,
    billing.router,
    catalog.services_router,
    catalog.injections_router,
    catalog.packages_router,
    catalog.medicines_router,
    catalog.lab_tests_router,
    finance.expenses_router,
    finance.bank_router,
    investments.investors_router,
    investments.investments_router,
    investments.contributions_router,
    staff.doctors_router,
    staff.salaries_router,
    staff.profiles_router,
    staff.loans_router,
    staff.installments_router,
    staff.payroll_router,
    staff.payslips_router,
    integrations.router,
    clinic_settings.router,
    reports.dashboard_router,
    reports.router,
]

for router in protected_routers:
    api_router.include_router(router, dependencies=[Depends(require_permission)])
