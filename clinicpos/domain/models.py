"""Import every domain model so ``Base.metadata`` knows all tables"""

from clinicpos.domain.auth.models import ActivityLog, Role, User  # noqa: F401
from clinicpos.domain.billing.models import Bill  # noqa: F401
from clinicpos.domain.catalog.models import (  # noqa: F401
    Injection,
    LabTest,
    Medicine,
    Package,
    Service,
    StockAdjustment,
)
from clinicpos.domain.finance.models import BankTransaction, Expense  # noqa: F401
from clinicpos.domain.integrations.models import Integration  # noqa: F401
from clinicpos.domain.investments.models import Contribution, Investment, Investor  # noqa: F401
from clinicpos.domain.opd.models import Appointment, OpdVisit  # noqa: F401
from clinicpos.domain.patients.models import Patient  # noqa: F401
from clinicpos.domain.settings.models import ClinicSettings  # noqa: F401
from clinicpos.domain.staff.models import (  # noqa: F401
    Doctor,
    LoanInstallment,
    PayrollRun,
    Payslip,
    Salary,
    SalaryLoan,
    SalaryProfile,
)
