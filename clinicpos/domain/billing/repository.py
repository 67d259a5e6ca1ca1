from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.billing.models import Bill
from clinicpos.domain.patients.models import Patient


class BillRepository(BaseRepository[Bill]):
    """Repository for bill data access operations"""
    model = Bill
    default_order = Bill.created_at.desc()

    async def get_all_with_patient(self) -> List[Tuple[Bill, Optional[str]]]:
        result = await self.db.execute(
            select(Bill, Patient.name)
            .outerjoin(Patient, Patient.id == Bill.patient_id)
            .order_by(Bill.created_at.desc(), Bill.id.desc())
        )
        return [(bill, name) for bill, name in result.all()]

    async def revenue_between(self, start: datetime, end: datetime) -> Tuple[int, Decimal]:
        """Bill count and summed totals for ``start <= created_at < end``"""
        result = await self.db.execute(
            select(func.count(Bill.id), func.coalesce(func.sum(Bill.total), 0))
            .where(Bill.created_at >= start, Bill.created_at < end)
        )
        count, total = result.one()
        return count, Decimal(str(total or 0))

    async def total_revenue(self) -> Decimal:
        result = await self.db.execute(select(func.coalesce(func.sum(Bill.total), 0)))
        return Decimal(str(result.scalar() or 0))
