"""
Dashboard and report aggregates.

Monetary aggregates are returned as Decimals rounded to cents; chart series
use plain floats for the client's charting library.
"""

import calendar
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.domain.base import model_to_dict
from clinicpos.domain.billing.repository import BillRepository
from clinicpos.domain.catalog.repository import MedicineRepository, ServiceRepository
from clinicpos.domain.finance.repository import ExpenseRepository
from clinicpos.domain.opd.models import OpdVisit
from clinicpos.domain.opd.repository import OpdVisitRepository
from clinicpos.domain.patients.repository import PatientRepository
from clinicpos.utils.date_range import DateRange, is_date_in_range
from clinicpos.utils.formatting import money, to_decimal


def day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class ReportService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.bills = BillRepository(db)
        self.expenses = ExpenseRepository(db)
        self.patients = PatientRepository(db)
        self.medicines = MedicineRepository(db)
        self.services = ServiceRepository(db)
        self.visits = OpdVisitRepository(db)

    async def dashboard_stats(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        today_start, tomorrow = day_bounds(today)
        month_start = datetime.combine(today.replace(day=1), time.min)

        today_count, today_revenue = await self.bills.revenue_between(today_start, tomorrow)
        _, month_revenue = await self.bills.revenue_between(month_start, tomorrow)
        month_expenses = await self.expenses.total_between(month_start.date(), today)

        return {
            "total_patients": await self.patients.count(),
            "total_medicines": await self.medicines.count(),
            "active_opd": await self.visits.count(OpdVisit.status == "active"),
            "total_bills": await self.bills.count(),
            "today_bills": today_count,
            "today_revenue": money(today_revenue),
            "month_revenue": money(month_revenue),
            "month_expenses": money(month_expenses),
        }

    async def recent_visits(self, limit: int = 5) -> List[Dict[str, Any]]:
        rows = await self.visits.get_all_with_patient(limit=limit)
        return [model_to_dict(visit, patient_name=name) for visit, name in rows]

    async def revenue_chart(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Bill revenue for each of the last seven days, oldest first"""
        today = today or date.today()
        days = []
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            start, end = day_bounds(day)
            _, revenue = await self.bills.revenue_between(start, end)
            days.append({"date": day.strftime("%a"), "revenue": float(revenue)})
        return days

    async def service_breakdown(self) -> List[Dict[str, Any]]:
        rows = await self.services.count_by_category()
        return [{"name": category, "count": count} for category, count in rows]

    async def summary(self, date_range: Optional[DateRange] = None) -> Dict[str, Any]:
        bills = [b for b in await self.bills.get_all() if is_date_in_range(b.created_at, date_range)]
        expenses = [e for e in await self.expenses.get_all() if is_date_in_range(e.date, date_range)]

        total_revenue = sum((to_decimal(b.total) for b in bills), Decimal("0"))
        total_expenses = sum((to_decimal(e.amount) for e in expenses), Decimal("0"))

        if date_range is None:
            total_patients = await self.patients.count()
            total_visits = await self.visits.count()
        else:
            patients = await self.patients.get_all()
            visits = await self.visits.get_all()
            total_patients = sum(1 for p in patients if is_date_in_range(p.created_at, date_range))
            total_visits = sum(1 for v in visits if is_date_in_range(v.visit_date, date_range))

        return {
            "total_revenue": money(total_revenue),
            "total_expenses": money(total_expenses),
            "net_profit": money(total_revenue - total_expenses),
            "total_patients": total_patients,
            "total_visits": total_visits,
            "total_bills": len(bills),
            "total_medicines": await self.medicines.count(),
            "total_services": await self.services.count(),
        }

    async def monthly_revenue(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Revenue and expenses for the last six calendar months, oldest first"""
        today = today or date.today()
        months = []
        for offset in range(5, -1, -1):
            year, month = shift_month(today.year, today.month, -offset)
            first = date(year, month, 1)
            last = date(year, month, calendar.monthrange(year, month)[1])
            start, _ = day_bounds(first)
            _, end = day_bounds(last)

            _, revenue = await self.bills.revenue_between(start, end)
            expenses = await self.expenses.total_between(first, last)
            months.append({
                "month": first.strftime("%b"),
                "revenue": float(revenue),
                "expenses": float(expenses),
            })
        return months

    async def expenses_by_category(self) -> List[Dict[str, Any]]:
        rows = await self.expenses.totals_by_category()
        return [{"category": category, "total": money(total)} for category, total in rows]

    async def top_services(self, limit: int = 10) -> List[Dict[str, Any]]:
        services = await self.services.top_priced(limit)
        return [{"name": s.name, "revenue": money(s.price)} for s in services]
