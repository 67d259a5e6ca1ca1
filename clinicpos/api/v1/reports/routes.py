from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.deps import date_range_params
from clinicpos.api.v1.opd.schemas import OpdVisitResponse
from clinicpos.api.v1.reports.schemas import (
    CategoryCount,
    CategoryTotal,
    DashboardStats,
    MonthlyRevenue,
    ReportSummary,
    RevenuePoint,
    ServiceRevenue,
)
from clinicpos.domain.reports.service import ReportService
from clinicpos.infrastructure.database import get_db
from clinicpos.utils.date_range import DateRange

dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
router = APIRouter(prefix="/reports", tags=["Reports"])


@dashboard_router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_db)):
    """Headline counts plus today's and this month's money figures"""
    return await ReportService(db).dashboard_stats()


@dashboard_router.get("/recent-visits", response_model=List[OpdVisitResponse])
async def recent_visits(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).recent_visits()


@dashboard_router.get("/revenue-chart", response_model=List[RevenuePoint])
async def revenue_chart(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).revenue_chart()


@dashboard_router.get("/service-breakdown", response_model=List[CategoryCount])
async def service_breakdown(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).service_breakdown()


@router.get("/summary", response_model=ReportSummary)
async def report_summary(
    date_range: Optional[DateRange] = Depends(date_range_params),
    db: AsyncSession = Depends(get_db)
):
    return await ReportService(db).summary(date_range)


@router.get("/monthly-revenue", response_model=List[MonthlyRevenue])
async def monthly_revenue(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).monthly_revenue()


@router.get("/expenses-by-category", response_model=List[CategoryTotal])
async def expenses_by_category(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).expenses_by_category()


@router.get("/top-services", response_model=List[ServiceRevenue])
async def top_services(db: AsyncSession = Depends(get_db)):
    return await ReportService(db).top_services()
