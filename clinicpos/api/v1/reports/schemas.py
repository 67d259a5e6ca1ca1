from decimal import Decimal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_patients: int
    total_medicines: int
    active_opd: int
    total_bills: int
    today_bills: int
    today_revenue: Decimal
    month_revenue: Decimal
    month_expenses: Decimal


class RevenuePoint(BaseModel):
    date: str
    revenue: float


class CategoryCount(BaseModel):
    name: str
    count: int


class ReportSummary(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    total_patients: int
    total_visits: int
    total_bills: int
    total_medicines: int
    total_services: int


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float
    expenses: float


class CategoryTotal(BaseModel):
    category: str
    total: Decimal


class ServiceRevenue(BaseModel):
    name: str
    revenue: Decimal
