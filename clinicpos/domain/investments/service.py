from decimal import Decimal
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError
from clinicpos.domain.base import bulk_delete
from clinicpos.domain.investments.models import Contribution, Investment, Investor
from clinicpos.domain.investments.repository import (
    ContributionRepository,
    InvestmentRepository,
    InvestorRepository,
)
from clinicpos.utils.formatting import money, to_decimal


def normalize_shares(total: Any, investors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Scale investor shares so they sum to 100% and split ``total`` by them.

    Percentages and amounts are rounded to cents; names are trimmed. A list
    whose shares are all zero gets zero for everyone.
    """
    if not investors:
        return []
    share_sum = sum((to_decimal(i.get("share_percentage")) for i in investors), Decimal("0"))
    scale = Decimal("100") / share_sum if share_sum > 0 else Decimal("0")
    total = to_decimal(total)

    normalized = []
    for investor in investors:
        pct = money(to_decimal(investor.get("share_percentage")) * scale)
        normalized.append({
            "investor_id": investor.get("investor_id"),
            "name": (investor.get("name") or "").strip(),
            "share_percentage": float(pct),
            "amount": str(money(total * pct / Decimal("100"))),
        })
    return normalized


class InvestorService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = InvestorRepository(db)

    async def list_investors(self) -> List[Investor]:
        return await self.repo.get_all()

    async def get_investor(self, investor_id: int) -> Investor:
        investor = await self.repo.get_by_id(investor_id)
        if not investor:
            raise NotFoundError("Investor not found")
        return investor

    async def create_investor(self, data: Dict[str, Any]) -> Investor:
        return await self.repo.create(data)

    async def update_investor(self, investor_id: int, data: Dict[str, Any]) -> Investor:
        investor = await self.get_investor(investor_id)
        return await self.repo.update(investor, data)

    async def delete_investor(self, investor_id: int) -> None:
        await self.repo.delete(await self.get_investor(investor_id))


class InvestmentService:
    """Investments, their shareholder split and the contributions paid in"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = InvestmentRepository(db)
        self.contributions = ContributionRepository(db)

    async def list_investments(self) -> List[Investment]:
        return await self.repo.get_all()

    async def get_investment(self, investment_id: int) -> Investment:
        investment = await self.repo.get_by_id(investment_id)
        if not investment:
            raise NotFoundError("Investment not found")
        return investment

    @staticmethod
    def apply_shares(data: Dict[str, Any], total: Any) -> Dict[str, Any]:
        data = dict(data)
        shares = normalize_shares(total, data.get("investors") or [])
        if shares:
            data["investors"] = shares
            data["investor_name"] = ", ".join(s["name"] for s in shares)
        return data

    async def create_investment(self, data: Dict[str, Any]) -> Investment:
        data = self.apply_shares(data, data.get("amount"))
        data.setdefault("investors", [])
        investment = await self.repo.create(data)
        logger.info(f"Recorded investment {investment.title} of {investment.amount}")
        return investment

    async def update_investment(self, investment_id: int, data: Dict[str, Any]) -> Investment:
        """A new investor list is re-split over the new amount, or the stored one"""
        investment = await self.get_investment(investment_id)
        if data.get("investors"):
            data = self.apply_shares(data, data.get("amount", investment.amount))
        return await self.repo.update(investment, data)

    async def delete_investment(self, investment_id: int) -> None:
        await self.repo.delete(await self.get_investment(investment_id))

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)

    # Contributions
    async def list_contributions(self, investment_id: Optional[int] = None) -> List[Contribution]:
        return await self.contributions.list_for(investment_id)

    async def get_contribution(self, contribution_id: int) -> Contribution:
        contribution = await self.contributions.get_by_id(contribution_id)
        if not contribution:
            raise NotFoundError("Contribution not found")
        return contribution

    async def create_contribution(self, data: Dict[str, Any]) -> Contribution:
        await self.get_investment(data["investment_id"])
        return await self.contributions.create(data)

    async def update_contribution(self, contribution_id: int, data: Dict[str, Any]) -> Contribution:
        contribution = await self.get_contribution(contribution_id)
        return await self.contributions.update(contribution, data)

    async def delete_contribution(self, contribution_id: int) -> None:
        await self.contributions.delete(await self.get_contribution(contribution_id))
