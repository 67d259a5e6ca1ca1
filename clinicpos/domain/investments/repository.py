from typing import List, Optional

from sqlalchemy import select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.investments.models import Contribution, Investment, Investor


class InvestorRepository(BaseRepository[Investor]):
    model = Investor
    default_order = Investor.name.asc()


class InvestmentRepository(BaseRepository[Investment]):
    model = Investment
    default_order = Investment.start_date.desc()


class ContributionRepository(BaseRepository[Contribution]):
    model = Contribution

    async def list_for(self, investment_id: Optional[int] = None) -> List[Contribution]:
        query = select(Contribution)
        if investment_id is not None:
            query = query.where(Contribution.investment_id == investment_id)
        result = await self.db.execute(
            query.order_by(Contribution.date.desc(), Contribution.id.desc())
        )
        return list(result.scalars().all())
