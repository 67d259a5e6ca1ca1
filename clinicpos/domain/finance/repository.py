from datetime import date
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy import func, select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.finance.models import BankTransaction, Expense


class ExpenseRepository(BaseRepository[Expense]):
    model = Expense
    default_order = Expense.date.desc()

    async def total_between(self, start: date, end: date) -> Decimal:
        result = await self.db.execute(
            select(func.coalesce(func.sum(Expense.amount), 0))
            .where(Expense.date >= start, Expense.date <= end)
        )
        return Decimal(str(result.scalar() or 0))

    async def totals_by_category(self) -> List[Tuple[str, Decimal]]:
        result = await self.db.execute(
            select(Expense.category, func.coalesce(func.sum(Expense.amount), 0))
            .group_by(Expense.category)
            .order_by(func.sum(Expense.amount).desc(), Expense.category)
        )
        return [(category, Decimal(str(total))) for category, total in result.all()]


class BankTransactionRepository(BaseRepository[BankTransaction]):
    model = BankTransaction
    default_order = BankTransaction.date.desc()

    async def totals_by_type(self) -> Dict[str, Decimal]:
        result = await self.db.execute(
            select(BankTransaction.type, func.coalesce(func.sum(BankTransaction.amount), 0))
            .group_by(BankTransaction.type)
        )
        return {tx_type: Decimal(str(total)) for tx_type, total in result.all()}
