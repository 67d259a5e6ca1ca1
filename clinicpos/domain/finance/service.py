from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError
from clinicpos.domain.base import bulk_delete
from clinicpos.domain.finance.models import BankTransaction, Expense, TransactionType
from clinicpos.domain.finance.repository import BankTransactionRepository, ExpenseRepository
from clinicpos.utils.date_range import DateRange, is_date_in_range
from clinicpos.utils.formatting import money


class ExpenseService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ExpenseRepository(db)

    async def list_expenses(self, date_range: Optional[DateRange] = None) -> List[Expense]:
        expenses = await self.repo.get_all(order_by=Expense.date.desc())
        return [e for e in expenses if is_date_in_range(e.date, date_range)]

    async def get_expense(self, expense_id: int) -> Expense:
        expense = await self.repo.get_by_id(expense_id)
        if not expense:
            raise NotFoundError("Expense not found")
        return expense

    async def create_expense(self, data: Dict[str, Any]) -> Expense:
        return await self.repo.create(data)

    async def update_expense(self, expense_id: int, data: Dict[str, Any]) -> Expense:
        expense = await self.get_expense(expense_id)
        return await self.repo.update(expense, data)

    async def delete_expense(self, expense_id: int) -> None:
        await self.repo.delete(await self.get_expense(expense_id))

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)


class BankTransactionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BankTransactionRepository(db)

    async def list_transactions(self, date_range: Optional[DateRange] = None) -> List[BankTransaction]:
        transactions = await self.repo.get_all()
        return [t for t in transactions if is_date_in_range(t.date, date_range)]

    async def create_transaction(self, data: Dict[str, Any]) -> BankTransaction:
        return await self.repo.create(data)

    async def delete_transaction(self, transaction_id: int) -> None:
        transaction = await self.repo.get_by_id(transaction_id)
        if not transaction:
            raise NotFoundError("Bank transaction not found")
        await self.repo.delete(transaction)

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)

    async def summary(self) -> Dict[str, Decimal]:
        totals = await self.repo.totals_by_type()
        deposits = totals.get(TransactionType.DEPOSIT, Decimal("0"))
        withdrawals = totals.get(TransactionType.WITHDRAWAL, Decimal("0"))
        return {
            "deposits": money(deposits),
            "withdrawals": money(withdrawals),
            "balance": money(deposits - withdrawals),
        }
