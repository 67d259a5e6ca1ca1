from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.deps import date_range_params
from clinicpos.api.v1.finance.schemas import (
    BankSummaryResponse,
    BankTransactionCreate,
    BankTransactionResponse,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
)
from clinicpos.api.v1.schemas import BulkDeleteRequest, BulkDeleteResponse, SuccessResponse
from clinicpos.domain.finance.service import BankTransactionService, ExpenseService
from clinicpos.infrastructure.database import get_db
from clinicpos.utils.date_range import DateRange

expenses_router = APIRouter(prefix="/expenses", tags=["Expenses"])
bank_router = APIRouter(prefix="/bank-transactions", tags=["Bank"])


@expenses_router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    date_range: Optional[DateRange] = Depends(date_range_params),
    db: AsyncSession = Depends(get_db)
):
    return await ExpenseService(db).list_expenses(date_range)


@expenses_router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(expense_in: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await ExpenseService(db).create_expense(expense_in.model_dump())


@expenses_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_expenses(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await ExpenseService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@expenses_router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(expense_id: int, expense_in: ExpenseUpdate, db: AsyncSession = Depends(get_db)):
    return await ExpenseService(db).update_expense(expense_id, expense_in.model_dump(exclude_unset=True))


@expenses_router.delete("/{expense_id}", response_model=SuccessResponse)
async def delete_expense(expense_id: int, db: AsyncSession = Depends(get_db)):
    await ExpenseService(db).delete_expense(expense_id)
    return SuccessResponse()


@bank_router.get("", response_model=List[BankTransactionResponse])
async def list_transactions(
    date_range: Optional[DateRange] = Depends(date_range_params),
    db: AsyncSession = Depends(get_db)
):
    return await BankTransactionService(db).list_transactions(date_range)


@bank_router.get("/summary", response_model=BankSummaryResponse)
async def transaction_summary(db: AsyncSession = Depends(get_db)):
    """Total deposits, total withdrawals and the resulting balance"""
    return await BankTransactionService(db).summary()


@bank_router.post("", response_model=BankTransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(transaction_in: BankTransactionCreate, db: AsyncSession = Depends(get_db)):
    return await BankTransactionService(db).create_transaction(transaction_in.model_dump())


@bank_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_transactions(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await BankTransactionService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@bank_router.delete("/{transaction_id}", response_model=SuccessResponse)
async def delete_transaction(transaction_id: int, db: AsyncSession = Depends(get_db)):
    await BankTransactionService(db).delete_transaction(transaction_id)
    return SuccessResponse()
