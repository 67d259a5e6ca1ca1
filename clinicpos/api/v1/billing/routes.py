from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.deps import date_range_params
from clinicpos.api.v1.billing.schemas import BillCreate, BillResponse, BillUpdate
from clinicpos.api.v1.schemas import BulkDeleteRequest, BulkDeleteResponse, SuccessResponse
from clinicpos.domain.billing.service import BillingService
from clinicpos.infrastructure.database import get_db
from clinicpos.utils.date_range import DateRange

router = APIRouter(prefix="/bills", tags=["Billing"])


@router.get("", response_model=List[BillResponse])
async def list_bills(
    search: Optional[str] = None,
    status: Optional[str] = None,
    date_range: Optional[DateRange] = Depends(date_range_params),
    db: AsyncSession = Depends(get_db)
):
    """
    List bills, newest first.

    ``search`` matches the bill number loosely (``IAR-17`` finds ``IAR-0017``)
    or a substring of the patient's name.
    """
    return await BillingService(db).list_bills(search=search, status=status, date_range=date_range)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(bill_id: int, db: AsyncSession = Depends(get_db)):
    return await BillingService(db).get_bill(bill_id)


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(bill_in: BillCreate, db: AsyncSession = Depends(get_db)):
    """Create a bill and take sold medicines out of stock"""
    return await BillingService(db).create_bill(bill_in.model_dump())


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_bills(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await BillingService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@router.put("/{bill_id}", response_model=BillResponse)
async def update_bill(bill_id: int, bill_in: BillUpdate, db: AsyncSession = Depends(get_db)):
    return await BillingService(db).update_bill(bill_id, bill_in.model_dump(exclude_unset=True))


@router.delete("/{bill_id}", response_model=SuccessResponse)
async def delete_bill(bill_id: int, db: AsyncSession = Depends(get_db)):
    await BillingService(db).delete_bill(bill_id)
    return SuccessResponse()
