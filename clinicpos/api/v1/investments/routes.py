from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.investments.schemas import (
    ContributionCreate,
    ContributionResponse,
    ContributionUpdate,
    InvestmentCreate,
    InvestmentResponse,
    InvestmentUpdate,
    InvestorCreate,
    InvestorResponse,
    InvestorUpdate,
)
from clinicpos.api.v1.schemas import BulkDeleteRequest, BulkDeleteResponse, SuccessResponse
from clinicpos.domain.investments.service import InvestmentService, InvestorService
from clinicpos.infrastructure.database import get_db

investors_router = APIRouter(prefix="/investors", tags=["Investments"])
investments_router = APIRouter(prefix="/investments", tags=["Investments"])
contributions_router = APIRouter(prefix="/contributions", tags=["Investments"])


@investors_router.get("", response_model=List[InvestorResponse])
async def list_investors(db: AsyncSession = Depends(get_db)):
    return await InvestorService(db).list_investors()


@investors_router.get("/{investor_id}", response_model=InvestorResponse)
async def get_investor(investor_id: int, db: AsyncSession = Depends(get_db)):
    return await InvestorService(db).get_investor(investor_id)


@investors_router.post("", response_model=InvestorResponse, status_code=status.HTTP_201_CREATED)
async def create_investor(investor_in: InvestorCreate, db: AsyncSession = Depends(get_db)):
    return await InvestorService(db).create_investor(investor_in.model_dump())


@investors_router.put("/{investor_id}", response_model=InvestorResponse)
async def update_investor(investor_id: int, investor_in: InvestorUpdate, db: AsyncSession = Depends(get_db)):
    return await InvestorService(db).update_investor(investor_id, investor_in.model_dump(exclude_unset=True))


@investors_router.delete("/{investor_id}", response_model=SuccessResponse)
async def delete_investor(investor_id: int, db: AsyncSession = Depends(get_db)):
    await InvestorService(db).delete_investor(investor_id)
    return SuccessResponse()


@investments_router.get("", response_model=List[InvestmentResponse])
async def list_investments(db: AsyncSession = Depends(get_db)):
    """Newest start date first"""
    return await InvestmentService(db).list_investments()


@investments_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_investments(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await InvestmentService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@investments_router.get("/{investment_id}", response_model=InvestmentResponse)
async def get_investment(investment_id: int, db: AsyncSession = Depends(get_db)):
    return await InvestmentService(db).get_investment(investment_id)


@investments_router.post("", response_model=InvestmentResponse, status_code=status.HTTP_201_CREATED)
async def create_investment(investment_in: InvestmentCreate, db: AsyncSession = Depends(get_db)):
    return await InvestmentService(db).create_investment(investment_in.model_dump())


@investments_router.put("/{investment_id}", response_model=InvestmentResponse)
async def update_investment(
    investment_id: int,
    investment_in: InvestmentUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await InvestmentService(db).update_investment(
        investment_id, investment_in.model_dump(exclude_unset=True)
    )


@investments_router.delete("/{investment_id}", response_model=SuccessResponse)
async def delete_investment(investment_id: int, db: AsyncSession = Depends(get_db)):
    await InvestmentService(db).delete_investment(investment_id)
    return SuccessResponse()


@contributions_router.get("", response_model=List[ContributionResponse])
async def list_contributions(
    investment_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db)
):
    return await InvestmentService(db).list_contributions(investment_id)


@contributions_router.post("", response_model=ContributionResponse, status_code=status.HTTP_201_CREATED)
async def create_contribution(contribution_in: ContributionCreate, db: AsyncSession = Depends(get_db)):
    return await InvestmentService(db).create_contribution(contribution_in.model_dump())


@contributions_router.put("/{contribution_id}", response_model=ContributionResponse)
@contributions_router.patch("/{contribution_id}", response_model=ContributionResponse)
async def update_contribution(
    contribution_id: int,
    contribution_in: ContributionUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await InvestmentService(db).update_contribution(
        contribution_id, contribution_in.model_dump(exclude_unset=True)
    )


@contributions_router.delete("/{contribution_id}", response_model=SuccessResponse)
async def delete_contribution(contribution_id: int, db: AsyncSession = Depends(get_db)):
    await InvestmentService(db).delete_contribution(contribution_id)
    return SuccessResponse()
