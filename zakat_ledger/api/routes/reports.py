"""Report Routes — read-only aggregates; any authenticated role may call them."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.domain_types import (
    DistributionGrouping, ReportPeriod, SourceFundType,
)
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.report import (
    BeneficiaryHistory, DistributionSummaryRow, FundBalanceRow, IncomeSummaryRow,
)
from zakat_ledger.services.reports import ReportService

router = APIRouter(
    prefix="/api/v1/reports", tags=["reports"],
    dependencies=[Depends(require_permission("read"))],
)


@router.get("/income-summary", response_model=list[IncomeSummaryRow])
async def income_summary(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    period: ReportPeriod = Query(ReportPeriod.MONTHLY),
    db: AsyncSession = Depends(get_db),
):
    return await ReportService(db).income_summary(date_from, date_to, period)


@router.get("/distribution-summary", response_model=list[DistributionSummaryRow])
async def distribution_summary(
    group_by: DistributionGrouping = Query(...),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    source_fund_type: SourceFundType | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await ReportService(db).distribution_summary(
        group_by, date_from, date_to, source_fund_type,
    )


@router.get("/fund-balance", response_model=list[FundBalanceRow])
async def fund_balance(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    return await ReportService(db).fund_balance(date_from, date_to)


@router.get("/beneficiary-history/{beneficiary_id}", response_model=BeneficiaryHistory)
async def beneficiary_history(beneficiary_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ReportService(db).beneficiary_history(beneficiary_id)
