"""Distribution Routes — disbursements to beneficiaries with nested items."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.domain_types import SourceFundType
from zakat_ledger.core.filters import DistributionFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_date_range
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.infrastructure.identity import CallerIdentity
from zakat_ledger.schemas.distribution import (
    DistributionInput, DistributionPage, DistributionResponse,
)
from zakat_ledger.services.distributions import DistributionService

router = APIRouter(prefix="/api/v1/distributions", tags=["distributions"])


@router.get(
    "", response_model=DistributionPage,
    dependencies=[Depends(require_permission("read"))],
)
async def list_distributions(
    q: str | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    source_fund_type: SourceFundType | None = Query(None),
    program_id: UUID | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    raise_if_invalid(validate_date_range(date_from, date_to))
    filters = DistributionFilter(
        q=q, date_from=date_from, date_to=date_to,
        source_fund_type=source_fund_type, program_id=program_id,
    )
    result = await DistributionService(db).list_page(
        filters, PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{distribution_id}", response_model=DistributionResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_distribution(distribution_id: UUID, db: AsyncSession = Depends(get_db)):
    return await DistributionService(db).get(distribution_id)


@router.post(
    "", response_model=DistributionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_distribution(
    body: DistributionInput,
    caller: CallerIdentity = Depends(require_permission("distribution:write")),
    db: AsyncSession = Depends(get_db),
):
    return await DistributionService(db).create(
        body.model_dump(), created_by=caller.user_id,
    )


@router.put(
    "/{distribution_id}", response_model=DistributionResponse,
    dependencies=[Depends(require_permission("distribution:write"))],
)
async def update_distribution(
    distribution_id: UUID, body: DistributionInput,
    db: AsyncSession = Depends(get_db),
):
    return await DistributionService(db).update(distribution_id, body.model_dump())


@router.delete(
    "/{distribution_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("distribution:delete"))],
)
async def delete_distribution(distribution_id: UUID, db: AsyncSession = Depends(get_db)):
    await DistributionService(db).delete(distribution_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
