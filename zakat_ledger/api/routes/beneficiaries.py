"""Beneficiary Routes — recipients (mustahik) with category and status."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.domain_types import BeneficiaryStatus
from zakat_ledger.core.filters import BeneficiaryFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.master_data import (
    BeneficiaryInput, BeneficiaryPage, BeneficiaryResponse,
)
from zakat_ledger.services.beneficiaries import BeneficiaryService

router = APIRouter(prefix="/api/v1/beneficiaries", tags=["beneficiaries"])


@router.get(
    "", response_model=BeneficiaryPage,
    dependencies=[Depends(require_permission("read"))],
)
async def list_beneficiaries(
    q: str | None = Query(None),
    status_filter: BeneficiaryStatus | None = Query(None, alias="status"),
    category_id: UUID | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    filters = BeneficiaryFilter(q=q, status=status_filter, category_id=category_id)
    result = await BeneficiaryService(db).list_page(
        filters, PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{beneficiary_id}", response_model=BeneficiaryResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_beneficiary(beneficiary_id: UUID, db: AsyncSession = Depends(get_db)):
    return await BeneficiaryService(db).get(beneficiary_id)


@router.post(
    "", response_model=BeneficiaryResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("beneficiary:write"))],
)
async def create_beneficiary(
    body: BeneficiaryInput, db: AsyncSession = Depends(get_db),
):
    return await BeneficiaryService(db).create(body.model_dump())


@router.put(
    "/{beneficiary_id}", response_model=BeneficiaryResponse,
    dependencies=[Depends(require_permission("beneficiary:write"))],
)
async def update_beneficiary(
    beneficiary_id: UUID, body: BeneficiaryInput,
    db: AsyncSession = Depends(get_db),
):
    return await BeneficiaryService(db).update(beneficiary_id, body.model_dump())


@router.delete(
    "/{beneficiary_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("beneficiary:delete"))],
)
async def delete_beneficiary(beneficiary_id: UUID, db: AsyncSession = Depends(get_db)):
    await BeneficiaryService(db).delete(beneficiary_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
