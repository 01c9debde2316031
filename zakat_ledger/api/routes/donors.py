"""Donor Routes — CRUD endpoints for donors (muzakki)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.filters import DonorFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.master_data import DonorInput, DonorPage, DonorResponse
from zakat_ledger.services.donors import DonorService

router = APIRouter(prefix="/api/v1/donors", tags=["donors"])


@router.get("", response_model=DonorPage, dependencies=[Depends(require_permission("read"))])
async def list_donors(
    q: str | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    result = await DonorService(db).list_page(
        DonorFilter(q=q), PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{donor_id}", response_model=DonorResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_donor(donor_id: UUID, db: AsyncSession = Depends(get_db)):
    return await DonorService(db).get(donor_id)


@router.post(
    "", response_model=DonorResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("donor:write"))],
)
async def create_donor(body: DonorInput, db: AsyncSession = Depends(get_db)):
    return await DonorService(db).create(body.model_dump())


@router.put(
    "/{donor_id}", response_model=DonorResponse,
    dependencies=[Depends(require_permission("donor:write"))],
)
async def update_donor(
    donor_id: UUID, body: DonorInput, db: AsyncSession = Depends(get_db),
):
    return await DonorService(db).update(donor_id, body.model_dump())


@router.delete(
    "/{donor_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("donor:delete"))],
)
async def delete_donor(donor_id: UUID, db: AsyncSession = Depends(get_db)):
    await DonorService(db).delete(donor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
