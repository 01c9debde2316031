"""Program Routes — distribution programs."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.filters import ProgramFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.master_data import ProgramInput, ProgramPage, ProgramResponse
from zakat_ledger.services.programs import ProgramService

router = APIRouter(prefix="/api/v1/programs", tags=["programs"])


@router.get("", response_model=ProgramPage, dependencies=[Depends(require_permission("read"))])
async def list_programs(
    q: str | None = Query(None),
    program_type: str | None = Query(None, alias="type"),
    active: bool | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    result = await ProgramService(db).list_page(
        ProgramFilter(q=q, type=program_type, active=active),
        PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{program_id}", response_model=ProgramResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_program(program_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ProgramService(db).get(program_id)


@router.post(
    "", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("program:write"))],
)
async def create_program(body: ProgramInput, db: AsyncSession = Depends(get_db)):
    return await ProgramService(db).create(body.model_dump())


@router.put(
    "/{program_id}", response_model=ProgramResponse,
    dependencies=[Depends(require_permission("program:write"))],
)
async def update_program(
    program_id: UUID, body: ProgramInput, db: AsyncSession = Depends(get_db),
):
    return await ProgramService(db).update(program_id, body.model_dump())


@router.delete(
    "/{program_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("program:delete"))],
)
async def delete_program(program_id: UUID, db: AsyncSession = Depends(get_db)):
    await ProgramService(db).delete(program_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
