"""Category Routes — beneficiary categories (asnaf)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.filters import CategoryFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.master_data import (
    CategoryInput, CategoryPage, CategoryResponse,
)
from zakat_ledger.services.categories import CategoryService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=CategoryPage, dependencies=[Depends(require_permission("read"))])
async def list_categories(
    q: str | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    result = await CategoryService(db).list_page(
        CategoryFilter(q=q), PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{category_id}", response_model=CategoryResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    return await CategoryService(db).get(category_id)


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("category:write"))],
)
async def create_category(body: CategoryInput, db: AsyncSession = Depends(get_db)):
    return await CategoryService(db).create(body.model_dump())


@router.put(
    "/{category_id}", response_model=CategoryResponse,
    dependencies=[Depends(require_permission("category:write"))],
)
async def update_category(
    category_id: UUID, body: CategoryInput, db: AsyncSession = Depends(get_db),
):
    return await CategoryService(db).update(category_id, body.model_dump())


@router.delete(
    "/{category_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("category:delete"))],
)
async def delete_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    await CategoryService(db).delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
