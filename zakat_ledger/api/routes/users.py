"""User Routes — list provisioned users and change their role (admin only)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.domain_types import Role
from zakat_ledger.core.filters import UserFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.schemas.master_data import RoleUpdate, UserPage, UserResponse
from zakat_ledger.services.users import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=UserPage, dependencies=[Depends(require_permission("user:read"))])
async def list_users(
    q: str | None = Query(None),
    role: Role | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    result = await UserService(db).list_page(
        UserFilter(q=q, role=role), PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{user_id}", response_model=UserResponse,
    dependencies=[Depends(require_permission("user:read"))],
)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get(user_id)


@router.put(
    "/{user_id}/role", response_model=UserResponse,
    dependencies=[Depends(require_permission("user:write"))],
)
async def update_user_role(
    user_id: UUID, body: RoleUpdate, db: AsyncSession = Depends(get_db),
):
    return await UserService(db).update_role(user_id, body.model_dump())
