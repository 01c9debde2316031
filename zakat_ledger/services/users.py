"""User Service — lists staff accounts and changes their role."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import UserFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_role
from zakat_ledger.models import User
from zakat_ledger.services.query_filters import Page, paginate, user_conditions
from zakat_ledger.services.reference_checks import get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, filters: UserFilter, page: PageRequest) -> Page[User]:
        return await paginate(
            self.db, User, user_conditions(filters), page,
            (User.name.asc(), User.id.asc()),
        )

    async def get(self, user_id: UUID) -> User:
        return await get_or_404(self.db, User, user_id, "User")

    async def update_role(self, user_id: UUID, data: dict) -> User:
        raise_if_invalid(validate_role(data))
        user = await self.get(user_id)
        async with atomic(self.db, "User"):
            user.role = data["role"]
        logger.info(
            f"User role changed to {user.role}",
            extra={"entity": "User", "entity_id": user_id, "role": user.role},
        )
        return user
