"""Category Service — CRUD over beneficiary categories (asnaf).

Invariants:
    - A category in use by any beneficiary cannot be deleted (RESTRICT)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import CategoryFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_category
from zakat_ledger.models import Beneficiary, Category
from zakat_ledger.services.query_filters import Page, category_conditions, paginate
from zakat_ledger.services.reference_checks import ensure_not_referenced, get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class CategoryService:
    """Category lookup table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, filters: CategoryFilter, page: PageRequest) -> Page[Category]:
        return await paginate(
            self.db, Category, category_conditions(filters), page,
            (Category.name.asc(), Category.id.asc()),
        )

    async def get(self, category_id: UUID) -> Category:
        return await get_or_404(self.db, Category, category_id, "Category")

    async def create(self, data: dict) -> Category:
        raise_if_invalid(validate_category(data))
        category = Category(name=data["name"], description=data.get("description"))
        async with atomic(self.db, "Category"):
            self.db.add(category)
        logger.info(
            "Category created", extra={"entity": "Category", "entity_id": category.id},
        )
        return category

    async def update(self, category_id: UUID, data: dict) -> Category:
        raise_if_invalid(validate_category(data))
        category = await self.get(category_id)
        async with atomic(self.db, "Category"):
            category.name = data["name"]
            category.description = data.get("description")
        return category

    async def delete(self, category_id: UUID) -> None:
        category = await self.get(category_id)
        await ensure_not_referenced(
            self.db, "Category", category_id,
            (Beneficiary.category_id, "beneficiaries"),
        )
        async with atomic(self.db, "Category", deleting=True):
            await self.db.delete(category)
