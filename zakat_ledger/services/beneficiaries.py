"""Beneficiary Service — CRUD over beneficiaries (mustahiq).

Invariants:
    - category_id must reference an existing category before any write
    - status defaults to pending on create; any of the three values may be set on update
    - A beneficiary named by any distribution item cannot be deleted (RESTRICT)

Design Decisions:
    - No status transition guards: staff correct statuses in any direction
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.domain_types import BeneficiaryStatus
from zakat_ledger.core.filters import BeneficiaryFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_beneficiary
from zakat_ledger.models import Beneficiary, DistributionItem
from zakat_ledger.services.query_filters import Page, beneficiary_conditions, paginate
from zakat_ledger.services.reference_checks import (
    ReferenceChecker, ensure_not_referenced, get_or_404,
)
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)

_FIELDS = ("name", "phone", "address", "category_id", "status", "description")


class BeneficiaryService:
    """Beneficiary registry."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.references = ReferenceChecker(db)

    async def list_page(self, filters: BeneficiaryFilter, page: PageRequest) -> Page[Beneficiary]:
        return await paginate(
            self.db, Beneficiary, beneficiary_conditions(filters), page,
            (Beneficiary.name.asc(), Beneficiary.id.asc()),
        )

    async def get(self, beneficiary_id: UUID, refresh: bool = False) -> Beneficiary:
        return await get_or_404(
            self.db, Beneficiary, beneficiary_id, "Beneficiary", refresh=refresh,
        )

    async def create(self, data: dict) -> Beneficiary:
        raise_if_invalid(validate_beneficiary(data))
        await self.references.ensure_category(data["category_id"])
        values = {k: data.get(k) for k in _FIELDS}
        values["status"] = values["status"] or BeneficiaryStatus.PENDING.value
        beneficiary = Beneficiary(**values)
        async with atomic(self.db, "Beneficiary", unique_field="phone"):
            self.db.add(beneficiary)
        logger.info(
            "Beneficiary created",
            extra={"entity": "Beneficiary", "entity_id": beneficiary.id},
        )
        return await self.get(beneficiary.id, refresh=True)

    async def update(self, beneficiary_id: UUID, data: dict) -> Beneficiary:
        raise_if_invalid(validate_beneficiary(data, status_required=True))
        beneficiary = await self.get(beneficiary_id)
        await self.references.ensure_category(data["category_id"])
        async with atomic(self.db, "Beneficiary", unique_field="phone"):
            for key in _FIELDS:
                setattr(beneficiary, key, data.get(key))
        return await self.get(beneficiary_id, refresh=True)

    async def delete(self, beneficiary_id: UUID) -> None:
        beneficiary = await self.get(beneficiary_id)
        await ensure_not_referenced(
            self.db, "Beneficiary", beneficiary_id,
            (DistributionItem.beneficiary_id, "distributions"),
        )
        async with atomic(self.db, "Beneficiary", deleting=True):
            await self.db.delete(beneficiary)
        logger.info(
            "Beneficiary deleted",
            extra={"entity": "Beneficiary", "entity_id": beneficiary_id},
        )
