"""Distribution Service — transactional header + items writer for disbursements.

Invariants:
    - Order of a write: validate → check references → compute total → persist
    - Program (optional) and every item's beneficiary must exist before any write
    - Header and items are committed together or not at all
    - Update replaces the whole item set (delete then re-insert)
"""

import logging
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import DistributionFilter
from zakat_ledger.core.money import compute_total
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_distribution
from zakat_ledger.models import Distribution, DistributionItem
from zakat_ledger.services.query_filters import (
    Page, distribution_conditions, paginate,
)
from zakat_ledger.services.reference_checks import ReferenceChecker, get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)

_HEADER_FIELDS = ("distribution_date", "program_id", "source_fund_type", "notes")


class DistributionService:
    """Distributions: list, read, create, update, delete."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.references = ReferenceChecker(db)

    async def list_page(self, filters: DistributionFilter, page: PageRequest) -> Page[Distribution]:
        return await paginate(
            self.db, Distribution, distribution_conditions(filters), page,
            (
                Distribution.distribution_date.desc(),
                Distribution.created_at.desc(),
                Distribution.id.asc(),
            ),
        )

    async def get(self, distribution_id: UUID, refresh: bool = False) -> Distribution:
        return await get_or_404(
            self.db, Distribution, distribution_id, "Distribution", refresh=refresh,
        )

    async def _check_references(self, data: dict) -> None:
        await self.references.ensure_program(data.get("program_id"))
        await self.references.ensure_beneficiaries(
            item["beneficiary_id"] for item in data["items"]
        )

    async def create(self, data: dict, created_by: UUID) -> Distribution:
        raise_if_invalid(validate_distribution(data))
        await self._check_references(data)
        await self.references.ensure_user(created_by)

        distribution = Distribution(
            **{k: data.get(k) for k in _HEADER_FIELDS},
            total_amount=compute_total(data["items"]),
            created_by_user_id=created_by,
        )
        async with atomic(self.db, "Distribution"):
            self.db.add(distribution)
            await self.db.flush()
            self._add_items(distribution.id, data["items"])

        logger.info(
            "Distribution created",
            extra={
                "entity": "Distribution", "entity_id": distribution.id,
                "item_count": len(data["items"]),
                "total_amount": distribution.total_amount, "user_id": created_by,
            },
        )
        return await self.get(distribution.id, refresh=True)

    async def update(self, distribution_id: UUID, data: dict) -> Distribution:
        raise_if_invalid(validate_distribution(data))
        distribution = await self.get(distribution_id)
        await self._check_references(data)

        async with atomic(self.db, "Distribution"):
            for key in _HEADER_FIELDS:
                setattr(distribution, key, data.get(key))
            distribution.total_amount = compute_total(data["items"])
            await self.db.execute(
                delete(DistributionItem)
                .where(DistributionItem.distribution_id == distribution.id),
            )
            self.db.expire(distribution, ["items"])
            self._add_items(distribution.id, data["items"])

        logger.info(
            "Distribution updated",
            extra={
                "entity": "Distribution", "entity_id": distribution.id,
                "item_count": len(data["items"]),
                "total_amount": distribution.total_amount,
            },
        )
        return await self.get(distribution.id, refresh=True)

    async def delete(self, distribution_id: UUID) -> None:
        distribution = await self.get(distribution_id)
        async with atomic(self.db, "Distribution", deleting=True):
            await self.db.delete(distribution)
        logger.info(
            "Distribution deleted",
            extra={"entity": "Distribution", "entity_id": distribution_id},
        )

    def _add_items(self, distribution_id: UUID, items: list[dict]) -> None:
        for line_no, item in enumerate(items, start=1):
            self.db.add(DistributionItem(
                distribution_id=distribution_id, line_no=line_no,
                beneficiary_id=item["beneficiary_id"],
                amount=item["amount"], notes=item.get("notes"),
            ))
