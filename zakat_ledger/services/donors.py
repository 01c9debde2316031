"""Donor Service — CRUD over donors (muzakki).

Invariants:
    - phone uniqueness enforced by the database, surfaced as ConflictError
    - A donor with receipts cannot be deleted
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import DonorFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_donor
from zakat_ledger.models import Donor, Receipt
from zakat_ledger.services.query_filters import Page, donor_conditions, paginate
from zakat_ledger.services.reference_checks import ensure_not_referenced, get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)

_FIELDS = ("name", "phone", "address", "notes")


class DonorService:
    """Donor master data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, filters: DonorFilter, page: PageRequest) -> Page[Donor]:
        return await paginate(
            self.db, Donor, donor_conditions(filters), page,
            (Donor.name.asc(), Donor.id.asc()),
        )

    async def get(self, donor_id: UUID) -> Donor:
        return await get_or_404(self.db, Donor, donor_id, "Donor")

    async def create(self, data: dict) -> Donor:
        raise_if_invalid(validate_donor(data))
        donor = Donor(**{k: data.get(k) for k in _FIELDS})
        async with atomic(self.db, "Donor", unique_field="phone"):
            self.db.add(donor)
        logger.info("Donor created", extra={"entity": "Donor", "entity_id": donor.id})
        return donor

    async def update(self, donor_id: UUID, data: dict) -> Donor:
        raise_if_invalid(validate_donor(data))
        donor = await self.get(donor_id)
        async with atomic(self.db, "Donor", unique_field="phone"):
            for key in _FIELDS:
                setattr(donor, key, data.get(key))
        return donor

    async def delete(self, donor_id: UUID) -> None:
        donor = await self.get(donor_id)
        await ensure_not_referenced(
            self.db, "Donor", donor_id, (Receipt.donor_id, "receipts"),
        )
        async with atomic(self.db, "Donor", deleting=True):
            await self.db.delete(donor)
        logger.info("Donor deleted", extra={"entity": "Donor", "entity_id": donor_id})
