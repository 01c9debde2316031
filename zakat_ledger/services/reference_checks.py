"""Reference Checker — confirms foreign ids exist before a write, and that
rows are unreferenced before a delete.

Invariants:
    - Read-only: issues SELECTs only, so a failed check leaves storage unchanged
    - Fails fast on the first missing id, in input order, naming entity and id
    - Beneficiary ids resolved with a single IN query (duplicates allowed)
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.errors import (
    ConflictError, ReferenceNotFoundError, ResourceNotFoundError,
)
from zakat_ledger.models import Beneficiary, Category, Donor, Program, User

logger = logging.getLogger(__name__)


class ReferenceChecker:
    """Existence checks for foreign keys named by incoming writes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _exists(self, model, entity_id: UUID) -> bool:
        result = await self.db.execute(
            select(exists().where(model.id == entity_id)),
        )
        return bool(result.scalar())

    async def _ensure(self, model, label: str, entity_id: UUID) -> None:
        if not await self._exists(model, entity_id):
            logger.warning(
                f"{label} reference {entity_id} not found",
                extra={"entity": label, "entity_id": entity_id},
            )
            raise ReferenceNotFoundError(label, str(entity_id))

    async def ensure_donor(self, donor_id: UUID) -> None:
        await self._ensure(Donor, "Donor", donor_id)

    async def ensure_category(self, category_id: UUID) -> None:
        await self._ensure(Category, "Category", category_id)

    async def ensure_program(self, program_id: UUID | None) -> None:
        """Programs are optional on distributions; None passes."""
        if program_id is not None:
            await self._ensure(Program, "Program", program_id)

    async def ensure_user(self, user_id: UUID) -> None:
        await self._ensure(User, "User", user_id)

    async def ensure_beneficiaries(self, beneficiary_ids: Iterable[UUID]) -> None:
        ids = list(beneficiary_ids)
        if not ids:
            return
        result = await self.db.execute(
            select(Beneficiary.id).where(Beneficiary.id.in_(set(ids))),
        )
        found = set(result.scalars().all())
        for beneficiary_id in ids:
            if beneficiary_id not in found:
                logger.warning(
                    f"Beneficiary reference {beneficiary_id} not found",
                    extra={"entity": "Beneficiary", "entity_id": beneficiary_id},
                )
                raise ReferenceNotFoundError("Beneficiary", str(beneficiary_id))


async def ensure_not_referenced(
    db: AsyncSession, entity: str, entity_id: UUID, *references,
) -> None:
    """RESTRICT check before delete. references: (column, referencing label) pairs."""
    for column, referenced_by in references:
        result = await db.execute(select(exists().where(column == entity_id)))
        if result.scalar():
            raise ConflictError(
                f"{entity} '{entity_id}' is still referenced by {referenced_by}",
            )


async def get_or_404(
    db: AsyncSession, model, entity_id: UUID, label: str, refresh: bool = False,
):
    """Load one row by id or raise ResourceNotFoundError.

    refresh=True re-reads eager relationships of an object already in the session
    (used after a write so responses reflect the committed item set).
    """
    stmt = select(model).where(model.id == entity_id)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    instance = result.unique().scalar_one_or_none()
    if instance is None:
        raise ResourceNotFoundError(label, str(entity_id))
    return instance
