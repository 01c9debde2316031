"""Program Service — CRUD over distribution programs.

Invariants:
    - A program referenced by any distribution cannot be deleted (RESTRICT)
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import ProgramFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_program
from zakat_ledger.models import Distribution, Program
from zakat_ledger.services.query_filters import Page, paginate, program_conditions
from zakat_ledger.services.reference_checks import ensure_not_referenced, get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)

_FIELDS = ("name", "type", "active", "description")


class ProgramService:
    """Program master data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, filters: ProgramFilter, page: PageRequest) -> Page[Program]:
        return await paginate(
            self.db, Program, program_conditions(filters), page,
            (Program.name.asc(), Program.id.asc()),
        )

    async def get(self, program_id: UUID) -> Program:
        return await get_or_404(self.db, Program, program_id, "Program")

    async def create(self, data: dict) -> Program:
        raise_if_invalid(validate_program(data))
        program = Program(**{k: data.get(k) for k in _FIELDS})
        async with atomic(self.db, "Program"):
            self.db.add(program)
        logger.info("Program created", extra={"entity": "Program", "entity_id": program.id})
        return program

    async def update(self, program_id: UUID, data: dict) -> Program:
        raise_if_invalid(validate_program(data))
        program = await self.get(program_id)
        async with atomic(self.db, "Program"):
            for key in _FIELDS:
                setattr(program, key, data.get(key))
        return program

    async def delete(self, program_id: UUID) -> None:
        program = await self.get(program_id)
        await ensure_not_referenced(
            self.db, "Program", program_id,
            (Distribution.program_id, "distributions"),
        )
        async with atomic(self.db, "Program", deleting=True):
            await self.db.delete(program)
