"""Unit of Work — commit-or-rollback scope with constraint-error translation.

Invariants:
    - Exactly one commit per atomic block, issued only when the block completes
    - Any exception inside the block rolls the whole transaction back
    - IntegrityError never escapes: unique → ConflictError,
      foreign key → ReferenceNotFoundError (writes) or ConflictError (deletes)

Design Decisions:
    - Constraint translation here rather than in the session manager: only the
      service knows which entity and which field a violation is about
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.errors import (
    ConflictError, ReferenceNotFoundError, ZakatLedgerError,
)
from zakat_ledger.core.integrity import (
    FOREIGN_KEY, UNIQUE, classify_integrity_error, foreign_key_reference,
)

logger = logging.getLogger(__name__)


def translate_integrity_error(
    error: IntegrityError,
    entity: str,
    unique_field: str | None = None,
    deleting: bool = False,
) -> ZakatLedgerError:
    message = str(error.orig)
    kind = classify_integrity_error(message)
    if kind == UNIQUE:
        if unique_field:
            return ConflictError(f"{entity} with this {unique_field} already exists")
        return ConflictError(f"{entity} already exists")
    if kind == FOREIGN_KEY:
        if deleting:
            return ConflictError(f"{entity} is still referenced and cannot be deleted")
        reference = foreign_key_reference(message)
        return ReferenceNotFoundError(
            reference.label or f"{entity} reference", reference.value,
        )
    return ConflictError(f"{entity} violates a data constraint")


@asynccontextmanager
async def atomic(
    db: AsyncSession,
    entity: str,
    unique_field: str | None = None,
    deleting: bool = False,
) -> AsyncGenerator[AsyncSession, None]:
    """Run the block as one transaction; commit on success, roll back on any error."""
    try:
        yield db
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        translated = translate_integrity_error(e, entity, unique_field, deleting)
        logger.warning(
            f"{entity} write rejected by constraint: {translated.message}",
            extra={"entity": entity, "error_code": translated.code},
        )
        raise translated from e
    except Exception:
        await db.rollback()
        raise
