"""Receipt Service — transactional header + items writer for donation receipts.

Invariants:
    - Order of a write: validate → check references → compute total → persist
    - Header and items are committed together or not at all
    - total_amount is always compute_total(items); callers cannot set it
    - Update replaces the whole item set (delete then re-insert), never merges

Design Decisions:
    - Delete-then-reinsert over per-item diffing: item ids are not exposed for
      editing, so nothing downstream depends on item identity
    - line_no assigned from input order on every write
"""

import logging
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import ReceiptFilter
from zakat_ledger.core.money import compute_total
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import (
    normalize_receipt_item, raise_if_invalid, validate_receipt,
)
from zakat_ledger.models import Receipt, ReceiptItem
from zakat_ledger.services.query_filters import Page, paginate, receipt_conditions
from zakat_ledger.services.reference_checks import ReferenceChecker, get_or_404
from zakat_ledger.services.unit_of_work import atomic

logger = logging.getLogger(__name__)

_HEADER_FIELDS = ("donor_id", "receipt_number", "receipt_date", "payment_method", "notes")
_ITEM_FIELDS = ("fund_type", "zakat_type", "person_count", "amount", "rice_kg", "notes")


class ReceiptService:
    """Donation receipts: list, read, create, update, delete."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.references = ReferenceChecker(db)

    async def list_page(self, filters: ReceiptFilter, page: PageRequest) -> Page[Receipt]:
        return await paginate(
            self.db, Receipt, receipt_conditions(filters), page,
            (Receipt.receipt_date.desc(), Receipt.created_at.desc(), Receipt.id.asc()),
        )

    async def get(self, receipt_id: UUID, refresh: bool = False) -> Receipt:
        return await get_or_404(self.db, Receipt, receipt_id, "Receipt", refresh=refresh)

    async def create(self, data: dict, created_by: UUID) -> Receipt:
        raise_if_invalid(validate_receipt(data))
        items = [normalize_receipt_item(item) for item in data["items"]]
        await self.references.ensure_donor(data["donor_id"])
        await self.references.ensure_user(created_by)

        receipt = Receipt(
            **{k: data.get(k) for k in _HEADER_FIELDS},
            total_amount=compute_total(items),
            created_by_user_id=created_by,
        )
        async with atomic(self.db, "Receipt", unique_field="receipt number"):
            self.db.add(receipt)
            await self.db.flush()
            self._add_items(receipt.id, items)

        logger.info(
            f"Receipt {receipt.receipt_number} created",
            extra={
                "entity": "Receipt", "entity_id": receipt.id,
                "item_count": len(items), "total_amount": receipt.total_amount,
                "user_id": created_by,
            },
        )
        return await self.get(receipt.id, refresh=True)

    async def update(self, receipt_id: UUID, data: dict) -> Receipt:
        raise_if_invalid(validate_receipt(data))
        items = [normalize_receipt_item(item) for item in data["items"]]
        receipt = await self.get(receipt_id)
        await self.references.ensure_donor(data["donor_id"])

        async with atomic(self.db, "Receipt", unique_field="receipt number"):
            for key in _HEADER_FIELDS:
                setattr(receipt, key, data.get(key))
            receipt.total_amount = compute_total(items)
            await self.db.execute(
                delete(ReceiptItem).where(ReceiptItem.receipt_id == receipt.id),
            )
            self.db.expire(receipt, ["items"])
            self._add_items(receipt.id, items)

        logger.info(
            f"Receipt {receipt.receipt_number} updated",
            extra={
                "entity": "Receipt", "entity_id": receipt.id,
                "item_count": len(items), "total_amount": receipt.total_amount,
            },
        )
        return await self.get(receipt.id, refresh=True)

    async def delete(self, receipt_id: UUID) -> None:
        receipt = await self.get(receipt_id)
        async with atomic(self.db, "Receipt", deleting=True):
            await self.db.delete(receipt)
        logger.info("Receipt deleted", extra={"entity": "Receipt", "entity_id": receipt_id})

    def _add_items(self, receipt_id: UUID, items: list[dict]) -> None:
        for line_no, item in enumerate(items, start=1):
            self.db.add(ReceiptItem(
                receipt_id=receipt_id, line_no=line_no,
                **{k: item.get(k) for k in _ITEM_FIELDS},
            ))
