"""Receipt Schemas — receipt header with nested line items.

Invariants:
    - total_amount appears only on responses; request bodies cannot carry it
    - Items keep their request order (line_no) on the way back out
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from zakat_ledger.schemas.common import PageMeta, StrictInput


class ReceiptItemInput(StrictInput):
    fund_type: str | None = None
    zakat_type: str | None = None
    person_count: int | None = None
    amount: Decimal | None = None
    rice_kg: Decimal | None = None
    notes: str | None = None


class ReceiptInput(StrictInput):
    donor_id: UUID | None = None
    receipt_number: str | None = None
    receipt_date: date | None = None
    payment_method: str | None = None
    notes: str | None = None
    items: list[ReceiptItemInput] = []


class ReceiptItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    line_no: int
    fund_type: str
    zakat_type: str | None = None
    person_count: int | None = None
    amount: Decimal
    rice_kg: Decimal | None = None
    notes: str | None = None


class ReceiptDonor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    phone: str


class ReceiptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    donor_id: UUID
    donor: ReceiptDonor
    receipt_number: str
    receipt_date: date
    payment_method: str
    total_amount: Decimal
    notes: str | None = None
    created_by_user_id: UUID
    items: list[ReceiptItemResponse]
    created_at: datetime
    updated_at: datetime


class ReceiptPage(BaseModel):
    items: list[ReceiptResponse]
    meta: PageMeta
