"""Receipt ORM — a donation receipt header and its typed line items.

Invariants:
    - receipt_number is unique
    - total_amount == sum(items.amount), written by the service, never by callers
    - A receipt owns >= 1 item; items are ordered by line_no
    - Deleting a receipt cascades its items (ORM cascade + ON DELETE CASCADE)

Design Decisions:
    - NUMERIC(18, 2) for money: fixed-point, no float drift in totals
    - line_no column: item order survives the delete-then-reinsert update
"""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.db.base import Base, TimestampMixin


class Receipt(TimestampMixin, Base):
    """Receipt header."""
    __tablename__ = "receipts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    donor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("donors.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    receipt_number: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    receipt_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=Decimal("0.00"),
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )

    donor: Mapped["Donor"] = relationship("Donor", lazy="joined")
    items: Mapped[list["ReceiptItem"]] = relationship(
        "ReceiptItem", back_populates="receipt",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ReceiptItem.line_no", lazy="selectin",
    )


class ReceiptItem(TimestampMixin, Base):
    """Receipt line item — one fund type, one amount."""
    __tablename__ = "receipt_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    receipt_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("receipts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    line_no: Mapped[int] = mapped_column(Integer, nullable=False)
    fund_type: Mapped[str] = mapped_column(String(20), nullable=False)
    zakat_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    person_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    rice_kg: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    receipt: Mapped["Receipt"] = relationship("Receipt", back_populates="items")
