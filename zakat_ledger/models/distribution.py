"""Distribution ORM — a disbursement header and its per-beneficiary items.

Invariants:
    - total_amount == sum(items.amount), written by the service
    - program_id is optional, ON DELETE RESTRICT
    - Items reference beneficiaries with ON DELETE RESTRICT
    - Deleting a distribution cascades its items
"""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import String, Text, Integer, Numeric, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.db.base import Base, TimestampMixin


class Distribution(TimestampMixin, Base):
    """Distribution header."""
    __tablename__ = "distributions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    distribution_date: Mapped[date] = mapped_column(
        Date, nullable=False, index=True,
    )
    program_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("programs.id", ondelete="RESTRICT"),
        nullable=True, index=True,
    )
    source_fund_type: Mapped[str] = mapped_column(String(20), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False, default=Decimal("0.00"),
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )

    program: Mapped["Program"] = relationship("Program", lazy="joined")
    items: Mapped[list["DistributionItem"]] = relationship(
        "DistributionItem", back_populates="distribution",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="DistributionItem.line_no", lazy="selectin",
    )


class DistributionItem(TimestampMixin, Base):
    """Distribution line — one beneficiary, one amount."""
    __tablename__ = "distribution_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    distribution_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("distributions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    line_no: Mapped[int] = mapped_column(Integer, nullable=False)
    beneficiary_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("beneficiaries.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    distribution: Mapped["Distribution"] = relationship(
        "Distribution", back_populates="items",
    )
    beneficiary: Mapped["Beneficiary"] = relationship("Beneficiary", lazy="joined")
