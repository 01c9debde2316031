"""Beneficiary ORM — a registered recipient of distributed funds (mustahiq).

Invariants:
    - phone is unique across beneficiaries
    - category_id is mandatory, ON DELETE RESTRICT
    - status in {active, inactive, pending}, default pending
    - Distribution items reference beneficiaries with ON DELETE RESTRICT

Design Decisions:
    - category loaded eagerly (joined): every response shows the category name
"""

import uuid

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.core.domain_types import BeneficiaryStatus
from zakat_ledger.db.base import Base, TimestampMixin


class Beneficiary(TimestampMixin, Base):
    """Beneficiary entity."""
    __tablename__ = "beneficiaries"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BeneficiaryStatus.PENDING.value,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    category: Mapped["Category"] = relationship("Category", lazy="joined")
