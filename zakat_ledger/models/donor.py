"""Donor ORM — a person or organisation contributing funds (muzakki).

Invariants:
    - phone is unique across donors
    - Referenced (never owned) by receipts; delete is RESTRICTed while receipts exist
"""

import uuid

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.db.base import Base, TimestampMixin


class Donor(TimestampMixin, Base):
    """Donor entity."""
    __tablename__ = "donors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
