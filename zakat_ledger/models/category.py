"""Category ORM — beneficiary classification group (asnaf).

Invariants:
    - Beneficiaries reference a category with ON DELETE RESTRICT
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.db.base import Base, TimestampMixin


class Category(TimestampMixin, Base):
    """Category lookup entity."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
