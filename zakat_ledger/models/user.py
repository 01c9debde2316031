"""User ORM — staff accounts provisioned by the identity provider.

Invariants:
    - email is unique
    - role in {admin, staff, viewer}, default viewer
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from zakat_ledger.core.domain_types import Role
from zakat_ledger.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User entity."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Role.VIEWER.value,
    )
