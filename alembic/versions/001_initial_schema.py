"""Initial schema — master data, receipts, distributions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="viewer"),
        *_timestamps(),
    )

    op.create_table(
        "donors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False, unique=True),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_donors_name", "donors", ["name"])

    op.create_table(
        "categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_categories_name", "categories", ["name"])

    op.create_table(
        "beneficiaries",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False, unique=True),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column(
            "category_id", UUID(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_beneficiaries_name", "beneficiaries", ["name"])
    op.create_index("ix_beneficiaries_category_id", "beneficiaries", ["category_id"])
    op.create_index("ix_beneficiaries_status", "beneficiaries", ["status"])

    op.create_table(
        "programs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_programs_name", "programs", ["name"])

    op.create_table(
        "receipts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "donor_id", UUID(as_uuid=True),
            sa.ForeignKey("donors.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("receipt_number", sa.String(50), nullable=False, unique=True),
        sa.Column("receipt_date", sa.Date, nullable=False),
        sa.Column("payment_method", sa.String(50), nullable=False),
        sa.Column("total_amount", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "created_by_user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id"), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_receipts_donor_id", "receipts", ["donor_id"])
    op.create_index("ix_receipts_receipt_date", "receipts", ["receipt_date"])

    op.create_table(
        "receipt_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "receipt_id", UUID(as_uuid=True),
            sa.ForeignKey("receipts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("line_no", sa.Integer, nullable=False),
        sa.Column("fund_type", sa.String(20), nullable=False),
        sa.Column("zakat_type", sa.String(20), nullable=True),
        sa.Column("person_count", sa.Integer, nullable=True),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("rice_kg", sa.Numeric(10, 2), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_receipt_items_receipt_id", "receipt_items", ["receipt_id"])

    op.create_table(
        "distributions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("distribution_date", sa.Date, nullable=False),
        sa.Column(
            "program_id", UUID(as_uuid=True),
            sa.ForeignKey("programs.id", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column("source_fund_type", sa.String(20), nullable=False),
        sa.Column("total_amount", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column(
            "created_by_user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id"), nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_distributions_distribution_date", "distributions", ["distribution_date"])
    op.create_index("ix_distributions_program_id", "distributions", ["program_id"])

    op.create_table(
        "distribution_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "distribution_id", UUID(as_uuid=True),
            sa.ForeignKey("distributions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("line_no", sa.Integer, nullable=False),
        sa.Column(
            "beneficiary_id", UUID(as_uuid=True),
            sa.ForeignKey("beneficiaries.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_distribution_items_distribution_id", "distribution_items", ["distribution_id"])
    op.create_index("ix_distribution_items_beneficiary_id", "distribution_items", ["beneficiary_id"])


def downgrade() -> None:
    op.drop_table("distribution_items")
    op.drop_table("distributions")
    op.drop_table("receipt_items")
    op.drop_table("receipts")
    op.drop_table("programs")
    op.drop_table("beneficiaries")
    op.drop_table("categories")
    op.drop_table("donors")
    op.drop_table("users")
