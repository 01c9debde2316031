"""Report Schemas — fixed-shape aggregate rows.

Invariants:
    - Money columns are Decimal (serialized as strings), never floats
    - fund_balance rows are always the four buckets in display order
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel


class IncomeSummaryRow(BaseModel):
    period: str
    zakat_fitrah: Decimal
    zakat_maal: Decimal
    infaq: Decimal
    sadaqah: Decimal
    total: Decimal


class DistributionSummaryRow(BaseModel):
    group_id: UUID | None = None
    group_name: str
    source_fund_type: str | None = None
    beneficiary_count: int
    total_amount: Decimal


class FundBalanceRow(BaseModel):
    fund_type: str
    total_in: Decimal
    total_out: Decimal
    balance: Decimal


class BeneficiaryHistoryEntry(BaseModel):
    distribution_id: UUID
    distribution_date: date
    program_name: str
    source_fund_type: str
    amount: Decimal


class BeneficiaryHistory(BaseModel):
    beneficiary_id: UUID
    name: str
    category_name: str
    address: str
    history: list[BeneficiaryHistoryEntry]
    total_received: Decimal
