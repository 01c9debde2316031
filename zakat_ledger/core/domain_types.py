"""Domain Types — enums and identity types shared across the ledger.

Invariants:
    - Every enumerated column value is defined here exactly once
    - FUND_BUCKETS order is the display order of fund balance rows
    - A receipt item maps to exactly one bucket (zakat items via zakat_type)

Design Decisions:
    - str Enums: serialize to JSON and bind as SQL parameters without converters
    - NewType ids: zero runtime cost, keep donor/beneficiary ids apart for the type checker
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

DonorId = NewType("DonorId", UUID)
CategoryId = NewType("CategoryId", UUID)
BeneficiaryId = NewType("BeneficiaryId", UUID)
ProgramId = NewType("ProgramId", UUID)
ReceiptId = NewType("ReceiptId", UUID)
DistributionId = NewType("DistributionId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class FundType(str, Enum):
    """Fund type of a receipt line item."""
    ZAKAT = "zakat"
    INFAQ = "infaq"
    SADAQAH = "sadaqah"


class ZakatType(str, Enum):
    """Zakat sub-type, present only on zakat items."""
    FITRAH = "fitrah"
    MAAL = "maal"


class SourceFundType(str, Enum):
    """Fund bucket money is disbursed from (and reported against)."""
    ZAKAT_FITRAH = "zakat_fitrah"
    ZAKAT_MAAL = "zakat_maal"
    INFAQ = "infaq"
    SADAQAH = "sadaqah"


class BeneficiaryStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


class Role(str, Enum):
    """Caller roles issued by the identity provider."""
    ADMIN = "admin"
    STAFF = "staff"
    VIEWER = "viewer"


class ReportPeriod(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


class DistributionGrouping(str, Enum):
    CATEGORY = "category"
    PROGRAM = "program"


FUND_BUCKETS: tuple[SourceFundType, ...] = (
    SourceFundType.ZAKAT_FITRAH,
    SourceFundType.ZAKAT_MAAL,
    SourceFundType.INFAQ,
    SourceFundType.SADAQAH,
)

NO_PROGRAM_LABEL = "No Program"


def bucket_for(fund_type: str, zakat_type: str | None) -> SourceFundType:
    """Map a receipt item's (fund_type, zakat_type) to its fund bucket."""
    if fund_type == FundType.ZAKAT:
        if zakat_type == ZakatType.FITRAH:
            return SourceFundType.ZAKAT_FITRAH
        if zakat_type == ZakatType.MAAL:
            return SourceFundType.ZAKAT_MAAL
        raise ValueError(f"zakat item without a valid zakat_type: {zakat_type!r}")
    return SourceFundType(fund_type)
