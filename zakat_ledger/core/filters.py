"""List Filters — optional-field filter structs, one per listable resource.

Invariants:
    - Every field is optional; None means "no predicate"
    - q is free text matched case-insensitively against the resource's search columns
    - Filters carry no paging — PageRequest travels alongside
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from zakat_ledger.core.domain_types import (
    BeneficiaryStatus, FundType, Role, SourceFundType, ZakatType,
)


@dataclass(frozen=True)
class DonorFilter:
    q: str | None = None


@dataclass(frozen=True)
class CategoryFilter:
    q: str | None = None


@dataclass(frozen=True)
class BeneficiaryFilter:
    q: str | None = None
    status: BeneficiaryStatus | None = None
    category_id: UUID | None = None


@dataclass(frozen=True)
class ProgramFilter:
    q: str | None = None
    type: str | None = None
    active: bool | None = None


@dataclass(frozen=True)
class ReceiptFilter:
    q: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    fund_type: FundType | None = None
    zakat_type: ZakatType | None = None
    payment_method: str | None = None
    donor_id: UUID | None = None


@dataclass(frozen=True)
class DistributionFilter:
    q: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    source_fund_type: SourceFundType | None = None
    program_id: UUID | None = None


@dataclass(frozen=True)
class UserFilter:
    q: str | None = None
    role: Role | None = None


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user text matches literally (escape char: backslash)."""
    return (
        term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
