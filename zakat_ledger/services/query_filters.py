"""Query/Filter Builder — turns filter structs into parameterized, paginated queries.

Invariants:
    - Only supplied filter fields become predicates; predicates are AND-combined
    - Free-text search is case-insensitive substring, OR-combined across columns,
      with LIKE wildcards in user text escaped
    - The COUNT query and the page query share the exact same predicates
    - Every value is a bound parameter (no string interpolation into SQL)
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.filters import (
    BeneficiaryFilter, CategoryFilter, DistributionFilter, DonorFilter,
    ProgramFilter, ReceiptFilter, UserFilter, escape_like,
)
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.models import (
    Beneficiary, Category, Distribution, Donor, Program, Receipt,
    ReceiptItem, User,
)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T]
    meta: dict = field(default_factory=dict)


def like_pattern(q: str | None) -> str | None:
    term = (q or "").strip()
    if not term:
        return None
    return f"%{escape_like(term)}%"


def ilike(column: Any, pattern: str) -> ColumnElement[bool]:
    return column.ilike(pattern, escape="\\")


def search_condition(q: str | None, *columns: Any) -> ColumnElement[bool] | None:
    pattern = like_pattern(q)
    if pattern is None:
        return None
    return or_(*(ilike(column, pattern) for column in columns))


def _compact(*conditions: ColumnElement[bool] | None) -> list[ColumnElement[bool]]:
    return [c for c in conditions if c is not None]


def _date_range(column: Any, date_from, date_to) -> list[ColumnElement[bool]]:
    return _compact(
        column >= date_from if date_from else None,
        column <= date_to if date_to else None,
    )


# ─── Per-resource predicates ─────────────────────────────────────

def donor_conditions(f: DonorFilter) -> list[ColumnElement[bool]]:
    return _compact(search_condition(f.q, Donor.name, Donor.phone, Donor.address))


def category_conditions(f: CategoryFilter) -> list[ColumnElement[bool]]:
    return _compact(search_condition(f.q, Category.name))


def beneficiary_conditions(f: BeneficiaryFilter) -> list[ColumnElement[bool]]:
    return _compact(
        search_condition(f.q, Beneficiary.name, Beneficiary.address),
        Beneficiary.status == f.status.value if f.status else None,
        Beneficiary.category_id == f.category_id if f.category_id else None,
    )


def program_conditions(f: ProgramFilter) -> list[ColumnElement[bool]]:
    return _compact(
        search_condition(f.q, Program.name),
        Program.type == f.type if f.type else None,
        Program.active.is_(f.active) if f.active is not None else None,
    )


def user_conditions(f: UserFilter) -> list[ColumnElement[bool]]:
    return _compact(
        search_condition(f.q, User.name, User.email),
        User.role == f.role.value if f.role else None,
    )


def receipt_conditions(f: ReceiptFilter) -> list[ColumnElement[bool]]:
    conditions = _date_range(Receipt.receipt_date, f.date_from, f.date_to)

    # Item-level filters match receipts with at least one such item
    item_filters = _compact(
        ReceiptItem.fund_type == f.fund_type.value if f.fund_type else None,
        ReceiptItem.zakat_type == f.zakat_type.value if f.zakat_type else None,
    )
    if item_filters:
        conditions.append(
            Receipt.id.in_(select(ReceiptItem.receipt_id).where(*item_filters)),
        )
    if f.payment_method:
        conditions.append(Receipt.payment_method == f.payment_method)
    if f.donor_id:
        conditions.append(Receipt.donor_id == f.donor_id)

    pattern = like_pattern(f.q)
    if pattern:
        conditions.append(or_(
            Receipt.donor.has(ilike(Donor.name, pattern)),
            ilike(Receipt.notes, pattern),
            ilike(Receipt.receipt_number, pattern),
        ))
    return conditions


def distribution_conditions(f: DistributionFilter) -> list[ColumnElement[bool]]:
    conditions = _date_range(Distribution.distribution_date, f.date_from, f.date_to)
    if f.source_fund_type:
        conditions.append(Distribution.source_fund_type == f.source_fund_type.value)
    if f.program_id:
        conditions.append(Distribution.program_id == f.program_id)

    pattern = like_pattern(f.q)
    if pattern:
        conditions.append(or_(
            Distribution.program.has(ilike(Program.name, pattern)),
            ilike(Distribution.notes, pattern),
        ))
    return conditions


# ─── Execution ───────────────────────────────────────────────────

async def paginate(
    db: AsyncSession,
    model,
    conditions: list[ColumnElement[bool]],
    page: PageRequest,
    order_by: tuple,
) -> Page:
    """Run COUNT(*) and the LIMIT/OFFSET page over the same predicates."""
    count_stmt = select(func.count()).select_from(model).where(*conditions)
    total = (await db.execute(count_stmt)).scalar_one()

    stmt = (
        select(model)
        .where(*conditions)
        .order_by(*order_by)
        .limit(page.per_page)
        .offset(page.offset)
    )
    result = await db.execute(stmt)
    items = list(result.unique().scalars().all())
    return Page(items=items, meta=page.meta(total))
