"""Aggregation Reporter — read-only aggregate queries over receipts and distributions.

Invariants:
    - No report mutates storage
    - Income buckets: zakat+fitrah → zakat_fitrah, zakat+maal → zakat_maal, infaq, sadaqah
    - fund_balance always returns the four buckets in FUND_BUCKETS order, zero-filled
    - All money values leave this module as 2-place Decimals
    - Date ranges are inclusive and validated (date_from <= date_to)

Design Decisions:
    - Bucket enumeration built as an inline UNION ALL CTE and LEFT JOINed, so empty
      buckets are produced by SQL rather than patched in afterwards
    - Bucket mapping done in a subquery before GROUP BY: grouping by a CASE that
      carries bound parameters is rejected by PostgreSQL
    - Month grouping via EXTRACT(year/month): portable across PostgreSQL and SQLite
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import (
    and_, case, distinct, extract, func, literal_column, select, union_all,
)
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.core.domain_types import (
    FUND_BUCKETS, NO_PROGRAM_LABEL, DistributionGrouping, FundType,
    ReportPeriod, SourceFundType, ZakatType,
)
from zakat_ledger.core.money import compute_total, to_money
from zakat_ledger.core.validation import raise_if_invalid, validate_date_range
from zakat_ledger.models import (
    Beneficiary, Category, Distribution, DistributionItem, Program, Receipt,
    ReceiptItem,
)
from zakat_ledger.services.reference_checks import get_or_404

logger = logging.getLogger(__name__)


def _bucket_predicates() -> dict[SourceFundType, object]:
    return {
        SourceFundType.ZAKAT_FITRAH: and_(
            ReceiptItem.fund_type == FundType.ZAKAT.value,
            ReceiptItem.zakat_type == ZakatType.FITRAH.value,
        ),
        SourceFundType.ZAKAT_MAAL: and_(
            ReceiptItem.fund_type == FundType.ZAKAT.value,
            ReceiptItem.zakat_type == ZakatType.MAAL.value,
        ),
        SourceFundType.INFAQ: ReceiptItem.fund_type == FundType.INFAQ.value,
        SourceFundType.SADAQAH: ReceiptItem.fund_type == FundType.SADAQAH.value,
    }


def _sql_string(value: str) -> object:
    """Inline a trusted enum constant as a SQL string literal."""
    return literal_column(f"'{value}'")


def _date_range(column, date_from: date | None, date_to: date | None) -> list:
    conditions = []
    if date_from:
        conditions.append(column >= date_from)
    if date_to:
        conditions.append(column <= date_to)
    return conditions


class ReportService:
    """Fixed-shape aggregate reports."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def income_summary(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        period: ReportPeriod = ReportPeriod.MONTHLY,
    ) -> list[dict]:
        """Receipt item amounts per period, pivoted by fund bucket."""
        raise_if_invalid(validate_date_range(date_from, date_to))

        if period == ReportPeriod.DAILY:
            keys = [Receipt.receipt_date]
        else:
            keys = [
                extract("year", Receipt.receipt_date),
                extract("month", Receipt.receipt_date),
            ]
        sums = [
            func.coalesce(
                func.sum(case((predicate, ReceiptItem.amount), else_=0)), 0,
            ).label(bucket.value)
            for bucket, predicate in _bucket_predicates().items()
        ]
        stmt = (
            select(
                *(key.label(f"key_{i}") for i, key in enumerate(keys)),
                *sums,
                func.coalesce(func.sum(ReceiptItem.amount), 0).label("total"),
            )
            .select_from(Receipt)
            .join(ReceiptItem, ReceiptItem.receipt_id == Receipt.id)
            .where(*_date_range(Receipt.receipt_date, date_from, date_to))
            .group_by(*keys)
            .order_by(*keys)
        )
        rows = (await self.db.execute(stmt)).mappings().all()

        return [
            {
                "period": _format_period(row, period),
                **{b.value: to_money(row[b.value]) for b in FUND_BUCKETS},
                "total": to_money(row["total"]),
            }
            for row in rows
        ]

    async def distribution_summary(
        self,
        group_by: DistributionGrouping,
        date_from: date | None = None,
        date_to: date | None = None,
        source_fund_type: SourceFundType | None = None,
    ) -> list[dict]:
        """Distinct beneficiaries and amount per category, or per program and source fund."""
        raise_if_invalid(validate_date_range(date_from, date_to))

        beneficiary_count = func.count(distinct(DistributionItem.beneficiary_id))
        total = func.coalesce(func.sum(DistributionItem.amount), 0)
        conditions = _date_range(Distribution.distribution_date, date_from, date_to)
        if source_fund_type:
            conditions.append(Distribution.source_fund_type == source_fund_type.value)

        if group_by == DistributionGrouping.CATEGORY:
            group_id, group_name = Category.id, Category.name
            base = (
                select(
                    group_id.label("group_id"), group_name.label("group_name"),
                    beneficiary_count.label("beneficiary_count"),
                    total.label("total_amount"),
                )
                .select_from(DistributionItem)
                .join(Distribution, DistributionItem.distribution_id == Distribution.id)
                .join(Beneficiary, DistributionItem.beneficiary_id == Beneficiary.id)
                .join(Category, Beneficiary.category_id == Category.id)
            )
        else:
            group_id, group_name = Program.id, Program.name
            base = (
                select(
                    group_id.label("group_id"), group_name.label("group_name"),
                    Distribution.source_fund_type.label("source_fund_type"),
                    beneficiary_count.label("beneficiary_count"),
                    total.label("total_amount"),
                )
                .select_from(DistributionItem)
                .join(Distribution, DistributionItem.distribution_id == Distribution.id)
                .outerjoin(Program, Distribution.program_id == Program.id)
            )

        group_columns = [group_id, group_name]
        if group_by == DistributionGrouping.PROGRAM:
            group_columns.append(Distribution.source_fund_type)

        stmt = (
            base.where(*conditions)
            .group_by(*group_columns)
            .order_by(total.desc(), *(c.asc() for c in group_columns[1:]))
        )
        rows = (await self.db.execute(stmt)).mappings().all()
        return [
            {
                "group_id": row["group_id"],
                "group_name": row["group_name"] or NO_PROGRAM_LABEL,
                "source_fund_type": row.get("source_fund_type"),
                "beneficiary_count": int(row["beneficiary_count"]),
                "total_amount": to_money(row["total_amount"]),
            }
            for row in rows
        ]

    async def fund_balance(
        self, date_from: date | None = None, date_to: date | None = None,
    ) -> list[dict]:
        """Inflow minus outflow per fund bucket; every bucket always present."""
        raise_if_invalid(validate_date_range(date_from, date_to))

        bucket_of_item = case(
            *(
                (predicate, _sql_string(bucket.value))
                for bucket, predicate in _bucket_predicates().items()
            ),
        )
        item_buckets = (
            select(bucket_of_item.label("fund_type"), ReceiptItem.amount)
            .select_from(Receipt)
            .join(ReceiptItem, ReceiptItem.receipt_id == Receipt.id)
            .where(*_date_range(Receipt.receipt_date, date_from, date_to))
            .subquery("item_buckets")
        )
        income = (
            select(
                item_buckets.c.fund_type,
                func.sum(item_buckets.c.amount).label("total_in"),
            )
            .group_by(item_buckets.c.fund_type)
            .cte("income")
        )
        outgoing = (
            select(
                Distribution.source_fund_type.label("fund_type"),
                func.sum(Distribution.total_amount).label("total_out"),
            )
            .where(*_date_range(Distribution.distribution_date, date_from, date_to))
            .group_by(Distribution.source_fund_type)
            .cte("outgoing")
        )
        buckets = union_all(*(
            select(
                _sql_string(bucket.value).label("fund_type"),
                literal_column(str(position)).label("position"),
            )
            for position, bucket in enumerate(FUND_BUCKETS)
        )).cte("buckets")

        stmt = (
            select(
                buckets.c.fund_type,
                func.coalesce(income.c.total_in, 0).label("total_in"),
                func.coalesce(outgoing.c.total_out, 0).label("total_out"),
            )
            .select_from(
                buckets
                .outerjoin(income, income.c.fund_type == buckets.c.fund_type)
                .outerjoin(outgoing, outgoing.c.fund_type == buckets.c.fund_type)
            )
            .order_by(buckets.c.position)
        )
        rows = (await self.db.execute(stmt)).mappings().all()

        report = []
        for row in rows:
            total_in, total_out = to_money(row["total_in"]), to_money(row["total_out"])
            report.append({
                "fund_type": row["fund_type"],
                "total_in": total_in,
                "total_out": total_out,
                "balance": total_in - total_out,
            })
        return report

    async def beneficiary_history(self, beneficiary_id: UUID) -> dict:
        """Every distribution line a beneficiary received, newest first."""
        beneficiary = await get_or_404(
            self.db, Beneficiary, beneficiary_id, "Beneficiary",
        )
        stmt = (
            select(
                Distribution.id.label("distribution_id"),
                Distribution.distribution_date,
                Program.name.label("program_name"),
                Distribution.source_fund_type,
                DistributionItem.amount,
            )
            .select_from(DistributionItem)
            .join(Distribution, DistributionItem.distribution_id == Distribution.id)
            .outerjoin(Program, Distribution.program_id == Program.id)
            .where(DistributionItem.beneficiary_id == beneficiary_id)
            .order_by(
                Distribution.distribution_date.desc(),
                Distribution.created_at.desc(),
                DistributionItem.line_no.asc(),
            )
        )
        rows = (await self.db.execute(stmt)).mappings().all()
        history = [
            {
                "distribution_id": row["distribution_id"],
                "distribution_date": row["distribution_date"],
                "program_name": row["program_name"] or NO_PROGRAM_LABEL,
                "source_fund_type": row["source_fund_type"],
                "amount": to_money(row["amount"]),
            }
            for row in rows
        ]
        return {
            "beneficiary_id": beneficiary.id,
            "name": beneficiary.name,
            "category_name": beneficiary.category.name,
            "address": beneficiary.address,
            "history": history,
            "total_received": compute_total(history),
        }


def _format_period(row, period: ReportPeriod) -> str:
    if period == ReportPeriod.DAILY:
        value = row["key_0"]
        return value.isoformat() if isinstance(value, date) else str(value)
    return f"{int(row['key_0']):04d}-{int(row['key_1']):02d}"
