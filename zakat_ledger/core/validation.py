"""Entity Validators — per-operation field rules, pure and storage-free.

Invariants:
    - Every validator returns list[FieldViolation]; empty list means valid
    - Validators never raise on bad input and never touch storage
    - Item violations use dotted paths: items.<index>.<field> (0-based)
    - zakat_type is required iff fund_type == zakat; person_count iff zakat_type == fitrah

Design Decisions:
    - Rules return violations instead of raising: callers render every field at once,
      raise_if_invalid joins them only at the boundary
    - Input is a plain mapping (pydantic model_dump()): core never imports schemas
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from zakat_ledger.core.domain_types import (
    BeneficiaryStatus, FundType, Role, SourceFundType, ZakatType,
)
from zakat_ledger.core.errors import ValidationFailedError
from zakat_ledger.core.money import (
    AMOUNT_DIGITS, RICE_KG_DIGITS, compute_total, fits_digits, has_money_scale,
)

# Column widths of the text fields that have one
NAME_MAX = 255
PHONE_MAX = 20
CODE_MAX = 50
PERSON_COUNT_MAX = 2_147_483_647


@dataclass(frozen=True)
class FieldViolation:
    """One broken rule on one field."""
    field: str
    rule: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "rule": self.rule, "message": self.message}


# ─── Rule primitives ─────────────────────────────────────────────

def _required_text(
    data: Mapping[str, Any], key: str, path: str | None = None,
    min_length: int = 1, max_length: int | None = None,
) -> list[FieldViolation]:
    path = path or key
    value = data.get(key)
    if value is None or not str(value).strip():
        return [FieldViolation(path, "required", f"{path} is required")]
    if len(str(value).strip()) < min_length:
        return [FieldViolation(
            path, "min_length", f"{path} must be at least {min_length} characters",
        )]
    return _max_length(data, key, max_length, path)


def _max_length(
    data: Mapping[str, Any], key: str, max_length: int | None, path: str | None = None,
) -> list[FieldViolation]:
    path = path or key
    value = data.get(key)
    if value is not None and max_length and len(str(value).strip()) > max_length:
        return [FieldViolation(
            path, "max_length", f"{path} must be at most {max_length} characters",
        )]
    return []


def _required(data: Mapping[str, Any], key: str, path: str | None = None) -> list[FieldViolation]:
    path = path or key
    if data.get(key) is None:
        return [FieldViolation(path, "required", f"{path} is required")]
    return []


def _member_of(
    data: Mapping[str, Any], key: str, enum: type[Enum],
    path: str | None = None, required: bool = True,
) -> list[FieldViolation]:
    path = path or key
    value = data.get(key)
    if value is None or value == "":
        if required:
            return [FieldViolation(path, "required", f"{path} is required")]
        return []
    allowed = [m.value for m in enum]
    if str(getattr(value, "value", value)) not in allowed:
        return [FieldViolation(
            path, "one_of", f"{path} must be one of: {', '.join(allowed)}",
        )]
    return []


def _positive_amount(
    data: Mapping[str, Any], key: str, path: str | None = None,
    required: bool = True, digits: int = AMOUNT_DIGITS,
) -> list[FieldViolation]:
    path = path or key
    value = data.get(key)
    if value is None:
        if required:
            return [FieldViolation(path, "required", f"{path} is required")]
        return []
    amount = Decimal(str(value))
    if amount <= 0:
        return [FieldViolation(path, "gt", f"{path} must be greater than 0")]
    if not fits_digits(amount, digits):
        return [FieldViolation(
            path, "max_digits",
            f"{path} must have at most {digits} digits before the decimal point",
        )]
    if not has_money_scale(amount):
        return [FieldViolation(
            path, "decimal_places", f"{path} must have at most 2 decimal places",
        )]
    return []


def _int_between(
    data: Mapping[str, Any], key: str, minimum: int, maximum: int, path: str | None = None,
) -> list[FieldViolation]:
    path = path or key
    value = data.get(key)
    if value is not None and value < minimum:
        return [FieldViolation(path, "min", f"{path} must be at least {minimum}")]
    if value is not None and value > maximum:
        return [FieldViolation(path, "max", f"{path} must be at most {maximum}")]
    return []


def _items_present(data: Mapping[str, Any]) -> list[FieldViolation]:
    if not data.get("items"):
        return [FieldViolation("items", "min_items", "at least one item is required")]
    return []


def _total_fits(items: list[Mapping[str, Any]]) -> list[FieldViolation]:
    """Header total must fit the same column as each item amount."""
    if not fits_digits(compute_total(items), AMOUNT_DIGITS):
        return [FieldViolation(
            "items", "max_total",
            f"sum of item amounts must have at most {AMOUNT_DIGITS} digits "
            "before the decimal point",
        )]
    return []


# ─── Master data ─────────────────────────────────────────────────

def validate_donor(data: Mapping[str, Any]) -> list[FieldViolation]:
    return (
        _required_text(data, "name", min_length=2, max_length=NAME_MAX)
        + _required_text(data, "phone", min_length=6, max_length=PHONE_MAX)
        + _required_text(data, "address")
    )


def validate_category(data: Mapping[str, Any]) -> list[FieldViolation]:
    return (
        _required_text(data, "name", min_length=2, max_length=NAME_MAX)
        + _max_length(data, "description", NAME_MAX)
    )


def validate_beneficiary(
    data: Mapping[str, Any], status_required: bool = False,
) -> list[FieldViolation]:
    """Beneficiary create (status optional, defaults to pending) or update."""
    return (
        _required_text(data, "name", min_length=2, max_length=NAME_MAX)
        + _required_text(data, "phone", min_length=6, max_length=PHONE_MAX)
        + _required_text(data, "address")
        + _required(data, "category_id")
        + _member_of(data, "status", BeneficiaryStatus, required=status_required)
    )


def validate_program(data: Mapping[str, Any]) -> list[FieldViolation]:
    return (
        _required_text(data, "name", min_length=2, max_length=NAME_MAX)
        + _required_text(data, "type", max_length=CODE_MAX)
    )


def validate_role(data: Mapping[str, Any]) -> list[FieldViolation]:
    return _member_of(data, "role", Role)


def validate_date_range(
    date_from: date | None, date_to: date | None,
) -> list[FieldViolation]:
    if date_from and date_to and date_from > date_to:
        return [FieldViolation(
            "date_from", "date_range", "date_from must not be after date_to",
        )]
    return []


# ─── Receipts ────────────────────────────────────────────────────

def _validate_receipt_item(item: Mapping[str, Any], index: int) -> list[FieldViolation]:
    prefix = f"items.{index}"
    violations = _member_of(item, "fund_type", FundType, f"{prefix}.fund_type")
    violations += _positive_amount(item, "amount", f"{prefix}.amount")
    violations += _positive_amount(
        item, "rice_kg", f"{prefix}.rice_kg", required=False, digits=RICE_KG_DIGITS,
    )
    violations += _int_between(
        item, "person_count", 1, PERSON_COUNT_MAX, f"{prefix}.person_count",
    )

    if item.get("fund_type") == FundType.ZAKAT:
        violations += _member_of(item, "zakat_type", ZakatType, f"{prefix}.zakat_type")
        if item.get("zakat_type") == ZakatType.FITRAH:
            violations += _required(item, "person_count", f"{prefix}.person_count")
    return violations


def validate_receipt(data: Mapping[str, Any]) -> list[FieldViolation]:
    violations = (
        _required(data, "donor_id")
        + _required_text(data, "receipt_number", max_length=CODE_MAX)
        + _required(data, "receipt_date")
        + _required_text(data, "payment_method", max_length=CODE_MAX)
        + _items_present(data)
    )
    item_violations = []
    for index, item in enumerate(data.get("items") or []):
        item_violations += _validate_receipt_item(item, index)
    if data.get("items") and not item_violations:
        item_violations = _total_fits(data["items"])
    return violations + item_violations


def normalize_receipt_item(item: Mapping[str, Any]) -> dict:
    """Drop zakat_type on non-zakat items and person_count on non-fitrah items."""
    normalized = dict(item)
    if normalized.get("fund_type") != FundType.ZAKAT:
        normalized["zakat_type"] = None
    if normalized.get("zakat_type") != ZakatType.FITRAH:
        normalized["person_count"] = None
    return normalized


# ─── Distributions ───────────────────────────────────────────────

def validate_distribution(data: Mapping[str, Any]) -> list[FieldViolation]:
    violations = (
        _required(data, "distribution_date")
        + _member_of(data, "source_fund_type", SourceFundType)
        + _items_present(data)
    )
    item_violations = []
    for index, item in enumerate(data.get("items") or []):
        prefix = f"items.{index}"
        item_violations += _required(item, "beneficiary_id", f"{prefix}.beneficiary_id")
        item_violations += _positive_amount(item, "amount", f"{prefix}.amount")
    if data.get("items") and not item_violations:
        item_violations = _total_fits(data["items"])
    return violations + item_violations


def raise_if_invalid(violations: list[FieldViolation]) -> None:
    if violations:
        raise ValidationFailedError(violations)
