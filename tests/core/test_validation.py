"""Entity Validators — every broken rule reported, nothing raised until the boundary."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from zakat_ledger.core.errors import ValidationFailedError
from zakat_ledger.core.validation import (
    FieldViolation, normalize_receipt_item, raise_if_invalid, validate_beneficiary,
    validate_date_range, validate_distribution, validate_donor, validate_receipt,
)


def _receipt(items):
    return {
        "donor_id": uuid4(), "receipt_number": "R-1", "receipt_date": date(2024, 4, 1),
        "payment_method": "transfer", "items": items,
    }


def _rules(violations):
    return [(v.field, v.rule) for v in violations]


def test_valid_receipt_has_no_violations():
    items = [
        {"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 3, "amount": Decimal("90000")},
        {"fund_type": "sadaqah", "amount": Decimal("1000.50")},
    ]
    assert validate_receipt(_receipt(items)) == []


def test_receipt_requires_items():
    assert _rules(validate_receipt(_receipt([]))) == [("items", "min_items")]


def test_zakat_requires_zakat_type():
    items = [{"fund_type": "zakat", "amount": Decimal("1")}]
    assert _rules(validate_receipt(_receipt(items))) == [("items.0.zakat_type", "required")]


def test_fitrah_requires_person_count():
    items = [{"fund_type": "zakat", "zakat_type": "fitrah", "amount": Decimal("1")}]
    assert _rules(validate_receipt(_receipt(items))) == [("items.0.person_count", "required")]


def test_person_count_must_be_positive():
    items = [{"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 0, "amount": Decimal("1")}]
    assert _rules(validate_receipt(_receipt(items))) == [("items.0.person_count", "min")]


def test_item_paths_use_index():
    items = [
        {"fund_type": "infaq", "amount": Decimal("1")},
        {"fund_type": "gold", "amount": Decimal("-1"), "rice_kg": Decimal("0")},
    ]
    assert _rules(validate_receipt(_receipt(items))) == [
        ("items.1.fund_type", "one_of"),
        ("items.1.amount", "gt"),
        ("items.1.rice_kg", "gt"),
    ]


def test_header_violations_reported_together():
    violations = validate_receipt({"items": [{"fund_type": "infaq", "amount": Decimal("5")}]})
    assert [v.field for v in violations] == [
        "donor_id", "receipt_number", "receipt_date", "payment_method",
    ]


def test_normalize_drops_inapplicable_fields():
    infaq = normalize_receipt_item(
        {"fund_type": "infaq", "zakat_type": "maal", "person_count": 2, "amount": Decimal("1")},
    )
    assert infaq["zakat_type"] is None and infaq["person_count"] is None
    maal = normalize_receipt_item(
        {"fund_type": "zakat", "zakat_type": "maal", "person_count": 2, "amount": Decimal("1")},
    )
    assert maal["zakat_type"] == "maal" and maal["person_count"] is None
    fitrah = normalize_receipt_item(
        {"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 2, "amount": Decimal("1")},
    )
    assert fitrah["person_count"] == 2


def test_distribution_rules():
    violations = validate_distribution({
        "distribution_date": date(2024, 4, 1), "source_fund_type": "zakat",
        "items": [{"amount": Decimal("10")}],
    })
    assert _rules(violations) == [
        ("source_fund_type", "one_of"), ("items.0.beneficiary_id", "required"),
    ]


def test_donor_whitespace_only_name_is_missing():
    violations = validate_donor({"name": "   ", "phone": "0812345678", "address": "x"})
    assert _rules(violations) == [("name", "required")]


def test_beneficiary_status_optional_on_create_required_on_update():
    data = {"name": "Ani", "phone": "0812345678", "address": "x", "category_id": uuid4()}
    assert validate_beneficiary(data) == []
    assert _rules(validate_beneficiary(data, status_required=True)) == [("status", "required")]


def test_date_range():
    assert validate_date_range(date(2024, 1, 1), date(2024, 1, 1)) == []
    assert validate_date_range(None, date(2024, 1, 1)) == []
    assert _rules(validate_date_range(date(2024, 2, 1), date(2024, 1, 1))) == [
        ("date_from", "date_range"),
    ]


def test_raise_if_invalid_carries_all_violations():
    violations = [FieldViolation("a", "required", "a is required"),
                  FieldViolation("b", "gt", "b must be greater than 0")]
    with pytest.raises(ValidationFailedError) as exc:
        raise_if_invalid(violations)
    assert exc.value.violations == violations
    assert exc.value.http_status == 400
    assert len(exc.value.to_response()["error"]["details"]) == 2


def test_raise_if_invalid_passes_empty():
    raise_if_invalid([])


def test_amount_beyond_column_precision_rejected():
    items = [
        {"fund_type": "infaq", "amount": Decimal("100000000000000000.00")},
        {"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 1,
         "amount": Decimal("1"), "rice_kg": Decimal("123456789.00")},
    ]
    assert _rules(validate_receipt(_receipt(items))) == [
        ("items.0.amount", "max_digits"), ("items.1.rice_kg", "max_digits"),
    ]


def test_largest_storable_amount_accepted():
    items = [{"fund_type": "infaq", "amount": Decimal("9999999999999999.99")}]
    assert validate_receipt(_receipt(items)) == []


def test_item_sum_beyond_column_precision_rejected():
    items = [{"fund_type": "infaq", "amount": Decimal("9000000000000000.00")}] * 2
    assert _rules(validate_receipt(_receipt(items))) == [("items", "max_total")]


def test_receipt_text_fields_bounded_by_column_width():
    data = {**_receipt([{"fund_type": "infaq", "amount": Decimal("1")}]),
            "receipt_number": "R" * 80, "payment_method": "m" * 51}
    assert _rules(validate_receipt(data)) == [
        ("receipt_number", "max_length"), ("payment_method", "max_length"),
    ]


def test_donor_phone_and_name_bounded_by_column_width():
    violations = validate_donor({"name": "N" * 256, "phone": "0" * 40, "address": "x"})
    assert _rules(violations) == [("name", "max_length"), ("phone", "max_length")]


def test_person_count_bounded_by_integer_column():
    items = [{"fund_type": "zakat", "zakat_type": "fitrah",
              "person_count": 2**31, "amount": Decimal("1")}]
    assert _rules(validate_receipt(_receipt(items))) == [("items.0.person_count", "max")]


def test_distribution_amount_beyond_column_precision_rejected():
    violations = validate_distribution({
        "distribution_date": date(2024, 4, 1), "source_fund_type": "infaq",
        "items": [{"beneficiary_id": uuid4(), "amount": Decimal("1e17")}],
    })
    assert _rules(violations) == [("items.0.amount", "max_digits")]
