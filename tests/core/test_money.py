"""Money — fixed-point normalization and the header total calculator."""

from decimal import Decimal
from types import SimpleNamespace

from zakat_ledger.core.money import compute_total, has_money_scale, to_money


def test_total_of_two_distribution_items():
    items = [{"amount": Decimal("150000")}, {"amount": Decimal("250000")}]
    assert compute_total(items) == Decimal("400000.00")


def test_total_is_exact_for_cents():
    items = [{"amount": Decimal("0.10")}] * 3
    assert compute_total(items) == Decimal("0.30")


def test_total_is_order_independent():
    amounts = [Decimal("12.34"), Decimal("0.01"), Decimal("99999.99")]
    forward = compute_total({"amount": a} for a in amounts)
    backward = compute_total({"amount": a} for a in reversed(amounts))
    assert forward == backward == Decimal("100012.34")


def test_total_accepts_objects_with_amount():
    rows = [SimpleNamespace(amount=Decimal("5.00")), SimpleNamespace(amount=Decimal("7.50"))]
    assert compute_total(rows) == Decimal("12.50")


def test_empty_total_is_zero():
    assert compute_total([]) == Decimal("0.00")


def test_to_money_normalizes_driver_values():
    assert to_money(None) == Decimal("0.00")
    assert to_money(0) == Decimal("0.00")
    assert to_money(0.1 + 0.2) == Decimal("0.30")
    assert to_money("42.5") == Decimal("42.50")


def test_money_scale():
    assert has_money_scale(Decimal("1.25"))
    assert has_money_scale(Decimal("10"))
    assert not has_money_scale(Decimal("1.255"))
