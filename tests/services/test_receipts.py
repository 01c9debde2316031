"""Receipts — header + items written together, totals computed server-side.

Invariants:
    - total_amount == sum(items.amount) after create and update
    - A rejected write (validation, missing reference, duplicate number) persists nothing
    - Update replaces the whole item set
    - zakat_type/person_count dropped silently where they do not apply
"""

from uuid import uuid4

from sqlalchemy import func, select

from tests.services.payloads import money, receipt_payload
from zakat_ledger.models import Receipt, ReceiptItem


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


async def test_create_receipt_computes_total_from_items(client, auth_headers, donor):
    items = [
        {"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 4, "amount": "180000.00"},
        {"fund_type": "zakat", "zakat_type": "maal", "amount": "2500000.00"},
        {"fund_type": "infaq", "amount": "50000.50"},
    ]
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers("staff"),
    )
    assert res.status_code == 201
    body = res.json()
    assert money(body["total_amount"]) == money("2730000.50")
    assert [i["line_no"] for i in body["items"]] == [1, 2, 3]
    assert body["donor"]["name"] == "Ahmad Fauzi"


async def test_create_receipt_records_caller_as_creator(client, auth_headers, users, donor):
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers("staff"),
    )
    assert res.json()["created_by_user_id"] == str(users["staff"].id)


async def test_total_in_body_is_rejected(client, auth_headers, donor):
    payload = receipt_payload(donor.id, total_amount="1.00")
    res = await client.post("/api/v1/receipts", json=payload, headers=auth_headers())
    assert res.status_code == 400


async def test_zero_items_rejected_and_nothing_persisted(client, auth_headers, donor, test_db):
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=[]),
        headers=auth_headers(),
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {"field": "items", "rule": "min_items"}.items() <= error["details"][0].items()
    assert await _count(test_db, Receipt) == 0


async def test_zakat_item_without_zakat_type_rejected(client, auth_headers, donor):
    items = [{"fund_type": "zakat", "amount": "100000.00"}]
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers(),
    )
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert fields == ["items.0.zakat_type"]


async def test_infaq_and_sadaqah_accept_absent_zakat_type(client, auth_headers, donor):
    items = [
        {"fund_type": "infaq", "amount": "10000.00"},
        {"fund_type": "sadaqah", "amount": "20000.00", "zakat_type": "maal", "person_count": 3},
    ]
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers(),
    )
    assert res.status_code == 201
    stored = res.json()["items"]
    assert all(i["zakat_type"] is None for i in stored)
    assert all(i["person_count"] is None for i in stored)


async def test_amount_with_three_decimals_rejected(client, auth_headers, donor):
    items = [{"fund_type": "infaq", "amount": "10.005"}]
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers(),
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["rule"] == "decimal_places"


async def test_missing_donor_rejected_and_nothing_persisted(client, auth_headers, users, test_db):
    res = await client.post(
        "/api/v1/receipts", json=receipt_payload(uuid4()), headers=auth_headers(),
    )
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "REFERENCE_NOT_FOUND"
    assert await _count(test_db, Receipt) == 0
    assert await _count(test_db, ReceiptItem) == 0


async def test_duplicate_receipt_number_conflicts(client, auth_headers, donor, test_db):
    first = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers(),
    )
    assert first.status_code == 201
    second = await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers(),
    )
    assert second.status_code == 409
    assert await _count(test_db, Receipt) == 1
    assert await _count(test_db, ReceiptItem) == 1


async def test_update_from_three_items_to_one(client, auth_headers, donor, test_db):
    items = [
        {"fund_type": "infaq", "amount": "10000.00"},
        {"fund_type": "sadaqah", "amount": "20000.00"},
        {"fund_type": "zakat", "zakat_type": "maal", "amount": "30000.00"},
    ]
    created = (await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers(),
    )).json()

    res = await client.put(
        f"/api/v1/receipts/{created['id']}",
        json=receipt_payload(donor.id, items=[{"fund_type": "infaq", "amount": "75000.00"}]),
        headers=auth_headers(),
    )
    assert res.status_code == 200
    body = res.json()
    assert len(body["items"]) == 1
    assert money(body["total_amount"]) == money("75000.00")
    assert await _count(test_db, ReceiptItem) == 1


async def test_update_with_zero_items_keeps_old_items(client, auth_headers, donor, test_db):
    created = (await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers(),
    )).json()
    res = await client.put(
        f"/api/v1/receipts/{created['id']}",
        json=receipt_payload(donor.id, items=[]), headers=auth_headers(),
    )
    assert res.status_code == 400
    assert await _count(test_db, ReceiptItem) == 1


async def test_update_unknown_receipt_returns_404(client, auth_headers, donor):
    res = await client.put(
        f"/api/v1/receipts/{uuid4()}", json=receipt_payload(donor.id),
        headers=auth_headers(),
    )
    assert res.status_code == 404


async def test_delete_receipt_cascades_items(client, auth_headers, donor, test_db):
    created = (await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers(),
    )).json()
    res = await client.delete(f"/api/v1/receipts/{created['id']}", headers=auth_headers())
    assert res.status_code == 204
    assert await _count(test_db, Receipt) == 0
    assert await _count(test_db, ReceiptItem) == 0


async def test_referenced_donor_cannot_be_deleted(client, auth_headers, donor):
    await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id), headers=auth_headers(),
    )
    res = await client.delete(f"/api/v1/donors/{donor.id}", headers=auth_headers())
    assert res.status_code == 409
    assert "receipts" in res.json()["error"]["message"]


async def test_amount_beyond_storage_precision_rejected(client, auth_headers, donor, test_db):
    items = [{"fund_type": "infaq", "amount": "100000000000000000.00"}]
    res = await client.post(
        "/api/v1/receipts",
        json=receipt_payload(donor.id, number="R" * 80, items=items),
        headers=auth_headers(),
    )
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["retryable"] is False
    assert {(d["field"], d["rule"]) for d in body["details"]} == {
        ("receipt_number", "max_length"), ("items.0.amount", "max_digits"),
    }
    assert await _count(test_db, Receipt) == 0


async def test_update_with_missing_donor_keeps_old_receipt(client, auth_headers, donor, test_db):
    items = [
        {"fund_type": "infaq", "amount": "10000.00"},
        {"fund_type": "sadaqah", "amount": "2500.00"},
    ]
    created = (await client.post(
        "/api/v1/receipts", json=receipt_payload(donor.id, items=items),
        headers=auth_headers(),
    )).json()

    res = await client.put(
        f"/api/v1/receipts/{created['id']}",
        json=receipt_payload(uuid4(), items=[{"fund_type": "infaq", "amount": "1.00"}]),
        headers=auth_headers(),
    )
    assert res.status_code == 422
    assert res.json()["error"]["message"].startswith("Donor")

    after = (await client.get(
        f"/api/v1/receipts/{created['id']}", headers=auth_headers(),
    )).json()
    assert after["donor"]["id"] == str(donor.id)
    assert money(after["total_amount"]) == money("12500.00")
    assert [i["amount"] for i in after["items"]] == [i["amount"] for i in created["items"]]
    assert await _count(test_db, ReceiptItem) == 2
