"""Reports — income pivot, distribution summary, fund balance, beneficiary history.

Invariants:
    - Fund balance always has four rows in bucket order, zero-filled
    - Distributions without a program are grouped under "No Program"
    - Reports never change stored data
    - date_from after date_to → 400
"""

from datetime import date
from uuid import uuid4

import pytest

from tests.services.payloads import distribution_payload, money, receipt_payload


@pytest.fixture
async def income(client, auth_headers, donor):
    """Two receipts in March and April 2024 covering all four buckets."""
    march = [
        {"fund_type": "zakat", "zakat_type": "fitrah", "person_count": 2, "amount": "100000.00"},
        {"fund_type": "infaq", "amount": "20000.00"},
    ]
    april = [
        {"fund_type": "zakat", "zakat_type": "maal", "amount": "500000.00"},
        {"fund_type": "sadaqah", "amount": "5000.00"},
    ]
    for number, day, items in (
        ("RCPT-03", date(2024, 3, 15), march),
        ("RCPT-04", date(2024, 4, 1), april),
    ):
        res = await client.post(
            "/api/v1/receipts",
            json=receipt_payload(donor.id, number=number, items=items, receipt_date=day),
            headers=auth_headers(),
        )
        assert res.status_code == 201


async def test_income_summary_monthly_pivots_buckets(client, auth_headers, income):
    res = await client.get("/api/v1/reports/income-summary", headers=auth_headers("viewer"))
    assert res.status_code == 200
    rows = res.json()
    assert [r["period"] for r in rows] == ["2024-03", "2024-04"]
    march, april = rows
    assert money(march["zakat_fitrah"]) == money("100000.00")
    assert money(march["infaq"]) == money("20000.00")
    assert money(march["zakat_maal"]) == money("0")
    assert money(march["total"]) == money("120000.00")
    assert money(april["zakat_maal"]) == money("500000.00")
    assert money(april["sadaqah"]) == money("5000.00")
    assert money(april["total"]) == money("505000.00")


async def test_income_summary_daily_respects_date_range(client, auth_headers, income):
    res = await client.get(
        "/api/v1/reports/income-summary",
        params={"period": "daily", "date_from": "2024-04-01", "date_to": "2024-04-30"},
        headers=auth_headers(),
    )
    rows = res.json()
    assert [r["period"] for r in rows] == ["2024-04-01"]


async def test_inverted_date_range_rejected(client, auth_headers):
    res = await client.get(
        "/api/v1/reports/fund-balance",
        params={"date_from": "2024-05-01", "date_to": "2024-04-01"},
        headers=auth_headers(),
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["rule"] == "date_range"


async def test_fund_balance_without_activity_is_all_zero(client, auth_headers):
    res = await client.get("/api/v1/reports/fund-balance", headers=auth_headers("viewer"))
    assert res.status_code == 200
    rows = res.json()
    assert [r["fund_type"] for r in rows] == ["zakat_fitrah", "zakat_maal", "infaq", "sadaqah"]
    for row in rows:
        assert money(row["total_in"]) == money(row["total_out"]) == money(row["balance"]) == 0


async def test_fund_balance_subtracts_distributions(client, auth_headers, income, beneficiaries):
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([beneficiaries[0].id], amounts=("40000.00",)),
        headers=auth_headers(),
    )
    rows = {
        r["fund_type"]: r
        for r in (await client.get(
            "/api/v1/reports/fund-balance", headers=auth_headers(),
        )).json()
    }
    fitrah = rows["zakat_fitrah"]
    assert money(fitrah["total_in"]) == money("100000.00")
    assert money(fitrah["total_out"]) == money("40000.00")
    assert money(fitrah["balance"]) == money("60000.00")
    assert money(rows["zakat_maal"]["balance"]) == money("500000.00")


async def test_distribution_summary_by_category_counts_distinct(
    client, auth_headers, beneficiaries, category,
):
    ids = [b.id for b in beneficiaries]
    await client.post(
        "/api/v1/distributions", json=distribution_payload(ids), headers=auth_headers(),
    )
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([ids[0]], amounts=("10000.00",)), headers=auth_headers(),
    )
    res = await client.get(
        "/api/v1/reports/distribution-summary", params={"group_by": "category"},
        headers=auth_headers(),
    )
    assert res.status_code == 200
    [row] = res.json()
    assert row["group_name"] == "Fakir"
    assert row["group_id"] == str(category.id)
    assert row["beneficiary_count"] == 2
    assert row["source_fund_type"] is None
    assert money(row["total_amount"]) == money("410000.00")


async def test_distribution_summary_by_program_reports_no_program(
    client, auth_headers, beneficiaries, program,
):
    ids = [b.id for b in beneficiaries]
    await client.post(
        "/api/v1/distributions", json=distribution_payload(ids), headers=auth_headers(),
    )
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([ids[0]], amounts=("100.00",), program_id=program.id),
        headers=auth_headers(),
    )
    rows = (await client.get(
        "/api/v1/reports/distribution-summary", params={"group_by": "program"},
        headers=auth_headers(),
    )).json()
    assert [r["group_name"] for r in rows] == ["No Program", "Ramadan Food Parcels"]
    assert rows[0]["group_id"] is None
    assert [r["source_fund_type"] for r in rows] == ["zakat_fitrah", "zakat_fitrah"]


async def test_distribution_summary_by_program_splits_source_funds(
    client, auth_headers, beneficiaries, program,
):
    ids = [b.id for b in beneficiaries]
    for fund, amounts in (("infaq", ("300.00", "200.00")), ("sadaqah", ("50.00",))):
        await client.post(
            "/api/v1/distributions",
            json=distribution_payload(ids, amounts=amounts, program_id=program.id,
                                      source_fund_type=fund),
            headers=auth_headers(),
        )
    rows = (await client.get(
        "/api/v1/reports/distribution-summary", params={"group_by": "program"},
        headers=auth_headers(),
    )).json()
    assert [(r["source_fund_type"], r["beneficiary_count"]) for r in rows] == [
        ("infaq", 2), ("sadaqah", 1),
    ]
    assert {r["group_id"] for r in rows} == {str(program.id)}
    assert money(rows[0]["total_amount"]) == money("500.00")


async def test_distribution_summary_filters_by_source_fund(client, auth_headers, beneficiaries):
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([beneficiaries[0].id], amounts=("1.00",), source_fund_type="infaq"),
        headers=auth_headers(),
    )
    rows = (await client.get(
        "/api/v1/reports/distribution-summary",
        params={"group_by": "category", "source_fund_type": "sadaqah"},
        headers=auth_headers(),
    )).json()
    assert rows == []


async def test_distribution_summary_requires_grouping(client, auth_headers):
    res = await client.get("/api/v1/reports/distribution-summary", headers=auth_headers())
    assert res.status_code == 400


async def test_beneficiary_history_newest_first(client, auth_headers, beneficiaries, program):
    target = beneficiaries[0].id
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([target], amounts=("70000.00",),
                                  distribution_date=date(2024, 1, 10)),
        headers=auth_headers(),
    )
    await client.post(
        "/api/v1/distributions",
        json=distribution_payload([target], amounts=("30000.00",), program_id=program.id,
                                  distribution_date=date(2024, 6, 1)),
        headers=auth_headers(),
    )
    res = await client.get(
        f"/api/v1/reports/beneficiary-history/{target}", headers=auth_headers("viewer"),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Siti Aminah"
    assert body["category_name"] == "Fakir"
    assert [h["distribution_date"] for h in body["history"]] == ["2024-06-01", "2024-01-10"]
    assert [h["program_name"] for h in body["history"]] == ["Ramadan Food Parcels", "No Program"]
    assert money(body["total_received"]) == money("100000.00")


async def test_beneficiary_history_unknown_beneficiary(client, auth_headers):
    res = await client.get(
        f"/api/v1/reports/beneficiary-history/{uuid4()}", headers=auth_headers(),
    )
    assert res.status_code == 404
