from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

from openpyxl import load_workbook

from app.services.reports.report_service import period_bounds


def _created_on(order) -> date:
    return datetime.fromisoformat(order["created_at"]).date()


async def _seed(client, headers, make_order, make_customer):
    wedding = await make_order(manual_total="100000")
    customer = await make_customer(name="Priya", phone="9123456780", event_type="Baby Shower")
    shower = await make_order(customer_id=customer["id"], manual_total="20000")

    on = _created_on(wedding)
    last_year = date(on.year - 1, 6, 1)

    for order_id, amount, day in (
        (wedding["id"], "40000", on),
        (wedding["id"], "10000", last_year),
        (shower["id"], "5000", on),
    ):
        res = await client.post(
            "/payments",
            json={"order_id": order_id, "payment_type": "Initial Advance", "amount": amount, "date": day.isoformat()},
            headers=headers,
        )
        assert res.status_code == 200

    res = await client.post(
        "/expenses",
        json={"order_id": wedding["id"], "cost_head": "Album", "amount": "30000", "date": on.isoformat()},
        headers=headers,
    )
    assert res.status_code == 200

    await client.patch(
        f"/orders/{shower['id']}",
        json={"workflow_status": {f: "Yes" for f in (
            "photo_selection", "album_design", "album_printing",
            "video_editing", "outdoor_shoot", "album_delivery",
        )}},
        headers=headers,
    )
    return wedding, shower, on


def test_period_bounds():
    assert period_bounds("monthly", date(2026, 12, 15)) == (date(2026, 12, 1), date(2027, 1, 1))
    assert period_bounds("monthly", date(2026, 2, 3)) == (date(2026, 2, 1), date(2026, 3, 1))
    assert period_bounds("yearly", date(2026, 2, 3)) == (date(2026, 1, 1), date(2027, 1, 1))


async def test_dashboard(client, auth_headers, make_order, make_customer):
    _, _, on = await _seed(client, auth_headers, make_order, make_customer)

    res = await client.get("/reports/dashboard", params={"on": on.isoformat()}, headers=auth_headers)
    stats = res.json()["data"]

    assert stats["total_orders"] == 2
    assert stats["pending_orders"] == 1
    assert stats["completed_orders"] == 1
    assert Decimal(stats["monthly_revenue"]) == Decimal("45000")
    assert Decimal(stats["yearly_revenue"]) == Decimal("45000")
    # wedding 100000 - 30000, shower 20000 - 0
    assert Decimal(stats["total_profit"]) == Decimal("90000")
    # wedding 100000 - 50000, shower 20000 - 5000
    assert Decimal(stats["total_balance"]) == Decimal("65000")


async def test_financial_report_by_category(client, auth_headers, make_order, make_customer):
    wedding, _, on = await _seed(client, auth_headers, make_order, make_customer)

    res = await client.get(
        "/reports/financial",
        params={"period": "yearly", "on": on.isoformat()},
        headers=auth_headers,
    )
    report = res.json()["data"]
    assert len(report["rows"]) == 2
    assert Decimal(report["total_amount"]) == Decimal("120000")

    res = await client.get(
        "/reports/financial",
        params={"period": "monthly", "category": "Wedding", "on": on.isoformat()},
        headers=auth_headers,
    )
    rows = res.json()["data"]["rows"]
    assert len(rows) == 1
    assert rows[0]["order_number"] == wedding["order_number"]
    assert Decimal(rows[0]["expenses"]) == Decimal("30000")
    assert Decimal(rows[0]["profit"]) == Decimal("70000")


async def test_financial_report_other_period_is_empty(client, auth_headers, make_order, make_customer):
    _, _, on = await _seed(client, auth_headers, make_order, make_customer)

    res = await client.get(
        "/reports/financial",
        params={"period": "yearly", "on": date(on.year - 1, 1, 1).isoformat()},
        headers=auth_headers,
    )
    assert res.json()["data"]["rows"] == []


async def test_report_excel(client, auth_headers, make_order, make_customer):
    wedding, _, on = await _seed(client, auth_headers, make_order, make_customer)

    res = await client.get(
        "/reports/financial/excel",
        params={"period": "yearly", "on": on.isoformat()},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert "spreadsheetml" in res.headers["content-type"]

    wb = load_workbook(BytesIO(res.content))
    ws = wb["Report"]
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == ["Order ID", "Customer", "Event Type", "Amount", "Expenses", "Profit", "Date"]
    # header, two orders, a blank spacer, then the totals
    assert len(rows) == 5
    assert wedding["order_number"] in [r[0] for r in rows[1:3]]
    assert all(v is None for v in rows[3])
    assert list(rows[4]) == ["TOTAL", None, None, 120000, 30000, 90000, None]


async def test_report_pdf(client, auth_headers, make_order, make_customer):
    _, _, on = await _seed(client, auth_headers, make_order, make_customer)

    res = await client.get(
        "/reports/financial/pdf",
        params={"period": "monthly", "on": on.isoformat()},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.content.startswith(b"%PDF")
