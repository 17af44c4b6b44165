import re
from decimal import Decimal

from sqlalchemy import func, select

from app.models.billing.order_models import Order
from app.models.billing.payment_models import Payment
from app.models.billing.quotation_models import Quotation
from app.services.billing import numbering


async def test_create_quotation_prices_and_numbers(make_quotation, make_customer):
    customer = await make_customer()
    q = await make_quotation(customer_id=customer["id"])

    assert q["status"] == "Pending"
    assert Decimal(q["customer_total"]) == Decimal("55000")
    assert Decimal(q["total"]) == Decimal("55000")
    assert q["quotation_number"].startswith("Q-AKP-")
    assert q["quotation_number"].endswith("-0001")
    # event details fall back to what the customer intake captured
    assert q["event_type"] == "Wedding"
    assert q["location"] == "Cauvery Mahal"

    second = await make_quotation(customer_id=customer["id"])
    assert second["quotation_number"].endswith("-0002")


async def test_calculate_preview(client, auth_headers):
    res = await client.post(
        "/quotations/calculate",
        json={
            "photography": [{"type": "Candid", "stage": "Stage", "rate": 20000, "camera_count": 5}],
            "additional": [{"name": "Photo Booth", "rate": 5000, "quantity": 3}],
        },
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert Decimal(res.json()["data"]["customer_total"]) == Decimal("25000")


async def test_quotation_for_unknown_customer_is_404(client, auth_headers):
    res = await client.post("/quotations", json={"customer_id": 999}, headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["error_code"] == "CUSTOMER_NOT_FOUND"


async def test_manual_total_overrides_computed(client, auth_headers, make_quotation):
    q = await make_quotation(manual_total="50000")
    assert Decimal(q["total"]) == Decimal("50000")

    res = await client.patch(
        f"/quotations/{q['id']}", json={"manual_total": None}, headers=auth_headers
    )
    assert Decimal(res.json()["data"]["total"]) == Decimal("55000")


async def test_confirm_creates_order_with_budgets(client, auth_headers, make_quotation):
    q = await make_quotation(manual_total="48000")

    res = await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["status"] == "Confirmed"
    assert data["confirmed_at"] is not None
    assert data["order_number"].startswith("ORD-AKP-")

    order = (await client.get(f"/orders/{data['order_id']}", headers=auth_headers)).json()["data"]
    assert Decimal(order["estimated_budget"]) == Decimal("48000")
    assert Decimal(order["final_budget"]) == Decimal("48000")
    assert order["status"] == "pending"
    assert set(order["workflow_status"].values()) == {"No"}


async def test_confirm_twice_reuses_order(client, auth_headers, make_quotation, session):
    q = await make_quotation()

    first = (await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)).json()["data"]
    await client.post(f"/quotations/{q['id']}/reopen", headers=auth_headers)
    second = (await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)).json()["data"]

    assert first["order_id"] == second["order_id"]
    count = await session.scalar(select(func.count(Order.id)))
    assert count == 1


async def test_reopen_keeps_order(client, auth_headers, make_quotation):
    q = await make_quotation()
    confirmed = (await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)).json()["data"]

    res = await client.post(f"/quotations/{q['id']}/reopen", headers=auth_headers)
    data = res.json()["data"]
    assert data["status"] == "Pending"
    assert data["order_id"] == confirmed["order_id"]


async def test_decline_requires_remarks(client, auth_headers, make_quotation):
    q = await make_quotation()

    res = await client.patch(
        f"/quotations/{q['id']}", json={"status": "Declined"}, headers=auth_headers
    )
    assert res.status_code == 422
    assert res.json()["error_code"] == "QUOTATION_REMARKS_REQUIRED"

    res = await client.post(
        f"/quotations/{q['id']}/decline", json={"remarks": "   "}, headers=auth_headers
    )
    assert res.status_code == 422


async def test_decline_removes_order_and_payments(client, auth_headers, make_quotation, session):
    q = await make_quotation()
    confirmed = (await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)).json()["data"]
    order_id = confirmed["order_id"]

    for amount in ("10000", "5000"):
        res = await client.post(
            "/payments",
            json={"order_id": order_id, "payment_type": "Initial Advance", "amount": amount, "date": "2026-01-10"},
            headers=auth_headers,
        )
        assert res.status_code == 200
    await client.post(
        "/expenses",
        json={"order_id": order_id, "cost_head": "Album", "amount": "8000", "date": "2026-01-12"},
        headers=auth_headers,
    )

    res = await client.post(
        f"/quotations/{q['id']}/decline",
        json={"remarks": "Client chose another studio"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["status"] == "Declined"
    assert data["remarks"] == "Client chose another studio"
    assert data["order_id"] is None

    assert (await client.get(f"/orders/{order_id}", headers=auth_headers)).status_code == 404
    assert await session.scalar(select(func.count(Payment.id))) == 0


async def test_changing_manual_total_updates_existing_order(client, auth_headers, make_quotation, session):
    q = await make_quotation()
    confirmed = (await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)).json()["data"]

    res = await client.patch(
        f"/quotations/{q['id']}", json={"manual_total": "60000"}, headers=auth_headers
    )
    assert res.status_code == 200

    order = (await client.get(f"/orders/{confirmed['order_id']}", headers=auth_headers)).json()["data"]
    assert Decimal(order["estimated_budget"]) == Decimal("60000")
    assert Decimal(order["final_budget"]) == Decimal("60000")
    assert await session.scalar(select(func.count(Order.id))) == 1


async def test_list_quotations_filters(client, auth_headers, make_customer, make_quotation):
    naveen = await make_customer()
    priya = await make_customer(name="Priya", phone="9123456780")
    await make_quotation(customer_id=naveen["id"])
    q = await make_quotation(customer_id=priya["id"])
    await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)

    res = await client.get("/quotations", params={"status": "Confirmed"}, headers=auth_headers)
    data = res.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["customer_name"] == "Priya"

    res = await client.get("/quotations", params={"search": "naveen"}, headers=auth_headers)
    assert res.json()["data"]["total"] == 1


async def test_quotation_pdf(client, auth_headers, make_quotation):
    q = await make_quotation(deliverables={"digital": {"allImagesJPEG": True}, "numberOfAlbums": 2})

    res = await client.get(f"/quotations/{q['id']}/pdf", headers=auth_headers)
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert res.content.startswith(b"%PDF")
    assert q["quotation_number"] in res.headers["content-disposition"]


async def test_quotation_options(client, auth_headers):
    res = await client.get("/quotations/options", headers=auth_headers)
    data = res.json()["data"]
    assert "Wedding" in data["event_types"]
    assert data["shoot_types"] == ["Traditional", "Candid"]


async def test_number_collision_retries_with_suffix(monkeypatch, make_quotation, session):
    first = await make_quotation()
    taken = first["quotation_number"]

    async def stale_scan(db, column, prefix, now=None):
        return taken

    monkeypatch.setattr(numbering, "next_sequence_number", stale_scan)

    second = await make_quotation(customer_id=first["customer_id"])
    assert re.fullmatch(rf"{re.escape(taken)}-[0-9A-F]{{4}}", second["quotation_number"])

    numbers = set((await session.scalars(select(Quotation.quotation_number))).all())
    assert numbers == {taken, second["quotation_number"]}
