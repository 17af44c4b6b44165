from decimal import Decimal


async def _pay(client, headers, order_id, amount, payment_type="Initial Advance", day="2026-01-10"):
    res = await client.post(
        "/payments",
        json={"order_id": order_id, "payment_type": payment_type, "amount": amount, "date": day},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    return res.json()["data"]


async def _spend(client, headers, order_id, amount, cost_head="Album", day="2026-01-12"):
    res = await client.post(
        "/expenses",
        json={"order_id": order_id, "cost_head": cost_head, "amount": amount, "date": day},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    return res.json()["data"]


async def test_order_financials(client, auth_headers, make_order):
    order = await make_order()
    order_id = order["id"]

    res = await client.patch(f"/orders/{order_id}", json={"final_budget": "100000"}, headers=auth_headers)
    assert res.status_code == 200

    await _pay(client, auth_headers, order_id, "40000")
    await _spend(client, auth_headers, order_id, "30000")

    order = (await client.get(f"/orders/{order_id}", headers=auth_headers)).json()["data"]
    fin = order["financials"]
    assert Decimal(fin["budget"]) == Decimal("100000")
    assert Decimal(fin["balance"]) == Decimal("60000")
    assert Decimal(fin["profit"]) == Decimal("70000")
    assert Decimal(fin["payment_percentage"]) == Decimal("40")
    assert len(order["payments"]) == 1
    assert len(order["expenses"]) == 1


async def test_overpayment_balance_is_zero(client, auth_headers, make_order):
    order = await make_order(manual_total="10000")

    await _pay(client, auth_headers, order["id"], "15000", "Final Payment")
    await _spend(client, auth_headers, order["id"], "25000", "Printing")

    fin = (await client.get(f"/orders/{order['id']}", headers=auth_headers)).json()["data"]["financials"]
    assert Decimal(fin["balance"]) == Decimal("0")
    assert Decimal(fin["profit"]) == Decimal("-15000")


async def test_workflow_update_drives_status(client, auth_headers, make_order):
    order = await make_order()
    everything_done = {
        "photo_selection": "Yes",
        "album_design": "Yes",
        "album_printing": "Yes",
        "video_editing": "Not needed",
        "outdoor_shoot": "Not needed",
    }

    res = await client.patch(
        f"/orders/{order['id']}", json={"workflow_status": everything_done}, headers=auth_headers
    )
    data = res.json()["data"]
    assert data["workflow_status"]["album_delivery"] == "No"
    assert data["status"] == "pending"

    res = await client.patch(
        f"/orders/{order['id']}", json={"workflow_status": {"album_delivery": "Yes"}}, headers=auth_headers
    )
    assert res.json()["data"]["status"] == "completed"

    res = await client.get("/orders", params={"status": "completed"}, headers=auth_headers)
    assert res.json()["data"]["total"] == 1
    res = await client.get("/orders", params={"status": "pending"}, headers=auth_headers)
    assert res.json()["data"]["total"] == 0


async def test_invalid_workflow_value_rejected(client, auth_headers, make_order):
    order = await make_order()
    res = await client.patch(
        f"/orders/{order['id']}", json={"workflow_status": {"album_design": "Maybe"}}, headers=auth_headers
    )
    assert res.status_code == 422
    assert res.json()["error_code"] == "VALIDATION_ERROR"


async def test_negative_amounts_rejected(client, auth_headers, make_order):
    order = await make_order()
    res = await client.post(
        "/payments",
        json={"order_id": order["id"], "payment_type": "Initial Advance", "amount": "-1", "date": "2026-01-10"},
        headers=auth_headers,
    )
    assert res.status_code == 422


async def test_ledger_for_unknown_order_is_404(client, auth_headers):
    res = await client.post(
        "/expenses",
        json={"order_id": 404, "cost_head": "Travel", "amount": "100", "date": "2026-01-12"},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["error_code"] == "ORDER_NOT_FOUND"


async def test_payment_crud(client, auth_headers, make_order):
    order = await make_order()
    payment = await _pay(client, auth_headers, order["id"], "5000")

    res = await client.patch(
        f"/payments/{payment['id']}",
        json={"amount": "7500", "payment_type": "Function Advance", "notes": "cash"},
        headers=auth_headers,
    )
    data = res.json()["data"]
    assert Decimal(data["amount"]) == Decimal("7500")
    assert data["payment_type"] == "Function Advance"

    res = await client.get("/payments", params={"order_id": order["id"]}, headers=auth_headers)
    assert res.json()["data"]["total"] == 1

    res = await client.delete(f"/payments/{payment['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert (await client.get(f"/payments/{payment['id']}", headers=auth_headers)).status_code == 404


async def test_expense_list_totals(client, auth_headers, make_order):
    order = await make_order()
    first = await _spend(client, auth_headers, order["id"], "1200.50", "Travel")
    await _spend(client, auth_headers, order["id"], "800", "Food")

    res = await client.get("/expenses", params={"order_id": order["id"]}, headers=auth_headers)
    data = res.json()["data"]
    assert data["total"] == 2
    assert Decimal(data["total_amount"]) == Decimal("2000.50")

    res = await client.patch(f"/expenses/{first['id']}", json={"vendor_name": "Cabs"}, headers=auth_headers)
    assert res.json()["data"]["vendor_name"] == "Cabs"

    await client.delete(f"/expenses/{first['id']}", headers=auth_headers)
    res = await client.get("/expenses", params={"order_id": order["id"]}, headers=auth_headers)
    assert Decimal(res.json()["data"]["total_amount"]) == Decimal("800")


async def test_order_pdf(client, auth_headers, make_order):
    order = await make_order()
    await _pay(client, auth_headers, order["id"], "5000")

    res = await client.get(f"/orders/{order['id']}/pdf", headers=auth_headers)
    assert res.status_code == 200
    assert res.content.startswith(b"%PDF")


async def test_activity_log_records_actions(client, auth_headers, make_order):
    order = await make_order()

    res = await client.get("/activities", params={"search": order["order_number"]}, headers=auth_headers)
    messages = [a["message"] for a in res.json()["data"]["items"]]
    assert any("created from quotation" in m for m in messages)
