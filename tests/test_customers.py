async def test_customer_crud(client, auth_headers, make_customer):
    customer = await make_customer()
    assert customer["email"] is None
    assert customer["customer_code"].startswith("CUST-NAV")

    res = await client.patch(
        f"/customers/{customer['id']}",
        json={"email": "naveen@gmail.com", "location": "SSM Mahal"},
        headers=auth_headers,
    )
    data = res.json()["data"]
    assert data["email"] == "naveen@gmail.com"
    assert data["location"] == "SSM Mahal"

    res = await client.get("/customers", params={"search": "9876"}, headers=auth_headers)
    assert res.json()["data"]["total"] == 1

    res = await client.delete(f"/customers/{customer['id']}", headers=auth_headers)
    assert res.status_code == 200
    assert (await client.get(f"/customers/{customer['id']}", headers=auth_headers)).status_code == 404


async def test_customer_validation(client, auth_headers):
    res = await client.post("/customers", json={"name": "", "phone": "123"}, headers=auth_headers)
    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["error_code"] == "VALIDATION_ERROR"


async def test_customer_with_quotation_cannot_be_deleted(client, auth_headers, make_quotation):
    q = await make_quotation()
    res = await client.delete(f"/customers/{q['customer_id']}", headers=auth_headers)
    assert res.status_code == 409
    assert res.json()["error_code"] == "CUSTOMER_HAS_QUOTATIONS"


async def test_health(client):
    res = await client.get("/")
    assert res.json()["status"] == "ok"
