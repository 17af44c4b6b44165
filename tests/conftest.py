import os
import tempfile
from datetime import date

_tmp_dir = tempfile.mkdtemp(prefix="studio-tests-")

os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.db"
os.environ["JWT_ACCESS_SECRET_KEY"] = "test-secret"
os.environ["ADMIN_EMAIL"] = "Owner@AuraStudio.in"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import ADMIN_EMAIL
from app.core.db import AsyncSessionLocal, engine, reset_models
from app.core.security import create_access_token
from main import app


@pytest.fixture
async def db_ready():
    await reset_models()
    yield
    await engine.dispose()


@pytest.fixture
async def client(db_ready):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def session(db_ready):
    async with AsyncSessionLocal() as s:
        yield s


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(ADMIN_EMAIL)}"}


@pytest.fixture
def make_customer(client, auth_headers):
    async def _make(**overrides):
        payload = {
            "name": "Naveen B T",
            "phone": "9876543210",
            "email": "",
            "event_type": "Wedding",
            "event_date_start": "2026-01-30",
            "event_date_end": "2026-01-31",
            "location": "Cauvery Mahal",
        }
        payload.update(overrides)
        res = await client.post("/customers", json=payload, headers=auth_headers)
        assert res.status_code == 200, res.text
        return res.json()["data"]

    return _make


@pytest.fixture
def make_quotation(client, auth_headers, make_customer):
    async def _make(customer_id=None, **overrides):
        if customer_id is None:
            customer_id = (await make_customer())["id"]
        payload = {
            "customer_id": customer_id,
            "services": {
                "photography": [
                    {"type": "Traditional", "stage": "Stage", "camera_count": 2, "rate": "20000"},
                ],
                "videography": [
                    {"type": "Candid", "stage": "Reception", "camera_count": 1, "rate": "30000"},
                ],
                "additional": [
                    {"name": "LED Wall", "rate": "5000", "quantity": 3},
                ],
            },
        }
        payload.update(overrides)
        res = await client.post("/quotations", json=payload, headers=auth_headers)
        assert res.status_code == 200, res.text
        return res.json()["data"]

    return _make


@pytest.fixture
def make_order(client, auth_headers, make_quotation):
    async def _make(**overrides):
        q = await make_quotation(**overrides)
        res = await client.post(f"/quotations/{q['id']}/confirm", headers=auth_headers)
        assert res.status_code == 200, res.text
        order_id = res.json()["data"]["order_id"]
        res = await client.get(f"/orders/{order_id}", headers=auth_headers)
        return res.json()["data"]

    return _make


@pytest.fixture
def today():
    return date.today()
