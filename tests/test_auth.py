import time
from datetime import timedelta

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from app.core import security
from app.core.security import create_access_token
from app.services.auth import auth_service


async def test_routes_require_token(client):
    res = await client.get("/customers")
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["success"] is False


async def test_invalid_and_expired_tokens_rejected(client):
    res = await client.get("/orders", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401

    expired = create_access_token("owner@aurastudio.in", expires_delta=timedelta(seconds=-5))
    res = await client.get("/orders", headers={"Authorization": f"Bearer {expired}"})
    assert res.status_code == 401


async def test_token_for_other_email_rejected(client):
    token = create_access_token("someone@else.in")
    res = await client.get("/customers", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["error_code"] == "EMAIL_NOT_ALLOWED"


async def test_me(client, auth_headers):
    res = await client.get("/auth/me", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"]["email"] == "owner@aurastudio.in"


def _fake_google(claims):
    async def verify(_token):
        return claims
    return verify


async def test_google_login_issues_session(client, monkeypatch):
    monkeypatch.setattr(
        auth_service,
        "verify_google_id_token",
        _fake_google({"email": "OWNER@aurastudio.in", "email_verified": True, "name": "Owner"}),
    )

    res = await client.post("/auth/google", json={"id_token": "google-token"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["email"] == "owner@aurastudio.in"

    res = await client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert res.status_code == 200


@pytest.mark.parametrize(
    "claims",
    [
        {"email": "intruder@gmail.com", "email_verified": True},
        {"email": "owner@aurastudio.in", "email_verified": False},
    ],
)
async def test_google_login_rejected(client, monkeypatch, claims):
    monkeypatch.setattr(auth_service, "verify_google_id_token", _fake_google(claims))

    res = await client.post("/auth/google", json={"id_token": "google-token"})
    assert res.status_code == 401


@pytest.fixture
def google_keys(monkeypatch):
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk["kid"] = "test-key"

    async def fake_jwks(force_refresh=False):
        return {"keys": [public_jwk]}

    monkeypatch.setattr(security, "_get_google_jwks", fake_jwks)
    return private_pem


def _google_token(private_pem, **overrides):
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": "test-client-id",
        "sub": "1234567890",
        "email": "owner@aurastudio.in",
        "email_verified": True,
        "iat": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": "test-key"})


async def test_verify_google_id_token(google_keys):
    claims = await security.verify_google_id_token(_google_token(google_keys))
    assert claims["email"] == "owner@aurastudio.in"


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "another-client"},
        {"iss": "https://evil.example"},
        {"exp": int(time.time()) - 60},
    ],
)
async def test_verify_google_id_token_rejects_bad_claims(google_keys, overrides):
    with pytest.raises(security.AppException) as exc:
        await security.verify_google_id_token(_google_token(google_keys, **overrides))
    assert exc.value.status_code == 401
