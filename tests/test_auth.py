from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

from conftest import auth

from app.models import User


def test_register_and_login_return_token_and_role(client):
    r = client.post(
        "/api/auth/register",
        json={"email": "Owner@Example.com", "password": "pw-123456", "role": "landlord", "name": "Olive", "id_number": "998877"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["role"] == "landlord"
    assert body["token"]
    assert body["user"]["email"] == "owner@example.com"

    r = client.post("/api/auth/login", json={"email": "owner@example.com", "password": "pw-123456"})
    assert r.status_code == 200
    token = r.json()["token"]
    me = client.get("/api/auth/me", headers=auth(token)).json()
    assert me["role"] == "landlord"
    assert me["ref_id"] is not None


def test_duplicate_email_rejected(client, register):
    register("dup@example.com", "tenant")
    r = client.post(
        "/api/auth/register",
        json={"email": "dup@example.com", "password": "x-123456", "role": "landlord", "name": "D", "id_number": "1"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Email already registered"}


def test_register_requires_name_and_id_number(client):
    r = client.post("/api/auth/register", json={"email": "a@example.com", "password": "pw-123456", "role": "tenant"})
    assert r.status_code == 400
    assert r.json()["error"] == "Name and ID number are required"


def test_invalid_payload_is_400_with_error_body(client):
    r = client.post("/api/auth/register", json={"email": "not-an-email", "password": "pw", "role": "tenant"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_wrong_password_rejected(client, register):
    register("t@example.com", "tenant")
    r = client.post("/api/auth/login", json={"email": "t@example.com", "password": "wrong"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid credentials"


def test_missing_and_invalid_token(client):
    assert client.get("/api/auth/me").status_code == 401
    r = client.get("/api/auth/me", headers=auth("garbage"))
    assert r.status_code == 401
    assert r.json()["error"] == "Token is not valid"


def test_tenant_registration_links_landlord_created_profile(client, landlord):
    r = client.post(
        "/api/landlords/tenants",
        json={"name": "Tina", "id_number": "555", "email": "tina@example.com"},
        headers=auth(landlord),
    )
    tenant_id = r.json()["id"]
    r = client.post(
        "/api/auth/register",
        json={"email": "tina@example.com", "password": "pw-123456", "role": "tenant", "name": "Tina", "id_number": "555"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["ref_id"] == tenant_id


def test_password_reset_flow(client, register):
    register("reset@example.com", "tenant")
    r = client.post("/api/auth/forgot", json={"email": "reset@example.com"})
    assert r.status_code == 200
    reset_url = r.json()["reset_url"]
    token = parse_qs(urlparse(reset_url).query)["token"][0]

    r = client.post("/api/auth/reset", json={"email": "reset@example.com", "token": "nope", "password": "new-pass-1"})
    assert r.status_code == 400

    r = client.post("/api/auth/reset", json={"email": "reset@example.com", "token": token, "password": "new-pass-1"})
    assert r.status_code == 200
    assert client.post("/api/auth/login", json={"email": "reset@example.com", "password": "new-pass-1"}).status_code == 200
    # Tokens are single use
    r = client.post("/api/auth/reset", json={"email": "reset@example.com", "token": token, "password": "again-1"})
    assert r.status_code == 400


def test_expired_reset_token_rejected(client, register, db):
    register("late@example.com", "tenant")
    reset_url = client.post("/api/auth/forgot", json={"email": "late@example.com"}).json()["reset_url"]
    token = parse_qs(urlparse(reset_url).query)["token"][0]
    user = db.query(User).filter(User.email == "late@example.com").first()
    user.password_reset_expires = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    r = client.post("/api/auth/reset", json={"email": "late@example.com", "token": token, "password": "new-pass-1"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid or expired reset token"


def test_forgot_unknown_email_does_not_leak(client):
    r = client.post("/api/auth/forgot", json={"email": "ghost@example.com"})
    assert r.status_code == 200
    assert r.json()["reset_url"] is None
