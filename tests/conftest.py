import os
import tempfile

# Configure before any app import: settings are read once and cached
_TMP = tempfile.mkdtemp(prefix="rms-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")
os.environ["ENABLE_DEV_ROUTES"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
for _key in (
    "MAILGUN_API_KEY",
    "MAILGUN_DOMAIN",
    "SENDGRID_API_KEY",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM_PHONE_NUMBER",
):
    os.environ[_key] = ""

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """register(email, role, **extra) -> token"""

    def _register(email: str, role: str, **extra) -> str:
        body = {
            "email": email,
            "password": "secret-pass-1",
            "role": role,
            "name": extra.pop("name", email.split("@")[0]),
            "id_number": extra.pop("id_number", "12345678"),
        }
        body.update(extra)
        r = client.post("/api/auth/register", json=body)
        assert r.status_code == 201, r.text
        return r.json()["token"]

    return _register


@pytest.fixture
def landlord(register):
    return register("landlord@example.com", "landlord")


@pytest.fixture
def tenant(register):
    return register("tenant@example.com", "tenant")


@pytest.fixture
def estate_with_apartment(client, landlord):
    """(estate_id, apartment_id) owned by the `landlord` fixture."""
    r = client.post("/api/landlords/estates", json={"name": "Green Court", "address": "1 Main St"}, headers=auth(landlord))
    assert r.status_code == 201, r.text
    estate_id = r.json()["id"]
    r = client.post(
        f"/api/landlords/estates/{estate_id}/apartments",
        json={"number": "A1", "rent": 1000, "deposit": 2000},
        headers=auth(landlord),
    )
    assert r.status_code == 201, r.text
    return estate_id, r.json()["id"]


@pytest.fixture
def occupied_apartment(client, landlord, tenant, estate_with_apartment):
    """(estate_id, apartment_id, tenant_id) with the `tenant` fixture assigned."""
    estate_id, apartment_id = estate_with_apartment
    tenant_id = client.get("/api/tenants/me", headers=auth(tenant)).json()["id"]
    r = client.post(
        f"/api/landlords/apartments/{apartment_id}/assign-tenant",
        json={"tenant_id": tenant_id},
        headers=auth(landlord),
    )
    assert r.status_code == 200, r.text
    return estate_id, apartment_id, tenant_id
