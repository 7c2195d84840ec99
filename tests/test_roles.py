import pytest
from conftest import auth


@pytest.mark.parametrize(
    "method,path",
    [
        ("post", "/api/landlords/estates"),
        ("get", "/api/landlords/tenants"),
        ("get", "/api/admin/backup"),
        ("post", "/api/payments/"),
        ("get", "/api/tickets/"),
        ("get", "/api/reports/summary"),
    ],
)
def test_tenant_cannot_reach_landlord_endpoints(client, tenant, method, path):
    r = getattr(client, method)(path, headers=auth(tenant), **({"json": {}} if method == "post" else {}))
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}


@pytest.mark.parametrize("path", ["/api/tenants/me", "/api/tenants/payments", "/api/tenants/tickets"])
def test_landlord_cannot_reach_tenant_endpoints(client, landlord, path):
    assert client.get(path, headers=auth(landlord)).status_code == 403


def test_mpesa_is_tenant_only(client, landlord):
    r = client.post("/api/payments/mpesa/initiate", json={"amount": 10, "phone": "254700"}, headers=auth(landlord))
    assert r.status_code == 403


@pytest.mark.parametrize("path", ["/api/landlords/me", "/api/tenants/me", "/api/reports/summary", "/api/notices/estate/1"])
def test_no_token_is_401(client, path):
    r = client.get(path)
    assert r.status_code == 401
    assert r.json() == {"error": "No token, authorization denied"}


def test_caretaker_me_is_caretaker_only(client, landlord):
    assert client.get("/api/landlords/caretakers/me", headers=auth(landlord)).status_code == 403


def test_public_and_health_need_no_token(client, estate_with_apartment):
    estate_id, apartment_id = estate_with_apartment
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/api/health").json() == {"status": "ok", "db_state": 1}
    assert client.get("/api/public/estates").json() == [{"id": estate_id, "name": "Green Court"}]
    assert client.get(f"/api/public/estates/{estate_id}/apartments").json() == [{"id": apartment_id, "number": "A1"}]
