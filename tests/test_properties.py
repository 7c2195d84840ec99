from conftest import auth

from app.models import Apartment, Notice, Payment, Ticket, User


def test_estate_requires_name(client, landlord):
    r = client.post("/api/landlords/estates", json={"address": "nowhere"}, headers=auth(landlord))
    assert r.status_code == 400
    assert r.json()["error"] == "name required"


def test_apartment_requires_number_and_own_estate(client, register, landlord, estate_with_apartment):
    estate_id, _ = estate_with_apartment
    r = client.post(f"/api/landlords/estates/{estate_id}/apartments", json={"rent": 5}, headers=auth(landlord))
    assert r.status_code == 400

    other = register("other@example.com", "landlord")
    r = client.post(f"/api/landlords/estates/{estate_id}/apartments", json={"number": "B1"}, headers=auth(other))
    assert r.status_code == 403
    assert client.post("/api/landlords/estates/999/apartments", json={"number": "B1"}, headers=auth(landlord)).status_code == 404


def test_landlord_profile_lists_estates(client, landlord, estate_with_apartment):
    me = client.get("/api/landlords/me", headers=auth(landlord)).json()
    assert [e["name"] for e in me["estates"]] == ["Green Court"]

    r = client.patch("/api/landlords/me", json={"phone": "0700111222", "name": None}, headers=auth(landlord))
    assert r.status_code == 200
    assert r.json()["phone"] == "0700111222"
    assert r.json()["name"] == "landlord"


def test_delete_estate_checks_owner(client, register, estate_with_apartment):
    estate_id, _ = estate_with_apartment
    other = register("other@example.com", "landlord")
    r = client.delete(f"/api/landlords/estates/{estate_id}", headers=auth(other))
    assert r.status_code == 403
    assert r.json()["error"] == "Not your estate"
    assert client.delete("/api/landlords/estates/999", headers=auth(other)).status_code == 404


def test_delete_estate_cascades(client, db, landlord, occupied_apartment):
    estate_id, apartment_id, tenant_id = occupied_apartment
    client.post(
        "/api/landlords/notices",
        json={"estate": estate_id, "title": "Water", "message": "Off on Monday"},
        headers=auth(landlord),
    )
    client.post("/api/payments/", json={"tenant": tenant_id, "apartment": apartment_id, "amount": 1000}, headers=auth(landlord))

    r = client.delete(f"/api/landlords/estates/{estate_id}", headers=auth(landlord))
    assert r.status_code == 200
    assert db.query(Apartment).count() == 0
    assert db.query(Notice).count() == 0
    payment = db.query(Payment).one()
    assert payment.apartment_id is None
    assert payment.tenant_id == tenant_id


def test_delete_apartment_keeps_history(client, db, landlord, tenant, occupied_apartment):
    _, apartment_id, _ = occupied_apartment
    client.post("/api/tenants/tickets", json={"description": "Broken window"}, headers=auth(tenant))
    r = client.delete(f"/api/landlords/apartments/{apartment_id}", headers=auth(landlord))
    assert r.status_code == 200
    ticket = db.query(Ticket).one()
    assert ticket.apartment_id is None
    assert client.delete(f"/api/landlords/apartments/{apartment_id}", headers=auth(landlord)).status_code == 404


def test_assign_tenant_moves_between_apartments(client, db, landlord, occupied_apartment):
    estate_id, first_id, tenant_id = occupied_apartment
    second_id = client.post(
        f"/api/landlords/estates/{estate_id}/apartments", json={"number": "A2"}, headers=auth(landlord)
    ).json()["id"]

    r = client.post(f"/api/landlords/apartments/{second_id}/assign-tenant", json={"tenant_id": tenant_id}, headers=auth(landlord))
    assert r.status_code == 200
    assert r.json()["tenant_id"] == tenant_id
    assert db.get(Apartment, first_id).tenant_id is None


def test_assign_tenant_errors(client, landlord, estate_with_apartment):
    _, apartment_id = estate_with_apartment
    r = client.post(f"/api/landlords/apartments/{apartment_id}/assign-tenant", json={}, headers=auth(landlord))
    assert r.status_code == 400
    r = client.post(f"/api/landlords/apartments/{apartment_id}/assign-tenant", json={"tenant_id": 42}, headers=auth(landlord))
    assert r.status_code == 404
    r = client.post("/api/landlords/apartments/999/assign-tenant", json={"tenant_id": 1}, headers=auth(landlord))
    assert r.status_code == 404


def test_tenant_sees_apartment_and_estate(client, tenant, occupied_apartment):
    _, apartment_id, _ = occupied_apartment
    me = client.get("/api/tenants/me", headers=auth(tenant)).json()
    assert me["apartment"]["id"] == apartment_id
    assert me["apartment"]["estate"]["name"] == "Green Court"


def test_create_tenant_requires_name_and_id(client, landlord):
    r = client.post("/api/landlords/tenants", json={"name": "No Id"}, headers=auth(landlord))
    assert r.status_code == 400
    r = client.post("/api/landlords/tenants", json={"name": "Pat", "id_number": "77"}, headers=auth(landlord))
    assert r.status_code == 201
    assert r.json()["vacate_status"] == "none"


def test_delete_tenant_unlinks_everything(client, db, landlord, tenant, occupied_apartment):
    _, apartment_id, tenant_id = occupied_apartment
    client.post("/api/tenants/tickets", json={"description": "Leak"}, headers=auth(tenant))

    r = client.delete(f"/api/landlords/tenants/{tenant_id}", headers=auth(landlord))
    assert r.status_code == 200
    assert db.get(Apartment, apartment_id).tenant_id is None
    assert db.query(Ticket).one().tenant_id is None
    assert db.query(User).filter(User.email == "tenant@example.com").one().ref_id is None
    assert client.get("/api/tenants/me", headers=auth(tenant)).status_code == 404


def test_tenant_list_shows_latest_payments(client, landlord, occupied_apartment):
    _, apartment_id, tenant_id = occupied_apartment
    for day in range(1, 13):
        client.post(
            "/api/payments/",
            json={"tenant": tenant_id, "apartment": apartment_id, "amount": day, "date": f"2024-01-{day:02d}T00:00:00"},
            headers=auth(landlord),
        )
    rows = client.get("/api/landlords/tenants", headers=auth(landlord)).json()
    assert len(rows) == 1
    amounts = [p["amount"] for p in rows[0]["payments"]]
    assert amounts == [float(d) for d in range(12, 2, -1)]
    assert rows[0]["apartment"]["id"] == apartment_id


def test_vacate_notice_and_approval(client, landlord, tenant, occupied_apartment):
    _, _, tenant_id = occupied_apartment
    assert client.post("/api/tenants/vacate", headers=auth(tenant)).status_code == 200
    me = client.get("/api/tenants/me", headers=auth(tenant)).json()
    assert me["vacate_status"] == "pending"
    assert me["vacate_date"]

    r = client.patch(
        f"/api/landlords/tenants/{tenant_id}/vacate",
        json={"vacate_status": "approved", "deposit_refunded": True},
        headers=auth(landlord),
    )
    assert r.status_code == 200
    assert r.json()["vacate_status"] == "approved"
    assert r.json()["deposit_refunded"] is True
