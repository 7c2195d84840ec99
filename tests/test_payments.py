from conftest import auth

from app.models import Notice, NoticeType


def test_mpesa_requires_amount_and_phone(client, tenant):
    r = client.post("/api/payments/mpesa/initiate", json={"amount": 500}, headers=auth(tenant))
    assert r.status_code == 400
    assert r.json()["error"] == "Amount and phone required"


def test_mpesa_success_marks_paid(client, tenant, occupied_apartment):
    _, apartment_id, tenant_id = occupied_apartment
    r = client.post("/api/payments/mpesa/initiate", json={"amount": 1000, "phone": "254700000001"}, headers=auth(tenant))
    assert r.status_code == 201
    started = r.json()
    assert started["checkout_request_id"].startswith("CHK_")

    r = client.post("/api/payments/mpesa/complete", json={"payment_id": started["payment_id"], "success": True}, headers=auth(tenant))
    assert r.status_code == 200
    paid = r.json()
    assert paid["status"] == "paid"
    assert paid["method"] == "mpesa"
    assert paid["mpesa_receipt"].startswith("RCP")
    assert paid["mpesa_result_code"] == "0"
    assert paid["apartment_id"] == apartment_id
    assert paid["tenant_id"] == tenant_id


def test_mpesa_failure_stays_pending(client, tenant, occupied_apartment):
    payment_id = client.post(
        "/api/payments/mpesa/initiate", json={"amount": 1000, "phone": "254700000001"}, headers=auth(tenant)
    ).json()["payment_id"]
    r = client.post("/api/payments/mpesa/complete", json={"payment_id": payment_id, "success": False}, headers=auth(tenant))
    body = r.json()
    assert body["status"] == "pending"
    assert body["mpesa_result_code"] == "1"
    assert body["mpesa_result_desc"] == "Failed"
    assert body["mpesa_receipt"] is None


def test_mpesa_complete_only_own_payment(client, register, tenant):
    payment_id = client.post(
        "/api/payments/mpesa/initiate", json={"amount": 10, "phone": "254700000001"}, headers=auth(tenant)
    ).json()["payment_id"]
    intruder = register("other-tenant@example.com", "tenant")
    r = client.post("/api/payments/mpesa/complete", json={"payment_id": payment_id, "success": True}, headers=auth(intruder))
    assert r.status_code == 403
    r = client.post("/api/payments/mpesa/complete", json={"payment_id": 999, "success": True}, headers=auth(tenant))
    assert r.status_code == 404


def test_landlord_records_and_updates_payment(client, landlord, tenant, occupied_apartment):
    _, apartment_id, tenant_id = occupied_apartment
    r = client.post("/api/payments/", json={"tenant": tenant_id, "apartment": apartment_id, "amount": 750}, headers=auth(landlord))
    assert r.status_code == 201
    payment = r.json()
    assert payment["status"] == "pending"

    r = client.put(f"/api/payments/{payment['id']}", json={"status": "late"}, headers=auth(landlord))
    assert r.status_code == 200
    assert r.json()["status"] == "late"
    assert r.json()["amount"] == 750
    assert client.put("/api/payments/999", json={"status": "paid"}, headers=auth(landlord)).status_code == 404

    mine = client.get("/api/tenants/payments", headers=auth(tenant)).json()
    assert [p["id"] for p in mine] == [payment["id"]]
    by_apartment = client.get(f"/api/landlords/apartments/{apartment_id}/payments", headers=auth(landlord)).json()
    assert [p["id"] for p in by_apartment] == [payment["id"]]
    by_tenant = client.get(f"/api/landlords/tenants/{tenant_id}/payments", headers=auth(landlord)).json()
    assert [p["id"] for p in by_tenant] == [payment["id"]]


def test_rent_reminder_notifies_occupied_apartments(client, db, landlord, tenant, occupied_apartment):
    estate_id, _, tenant_id = occupied_apartment
    client.post(f"/api/landlords/estates/{estate_id}/apartments", json={"number": "Empty"}, headers=auth(landlord))

    r = client.post("/api/payments/reminders/estate", json={"estate_id": estate_id}, headers=auth(landlord))
    assert r.status_code == 200
    assert r.json() == {"sent": 1}
    notice = db.query(Notice).one()
    assert notice.type == NoticeType.rent_reminder
    assert notice.tenant_id == tenant_id
    assert notice.title == "Rent Reminder"

    board = client.get(f"/api/notices/estate/{estate_id}", headers=auth(tenant)).json()
    assert board[0]["type"] == "rent-reminder"


def test_rent_reminder_errors(client, register, landlord, estate_with_apartment):
    estate_id, _ = estate_with_apartment
    assert client.post("/api/payments/reminders/estate", json={}, headers=auth(landlord)).status_code == 400
    assert client.post("/api/payments/reminders/estate", json={"estate_id": 999}, headers=auth(landlord)).status_code == 404
    other = register("other@example.com", "landlord")
    assert client.post("/api/payments/reminders/estate", json={"estate_id": estate_id}, headers=auth(other)).status_code == 403


def test_summary_report(client, landlord, tenant, occupied_apartment):
    estate_id, apartment_id, tenant_id = occupied_apartment
    client.post(f"/api/landlords/estates/{estate_id}/apartments", json={"number": "A2"}, headers=auth(landlord))
    client.post(
        "/api/payments/",
        json={"tenant": tenant_id, "apartment": apartment_id, "amount": 1000, "status": "paid"},
        headers=auth(landlord),
    )
    client.post("/api/payments/", json={"tenant": tenant_id, "apartment": apartment_id, "amount": 250}, headers=auth(landlord))

    r = client.get("/api/reports/summary", headers=auth(landlord))
    assert r.status_code == 200
    assert r.json() == {
        "occupancy": {"total": 2, "occupied": 1, "vacant": 1},
        "revenue": {"collected": 1000.0, "pending": 250.0},
    }


def test_recorded_payment_needs_known_tenant_and_own_apartment(client, register, landlord, occupied_apartment):
    _, apartment_id, tenant_id = occupied_apartment
    r = client.post("/api/payments/", json={"tenant": 999, "apartment": apartment_id, "amount": 10}, headers=auth(landlord))
    assert r.status_code == 404
    assert r.json()["error"] == "Tenant not found"
    r = client.post("/api/payments/", json={"tenant": tenant_id, "apartment": 999, "amount": 10}, headers=auth(landlord))
    assert r.status_code == 404
    assert r.json()["error"] == "Apartment not found"

    other = register("other@example.com", "landlord")
    r = client.post("/api/payments/", json={"tenant": tenant_id, "apartment": apartment_id, "amount": 10}, headers=auth(other))
    assert r.status_code == 403
