from conftest import auth

from app.models import Estate


def _backup(client, token):
    r = client.get("/api/admin/backup", headers=auth(token))
    assert r.status_code == 200
    return r


def test_backup_is_attachment_with_every_model(client, landlord, occupied_apartment):
    r = _backup(client, landlord)
    assert 'attachment; filename="rms-backup.json"' in r.headers["content-disposition"]
    data = r.json()
    assert list(data) == [
        "User", "Tenant", "Landlord", "Estate", "Apartment", "Caretaker", "Ticket", "Payment", "Notice", "CaretakerInvite",
    ]
    assert len(data["User"]) == 2
    assert data["User"][0]["role"] in ("landlord", "tenant")
    assert data["Apartment"][0]["rent"] == 1000.0


def test_restore_requires_confirm_and_object(client, landlord):
    r = client.post("/api/admin/restore", json={}, headers=auth(landlord))
    assert r.status_code == 400
    r = client.post("/api/admin/restore?confirm=true", json=[1, 2], headers=auth(landlord))
    assert r.status_code == 400


def test_restore_replaces_everything(client, db, landlord, tenant, occupied_apartment):
    estate_id, _, _ = occupied_apartment
    snapshot = _backup(client, landlord).json()
    # Rows with a repeated id and keys that are not columns are ignored
    snapshot["Estate"].append(dict(snapshot["Estate"][0], name="Duplicate"))
    snapshot["Estate"][0]["unknown_column"] = "ignored"

    client.delete(f"/api/landlords/estates/{estate_id}", headers=auth(landlord))
    client.post("/api/landlords/estates", json={"name": "Created after backup"}, headers=auth(landlord))

    r = client.post("/api/admin/restore?confirm=true", json=snapshot, headers=auth(landlord))
    assert r.status_code == 200, r.text
    assert r.json()["counts"]["Estate"] == 1
    assert [e.name for e in db.query(Estate).all()] == ["Green Court"]

    # Logins survive a restore of their own rows
    me = client.get("/api/tenants/me", headers=auth(tenant)).json()
    assert me["apartment"]["estate"]["id"] == estate_id


def test_failed_restore_rolls_back(client, db, landlord, estate_with_apartment):
    snapshot = _backup(client, landlord).json()
    client.post("/api/landlords/estates", json={"name": "Second"}, headers=auth(landlord))
    snapshot["Apartment"][0]["created_at"] = "not-a-date"

    r = client.post("/api/admin/restore?confirm=true", json=snapshot, headers=auth(landlord))
    assert r.status_code == 500
    assert "invalid datetime" in r.json()["error"]
    assert sorted(e.name for e in db.query(Estate).all()) == ["Green Court", "Second"]
    assert client.get("/api/landlords/me", headers=auth(landlord)).status_code == 200
