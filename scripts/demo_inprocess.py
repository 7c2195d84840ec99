"""
End-to-end demo – in-process via TestClient (no separate server).
Walks a landlord, tenant and caretaker through the main flows.
Run: python scripts/demo_inprocess.py
"""
import sys
import os
import time
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fastapi.testclient import TestClient
from app.database import engine, Base
# Import models so create_all creates tables
from app import models  # noqa: F401
from app.main import app

Base.metadata.create_all(bind=engine)

client = TestClient(app)
passed = failed = 0
state = {}
suffix = str(int(time.time()))


def req(method, path, body=None, token=None):
    kwargs = {"headers": {"Accept": "application/json"}}
    if token:
        kwargs["headers"]["Authorization"] = f"Bearer {token}"
    if body is not None:
        kwargs["json"] = body
    r = client.request(method, path, **kwargs)
    if r.status_code >= 400:
        raise RuntimeError(f"HTTP {r.status_code}: {r.text}")
    return r.json() if r.content else {}


def test(name, fn):
    global passed, failed
    try:
        fn()
        print(f"  OK  {name}")
        passed += 1
    except Exception as e:
        print(f"  FAIL {name}: {e}")
        failed += 1


def register(key, email, role, **extra):
    body = {"email": email, "password": "demo-pass-123", "role": role, "name": f"Demo {role}", "id_number": f"ID{suffix}{role[:2]}"}
    body.update(extra)
    state[key] = req("POST", "/api/auth/register", body)["token"]


def main():
    print("Rental Management System – in-process demo\n" + "=" * 50)

    test("GET /", lambda: req("GET", "/"))
    test("GET /api/health", lambda: req("GET", "/api/health"))

    print("\n--- Accounts ---")
    landlord_email = f"landlord+{suffix}@example.com"
    tenant_email = f"tenant+{suffix}@example.com"
    test("register landlord", lambda: register("landlord", landlord_email, "landlord"))
    test("register tenant", lambda: register("tenant", tenant_email, "tenant"))
    test("GET /api/auth/me", lambda: req("GET", "/api/auth/me", token=state["landlord"]))
    landlord = state.get("landlord")
    tenant = state.get("tenant")

    print("\n--- Estate & apartment ---")
    def make_estate():
        state["estate"] = req("POST", "/api/landlords/estates", {"name": f"Demo Estate {suffix}", "address": "1 Demo Rd"}, token=landlord)["id"]
        state["apartment"] = req("POST", f"/api/landlords/estates/{state['estate']}/apartments", {"number": "A1", "rent": 1200, "deposit": 2400}, token=landlord)["id"]
    test("create estate + apartment", make_estate)

    def assign():
        tenant_id = req("GET", "/api/tenants/me", token=tenant)["id"]
        req("POST", f"/api/landlords/apartments/{state['apartment']}/assign-tenant", {"tenant_id": tenant_id}, token=landlord)
    test("assign tenant", assign)

    print("\n--- Caretaker ---")
    def invite_and_register():
        code = req("POST", "/api/landlords/caretakers/invite", {"estate_id": state["estate"]}, token=landlord)["code"]
        register("caretaker", f"caretaker+{suffix}@example.com", "caretaker", invite_code=code)
    test("invite + register caretaker", invite_and_register)
    test("GET /api/landlords/caretakers/me", lambda: req("GET", "/api/landlords/caretakers/me", token=state["caretaker"]))

    print("\n--- Payments ---")
    def mpesa():
        init = req("POST", "/api/payments/mpesa/initiate", {"amount": 1200, "phone": "254700000000"}, token=tenant)
        paid = req("POST", "/api/payments/mpesa/complete", {"payment_id": init["payment_id"], "success": True}, token=tenant)
        assert paid["status"] == "paid", paid
    test("mock M-Pesa payment", mpesa)
    test("rent reminder", lambda: req("POST", "/api/payments/reminders/estate", {"estate_id": state["estate"]}, token=landlord))
    test("GET /api/reports/summary", lambda: req("GET", "/api/reports/summary", token=landlord))

    print("\n--- Tickets ---")
    def ticket_lifecycle():
        ticket_id = req("POST", "/api/tenants/tickets", {"description": "Leaking tap"}, token=tenant)["id"]
        req("PUT", f"/api/landlords/tickets/{ticket_id}/status", {"status": "in-progress"}, token=state["caretaker"])
        closed = req("PUT", f"/api/landlords/tickets/{ticket_id}/status", {"status": "closed"}, token=landlord)
        assert closed["resolved_at"], closed
    test("ticket lifecycle", ticket_lifecycle)

    print("\n" + "=" * 50)
    print(f"Passed: {passed}  Failed: {failed}  Total: {passed + failed}")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    main()
