"""Sample data for local dashboards, and removal of it."""
import logging
import time
from datetime import datetime, timezone
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models import (
    Apartment,
    Caretaker,
    Estate,
    Landlord,
    Notice,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Tenant,
    Ticket,
)

log = logging.getLogger("uvicorn.error")

SAMPLE_ESTATE_PREFIX = "Sample Estate"
SAMPLE_CARETAKER_NAME = "Sample Caretaker"
WELCOME_NOTICE_TITLE = "Welcome Notice"


def seed_basic(db: Session, landlord: Landlord, tenant_email: str | None = None) -> dict:
    """Create an estate with one apartment, a notice and a caretaker; link a tenant if one exists."""
    now = int(time.time() * 1000)
    estate = Estate(name=f"{SAMPLE_ESTATE_PREFIX} {now}", address="123 Demo St", landlord_id=landlord.id)
    db.add(estate)
    db.flush()
    apt = Apartment(number=f"A-{now % 1000}", estate_id=estate.id, rent=1000, deposit=2000)
    db.add(apt)
    db.flush()

    tenant = None
    if tenant_email:
        tenant = db.query(Tenant).filter(Tenant.email == tenant_email.strip().lower()).first()
    if tenant is None:
        tenant = db.query(Tenant).order_by(Tenant.id).first()
    if tenant is not None:
        db.query(Apartment).filter(Apartment.tenant_id == tenant.id).update(
            {Apartment.tenant_id: None}, synchronize_session=False
        )
        apt.tenant_id = tenant.id
        db.add(
            Payment(
                tenant_id=tenant.id,
                apartment_id=apt.id,
                amount=1000,
                date=datetime.now(timezone.utc),
                status=PaymentStatus.paid,
                method=PaymentMethod.cash,
            )
        )

    notice = Notice(
        landlord_id=landlord.id,
        estate_id=estate.id,
        title=WELCOME_NOTICE_TITLE,
        message="Welcome to the estate! This is a sample notice.",
    )
    caretaker = Caretaker(
        name=SAMPLE_CARETAKER_NAME,
        email=f"caretaker+{now}@example.com",
        id_number=str(10000000 + now % 1000000),
        estate_id=estate.id,
        apartment_id=apt.id,
    )
    db.add_all([notice, caretaker])
    db.commit()
    for row in (estate, apt, notice, caretaker):
        db.refresh(row)
    log.info("Seeded sample estate %s for landlord %s (tenant linked: %s)", estate.id, landlord.id, tenant is not None)
    return {"estate": estate, "apartment": apt, "notice": notice, "caretaker": caretaker, "tenant": tenant}


def purge_sample(db: Session) -> dict[str, int]:
    """Delete everything seed_basic created. Commits; returns per-table counts."""
    estate_ids = [
        eid for (eid,) in db.query(Estate.id).filter(func.lower(Estate.name).like(f"{SAMPLE_ESTATE_PREFIX.lower()}%")).all()
    ]
    apt_ids = [aid for (aid,) in db.query(Apartment.id).filter(Apartment.estate_id.in_(estate_ids)).all()] if estate_ids else []

    counts = {"payments": 0, "tickets": 0, "caretakers": 0, "notices": 0, "apartments": 0, "estates": 0}
    if apt_ids:
        counts["payments"] = db.query(Payment).filter(Payment.apartment_id.in_(apt_ids)).delete(synchronize_session=False)
        counts["tickets"] = db.query(Ticket).filter(Ticket.apartment_id.in_(apt_ids)).delete(synchronize_session=False)
        counts["caretakers"] += db.query(Caretaker).filter(Caretaker.apartment_id.in_(apt_ids)).delete(synchronize_session=False)
    if estate_ids:
        counts["notices"] += db.query(Notice).filter(Notice.estate_id.in_(estate_ids)).delete(synchronize_session=False)
        counts["caretakers"] += db.query(Caretaker).filter(Caretaker.estate_id.in_(estate_ids)).delete(synchronize_session=False)
        counts["apartments"] = db.query(Apartment).filter(Apartment.estate_id.in_(estate_ids)).delete(synchronize_session=False)
        counts["estates"] = db.query(Estate).filter(Estate.id.in_(estate_ids)).delete(synchronize_session=False)

    counts["caretakers"] += db.query(Caretaker).filter(
        (Caretaker.name == SAMPLE_CARETAKER_NAME) | func.lower(Caretaker.email).like("caretaker+%@example.com")
    ).delete(synchronize_session=False)
    counts["notices"] += db.query(Notice).filter(Notice.title == WELCOME_NOTICE_TITLE).delete(synchronize_session=False)
    db.commit()
    log.info("Purged sample data: %s", counts)
    return counts
