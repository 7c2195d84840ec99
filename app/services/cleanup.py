"""Manual cascades for deletes: dependent rows are removed or detached before the parent goes."""
from __future__ import annotations

from sqlalchemy.orm import Session

from app.models import (
    Apartment,
    Caretaker,
    CaretakerInvite,
    Estate,
    Notice,
    Payment,
    Tenant,
    Ticket,
    User,
    UserRole,
)


def detach_login(db: Session, role: UserRole, profile_id: int) -> None:
    """Keep the login row but stop it pointing at a deleted profile."""
    db.query(User).filter(User.role == role, User.ref_id == profile_id).update(
        {User.ref_id: None}, synchronize_session=False
    )


def delete_apartment(db: Session, apt: Apartment) -> None:
    # Payment and ticket history outlives the unit
    db.query(Payment).filter(Payment.apartment_id == apt.id).update({Payment.apartment_id: None}, synchronize_session=False)
    db.query(Ticket).filter(Ticket.apartment_id == apt.id).update({Ticket.apartment_id: None}, synchronize_session=False)
    db.query(Caretaker).filter(Caretaker.apartment_id == apt.id).update({Caretaker.apartment_id: None}, synchronize_session=False)
    db.query(CaretakerInvite).filter(CaretakerInvite.apartment_id == apt.id).update(
        {CaretakerInvite.apartment_id: None}, synchronize_session=False
    )
    db.delete(apt)


def delete_estate(db: Session, estate: Estate) -> int:
    """Delete an estate with its apartments and notices. Returns the number of apartments removed."""
    apts = db.query(Apartment).filter(Apartment.estate_id == estate.id).all()
    for apt in apts:
        delete_apartment(db, apt)
    db.query(Notice).filter(Notice.estate_id == estate.id).delete(synchronize_session=False)
    db.query(Caretaker).filter(Caretaker.estate_id == estate.id).update({Caretaker.estate_id: None}, synchronize_session=False)
    db.query(CaretakerInvite).filter(CaretakerInvite.estate_id == estate.id).update(
        {CaretakerInvite.estate_id: None}, synchronize_session=False
    )
    db.delete(estate)
    return len(apts)


def delete_tenant(db: Session, tenant: Tenant) -> None:
    db.query(Apartment).filter(Apartment.tenant_id == tenant.id).update({Apartment.tenant_id: None}, synchronize_session=False)
    db.query(Payment).filter(Payment.tenant_id == tenant.id).update({Payment.tenant_id: None}, synchronize_session=False)
    db.query(Ticket).filter(Ticket.tenant_id == tenant.id).update({Ticket.tenant_id: None}, synchronize_session=False)
    db.query(Notice).filter(Notice.tenant_id == tenant.id).update({Notice.tenant_id: None}, synchronize_session=False)
    detach_login(db, UserRole.tenant, tenant.id)
    db.delete(tenant)


def delete_caretaker(db: Session, caretaker: Caretaker) -> None:
    detach_login(db, UserRole.caretaker, caretaker.id)
    db.delete(caretaker)
