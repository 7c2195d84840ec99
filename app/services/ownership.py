"""Which estates/apartments a landlord or caretaker may act on."""
from __future__ import annotations

from fastapi import HTTPException
from sqlalchemy import false, or_
from sqlalchemy.orm import Session

from app.models import Apartment, Caretaker, Estate, Ticket, User, UserRole


def must_get_estate(db: Session, estate_id: int) -> Estate:
    estate = db.query(Estate).filter(Estate.id == estate_id).first()
    if not estate:
        raise HTTPException(status_code=404, detail="Estate not found")
    return estate


def must_get_apartment(db: Session, apartment_id: int) -> Apartment:
    apt = db.query(Apartment).filter(Apartment.id == apartment_id).first()
    if not apt:
        raise HTTPException(status_code=404, detail="Apartment not found")
    return apt


def must_own_estate(estate: Estate, landlord_id: int | None, detail: str = "Not your estate") -> None:
    if estate is None or estate.landlord_id is None or estate.landlord_id != landlord_id:
        raise HTTPException(status_code=403, detail=detail)


def staff_estate_ids(db: Session, user: User) -> list[int]:
    """Estates a landlord owns, or the single estate a caretaker works in."""
    if user.role == UserRole.landlord:
        return [eid for (eid,) in db.query(Estate.id).filter(Estate.landlord_id == user.ref_id).all()]
    if user.role == UserRole.caretaker:
        me = db.query(Caretaker).filter(Caretaker.id == user.ref_id).first() if user.ref_id else None
        if me and me.scope_estate_id:
            return [me.scope_estate_id]
    return []


def staff_apartment_ids(db: Session, user: User) -> list[int]:
    """Apartments visible to a landlord (all of their estates) or caretaker (their apartment, else their estate)."""
    if user.role == UserRole.caretaker:
        me = db.query(Caretaker).filter(Caretaker.id == user.ref_id).first() if user.ref_id else None
        if not me:
            return []
        q = db.query(Apartment.id)
        if me.estate_id:
            q = q.filter(Apartment.estate_id == me.estate_id)
        if me.apartment_id:
            q = q.filter(Apartment.id == me.apartment_id)
        if not me.estate_id and not me.apartment_id:
            return []
        return [aid for (aid,) in q.all()]
    estate_ids = staff_estate_ids(db, user)
    if not estate_ids:
        return []
    return [aid for (aid,) in db.query(Apartment.id).filter(Apartment.estate_id.in_(estate_ids)).all()]


def visible_tickets(db: Session, user: User):
    """Ticket query scoped to the caller. Landlords also see tickets with no apartment (tenant not housed, unit deleted)."""
    apt_ids = staff_apartment_ids(db, user)
    scope = Ticket.apartment_id.in_(apt_ids) if apt_ids else false()
    if user.role == UserRole.landlord:
        scope = or_(scope, Ticket.apartment_id.is_(None))
    return db.query(Ticket).filter(scope)


def must_manage_ticket(db: Session, user: User, ticket: Ticket) -> None:
    if ticket.apartment_id is None:
        if user.role != UserRole.landlord:
            raise HTTPException(status_code=403, detail="Not allowed for this ticket")
        return
    if ticket.apartment_id not in staff_apartment_ids(db, user):
        raise HTTPException(status_code=403, detail="Not allowed for this ticket")
