"""Landlord and caretaker management: estates, apartments, tenants, caretakers, notices, tickets."""
import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database import get_db
from app.dependencies import (
    get_caretaker_profile,
    get_landlord_profile,
    require_caretaker,
    require_landlord,
    require_staff,
)
from app.models import (
    Apartment,
    Caretaker,
    CaretakerInvite,
    Estate,
    Notice,
    Payment,
    Tenant,
    Ticket,
    TicketStatus,
    User,
    UserRole,
)
from app.schemas.auth import MessageResponse
from app.schemas.landlord import (
    CaretakerMe,
    CaretakerResponse,
    InviteCreate,
    InviteResponse,
    LandlordMe,
    LandlordResponse,
)
from app.schemas.notice import NoticeCreate, NoticeResponse
from app.schemas.payment import PaymentResponse
from app.schemas.property import (
    ApartmentCreate,
    ApartmentResponse,
    AssignCaretakerRequest,
    AssignTenantRequest,
    EstateCreate,
    EstateResponse,
)
from app.schemas.tenant import ProfileUpdate, TenantCreate, TenantListItem, TenantResponse, VacateUpdate
from app.schemas.ticket import TicketDetail, TicketStatusUpdate
from app.services.cleanup import delete_apartment, delete_caretaker, delete_estate, delete_tenant
from app.services.ownership import (
    must_get_apartment,
    must_get_estate,
    must_manage_ticket,
    must_own_estate,
    staff_apartment_ids,
    visible_tickets,
)
from app.services.profiles import apply_profile_update

router = APIRouter(prefix="/api/landlords", tags=["landlords"])
log = logging.getLogger("uvicorn.error")

INVITE_CODE_LENGTH = 6
_INVITE_ALPHABET = string.ascii_uppercase + string.digits


# --- Profiles ---


@router.get("/me", response_model=LandlordMe)
def get_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    landlord = get_landlord_profile(db, current_user)
    return LandlordMe.model_validate(landlord)


@router.patch("/me", response_model=LandlordResponse)
def update_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    landlord = get_landlord_profile(db, current_user)
    apply_profile_update(landlord, data)
    db.commit()
    db.refresh(landlord)
    return LandlordResponse.model_validate(landlord)


@router.get("/caretakers/me", response_model=CaretakerMe)
def get_caretaker_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_caretaker),
):
    me = get_caretaker_profile(db, current_user)
    return CaretakerMe.model_validate(me)


@router.patch("/caretakers/me", response_model=CaretakerResponse)
def update_caretaker_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_caretaker),
):
    me = get_caretaker_profile(db, current_user)
    apply_profile_update(me, data)
    db.commit()
    db.refresh(me)
    return CaretakerResponse.model_validate(me)


# --- Caretakers ---


@router.get("/caretakers", response_model=list[CaretakerResponse])
def list_caretakers(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    """Caretakers working in the landlord's estates, plus unassigned ones available to pick."""
    estate_ids = [e.id for e in db.query(Estate).filter(Estate.landlord_id == current_user.ref_id).all()]
    apt_ids = [a.id for a in db.query(Apartment).filter(Apartment.estate_id.in_(estate_ids)).all()] if estate_ids else []
    caretakers = db.query(Caretaker).order_by(Caretaker.id).all()
    mine = [
        c for c in caretakers
        if c.estate_id in estate_ids
        or c.apartment_id in apt_ids
        or (c.estate_id is None and c.apartment_id is None)
    ]
    return [CaretakerResponse.model_validate(c) for c in mine]


def _new_invite_code(db: Session) -> str:
    for _ in range(10):
        code = "".join(secrets.choice(_INVITE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))
        if db.query(CaretakerInvite).filter(CaretakerInvite.code == code).first() is None:
            return code
    raise HTTPException(status_code=500, detail="Could not generate a unique invite code")


@router.post("/caretakers/invite", response_model=InviteResponse, status_code=201)
def create_caretaker_invite(
    data: InviteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    if data.estate_id:
        must_own_estate(must_get_estate(db, data.estate_id), current_user.ref_id)
    if data.apartment_id:
        apt = must_get_apartment(db, data.apartment_id)
        must_own_estate(apt.estate, current_user.ref_id, "Not your estate/apartment")
    expires_at = datetime.now(timezone.utc) + timedelta(hours=get_settings().caretaker_invite_expire_hours)
    invite = CaretakerInvite(
        code=_new_invite_code(db),
        expires_at=expires_at,
        landlord_id=current_user.ref_id,
        estate_id=data.estate_id or None,
        apartment_id=data.apartment_id or None,
    )
    db.add(invite)
    db.commit()
    db.refresh(invite)
    return InviteResponse.model_validate(invite)


@router.delete("/caretakers/{caretaker_id}", response_model=MessageResponse)
def remove_caretaker(
    caretaker_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    caretaker = db.query(Caretaker).filter(Caretaker.id == caretaker_id).first()
    if not caretaker:
        raise HTTPException(status_code=404, detail="Not found")
    delete_caretaker(db, caretaker)
    db.commit()
    return MessageResponse(message="Caretaker deleted")


# --- Estates & apartments ---


@router.post("/estates", response_model=EstateResponse, status_code=201)
def create_estate(
    data: EstateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="name required")
    estate = Estate(name=name, address=data.address or "", landlord_id=current_user.ref_id)
    db.add(estate)
    db.commit()
    db.refresh(estate)
    return EstateResponse.model_validate(estate)


@router.delete("/estates/{estate_id}", response_model=MessageResponse)
def remove_estate(
    estate_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    estate = db.query(Estate).filter(Estate.id == estate_id).first()
    if not estate:
        raise HTTPException(status_code=404, detail="Not found")
    must_own_estate(estate, current_user.ref_id)
    removed = delete_estate(db, estate)
    db.commit()
    log.info("Estate %s deleted with %d apartment(s) by landlord %s", estate_id, removed, current_user.ref_id)
    return MessageResponse(message="Estate deleted")


@router.post("/estates/{estate_id}/assign-caretaker", response_model=CaretakerResponse)
def assign_caretaker(
    estate_id: int,
    data: AssignCaretakerRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    estate = must_get_estate(db, estate_id)
    must_own_estate(estate, current_user.ref_id)
    caretaker = db.query(Caretaker).filter(Caretaker.id == data.caretaker_id).first() if data.caretaker_id else None
    if not caretaker:
        raise HTTPException(status_code=404, detail="Caretaker not found")
    caretaker.estate_id = estate.id
    db.commit()
    db.refresh(caretaker)
    return CaretakerResponse.model_validate(caretaker)


@router.post("/estates/{estate_id}/apartments", response_model=ApartmentResponse, status_code=201)
def create_apartment(
    estate_id: int,
    data: ApartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    estate = must_get_estate(db, estate_id)
    must_own_estate(estate, current_user.ref_id)
    number = (data.number or "").strip()
    if not number:
        raise HTTPException(status_code=400, detail="Apartment number required")
    apt = Apartment(number=number, rent=data.rent, deposit=data.deposit, estate_id=estate.id)
    db.add(apt)
    db.commit()
    db.refresh(apt)
    return ApartmentResponse.model_validate(apt)


@router.delete("/apartments/{apartment_id}", response_model=MessageResponse)
def remove_apartment(
    apartment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    apt = db.query(Apartment).filter(Apartment.id == apartment_id).first()
    if not apt:
        raise HTTPException(status_code=404, detail="Not found")
    must_own_estate(apt.estate, current_user.ref_id, "Not your estate/apartment")
    delete_apartment(db, apt)
    db.commit()
    return MessageResponse(message="Apartment deleted")


@router.post("/apartments/{apartment_id}/assign-tenant", response_model=ApartmentResponse)
def assign_tenant(
    apartment_id: int,
    data: AssignTenantRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    apt = must_get_apartment(db, apartment_id)
    if not data.tenant_id:
        raise HTTPException(status_code=400, detail="tenant_id required")
    tenant = db.query(Tenant).filter(Tenant.id == data.tenant_id).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    if current_user.role == UserRole.caretaker:
        me = get_caretaker_profile(db, current_user)
        if me.apartment_id != apt.id:
            raise HTTPException(status_code=403, detail="Not allowed for this apartment")
    else:
        must_own_estate(apt.estate, current_user.ref_id, "Not your estate/apartment")
    # A tenant occupies one apartment at a time
    db.query(Apartment).filter(Apartment.tenant_id == tenant.id, Apartment.id != apt.id).update(
        {Apartment.tenant_id: None}, synchronize_session=False
    )
    apt.tenant_id = tenant.id
    db.commit()
    db.refresh(apt)
    return ApartmentResponse.model_validate(apt)


# --- Payments (read-only views) ---


@router.get("/apartments/{apartment_id}/payments", response_model=list[PaymentResponse])
def apartment_payments(
    apartment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    must_get_apartment(db, apartment_id)
    if apartment_id not in staff_apartment_ids(db, current_user):
        raise HTTPException(status_code=403, detail="Not allowed for this apartment")
    payments = db.query(Payment).filter(Payment.apartment_id == apartment_id).order_by(Payment.id).all()
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/tenants/{tenant_id}/payments", response_model=list[PaymentResponse])
def tenant_payments(
    tenant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    payments = db.query(Payment).filter(Payment.tenant_id == tenant_id).order_by(Payment.id).all()
    return [PaymentResponse.model_validate(p) for p in payments]


# --- Tenants ---


@router.get("/tenants", response_model=list[TenantListItem])
def list_tenants(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    tenants = db.query(Tenant).order_by(Tenant.id).all()
    items = []
    for t in tenants:
        latest = (
            db.query(Payment)
            .filter(Payment.tenant_id == t.id)
            .order_by(Payment.date.desc(), Payment.id.desc())
            .limit(10)
            .all()
        )
        item = TenantListItem.model_validate(t)
        item.payments = [PaymentResponse.model_validate(p) for p in latest]
        items.append(item)
    return items


@router.post("/tenants", response_model=TenantResponse, status_code=201)
def create_tenant(
    data: TenantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    name = (data.name or "").strip()
    id_number = (data.id_number or "").strip()
    if not name or not id_number:
        raise HTTPException(status_code=400, detail="name and id_number required")
    email = (data.email or "").strip().lower() or None
    if email and db.query(Tenant).filter(Tenant.email == email).first():
        raise HTTPException(status_code=400, detail="A tenant with this email already exists")
    tenant = Tenant(name=name, id_number=id_number, email=email, phone=(data.phone or "").strip() or None)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return TenantResponse.model_validate(tenant)


@router.delete("/tenants/{tenant_id}", response_model=MessageResponse)
def remove_tenant(
    tenant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Not found")
    delete_tenant(db, tenant)
    db.commit()
    return MessageResponse(message="Tenant deleted")


@router.patch("/tenants/{tenant_id}/vacate", response_model=TenantResponse)
def update_vacate_notice(
    tenant_id: int,
    data: VacateUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    """Approve (or reset) a tenant's vacate notice and record the deposit refund."""
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise HTTPException(status_code=404, detail="Not found")
    if data.vacate_status is not None:
        tenant.vacate_status = data.vacate_status
    if data.deposit_refunded is not None:
        tenant.deposit_refunded = data.deposit_refunded
    db.commit()
    db.refresh(tenant)
    return TenantResponse.model_validate(tenant)


# --- Notices ---


@router.post("/notices", response_model=NoticeResponse, status_code=201)
def create_notice(
    data: NoticeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    if not data.estate:
        raise HTTPException(status_code=400, detail="Estate is required")
    if not (data.title or "").strip():
        raise HTTPException(status_code=400, detail="Title is required")
    if not (data.message or "").strip():
        raise HTTPException(status_code=400, detail="Message is required")
    estate = must_get_estate(db, data.estate)
    if current_user.role == UserRole.landlord:
        must_own_estate(estate, current_user.ref_id)
        landlord_id = current_user.ref_id
    else:
        me = get_caretaker_profile(db, current_user)
        if me.scope_estate_id != estate.id:
            raise HTTPException(status_code=403, detail="Not your estate")
        landlord_id = None
    notice = Notice(
        landlord_id=landlord_id,
        estate_id=estate.id,
        tenant_id=data.tenant_id or None,
        title=data.title,
        message=data.message,
        type=data.type,
    )
    db.add(notice)
    db.commit()
    db.refresh(notice)
    return NoticeResponse.model_validate(notice)


@router.get("/notices", response_model=list[NoticeResponse])
def list_notices(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    q = db.query(Notice)
    if current_user.role == UserRole.landlord:
        q = q.filter(Notice.landlord_id == current_user.ref_id)
    else:
        me = get_caretaker_profile(db, current_user)
        if not me.scope_estate_id:
            return []
        q = q.filter(Notice.estate_id == me.scope_estate_id)
    return [NoticeResponse.model_validate(n) for n in q.order_by(Notice.id).all()]


# --- Tickets ---


def _parse_ticket_status(value: str | None) -> TicketStatus:
    try:
        return TicketStatus(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid status")


@router.get("/tickets", response_model=list[TicketDetail])
def list_tickets(
    estate: int | None = None,
    apartment: int | None = None,
    status: str | None = None,
    from_: datetime | None = Query(None, alias="from"),
    to: datetime | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    q = visible_tickets(db, current_user)
    if apartment:
        q = q.filter(Ticket.apartment_id == apartment)
    if status:
        q = q.filter(Ticket.status == _parse_ticket_status(status))
    if from_:
        q = q.filter(Ticket.created_at >= from_)
    if to:
        q = q.filter(Ticket.created_at <= to)
    if estate:
        q = q.join(Apartment, Ticket.apartment_id == Apartment.id).filter(Apartment.estate_id == estate)
    return [TicketDetail.model_validate(t) for t in q.order_by(Ticket.id).all()]


@router.put("/tickets/{ticket_id}/status", response_model=TicketDetail)
def update_ticket_status(
    ticket_id: int,
    data: TicketStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    status = _parse_ticket_status(data.status)
    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not ticket:
        raise HTTPException(status_code=404, detail="Not found")
    must_manage_ticket(db, current_user, ticket)
    ticket.status = status
    ticket.resolved_at = datetime.now(timezone.utc) if status == TicketStatus.closed else None
    db.commit()
    db.refresh(ticket)
    return TicketDetail.model_validate(ticket)
