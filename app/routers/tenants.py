"""Tenant self-service: profile, payments, tickets, vacate notice."""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_tenant_profile, require_tenant
from app.models import Payment, Ticket, User, VacateStatus
from app.schemas.auth import MessageResponse
from app.schemas.payment import PaymentResponse
from app.schemas.tenant import ProfileUpdate, TenantMe, TenantResponse
from app.schemas.ticket import TicketCreate, TicketResponse, TicketWithApartment
from app.services.profiles import apply_profile_update

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("/me", response_model=TenantMe)
def get_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    tenant = get_tenant_profile(db, current_user)
    return TenantMe.model_validate(tenant)


@router.patch("/me", response_model=TenantResponse)
def update_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    tenant = get_tenant_profile(db, current_user)
    apply_profile_update(tenant, data)
    db.commit()
    db.refresh(tenant)
    return TenantResponse.model_validate(tenant)


@router.get("/payments", response_model=list[PaymentResponse])
def my_payments(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    payments = db.query(Payment).filter(Payment.tenant_id == current_user.ref_id).order_by(Payment.id).all()
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/tickets", response_model=list[TicketWithApartment])
def my_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    tickets = db.query(Ticket).filter(Ticket.tenant_id == current_user.ref_id).order_by(Ticket.id).all()
    return [TicketWithApartment.model_validate(t) for t in tickets]


@router.post("/tickets", response_model=TicketResponse, status_code=201)
def raise_ticket(
    data: TicketCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    description = (data.description or "").strip()
    if not description:
        raise HTTPException(status_code=400, detail="Description is required")
    tenant = get_tenant_profile(db, current_user)
    ticket = Ticket(
        tenant_id=tenant.id,
        apartment_id=tenant.apartment.id if tenant.apartment else None,
        description=description,
    )
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    return TicketResponse.model_validate(ticket)


@router.post("/vacate", response_model=MessageResponse)
def submit_vacate_notice(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    tenant = get_tenant_profile(db, current_user)
    tenant.vacate_date = datetime.now(timezone.utc)
    tenant.vacate_status = VacateStatus.pending
    db.commit()
    return MessageResponse(message="Vacate notice submitted")
