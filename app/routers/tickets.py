"""Landlord ticket board."""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_landlord
from app.models import Ticket, TicketStatus, User
from app.schemas.ticket import TicketDetail, TicketUpdate
from app.services.ownership import must_manage_ticket, visible_tickets

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.get("/", response_model=list[TicketDetail])
def list_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    tickets = visible_tickets(db, current_user).order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()
    return [TicketDetail.model_validate(t) for t in tickets]


@router.put("/{ticket_id}", response_model=TicketDetail)
def update_ticket(
    ticket_id: int,
    data: TicketUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    ticket = db.query(Ticket).filter(Ticket.id == ticket_id).first()
    if not ticket:
        raise HTTPException(status_code=404, detail="Not found")
    must_manage_ticket(db, current_user, ticket)
    if data.description is not None:
        ticket.description = data.description
    if data.status is not None:
        ticket.status = data.status
        ticket.resolved_at = datetime.now(timezone.utc) if data.status == TicketStatus.closed else None
    db.commit()
    db.refresh(ticket)
    return TicketDetail.model_validate(ticket)
