"""Occupancy and rent collection summary for landlords and caretakers."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_staff
from app.models import Apartment, Payment, PaymentStatus, User
from app.schemas.report import Occupancy, Revenue, SummaryResponse
from app.services.ownership import staff_apartment_ids

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=SummaryResponse)
def summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    apt_ids = staff_apartment_ids(db, current_user)
    apartments = db.query(Apartment).filter(Apartment.id.in_(apt_ids)).all() if apt_ids else []
    payments = db.query(Payment).filter(Payment.apartment_id.in_(apt_ids)).all() if apt_ids else []

    total = len(apartments)
    occupied = sum(1 for a in apartments if a.tenant_id)
    collected = sum(float(p.amount or 0) for p in payments if p.status == PaymentStatus.paid)
    pending = sum(float(p.amount or 0) for p in payments if p.status != PaymentStatus.paid)
    return SummaryResponse(
        occupancy=Occupancy(total=total, occupied=occupied, vacant=total - occupied),
        revenue=Revenue(collected=collected, pending=pending),
    )
