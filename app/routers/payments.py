"""Payments: landlord records, tenant mock M-Pesa checkout, estate rent reminders."""
import logging
import random
import time
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_tenant_profile, require_landlord, require_staff, require_tenant
from app.models import (
    Notice,
    NoticeType,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Tenant,
    User,
    UserRole,
)
from app.schemas.payment import (
    MpesaCompleteRequest,
    MpesaInitiateRequest,
    MpesaInitiateResponse,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
    RentReminderRequest,
    RentReminderResponse,
)
from app.services.notifications import send_rent_reminder_email, send_sms
from app.services.ownership import must_get_apartment, must_get_estate, must_own_estate, staff_estate_ids

router = APIRouter(prefix="/api/payments", tags=["payments"])
log = logging.getLogger("uvicorn.error")

DEFAULT_REMINDER_TITLE = "Rent Reminder"
DEFAULT_REMINDER_MESSAGE = "Your rent is due."


@router.post("/", response_model=PaymentResponse, status_code=201)
def record_payment(
    data: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    if data.tenant is not None and not db.query(Tenant).filter(Tenant.id == data.tenant).first():
        raise HTTPException(status_code=404, detail="Tenant not found")
    if data.apartment is not None:
        apt = must_get_apartment(db, data.apartment)
        must_own_estate(apt.estate, current_user.ref_id, "Not your estate/apartment")
    payment = Payment(
        tenant_id=data.tenant,
        apartment_id=data.apartment,
        amount=data.amount,
        date=data.date or datetime.now(timezone.utc),
        status=data.status,
        method=data.method or PaymentMethod.mpesa,
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return PaymentResponse.model_validate(payment)


@router.put("/{payment_id}", response_model=PaymentResponse)
def update_payment(
    payment_id: int,
    data: PaymentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise HTTPException(status_code=404, detail="Not found")
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(payment, field, value)
    db.commit()
    db.refresh(payment)
    return PaymentResponse.model_validate(payment)


# --- Mock M-Pesa (STK push + simulated callback) ---


@router.post("/mpesa/initiate", response_model=MpesaInitiateResponse, status_code=201)
def mpesa_initiate(
    data: MpesaInitiateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    phone = (data.phone or "").strip()
    if not data.amount or not phone:
        raise HTTPException(status_code=400, detail="Amount and phone required")
    tenant = get_tenant_profile(db, current_user)
    payment = Payment(
        tenant_id=tenant.id,
        apartment_id=tenant.apartment.id if tenant.apartment else None,
        amount=data.amount,
        date=datetime.now(timezone.utc),
        status=PaymentStatus.pending,
        method=PaymentMethod.mpesa,
        mpesa_phone=phone,
        mpesa_checkout_request_id=f"CHK_{int(time.time() * 1000)}",
        mpesa_merchant_request_id=f"MER_{random.randint(0, 999999)}",
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)
    log.info("M-Pesa checkout %s started for tenant %s", payment.mpesa_checkout_request_id, tenant.id)
    return MpesaInitiateResponse(
        message="STK push initiated (mock)",
        payment_id=payment.id,
        checkout_request_id=payment.mpesa_checkout_request_id,
    )


@router.post("/mpesa/complete", response_model=PaymentResponse)
def mpesa_complete(
    data: MpesaCompleteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_tenant),
):
    payment = db.query(Payment).filter(Payment.id == data.payment_id).first()
    if not payment:
        raise HTTPException(status_code=404, detail="Not found")
    if payment.tenant_id != current_user.ref_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    if data.success:
        payment.status = PaymentStatus.paid
        payment.mpesa_receipt = f"RCP{random.randint(0, 9999999)}"
        payment.mpesa_result_code = "0"
        payment.mpesa_result_desc = "Success"
    else:
        payment.status = PaymentStatus.pending
        payment.mpesa_receipt = None
        payment.mpesa_result_code = "1"
        payment.mpesa_result_desc = "Failed"
    db.commit()
    db.refresh(payment)
    return PaymentResponse.model_validate(payment)


# --- Reminders ---


def _notify_tenant(tenant: Tenant, title: str, message: str) -> None:
    """Email (and SMS when a phone is on file); delivery problems never fail the reminder."""
    if tenant.email:
        try:
            send_rent_reminder_email(tenant.email, title, message, tenant_name=tenant.name)
        except Exception as e:
            log.warning("Rent reminder email to %s failed: %s", tenant.email, e)
    if tenant.phone:
        try:
            send_sms(tenant.phone, f"{title}: {message}")
        except Exception as e:
            log.warning("Rent reminder SMS to %s failed: %s", tenant.phone, e)


@router.post("/reminders/estate", response_model=RentReminderResponse)
def send_estate_reminders(
    data: RentReminderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    if not data.estate_id:
        raise HTTPException(status_code=400, detail="estate_id required")
    estate = must_get_estate(db, data.estate_id)
    if estate.id not in staff_estate_ids(db, current_user):
        raise HTTPException(status_code=403, detail="Not your estate")
    title = (data.title or "").strip() or DEFAULT_REMINDER_TITLE
    message = (data.message or "").strip() or DEFAULT_REMINDER_MESSAGE
    landlord_id = current_user.ref_id if current_user.role == UserRole.landlord else None

    occupied = [apt for apt in estate.apartments if apt.tenant_id]
    for apt in occupied:
        db.add(
            Notice(
                landlord_id=landlord_id,
                estate_id=estate.id,
                tenant_id=apt.tenant_id,
                title=title,
                message=message,
                type=NoticeType.rent_reminder,
            )
        )
    db.commit()

    for apt in occupied:
        if apt.tenant is not None:
            _notify_tenant(apt.tenant, title, message)
    log.info("Sent %d rent reminder(s) for estate %s", len(occupied), estate.id)
    return RentReminderResponse(sent=len(occupied))
