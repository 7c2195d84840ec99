"""Payment schemas (including mock M-Pesa)."""
from datetime import datetime
from pydantic import BaseModel
from app.models.payment import PaymentMethod, PaymentStatus


class PaymentResponse(BaseModel):
    id: int
    tenant_id: int | None
    apartment_id: int | None
    amount: float | None
    date: datetime | None
    status: PaymentStatus
    method: PaymentMethod
    mpesa_phone: str | None = None
    mpesa_checkout_request_id: str | None = None
    mpesa_merchant_request_id: str | None = None
    mpesa_receipt: str | None = None
    mpesa_result_code: str | None = None
    mpesa_result_desc: str | None = None

    class Config:
        from_attributes = True


class PaymentCreate(BaseModel):
    tenant: int | None = None
    apartment: int | None = None
    amount: float
    date: datetime | None = None
    status: PaymentStatus = PaymentStatus.pending
    method: PaymentMethod | None = None


class PaymentUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    amount: float | None = None
    date: datetime | None = None
    status: PaymentStatus | None = None
    method: PaymentMethod | None = None


class MpesaInitiateRequest(BaseModel):
    amount: float | None = None
    phone: str | None = None


class MpesaInitiateResponse(BaseModel):
    message: str
    payment_id: int
    checkout_request_id: str


class MpesaCompleteRequest(BaseModel):
    payment_id: int
    success: bool = False


class RentReminderRequest(BaseModel):
    estate_id: int | None = None
    title: str | None = None
    message: str | None = None


class RentReminderResponse(BaseModel):
    sent: int
