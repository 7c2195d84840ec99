"""Tenant schemas."""
from datetime import datetime
from pydantic import BaseModel
from app.models.tenant import VacateStatus
from app.schemas.payment import PaymentResponse
from app.schemas.property import ApartmentWithEstate
from app.schemas.ticket import TicketResponse


class ProfileUpdate(BaseModel):
    """Shared by tenants, landlords and caretakers; fields left out keep their value."""
    name: str | None = None
    phone: str | None = None
    photo_url: str | None = None


class TenantCreate(BaseModel):
    name: str | None = None
    id_number: str | None = None
    email: str | None = None
    phone: str | None = None


class TenantResponse(BaseModel):
    id: int
    name: str | None
    id_number: str | None
    email: str | None
    phone: str | None
    photo_url: str | None
    vacate_date: datetime | None
    vacate_status: VacateStatus
    deposit_refunded: bool

    class Config:
        from_attributes = True


class TenantMe(TenantResponse):
    apartment: ApartmentWithEstate | None = None
    payments: list[PaymentResponse] = []
    tickets: list[TicketResponse] = []


class TenantListItem(TenantResponse):
    apartment: ApartmentWithEstate | None = None
    payments: list[PaymentResponse] = []  # latest 10, newest first


class VacateUpdate(BaseModel):
    vacate_status: VacateStatus | None = None
    deposit_refunded: bool | None = None
