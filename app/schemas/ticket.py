"""Ticket schemas."""
from datetime import datetime
from pydantic import BaseModel
from app.models.ticket import TicketStatus
from app.schemas.property import ApartmentResponse, ApartmentWithEstate


class TicketCreate(BaseModel):
    description: str | None = None


class TicketResponse(BaseModel):
    id: int
    tenant_id: int | None
    apartment_id: int | None
    description: str | None
    status: TicketStatus
    created_at: datetime | None = None
    resolved_at: datetime | None = None

    class Config:
        from_attributes = True


class TicketWithApartment(TicketResponse):
    apartment: ApartmentResponse | None = None


class TicketTenant(BaseModel):
    id: int
    name: str | None
    email: str | None
    phone: str | None

    class Config:
        from_attributes = True


class TicketDetail(TicketResponse):
    apartment: ApartmentWithEstate | None = None
    tenant: TicketTenant | None = None


class TicketStatusUpdate(BaseModel):
    status: str | None = None


class TicketUpdate(BaseModel):
    description: str | None = None
    status: TicketStatus | None = None
