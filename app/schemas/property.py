"""Estate and apartment schemas."""
from datetime import datetime
from pydantic import BaseModel


class EstateCreate(BaseModel):
    name: str | None = None
    address: str | None = None


class EstateResponse(BaseModel):
    id: int
    name: str | None
    address: str | None
    landlord_id: int | None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ApartmentCreate(BaseModel):
    number: str | None = None
    rent: float = 0
    deposit: float = 0


class ApartmentResponse(BaseModel):
    id: int
    number: str | None
    rent: float | None
    deposit: float | None
    estate_id: int | None
    tenant_id: int | None

    class Config:
        from_attributes = True


class ApartmentWithEstate(ApartmentResponse):
    estate: EstateResponse | None = None


class EstateOption(BaseModel):
    """Minimal estate for pickers."""
    id: int
    name: str | None

    class Config:
        from_attributes = True


class ApartmentOption(BaseModel):
    id: int
    number: str | None

    class Config:
        from_attributes = True


class AssignTenantRequest(BaseModel):
    tenant_id: int | None = None


class AssignCaretakerRequest(BaseModel):
    caretaker_id: int | None = None
