"""Landlord and caretaker schemas."""
from datetime import datetime
from pydantic import BaseModel
from app.schemas.notice import NoticeResponse
from app.schemas.property import ApartmentResponse, EstateResponse


class LandlordResponse(BaseModel):
    id: int
    name: str | None
    id_number: str | None
    email: str | None
    phone: str | None
    photo_url: str | None

    class Config:
        from_attributes = True


class LandlordMe(LandlordResponse):
    estates: list[EstateResponse] = []
    notices: list[NoticeResponse] = []


class CaretakerResponse(BaseModel):
    id: int
    name: str | None
    email: str | None
    id_number: str | None
    passport_number: str | None
    phone: str | None
    photo_url: str | None
    estate_id: int | None
    apartment_id: int | None

    class Config:
        from_attributes = True


class CaretakerMe(CaretakerResponse):
    estate: EstateResponse | None = None
    apartment: ApartmentResponse | None = None


class InviteCreate(BaseModel):
    estate_id: int | None = None
    apartment_id: int | None = None


class InviteResponse(BaseModel):
    code: str
    expires_at: datetime
    estate_id: int | None
    apartment_id: int | None

    class Config:
        from_attributes = True
