"""Notice schemas."""
from datetime import datetime
from pydantic import BaseModel
from app.models.notice import NoticeType


class NoticeCreate(BaseModel):
    estate: int | None = None
    title: str | None = None
    message: str | None = None
    type: NoticeType = NoticeType.general
    tenant_id: int | None = None


class NoticeResponse(BaseModel):
    id: int
    landlord_id: int | None
    estate_id: int | None
    tenant_id: int | None
    title: str | None
    message: str | None
    type: NoticeType
    created_at: datetime | None = None

    class Config:
        from_attributes = True
