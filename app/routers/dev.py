"""Development helpers. Mounted only when ENABLE_DEV_ROUTES is set."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_landlord_profile, require_landlord
from app.models import User
from app.schemas.landlord import CaretakerResponse
from app.schemas.notice import NoticeResponse
from app.schemas.property import ApartmentResponse, EstateResponse
from app.seed import seed_basic

router = APIRouter(prefix="/api/dev", tags=["dev"])


class SeedRequest(BaseModel):
    tenant_email: str | None = None


class SeedResponse(BaseModel):
    estate: EstateResponse
    apartment: ApartmentResponse
    caretaker: CaretakerResponse
    notice: NoticeResponse
    message: str


@router.post("/seed-basic", response_model=SeedResponse)
def seed(
    data: SeedRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    landlord = get_landlord_profile(db, current_user)
    created = seed_basic(db, landlord, tenant_email=data.tenant_email if data else None)
    return SeedResponse(
        estate=EstateResponse.model_validate(created["estate"]),
        apartment=ApartmentResponse.model_validate(created["apartment"]),
        caretaker=CaretakerResponse.model_validate(created["caretaker"]),
        notice=NoticeResponse.model_validate(created["notice"]),
        message="Linked to an existing tenant" if created["tenant"] else "No tenant found to link",
    )
