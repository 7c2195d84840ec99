"""Unauthenticated lookups used by the registration form."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.models import Apartment, Estate
from app.schemas.property import ApartmentOption, EstateOption

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/estates", response_model=list[EstateOption])
def list_estates(db: Session = Depends(get_db)):
    estates = db.query(Estate).order_by(Estate.name, Estate.id).all()
    return [EstateOption.model_validate(e) for e in estates]


@router.get("/estates/{estate_id}/apartments", response_model=list[ApartmentOption])
def list_apartments(estate_id: int, db: Session = Depends(get_db)):
    apts = db.query(Apartment).filter(Apartment.estate_id == estate_id).order_by(Apartment.number, Apartment.id).all()
    return [ApartmentOption.model_validate(a) for a in apts]
