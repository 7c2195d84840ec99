"""One-time invite code a landlord hands to a caretaker for registration."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.database import Base


class CaretakerInvite(Base):
    __tablename__ = "caretaker_invites"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(16), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    used_at = Column(DateTime(timezone=True), nullable=True)

    # Plain ids (no FK): the invite outlives estate/apartment edits and is detached on delete
    landlord_id = Column(Integer, nullable=True)
    estate_id = Column(Integer, nullable=True)
    apartment_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
