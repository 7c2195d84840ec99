"""Caretaker in charge of an estate and/or a single apartment."""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Caretaker(Base):
    __tablename__ = "caretakers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    id_number = Column(String(50), nullable=True)
    passport_number = Column(String(50), nullable=True)
    phone = Column(String(50), nullable=True)
    photo_url = Column(String(500), nullable=True)

    estate_id = Column(Integer, ForeignKey("estates.id", ondelete="SET NULL"), nullable=True, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    estate = relationship("Estate", back_populates="caretakers")
    apartment = relationship("Apartment", back_populates="caretakers")

    @property
    def scope_estate_id(self) -> int | None:
        """Estate the caretaker works in: assigned directly, or through the assigned apartment."""
        if self.estate_id:
            return self.estate_id
        if self.apartment is not None:
            return self.apartment.estate_id
        return None
