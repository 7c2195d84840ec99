"""Estates and the apartments inside them."""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Estate(Base):
    __tablename__ = "estates"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    landlord = relationship("Landlord", back_populates="estates")
    apartments = relationship("Apartment", back_populates="estate", order_by="Apartment.id")
    notices = relationship("Notice", back_populates="estate")
    caretakers = relationship("Caretaker", back_populates="estate")


class Apartment(Base):
    __tablename__ = "apartments"

    id = Column(Integer, primary_key=True, index=True)
    estate_id = Column(Integer, ForeignKey("estates.id", ondelete="SET NULL"), nullable=True, index=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)

    number = Column(String(50), nullable=True)  # e.g. "A-12"
    rent = Column(Numeric(10, 2), nullable=True)
    deposit = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    estate = relationship("Estate", back_populates="apartments")
    tenant = relationship("Tenant", back_populates="apartment")
    payments = relationship("Payment", back_populates="apartment")
    tickets = relationship("Ticket", back_populates="apartment")
    caretakers = relationship("Caretaker", back_populates="apartment")
